"""
Unit tests for the file envelope template engine.
"""

import pytest

from scribe.codegen.core.templates import (
    TemplateEngine,
    TemplateError,
    create_template_engine,
    get_default_template_engine,
)


def envelope(**overrides):
    context = {
        "file_comment": "",
        "package_name": "com.squareup.tacos",
        "imports": [],
        "static_imports": [],
        "body": "class Taco {\n}\n",
    }
    context.update(overrides)
    return context


def test_envelope_sections():
    engine = create_template_engine()
    text = engine.render_template(
        "java_file",
        envelope(
            file_comment="Generated.\n\nDo not edit.",
            imports=["java.util.List"],
            static_imports=["java.util.concurrent.TimeUnit.SECONDS"],
        ),
    )
    assert text == (
        "// Generated.\n"
        "//\n"
        "// Do not edit.\n"
        "package com.squareup.tacos;\n"
        "\n"
        "import java.util.List;\n"
        "\n"
        "import static java.util.concurrent.TimeUnit.SECONDS;\n"
        "\n"
        "class Taco {\n"
        "}\n"
    )


def test_envelope_without_package_or_imports():
    engine = create_template_engine()
    assert engine.render_template("java_file", envelope(package_name="")) == "class Taco {\n}\n"


def test_template_directory_is_searched(tmp_path):
    (tmp_path / "banner.j2").write_text("// {{ name }}\n", encoding="utf-8")
    engine = create_template_engine(tmp_path)
    assert engine.template_exists("banner.j2")
    assert engine.template_exists("java_file")
    assert engine.render_template("banner.j2", {"name": "tacos"}) == "// tacos\n"


def test_in_memory_templates_and_strings():
    engine = TemplateEngine()
    engine.add_template("greeting", "Hello {{ who }}")
    assert engine.render_template("greeting", {"who": "taco"}) == "Hello taco"
    assert engine.render_string("{{ text | line_comment }}", {"text": "a\nb"}) == "// a\n// b"


def test_missing_template_and_undefined_variable():
    engine = TemplateEngine()
    assert not engine.template_exists("nope")
    with pytest.raises(TemplateError, match="Template not found"):
        engine.render_template("nope", {})
    with pytest.raises(TemplateError):
        engine.render_string("{{ missing }}", {})


def test_default_engine_is_shared():
    assert get_default_template_engine() is get_default_template_engine()
    assert get_default_template_engine().template_exists("java_file")
