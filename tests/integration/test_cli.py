"""
End-to-end tests for the scribe command line.

Verifies:
1. `render` to stdout, to a source root and to a .java file.
2. `sources` lists the registered adapters.
3. Exit codes for bad input.
"""

import json

import pytest
from rich.console import Console

from scribe.codegen import cli_integration, emit_from_description
from scribe.main import main

pytestmark = pytest.mark.integration

EXPECTED_TACO = (
    "package com.squareup.tacos;\n"
    "\n"
    "import java.util.List;\n"
    "\n"
    "public final class Taco {\n"
    "  private final List<String> toppings;\n"
    "\n"
    "  public int size() {\n"
    "    return toppings.size();\n"
    "  }\n"
    "}\n"
)


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Render through a non-terminal console so stdout holds the bare file text."""
    monkeypatch.setattr(cli_integration, "console", Console(force_terminal=False, width=200))


@pytest.fixture
def taco_file(tmp_path, taco_description):
    path = tmp_path / "taco.json"
    path.write_text(json.dumps(taco_description), encoding="utf-8")
    return path


def test_render_to_stdout(taco_file, capsys):
    assert main(["render", str(taco_file)]) == 0
    assert capsys.readouterr().out == EXPECTED_TACO


def test_render_to_source_root(taco_file, tmp_path):
    out_dir = tmp_path / "src"
    assert main(["render", str(taco_file), "-o", str(out_dir)]) == 0
    written = out_dir / "com" / "squareup" / "tacos" / "Taco.java"
    assert written.read_text(encoding="utf-8") == EXPECTED_TACO


def test_render_to_java_file_with_package(taco_file, tmp_path):
    target = tmp_path / "Taco.java"
    assert main(["render", str(taco_file), "-o", str(target), "--package", "com.example"]) == 0
    assert target.read_text(encoding="utf-8").startswith("package com.example;\n")


def test_render_options(taco_file, tmp_path, capsys):
    config_file = tmp_path / "scribe.json"
    config_file.write_text(json.dumps({"file_comment": "Generated."}), encoding="utf-8")
    code = main(
        [
            "render",
            str(taco_file),
            "--config",
            str(config_file),
            "--indent",
            "    ",
            "--keep-java-lang-imports",
            "--show-imports",
        ]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("// Generated.\npackage com.squareup.tacos;\n")
    assert "import java.lang.String;\n" in out
    assert "    private final List<String> toppings;\n" in out
    assert "Imports" in out


def test_sources_command(capsys):
    assert main(["sources"]) == 0
    out = capsys.readouterr().out
    assert "declared" in out
    assert "mapping" in out


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"type": {"kind": "struct", "name": "Taco"}}),
        json.dumps({"type": {"name": "Taco", "fields": [{"type": "java.util.List<int>", "name": "x"}]}}),
    ],
)
def test_render_bad_descriptions(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    assert main(["render", str(path)]) == 1


def test_render_missing_file(tmp_path):
    assert main(["render", str(tmp_path / "absent.json")]) == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "render" in capsys.readouterr().out


def test_emit_from_description(taco_description, tmp_path):
    result = emit_from_description(taco_description, config={"indent": "\t"})
    assert result.success
    assert "\tprivate final List<String> toppings;\n" in result.code

    config_file = tmp_path / "scribe.json"
    config_file.write_text(json.dumps({"package_name": "com.example"}), encoding="utf-8")
    result = emit_from_description(taco_description, config=config_file)
    assert result.code.startswith("package com.example;\n")
    assert result.metadata["package"] == "com.example"
