"""
Unit tests for type references and name validation.
"""

import pytest

from conftest import BREAKFAST, Breakfast
from scribe.codegen.core.errors import InvalidNameError
from scribe.codegen.core.naming import check_valid_name, is_valid_name
from scribe.codegen.core.types import (
    INT,
    OBJECT,
    STRING,
    VOID,
    ArrayTypeName,
    ClassName,
    ParameterizedTypeName,
    TypeName,
    WildcardTypeName,
)


def test_best_guess_splits_package_and_nesting():
    """Capitalized segments start the simple-name chain."""
    entry = ClassName.best_guess("java.util.Map.Entry")
    assert entry.package_name == "java.util"
    assert entry.simple_names == ("Map", "Entry")
    assert entry.simple_name == "Entry"
    assert entry.enclosing_class_name() == ClassName.get("java.util", "Map")
    assert entry.top_level_class_name() == ClassName.get("java.util", "Map")
    assert entry.reflection_name() == "java.util.Map$Entry"


def test_best_guess_requires_a_class_segment():
    with pytest.raises(InvalidNameError):
        ClassName.best_guess("java.util")


def test_type_name_get_conversions():
    """Strings, primitives and Python classes all convert to type references."""
    assert TypeName.get("int") is INT
    assert TypeName.get("void") is VOID
    assert TypeName.get(str) == STRING
    assert TypeName.get(object) == OBJECT
    assert TypeName.get("int[]") == ArrayTypeName(INT)
    assert TypeName.get(Breakfast) == BREAKFAST


def test_from_class_uses_module_without_java_name():
    class Local:
        pass

    name = ClassName.from_class(Local)
    assert name.package_name == __name__
    assert name.simple_names == ("Local",)


def test_generic_and_wildcard_canonical_forms():
    map_type = ParameterizedTypeName(
        "java.util.Map", STRING, WildcardTypeName.subtype_of("java.lang.Number")
    )
    assert map_type.canonical() == "java.util.Map<java.lang.String, ? extends java.lang.Number>"
    assert str(WildcardTypeName()) == "?"
    assert str(WildcardTypeName.subtype_of(OBJECT)) == "?"
    assert str(WildcardTypeName.supertype_of("java.lang.Integer")) == "? super java.lang.Integer"
    assert [c.simple_name for c in map_type.referenced_class_names()] == ["Map", "String", "Number"]


def test_primitive_type_arguments_are_rejected():
    with pytest.raises(InvalidNameError):
        ParameterizedTypeName("java.util.List", INT)


def test_type_names_compare_by_canonical_text():
    assert ClassName.get("a.b", "C") == ClassName.best_guess("a.b.C")
    assert hash(ClassName.get("a.b", "C")) == hash(ClassName.best_guess("a.b.C"))
    assert ClassName.get("a.b", "C") != ArrayTypeName(ClassName.get("a.b", "C"))


@pytest.mark.parametrize("name", ["taco", "_x", "$y", "com.example.tacos", "a1"])
def test_valid_names(name):
    assert is_valid_name(name)
    assert check_valid_name(name) == name


@pytest.mark.parametrize("name", ["", "@", "1a", "class", "com.example.new", "a..b", None])
def test_invalid_names(name):
    assert not is_valid_name(name)
    with pytest.raises(InvalidNameError):
        check_valid_name(name)
