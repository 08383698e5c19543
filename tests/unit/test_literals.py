"""
Unit tests for the literal formatter.

Verifies:
1. Scalar rendering for every supported kind.
2. Escaping rules of string and character literals.
3. Rejection of values with no literal form.
"""

import math

import pytest

from conftest import BREAKFAST, Breakfast
from scribe.codegen.core.errors import UnsupportedValueKindError
from scribe.codegen.core.literals import (
    Char,
    EnumConstant,
    Float32,
    Long,
    character_literal,
    format_literal,
    normalize_literal,
    string_literal_with_double_quotes,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (1701, "1701"),
        (-3, "-3"),
        (Long(8), "8L"),
        (11.1, "11.1"),
        (10.0, "10.0"),
        (Float32(9.0), "9.0f"),
        ("verbatim", "verbatim"),
    ],
)
def test_scalar_literals(value, expected):
    """Scalars render as the equivalent Java literal text."""
    assert format_literal(value) == expected


def test_double_exponent_uses_java_notation():
    """Python exponents are rewritten with a mantissa fraction and capital E."""
    assert format_literal(1e20) == "1.0E20"
    assert format_literal(1e-05) == "1.0E-5"
    assert format_literal(1.5e-07) == "1.5E-7"


def test_non_finite_values_reference_constants():
    """NaN and infinities render as field references on the boxed type."""
    assert format_literal(math.nan) == "Double.NaN"
    assert format_literal(-math.inf) == "Double.NEGATIVE_INFINITY"
    assert format_literal(Float32(math.inf)) == "Float.POSITIVE_INFINITY"


def test_character_literals():
    """Single quotes are escaped in char literals, double quotes are not."""
    assert format_literal(Char("z")) == "'z'"
    assert format_literal(Char("'")) == "'\\''"
    assert format_literal(Char('"')) == "'\"'"
    assert format_literal(Char(0)) == "'\\u0000'"
    assert format_literal(Char(0xCAFE)) == "'쫾'"
    assert character_literal("\t") == "'\\t'"


def test_char_requires_one_character():
    """A Char holds exactly one character."""
    with pytest.raises(ValueError):
        Char("ab")


def test_string_literal_escapes():
    """Double quotes and backslashes are escaped; single quotes are not."""
    assert string_literal_with_double_quotes("a\"b'c\\") == '"a\\"b\'c\\\\"'
    assert string_literal_with_double_quotes("tab\there") == '"tab\\there"'
    assert string_literal_with_double_quotes("\x01") == '"\\u0001"'
    assert string_literal_with_double_quotes("€ ℕ") == '"€ ℕ"'


def test_multiline_string_is_split_into_concatenation():
    """Each embedded newline except a trailing one continues on a new line."""
    assert string_literal_with_double_quotes("line1\nline2", "  ") == '"line1\\n"\n    + "line2"'
    assert string_literal_with_double_quotes("ends\n", "  ") == '"ends\\n"'


def test_unsupported_kind_names_the_type():
    """Values without a literal form fail with their concrete type name."""
    with pytest.raises(UnsupportedValueKindError) as exc_info:
        format_literal(object())
    assert exc_info.value.kind == "object"

    with pytest.raises(UnsupportedValueKindError):
        normalize_literal({"not": "a literal"})


def test_enum_members_normalize_to_constants():
    """Python enum members become references to Java enum constants."""
    constant = normalize_literal(Breakfast.PANCAKES)
    assert constant == EnumConstant(BREAKFAST, "PANCAKES")
