"""
Naming utilities for safe code generation.

Validates Java identifiers and qualified names, and knows which words
the language reserves.
"""

from typing import Set

from .errors import InvalidNameError


JAVA_RESERVED: Set[str] = {
    'abstract', 'assert', 'boolean', 'break', 'byte', 'case', 'catch',
    'char', 'class', 'const', 'continue', 'default', 'do', 'double',
    'else', 'enum', 'extends', 'final', 'finally', 'float', 'for', 'goto',
    'if', 'implements', 'import', 'instanceof', 'int', 'interface', 'long',
    'native', 'new', 'package', 'private', 'protected', 'public', 'return',
    'short', 'static', 'strictfp', 'super', 'switch', 'synchronized',
    'this', 'throw', 'throws', 'transient', 'try', 'void', 'volatile',
    'while', '_',
    # literals
    'true', 'false', 'null',
}


def is_identifier_start(ch: str) -> bool:
    """Check whether a character may begin a Java identifier."""
    return ch.isalpha() or ch in "_$"


def is_identifier_part(ch: str) -> bool:
    """Check whether a character may continue a Java identifier."""
    return ch.isalnum() or ch in "_$"


def is_identifier(text: str) -> bool:
    """Check that text is a single identifier token (keywords allowed)."""
    if not text or not is_identifier_start(text[0]):
        return False
    return all(is_identifier_part(ch) for ch in text[1:])


def is_keyword(text: str) -> bool:
    """Check whether text is a reserved word."""
    return text in JAVA_RESERVED


def is_valid_name(name: object) -> bool:
    """
    Check that name is a syntactically valid, possibly qualified, name.

    Every dot-separated segment must be an identifier that is not a
    reserved word.

    Args:
        name: Candidate name

    Returns:
        True if the name may be emitted as-is
    """
    if not isinstance(name, str) or not name:
        return False
    for segment in name.split("."):
        if not is_identifier(segment) or is_keyword(segment):
            return False
    return True


def check_valid_name(name: object) -> str:
    """Return name unchanged or raise InvalidNameError."""
    if not is_valid_name(name):
        raise InvalidNameError(name)
    return name
