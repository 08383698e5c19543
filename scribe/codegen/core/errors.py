"""
Exception hierarchy for spec construction and emission.

Every error here is a caller-input contract violation detected while a
spec is being built, never while text is being rendered.
"""

from typing import Optional


class ScribeError(Exception):
    """
    Base exception for all scribe errors.

    Carries a human-readable message plus a dictionary with the offending
    value (format string, member name, value kind) for diagnostics.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize scribe error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class FormatArityError(ScribeError):
    """Raised when placeholders and arguments of a format string do not pair up."""

    def __init__(self, message: str, format_string: str, expected: int, actual: int):
        super().__init__(
            message,
            {"format": format_string, "expected": expected, "actual": actual},
        )
        self.format_string = format_string
        self.expected = expected
        self.actual = actual


class UnknownPlaceholderError(ScribeError):
    """Raised for a `$` followed by a character that is not a placeholder."""

    def __init__(self, placeholder: str, format_string: str):
        super().__init__(
            f"invalid format string: unknown placeholder '{placeholder}'",
            {"format": format_string},
        )
        self.placeholder = placeholder
        self.format_string = format_string


class InvalidArgumentError(ScribeError, ValueError):
    """Raised when an argument cannot be used for its placeholder kind."""

    def __init__(self, message: str, placeholder: str, value: object):
        super().__init__(
            message, {"placeholder": placeholder, "kind": type(value).__name__}
        )
        self.placeholder = placeholder
        self.value = value


class UnsupportedValueKindError(ScribeError, TypeError):
    """Raised when the literal formatter meets a value it cannot render."""

    def __init__(self, value: object):
        kind = type(value).__name__
        super().__init__(f"unsupported value kind: {kind}", {"kind": kind})
        self.kind = kind
        self.value = value


class NullMemberNameError(ScribeError, TypeError):
    """Raised when an annotation member is added without a name."""

    def __init__(self):
        super().__init__("name == None")


class InvalidNameError(ScribeError, ValueError):
    """Raised when a declared name is not a valid Java identifier."""

    def __init__(self, name: object):
        super().__init__(f"not a valid name: {name}")
        self.name = name


class InvalidMemberNameError(InvalidNameError):
    """Raised when an annotation member name is not a valid Java identifier."""
