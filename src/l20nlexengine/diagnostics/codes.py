"""Diagnostic codes and data structures.

Defines error codes, source context windows, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceContext",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        3000-3099: Token errors (a required pattern did not match)
        3100-3199: Unterminated constructs (end of input reached first)
        3200-3299: Structural limits (nesting depth)
    """

    # Token errors (3000-3099)
    EXPECTED_TOKEN = 3001
    EXPECTED_VALUE = 3002
    EXPECTED_EXPRESSION = 3003

    # Unterminated constructs (3100-3199)
    UNTERMINATED_STRING = 3101
    UNTERMINATED_PLACEHOLDER = 3102
    UNTERMINATED_COMMENT = 3103

    # Structural limits (3200-3299)
    NESTING_DEPTH_EXCEEDED = 3201


@dataclass(frozen=True, slots=True)
class SourceContext:
    """Window of source text around an error position.

    Errors do not carry line:column coordinates; they carry the text that
    was already consumed and the text that was about to be read, each
    truncated to ``CONTEXT_WINDOW`` characters.

    Attributes:
        position: Character offset of the error in the source (0-indexed)
        consumed: Up to CONTEXT_WINDOW characters before the position
        remaining: Up to CONTEXT_WINDOW characters from the position on
    """

    position: int
    consumed: str
    remaining: str

    def __post_init__(self) -> None:
        """Validate SourceContext invariants.

        Raises:
            ValueError: If position is negative.
        """
        if self.position < 0:
            msg = f"SourceContext.position must be >= 0, got {self.position}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Keeps the error description and its source window apart so callers can
    choose the presentation (see :class:`DiagnosticFormatter`).

    Attributes:
        code: Unique error code
        message: Human-readable error description
        context: Source window around the error (None for non-positional errors)
        expected: Tokens the parser would have accepted
        hint: Suggestion for fixing the error
    """

    code: DiagnosticCode
    message: str
    context: SourceContext | None = None
    expected: tuple[str, ...] = ()
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in the legacy l10n layout.

        Example output (for `<a "x"` at end of input):
            "l10n parsing error: \\n<a \"x\" ### "

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
