"""L20n exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Formatting of the diagnostic is deferred to DiagnosticFormatter; ``str()``
of an exception uses the legacy "l10n parsing error" layout.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, SourceContext

__all__ = ["L20nError", "L20nSyntaxError"]


class L20nError(Exception):
    """Base exception for all L20n errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize L20nError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class L20nSyntaxError(L20nError):
    """Syntax error during parsing.

    Parsing is all-or-nothing: the first violation aborts the parse and no
    partial result is produced.
    """

    @property
    def context(self) -> SourceContext | None:
        """Source window around the error, if the diagnostic carries one."""
        return self.diagnostic.context if self.diagnostic is not None else None

    @property
    def consumed(self) -> str:
        """Up to CONTEXT_WINDOW characters consumed before the error."""
        context = self.context
        return context.consumed if context is not None else ""

    @property
    def remaining(self) -> str:
        """Up to CONTEXT_WINDOW characters remaining at the error."""
        context = self.context
        return context.remaining if context is not None else ""
