"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceContext

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def expected_token(expected: str, context: SourceContext) -> Diagnostic:
        """A required token was not found at the current position.

        Args:
            expected: Human-readable description of the token (e.g. "'>'")
            context: Source window at the failure point

        Returns:
            Diagnostic for EXPECTED_TOKEN
        """
        msg = f"Expected {expected}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_TOKEN,
            message=msg,
            context=context,
            expected=(expected,),
        )

    @staticmethod
    def expected_value(context: SourceContext) -> Diagnostic:
        """A value (string, array or object) was mandatory but absent."""
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_VALUE,
            message="Expected a value (string, array or object)",
            context=context,
            expected=("'", '"', "[", "{"),
            hint="Values start with a quote, '[' or '{'",
        )

    @staticmethod
    def expected_expression(context: SourceContext) -> Diagnostic:
        """An expression was mandatory but no primary expression was found."""
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_EXPRESSION,
            message="Expected an expression",
            context=context,
            hint="Expressions start with '(', a number, a value or a name",
        )

    @staticmethod
    def unterminated_string(delimiter: str, context: SourceContext) -> Diagnostic:
        """End of input reached before the closing string delimiter.

        Args:
            delimiter: The opening delimiter (one of ', ", ''', \"\"\")
            context: Source window at the start of the string body

        Returns:
            Diagnostic for UNTERMINATED_STRING
        """
        msg = f"Unterminated string literal (missing closing {delimiter})"
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_STRING,
            message=msg,
            context=context,
            expected=(delimiter,),
        )

    @staticmethod
    def unterminated_placeholder(context: SourceContext) -> Diagnostic:
        """A '{{' run inside a string has no matching '}}'."""
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_PLACEHOLDER,
            message="Unterminated placeholder (missing closing '}}')",
            context=context,
            expected=("}}",),
            hint="Escape literal braces as \\{ and \\}",
        )

    @staticmethod
    def unterminated_comment(context: SourceContext) -> Diagnostic:
        """A '/*' comment has no closing '*/'."""
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_COMMENT,
            message="Unterminated comment (missing closing '*/')",
            context=context,
            expected=("*/",),
        )

    @staticmethod
    def nesting_depth_exceeded(
        max_depth: int, context: SourceContext | None = None
    ) -> Diagnostic:
        """Nested values or expressions exceed the configured depth.

        Args:
            max_depth: The configured maximum nesting depth
            context: Source window at the failure point, if known

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            context=context,
            hint="Reduce nesting or raise max_nesting_depth",
        )
