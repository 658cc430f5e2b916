"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from l20nlexengine.constants import CONTEXT_SEPARATOR, ERROR_PREFIX

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    LEGACY = "legacy"  # "l10n parsing error: \n<consumed> ### <remaining>" (default)
    RUST = "rust"  # Rust compiler-style output
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output.

    Attributes:
        output_format: Output style (legacy, rust, simple, json)
        sanitize: Truncate content to prevent information leakage
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        EXPECTED_TOKEN: Expected '>'
    """

    output_format: OutputFormat = OutputFormat.LEGACY
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.LEGACY:
                return self._format_legacy(diagnostic)
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _format_legacy(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as consumed/remaining context window.

        Diagnostics without a source window (e.g. depth errors raised by
        AST visitors) fall back to the Rust style.
        """
        context = diagnostic.context
        if context is None:
            return self._format_rust(diagnostic)
        return (
            ERROR_PREFIX
            + self._maybe_sanitize(context.consumed)
            + CONTEXT_SEPARATOR
            + self._maybe_sanitize(context.remaining)
        )

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[EXPECTED_TOKEN]: Expected '>'
              --> offset 12
              = near: <a "x" ###
        """
        severity = "\033[1;31merror\033[0m" if self.color else "error"
        parts = [f"{severity}[{diagnostic.code.name}]: {diagnostic.message}"]

        if diagnostic.context is not None:
            context = diagnostic.context
            parts.append(f"  --> offset {context.position}")
            near = _escape_control(
                self._maybe_sanitize(context.consumed)
                + CONTEXT_SEPARATOR
                + self._maybe_sanitize(context.remaining)
            )
            parts.append(f"  = near: {near}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._maybe_sanitize(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            EXPECTED_TOKEN: Expected '>'
        """
        message = self._maybe_sanitize(diagnostic.message)
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "EXPECTED_TOKEN", "code_value": 3001, "message": "Expected '>'", ...}
        """
        data: dict[str, str | int | list[str]] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
        }

        if diagnostic.context is not None:
            data["position"] = diagnostic.context.position
            data["consumed"] = self._maybe_sanitize(diagnostic.context.consumed)
            data["remaining"] = self._maybe_sanitize(diagnostic.context.remaining)

        if diagnostic.expected:
            data["expected"] = list(diagnostic.expected)

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled."""
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text


def _escape_control(text: str) -> str:
    """Escape line breaks and tabs so a context window stays on one line."""
    return text.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
