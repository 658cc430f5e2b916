"""Diagnostic system for L20n errors.

Provides structured error diagnostics with codes, source context windows
and hints, plus the exception hierarchy raised by the parser.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceContext
from .errors import L20nError, L20nSyntaxError
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "L20nError",
    "L20nSyntaxError",
    "OutputFormat",
    "SourceContext",
]
