"""Shared constants for L20nLexEngine.

This module provides centralized configuration constants used across
the syntax and diagnostics packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Diagnostics: Size of the consumed/remaining context window in errors
- Depth limits: Recursion protection for parsing and AST traversal
- Input limits: DoS prevention via size constraints

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Diagnostics
    "CONTEXT_WINDOW",
    "ERROR_PREFIX",
    "CONTEXT_SEPARATOR",
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
]

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Number of characters shown on each side of the error position.
# Errors carry the last CONTEXT_WINDOW consumed characters and the next
# CONTEXT_WINDOW remaining characters instead of line:column coordinates.
CONTEXT_WINDOW: int = 128

# Legacy error string layout:
#   ERROR_PREFIX + <consumed window> + CONTEXT_SEPARATOR + <remaining window>
ERROR_PREFIX: str = "l10n parsing error: \n"
CONTEXT_SEPARATOR: str = " ### "

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# One limit is shared by the parser (nested values and expressions) and the
# AST visitors (serializer, custom tooling). Each nesting level of an
# expression costs up to eight Python frames in the recursive descent parser,
# so the parser clamps its limit against the recursion limit divided by that
# cost. 100 levels fit under the default recursion limit of 1000.
#
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: parser (nesting), visitor, serializer.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MB).
# Prevents DoS attacks via unbounded memory allocation from large resources.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024
