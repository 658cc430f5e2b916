"""L20nLexEngine - parser for L20n "LOL" localization resources.

Turns L20n resource text into an immutable tree of entities, attributes and
macros for a later string-formatting runtime. Expressions are parsed, never
evaluated.

Public API:
    parse_l20n - Parse L20n source to AST
    serialize_l20n - Serialize AST to L20n source
    L20nParser - Configurable parser (limits, placeholder splitting, outcomes)

Exceptions:
    L20nError - Base exception class
    L20nSyntaxError - Parse errors ("l10n parsing error: ...")

Submodules:
    l20nlexengine.syntax.ast - AST node types (Resource, PlainValue, Macro, ...)
    l20nlexengine.syntax.visitor - AST traversal
    l20nlexengine.diagnostics - Diagnostic codes, templates and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import L20nError, L20nSyntaxError
from .syntax import L20nParser
from .syntax import parse as parse_l20n
from .syntax import serialize as serialize_l20n

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("l20nlexengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    # Run: uv sync
    __version__ = "0.0.0+dev"

__all__ = [
    "L20nError",
    "L20nParser",
    "L20nSyntaxError",
    "__version__",
    "parse_l20n",
    "serialize_l20n",
]
