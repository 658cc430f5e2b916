"""L20n parser module.

This module provides the main L20nParser class and related parsing
utilities organized into focused submodules.

Module Organization:
- core.py: Main L20nParser class and the entity scanning loop
- primitives.py: Token patterns and basic readers (names, numbers, strings)
- rules.py: All grammar rules (values, expressions, identifiers, entries)

Public API:
    L20nParser: Main parser class
    ParseOutcome: Non-raising parse result
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from l20nlexengine.syntax.parser.core import L20nParser, ParseOutcome
from l20nlexengine.syntax.parser.rules import ParseContext

__all__ = ["L20nParser", "ParseContext", "ParseOutcome"]
