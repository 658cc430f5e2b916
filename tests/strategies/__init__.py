"""Hypothesis strategies for L20nLexEngine property-based testing.

Usage:
    from tests.strategies import l20n_names, l20n_resources
    from tests.strategies.l20n import l20n_expressions, string_parts
"""

from .l20n import (
    L20N_SYNTAX_CHARS,
    L20N_TEXT_CHARS,
    NAME_FIRST_CHARS,
    NAME_REST_CHARS,
    complex_entities,
    l20n_chaos_source,
    l20n_entries,
    l20n_expressions,
    l20n_names,
    l20n_resources,
    l20n_text,
    l20n_values,
    macros,
    placeholders,
    string_parts,
    string_values,
)

__all__ = [
    "L20N_SYNTAX_CHARS",
    "L20N_TEXT_CHARS",
    "NAME_FIRST_CHARS",
    "NAME_REST_CHARS",
    "complex_entities",
    "l20n_chaos_source",
    "l20n_entries",
    "l20n_expressions",
    "l20n_names",
    "l20n_resources",
    "l20n_text",
    "l20n_values",
    "macros",
    "placeholders",
    "string_parts",
    "string_values",
]
