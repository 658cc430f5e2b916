"""Primitive parsing utilities for the L20n parser.

This module provides the compiled token patterns and the low-level readers
for names, numbers and string literals.

Token Patterns:
    Every pattern that may follow whitespace starts with ``\\s*`` and is
    matched anchored at the cursor position. Patterns for member-chain
    openers (``..``, ``[.``, ``.``, ``[``, ``(``) deliberately do not, so
    ``a.b`` is a property access while ``a .b`` is not. The comment
    terminator is the only pattern that is searched for rather than matched.

Identifier and number tokens use ASCII word characters ``[a-zA-Z0-9_]``.
"""

import re

from l20nlexengine.diagnostics import ErrorTemplate
from l20nlexengine.syntax.ast import Placeholder, StringParts, StringValue, TextSegment
from l20nlexengine.syntax.cursor import Cursor

__all__ = [
    "decode_escapes",
    "parse_name",
    "parse_number",
    "parse_number_value",
    "parse_string",
]

# =============================================================================
# Token patterns
# =============================================================================

IDENTIFIER = re.compile(r"\s*[a-zA-Z][a-zA-Z0-9_]*")
NUMBER = re.compile(r"\s*[0-9][a-zA-Z0-9_]*")
COLON_SEP = re.compile(r"\s*:\s*")
COMMA_SEP = re.compile(r"\s*,\s*")
VALUE_BEGIN = re.compile(r"\s*['\"\[{]")
STRING_DELIM = re.compile(r"\s*('''|\"\"\"|['\"])")

# Leading decimal digits of a NUMBER token ("12px" -> 12).
_LEADING_DIGITS = re.compile(r"[0-9]+")

_ESCAPE_CHAR: str = "\\"
_PLACEHOLDER_OPEN: str = "{{"
_PLACEHOLDER_CLOSE: str = "}}"

# Applied in this order, each to the output of the previous one.
_ESCAPE_SEQUENCES: tuple[tuple[str, str], ...] = (
    ("\\\\", "\\"),
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ("\\b", "\b"),
    ("\\f", "\f"),
    ("\\{", "{"),
    ("\\}", "}"),
    ('\\"', '"'),
    ("\\'", "'"),
)


def parse_name(cursor: Cursor) -> str | None:
    """Parse a name: [a-zA-Z][a-zA-Z0-9_]*

    Examples:
        hello -> "hello"
        brand_name2 -> "brand_name2"

    Args:
        cursor: Current position in source (leading whitespace allowed)

    Returns:
        The name, or None (cursor unchanged) if no name starts here
    """
    return cursor.try_match(IDENTIFIER)


def parse_number_value(token: str) -> int:
    """Convert a NUMBER token to its integer value.

    Only the leading decimal digits count, so "42" -> 42 and "3em" -> 3.
    """
    match = _LEADING_DIGITS.match(token.lstrip())
    return int(match.group()) if match is not None else 0


def parse_number(cursor: Cursor) -> int | None:
    """Parse integer literal: [0-9][a-zA-Z0-9_]*

    Args:
        cursor: Current position in source

    Returns:
        Integer value, or None (cursor unchanged) if no number starts here
    """
    token = cursor.try_match(NUMBER)
    if token is None:
        return None
    return parse_number_value(token)


def decode_escapes(text: str) -> str:
    """Decode backslash escapes by successive replacement.

    Supported escape sequences, replaced in this order:
        \\\\ -> \\
        \\n \\r \\t \\b \\f -> control characters
        \\{ -> {    \\} -> }
        \\" -> "    \\' -> '

    Because replacements run one after another, a decoded ``\\\\`` can
    combine with the next character (``\\\\n`` decodes to a newline).
    """
    for escape, char in _ESCAPE_SEQUENCES:
        text = text.replace(escape, char)
    return text


def parse_string(
    cursor: Cursor, *, split_placeholders: bool = False
) -> StringValue | StringParts:
    """Parse string literal delimited by ', ", ''' or \"\"\".

    Scanning rules:
        - The longest matching delimiter opens the string
        - A backslash escapes exactly the next character
        - An unescaped ``{{`` starts a placeholder; everything up to the next
          ``}}`` is skipped without interpreting escapes or delimiters
        - The first unescaped occurrence of the delimiter closes the string

    Examples:
        "hello" -> StringValue("hello")
        'it\\'s' -> StringValue("it's")
        "x {{ y }} z" -> StringValue("x {{ y }} z")
        "x {{ y }} z" -> StringParts(("x ", {{ y }}, " z"))  (split_placeholders=True)

    Args:
        cursor: Current position in source (at optional whitespace + delimiter)
        split_placeholders: Return StringParts when placeholders occur;
            when False the whole content is decoded into one StringValue

    Returns:
        StringValue, or StringParts when the string contains placeholders
        and splitting is enabled

    Raises:
        L20nSyntaxError: No delimiter here, a placeholder is not closed,
            or the input ends before the closing delimiter
    """
    delimiter = cursor.require_match(STRING_DELIM, "a string delimiter")
    source = cursor.source
    start = cursor.pos
    end = len(source)
    placeholders: list[tuple[int, int]] = []

    i = start
    escaped = False
    while i < end:
        if escaped:
            escaped = False
        elif source.startswith(delimiter, i):
            break
        elif source[i] == _ESCAPE_CHAR:
            escaped = True
        elif source.startswith(_PLACEHOLDER_OPEN, i):
            close = source.find(_PLACEHOLDER_CLOSE, i + len(_PLACEHOLDER_OPEN))
            if close < 0:
                cursor.advance_to(i)
                raise cursor.error(ErrorTemplate.unterminated_placeholder(cursor.context()))
            placeholders.append((i, close + len(_PLACEHOLDER_CLOSE)))
            i = close + len(_PLACEHOLDER_CLOSE)
            continue
        i += 1
    else:
        raise cursor.error(ErrorTemplate.unterminated_string(delimiter, cursor.context()))

    cursor.advance_to(i + len(delimiter))

    if not placeholders or not split_placeholders:
        return StringValue(decode_escapes(source[start:i]))

    parts: list[TextSegment | Placeholder] = []
    last = start
    for ph_start, ph_end in placeholders:
        if ph_start > last:
            parts.append(TextSegment(decode_escapes(source[last:ph_start])))
        parts.append(Placeholder(source[ph_start:ph_end]))
        last = ph_end
    if i > last:
        parts.append(TextSegment(decode_escapes(source[last:i])))
    return StringParts(tuple(parts))
