"""Cursor infrastructure for the recursive descent parser.

Tracks the unconsumed remainder of the input and, implicitly, the
already-consumed prefix used for error context.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - One Cursor per parse call, owned by that call only
    - Position is a plain integer offset into an immutable source string
    - Matching is anchored at the current offset (``pattern.match(source, pos)``),
      so each token costs the length of the token, never a rescan of the input
    - Trial matches (try_match) never change state on failure
    - Required matches (require_match) raise L20nSyntaxError on failure
    - Consumed context is ``source[:pos]``: nothing is copied while parsing

Line Ending Support:
    Whitespace skipping is part of each token pattern (``\\s*``), so LF, CRLF
    and CR-only sources are all accepted.
"""

import re
from dataclasses import dataclass

from l20nlexengine.constants import CONTEXT_WINDOW
from l20nlexengine.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    L20nSyntaxError,
    SourceContext,
)

__all__ = ["Cursor"]


@dataclass(slots=True)
class Cursor:
    """Mutable source position tracker.

    Key Design Decisions:
        1. Exclusive ownership - a parse call creates it, grammar rules
           receive it as an argument, nothing else holds it
        2. Slots - Memory efficiency
        3. Simple position - Just an integer offset

    Example:
        >>> cursor = Cursor("<hello 'world'>")
        >>> cursor.try_match(re.compile(r"\\s*<"))
        '<'
        >>> cursor.pos
        1
        >>> cursor.try_match(re.compile(r"\\s*>"))  # No match, state unchanged
        >>> cursor.pos
        1
    """

    source: str
    pos: int = 0

    @property
    def remaining(self) -> str:
        """Everything not consumed yet."""
        return self.source[self.pos :]

    def try_match(self, pattern: re.Pattern[str]) -> str | None:
        """Consume pattern if it matches at the current position.

        Token patterns start with ``\\s*`` so leading whitespace is consumed
        together with the token and stripped from the returned text.

        Args:
            pattern: Compiled pattern, matched anchored at the current position

        Returns:
            Matched text with leading whitespace stripped, or None if no match
        """
        match = pattern.match(self.source, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group().lstrip()

    def require_match(self, pattern: re.Pattern[str], expected: str) -> str:
        """Consume pattern or abort the parse.

        Args:
            pattern: Compiled pattern, matched anchored at the current position
            expected: Description of the token for the diagnostic (e.g. "'>'")

        Returns:
            Matched text with leading whitespace stripped

        Raises:
            L20nSyntaxError: If the pattern does not match here
        """
        text = self.try_match(pattern)
        if text is None:
            raise self.error(ErrorTemplate.expected_token(expected, self.context()))
        return text

    def search(self, pattern: re.Pattern[str]) -> str | None:
        """Consume everything up to and including the next match of pattern.

        Unlike try_match the match may start anywhere in the remaining input.
        Used for skipping comment bodies.

        Returns:
            Matched text, or None if the pattern does not occur again
        """
        match = pattern.search(self.source, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group()

    def advance_to(self, pos: int) -> None:
        """Move the cursor forward to an absolute position (clamped to EOF)."""
        self.pos = min(max(pos, self.pos), len(self.source))

    def context(self) -> SourceContext:
        """Snapshot the diagnostic window around the current position.

        Returns:
            SourceContext with the last CONTEXT_WINDOW consumed characters and
            the next CONTEXT_WINDOW remaining characters
        """
        start = max(0, self.pos - CONTEXT_WINDOW)
        return SourceContext(
            position=self.pos,
            consumed=self.source[start : self.pos],
            remaining=self.source[self.pos : self.pos + CONTEXT_WINDOW],
        )

    def error(self, diagnostic: Diagnostic) -> L20nSyntaxError:
        """Build (not raise) a syntax error for a diagnostic."""
        return L20nSyntaxError(diagnostic)
