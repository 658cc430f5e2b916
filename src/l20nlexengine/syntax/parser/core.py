"""Core L20n parser implementation.

This module provides the main L20nParser class that drives parsing of L20n
resources into the AST defined in :mod:`l20nlexengine.syntax.ast`.

Architecture:
    Each parse call creates its own :class:`~l20nlexengine.syntax.cursor.Cursor`
    and :class:`~l20nlexengine.syntax.parser.rules.ParseContext` and hands them
    to the grammar rules in :mod:`~l20nlexengine.syntax.parser.rules`. The
    parser instance itself only holds immutable configuration, so one
    instance can be shared freely.

Error Model:
    Parsing is all-or-nothing. The first syntax violation raises
    :class:`~l20nlexengine.diagnostics.L20nSyntaxError` and no partial
    Resource is produced. :meth:`L20nParser.parse_outcome` wraps the same
    call for callers that prefer a result value over an exception.

Security:
    Includes configurable input size limit to prevent DoS attacks via
    unbounded memory allocation from extremely large resources, and a
    nesting depth limit against stack exhaustion.

See Also:
    - :mod:`l20nlexengine.syntax.ast` - All AST node type definitions
    - :mod:`l20nlexengine.syntax.parser.rules` - Grammar rules
"""

import logging
from dataclasses import dataclass

from l20nlexengine.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from l20nlexengine.core.depth_guard import DepthLimitExceededError
from l20nlexengine.diagnostics import Diagnostic, ErrorTemplate, L20nSyntaxError
from l20nlexengine.syntax.ast import (
    ComplexEntity,
    Entry,
    Macro,
    PlainValue,
    Resource,
)
from l20nlexengine.syntax.cursor import Cursor
from l20nlexengine.syntax.parser.rules import (
    ParseContext,
    parse_entity,
    parse_entity_open,
)

__all__ = ["L20nParser", "ParseOutcome"]

logger = logging.getLogger(__name__)

# Maximum characters of ignored trailing content shown in log messages
_LOG_TRUNCATE_WARNING: int = 50


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    """Result of :meth:`L20nParser.parse_outcome`.

    Exactly one of resource and diagnostic is set.

    Attributes:
        resource: Parsed resource on success
        diagnostic: Structured description of the first syntax violation
    """

    resource: Resource | None = None
    diagnostic: Diagnostic | None = None

    @property
    def is_ok(self) -> bool:
        """True if parsing succeeded."""
        return self.resource is not None


class L20nParser:
    """L20n resource parser.

    Design:
    - Recursive descent, one rule per grammar production
    - Trial matches for lookahead, no backtracking over committed structure
    - Fail fast: the first violation aborts the whole parse

    Security:
    - Configurable max_source_size prevents DoS via large inputs
    - Default limit: 10 MB
    - Configurable max_nesting_depth prevents stack exhaustion via deeply
      nested values and expressions

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
        max_nesting_depth: Maximum allowed nesting depth (default: 100)
        split_placeholders: Split strings containing ``{{ }}`` into StringParts
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size", "_split_placeholders")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
        split_placeholders: bool = False,
    ) -> None:
        """Initialize parser with optional limits and string mode.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MB).
                            Set to 0 to disable size limit (not recommended).
            max_nesting_depth: Maximum nesting depth of values and expressions
                              (default: 100).
            split_placeholders: When True, strings containing ``{{ ... }}``
                              runs become StringParts; by default every
                              string is a single StringValue.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )
        self._split_placeholders = split_placeholders

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed nesting depth."""
        return self._max_nesting_depth

    @property
    def split_placeholders(self) -> bool:
        """Whether strings with placeholders are split into StringParts."""
        return self._split_placeholders

    def parse(self, source: str, *, source_path: str | None = None) -> Resource:
        """Parse L20n source into a Resource.

        Loop:
            1. Skip comments; stop successfully if no '<' follows
            2. Read one entity or macro
            3. Replace any earlier entry with the same key
            4. Require the closing '>'

        Args:
            source: L20n resource text (already decoded)
            source_path: Optional file name, only used in log messages

        Returns:
            :class:`~l20nlexengine.syntax.ast.Resource` mapping each key to a
            PlainValue, ComplexEntity or Macro, in source order

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            L20nSyntaxError: On the first syntax violation
            DepthLimitExceededError: If nesting is deeper than the limit or
                than the interpreter stack allows

        Example:
            >>> parser = L20nParser()
            >>> resource = parser.parse('<hello "Hello, world!">')
            >>> resource["hello"].value.value
            'Hello, world!'
        """
        # Validate input size (DoS prevention)
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,} characters). "
                "Configure max_source_size in L20nParser constructor to increase limit."
            )
            raise ValueError(msg)

        source_desc = source_path or "<string>"
        cursor = Cursor(source)
        context = ParseContext(
            max_nesting_depth=self._max_nesting_depth,
            split_placeholders=self._split_placeholders,
        )
        entries: dict[str, Entry] = {}

        try:
            while parse_entity_open(cursor):
                key, entry = parse_entity(cursor, context)
                if key in entries:
                    # Duplicate key: forget the former one, keep source order
                    del entries[key]
                    logger.debug("Replaced duplicate key: %s", key)
                entries[key] = entry
                match entry:
                    case Macro():
                        logger.debug("Registered macro: %s", key)
                    case ComplexEntity() | PlainValue():
                        logger.debug("Registered entity: %s", key)
        except L20nSyntaxError as e:
            logger.debug("Failed to parse resource %s: %s", source_desc, e.diagnostic)
            raise
        except RecursionError as e:
            # Interpreter stack ran out below the guarded depth
            diagnostic = ErrorTemplate.nesting_depth_exceeded(
                context.depth_guard.max_depth, cursor.context()
            )
            logger.debug("Failed to parse resource %s: %s", source_desc, diagnostic)
            raise DepthLimitExceededError(diagnostic) from e

        trailing = cursor.remaining
        if trailing.strip():
            # Use repr() to escape control characters in the log line
            logger.warning(
                "Ignoring trailing content in %s at offset %d: %s",
                source_desc,
                cursor.pos,
                repr(trailing.strip()[:_LOG_TRUNCATE_WARNING]),
            )

        resource = Resource(entries)
        logger.info(
            "Parsed resource %s: %d entities, %d macros",
            source_desc,
            len(resource.entities),
            len(resource.macros),
        )
        return resource

    def parse_outcome(self, source: str) -> ParseOutcome:
        """Parse L20n source without raising on syntax errors.

        Args:
            source: L20n resource text (already decoded)

        Returns:
            ParseOutcome with either the resource or the diagnostic of the
            first syntax violation

        Raises:
            ValueError: If source exceeds max_source_size
        """
        try:
            return ParseOutcome(resource=self.parse(source))
        except L20nSyntaxError as e:
            return ParseOutcome(diagnostic=e.diagnostic)
