"""Nesting limits shared by the parser, visitors and the serializer.

Every recursive walk over L20n structure (reading nested arrays, objects and
expressions, or traversing a finished tree) goes through a DepthGuard, so a
hostile or generated input fails with a syntax error instead of exhausting
the interpreter stack.

State lives on the guard instance only; a guard belongs to one walk.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from l20nlexengine.constants import MAX_DEPTH
from l20nlexengine.diagnostics import L20nSyntaxError, SourceContext
from l20nlexengine.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(L20nSyntaxError):
    """Nesting went deeper than the configured limit.

    A syntax error subclass: parse callers see one error kind for every
    rejected input.
    """


@dataclass(slots=True)
class DepthGuard:
    """Counts entered nesting levels and refuses to go past max_depth.

    Parser rules attach the source window before entering, so the error
    points at the offending bracket:

        with guard.entering(cursor.context()):
            items = _parse_array(cursor, context)

    Tree walkers enter without a window:

        with guard:
            self.visit(child)

    Attributes:
        max_depth: Levels allowed before DepthLimitExceededError (default: MAX_DEPTH)
        current_depth: Levels currently entered
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)
    _pending_context: SourceContext | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter one level.

        The limit is checked before the counter moves: __exit__ never runs
        when __enter__ raises, so the count must stay untouched on failure.
        """
        context, self._pending_context = self._pending_context, None
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.nesting_depth_exceeded(self.max_depth, context)
            )
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.current_depth -= 1

    def entering(self, context: SourceContext) -> DepthGuard:
        """Remember context for the error of the next __enter__ and return self."""
        self._pending_context = context
        return self

    @property
    def depth(self) -> int:
        """Levels currently entered."""
        return self.current_depth

    def reset(self) -> None:
        """Forget all entered levels before reusing the guard."""
        self.current_depth = 0


def depth_clamp(
    requested_depth: int, reserve_frames: int = 50, frames_per_level: int = 1
) -> int:
    """Lower requested_depth so it fits under sys.getrecursionlimit().

    reserve_frames are kept free for the caller's own stack. frames_per_level
    is the number of Python frames one guarded level costs: 1 for tree
    walkers, more for the recursive descent parser, which passes through
    several rules between two guarded levels.

    Example:
        >>> sys.setrecursionlimit(300)
        >>> depth_clamp(100)
        100
        >>> depth_clamp(1000)
        250
        >>> depth_clamp(100, frames_per_level=5)
        50
    """
    limit = sys.getrecursionlimit()
    ceiling = (limit - reserve_frames) // frames_per_level
    if requested_depth <= ceiling:
        return requested_depth
    logger.warning(
        "Clamping requested depth %d to %d "
        "(recursion limit %d, %d frames reserved, %d frames per level)",
        requested_depth,
        ceiling,
        limit,
        reserve_frames,
        frames_per_level,
    )
    return ceiling
