"""Depth limiting for recursive tree walks.

Translation trees come from external loaders and are walked recursively
by the merge, copy and flatten functions. DepthGuard bounds those walks so
that a pathological fragment raises DepthLimitExceededError instead of
RecursionError halfway through a rebuild.

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from i18ntree.constants import MAX_DEPTH
from i18ntree.diagnostics import DepthLimitExceededError

__all__ = ["DepthGuard", "depth_clamp"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager tracking how deep a recursive walk has descended.

    Usage:
        guard = DepthGuard(max_depth=50)

        def walk(node):
            with guard:
                for value in node.values():
                    if isinstance(value, Mapping):
                        walk(value)

    One guard is created per top-level walk and shared by every recursive
    call of that walk; it is not shared between walks.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter one level deeper.

        Checks the limit before incrementing: __exit__ does not run when
        __enter__ raises, so an early increment would leak.
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(self.max_depth)
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Leave the level, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth


def depth_clamp(requested_depth: int, reserve_frames: int = 50) -> int:
    """Clamp requested depth against Python recursion limit.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(200)
        >>> depth_clamp(100)
        100
        >>> depth_clamp(500)
        150
    """
    max_safe_depth = sys.getrecursionlimit() - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
