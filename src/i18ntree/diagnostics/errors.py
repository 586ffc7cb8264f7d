"""i18ntree exception hierarchy.

Lookups never raise: missing keys and locales come back as None. The
exceptions below cover caller contract violations on the write path
(malformed fragments, runaway nesting) so that a bad fragment is rejected
before it reaches the part registry.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "DepthLimitExceededError",
    "FragmentError",
    "I18nTreeError",
]


class I18nTreeError(Exception):
    """Base exception for all i18ntree errors."""


class FragmentError(I18nTreeError, TypeError):
    """Translation fragment is not a tree.

    Raised when a fragment (or one of its nested nodes) is not a mapping
    with string keys, or when a loaded document's root is not an object.

    Attributes:
        origin: Origin identifier of the offending fragment, if known
    """

    def __init__(self, message: str, *, origin: str | None = None) -> None:
        """Initialize FragmentError.

        Args:
            message: Error message
            origin: Origin identifier of the fragment (optional)
        """
        super().__init__(message)
        self.origin = origin


class DepthLimitExceededError(I18nTreeError):
    """Raised when a translation tree nests deeper than the configured limit.

    This error indicates either:
    - Generated or adversarial input designed to exhaust the stack
    - A loader that turned cyclic data into an unbounded tree

    Attributes:
        max_depth: The limit that was exceeded
    """

    def __init__(self, max_depth: int) -> None:
        """Initialize DepthLimitExceededError.

        Args:
            max_depth: The limit that was exceeded
        """
        super().__init__(f"Maximum tree depth exceeded (limit: {max_depth})")
        self.max_depth = max_depth
