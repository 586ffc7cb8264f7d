"""Error types for i18ntree.

Python 3.13+. Zero external dependencies.
"""

from .errors import DepthLimitExceededError, FragmentError, I18nTreeError

__all__ = [
    "DepthLimitExceededError",
    "FragmentError",
    "I18nTreeError",
]
