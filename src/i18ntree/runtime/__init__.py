"""Runtime package: key resolution, workspace configuration and locking.

Depends on the tree and lookup modules; used by the localization package.

Python 3.13+.
"""

from .config import WorkspaceConfig
from .resolver import KeyResolver, format_subtree, make_key_parts
from .rwlock import RWLock

__all__ = [
    "KeyResolver",
    "RWLock",
    "WorkspaceConfig",
    "format_subtree",
    "make_key_parts",
]
