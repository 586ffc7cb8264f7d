"""i18ntree - merged translation trees with dotted-key resolution.

Maintains a per-workspace merged view of localization data assembled from
many source fragments, and resolves dotted lookup keys (locale-prefixed)
against that view.

Public API:
    WorkspaceTranslation - Part registry, merged view and key resolution
    WorkspaceConfig - Workspace configuration
    PathFragmentLoader - JSON fragment loader
    deep_merge - Non-destructive recursive merge of two trees
    generate_lookup_index - Flatten a tree into a dotted-key index

Exceptions:
    I18nTreeError - Base exception class
    FragmentError - Fragment is not a translation tree
    DepthLimitExceededError - Fragment nests too deeply

Submodules:
    i18ntree.tree - Translation tree type and merge functions
    i18ntree.lookup - Lookup index generator protocol and default
    i18ntree.localization - Workspace translation, registry, loaders
    i18ntree.runtime - Key resolver, configuration, readers-writer lock
"""

from .diagnostics import DepthLimitExceededError, FragmentError, I18nTreeError
from .localization import PathFragmentLoader, WorkspaceTranslation
from .lookup import generate_lookup_index
from .runtime import WorkspaceConfig
from .tree import deep_merge

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18ntree")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DepthLimitExceededError",
    "FragmentError",
    "I18nTreeError",
    "PathFragmentLoader",
    "WorkspaceConfig",
    "WorkspaceTranslation",
    "__version__",
    "deep_merge",
    "generate_lookup_index",
]
