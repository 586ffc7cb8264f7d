"""Workspace localization package.

Provides the per-workspace merged translation view together with its part
registry, the fragment loading infrastructure and the type aliases used at
call sites.

Submodules:
    types      - PEP 695 type aliases (LocaleCode, TranslationKey, OriginId, OriginLike)
    registry   - PartRegistry, TranslationPart, normalize_origin
    loading    - FragmentLoader protocol, PathFragmentLoader, FragmentLoadResult,
                 LoadSummary
    summary    - WorkspaceSummary
    workspace  - WorkspaceTranslation (merged view + query surface)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from i18ntree.enums import LoadStatus
from i18ntree.localization.loading import (
    FragmentLoader,
    FragmentLoadResult,
    LoadSummary,
    PathFragmentLoader,
)
from i18ntree.localization.registry import PartRegistry, TranslationPart, normalize_origin
from i18ntree.localization.summary import WorkspaceSummary
from i18ntree.localization.types import LocaleCode, OriginId, OriginLike, TranslationKey
from i18ntree.localization.workspace import WorkspaceTranslation

__all__ = [
    # Main object
    "WorkspaceTranslation",
    "WorkspaceSummary",
    # Part registry
    "PartRegistry",
    "TranslationPart",
    "normalize_origin",
    # Loader protocol and implementations
    "FragmentLoader",
    "PathFragmentLoader",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "FragmentLoadResult",
    # Type aliases for user code type annotations
    "LocaleCode",
    "OriginId",
    "OriginLike",
    "TranslationKey",
]
