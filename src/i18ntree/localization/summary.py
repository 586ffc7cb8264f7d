"""Diagnostic snapshot of a workspace translation.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from i18ntree.localization.types import LocaleCode, OriginId

__all__ = ["WorkspaceSummary"]


@dataclass(frozen=True, slots=True)
class WorkspaceSummary:
    """Point-in-time description of a WorkspaceTranslation.

    Built by WorkspaceTranslation.describe() under the read lock, so every
    field reflects the same set of parts.

    Attributes:
        workspace: Workspace identifier the translation belongs to
        part_count: Number of registered parts
        anonymous_part_count: Parts registered without an origin
        origins: Origins of the named parts in merge order
        locales: Top-level keys of the merged view in insertion order
        fallback_locale: What fallback_locale() returns for this snapshot
        key_count: Number of lookup index entries
        locale_names: English display name per locale key; None for keys
            Babel does not recognize as a locale
    """

    workspace: str | None
    part_count: int
    anonymous_part_count: int
    origins: tuple[OriginId, ...]
    locales: tuple[LocaleCode, ...]
    fallback_locale: LocaleCode
    key_count: int
    locale_names: Mapping[LocaleCode, str | None] = field(default_factory=dict)

    @property
    def unknown_locales(self) -> tuple[LocaleCode, ...]:
        """Top-level keys that are not recognizable locale codes."""
        return tuple(locale for locale in self.locales if self.locale_names.get(locale) is None)
