"""Part registry: one translation fragment per originating source.

The registry is an ordered list of TranslationPart records. A part with an
origin replaces any earlier part with the same origin (a file re-parsed
after an edit); anonymous parts are only ever appended. The order of the
list is the merge order of the workspace view: remaining parts first, the
newest part last.

The registry holds no lock of its own. WorkspaceTranslation serializes
access together with the derived caches.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from i18ntree.localization.types import OriginId, OriginLike
    from i18ntree.tree import TranslationTree

__all__ = [
    "PartRegistry",
    "TranslationPart",
    "normalize_origin",
]

logger = logging.getLogger(__name__)


def normalize_origin(origin: OriginLike | None) -> OriginId | None:
    """Canonicalize an origin for identity comparison.

    Paths and path strings are compared by their POSIX form, so redundant
    separators and "." components do not create a second origin. Empty
    origins count as anonymous.

    Example:
        >>> normalize_origin("./locales//en.json")
        'locales/en.json'
        >>> normalize_origin("") is None
        True
    """
    if not origin:
        return None
    return PurePath(origin).as_posix()


@dataclass(frozen=True, slots=True)
class TranslationPart:
    """One fragment of the workspace translation tree.

    Attributes:
        translations: Fragment tree (private copy owned by the registry)
        origin: Normalized source identifier, None for anonymous parts
    """

    translations: TranslationTree
    origin: OriginId | None = None

    @property
    def is_anonymous(self) -> bool:
        """True if the part has no origin and can never be replaced."""
        return self.origin is None


class PartRegistry:
    """Ordered fragments with replace-by-origin semantics.

    Invariant: at most one part per non-None origin.

    Example:
        >>> registry = PartRegistry()
        >>> registry.register({"en": {"x": "old"}}, "f1.json")
        >>> replaced = registry.register({"en": {"x": "new"}}, "f1.json")
        >>> replaced.translations
        {'en': {'x': 'old'}}
        >>> [part.translations for part in registry]
        [{'en': {'x': 'new'}}]
    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[TranslationPart] = []

    def register(
        self, translations: TranslationTree, origin: OriginId | None = None
    ) -> TranslationPart | None:
        """Append a part, first dropping the part with the same origin.

        Args:
            translations: Fragment tree
            origin: Normalized origin, or None for an anonymous part

        Returns:
            The replaced part, or None if nothing was replaced
        """
        replaced = self._pop(origin) if origin is not None else None
        self._parts.append(TranslationPart(translations=translations, origin=origin))
        if replaced is not None:
            logger.debug("Replaced translation part: %s", origin)
        else:
            logger.debug("Registered translation part: %s", origin or "<anonymous>")
        return replaced

    def remove(self, origin: OriginId) -> TranslationPart | None:
        """Drop the part registered for origin.

        Returns:
            The removed part, or None if origin was not registered
        """
        removed = self._pop(origin)
        if removed is not None:
            logger.debug("Removed translation part: %s", origin)
        return removed

    def clear(self) -> None:
        """Drop every part, anonymous ones included."""
        self._parts.clear()

    def restore(self, parts: tuple[TranslationPart, ...]) -> None:
        """Reset the registry to a snapshot previously taken from ``parts``."""
        self._parts = list(parts)

    def _pop(self, origin: OriginId) -> TranslationPart | None:
        for position, part in enumerate(self._parts):
            if part.origin == origin:
                return self._parts.pop(position)
        return None

    @property
    def parts(self) -> tuple[TranslationPart, ...]:
        """Snapshot of the parts in merge order."""
        return tuple(self._parts)

    @property
    def origins(self) -> tuple[OriginId, ...]:
        """Origins of all non-anonymous parts in merge order."""
        return tuple(part.origin for part in self._parts if part.origin is not None)

    def trees(self) -> Iterator[TranslationTree]:
        """Iterate over fragment trees in merge order."""
        return (part.translations for part in self._parts)

    def __contains__(self, origin: object) -> bool:
        return any(part.origin == origin for part in self._parts if part.origin is not None)

    def __iter__(self) -> Iterator[TranslationPart]:
        return iter(tuple(self._parts))

    def __len__(self) -> int:
        return len(self._parts)

    def __repr__(self) -> str:
        anonymous = sum(1 for part in self._parts if part.is_anonymous)
        return f"PartRegistry(parts={len(self._parts)}, anonymous={anonymous})"
