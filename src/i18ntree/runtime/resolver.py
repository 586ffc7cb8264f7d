"""Key resolution against a merged translation tree and its lookup index.

Resolution of ``resolve("greeting.hello", "en")``:

1. Key parts: the locale followed by the dot-separated key segments,
   empty segments dropped -> ["en", "greeting", "hello"].
2. Fast path: the joined key "en.greeting.hello" is looked up in the
   index; a string hit is returned as is.
3. Slow path: the tree is walked segment by segment. A missing segment
   ends the walk with None. A subtree at the end is rendered as a
   "<key>: <value>" listing of its direct leaves, which covers keys whose
   last segment is filled in at runtime (``item.{count}``).

Nothing here raises for missing data: lookups happen on interactive paths
where showing nothing beats failing.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from i18ntree.constants import KEY_SEPARATOR, SUBTREE_LINE_SEPARATOR
from i18ntree.tree import is_subtree

if TYPE_CHECKING:
    from collections.abc import Mapping

    from i18ntree.lookup import LookupIndex
    from i18ntree.tree import TranslationTree, TranslationValue

__all__ = [
    "KeyResolver",
    "format_subtree",
    "make_key_parts",
]

logger = logging.getLogger(__name__)


def make_key_parts(key: str, locale: str) -> list[str]:
    """Split key on '.' behind locale, dropping empty segments.

    Example:
        >>> make_key_parts("greeting..hello.", "en")
        ['en', 'greeting', 'hello']
    """
    return [part for part in (locale, *key.split(KEY_SEPARATOR)) if part]


def format_subtree(subtree: Mapping[str, Any]) -> str:
    """Render the direct leaves of subtree, one "<key>: <value>" per line.

    Nested subtrees are skipped: they mean more than the last key segment
    is missing, and listing them would not help.

    Example:
        >>> format_subtree({"one": "1 item", "many": "{n} items", "x": {"y": "z"}})
        'one: 1 item\\nmany: {n} items'
    """
    return SUBTREE_LINE_SEPARATOR.join(
        f"{key}: {value}" for key, value in subtree.items() if not is_subtree(value)
    )


class KeyResolver:
    """Resolves lookup keys against one consistent (tree, index) snapshot.

    A workspace builds a new resolver on every rebuild and swaps it in as a
    single reference, so a resolver never sees a tree and an index from
    different sets of parts.

    Attributes:
        translation: Merged translation tree
        lookup_index: Lookup index generated from ``translation``
    """

    __slots__ = ("lookup_index", "translation")

    def __init__(self, translation: TranslationTree, lookup_index: LookupIndex) -> None:
        self.translation = translation
        self.lookup_index = lookup_index

    def resolve(self, key: str | None, locale: str) -> str | None:
        """Resolve key for locale to a display string.

        Args:
            key: Dotted key without locale prefix (e.g., "greeting.hello")
            locale: Locale code used as first path segment

        Returns:
            Leaf string, subtree listing, or None when nothing matches.
            Non-string leaves reached by the tree walk are returned as is.
        """
        if not key:
            return None

        key_parts = make_key_parts(key, locale)
        full_key = KEY_SEPARATOR.join(key_parts)

        simple_result = self.lookup_index.get(full_key)
        if isinstance(simple_result, str):
            logger.debug("key: %s fullKey: %s simpleLookupResult: %r", key, full_key, simple_result)
            return simple_result

        result = self.traverse(key_parts)
        logger.debug("key: %s fullKey: %s lookupResult: %r", key, full_key, result)
        if is_subtree(result):
            return format_subtree(result)
        return result  # type: ignore[return-value]

    def traverse(self, key_parts: list[str]) -> TranslationValue | None:
        """Walk the tree along key_parts.

        Returns:
            The value at the end of the path, or None as soon as a segment
            is missing or the walk hits a leaf before the last segment.
        """
        cursor: Any = self.translation
        for part in key_parts:
            if not is_subtree(cursor):
                return None
            cursor = cursor.get(part)
        return cursor

    def lookup(self, key: str) -> TranslationValue | None:
        """Return the index entry for key; no locale prefix, no traversal."""
        return self.lookup_index.get(key)

    def keys_starting_with(self, prefix: str) -> list[str]:
        """Return every index key that literally starts with prefix."""
        return [lookup_key for lookup_key in self.lookup_index if lookup_key.startswith(prefix)]
