"""Per-workspace merged translation view.

WorkspaceTranslation owns, for one workspace:

- the part registry (one fragment per origin, plus anonymous fragments);
- the merged view: deep merge of every fragment in registry order;
- the lookup index: the merged view flattened to dotted keys.

Every mutation ends in a single _rebuild() that recomputes the merged view
and the lookup index from scratch and swaps them in as one KeyResolver
snapshot. Queries read that snapshot and never see a merged view paired
with an index from a different set of parts.

Thread safety:
    Mutations hold the write lock of an RWLock across the registry change
    and the rebuild. Queries take the read lock only to fetch the current
    snapshot; snapshots are never modified once built.

Example:
    >>> workspace = WorkspaceTranslation("my-app")
    >>> workspace.merge_fragment({"en": {"greeting": {"hello": "Hi"}}}, "en.json")
    >>> workspace.merge_fragment({"en": {"greeting": {"bye": "Bye"}}}, "extra/en.json")
    >>> workspace.resolve("greeting.hello", "en")
    'Hi'
    >>> print(workspace.resolve("greeting", "en"))
    hello: Hi
    bye: Bye

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from i18ntree.diagnostics import I18nTreeError
from i18ntree.enums import LoadStatus
from i18ntree.locale_utils import get_locale_display_name
from i18ntree.localization.loading import FragmentLoadResult, LoadSummary
from i18ntree.localization.registry import PartRegistry, TranslationPart, normalize_origin
from i18ntree.localization.summary import WorkspaceSummary
from i18ntree.lookup import DottedKeyIndexGenerator
from i18ntree.runtime.config import WorkspaceConfig
from i18ntree.runtime.resolver import KeyResolver
from i18ntree.runtime.rwlock import RWLock
from i18ntree.tree import copy_tree, merge_trees

if TYPE_CHECKING:
    from collections.abc import Iterable

    from i18ntree.localization.loading import FragmentLoader
    from i18ntree.localization.types import LocaleCode, OriginId, OriginLike, TranslationKey
    from i18ntree.lookup import LookupIndex, LookupIndexGenerator
    from i18ntree.tree import TranslationTree, TranslationValue

__all__ = ["WorkspaceTranslation"]

logger = logging.getLogger(__name__)


class WorkspaceTranslation:
    """Merged translation view of one workspace.

    Attributes:
        workspace: Identifier of the owning workspace (opaque to this class)
    """

    __slots__ = (
        "_config",
        "_generator",
        "_lock",
        "_registry",
        "_snapshot",
        "_workspace",
    )

    def __init__(
        self,
        workspace: str | os.PathLike[str] | None = None,
        *,
        generator: LookupIndexGenerator | None = None,
        config: WorkspaceConfig | None = None,
    ) -> None:
        """Initialize an empty workspace translation.

        Args:
            workspace: Workspace identifier, e.g. the workspace folder path
            generator: Lookup index generator; defaults to DottedKeyIndexGenerator
            config: Workspace configuration; defaults to WorkspaceConfig()
        """
        self._workspace = os.fspath(workspace) if workspace is not None else None
        self._config = config if config is not None else WorkspaceConfig()
        self._generator: LookupIndexGenerator = (
            generator
            if generator is not None
            else DottedKeyIndexGenerator(max_depth=self._config.max_depth)
        )
        self._registry = PartRegistry()
        self._snapshot = KeyResolver({}, {})
        self._lock = RWLock()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def merge_fragment(
        self, fragment: TranslationTree, origin: OriginLike | None = None
    ) -> None:
        """Register a fragment and rebuild the merged view.

        A fragment with an origin replaces the fragment previously merged
        for the same origin; anonymous fragments are appended and never
        replaced.

        Args:
            fragment: Parsed translation tree
            origin: Identifier of the fragment's source (e.g., a file path)

        Raises:
            FragmentError: If fragment is not a mapping with string keys
            DepthLimitExceededError: If fragment nests deeper than max_depth
        """
        origin_id = normalize_origin(origin)
        # Validated copy taken before the lock: a rejected fragment leaves
        # the registry untouched.
        translations = copy_tree(fragment, max_depth=self._config.max_depth, origin=origin_id)

        with self._lock.write():
            previous = self._registry.parts
            self._registry.register(translations, origin_id)
            self._commit(previous)

    def remove_fragment(self, origin: OriginLike) -> bool:
        """Drop the fragment merged for origin and rebuild.

        Returns:
            True if a fragment was removed, False if origin was unknown
        """
        origin_id = normalize_origin(origin)
        if origin_id is None:
            return False

        with self._lock.write():
            previous = self._registry.parts
            if self._registry.remove(origin_id) is None:
                return False
            self._commit(previous)
            return True

    def clear(self) -> None:
        """Drop every fragment and reset the merged view and lookup index."""
        with self._lock.write():
            previous = self._registry.parts
            self._registry.clear()
            self._commit(previous)
        logger.debug("Cleared workspace translation: %s", self._workspace)

    def load_fragments(
        self, loader: FragmentLoader, origins: Iterable[OriginLike]
    ) -> LoadSummary:
        """Load origins through loader and merge every fragment that loaded.

        Load failures are recorded in the returned summary, not raised.
        All loaded fragments are merged in origins order with one rebuild.

        Args:
            loader: Fragment loader
            origins: Origins to load

        Returns:
            LoadSummary with one result per origin
        """
        results: list[FragmentLoadResult] = []
        loaded: list[tuple[TranslationTree, OriginId]] = []

        for origin in origins:
            result, translations = self._load_single_fragment(loader, origin)
            results.append(result)
            if translations is not None:
                loaded.append((translations, result.origin))

        if loaded:
            with self._lock.write():
                previous = self._registry.parts
                for translations, origin_id in loaded:
                    self._registry.register(translations, origin_id)
                self._commit(previous)

        summary = LoadSummary(results=tuple(results))
        logger.info("Loaded fragments for %s: %r", self._workspace, summary)
        return summary

    def _load_single_fragment(
        self, loader: FragmentLoader, origin: OriginLike
    ) -> tuple[FragmentLoadResult, TranslationTree | None]:
        """Load one origin, capturing failures in the result."""
        origin_id = normalize_origin(origin)
        if origin_id is None:
            error = ValueError("Origin cannot be empty")
            return FragmentLoadResult(origin="", status=LoadStatus.ERROR, error=error), None

        source_path = loader.describe_path(origin_id)
        try:
            fragment = loader.load(origin_id)
            translations = copy_tree(
                fragment, max_depth=self._config.max_depth, origin=origin_id
            )
        except FileNotFoundError:
            logger.warning("Translation source not found: %s", source_path)
            result = FragmentLoadResult(
                origin=origin_id, status=LoadStatus.NOT_FOUND, source_path=source_path
            )
            return result, None
        except (OSError, ValueError, I18nTreeError) as e:
            logger.warning("Failed to load translation source %s: %s", source_path, e)
            result = FragmentLoadResult(
                origin=origin_id, status=LoadStatus.ERROR, error=e, source_path=source_path
            )
            return result, None

        result = FragmentLoadResult(
            origin=origin_id, status=LoadStatus.SUCCESS, source_path=source_path
        )
        return result, translations

    def _commit(self, previous: tuple[TranslationPart, ...]) -> None:
        """Rebuild after a registry change; restore the registry if that fails.

        Caller holds the write lock.
        """
        try:
            self._rebuild()
        except Exception:
            self._registry.restore(previous)
            raise

    def _rebuild(self) -> None:
        """Recompute merged view and lookup index from all parts.

        Caller holds the write lock.
        """
        translation = merge_trees(self._registry.trees(), max_depth=self._config.max_depth)
        lookup_index = self._generator.generate(translation)
        self._snapshot = KeyResolver(translation, lookup_index)
        logger.debug(
            "Rebuilt workspace translation %s: %d parts, %d locales, %d keys",
            self._workspace,
            len(self._registry),
            len(translation),
            len(lookup_index),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _current(self) -> KeyResolver:
        with self._lock.read():
            return self._snapshot

    def resolve(self, key: TranslationKey | None, locale: LocaleCode) -> str | None:
        """Resolve key for locale to display text.

        Returns the leaf string at ``<locale>.<key>``; when the key ends at
        a subtree, a "<key>: <value>" listing of the subtree's leaves; None
        when nothing matches or key is empty.

        Example:
            >>> workspace.merge_fragment({"en": {"item": {"one": "1 item", "many": "{n} items"}}})
            >>> workspace.resolve("item", "en")
            'one: 1 item\\nmany: {n} items'
        """
        return self._current().resolve(key, locale)

    def lookup_raw(self, key: str) -> TranslationValue | None:
        """Return the lookup index entry for a full dotted key ('en.greeting.hello')."""
        return self._current().lookup(key)

    def has_locale(self, locale: LocaleCode) -> bool:
        """Check if locale is a top-level key of the merged view."""
        return locale in self._current().translation

    def fallback_locale(self) -> LocaleCode:
        """Return the first locale of the merged view, or the configured default.

        The first locale is the first top-level key in merge order, so it
        depends on which fragment introduced a locale first.
        """
        return next(iter(self._current().translation), self._config.default_locale)

    def keys_starting_with(self, prefix: str) -> list[str]:
        """Return lookup index keys that literally start with prefix.

        Example:
            >>> workspace.keys_starting_with("en.item")
            ['en.item.one', 'en.item.many']
        """
        return self._current().keys_starting_with(prefix)

    def describe(self) -> WorkspaceSummary:
        """Return a consistent diagnostic snapshot of this workspace."""
        with self._lock.read():
            snapshot = self._snapshot
            parts = self._registry.parts

        locales = tuple(snapshot.translation)
        return WorkspaceSummary(
            workspace=self._workspace,
            part_count=len(parts),
            anonymous_part_count=sum(1 for part in parts if part.is_anonymous),
            origins=tuple(part.origin for part in parts if part.origin is not None),
            locales=locales,
            fallback_locale=locales[0] if locales else self._config.default_locale,
            key_count=len(snapshot.lookup_index),
            locale_names={locale: get_locale_display_name(locale) for locale in locales},
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def workspace(self) -> str | None:
        """Workspace identifier given at construction."""
        return self._workspace

    @property
    def config(self) -> WorkspaceConfig:
        """Workspace configuration (read-only)."""
        return self._config

    def snapshot(self) -> KeyResolver:
        """Return the current merged view and lookup index as one resolver.

        The returned KeyResolver is never modified: its translation and
        lookup_index always come from the same rebuild. Use it when both
        are needed together.

        Example:
            >>> snapshot = workspace.snapshot()
            >>> tree, index = snapshot.translation, snapshot.lookup_index
        """
        return self._current()

    @property
    def translation(self) -> TranslationTree:
        """Current merged view. Treat as read-only.

        Each access reads the latest rebuild on its own; use snapshot() to
        get a view and index that belong together.
        """
        return self._current().translation

    @property
    def lookup_index(self) -> LookupIndex:
        """Current lookup index. Treat as read-only.

        Independent of translation; see snapshot().
        """
        return self._current().lookup_index

    @property
    def parts(self) -> tuple[TranslationPart, ...]:
        """Registered parts in merge order."""
        with self._lock.read():
            return self._registry.parts

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> WorkspaceTranslation("app")
            WorkspaceTranslation(workspace='app', parts=0, locales=())
        """
        with self._lock.read():
            part_count = len(self._registry)
            locales = tuple(self._snapshot.translation)
        return (
            f"WorkspaceTranslation(workspace={self._workspace!r}, "
            f"parts={part_count}, locales={locales!r})"
        )
