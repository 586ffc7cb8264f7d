"""Lookup index generation.

A lookup index is the flat view of a merged translation tree: one entry per
leaf, keyed by the dotted path from the root (locale first).

    {"en": {"item": {"one": "1 item"}}}  ->  {"en.item.one": "1 item"}

The workspace treats the generator as a pluggable collaborator described by
the LookupIndexGenerator protocol. DottedKeyIndexGenerator is the default.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from i18ntree.constants import KEY_SEPARATOR, MAX_DEPTH
from i18ntree.core import DepthGuard
from i18ntree.tree import is_subtree

if TYPE_CHECKING:
    from collections.abc import Mapping

    from i18ntree.tree import TranslationTree, TranslationValue

__all__ = [
    "DottedKeyIndexGenerator",
    "LookupIndex",
    "LookupIndexGenerator",
    "generate_lookup_index",
]

type LookupIndex = dict[str, TranslationValue]
"""Flat mapping from dotted key ('en.greeting.hello') to leaf value."""


class LookupIndexGenerator(Protocol):
    """Protocol for turning a merged tree into a lookup index.

    Implementations must be pure: the same tree always yields the same
    index, and the tree is never modified.

    Example:
        >>> class UpperKeys:
        ...     def generate(self, tree):
        ...         return {k.upper(): v for k, v in generate_lookup_index(tree).items()}
        ...
        >>> workspace = WorkspaceTranslation(generator=UpperKeys())
    """

    def generate(self, tree: TranslationTree) -> LookupIndex:
        """Build the lookup index for tree.

        Args:
            tree: Merged translation tree

        Returns:
            Flat mapping from dotted key to leaf value
        """
        ...


@dataclass(frozen=True, slots=True)
class DottedKeyIndexGenerator:
    """Depth-first flattener joining path segments with '.'.

    Empty segments are dropped, so a tree key "" contributes nothing to
    the path. Leaves are emitted in tree iteration order; subtrees are
    never emitted as values.

    Attributes:
        max_depth: Maximum nesting depth walked before raising
    """

    max_depth: int = MAX_DEPTH

    def generate(self, tree: TranslationTree) -> LookupIndex:
        """Flatten tree into a dotted-key index.

        Raises:
            DepthLimitExceededError: If tree nests deeper than max_depth
        """
        index: LookupIndex = {}
        self._flatten(tree, (), index, DepthGuard(max_depth=self.max_depth))
        return index

    def _flatten(
        self,
        node: Mapping[str, Any],
        path: tuple[str, ...],
        index: LookupIndex,
        guard: DepthGuard,
    ) -> None:
        with guard:
            for key, value in node.items():
                key_path = (*path, key) if key else path
                if is_subtree(value):
                    self._flatten(value, key_path, index, guard)
                else:
                    index[KEY_SEPARATOR.join(key_path)] = value


def generate_lookup_index(tree: TranslationTree) -> LookupIndex:
    """Flatten tree with the default generator.

    Example:
        >>> generate_lookup_index({"en": {"item": {"one": "1 item"}}})
        {'en.item.one': '1 item'}
    """
    return DottedKeyIndexGenerator().generate(tree)
