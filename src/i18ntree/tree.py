"""Translation tree type and pure tree functions.

A translation tree is a nested mapping from string keys to either a leaf
value (normally a string) or another translation tree. Top-level keys are
locales by convention:

    {"en": {"greeting": {"hello": "Hi", "bye": "Bye"}}}

Functions here never mutate their inputs. Every tree they return is built
from fresh dicts, so the merged view handed to readers never shares a node
with a fragment still held by a loader.

Merge rule (non-destructive recursive merge):
    For each key of the overriding tree, two mappings merge key by key;
    any other combination lets the overriding value win (leaf over leaf,
    leaf over subtree, subtree over leaf). Existing keys keep their
    position, new keys are appended, so iteration order is deterministic.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeIs

from i18ntree.constants import MAX_DEPTH
from i18ntree.core import DepthGuard
from i18ntree.diagnostics import FragmentError

__all__ = [
    "TranslationTree",
    "TranslationValue",
    "copy_tree",
    "deep_merge",
    "is_subtree",
    "merge_trees",
]

type TranslationValue = str | TranslationTree
"""Leaf string or nested subtree."""

type TranslationTree = Mapping[str, TranslationValue]
"""Nested key hierarchy; top-level keys are locale codes."""


def is_subtree(value: object) -> TypeIs[Mapping[str, Any]]:
    """Return True if value is a nested subtree rather than a leaf."""
    return isinstance(value, Mapping)


def copy_tree(
    tree: TranslationTree,
    *,
    max_depth: int = MAX_DEPTH,
    origin: str | None = None,
) -> dict[str, Any]:
    """Detach a tree from its source, validating its shape on the way.

    Args:
        tree: Tree to copy
        max_depth: Maximum nesting depth accepted
        origin: Origin identifier, attached to raised errors

    Returns:
        Deep copy made of plain dicts; leaves are shared (immutable strings)

    Raises:
        FragmentError: If tree is not a mapping or a key is not a string
        DepthLimitExceededError: If tree nests deeper than max_depth
    """
    if not is_subtree(tree):
        msg = f"Translation fragment must be a mapping, got {type(tree).__name__}"
        raise FragmentError(msg, origin=origin)
    return _copy_node(tree, DepthGuard(max_depth=max_depth), origin)


def deep_merge(
    base: TranslationTree,
    override: TranslationTree,
    *,
    max_depth: int = MAX_DEPTH,
) -> dict[str, Any]:
    """Merge two trees, override winning on conflicting keys.

    Args:
        base: Accumulated tree
        override: Tree whose values take precedence

    Returns:
        New merged tree; neither argument is modified

    Example:
        >>> deep_merge({"en": {"a": "1"}}, {"en": {"b": "2"}})
        {'en': {'a': '1', 'b': '2'}}
        >>> deep_merge({"en": {"a": {"x": "1"}}}, {"en": {"a": "flat"}})
        {'en': {'a': 'flat'}}
    """
    return merge_trees((base, override), max_depth=max_depth)


def merge_trees(
    trees: Iterable[TranslationTree],
    *,
    max_depth: int = MAX_DEPTH,
) -> dict[str, Any]:
    """Fold deep_merge over trees in order, starting from an empty tree.

    Equivalent to ``functools.reduce(deep_merge, trees, {})`` but builds a
    single accumulator instead of copying it once per tree.

    Args:
        trees: Trees in precedence order (later wins)
        max_depth: Maximum nesting depth accepted

    Returns:
        New merged tree

    Raises:
        DepthLimitExceededError: If any tree nests deeper than max_depth
    """
    guard = DepthGuard(max_depth=max_depth)
    merged: dict[str, Any] = {}
    for tree in trees:
        _merge_into(merged, tree, guard)
    return merged


def _merge_into(
    target: dict[str, Any], source: Mapping[str, Any], guard: DepthGuard
) -> None:
    """Merge source into target in place (target is always a private copy)."""
    with guard:
        for key, value in source.items():
            if is_subtree(value):
                current = target.get(key)
                if isinstance(current, dict):
                    _merge_into(current, value, guard)
                else:
                    target[key] = _copy_node(value, guard, None)
            else:
                target[key] = value


def _copy_node(
    node: Mapping[str, Any], guard: DepthGuard, origin: str | None
) -> dict[str, Any]:
    with guard:
        copied: dict[str, Any] = {}
        for key, value in node.items():
            if not isinstance(key, str):
                msg = f"Translation keys must be strings, got {type(key).__name__}: {key!r}"
                raise FragmentError(msg, origin=origin)
            copied[key] = _copy_node(value, guard, origin) if is_subtree(value) else value
        return copied
