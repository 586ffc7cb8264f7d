"""Hypothesis strategies for i18ntree property-based testing.

Usage:
    from tests.strategies import translation_trees, locale_trees
"""

from .trees import (
    LOCALE_POOL,
    disjoint_fragment_pairs,
    key_segments,
    leaf_values,
    locale_trees,
    subtrees,
    translation_trees,
)

__all__ = [
    "LOCALE_POOL",
    "disjoint_fragment_pairs",
    "key_segments",
    "leaf_values",
    "locale_trees",
    "subtrees",
    "translation_trees",
]
