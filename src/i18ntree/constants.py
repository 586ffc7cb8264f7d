"""Shared constants for i18ntree.

Centralizes the values used by the tree functions, the lookup index
generator and the workspace translation object. Placing them here avoids
circular imports between the core, runtime and localization packages.

Constants are grouped by domain:
- Depth limits: Recursion protection for merge/flatten/copy
- Key syntax: Separator used by dotted lookup keys
- Fallbacks: Values returned when the merged view has nothing better

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Key syntax
    "KEY_SEPARATOR",
    "SUBTREE_LINE_SEPARATOR",
    # Fallbacks
    "DEFAULT_FALLBACK_LOCALE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# One limit covers every recursive walk over a translation tree:
#
# 1. MERGE (tree.deep_merge): nested mappings merged key by key
# 2. COPY (tree.copy_tree): subtrees detached from their fragment
# 3. FLATTEN (lookup.DottedKeyIndexGenerator): dotted keys built per leaf
#
# Real translation files nest 2-6 levels. Anything past 100 is generated
# or hostile input and would only end in RecursionError.
#
# ============================================================================

MAX_DEPTH: int = 100

# ============================================================================
# KEY SYNTAX
# ============================================================================

# Segment separator of lookup keys ("en.greeting.hello").
KEY_SEPARATOR: str = "."

# Joins "<key>: <value>" lines when a key resolves to a subtree.
SUBTREE_LINE_SEPARATOR: str = "\n"

# ============================================================================
# FALLBACKS
# ============================================================================

# Returned by fallback_locale() while the merged view is empty.
DEFAULT_FALLBACK_LOCALE: str = "en"
