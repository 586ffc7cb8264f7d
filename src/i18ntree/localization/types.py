"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating WorkspaceTranslation call sites.

Python 3.13+. Zero external dependencies.
"""

import os

__all__ = [
    "LocaleCode",
    "OriginId",
    "OriginLike",
    "TranslationKey",
]

type LocaleCode = str
"""Top-level key of a translation tree (e.g., 'en', 'de', 'pt-BR')."""

type TranslationKey = str
"""Dotted lookup key without locale prefix (e.g., 'greeting.hello')."""

type OriginId = str
"""Normalized identifier of the source a fragment came from (e.g., 'locales/en.json')."""

type OriginLike = str | os.PathLike[str]
"""Anything accepted as an origin before normalization."""
