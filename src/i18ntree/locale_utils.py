"""Locale utilities for diagnostic display.

Top-level keys of a translation tree are locale codes by convention, but the
tree itself does not enforce it. These helpers map such keys to Babel
locales for display without ever failing on a key that is not a locale.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from babel import Locale, UnknownLocaleError

if TYPE_CHECKING:
    from i18ntree.localization.types import LocaleCode

__all__ = [
    "get_babel_locale",
    "get_locale_display_name",
    "normalize_locale",
]

logger = logging.getLogger(__name__)

# Language in which locale display names are rendered.
_DISPLAY_LOCALE = "en"

# Characters that start a POSIX encoding or modifier suffix ("de_DE.UTF-8", "sr@latin").
_POSIX_SUFFIX_MARKERS = (".", "@")


def normalize_locale(locale_code: LocaleCode) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: LocaleCode) -> Locale | None:
    """Get a Babel Locale for a tree key, or None if it is not a locale.

    Cached: workspaces ask for the same handful of locales on every
    describe() call.

    Example:
        >>> get_babel_locale("de-AT").territory
        'AT'
        >>> get_babel_locale("greeting") is None
        True
    """
    # Locale.parse drops ".encoding" and "@modifier" suffixes: "en.json" would parse as "en".
    if any(marker in locale_code for marker in _POSIX_SUFFIX_MARKERS):
        logger.debug("Not a known locale: %r (encoding or modifier suffix)", locale_code)
        return None
    try:
        return Locale.parse(normalize_locale(locale_code))
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug("Not a known locale: %r (%s)", locale_code, e)
        return None


def get_locale_display_name(locale_code: LocaleCode) -> str | None:
    """Return the English display name of locale_code, or None.

    Example:
        >>> get_locale_display_name("de")
        'German'
        >>> get_locale_display_name("pt-BR")
        'Portuguese (Brazil)'
    """
    locale = get_babel_locale(locale_code)
    if locale is None:
        return None
    return locale.get_display_name(_DISPLAY_LOCALE)
