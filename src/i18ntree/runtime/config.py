"""Configuration for WorkspaceTranslation.

Provides a single frozen dataclass holding every tunable of a workspace
translation object, so the constructor takes one typed object instead of a
growing list of keyword arguments.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from i18ntree.constants import DEFAULT_FALLBACK_LOCALE, MAX_DEPTH

__all__ = ["WorkspaceConfig"]


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    """Immutable configuration for a workspace translation object.

    All fields have defaults; ``WorkspaceConfig()`` is a usable configuration.

    Attributes:
        default_locale: Returned by fallback_locale() while the merged view
            is empty (default: "en").
        max_depth: Deepest fragment nesting accepted by merge_fragment and
            walked by the default lookup index generator (default: 100).

    Example:
        >>> config = WorkspaceConfig(default_locale="de")
        >>> workspace = WorkspaceTranslation("app", config=config)
        >>> workspace.fallback_locale()
        'de'
    """

    default_locale: str = DEFAULT_FALLBACK_LOCALE
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If default_locale is blank or max_depth is not positive.
        """
        if not self.default_locale.strip():
            msg = "default_locale must not be blank"
            raise ValueError(msg)
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
