"""Enumerations for i18ntree type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of loading one translation fragment.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Fragment loaded and merged into the workspace view"""

    NOT_FOUND = "not_found"
    """Source does not exist (deleted between discovery and load)"""

    ERROR = "error"
    """Source exists but could not be read or decoded"""


__all__ = [
    "LoadStatus",
]
