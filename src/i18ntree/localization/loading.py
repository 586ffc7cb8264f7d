"""Fragment loading infrastructure for WorkspaceTranslation.

Parsing translation sources is the job of the caller's loader; this module
defines the protocol such a loader follows, a JSON file implementation with
path-traversal protection, and the result records that load_fragments()
collects instead of raising.

Components:
    FragmentLoader - Protocol for loading translation fragments (structural typing)
    PathFragmentLoader - JSON files below a fixed root directory
    FragmentLoadResult - Immutable result of a single load attempt
    LoadSummary - Immutable aggregate of load results

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from i18ntree.diagnostics import FragmentError
from i18ntree.enums import LoadStatus

if TYPE_CHECKING:
    from i18ntree.localization.types import OriginId
    from i18ntree.tree import TranslationTree

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "FragmentLoader",
    # Concrete loader
    "PathFragmentLoader",
    # Load result types
    "FragmentLoadResult",
    "LoadSummary",
]


class FragmentLoader(Protocol):
    """Protocol for loading one translation fragment per origin.

    Implementations return the parsed tree for an origin. The optional
    describe_path() gives a human-readable location for diagnostics.

    Example:
        >>> class YamlLoader:
        ...     def load(self, origin: str) -> dict:
        ...         return yaml.safe_load(Path(origin).read_text(encoding="utf-8"))
        ...     def describe_path(self, origin: str) -> str:
        ...         return origin
        ...
        >>> workspace.load_fragments(YamlLoader(), ["locales/en.yml"])
    """

    def load(self, origin: OriginId) -> TranslationTree:
        """Load and parse the fragment identified by origin.

        Raises:
            FileNotFoundError: If the source does not exist
            OSError: If the source cannot be read
            ValueError: If the source cannot be decoded
        """
        ...

    def describe_path(self, origin: OriginId) -> str:
        """Return human-readable path for diagnostics (default: origin)."""
        return origin


@dataclass(frozen=True, slots=True)
class PathFragmentLoader:
    """JSON fragment loader rooted at a fixed directory.

    Origins are paths relative to root_dir. Object key order of the JSON
    document is preserved, which keeps fallback_locale() deterministic.

    Security:
        Absolute origins, ".." segments and paths resolving outside root_dir
        are rejected with ValueError.

    Example:
        >>> loader = PathFragmentLoader("locales")
        >>> loader.load("en.json")
        # Loads from: locales/en.json

    Attributes:
        root_dir: Directory all origins are resolved against
        encoding: Text encoding of the files (default: "utf-8")
    """

    root_dir: str | Path
    encoding: str = "utf-8"
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache the resolved root directory."""
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    @staticmethod
    def _validate_origin(origin: OriginId) -> None:
        """Reject origins that could escape the root directory.

        Raises:
            ValueError: If origin is empty, absolute, or contains ".."
        """
        if not origin:
            msg = "Origin cannot be empty"
            raise ValueError(msg)
        path = Path(origin)
        if path.is_absolute() or origin.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in origin: '{origin}'"
            raise ValueError(msg)
        if ".." in path.parts:
            msg = f"Path traversal sequences not allowed in origin: '{origin}'"
            raise ValueError(msg)

    def describe_path(self, origin: OriginId) -> str:
        """Return the path the origin is read from."""
        return str(Path(self.root_dir) / origin)

    def load(self, origin: OriginId) -> dict[str, Any]:
        """Read and decode the JSON document for origin.

        Raises:
            ValueError: If origin escapes root_dir or the file is not valid JSON
                (including documents nested past the decoder recursion limit)
            FileNotFoundError: If the file doesn't exist
            FragmentError: If the document root is not a JSON object
        """
        self._validate_origin(origin)
        full_path = (self._resolved_root / origin).resolve()
        if not full_path.is_relative_to(self._resolved_root):
            msg = f"Path traversal detected: resolved path escapes root directory: '{origin}'"
            raise ValueError(msg)

        text = full_path.read_text(encoding=self.encoding)
        try:
            document = json.loads(text, object_pairs_hook=dict)
        except RecursionError as e:
            msg = f"Translation document nests too deeply to decode: '{origin}'"
            raise ValueError(msg) from e
        if not isinstance(document, dict):
            msg = f"Translation document root must be an object, got {type(document).__name__}"
            raise FragmentError(msg, origin=origin)
        return document


@dataclass(frozen=True, slots=True)
class FragmentLoadResult:
    """Result of loading a single translation fragment.

    Attributes:
        origin: Origin identifier that was loaded
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
        source_path: Human-readable path to the source (if available)
    """

    origin: OriginId
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None

    @property
    def is_success(self) -> bool:
        """Check if fragment loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the source was not found."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if loading failed with an error."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of fragment load results.

    Example:
        >>> summary = workspace.load_fragments(loader, ["en.json", "de.json"])
        >>> if summary.has_errors:
        ...     for result in summary.get_errors():
        ...         print(f"Failed: {result.source_path}: {result.error}")
    """

    results: tuple[FragmentLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of sources not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    def get_errors(self) -> tuple[FragmentLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[FragmentLoadResult, ...]:
        """Get all results where the source was not found."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[FragmentLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    @property
    def has_errors(self) -> bool:
        """Check if any fragment failed to load with an error."""
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """True if every attempted fragment was found and loaded."""
        return self.errors == 0 and self.not_found == 0
