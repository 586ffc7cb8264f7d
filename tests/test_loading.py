"""Tests for localization/loading.py and WorkspaceTranslation.load_fragments.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from i18ntree import WorkspaceTranslation
from i18ntree.diagnostics import FragmentError
from i18ntree.enums import LoadStatus
from i18ntree.localization import (
    FragmentLoader,
    FragmentLoadResult,
    LoadSummary,
    PathFragmentLoader,
)


def _write(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


class DictLoader(FragmentLoader):
    """In-memory loader keyed by origin."""

    def __init__(self, fragments: dict[str, Any]) -> None:
        self.fragments = fragments

    def load(self, origin: str) -> Any:
        if origin not in self.fragments:
            raise FileNotFoundError(origin)
        return self.fragments[origin]


class TestPathFragmentLoader:
    """JSON loading below a root directory."""

    def test_loads_json_object(self, tmp_path: Path) -> None:
        """Document is returned as parsed dict."""
        _write(tmp_path / "en.json", {"en": {"hello": "Hi"}})

        loader = PathFragmentLoader(tmp_path)

        assert loader.load("en.json") == {"en": {"hello": "Hi"}}

    def test_preserves_key_order(self, tmp_path: Path) -> None:
        """Object key order of the file is kept."""
        (tmp_path / "all.json").write_text('{"de": {}, "en": {}, "fr": {}}', encoding="utf-8")

        document = PathFragmentLoader(tmp_path).load("all.json")

        assert list(document) == ["de", "en", "fr"]

    def test_nested_origin(self, tmp_path: Path) -> None:
        """Origins may point into subdirectories."""
        _write(tmp_path / "locales" / "de.json", {"de": {"a": "b"}})

        assert PathFragmentLoader(tmp_path).load("locales/de.json") == {"de": {"a": "b"}}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            PathFragmentLoader(tmp_path).load("missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed JSON raises ValueError."""
        (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Expecting"):
            PathFragmentLoader(tmp_path).load("bad.json")

    def test_deeply_nested_json(self, tmp_path: Path) -> None:
        """Nesting past the decoder recursion limit raises ValueError."""
        depth = 100_000
        (tmp_path / "deep.json").write_text(
            '{"en": ' + "[" * depth + "]" * depth + "}", encoding="utf-8"
        )

        with pytest.raises(ValueError, match="nests too deeply") as exc_info:
            PathFragmentLoader(tmp_path).load("deep.json")

        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_non_object_root(self, tmp_path: Path) -> None:
        """JSON arrays at the root are rejected."""
        (tmp_path / "list.json").write_text('["en"]', encoding="utf-8")

        with pytest.raises(FragmentError, match="must be an object") as exc_info:
            PathFragmentLoader(tmp_path).load("list.json")

        assert exc_info.value.origin == "list.json"

    @pytest.mark.parametrize(
        "origin",
        ["../secret.json", "locales/../../secret.json", "/etc/passwd", "\\windows.json", ""],
    )
    def test_rejects_unsafe_origins(self, tmp_path: Path, origin: str) -> None:
        """Traversal, absolute and empty origins raise ValueError."""
        with pytest.raises(ValueError):
            PathFragmentLoader(tmp_path).load(origin)

    def test_rejects_symlink_escape(self, tmp_path: Path) -> None:
        """Resolved paths outside the root are rejected."""
        outside = tmp_path / "outside"
        _write(outside / "en.json", {"en": {}})
        root = tmp_path / "root"
        root.mkdir()
        (root / "link").symlink_to(outside, target_is_directory=True)

        with pytest.raises(ValueError, match="escapes root"):
            PathFragmentLoader(root).load("link/en.json")

    def test_describe_path(self, tmp_path: Path) -> None:
        """describe_path joins root and origin."""
        loader = PathFragmentLoader(tmp_path)

        assert loader.describe_path("en.json") == str(tmp_path / "en.json")


class TestFragmentLoaderProtocol:
    """Protocol default behaviour."""

    def test_default_describe_path_is_origin(self) -> None:
        """Loaders without their own describe_path report the origin."""
        assert DictLoader({}).describe_path("en.json") == "en.json"


class TestLoadSummary:
    """LoadSummary aggregation."""

    def test_counts_and_filters(self) -> None:
        """Counts and getters partition the results by status."""
        ok = FragmentLoadResult(origin="a.json", status=LoadStatus.SUCCESS)
        missing = FragmentLoadResult(origin="b.json", status=LoadStatus.NOT_FOUND)
        failed = FragmentLoadResult(
            origin="c.json", status=LoadStatus.ERROR, error=ValueError("bad")
        )
        summary = LoadSummary(results=(ok, missing, failed))

        assert summary.total_attempted == 3
        assert (summary.successful, summary.not_found, summary.errors) == (1, 1, 1)
        assert summary.get_successful() == (ok,)
        assert summary.get_not_found() == (missing,)
        assert summary.get_errors() == (failed,)
        assert summary.has_errors
        assert not summary.all_successful
        assert repr(summary) == "LoadSummary(total=3, ok=1, not_found=1, errors=1)"

    def test_empty_summary_is_successful(self) -> None:
        """No attempts means nothing failed."""
        summary = LoadSummary(results=())

        assert summary.all_successful
        assert not summary.has_errors


class TestLoadFragments:
    """WorkspaceTranslation.load_fragments."""

    def test_loads_and_merges_in_order(self, tmp_path: Path) -> None:
        """Every loaded file is merged; origins order decides precedence."""
        _write(tmp_path / "base.json", {"en": {"title": "Base", "hello": "Hi"}})
        _write(tmp_path / "override.json", {"en": {"title": "Override"}, "de": {"hello": "Hallo"}})
        workspace = WorkspaceTranslation(tmp_path)

        summary = workspace.load_fragments(
            PathFragmentLoader(tmp_path), ["base.json", "override.json"]
        )

        assert summary.all_successful
        assert workspace.resolve("title", "en") == "Override"
        assert workspace.resolve("hello", "de") == "Hallo"
        assert [part.origin for part in workspace.parts] == ["base.json", "override.json"]

    def test_failures_recorded_not_raised(self, tmp_path: Path) -> None:
        """Missing and broken sources are reported; good ones still merge."""
        _write(tmp_path / "en.json", {"en": {"hello": "Hi"}})
        (tmp_path / "bad.json").write_text("{", encoding="utf-8")
        workspace = WorkspaceTranslation()

        summary = workspace.load_fragments(
            PathFragmentLoader(tmp_path), ["en.json", "missing.json", "bad.json", "../x.json"]
        )

        assert [r.status for r in summary.results] == [
            LoadStatus.SUCCESS,
            LoadStatus.NOT_FOUND,
            LoadStatus.ERROR,
            LoadStatus.ERROR,
        ]
        assert summary.results[1].source_path == str(tmp_path / "missing.json")
        assert isinstance(summary.results[2].error, ValueError)
        assert workspace.resolve("hello", "en") == "Hi"
        assert len(workspace.parts) == 1

    def test_deeply_nested_file_does_not_abort_batch(self, tmp_path: Path) -> None:
        """A document too deep to decode is one ERROR; the rest still merges."""
        depth = 100_000
        (tmp_path / "deep.json").write_text(
            '{"en": ' + "[" * depth + "]" * depth + "}", encoding="utf-8"
        )
        _write(tmp_path / "en.json", {"en": {"hello": "Hi"}})
        workspace = WorkspaceTranslation()

        summary = workspace.load_fragments(PathFragmentLoader(tmp_path), ["deep.json", "en.json"])

        assert [r.status for r in summary.results] == [LoadStatus.ERROR, LoadStatus.SUCCESS]
        assert isinstance(summary.results[0].error, ValueError)
        assert [part.origin for part in workspace.parts] == ["en.json"]
        assert workspace.resolve("hello", "en") == "Hi"

    def test_empty_origin_is_error(self) -> None:
        """Empty origins are recorded as errors without calling the loader."""
        workspace = WorkspaceTranslation()

        summary = workspace.load_fragments(DictLoader({}), [""])

        assert summary.results[0].origin == ""
        assert summary.results[0].status == LoadStatus.ERROR

    def test_invalid_fragment_is_error(self) -> None:
        """A loader returning a non-tree yields an ERROR result."""
        workspace = WorkspaceTranslation()

        summary = workspace.load_fragments(DictLoader({"x": ["not", "a", "tree"]}), ["x"])

        assert summary.results[0].is_error
        assert isinstance(summary.results[0].error, FragmentError)
        assert workspace.parts == ()

    def test_reload_replaces_by_origin(self) -> None:
        """Loading an origin again replaces its earlier fragment."""
        fragments: dict[str, Any] = {"en.json": {"en": {"x": "1", "y": "2"}}}
        loader = DictLoader(fragments)
        workspace = WorkspaceTranslation()
        workspace.load_fragments(loader, ["en.json"])

        fragments["en.json"] = {"en": {"x": "3"}}
        workspace.load_fragments(loader, ["./en.json"])

        assert workspace.translation == {"en": {"x": "3"}}
        assert len(workspace.parts) == 1

    def test_nothing_loaded_leaves_workspace_alone(
        self, item_workspace: WorkspaceTranslation
    ) -> None:
        """A load with no successes does not touch the merged view."""
        before = item_workspace.translation

        summary = item_workspace.load_fragments(DictLoader({}), ["missing.json"])

        assert summary.not_found == 1
        assert item_workspace.translation is before

    def test_logs_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        """Load outcome is logged at INFO, failures at WARNING."""
        workspace = WorkspaceTranslation("app")

        with caplog.at_level(logging.INFO, logger="i18ntree"):
            workspace.load_fragments(DictLoader({}), ["missing.json"])

        levels = {record.levelno for record in caplog.records}
        assert logging.WARNING in levels
        assert any("Loaded fragments for app" in r.getMessage() for r in caplog.records)
