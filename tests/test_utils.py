"""Unit tests for utility functions (codeplay.utils).

Tests cover:
- write_json / save_json, including atomic replacement
- ensure_dir
- temporary_output_name / temporary_output_file cleanup on every exit path
- setup_logging idempotence
- Rich output helpers
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

from codeplay.utils import (
    ensure_dir,
    print_error,
    print_success,
    print_summary_table,
    save_json,
    setup_logging,
    temporary_output_file,
    temporary_output_name,
    write_json,
)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


class TestJsonIO:
    @pytest.mark.unit
    def test_write_creates_parents(self, tmp_path: Path):
        path = tmp_path / "deep" / "data.json"
        write_json({"a": 1, "ü": "ñ"}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"a": 1, "ü": "ñ"}

    @pytest.mark.unit
    def test_write_replaces_existing_without_leftovers(self, tmp_path: Path):
        path = tmp_path / "data.json"
        write_json({"items": list(range(100))}, path)
        write_json({"items": [1]}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"items": [1]}
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    @pytest.mark.unit
    def test_failed_write_keeps_previous_file(self, tmp_path: Path):
        path = tmp_path / "data.json"
        write_json({"v": 1}, path)
        with patch("codeplay.utils.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                write_json({"v": 2}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"v": 1}
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_save_json(self, tmp_path: Path):
        path = tmp_path / "async" / "data.json"
        await save_json([{"x": 1}], path)
        assert json.loads(path.read_text(encoding="utf-8")) == [{"x": 1}]


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestEnsureDir:
    @pytest.mark.unit
    def test_creates_and_resolves(self, tmp_path: Path):
        result = ensure_dir(tmp_path / "a" / "b")
        assert result.is_dir()
        assert result.is_absolute()

    @pytest.mark.unit
    def test_existing_is_fine(self, tmp_path: Path):
        assert ensure_dir(tmp_path) == tmp_path.resolve()


class TestTemporaryOutputFile:
    @pytest.mark.unit
    def test_name_contains_prefix_and_is_unique(self):
        first = temporary_output_name("REACTJS")
        second = temporary_output_name("REACTJS")
        assert first.startswith("REACTJS-")
        assert first.endswith(".json")
        assert first != second

    @pytest.mark.unit
    def test_removed_after_success(self, tmp_path: Path):
        with temporary_output_file(tmp_path / "out", "VUE") as path:
            path.write_text("{}", encoding="utf-8")
            assert path.exists()
        assert not path.exists()

    @pytest.mark.unit
    def test_removed_after_exception(self, tmp_path: Path):
        with pytest.raises(RuntimeError):
            with temporary_output_file(tmp_path, "VUE") as path:
                path.write_text("{}", encoding="utf-8")
                raise RuntimeError("boom")
        assert not path.exists()

    @pytest.mark.unit
    def test_never_created_is_fine(self, tmp_path: Path):
        with temporary_output_file(tmp_path, "VUE") as path:
            pass
        assert not path.exists()

    @pytest.mark.unit
    def test_unlink_failure_logged(self, tmp_path: Path, caplog):
        with caplog.at_level(logging.WARNING, logger="codeplay.utils"):
            with patch("pathlib.Path.unlink", side_effect=PermissionError("denied")):
                with temporary_output_file(tmp_path, "VUE"):
                    pass
        assert "Failed to clean up temporary file" in caplog.text


# ---------------------------------------------------------------------------
# Logging & Rich output
# ---------------------------------------------------------------------------


class TestSetupLogging:
    @pytest.mark.unit
    def test_idempotent(self):
        logger = logging.getLogger("codeplay")
        saved = (list(logger.handlers), logger.level, logger.propagate)
        try:
            setup_logging("debug")
            setup_logging("debug")
            rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
            assert len(rich_handlers) == 1
            assert logger.level == logging.DEBUG
        finally:
            logger.handlers[:] = saved[0]
            logger.setLevel(saved[1])
            logger.propagate = saved[2]


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_helpers(self, capsys):
        print_success("done")
        print_error("broken")
        print_summary_table({"Files": "3"}, title="Export")
        out = capsys.readouterr().out
        for text in ("done", "broken", "Files", "Export"):
            assert text in out
