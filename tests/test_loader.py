"""Tests for the lesson loader."""

from __future__ import annotations

import types
from pathlib import Path
from unittest.mock import patch

import pytest

from lesson2html.exceptions import NotFoundError, ReadError
from lesson2html.loader import discover_files, document_id, load_documents


class TestLoadDocuments:
    """Tests for load_documents."""

    def test_raises_when_root_missing(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError, match="not found"):
            list(load_documents(tmp_path / "missing"))

    def test_raises_when_root_is_file(self, tmp_path: Path) -> None:
        path = tmp_path / "lesson.md"
        path.write_text("# Lesson")

        with pytest.raises(NotFoundError, match="not a directory"):
            list(load_documents(path))

    def test_is_lazy(self, lesson_dir: Path) -> None:
        """Nothing is read until the sequence is consumed."""
        assert isinstance(load_documents(lesson_dir), types.GeneratorType)

    def test_enumerates_in_path_order(self, lesson_dir: Path) -> None:
        ids = [source.doc_id for source in load_documents(lesson_dir)]
        assert ids == ["basics/arrays", "json", "objects"]

    def test_skips_hidden_and_foreign_files(self, tmp_path: Path) -> None:
        (tmp_path / ".hidden").mkdir()
        (tmp_path / ".hidden" / "secret.md").write_text("# Secret")
        (tmp_path / ".draft.md").write_text("# Draft")
        (tmp_path / "notes.txt").write_text("notes")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "c.markdown").write_text("# C")
        (tmp_path / "A.MD").write_text("# A")

        ids = [source.doc_id for source in load_documents(tmp_path)]

        assert ids == ["A", "sub/c"]

    def test_shared_stem_keeps_suffix(self, tmp_path: Path) -> None:
        """Files differing only in suffix get distinct ids."""
        (tmp_path / "a.md").write_text("# From md")
        (tmp_path / "a.markdown").write_text("# From markdown")
        (tmp_path / "b.md").write_text("# B")

        sources = {source.doc_id: source.text for source in load_documents(tmp_path)}

        assert list(sources) == ["a.markdown", "a.md", "b"]
        assert sources["a.md"] == "# From md"
        assert sources["a.markdown"] == "# From markdown"

    def test_reads_text(self, lesson_dir: Path) -> None:
        sources = {source.doc_id: source for source in load_documents(lesson_dir)}

        assert sources["json"].text.startswith("# JSON")
        assert sources["json"].path == lesson_dir / "json.md"

    def test_each_call_rereads_storage(self, tmp_path: Path) -> None:
        path = tmp_path / "lesson.md"
        path.write_text("# First")
        first = [source.text for source in load_documents(tmp_path)]

        path.write_text("# Second")
        second = [source.text for source in load_documents(tmp_path)]

        assert first == ["# First"]
        assert second == ["# Second"]

    def test_empty_file(self, tmp_path: Path) -> None:
        (tmp_path / "empty.md").write_bytes(b"")
        assert [source.text for source in load_documents(tmp_path)] == [""]

    def test_invalid_utf8_raises_read_error(self, tmp_path: Path) -> None:
        (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(ReadError, match="decode"):
            list(load_documents(tmp_path))

    def test_os_error_raises_read_error(self, tmp_path: Path) -> None:
        (tmp_path / "locked.md").write_text("# Locked")

        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with pytest.raises(ReadError, match="denied"):
                list(load_documents(tmp_path))


class TestHelpers:
    """Tests for discover_files and document_id."""

    def test_document_id_strips_suffix(self, tmp_path: Path) -> None:
        assert document_id(tmp_path / "basics" / "arrays.md", tmp_path) == "basics/arrays"

    def test_discover_files_respects_extensions(self, tmp_path: Path) -> None:
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "b.txt").write_text("b")

        files = discover_files(tmp_path, extensions=(".txt",))

        assert files == [tmp_path / "b.txt"]
