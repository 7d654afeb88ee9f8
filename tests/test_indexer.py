"""Tests for the navigation and search indexes."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from lesson2html.indexer import (
    build_navigation_index,
    build_search_index,
    count_sections,
    output_path_for,
)
from lesson2html.loader import load_documents
from lesson2html.parser import parse_document
from lesson2html.schemas import Document, SourceDocument


@pytest.fixture
def documents(lesson_dir: Path) -> list[Document]:
    return [parse_document(source) for source in load_documents(lesson_dir)]


def _document(doc_id: str, text: str) -> Document:
    return parse_document(SourceDocument(doc_id=doc_id, path=Path(f"{doc_id}.md"), text=text))


class TestBuildNavigationIndex:
    """Tests for build_navigation_index."""

    def test_preserves_document_order(self, documents: list[Document]) -> None:
        index = build_navigation_index(documents)
        assert [entry.doc_id for entry in index.entries] == ["basics/arrays", "json", "objects"]

    def test_titles_follow_section_order(self, documents: list[Document]) -> None:
        index = build_navigation_index(documents)

        assert index.titles("objects") == [
            "Objects",
            "Creating objects",
            "Reading properties",
            "The this keyword",
        ]
        assert index.titles("json") == ["JSON"]

    def test_headings_carry_depth_and_anchor(self, documents: list[Document]) -> None:
        index = build_navigation_index(documents)
        headings = index.get("objects").headings

        assert [heading.depth for heading in headings] == [0, 1, 1, 2]
        assert headings[-1].anchor == "the-this-keyword"

    def test_output_paths(self, documents: list[Document]) -> None:
        index = build_navigation_index(documents)
        assert index.get("basics/arrays").output_path == "basics/arrays.html"
        assert output_path_for("json") == "json.html"

    def test_navigation_file_name_is_reserved(self) -> None:
        """A lesson named index does not take the navigation page's path."""
        welcome = _document("index", "# Welcome")
        other = _document("index-1", "# Other")

        index = build_navigation_index([welcome, other])

        assert index.get("index").output_path == "index-1.html"
        assert index.get("index-1").output_path == "index-1-1.html"

    def test_output_paths_are_unique_ignoring_case(self) -> None:
        index = build_navigation_index([_document("Guide", "# A"), _document("guide", "# B")])
        assert [entry.output_path for entry in index.entries] == ["Guide.html", "guide-1.html"]

    def test_lookup(self, documents: list[Document]) -> None:
        index = build_navigation_index(documents)

        assert "objects" in index
        assert "missing" not in index
        assert index.get("missing") is None
        with pytest.raises(KeyError):
            index.titles("missing")

    def test_is_deterministic(self, documents: list[Document]) -> None:
        assert build_navigation_index(documents) == build_navigation_index(documents)

    def test_is_read_only(self, documents: list[Document]) -> None:
        index = build_navigation_index(documents)
        with pytest.raises(ValidationError):
            index.entries = ()

    def test_empty_input(self) -> None:
        assert build_navigation_index([]).entries == ()

    def test_document_without_sections(self) -> None:
        document = parse_document(
            SourceDocument(doc_id="empty", path=Path("empty.md"), text="")
        )
        index = build_navigation_index([document])
        assert index.titles("empty") == []


class TestBuildSearchIndex:
    """Tests for build_search_index."""

    def test_one_record_per_section(self, documents: list[Document]) -> None:
        records = build_search_index(documents)
        total = sum(count_sections(document.sections) for document in documents)
        assert len(records) == total

    def test_record_holds_only_own_text(self, documents: list[Document]) -> None:
        records = {
            (record.doc_id, record.anchor): record for record in build_search_index(documents)
        }

        objects = records[("objects", "objects")]
        assert objects.title == "Objects"
        assert objects.text == "Objects group related data. See Arrays."

        creating = records[("objects", "creating-objects")]
        assert creating.text == 'const user = { name: "Ada" };'

        json_record = records[("json", "json")]
        assert json_record.text == "Method Purpose JSON.parse text to value"

    def test_records_carry_page_path(self, documents: list[Document]) -> None:
        records = build_search_index(documents)

        paths = {record.doc_id: record.output_path for record in records}
        assert paths == {
            "basics/arrays": "basics/arrays.html",
            "json": "json.html",
            "objects": "objects.html",
        }

    def test_records_follow_reassigned_page_path(self) -> None:
        documents = [_document("index", "# Welcome\n\nIntro lesson")]
        index = build_navigation_index(documents)

        records = build_search_index(documents, index)

        assert [record.output_path for record in records] == ["index-1.html"]

    def test_list_item_code_is_searchable(self) -> None:
        document = _document("setup", "# Setup\n\n- Run:\n\n  ```bash\n  npm i\n  ```")
        assert build_search_index([document])[0].text == "Run: npm i"
