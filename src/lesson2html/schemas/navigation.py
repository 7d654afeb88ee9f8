"""Navigation and search index models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NavHeading(BaseModel):
    """One heading of a document as listed in the navigation index."""

    model_config = ConfigDict(frozen=True)

    title: str
    level: int
    anchor: str
    depth: int


class NavEntry(BaseModel):
    """Navigation data for a single document."""

    model_config = ConfigDict(frozen=True)

    doc_id: str
    title: str
    output_path: str
    headings: tuple[NavHeading, ...] = ()


class NavigationIndex(BaseModel):
    """Cross-document table of contents, read-only once built."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[NavEntry, ...] = Field(default_factory=tuple)

    def __contains__(self, doc_id: object) -> bool:
        return any(entry.doc_id == doc_id for entry in self.entries)

    def get(self, doc_id: str) -> NavEntry | None:
        for entry in self.entries:
            if entry.doc_id == doc_id:
                return entry
        return None

    def titles(self, doc_id: str) -> list[str]:
        """Return the ordered section titles of a document."""
        entry = self.get(doc_id)
        if entry is None:
            raise KeyError(doc_id)
        return [heading.title for heading in entry.headings]


class SearchRecord(BaseModel):
    """Searchable text for one section.

    ``output_path`` is the page holding the section, relative to the site
    root; link to ``f"{output_path}#{anchor}"``.
    """

    doc_id: str
    output_path: str
    anchor: str
    title: str
    text: str
