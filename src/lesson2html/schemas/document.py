"""Document models."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from lesson2html.schemas.blocks import Block
from lesson2html.schemas.sections import SectionNode


class SourceDocument(BaseModel):
    """Raw content unit produced by the loader.

    Attributes:
        doc_id: Relative POSIX path of the file without its extension.
        path: Filesystem path the text was read from.
        text: Raw file content.
    """

    model_config = ConfigDict(frozen=True)

    doc_id: str
    path: Path
    text: str


class Document(BaseModel):
    """A parsed lesson document."""

    model_config = ConfigDict(frozen=True)

    doc_id: str
    path: Path
    title: str
    text: str
    preamble: list[Block] = Field(default_factory=list)
    sections: list[SectionNode] = Field(default_factory=list)

    def walk(self) -> Iterator[SectionNode]:
        """Yield every section in document order."""
        for section in self.sections:
            yield from section.walk()
