"""Section tree models."""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, Field

from lesson2html.schemas.blocks import Block


class SectionNode(BaseModel):
    """A hierarchical section node."""

    title: str
    level: int = Field(..., ge=1, le=6)
    anchor: str
    blocks: list[Block] = Field(default_factory=list)
    children: list["SectionNode"] = Field(default_factory=list)

    def walk(self) -> Iterator[SectionNode]:
        """Yield this section and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def iter_blocks(self) -> Iterator[Block]:
        """Yield every block under this section in document order."""
        for section in self.walk():
            yield from section.blocks
