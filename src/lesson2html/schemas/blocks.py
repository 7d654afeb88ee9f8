"""Content block models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class ProseBlock(BaseModel):
    """A prose paragraph."""

    kind: Literal["prose"] = "prose"
    text: str


class CodeSample(BaseModel):
    """A fenced code sample, kept as opaque text."""

    kind: Literal["code"] = "code"
    language: str = ""
    text: str


class ListItem(BaseModel):
    """A single list entry.

    ``blocks`` holds block content nested in the item, such as fenced code
    samples, in source order; ``sublist`` holds a nested list.
    """

    text: str
    blocks: list[Block] = Field(default_factory=list)
    sublist: ListBlock | None = None


class ListBlock(BaseModel):
    """A bullet or ordered list."""

    kind: Literal["list"] = "list"
    ordered: bool = False
    start: int = 1
    items: list[ListItem] = Field(default_factory=list)


class QuoteBlock(BaseModel):
    """A blockquote."""

    kind: Literal["quote"] = "quote"
    text: str


class TableBlock(BaseModel):
    """A pipe table; every row is padded to the header width."""

    kind: Literal["table"] = "table"
    header: list[str]
    rows: list[list[str]] = Field(default_factory=list)


Block = Annotated[
    Union[ProseBlock, CodeSample, ListBlock, QuoteBlock, TableBlock],
    Field(discriminator="kind"),
]

ListItem.model_rebuild()
ListBlock.model_rebuild()
