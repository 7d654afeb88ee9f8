"""Shared schemas for lesson2html."""

from lesson2html.schemas.blocks import (
    Block,
    CodeSample,
    ListBlock,
    ListItem,
    ProseBlock,
    QuoteBlock,
    TableBlock,
)
from lesson2html.schemas.build import BuildResult
from lesson2html.schemas.document import Document, SourceDocument
from lesson2html.schemas.navigation import (
    NavEntry,
    NavHeading,
    NavigationIndex,
    SearchRecord,
)
from lesson2html.schemas.sections import SectionNode

__all__ = [
    "Block",
    "BuildResult",
    "CodeSample",
    "Document",
    "ListBlock",
    "ListItem",
    "NavEntry",
    "NavHeading",
    "NavigationIndex",
    "ProseBlock",
    "QuoteBlock",
    "SearchRecord",
    "SectionNode",
    "SourceDocument",
    "TableBlock",
]
