"""Build the navigation and search indexes from parsed documents."""

from __future__ import annotations

import logging
from typing import Iterable

from lesson2html.config import PAGE_SUFFIX, RESERVED_OUTPUT_PATHS
from lesson2html.inline import normalize_whitespace, plain_text
from lesson2html.schemas import (
    Block,
    CodeSample,
    Document,
    ListBlock,
    NavEntry,
    NavHeading,
    NavigationIndex,
    ProseBlock,
    QuoteBlock,
    SearchRecord,
    SectionNode,
    TableBlock,
)

logger = logging.getLogger(__name__)


def build_navigation_index(documents: Iterable[Document]) -> NavigationIndex:
    """Create the cross-document table of contents.

    Entries follow the order of ``documents``; headings follow document order.
    Every entry gets its own output path: a page that would land on a reserved
    file name (the navigation page) or on another page's path, compared
    case-insensitively, is written to ``<doc_id>-<n>.html`` instead.
    """
    taken = {name.casefold() for name in RESERVED_OUTPUT_PATHS}
    entries = []
    for document in documents:
        entries.append(
            NavEntry(
                doc_id=document.doc_id,
                title=document.title,
                output_path=_claim_output_path(document.doc_id, taken),
                headings=tuple(_collect_headings(document.sections)),
            )
        )
    return NavigationIndex(entries=tuple(entries))


def build_search_index(
    documents: Iterable[Document],
    index: NavigationIndex | None = None,
) -> list[SearchRecord]:
    """Create one search record per section holding its own text.

    Args:
        documents: Parsed documents, in site order.
        index: Navigation index supplying each page's output path. Built from
            ``documents`` if None.
    """
    documents = list(documents)
    if index is None:
        index = build_navigation_index(documents)

    records: list[SearchRecord] = []
    for document in documents:
        entry = index.get(document.doc_id)
        output_path = entry.output_path if entry else output_path_for(document.doc_id)
        for section in document.walk():
            records.append(
                SearchRecord(
                    doc_id=document.doc_id,
                    output_path=output_path,
                    anchor=section.anchor,
                    title=plain_text(section.title),
                    text=normalize_whitespace(
                        " ".join(block_text(block) for block in section.blocks)
                    ),
                )
            )
    return records


def output_path_for(doc_id: str) -> str:
    """Return the output path of a document relative to the site root."""
    return f"{doc_id}{PAGE_SUFFIX}"


def count_sections(sections: Iterable[SectionNode]) -> int:
    """Count total sections in the tree."""
    total = 0
    for section in sections:
        total += 1
        total += count_sections(section.children)
    return total


def block_text(block: Block) -> str:
    """Return the searchable plain text of a block."""
    if isinstance(block, (ProseBlock, QuoteBlock)):
        return plain_text(block.text)
    if isinstance(block, CodeSample):
        return block.text
    if isinstance(block, ListBlock):
        parts: list[str] = []
        for item in block.items:
            parts.append(plain_text(item.text))
            parts.extend(block_text(nested) for nested in item.blocks)
            if item.sublist is not None:
                parts.append(block_text(item.sublist))
        return " ".join(parts)
    if isinstance(block, TableBlock):
        cells = list(block.header) + [cell for row in block.rows for cell in row]
        return " ".join(plain_text(cell) for cell in cells)
    return ""


def _claim_output_path(doc_id: str, taken: set[str]) -> str:
    candidate = output_path_for(doc_id)
    suffix = 0
    while candidate.casefold() in taken:
        suffix += 1
        candidate = output_path_for(f"{doc_id}-{suffix}")
    if suffix:
        logger.warning("Output path of %s is already taken; writing %s", doc_id, candidate)
    taken.add(candidate.casefold())
    return candidate


def _collect_headings(sections: list[SectionNode], depth: int = 0) -> list[NavHeading]:
    headings: list[NavHeading] = []
    for section in sections:
        headings.append(
            NavHeading(
                title=plain_text(section.title),
                level=section.level,
                anchor=section.anchor,
                depth=depth,
            )
        )
        headings.extend(_collect_headings(section.children, depth + 1))
    return headings
