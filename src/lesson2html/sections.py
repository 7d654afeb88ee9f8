"""Section filtering and utilities."""

from __future__ import annotations

import re
from typing import Iterable

from lesson2html.inline import plain_text
from lesson2html.schemas import Document, SectionNode


def normalize_section_title(title: str) -> str:
    """Normalize section titles for comparison."""
    title = plain_text(title).lower()
    title = re.sub(r"^[\d.\-]+\s+", "", title)
    return re.sub(r"\s+", " ", title)


def filter_sections(
    sections: list[SectionNode],
    *,
    mode: str = "exclude",
    selected: Iterable[str] | None = None,
) -> list[SectionNode]:
    """Filter sections by title using include or exclude mode.

    Included sections keep their whole subtree; an unselected section is kept
    in include mode only as a container for selected descendants. The input
    tree is left untouched.
    """
    selected_titles = {normalize_section_title(title) for title in (selected or []) if title.strip()}
    if not selected_titles:
        return sections

    def _filter(nodes: list[SectionNode]) -> list[SectionNode]:
        result: list[SectionNode] = []
        for node in nodes:
            in_selected = normalize_section_title(node.title) in selected_titles
            if mode == "include":
                if in_selected:
                    result.append(node)
                else:
                    children = _filter(node.children)
                    if children:
                        result.append(node.model_copy(update={"children": children}))
            else:
                if in_selected:
                    continue
                result.append(node.model_copy(update={"children": _filter(node.children)}))
        return result

    return _filter(list(sections))


def filter_document(
    document: Document,
    *,
    mode: str = "exclude",
    selected: Iterable[str] | None = None,
) -> Document:
    """Return a copy of a document with its sections filtered."""
    sections = filter_sections(document.sections, mode=mode, selected=selected)
    if sections is document.sections:
        return document
    return document.model_copy(update={"sections": sections})
