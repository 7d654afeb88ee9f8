"""Build pipeline for markdown lessons -> static HTML site."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal

from lesson2html.config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_SITE_TITLE,
    DEFAULT_WORKERS,
    NAVIGATION_FILENAME,
    SEARCH_INDEX_FILENAME,
)
from lesson2html.indexer import build_navigation_index, build_search_index, count_sections
from lesson2html.loader import load_documents
from lesson2html.parser import parse_document
from lesson2html.renderer import (
    RenderOptions,
    render_document,
    render_navigation,
    render_search_index,
    write_output,
)
from lesson2html.schemas import BuildResult, Document, SectionNode, SourceDocument
from lesson2html.sections import filter_document

logger = logging.getLogger(__name__)


@dataclass
class BuildOptions:
    """Options for a site build.

    Attributes:
        site_title: Title used in the site navigation and page titles.
        include_toc: If True, add a table of contents to every page.
        write_search_index: If True, write a JSON search index next to the pages.
        extensions: File suffixes treated as lessons.
        workers: Number of threads used to parse documents. 1 parses inline.
        section_filter_mode: Mode for section filtering ("include" or "exclude").
        sections: List of section titles to include or exclude.
    """

    site_title: str = DEFAULT_SITE_TITLE
    include_toc: bool = True
    write_search_index: bool = True
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    workers: int = DEFAULT_WORKERS
    section_filter_mode: Literal["include", "exclude"] = "exclude"
    sections: list[str] = field(default_factory=list)


def build_site(
    input_root: Path,
    output_root: Path,
    options: BuildOptions | None = None,
) -> BuildResult:
    """Load, parse, index, and render every lesson under ``input_root``.

    Args:
        input_root: Directory holding the markdown lessons.
        output_root: Directory receiving the rendered site.
        options: Build options. Uses defaults if None.

    Returns:
        Summary of the build, including every written path.

    Raises:
        NotFoundError: If input_root does not exist.
        ReadError: If a lesson cannot be read.
        WriteError: If an output file cannot be written.
    """
    opts = options or BuildOptions()
    input_root = Path(input_root)
    output_root = Path(output_root)

    sources = load_documents(input_root, extensions=opts.extensions)
    documents = parse_documents(sources, workers=opts.workers)
    documents = [
        filter_document(document, mode=opts.section_filter_mode, selected=opts.sections)
        for document in documents
    ]
    logger.info("Parsed %d documents from %s", len(documents), input_root)

    index = build_navigation_index(documents)
    render_options = RenderOptions(
        site_title=opts.site_title,
        include_toc=opts.include_toc,
        extensions=opts.extensions,
    )

    written: list[Path] = []
    for document, entry in zip(documents, index.entries):
        page = render_document(document, index, options=render_options)
        written.append(write_output(output_root / entry.output_path, page))
    written.append(
        write_output(
            output_root / NAVIGATION_FILENAME,
            render_navigation(index, options=render_options),
        )
    )
    if opts.write_search_index:
        written.append(
            write_output(
                output_root / SEARCH_INDEX_FILENAME,
                render_search_index(build_search_index(documents, index)),
            )
        )
    logger.info("Wrote %d files to %s", len(written), output_root)

    return format_build(documents, written=written, site_title=opts.site_title)


def parse_documents(sources: Iterable[SourceDocument], *, workers: int = 1) -> list[Document]:
    """Parse sources, optionally on a thread pool; results keep source order."""
    if workers <= 1:
        return [parse_document(source) for source in sources]
    source_list = list(sources)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(parse_document, source_list))


def format_build(documents: list[Document], *, written: list[Path], site_title: str) -> BuildResult:
    """Create the summary and section tree for a finished build."""
    total_sections = sum(count_sections(document.sections) for document in documents)
    summary = "\n".join(
        [
            f"Site: {site_title}",
            f"Documents: {len(documents)}",
            f"Sections: {total_sections}",
            f"Files written: {len(written)}",
        ]
    )

    tree_lines = ["Sections:"]
    for document in documents:
        tree_lines.append(f"{document.doc_id} ({document.title})")
        tree = _create_sections_tree(document.sections, indent=1)
        if tree:
            tree_lines.append(tree)

    return BuildResult(
        summary=summary,
        sections_tree="\n".join(tree_lines),
        documents=len(documents),
        sections=total_sections,
        written=written,
    )


def _create_sections_tree(sections: list[SectionNode], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        lines.append(" " * (indent * 4) + section.title)
        if section.children:
            lines.append(_create_sections_tree(section.children, indent + 1))
    return "\n".join(lines)
