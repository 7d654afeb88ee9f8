"""lesson2html: render markdown lessons into a static HTML reference."""

from lesson2html.exceptions import (
    Lesson2htmlError,
    NotFoundError,
    ReadError,
    WriteError,
)
from lesson2html.indexer import build_navigation_index, build_search_index
from lesson2html.loader import load_documents
from lesson2html.parser import parse_document, parse_markdown
from lesson2html.pipeline import BuildOptions, build_site
from lesson2html.renderer import (
    RenderOptions,
    extract_heading_titles,
    render_document,
    render_navigation,
    write_output,
)
from lesson2html.schemas import BuildResult, Document, NavigationIndex, SectionNode

__all__ = [
    "BuildOptions",
    "BuildResult",
    "Document",
    "Lesson2htmlError",
    "NavigationIndex",
    "NotFoundError",
    "ReadError",
    "RenderOptions",
    "SectionNode",
    "WriteError",
    "build_navigation_index",
    "build_search_index",
    "build_site",
    "extract_heading_titles",
    "load_documents",
    "parse_document",
    "parse_markdown",
    "render_document",
    "render_navigation",
    "write_output",
]
