"""Render parsed documents and the navigation index to static HTML."""

from __future__ import annotations

import html
import logging
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable
from urllib.parse import quote, unquote, urlsplit

from pydantic import TypeAdapter

from lesson2html.config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_SITE_TITLE,
    NAVIGATION_FILENAME,
)
from lesson2html.exceptions import WriteError
from lesson2html.indexer import output_path_for
from lesson2html.inline import LinkResolver, normalize_whitespace, plain_text, render_inline
from lesson2html.schemas import (
    Block,
    CodeSample,
    Document,
    ListBlock,
    NavigationIndex,
    ProseBlock,
    QuoteBlock,
    SearchRecord,
    SectionNode,
    TableBlock,
)

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^h[1-6]$")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_SEARCH_RECORDS = TypeAdapter(list[SearchRecord])

_STYLE = """\
      body { font-family: system-ui, sans-serif; margin: 0; display: flex; color: #111; }
      .site-nav { width: 240px; padding: 16px; border-right: 1px solid #e7e7e7; }
      .site-nav a.active { font-weight: 600; }
      main { flex: 1; max-width: 860px; padding: 16px 24px 40px; }
      .toc { font-size: 0.9em; border-bottom: 1px solid #e7e7e7; margin-bottom: 16px; }
      pre { background: #f6f7f9; padding: 12px; overflow-x: auto; }
      code { background: #f1f1f1; padding: 1px 4px; }
      pre code { background: none; padding: 0; }
      table { border-collapse: collapse; }
      th, td { border: 1px solid #ddd; padding: 4px 8px; }"""


@dataclass(frozen=True)
class RenderOptions:
    """Options shared by every page of a render pass.

    Attributes:
        site_title: Title shown in the site navigation and page titles.
        include_toc: If True, add a per-page table of contents.
        extensions: Link suffixes that identify other lesson files.
    """

    site_title: str = DEFAULT_SITE_TITLE
    include_toc: bool = True
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS


def render_document(
    document: Document,
    index: NavigationIndex,
    *,
    options: RenderOptions | None = None,
) -> str:
    """Render one document as an HTML page cross-linked through the index."""
    opts = options or RenderOptions()
    entry = index.get(document.doc_id)
    current = entry.output_path if entry else output_path_for(document.doc_id)
    resolve = _link_resolver(document.doc_id, current, index, opts.extensions)

    body: list[str] = []
    if opts.include_toc and document.sections:
        body.append('<nav class="toc">')
        body.append("<p>On this page</p>")
        body.extend(_render_toc(document.sections))
        body.append("</nav>")
    body.append("<article>")
    body.extend(_render_blocks(document.preamble, resolve))
    for section in document.sections:
        body.extend(_render_section(section, resolve))
    body.append("</article>")

    return _html_page(
        title=f"{document.title} - {opts.site_title}",
        nav_html=_render_site_nav(index, current=current, site_title=opts.site_title),
        body_html="\n".join(body),
    )


def render_navigation(index: NavigationIndex, *, options: RenderOptions | None = None) -> str:
    """Render the site-wide navigation page listing every document and heading."""
    opts = options or RenderOptions()
    body = [f"<h1>{_escape(opts.site_title)}</h1>", '<ul class="nav-index">']
    for entry in index.entries:
        href = _relative_href(NAVIGATION_FILENAME, entry.output_path)
        body.append(f'<li><a href="{_attr(href)}">{_escape(entry.title)}</a>')
        if entry.headings:
            body.append("<ul>")
            for heading in entry.headings:
                style = f' style="margin-left: {heading.depth}em"' if heading.depth else ""
                body.append(
                    f'<li{style}><a href="{_attr(href)}#{_attr(heading.anchor)}">'
                    f"{_escape(heading.title)}</a></li>"
                )
            body.append("</ul>")
        body.append("</li>")
    body.append("</ul>")

    return _html_page(
        title=opts.site_title,
        nav_html=_render_site_nav(index, current=NAVIGATION_FILENAME, site_title=opts.site_title),
        body_html="\n".join(body),
    )


def extract_heading_titles(page: str) -> list[str]:
    """Return the plain-text section headings of a rendered page, in order."""
    soup = BeautifulSoup(page, "lxml")
    container = soup.find("article") or soup
    return [
        normalize_whitespace(heading.get_text())
        for heading in container.find_all(_HEADING_RE)
    ]


def write_output(path: Path, content: str) -> Path:
    """Write rendered text with LF newlines.

    Raises:
        WriteError: If the file or its parent directories cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
    except OSError as exc:
        raise WriteError(f"Could not write {path}: {exc}") from exc
    logger.debug("Wrote %s", path)
    return path


def render_search_index(records: Iterable[SearchRecord]) -> str:
    """Serialize search records as JSON."""
    return _SEARCH_RECORDS.dump_json(list(records), indent=2).decode("utf-8") + "\n"


def _render_section(section: SectionNode, resolve: LinkResolver) -> list[str]:
    level = min(section.level, 6)
    blocks = [
        "<section>",
        f'<h{level} id="{_attr(section.anchor)}">'
        f"{render_inline(section.title, resolve_link=resolve)}</h{level}>",
    ]
    blocks.extend(_render_blocks(section.blocks, resolve))
    for child in section.children:
        blocks.extend(_render_section(child, resolve))
    blocks.append("</section>")
    return blocks


def _render_blocks(blocks: Iterable[Block], resolve: LinkResolver) -> list[str]:
    return [_render_block(block, resolve) for block in blocks]


def _render_block(block: Block, resolve: LinkResolver) -> str:
    if isinstance(block, ProseBlock):
        return f"<p>{render_inline(block.text, resolve_link=resolve)}</p>"

    if isinstance(block, CodeSample):
        css = f' class="language-{_attr(block.language)}"' if block.language else ""
        return f"<pre><code{css}>{_escape(block.text)}</code></pre>"

    if isinstance(block, ListBlock):
        return _render_list(block, resolve)

    if isinstance(block, QuoteBlock):
        paragraphs = [part for part in _PARAGRAPH_SPLIT_RE.split(block.text) if part.strip()]
        inner = "".join(
            f"<p>{render_inline(part, resolve_link=resolve)}</p>" for part in paragraphs
        )
        return f"<blockquote>{inner}</blockquote>"

    if isinstance(block, TableBlock):
        return _render_table(block, resolve)

    return ""


def _render_list(block: ListBlock, resolve: LinkResolver) -> str:
    if block.ordered:
        tag = "ol"
        opening = f'<ol start="{block.start}">' if block.start != 1 else "<ol>"
    else:
        tag = "ul"
        opening = "<ul>"
    items = []
    for item in block.items:
        inner = "".join(_render_blocks(item.blocks, resolve))
        nested = _render_list(item.sublist, resolve) if item.sublist else ""
        items.append(f"<li>{render_inline(item.text, resolve_link=resolve)}{inner}{nested}</li>")
    return opening + "".join(items) + f"</{tag}>"


def _render_table(block: TableBlock, resolve: LinkResolver) -> str:
    def _cells(cells: list[str], tag: str) -> str:
        return "".join(
            f"<{tag}>{render_inline(cell, resolve_link=resolve)}</{tag}>" for cell in cells
        )

    lines = ["<table>", f"<thead><tr>{_cells(block.header, 'th')}</tr></thead>"]
    if block.rows:
        lines.append("<tbody>")
        lines.extend(f"<tr>{_cells(row, 'td')}</tr>" for row in block.rows)
        lines.append("</tbody>")
    lines.append("</table>")
    return "\n".join(lines)


def _render_toc(sections: list[SectionNode]) -> list[str]:
    lines = ["<ul>"]
    for section in sections:
        label = _escape(plain_text(section.title))
        lines.append(f'<li><a href="#{_attr(section.anchor)}">{label}</a>')
        if section.children:
            lines.extend(_render_toc(section.children))
        lines.append("</li>")
    lines.append("</ul>")
    return lines


def _render_site_nav(index: NavigationIndex, *, current: str, site_title: str) -> str:
    home = _relative_href(current, NAVIGATION_FILENAME)
    lines = [
        f'<a class="site-title" href="{_attr(home)}">{_escape(site_title)}</a>',
        "<ul>",
    ]
    for entry in index.entries:
        href = _relative_href(current, entry.output_path)
        active = ' class="active"' if entry.output_path == current else ""
        lines.append(f'<li><a{active} href="{_attr(href)}">{_escape(entry.title)}</a></li>')
    lines.append("</ul>")
    return "\n".join(lines)


def _html_page(*, title: str, nav_html: str, body_html: str) -> str:
    return "\n".join(
        [
            "<!doctype html>",
            '<html lang="en">',
            "  <head>",
            '    <meta charset="utf-8" />',
            '    <meta name="viewport" content="width=device-width, initial-scale=1" />',
            f"    <title>{_escape(title)}</title>",
            "    <style>",
            _STYLE,
            "    </style>",
            "  </head>",
            "  <body>",
            '<nav class="site-nav">',
            nav_html,
            "</nav>",
            "<main>",
            body_html,
            "</main>",
            "  </body>",
            "</html>",
            "",
        ]
    )


def _link_resolver(
    doc_id: str,
    current: str,
    index: NavigationIndex,
    extensions: Iterable[str],
) -> LinkResolver:
    suffixes = {suffix.lower() for suffix in extensions}
    base_dir = posixpath.dirname(doc_id)

    def resolve(target: str) -> str:
        parts = urlsplit(target)
        if parts.scheme or parts.netloc or not parts.path:
            return target
        path = unquote(parts.path)
        suffix = PurePosixPath(path).suffix
        if suffix.lower() not in suffixes:
            return target
        if path.startswith("/"):
            linked = path.lstrip("/")
        else:
            linked = posixpath.normpath(posixpath.join(base_dir, path))
        entry = index.get(linked)
        if entry is None:
            entry = index.get(linked[: -len(suffix)])
        if entry is None:
            logger.debug("Link target %s in %s is not a known document", target, doc_id)
            return target
        href = _relative_href(current, entry.output_path)
        return f"{href}#{parts.fragment}" if parts.fragment else href

    return resolve


def _relative_href(current: str, target: str) -> str:
    """URL-quoted path from the page at ``current`` to ``target``; add fragments after."""
    return quote(posixpath.relpath(target, posixpath.dirname(current) or "."), safe="/")


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _attr(value: str) -> str:
    return html.escape(value, quote=True)
