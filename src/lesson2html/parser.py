"""Parse markdown lesson text into a section tree."""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath

from lesson2html.inline import plain_text, slugify
from lesson2html.schemas import (
    Block,
    CodeSample,
    Document,
    ListBlock,
    ListItem,
    ProseBlock,
    QuoteBlock,
    SectionNode,
    SourceDocument,
    TableBlock,
)

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_ATX_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_SETEXT_RE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
_FENCE_OPEN_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
_THEMATIC_BREAK_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_QUOTE_RE = re.compile(r"^ {0,3}> ?(.*)$")
_LIST_ITEM_RE = re.compile(r"^([ \t]*)([-*+]|\d{1,9}[.)])(?:[ \t]+(.*))?$")
_TABLE_SEPARATOR_RE = re.compile(r"^\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?$")
_TABLE_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")


def parse_document(source: SourceDocument) -> Document:
    """Parse a loaded source document into a Document."""
    preamble, sections = parse_markdown(source.text)
    title = _document_title(sections) or PurePosixPath(source.doc_id).name
    return Document(
        doc_id=source.doc_id,
        path=source.path,
        title=title,
        text=source.text,
        preamble=preamble,
        sections=sections,
    )


def parse_markdown(text: str) -> tuple[list[Block], list[SectionNode]]:
    """Split markdown into preamble blocks and a tree of sections.

    Never raises on malformed input: unknown constructs fall back to prose and
    an unterminated code fence swallows the rest of the text.

    Returns:
        Tuple of (blocks before the first heading, root sections).
    """
    lines = _LINE_SPLIT_RE.split(text.removeprefix("\ufeff"))
    tree = _TreeBuilder()
    paragraph: list[str] = []

    def flush_paragraph() -> None:
        if paragraph:
            tree.add_block(ProseBlock(text="\n".join(paragraph)))
            paragraph.clear()

    i = 0
    while i < len(lines):
        line = lines[i]

        if not line.strip():
            flush_paragraph()
            i += 1
            continue

        fence = _match_fence(line)
        if fence:
            flush_paragraph()
            block, i = _parse_fence(lines, i, fence)
            tree.add_block(block)
            continue

        atx = _ATX_RE.match(line)
        if atx:
            flush_paragraph()
            tree.add_heading(len(atx.group(1)), (atx.group(2) or "").strip())
            i += 1
            continue

        setext = _SETEXT_RE.match(line)
        if setext and paragraph:
            level = 1 if setext.group(1).startswith("=") else 2
            tree.add_heading(level, " ".join(paragraph))
            paragraph.clear()
            i += 1
            continue

        if _THEMATIC_BREAK_RE.match(line):
            flush_paragraph()
            i += 1
            continue

        if _QUOTE_RE.match(line):
            flush_paragraph()
            block, i = _parse_quote(lines, i)
            tree.add_block(block)
            continue

        item = _LIST_ITEM_RE.match(line)
        if item and _indent(line) < 4 and (not paragraph or _can_interrupt_paragraph(item)):
            flush_paragraph()
            block, i = _parse_list(lines, i)
            tree.add_block(block)
            continue

        if not paragraph and _is_table_start(lines, i):
            block, i = _parse_table(lines, i)
            tree.add_block(block)
            continue

        paragraph.append(line.strip())
        i += 1

    flush_paragraph()
    return tree.preamble, tree.roots


class _TreeBuilder:
    """Attach headings and blocks to the right place in the section tree."""

    def __init__(self) -> None:
        self.preamble: list[Block] = []
        self.roots: list[SectionNode] = []
        self._stack: list[SectionNode] = []
        self._anchors: set[str] = set()

    def add_heading(self, level: int, title: str) -> None:
        node = SectionNode(title=title, level=level, anchor=self._unique_anchor(title))

        while self._stack and self._stack[-1].level >= level:
            self._stack.pop()

        if self._stack and self._stack[-1].level == level - 1:
            self._stack[-1].children.append(node)
            self._stack.append(node)
        else:
            # No parent one level up: promote to the document root.
            self.roots.append(node)
            self._stack = [node]

    def add_block(self, block: Block) -> None:
        if self._stack:
            self._stack[-1].blocks.append(block)
        else:
            self.preamble.append(block)

    def _unique_anchor(self, title: str) -> str:
        base = slugify(plain_text(title))
        anchor = base
        suffix = 0
        while anchor in self._anchors:
            suffix += 1
            anchor = f"{base}-{suffix}"
        self._anchors.add(anchor)
        return anchor


def _parse_fence(
    lines: list[str], start: int, fence: re.Match, container_indent: int = 0
) -> tuple[CodeSample, int]:
    """Read a fenced code sample.

    ``container_indent`` is the indentation of an enclosing list item; it is
    removed from body and closing lines where present.
    """
    indent = container_indent + len(fence.group(1))
    marker = fence.group(2)
    info = fence.group(3).strip()
    language = info.split()[0] if info else ""
    closing = re.compile(rf"^ {{0,3}}{re.escape(marker[0])}{{{len(marker)},}}[ \t]*$")

    body: list[str] = []
    i = start + 1
    while i < len(lines):
        if closing.match(_strip_indent(lines[i], container_indent)):
            return CodeSample(language=language, text="\n".join(body)), i + 1
        body.append(_strip_indent(lines[i], indent))
        i += 1

    logger.debug("Unterminated code fence at line %d; consuming remaining text", start + 1)
    while body and not body[-1].strip():
        body.pop()
    return CodeSample(language=language, text="\n".join(body)), i


def _parse_quote(lines: list[str], start: int) -> tuple[QuoteBlock, int]:
    body: list[str] = []
    i = start
    while i < len(lines):
        match = _QUOTE_RE.match(lines[i])
        if not match:
            break
        body.append(match.group(1).rstrip())
        i += 1
    return QuoteBlock(text="\n".join(body).strip()), i


def _parse_list(lines: list[str], start: int) -> tuple[ListBlock, int]:
    first = _LIST_ITEM_RE.match(lines[start])
    base_indent = _indent(lines[start])
    ordered = _is_ordered(first)
    block = ListBlock(ordered=ordered, start=int(first.group(2)[:-1]) if ordered else 1)

    i = start
    while i < len(lines):
        line = lines[i]

        if not line.strip():
            following = _next_nonblank(lines, i)
            if following is None:
                break
            if _indent(lines[following]) > base_indent or _continues_list(
                lines[following], base_indent, ordered
            ):
                i = following
                continue
            break

        if _THEMATIC_BREAK_RE.match(line) and _indent(line) <= base_indent:
            break

        indent = _indent(line)
        item = _LIST_ITEM_RE.match(line)

        if item and indent <= base_indent:
            if indent < base_indent or _is_ordered(item) != ordered:
                break
            block.items.append(ListItem(text=(item.group(3) or "").strip()))
            i += 1
            continue

        if indent > base_indent and block.items:
            current = block.items[-1]
            fence = _match_fence(line.lstrip(" "))
            if fence:
                sample, i = _parse_fence(lines, i, fence, container_indent=indent)
                current.blocks.append(sample)
                continue
            if item and not _THEMATIC_BREAK_RE.match(line):
                sublist, i = _parse_list(lines, i)
                if current.sublist is None:
                    current.sublist = sublist
                else:
                    current.sublist.items.extend(sublist.items)
                continue
            current.text = f"{current.text}\n{line.strip()}" if current.text else line.strip()
            i += 1
            continue

        break

    return block, i


def _parse_table(lines: list[str], start: int) -> tuple[TableBlock, int]:
    header = _split_table_row(lines[start])
    rows: list[list[str]] = []
    i = start + 2
    while i < len(lines) and lines[i].strip() and "|" in lines[i]:
        cells = _split_table_row(lines[i])
        cells = cells[: len(header)] + [""] * (len(header) - len(cells))
        rows.append(cells)
        i += 1
    return TableBlock(header=header, rows=rows), i


def _is_table_start(lines: list[str], index: int) -> bool:
    if "|" not in lines[index] or index + 1 >= len(lines):
        return False
    separator = lines[index + 1].strip()
    return "|" in separator and bool(_TABLE_SEPARATOR_RE.fullmatch(separator))


def _split_table_row(line: str) -> list[str]:
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _TABLE_CELL_SPLIT_RE.split(row)]


def _document_title(sections: list[SectionNode]) -> str | None:
    candidates = [node for section in sections for node in section.walk()]
    for node in candidates:
        if node.level == 1 and plain_text(node.title):
            return plain_text(node.title)
    for node in candidates:
        if plain_text(node.title):
            return plain_text(node.title)
    return None


def _match_fence(line: str) -> re.Match | None:
    fence = _FENCE_OPEN_RE.match(line)
    # A backtick fence's info string may not contain backticks.
    if fence and fence.group(2)[0] == "`" and "`" in fence.group(3):
        return None
    return fence


def _can_interrupt_paragraph(item: re.Match) -> bool:
    if not item.group(3):
        return False
    if _is_ordered(item):
        return item.group(2)[:-1] == "1"
    return True


def _continues_list(line: str, base_indent: int, ordered: bool) -> bool:
    item = _LIST_ITEM_RE.match(line)
    return bool(item) and _indent(line) == base_indent and _is_ordered(item) == ordered


def _is_ordered(item: re.Match) -> bool:
    return item.group(2)[0].isdigit()


def _next_nonblank(lines: list[str], index: int) -> int | None:
    for candidate in range(index, len(lines)):
        if lines[candidate].strip():
            return candidate
    return None


def _indent(line: str) -> int:
    expanded = line.expandtabs(4)
    return len(expanded) - len(expanded.lstrip(" "))


def _strip_indent(line: str, width: int) -> str:
    removable = len(line) - len(line.lstrip(" "))
    return line[min(width, removable):]
