"""Inline markdown to HTML conversion and plain-text helpers."""

from __future__ import annotations

import html
import re
from typing import Callable

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


LinkResolver = Callable[[str], str]

_PLACEHOLDER_RE = re.compile(r"\x00(\d+)\x00")
_CODE_SPAN_RE = re.compile(r"(?<!`)(`+)(?!`)(.+?)(?<!`)\1(?!`)", re.DOTALL)
_ESCAPE_RE = re.compile(r"\\([!-/:-@\[-`{-~])")
_AUTOLINK_RE = re.compile(r"<((?:https?|mailto):[^\s<>]+)>")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(\s*([^)\s]+)(?:\s+\"([^\"]*)\")?\s*\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(\s*([^)\s]+)(?:\s+\"([^\"]*)\")?\s*\)")

# Applied to escaped text, strong before emphasis.
_EMPHASIS_RULES = (
    (re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*", re.DOTALL), r"<strong>\1</strong>"),
    (re.compile(r"(?<!\w)__(?=\S)(.+?)(?<=\S)__(?!\w)", re.DOTALL), r"<strong>\1</strong>"),
    (re.compile(r"\*(?=\S)(.+?)(?<=\S)\*", re.DOTALL), r"<em>\1</em>"),
    (re.compile(r"(?<!\w)_(?=\S)(.+?)(?<=\S)_(?!\w)", re.DOTALL), r"<em>\1</em>"),
    (re.compile(r"~~(?=\S)(.+?)(?<=\S)~~", re.DOTALL), r"<del>\1</del>"),
)


def render_inline(text: str, *, resolve_link: LinkResolver | None = None) -> str:
    """Convert inline markdown (code spans, links, images, emphasis) to HTML.

    Text is HTML-escaped; markup that cannot be matched is left as literal
    text rather than rejected.

    Args:
        text: Inline markdown source.
        resolve_link: Optional callback that maps a raw link target to the
            href written into the output.
    """
    stash: list[str] = []

    def _stash(fragment: str) -> str:
        stash.append(fragment)
        return f"\x00{len(stash) - 1}\x00"

    def _code(match: re.Match) -> str:
        return _stash(f"<code>{html.escape(_trim_code_span(match.group(2)), quote=False)}</code>")

    def _image(match: re.Match) -> str:
        alt, src, title = match.group(1), match.group(2), match.group(3)
        alt = _PLACEHOLDER_RE.sub("", alt)
        attrs = f' src="{_attr(_resolve(src, resolve_link))}" alt="{_attr(alt)}"'
        if title:
            attrs += f' title="{_attr(title)}"'
        return _stash(f"<img{attrs} />")

    def _link(match: re.Match) -> str:
        label, href, title = match.group(1), match.group(2), match.group(3)
        attrs = f' href="{_attr(_resolve(href, resolve_link))}"'
        if title:
            attrs += f' title="{_attr(title)}"'
        # The whole anchor becomes one placeholder so emphasis never spans its edges.
        return _stash(f"<a{attrs}>{_emphasize(html.escape(label, quote=False))}</a>")

    def _autolink(match: re.Match) -> str:
        url = match.group(1)
        return _stash(f'<a href="{_attr(url)}">{html.escape(url, quote=False)}</a>')

    text = text.replace("\x00", "\ufffd")
    text = _CODE_SPAN_RE.sub(_code, text)
    text = _ESCAPE_RE.sub(lambda match: _stash(html.escape(match.group(1), quote=False)), text)
    text = _AUTOLINK_RE.sub(_autolink, text)
    text = _IMAGE_RE.sub(_image, text)
    text = _LINK_RE.sub(_link, text)
    text = _emphasize(html.escape(text, quote=False))

    while _PLACEHOLDER_RE.search(text):
        text = _PLACEHOLDER_RE.sub(lambda match: stash[int(match.group(1))], text)
    return text


def plain_text(text: str) -> str:
    """Return the visible text of inline markdown, whitespace-normalized."""
    if not text.strip():
        return ""
    soup = BeautifulSoup(f"<p>{render_inline(text)}</p>", "lxml")
    return normalize_whitespace(soup.get_text())


def normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def slugify(text: str) -> str:
    """Create a URL fragment from plain text."""
    slug = text.strip().lower()
    slug = re.sub(r"[^\w\s\-]+", "", slug)
    slug = re.sub(r"[\s\-]+", "-", slug).strip("-")
    return slug or "section"


def _emphasize(text: str) -> str:
    for pattern, replacement in _EMPHASIS_RULES:
        text = pattern.sub(replacement, text)
    return text


def _trim_code_span(content: str) -> str:
    content = content.replace("\n", " ")
    if len(content) > 2 and content.startswith(" ") and content.endswith(" ") and content.strip():
        return content[1:-1]
    return content


def _resolve(target: str, resolve_link: LinkResolver | None) -> str:
    if resolve_link is None:
        return target
    return resolve_link(target)


def _attr(value: str) -> str:
    return html.escape(value, quote=True)
