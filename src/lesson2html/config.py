"""Local configuration for lesson2html."""

from __future__ import annotations

DEFAULT_EXTENSIONS = (".md", ".markdown")
DEFAULT_ENCODING = "utf-8"
DEFAULT_SITE_TITLE = "Reference"
DEFAULT_WORKERS = 1

# Output artifact names, relative to the output root.
NAVIGATION_FILENAME = "index.html"
SEARCH_INDEX_FILENAME = "search_index.json"
PAGE_SUFFIX = ".html"

# Lesson pages never take these names.
RESERVED_OUTPUT_PATHS = (NAVIGATION_FILENAME, SEARCH_INDEX_FILENAME)
