"""Load lesson files from a content directory."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Iterable, Iterator

from lesson2html.config import DEFAULT_ENCODING, DEFAULT_EXTENSIONS
from lesson2html.exceptions import NotFoundError, ReadError
from lesson2html.schemas import SourceDocument

logger = logging.getLogger(__name__)


def load_documents(
    root: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    encoding: str = DEFAULT_ENCODING,
) -> Iterator[SourceDocument]:
    """Yield lesson documents found under a content root.

    Files are enumerated in sorted relative-path order and read lazily, so
    every call re-reads storage. Hidden files and directories are skipped.
    Ids are relative paths without the suffix, except for files sharing a
    stem, which keep their suffix so every id stays unique.

    Args:
        root: Directory holding the lesson files.
        extensions: File suffixes treated as lessons (case-insensitive).
        encoding: Text encoding of the lesson files.

    Raises:
        NotFoundError: If root does not exist or is not a directory.
        ReadError: If a lesson file cannot be read or decoded.
    """
    root = Path(root)
    if not root.exists():
        raise NotFoundError(f"Content root not found: {root}")
    if not root.is_dir():
        raise NotFoundError(f"Content root is not a directory: {root}")

    paths = discover_files(root, extensions=extensions)
    for path, doc_id in zip(paths, _document_ids(paths, root)):
        yield SourceDocument(doc_id=doc_id, path=path, text=_read(path, encoding))


def discover_files(root: Path, *, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> list[Path]:
    """List lesson files under root in a stable order."""
    suffixes = {suffix.lower() for suffix in extensions}
    files = [
        path
        for path in root.rglob("*")
        if path.is_file()
        and path.suffix.lower() in suffixes
        and not any(part.startswith(".") for part in path.relative_to(root).parts)
    ]
    return sorted(files, key=lambda path: path.relative_to(root).as_posix())


def document_id(path: Path, root: Path) -> str:
    """Return the relative POSIX path of a lesson without its suffix."""
    return path.relative_to(root).with_suffix("").as_posix()


def _document_ids(paths: list[Path], root: Path) -> list[str]:
    """Assign ids, keeping the suffix for files that share a stem (a.md, a.markdown)."""
    stems = Counter(document_id(path, root) for path in paths)
    ids: list[str] = []
    for path in paths:
        doc_id = document_id(path, root)
        if stems[doc_id] > 1:
            logger.warning("Several lessons map to %s; using %s", doc_id, path.relative_to(root))
            doc_id = path.relative_to(root).as_posix()
        ids.append(doc_id)
    return ids


def _read(path: Path, encoding: str) -> str:
    logger.debug("Reading %s", path)
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise ReadError(f"Could not decode {path} as {encoding}: {exc}") from exc
    except OSError as exc:
        raise ReadError(f"Could not read {path}: {exc}") from exc
