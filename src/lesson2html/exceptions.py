"""Custom exceptions for lesson2html."""


class Lesson2htmlError(Exception):
    """Base exception for lesson2html operations."""


class NotFoundError(Lesson2htmlError):
    """Content root does not exist."""


class ReadError(Lesson2htmlError):
    """Content file could not be read or decoded."""


class WriteError(Lesson2htmlError):
    """Rendered output could not be written."""
