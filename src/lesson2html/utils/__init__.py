"""Internal helpers for lesson2html."""
