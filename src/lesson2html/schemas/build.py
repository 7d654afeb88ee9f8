"""Build output model."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class BuildResult(BaseModel):
    """Final build output."""

    summary: str
    sections_tree: str
    documents: int
    sections: int
    written: list[Path] = Field(default_factory=list)
