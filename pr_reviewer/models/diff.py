"""Diff data models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

DEV_NULL = "/dev/null"


class LineKind(str, Enum):
    """Class of a line inside a hunk."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"


class DiffLine(BaseModel):
    """Single hunk line with its position on both sides of the diff."""

    kind: LineKind
    old_line: Optional[int] = None
    new_line: Optional[int] = None
    content: str


class Hunk(BaseModel):
    """Contiguous block of a unified diff introduced by an ``@@`` header."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: List[DiffLine] = []


class FileDiffRecord(BaseModel):
    """Single-file slice of a multi-file unified diff.

    ``body`` starts with the record's own ``diff --git`` header line and runs
    verbatim up to the next file header.
    """

    model_config = ConfigDict(frozen=True)

    source_path: str
    target_path: str
    body: str

    @property
    def is_new_file(self) -> bool:
        return self.source_path == DEV_NULL

    @property
    def is_deleted(self) -> bool:
        return self.target_path == DEV_NULL

    @property
    def is_rename(self) -> bool:
        return not self.is_new_file and not self.is_deleted and self.source_path != self.target_path
