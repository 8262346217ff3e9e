"""
Hunk parsing for single-file unified diffs.

Walks the ``@@ -a,b +c,d @@`` blocks of a file diff, tracking the old and new
line counters side by side so every context, added and removed line knows
where it sits on the LEFT (pre-change) and RIGHT (post-change) side.
"""

import re
from typing import FrozenSet, Iterable, List, Optional

from pr_reviewer.models.comment import Side
from pr_reviewer.models.diff import DiffLine, Hunk, LineKind

HUNK_HEADER_RE = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))? "
    r"\+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@"
)

# "\ No newline at end of file"
NO_NEWLINE_MARKER = "\\"

# git format-patch appends "-- " and the git version after the last file
SIGNATURE_SEPARATOR = "-- "


class DiffParseError(ValueError):
    """Raised when diff text is structurally inconsistent."""
    pass


def parse_hunks(body: str) -> List[Hunk]:
    """
    Parse every hunk of a single-file diff body.

    Lines before the first hunk header (file header, mode and rename lines,
    ``---``/``+++``) are skipped. Each hunk must contain exactly as many old
    and new lines as its header announces.

    Args:
        body: Single-file unified diff text

    Returns:
        Hunks in file order, each with its numbered lines

    Raises:
        DiffParseError: If a hunk is truncated or overruns its header counts
    """
    hunks: List[Hunk] = []
    current: Optional[Hunk] = None
    old_line = new_line = 0
    old_remaining = new_remaining = 0

    for lineno, raw in enumerate(split_lines(body), start=1):
        match = HUNK_HEADER_RE.match(raw)
        if match:
            if current is not None and (old_remaining or new_remaining):
                raise DiffParseError(
                    f"Hunk @@ -{current.old_start},{current.old_count} "
                    f"+{current.new_start},{current.new_count} @@ is truncated "
                    f"at line {lineno}"
                )
            current = Hunk(
                old_start=int(match.group("old_start")),
                old_count=_count(match.group("old_count")),
                new_start=int(match.group("new_start")),
                new_count=_count(match.group("new_count")),
            )
            hunks.append(current)
            old_line, new_line = current.old_start, current.new_start
            old_remaining, new_remaining = current.old_count, current.new_count
            continue

        if current is None or raw.startswith(NO_NEWLINE_MARKER):
            continue

        prefix, content = raw[:1], raw[1:]

        if not old_remaining and not new_remaining:
            if raw.rstrip("\r") == SIGNATURE_SEPARATOR:
                current = None
                continue
            if prefix in ("+", "-", " "):
                raise DiffParseError(
                    f"Line {lineno} falls outside the range of its hunk header"
                )
            continue

        # Some tools strip the single space of empty context lines
        if prefix in (" ", ""):
            if not old_remaining or not new_remaining:
                raise DiffParseError(f"Unexpected context line at line {lineno}")
            current.lines.append(
                DiffLine(kind=LineKind.CONTEXT, old_line=old_line, new_line=new_line, content=content)
            )
            old_line += 1
            new_line += 1
            old_remaining -= 1
            new_remaining -= 1
        elif prefix == "+":
            if not new_remaining:
                raise DiffParseError(f"Unexpected added line at line {lineno}")
            current.lines.append(DiffLine(kind=LineKind.ADDED, new_line=new_line, content=content))
            new_line += 1
            new_remaining -= 1
        elif prefix == "-":
            if not old_remaining:
                raise DiffParseError(f"Unexpected removed line at line {lineno}")
            current.lines.append(DiffLine(kind=LineKind.REMOVED, old_line=old_line, content=content))
            old_line += 1
            old_remaining -= 1
        else:
            raise DiffParseError(f"Unrecognized hunk line at line {lineno}: {raw!r}")

    if current is not None and (old_remaining or new_remaining):
        raise DiffParseError(
            f"Hunk @@ -{current.old_start},{current.old_count} "
            f"+{current.new_start},{current.new_count} @@ is truncated at end of diff"
        )

    return hunks


def split_lines(text: str, keepends: bool = False) -> List[str]:
    """
    Split text on ``\\n`` only.

    Unlike ``str.splitlines`` this leaves form feeds and other Unicode line
    boundaries inside diff content untouched.
    """
    if not text:
        return []
    lines = text.split("\n")
    last = lines.pop()
    if keepends:
        lines = [line + "\n" for line in lines]
    if last:
        lines.append(last)
    return lines


def _count(value: Optional[str]) -> int:
    # An omitted count means a single line
    return 1 if value is None else int(value)


class DiffLineIndex:
    """Lookup of the line numbers a diff makes visible on each side."""

    def __init__(self, hunks: Iterable[Hunk]):
        left = set()
        right = set()
        for hunk in hunks:
            for line in hunk.lines:
                if line.old_line is not None:
                    left.add(line.old_line)
                if line.new_line is not None:
                    right.add(line.new_line)
        self._lines = {Side.LEFT: frozenset(left), Side.RIGHT: frozenset(right)}

    @classmethod
    def from_body(cls, body: str) -> "DiffLineIndex":
        return cls(parse_hunks(body))

    def lines(self, side: Side) -> FrozenSet[int]:
        return self._lines[side]

    def contains(self, side: Side, line: int) -> bool:
        """Return True if ``line`` is shown on ``side`` as context, added or removed."""
        return line in self._lines[side]
