"""
Diff Segmenter.

Splits a multi-file unified diff (as produced by ``git diff`` and served by
the GitHub diff media type) into one FileDiffRecord per file. The scan is
line based: every line starting with ``diff --git `` opens a new file
section and everything up to the next such line belongs to it, so header
captures and body slices can never drift apart.
"""

from typing import Dict, List, Optional, Tuple

from pr_reviewer.diff.hunks import HUNK_HEADER_RE, DiffParseError, parse_hunks, split_lines
from pr_reviewer.models.diff import DEV_NULL, FileDiffRecord
from pr_reviewer.utils.logging import get_logger

logger = get_logger(__name__)

FILE_HEADER_PREFIX = "diff --git "

_ESCAPES = {"a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v", '"': '"', "\\": "\\"}


def segment(raw: str) -> List[FileDiffRecord]:
    """
    Split a unified multi-file diff into single-file records.

    Args:
        raw: Unified diff text spanning zero or more files

    Returns:
        One record per ``diff --git`` header, in diff order. Text without any
        file header yields an empty list.

    Raises:
        DiffParseError: If hunks appear before the first file header, a
            header's paths cannot be recovered, or a hunk disagrees with its
            header counts
    """
    sections: List[List[str]] = []

    for lineno, line in enumerate(split_lines(raw, keepends=True), start=1):
        if line.startswith(FILE_HEADER_PREFIX):
            sections.append([line])
        elif sections:
            sections[-1].append(line)
        elif HUNK_HEADER_RE.match(line):
            raise DiffParseError(f"Hunk header at line {lineno} precedes any file header")

    records = [_build_record(section) for section in sections]
    logger.debug(f"Segmented diff into {len(records)} file records")
    return records


def _build_record(section: List[str]) -> FileDiffRecord:
    header = section[0].rstrip("\r\n")
    source_path, target_path = _resolve_paths(header, section[1:])
    body = "".join(section)

    # Validates hunk header counts against the lines that follow them
    parse_hunks(body)

    return FileDiffRecord(source_path=source_path, target_path=target_path, body=body)


def _resolve_paths(header: str, rest: List[str]) -> Tuple[str, str]:
    """
    Work out the source and target path of one file section.

    Extended header lines (``rename from``/``rename to``, ``---``/``+++``,
    new/deleted file modes) take precedence over the ``diff --git`` line,
    whose two paths cannot be told apart when they contain spaces.
    """
    header_paths = _split_header_paths(header[len(FILE_HEADER_PREFIX):])
    meta = _read_extended_headers(rest)

    source = meta.get("rename_from") or meta.get("minus")
    target = meta.get("rename_to") or meta.get("plus")

    if header_paths is not None:
        source = source or header_paths[0]
        target = target or header_paths[1]

    if "new_file" in meta:
        source = DEV_NULL
    if "deleted_file" in meta:
        target = DEV_NULL

    if source is None or target is None:
        fallback = _split_on_first_separator(header[len(FILE_HEADER_PREFIX):])
        if fallback is None:
            raise DiffParseError(f"Cannot read file paths from header: {header!r}")
        source = source or fallback[0]
        target = target or fallback[1]

    return source, target


def _split_header_paths(header: str) -> Optional[Tuple[str, str]]:
    """Split ``a/<path> b/<path>`` when it can be done without guessing."""
    if header.startswith('"') or header.endswith('"'):
        return _split_quoted(header)

    # Identical halves: "a/" + P + " b/" + P
    if len(header) % 2 == 1 and header.startswith("a/"):
        half = (len(header) - 5) // 2
        left, sep, right = header[2:2 + half], header[2 + half:5 + half], header[5 + half:]
        if sep == " b/" and left == right:
            return left, right

    if header.count(" b/") == 1 and header.startswith("a/"):
        left, right = header[2:].split(" b/")
        return left, right

    return None


def _split_on_first_separator(header: str) -> Optional[Tuple[str, str]]:
    if not header.startswith("a/") or " b/" not in header:
        return None
    left, right = header[2:].split(" b/", 1)
    return left, right


def _split_quoted(header: str) -> Optional[Tuple[str, str]]:
    """Split a header where git C-quoted one or both paths."""
    paths = []
    rest = header
    while rest:
        if rest.startswith('"'):
            path, rest = _unquote(rest)
        else:
            path, _, rest = rest.partition(" ")
        paths.append(path)
        rest = rest.lstrip(" ")

    if len(paths) != 2 or not paths[0].startswith("a/") or not paths[1].startswith("b/"):
        return None
    return paths[0][2:], paths[1][2:]


def _unquote(text: str) -> Tuple[str, str]:
    """
    Decode one C-quoted string at the start of ``text``.

    Returns:
        Tuple of (decoded string, remaining text after the closing quote)
    """
    out = bytearray()
    i = 1
    while i < len(text):
        char = text[i]
        if char == '"':
            return out.decode("utf-8", errors="replace"), text[i + 1:]
        if char == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            if nxt in "0123" and text[i + 1:i + 4].isdigit():
                out.append(int(text[i + 1:i + 4], 8))
                i += 4
                continue
            out.extend(_ESCAPES.get(nxt, nxt).encode("utf-8"))
            i += 2
            continue
        out.extend(char.encode("utf-8"))
        i += 1
    raise DiffParseError(f"Unterminated quoted path in header: {text!r}")


def _read_extended_headers(lines: List[str]) -> Dict[str, str]:
    """Collect path information from the lines between the file header and its first hunk."""
    meta: Dict[str, str] = {}
    for raw in lines:
        line = raw.rstrip("\r\n")
        if HUNK_HEADER_RE.match(line):
            break
        if line.startswith("rename from ") or line.startswith("copy from "):
            meta["rename_from"] = _clean_path(line.split(" from ", 1)[1])
        elif line.startswith("rename to ") or line.startswith("copy to "):
            meta["rename_to"] = _clean_path(line.split(" to ", 1)[1])
        elif line.startswith("--- "):
            meta["minus"] = _strip_prefix(_clean_path(line[4:]), "a/")
        elif line.startswith("+++ "):
            meta["plus"] = _strip_prefix(_clean_path(line[4:]), "b/")
        elif line.startswith("new file mode"):
            meta["new_file"] = "1"
        elif line.startswith("deleted file mode"):
            meta["deleted_file"] = "1"
    return meta


def _clean_path(value: str) -> str:
    # git terminates names containing spaces with a tab
    value = value.split("\t", 1)[0]
    if value.startswith('"'):
        value, _ = _unquote(value)
    return value


def _strip_prefix(path: str, prefix: str) -> str:
    if path == DEV_NULL:
        return path
    return path[len(prefix):] if path.startswith(prefix) else path
