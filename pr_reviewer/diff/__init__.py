"""Unified diff segmentation, hunk indexing and path filtering."""

from pr_reviewer.diff.hunks import DiffLineIndex, DiffParseError, parse_hunks
from pr_reviewer.diff.path_filter import filter_records, parse_exclude_patterns, should_analyze
from pr_reviewer.diff.segmenter import segment

__all__ = [
    "DiffLineIndex",
    "DiffParseError",
    "parse_hunks",
    "segment",
    "should_analyze",
    "filter_records",
    "parse_exclude_patterns",
]
