"""
Path Filter.

Decides which segmented file records are sent for review. Deleted files and
paths matching any exclusion glob are skipped.
"""

from fnmatch import fnmatchcase
from typing import Iterable, List

from pr_reviewer.models.diff import DEV_NULL, FileDiffRecord
from pr_reviewer.utils.logging import get_logger

logger = get_logger(__name__)


def parse_exclude_patterns(value: str) -> List[str]:
    """
    Split a configured exclusion list into individual glob patterns.

    Patterns may be separated by newlines or commas; surrounding whitespace
    and blank entries are dropped.
    """
    patterns = []
    for line in value.splitlines():
        for pattern in line.split(","):
            pattern = pattern.strip()
            if pattern:
                patterns.append(pattern)
    return patterns


def should_analyze(record: FileDiffRecord, exclude_patterns: Iterable[str]) -> bool:
    """
    Return True if the record's target file should be reviewed.

    Matching follows shell-glob rules where ``*`` also crosses ``/``, so
    ``*.md`` excludes ``docs/readme.md``.
    """
    if record.target_path == DEV_NULL:
        return False

    for pattern in exclude_patterns:
        pattern = pattern.strip()
        if pattern and fnmatchcase(record.target_path, pattern):
            return False
    return True


def filter_records(records: Iterable[FileDiffRecord], exclude_patterns: Iterable[str]) -> List[FileDiffRecord]:
    """Keep only the records that should be analyzed."""
    exclude_patterns = list(exclude_patterns)
    kept = []
    for record in records:
        if should_analyze(record, exclude_patterns):
            kept.append(record)
        elif record.is_deleted:
            logger.info(f"Skipping deleted file {record.source_path}", extra={"file_path": record.source_path})
        else:
            logger.info(f"Skipping excluded file {record.target_path}", extra={"file_path": record.target_path})
    return kept
