"""
Comment Anchor Mapper.

Maps model findings onto inline comment anchors for one file. Findings are
checked against the lines the file's hunks actually show on the chosen side,
because the review API rejects anchors outside the diff.
"""

from enum import Enum
from typing import Iterable, List

from pr_reviewer.diff.hunks import DiffLineIndex
from pr_reviewer.models.comment import CommentAnchor, ReviewFinding
from pr_reviewer.models.diff import DEV_NULL, FileDiffRecord
from pr_reviewer.utils.logging import get_logger

logger = get_logger(__name__)


class AnchorPolicy(str, Enum):
    """What to do with findings that point outside the visible hunks."""

    DROP = "drop"
    FORWARD = "forward"


def to_anchors(
    record: FileDiffRecord,
    findings: Iterable[ReviewFinding],
    policy: AnchorPolicy = AnchorPolicy.DROP,
) -> List[CommentAnchor]:
    """
    Convert findings for one file into comment anchors.

    Args:
        record: File diff the findings were produced for
        findings: Normalized model findings
        policy: Handling of findings outside the diff's hunks

    Returns:
        One anchor per accepted finding; empty for deleted files
    """
    if not record.target_path or record.target_path == DEV_NULL:
        return []

    file_logger = logger.with_context(file_path=record.target_path)
    index = DiffLineIndex.from_body(record.body) if policy == AnchorPolicy.DROP else None

    anchors = []
    for finding in findings:
        line = int(finding.line_number)
        if index is not None and not index.contains(finding.side, line):
            file_logger.warning(
                f"Dropping finding on {finding.side.value} line {line}: not part of the diff"
            )
            continue
        anchors.append(
            CommentAnchor(
                path=record.target_path,
                side=finding.side,
                line=line,
                body=finding.review_comment,
            )
        )
    return anchors
