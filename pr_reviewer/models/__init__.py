"""Data models for the GitHub PR reviewer."""

from .api_response import ReviewResult, WebhookResponse
from .comment import CommentAnchor, ReviewEnvelope, ReviewFinding, Side
from .diff import DEV_NULL, DiffLine, FileDiffRecord, Hunk, LineKind
from .pr_event import ChangeRequestMetadata, PREvent

__all__ = [
    # Diff models
    "DEV_NULL",
    "LineKind",
    "DiffLine",
    "Hunk",
    "FileDiffRecord",
    # Comment models
    "Side",
    "ReviewFinding",
    "ReviewEnvelope",
    "CommentAnchor",
    # PR event models
    "ChangeRequestMetadata",
    "PREvent",
    # API response models
    "WebhookResponse",
    "ReviewResult",
]
