"""API response data models."""

from pydantic import BaseModel


class WebhookResponse(BaseModel):
    """Response from webhook handler."""

    status: str
    message: str


class ReviewResult(BaseModel):
    """Outcome of processing one pull request event."""

    status: str  # posted, ignored, no_diff, no_files, no_comments
    files_reviewed: int = 0
    comments_posted: int = 0
