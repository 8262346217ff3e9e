"""Review finding and comment anchor models."""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Side(str, Enum):
    """Half of the diff's dual line numbering a comment refers to."""

    LEFT = "LEFT"  # pre-change file
    RIGHT = "RIGHT"  # post-change file


class ReviewFinding(BaseModel):
    """One normalized review item produced by the model."""

    model_config = ConfigDict(populate_by_name=True)

    line_number: int = Field(alias="lineNumber")
    side: Side
    review_comment: str = Field(alias="reviewComment")


class ReviewEnvelope(BaseModel):
    """Top-level JSON object the model is asked to return."""

    reviews: List[ReviewFinding]


class CommentAnchor(BaseModel):
    """Inline comment ready to be submitted with a pull request review."""

    model_config = ConfigDict(frozen=True)

    path: str
    side: Side
    line: int
    body: str

    def to_payload(self) -> Dict[str, Any]:
        """Render the anchor in the shape the review API expects."""
        return {
            "path": self.path,
            "side": self.side.value,
            "line": self.line,
            "body": self.body,
        }
