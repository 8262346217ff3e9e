"""Prompting, response interpretation and comment anchoring for one file diff."""

from pr_reviewer.review.anchor_mapper import AnchorPolicy, to_anchors
from pr_reviewer.review.prompt_builder import build_prompt
from pr_reviewer.review.response_interpreter import interpret

__all__ = [
    "AnchorPolicy",
    "to_anchors",
    "build_prompt",
    "interpret",
]
