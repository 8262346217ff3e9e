"""
Model Response Interpreter.

Turns the raw text of a model reply into ReviewFinding objects. Replies that
cannot be read are logged and reported as ``None`` so a single bad answer
never stops the review of other files.
"""

import json
import re
from typing import List, Optional

from pydantic import ValidationError

from pr_reviewer.models.comment import ReviewEnvelope, ReviewFinding
from pr_reviewer.utils.logging import get_logger

logger = get_logger(__name__)

# Models without JSON mode often wrap the object in a Markdown fence
_FENCE_RE = re.compile(r"^```[\w-]*\s*\n(?P<body>.*?)\n?```$", re.DOTALL)


def interpret(raw_model_text: Optional[str]) -> Optional[List[ReviewFinding]]:
    """
    Parse a model reply into review findings.

    Args:
        raw_model_text: Text returned by the model, possibly empty

    Returns:
        Findings (possibly empty), or None if the reply is not valid JSON
        or does not match the ``{"reviews": [...]}`` envelope
    """
    text = (raw_model_text or "").strip() or "{}"

    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group("body").strip() or "{}"

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deeply nested input overflows the decoder
        logger.warning(f"Model response is not valid JSON: {e}", extra={"response_preview": text[:200]})
        return None

    try:
        envelope = ReviewEnvelope.model_validate(data)
    except ValidationError as e:
        logger.warning(
            f"Model response does not match the review schema: {e.error_count()} error(s)",
            extra={"response_preview": text[:200]},
        )
        return None

    return envelope.reviews
