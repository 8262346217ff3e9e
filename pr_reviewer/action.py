"""
GitHub Actions entry point.

Reads the triggering event from ``GITHUB_EVENT_PATH``, reviews the pull
request and exits non-zero if anything fails.
"""

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Optional

from pr_reviewer.config import Settings, get_settings
from pr_reviewer.models.api_response import ReviewResult
from pr_reviewer.models.pr_event import PREvent
from pr_reviewer.services.pr_monitor import create_pr_monitor
from pr_reviewer.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


def load_event(event_path: str) -> Optional[PREvent]:
    """
    Load the pull request event written by the Actions runner.

    Args:
        event_path: Path to the event JSON file

    Returns:
        Parsed PREvent, or None if the payload does not describe a pull request
    """
    payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict) or ("pull_request" not in payload and "number" not in payload):
        return None
    return PREvent.from_payload(payload)


async def run_action(settings: Settings, event_path: str) -> ReviewResult:
    """
    Review the pull request described by the event file.

    Args:
        settings: Application settings
        event_path: Path to the event JSON file

    Returns:
        ReviewResult of the run
    """
    event = load_event(event_path)
    if event is None:
        logger.info("Event payload has no pull request, nothing to review")
        return ReviewResult(status="ignored")

    async with create_pr_monitor(settings) as monitor:
        return await monitor.process_event(event)


def main() -> None:
    """Console entry point."""
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        settings = get_settings()
        setup_logging(settings.log_level)

        event_path = os.getenv("GITHUB_EVENT_PATH")
        if not event_path:
            raise RuntimeError("GITHUB_EVENT_PATH is not set")

        event_name = os.getenv("GITHUB_EVENT_NAME")
        if event_name and event_name not in PULL_REQUEST_EVENTS:
            logger.info(f"Unsupported event type: {event_name}, nothing to review")
            return

        logger.info(f"Handling {event_name or 'unknown'} event")
        result = asyncio.run(run_action(settings, event_path))
        logger.info(f"Review finished: {result.status}", extra=result.model_dump())

    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
