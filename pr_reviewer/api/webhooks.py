"""
Webhook endpoints for GitHub pull request events.
"""

import hashlib
import hmac
import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Request

from pr_reviewer.config import Settings, get_settings
from pr_reviewer.models.api_response import WebhookResponse
from pr_reviewer.models.pr_event import PREvent
from pr_reviewer.services.pr_monitor import create_pr_monitor
from pr_reviewer.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

SIGNATURE_PREFIX = "sha256="


def verify_webhook_signature(payload: bytes, signature: Optional[str], secret: Optional[str]) -> bool:
    """
    Verify the ``X-Hub-Signature-256`` header of a GitHub delivery.

    Args:
        payload: Raw request payload
        signature: Signature from request header (``sha256=<hex>``)
        secret: Shared webhook secret

    Returns:
        True if signature is valid, False otherwise
    """
    if not signature or not secret or not signature.startswith(SIGNATURE_PREFIX):
        return False

    expected_signature = hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()

    # Compare signatures (constant-time comparison)
    return hmac.compare_digest(signature[len(SIGNATURE_PREFIX):], expected_signature)


async def process_pr_event_async(event: PREvent, settings: Settings) -> None:
    """
    Review a pull request in the background.

    Args:
        event: PR event to process
        settings: Application settings
    """
    try:
        async with create_pr_monitor(settings) as monitor:
            await monitor.process_event(event)
    except Exception as e:
        logger.error(f"Error processing PR event asynchronously: {e}", exc_info=True)


@router.post("/github/pull_request", response_model=WebhookResponse)
async def handle_pr_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_hub_signature: Optional[str] = Header(None, alias="X-Hub-Signature-256"),
    x_github_event: Optional[str] = Header(None, alias="X-GitHub-Event"),
    settings: Settings = Depends(get_settings),
) -> WebhookResponse:
    """
    Receive GitHub ``pull_request`` webhook deliveries.

    This endpoint:
    1. Validates the webhook signature
    2. Ignores deliveries other than ``pull_request``
    3. Parses the PR event payload
    4. Schedules the review and returns immediately

    Raises:
        HTTPException: If signature validation fails or payload is invalid
    """
    payload = await request.body()

    if not verify_webhook_signature(payload, x_hub_signature, settings.webhook_secret):
        logger.warning("Invalid webhook signature received")
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    if x_github_event != "pull_request":
        logger.info(f"Ignoring event type: {x_github_event}")
        return WebhookResponse(status="ignored", message=f"Event type {x_github_event} not processed")

    try:
        payload_json: Dict[str, Any] = json.loads(payload)
        pr_event = PREvent.from_payload(payload_json)
    except ValueError as e:
        logger.error(f"Invalid PR event payload: {e}")
        raise HTTPException(status_code=400, detail="Invalid PR event payload")

    logger.info(
        f"Received webhook for {pr_event.owner}/{pr_event.repo_name}#{pr_event.number}",
        extra={"action": pr_event.action},
    )

    background_tasks.add_task(process_pr_event_async, pr_event, settings)

    return WebhookResponse(
        status="accepted",
        message=f"PR event for #{pr_event.number} accepted for processing",
    )
