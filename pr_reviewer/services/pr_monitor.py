"""
PR Monitor component.

Dispatches pull request events: fetches the right diff for the event,
segments and filters it, runs the review and posts the resulting comments
as one batch.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from pr_reviewer.config import Settings
from pr_reviewer.diff.path_filter import filter_records, parse_exclude_patterns
from pr_reviewer.diff.segmenter import segment
from pr_reviewer.models.api_response import ReviewResult
from pr_reviewer.models.pr_event import PREvent
from pr_reviewer.review.anchor_mapper import AnchorPolicy
from pr_reviewer.services.github_client import GitHubClient
from pr_reviewer.services.llm_client import LLMClient
from pr_reviewer.services.review_orchestrator import ReviewOrchestrator
from pr_reviewer.utils.logging import get_logger, log_pr_event

logger = get_logger(__name__)

OPENED = "opened"
SYNCHRONIZE = "synchronize"


class PRMonitor:
    """Processes pull request events end to end."""

    def __init__(
        self,
        github_client: GitHubClient,
        orchestrator: ReviewOrchestrator,
        exclude_patterns: List[str],
    ):
        """
        Initialize the PR Monitor.

        Args:
            github_client: Hosting collaborator for metadata, diffs and posting
            orchestrator: Per-file review pipeline
            exclude_patterns: Glob patterns of paths to skip
        """
        self.github_client = github_client
        self.orchestrator = orchestrator
        self.exclude_patterns = exclude_patterns

    async def process_event(self, event: PREvent) -> ReviewResult:
        """
        Review the pull request an event refers to.

        Hosting API errors and malformed diffs propagate to the caller.

        Args:
            event: Parsed pull request event

        Returns:
            ReviewResult describing what was done
        """
        log_pr_event(logger, event.owner, event.repo_name, event.number, event.action)
        pr_logger = logger.with_context(owner=event.owner, repo=event.repo_name, pr_number=event.number)

        if event.action not in (OPENED, SYNCHRONIZE):
            pr_logger.info(f"Unsupported event action: {event.action}")
            return ReviewResult(status="ignored")

        metadata = await self.github_client.get_pr_metadata(event.owner, event.repo_name, event.number)
        diff = await self._fetch_diff(event)

        if not diff or not diff.strip():
            pr_logger.info("No diff found")
            return ReviewResult(status="no_diff")

        records = filter_records(segment(diff), self.exclude_patterns)
        if not records:
            pr_logger.info("No files to analyze")
            return ReviewResult(status="no_files")

        anchors = await self.orchestrator.run(records, metadata)
        if not anchors:
            pr_logger.info("No review comments produced")
            return ReviewResult(status="no_comments", files_reviewed=len(records))

        await self.github_client.create_review(event.owner, event.repo_name, event.number, anchors)
        pr_logger.info(f"Posted review with {len(anchors)} comments")
        return ReviewResult(status="posted", files_reviewed=len(records), comments_posted=len(anchors))

    async def _fetch_diff(self, event: PREvent) -> str:
        if event.action == SYNCHRONIZE:
            if event.before and event.after:
                return await self.github_client.compare_commits_diff(
                    event.owner, event.repo_name, event.before, event.after
                )
            logger.warning("Synchronize event without before/after commits, reviewing full diff")
        return await self.github_client.get_pr_diff(event.owner, event.repo_name, event.number)


@asynccontextmanager
async def create_pr_monitor(settings: Settings) -> AsyncIterator[PRMonitor]:
    """
    Build a PRMonitor and its clients from settings, closing them on exit.

    Args:
        settings: Application settings

    Yields:
        Ready-to-use PRMonitor
    """
    async with GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.request_timeout_seconds,
    ) as github_client:
        llm_client = LLMClient.from_settings(settings)
        orchestrator = ReviewOrchestrator(
            llm_client,
            anchor_policy=AnchorPolicy(settings.anchor_policy.lower()),
            max_concurrency=settings.max_concurrency,
        )
        try:
            yield PRMonitor(github_client, orchestrator, parse_exclude_patterns(settings.exclude))
        finally:
            await llm_client.close()
