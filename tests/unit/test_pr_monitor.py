"""
Unit tests for the PR monitor.
"""

from unittest.mock import AsyncMock, patch

import pytest

from pr_reviewer.config import Settings
from pr_reviewer.diff.hunks import DiffParseError
from pr_reviewer.models import CommentAnchor, PREvent, Side
from pr_reviewer.services.github_client import GitHubAPIError, GitHubClient
from pr_reviewer.services.pr_monitor import PRMonitor, create_pr_monitor
from pr_reviewer.services.review_orchestrator import ReviewOrchestrator

ANCHOR = CommentAnchor(path="src/app.ts", side=Side.RIGHT, line=42, body="X")


@pytest.fixture
def mock_github(metadata, app_diff, readme_diff):
    client = AsyncMock(spec=GitHubClient)
    client.get_pr_metadata.return_value = metadata
    client.get_pr_diff.return_value = app_diff + readme_diff
    client.compare_commits_diff.return_value = app_diff
    return client


@pytest.fixture
def mock_orchestrator():
    orchestrator = AsyncMock(spec=ReviewOrchestrator)
    orchestrator.run.return_value = [ANCHOR]
    return orchestrator


@pytest.fixture
def monitor(mock_github, mock_orchestrator):
    return PRMonitor(mock_github, mock_orchestrator, exclude_patterns=["*.md"])


def _event(action, **kwargs):
    return PREvent(action=action, owner="octo", repo_name="demo", number=7, **kwargs)


class TestPRMonitor:
    """Test suite for PRMonitor.process_event."""

    @pytest.mark.asyncio
    async def test_opened_reviews_full_diff_and_posts_once(self, monitor, mock_github, mock_orchestrator, metadata):
        result = await monitor.process_event(_event("opened"))

        assert result.status == "posted"
        assert result.files_reviewed == 1
        assert result.comments_posted == 1
        mock_github.get_pr_diff.assert_awaited_once_with("octo", "demo", 7)
        mock_github.compare_commits_diff.assert_not_awaited()

        records, passed_metadata = mock_orchestrator.run.await_args.args
        assert [r.target_path for r in records] == ["src/app.ts"]
        assert passed_metadata == metadata
        mock_github.create_review.assert_awaited_once_with("octo", "demo", 7, [ANCHOR])

    @pytest.mark.asyncio
    async def test_synchronize_compares_commits(self, monitor, mock_github):
        result = await monitor.process_event(_event("synchronize", before="abc", after="def"))

        assert result.status == "posted"
        mock_github.compare_commits_diff.assert_awaited_once_with("octo", "demo", "abc", "def")
        mock_github.get_pr_diff.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_synchronize_without_commits_uses_full_diff(self, monitor, mock_github):
        await monitor.process_event(_event("synchronize"))

        mock_github.get_pr_diff.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unsupported_action_is_noop(self, monitor, mock_github, mock_orchestrator):
        result = await monitor.process_event(_event("closed"))

        assert result.status == "ignored"
        mock_github.get_pr_metadata.assert_not_awaited()
        mock_orchestrator.run.assert_not_awaited()
        mock_github.create_review.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_diff_is_noop(self, monitor, mock_github, mock_orchestrator):
        mock_github.get_pr_diff.return_value = ""

        result = await monitor.process_event(_event("opened"))

        assert result.status == "no_diff"
        mock_orchestrator.run.assert_not_awaited()
        mock_github.create_review.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_all_files_filtered_is_noop(self, monitor, mock_github, mock_orchestrator, readme_diff, deleted_diff):
        mock_github.get_pr_diff.return_value = readme_diff + deleted_diff

        result = await monitor.process_event(_event("opened"))

        assert result.status == "no_files"
        mock_orchestrator.run.assert_not_awaited()
        mock_github.create_review.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_comments_never_posts(self, monitor, mock_github, mock_orchestrator):
        mock_orchestrator.run.return_value = []

        result = await monitor.process_event(_event("opened"))

        assert result.status == "no_comments"
        mock_github.create_review.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_hosting_errors_propagate(self, monitor, mock_github):
        mock_github.get_pr_metadata.side_effect = GitHubAPIError("boom", status_code=502)

        with pytest.raises(GitHubAPIError):
            await monitor.process_event(_event("opened"))

        mock_github.create_review.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_post_failure_propagates(self, monitor, mock_github):
        mock_github.create_review.side_effect = GitHubAPIError("unprocessable", status_code=422)

        with pytest.raises(GitHubAPIError):
            await monitor.process_event(_event("opened"))

    @pytest.mark.asyncio
    async def test_malformed_diff_is_fatal(self, monitor, mock_github, mock_orchestrator):
        mock_github.get_pr_diff.return_value = "@@ -1 +1 @@\n-a\n+b\n"

        with pytest.raises(DiffParseError):
            await monitor.process_event(_event("opened"))

        mock_orchestrator.run.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_pr_monitor_wires_settings():
    settings = Settings(
        github_token="gh-token",
        openai_api_key="sk-test",
        exclude="*.md\n*.lock",
        anchor_policy="FORWARD",
        max_concurrency=2,
    )

    with patch("pr_reviewer.services.llm_client.AsyncOpenAI") as mock_openai:
        mock_openai.return_value.close = AsyncMock()
        async with create_pr_monitor(settings) as monitor:
            assert monitor.exclude_patterns == ["*.md", "*.lock"]
            assert monitor.orchestrator.anchor_policy.value == "forward"
            assert monitor.orchestrator.max_concurrency == 2
            assert monitor.github_client.base_url == "https://api.github.com"

        mock_openai.return_value.close.assert_awaited_once()
