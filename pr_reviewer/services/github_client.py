"""
GitHub client component.

Reads pull request metadata and diffs from the GitHub REST API and submits
review comments. Calls are not retried; failures surface as GitHubAPIError
and end the run.
"""

import time
from typing import Any, Dict, List, Optional

import httpx

from pr_reviewer.models.comment import CommentAnchor
from pr_reviewer.models.pr_event import ChangeRequestMetadata
from pr_reviewer.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/vnd.github+json"
DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
API_VERSION = "2022-11-28"


class GitHubAPIError(Exception):
    """Raised when a GitHub API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, endpoint: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class GitHubClient:
    """
    Thin async wrapper over the GitHub REST endpoints used for reviews.

    An ``httpx.AsyncClient`` can be injected (for example one built on
    ``httpx.MockTransport``); otherwise the client owns its own connection
    pool and closes it in ``close()``.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: Token used for the Authorization header
            base_url: REST API root (GitHub Enterprise uses a different one)
            timeout: Request timeout in seconds
            http_client: Optional preconfigured async HTTP client
        """
        self.base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": "pr-reviewer",
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        accept: str = JSON_MEDIA_TYPE,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send one request and raise GitHubAPIError on transport or HTTP errors.

        Args:
            method: HTTP method
            path: Path below the API root
            accept: Media type for the Accept header
            json: Optional JSON body

        Returns:
            Successful response
        """
        url = f"{self.base_url}{path}"
        headers = dict(self._headers, Accept=accept)
        start_time = time.time()

        try:
            response = await self._client.request(method, url, headers=headers, json=json)
        except httpx.HTTPError as e:
            duration_ms = (time.time() - start_time) * 1000
            log_api_call(logger, "github", path, method, duration_ms=duration_ms, error=str(e))
            raise GitHubAPIError(f"{method} {path} failed: {e}", endpoint=path) from e

        duration_ms = (time.time() - start_time) * 1000
        if response.is_error:
            message = f"{method} {path} returned {response.status_code}: {response.text[:200]}"
            log_api_call(
                logger,
                "github",
                path,
                method,
                status_code=response.status_code,
                duration_ms=duration_ms,
                error=message,
            )
            raise GitHubAPIError(message, status_code=response.status_code, endpoint=path)

        log_api_call(logger, "github", path, method, status_code=response.status_code, duration_ms=duration_ms)
        return response

    async def get_pr_metadata(self, owner: str, repo: str, number: int) -> ChangeRequestMetadata:
        """
        Retrieve the pull request title and description.

        Args:
            owner: Repository owner login
            repo: Repository name
            number: Pull request number

        Returns:
            ChangeRequestMetadata snapshot
        """
        response = await self._request("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        data = response.json()
        return ChangeRequestMetadata(
            owner=owner,
            repo_name=repo,
            request_number=number,
            title=data.get("title") or "",
            description=data.get("body") or "",
        )

    async def get_pr_diff(self, owner: str, repo: str, number: int) -> str:
        """Retrieve the full unified diff of a pull request."""
        response = await self._request(
            "GET", f"/repos/{owner}/{repo}/pulls/{number}", accept=DIFF_MEDIA_TYPE
        )
        return response.text

    async def compare_commits_diff(self, owner: str, repo: str, base: str, head: str) -> str:
        """Retrieve the unified diff between two commits."""
        response = await self._request(
            "GET", f"/repos/{owner}/{repo}/compare/{base}...{head}", accept=DIFF_MEDIA_TYPE
        )
        return response.text

    async def create_review(
        self,
        owner: str,
        repo: str,
        number: int,
        anchors: List[CommentAnchor],
    ) -> Dict[str, Any]:
        """
        Submit all anchors as a single ``COMMENT`` review.

        Args:
            owner: Repository owner login
            repo: Repository name
            number: Pull request number
            anchors: Inline comments to attach

        Returns:
            Created review as returned by GitHub
        """
        logger.info(f"Posting review with {len(anchors)} comments to {owner}/{repo}#{number}")
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/pulls/{number}/reviews",
            json={
                "event": "COMMENT",
                "comments": [anchor.to_payload() for anchor in anchors],
            },
        )
        return response.json()
