"""Business logic services package."""

from pr_reviewer.services.github_client import GitHubAPIError, GitHubClient
from pr_reviewer.services.llm_client import LLMClient, LLMClientError
from pr_reviewer.services.pr_monitor import PRMonitor, create_pr_monitor
from pr_reviewer.services.review_orchestrator import ReviewOrchestrator

__all__ = [
    'GitHubClient',
    'GitHubAPIError',
    'LLMClient',
    'LLMClientError',
    'ReviewOrchestrator',
    'PRMonitor',
    'create_pr_monitor',
]
