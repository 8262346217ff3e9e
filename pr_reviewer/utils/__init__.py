"""
Utility modules for the PR reviewer.
"""

from pr_reviewer.utils.logging import (
    get_logger,
    setup_logging,
    ContextLoggerAdapter,
    JSONFormatter,
    log_pr_event,
    log_api_call,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "ContextLoggerAdapter",
    "JSONFormatter",
    "log_pr_event",
    "log_api_call",
]
