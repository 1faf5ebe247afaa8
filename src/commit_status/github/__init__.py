"""GitHub API client for commit statuses.

Error responses are mapped onto GitHubAPIError and RateLimitError; the
caller owns retry policy.
"""

from commit_status.github.client import (
    GitHubAPIError,
    GitHubClient,
    RateLimitError,
    StatusClient,
)
from commit_status.github.models import RepoStatus, StatusCreateRequest

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "RateLimitError",
    "RepoStatus",
    "StatusClient",
    "StatusCreateRequest",
]
