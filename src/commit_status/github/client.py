"""GitHub API client for commit statuses.

This module provides an async wrapper around the one GitHub endpoint the
action needs: creating a commit status. It maps error responses onto
GitHubAPIError / RateLimitError so callers can decide whether to retry.

The client makes exactly one request per call. Retry policy belongs to
the caller (see commit_status/publisher.py).
"""

import logging
import time
from typing import Any, Dict, Optional, Protocol

import httpx

from commit_status.errors import MalformedStatusError
from commit_status.github.models import RepoStatus, StatusCreateRequest


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when a GitHub API request fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the response.
        response_body: Response body from GitHub API.
        request_url: The URL that was requested.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        request_url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.request_url = request_url
        super().__init__(message)


class RateLimitError(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded.

    Attributes:
        reset_at: Unix timestamp when the rate limit resets.
        retry_after: Seconds to wait before retrying.
    """

    def __init__(
        self,
        message: str,
        reset_at: Optional[int] = None,
        retry_after: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.reset_at = reset_at
        self.retry_after = retry_after


class StatusClient(Protocol):
    """Anything that can create a commit status."""

    async def create_status(
        self,
        owner: str,
        repo: str,
        sha: str,
        request: StatusCreateRequest,
    ) -> RepoStatus:
        ...


class GitHubClient:
    """Async GitHub API client for creating commit statuses.

    Supports both github.com and GitHub Enterprise Server through
    `base_url`.

    Attributes:
        token: GitHub API token (PAT, GITHUB_TOKEN or GitHub App token).
        base_url: Base URL for GitHub API (default: https://api.github.com).
        timeout: Request timeout in seconds.

    Example:
        >>> async with GitHubClient(token="ghp_xxx") as client:
        ...     await client.create_status("owner", "repo", sha, request)
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the GitHub client.

        Args:
            token: GitHub API token for authentication.
            base_url: Base URL for GitHub API.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._default_headers(),
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "commit-status-action/1.0",
        }

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any,
    ) -> None:
        await self.close()

    def _parse_int_header(
        self,
        headers: httpx.Headers,
        name: str,
    ) -> Optional[int]:
        """Parse an integer header value, None if missing or invalid."""
        value = headers.get(name)
        if value is not None:
            try:
                return int(value)
            except ValueError:
                pass
        return None

    def _is_rate_limited(self, response: httpx.Response) -> bool:
        if response.status_code == 429:
            return True
        if response.status_code == 403:
            remaining = self._parse_int_header(
                response.headers,
                "x-ratelimit-remaining",
            )
            return remaining == 0
        return False

    def _rate_limit_error(self, response: httpx.Response) -> RateLimitError:
        """Build a RateLimitError from the rate limit headers."""
        reset_at = self._parse_int_header(response.headers, "x-ratelimit-reset")

        retry_after = None
        if reset_at is not None:
            retry_after = max(0, reset_at - int(time.time()))

        # Retry-After wins when both are present
        retry_after_header = self._parse_int_header(response.headers, "retry-after")
        if retry_after_header is not None:
            retry_after = retry_after_header

        logger.warning(
            "GitHub API rate limit exceeded",
            extra={
                "reset_at": reset_at,
                "retry_after": retry_after,
                "limit": self._parse_int_header(response.headers, "x-ratelimit-limit"),
                "used": self._parse_int_header(response.headers, "x-ratelimit-used"),
            },
        )

        return RateLimitError(
            message="GitHub API rate limit exceeded",
            status_code=response.status_code,
            response_body=response.text,
            request_url=str(response.request.url),
            reset_at=reset_at,
            retry_after=retry_after,
        )

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make a single HTTP request and map error responses to exceptions.

        Args:
            method: HTTP method.
            path: API path (e.g., /repos/owner/repo/statuses/sha).
            json_data: Optional JSON body for the request.

        Returns:
            The HTTP response from GitHub.

        Raises:
            RateLimitError: If rate limit is exceeded.
            GitHubAPIError: If GitHub returns any other error status.
            httpx.HTTPError: On transport failures (timeouts, DNS, ...).
        """
        response = await self.client.request(
            method=method,
            url=path,
            json=json_data,
        )

        if self._is_rate_limited(response):
            raise self._rate_limit_error(response)

        if response.status_code >= 400:
            error_body = response.text
            logger.debug(
                "GitHub API error",
                extra={
                    "status_code": response.status_code,
                    "path": path,
                    "method": method,
                    "response_body": error_body[:500],
                },
            )
            raise GitHubAPIError(
                message=f"GitHub API error: {response.status_code} {error_body[:200]}".rstrip(),
                status_code=response.status_code,
                response_body=error_body,
                request_url=str(response.url),
            )

        return response

    async def create_status(
        self,
        owner: str,
        repo: str,
        sha: str,
        request: StatusCreateRequest,
    ) -> RepoStatus:
        """Create a commit status.

        Creating a status for a context that already has one on the same
        commit replaces it in GitHub's combined view.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            sha: Commit sha to attach the status to.
            request: State, context, description and target URL.

        Returns:
            The created status as returned by GitHub.

        Raises:
            GitHubAPIError: If the request fails.
            MalformedStatusError: If a successful response is not a status
                object.
        """
        path = f"/repos/{owner}/{repo}/statuses/{sha}"

        logger.debug(
            "Creating commit status",
            extra={
                "owner": owner,
                "repo": repo,
                "sha": sha,
                "state": request.state.value,
                "context": request.context,
            },
        )

        response = await self._request(
            method="POST",
            path=path,
            json_data=request.to_payload(),
        )

        # JSONDecodeError and pydantic.ValidationError are both ValueErrors
        try:
            return RepoStatus.from_github_response(response.json())
        except ValueError as e:
            raise MalformedStatusError(
                f"unexpected create-status response ({response.status_code}): "
                f"{response.text[:200]}"
            ) from e
