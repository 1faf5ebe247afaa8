"""Publish a commit status with bounded retry.

Any failure of the remote call is retried on a fibonacci schedule
(1s, 1s, 2s, 3s, 5s, 8s with the default base). A response that is not
a status, or has no id, is a contract violation and fails immediately.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Union

from commit_status.errors import EmptyStatusIDError, StatusResponseError
from commit_status.github.client import StatusClient
from commit_status.github.models import RepoStatus, StatusCreateRequest
from commit_status.models import StatusConfig
from commit_status.retry import Fatal, Retryable, retry_with_backoff

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5
DEFAULT_SERVER_URL = "https://github.com"


@dataclass(frozen=True)
class PublishResult:
    """A status that GitHub accepted, plus where to look at it."""

    status: RepoStatus
    state: str
    commit_url: str

    def summary(self) -> str:
        return (
            f"Updated status:\n"
            f"ID: {self.status.id}\n"
            f"State: {self.state}\n"
            f"URL: {self.commit_url}"
        )


def commit_url(server_url: str, owner: str, repository: str, sha: str) -> str:
    """Browser URL of a commit, e.g. https://github.com/o/r/commits/abc."""
    return f"{server_url.rstrip('/')}/{owner}/{repository}/commits/{sha}"


def build_status_request(config: StatusConfig) -> StatusCreateRequest:
    return StatusCreateRequest(
        state=config.state,
        context=config.context,
        description=config.description,
        target_url=config.details_url,
    )


async def publish_status(
    config: StatusConfig,
    client: StatusClient,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    server_url: str = DEFAULT_SERVER_URL,
) -> PublishResult:
    """Create the status described by a validated configuration.

    Args:
        config: Validated configuration (token and state are set).
        client: Anything implementing create_status.
        max_retries: Retries after the first attempt; 0 disables retry.
        base_delay: Seconds for the first backoff step.
        sleep: Awaitable used between attempts.
        server_url: Web host used to build the commit URL.

    Returns:
        PublishResult for the created status.

    Raises:
        Exception: The last error from the client once retries are
            exhausted (usually GitHubAPIError or httpx.HTTPError).
        StatusResponseError: If GitHub returned something other than a
            status with an id.
    """
    request = build_status_request(config)
    attempts = 0

    async def attempt() -> Union[RepoStatus, Retryable, Fatal]:
        nonlocal attempts
        attempts += 1
        try:
            status = await client.create_status(
                config.owner,
                config.repository,
                config.sha,
                request,
            )
        except StatusResponseError as e:
            return Fatal(e)
        except Exception as e:
            logger.error(
                "Failed to create status (attempt %d): %s",
                attempts,
                e,
                extra={
                    "attempt": attempts,
                    "owner": config.owner,
                    "repository": config.repository,
                    "sha": config.sha,
                },
            )
            return Retryable(e)

        if status.id is None:
            return Fatal(EmptyStatusIDError())
        return status

    status = await retry_with_backoff(
        attempt,
        max_retries=max_retries,
        base_delay=base_delay,
        sleep=sleep,
    )

    result = PublishResult(
        status=status,
        state=request.state.value,
        commit_url=commit_url(server_url, config.owner, config.repository, config.sha),
    )
    logger.debug(
        "Status created",
        extra={
            "status_id": status.id,
            "state": result.state,
            "attempts": attempts,
        },
    )
    return result
