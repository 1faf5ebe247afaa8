"""Entry point for the commit status action.

Reads action inputs from the environment, resolves and validates them,
publishes the status and exits 0. Any unrecovered error is logged as an
::error:: annotation and the process exits 1.
"""

import asyncio
import logging
import os
import sys
from functools import partial
from typing import Awaitable, Callable, Mapping, Optional

import httpx
from pydantic import ValidationError

from .actions import configure_logging, get_input, mask_value
from .config import ActionSettings, get_settings
from .errors import CommitStatusError
from .github.client import GitHubAPIError, GitHubClient, StatusClient
from .inputs import resolve_config
from .publisher import publish_status

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, ActionSettings], StatusClient]


def _default_client_factory(token: str, settings: ActionSettings) -> GitHubClient:
    return GitHubClient(
        token=token,
        base_url=settings.api_url,
        timeout=settings.timeout,
    )


def _log_configuration(settings: ActionSettings) -> None:
    logger.debug(
        "Action settings",
        extra={
            "api_url": settings.api_url,
            "server_url": settings.server_url,
            "max_retries": settings.max_retries,
            "retry_base_delay": settings.retry_base_delay,
            "timeout": settings.timeout,
        },
    )


async def run(
    environ: Optional[Mapping[str, str]] = None,
    client_factory: Optional[ClientFactory] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    settings: Optional[ActionSettings] = None,
) -> int:
    """Run the action once and return the process exit code.

    Args:
        environ: Environment to read inputs and defaults from.
            Defaults to os.environ.
        client_factory: Builds the status client from the token and
            settings. Defaults to an httpx-backed GitHubClient.
        sleep: Awaitable used between retry attempts.
        settings: Runtime settings. Defaults to get_settings().

    Returns:
        0 when the status was published, 1 otherwise.
    """
    env = os.environ if environ is None else environ
    factory = client_factory or _default_client_factory

    try:
        # Mask the token before anything else is logged
        mask_value(get_input("token", env))

        if settings is None:
            settings = get_settings()
        logging.getLogger().setLevel(settings.log_level)
        _log_configuration(settings)

        config = resolve_config(partial(get_input, environ=env), env.get)

        client = factory(config.token.get_secret_value(), settings)
        try:
            result = await publish_status(
                config,
                client,
                max_retries=settings.max_retries,
                base_delay=settings.retry_base_delay,
                sleep=sleep,
                server_url=settings.server_url,
            )
        finally:
            close = getattr(client, "close", None)
            if close is not None:
                await close()

    except (CommitStatusError, GitHubAPIError, httpx.HTTPError, ValidationError) as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        # A client may fail in ways the httpx-backed one does not
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    logger.info(result.summary())
    return 0


def main() -> None:
    """Console script entry point."""
    configure_logging()
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
