"""Bounded retry with fibonacci backoff.

An operation reports failure by returning a tagged outcome instead of
raising:

- Retryable(err): transient, try again after the next backoff delay
- Fatal(err): give up now, the error is raised as-is

Anything else the operation returns is treated as the result.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Retryable:
    """A failed attempt that may succeed if tried again."""

    error: BaseException


@dataclass(frozen=True)
class Fatal:
    """A failed attempt that must not be retried."""

    error: BaseException


Outcome = Union[T, Retryable, Fatal]


def fibonacci_backoff(base: float) -> Iterator[float]:
    """Yield delays base*1, base*1, base*2, base*3, base*5, ... forever."""
    a, b = 1, 1
    while True:
        yield base * a
        a, b = b, a + b


async def retry_with_backoff(
    operation: Callable[[], Awaitable[Outcome]],
    max_retries: int,
    base_delay: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run an operation until it succeeds, fails fatally, or runs out of retries.

    Args:
        operation: Coroutine function returning a result or a tagged failure.
        max_retries: Retries allowed after the first attempt. Zero means
            the operation runs exactly once.
        base_delay: Seconds for the first backoff step.
        sleep: Awaitable used to wait between attempts.

    Returns:
        The first non-failure value returned by the operation.

    Raises:
        The error wrapped in Fatal, or the error from the last Retryable
        once retries are exhausted.
    """
    if max_retries < 0:
        raise ValueError("max_retries must be >= 0")

    delays = fibonacci_backoff(base_delay)
    attempt = 0

    while True:
        attempt += 1
        outcome = await operation()

        if isinstance(outcome, Fatal):
            raise outcome.error

        if not isinstance(outcome, Retryable):
            return outcome

        if attempt > max_retries:
            logger.error(
                "Giving up after %d attempt(s)",
                attempt,
                extra={"attempts": attempt, "max_retries": max_retries},
            )
            raise outcome.error

        delay = next(delays)
        logger.warning(
            "Attempt %d failed, retrying in %.1fs",
            attempt,
            delay,
            extra={
                "attempt": attempt,
                "max_retries": max_retries,
                "delay": delay,
                "error": str(outcome.error),
            },
        )
        await sleep(delay)
