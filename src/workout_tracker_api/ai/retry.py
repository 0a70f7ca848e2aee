"""Retry utilities for AI API calls with exponential backoff."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import anthropic
import httpx
import openai
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 2
DEFAULT_MIN_WAIT_SECONDS = 0.5
DEFAULT_MAX_WAIT_SECONDS = 4

# 408 request timeout, 409 lock conflict, 429 rate limit, 529 Anthropic overloaded
RETRYABLE_STATUS_CODES = frozenset({408, 409, 429, 529})

# Transport failures: the request never got an HTTP answer
_TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    anthropic.APIConnectionError,
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
)


def _status_code(exception: Exception) -> Optional[int]:
    if isinstance(exception, (openai.APIStatusError, anthropic.APIStatusError)):
        return exception.status_code
    if isinstance(exception, httpx.HTTPStatusError):
        return exception.response.status_code
    return None


def is_retryable_error(exception: BaseException) -> bool:
    """
    Decide whether a provider call that raised ``exception`` is worth repeating.

    Connection failures, timeouts, rate limits and 5xx answers are retried.
    Other 4xx answers (bad request, auth, missing model), an exhausted OpenAI
    quota, errors raised by our own code and cancellation are not.
    """
    if not isinstance(exception, Exception):
        return False

    if isinstance(exception, _TRANSIENT_ERRORS):
        return True

    status = _status_code(exception)
    if status is None:
        return False

    # OpenAI reports an exhausted quota as a 429 that will not clear on retry
    if getattr(exception, "code", None) == "insufficient_quota":
        return False

    return status >= 500 or status in RETRYABLE_STATUS_CODES


async def retry_async_call(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
    **kwargs: Any,
) -> T:
    """
    Execute an async function, retrying transient failures.

    Args:
        func: Async function to execute
        *args: Positional arguments for the function
        max_attempts: Maximum number of attempts
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries
        **kwargs: Keyword arguments for the function

    Returns:
        Result of the function call

    Raises:
        Exception: The last error, once attempts are exhausted or on the
            first non-retryable error
    """
    retrying = AsyncRetrying(
        retry=retry_if_exception(is_retryable_error),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=min_wait_seconds, min=min_wait_seconds, max=max_wait_seconds),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            return await func(*args, **kwargs)
    raise RuntimeError("Unexpected state: no result and no exception")
