"""Retry decorator for idempotent HTTP reads.

Reads from the issue tracker and the documentation host are retried once on
transport errors and 5xx responses. Writes are never retried.
"""

import asyncio
import functools
from typing import Any, Callable, TypeVar

import httpx
import structlog
from githubkit.exception import RequestError, RequestFailed, RequestTimeout

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _is_retryable(exc: Exception) -> bool:
    """Return True for transport failures and server-side errors."""
    # RequestFailed subclasses RequestError, so it is classified by status first.
    if isinstance(exc, (RequestFailed, httpx.HTTPStatusError)):
        return exc.response.status_code >= 500
    return isinstance(exc, (httpx.TransportError, RequestError, RequestTimeout))


def retry_idempotent_request(max_retries: int = 1, delay: float = 1.0) -> Callable[[F], F]:
    """Decorator for retrying async idempotent reads on transient failures.

    Args:
        max_retries: Number of additional attempts after the first one (default: 1)
        delay: Seconds to wait before retrying (default: 1.0)

    Returns:
        Decorated function with retry logic

    Example:
        @retry_idempotent_request()
        async def get_issues(version: str) -> str:
            return await client.get(...)
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise RuntimeError(f"Function {func.__name__} decorated with @retry_idempotent_request must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not _is_retryable(e) or attempt == max_retries:
                        raise
                    logger.warning(
                        f"Transient failure, retrying in {delay} seconds",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    await asyncio.sleep(delay)

        return async_wrapper  # type: ignore

    return decorator
