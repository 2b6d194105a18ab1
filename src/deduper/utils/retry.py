"""
Retry with exponential backoff.

Only the opening of a remote stream is retried. Once lines are flowing,
a failure aborts the import instead of silently restarting the stream and
feeding lines twice.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from .exceptions import NetworkError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def backoff_delays(
    attempts: int, base_delay: float, backoff_factor: float, max_delay: float
) -> Tuple[float, ...]:
    """Delays slept between consecutive attempts.

    >>> backoff_delays(4, 1.0, 2.0, 3.0)
    (1.0, 2.0, 3.0)
    """
    return tuple(
        min(base_delay * backoff_factor ** n, max_delay) for n in range(max(attempts - 1, 0))
    )


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    backoff_factor: float = 2.0,
    max_delay: float = 60.0,
    exceptions: Tuple[Type[Exception], ...] = (NetworkError,),
    should_retry: Optional[Callable[[Exception], bool]] = None,
) -> Callable:
    """Retry the decorated call when it raises one of ``exceptions``.

    Args:
        max_retries: Total number of attempts
        base_delay: Seconds to wait before the second attempt
        backoff_factor: Multiplier applied to the delay after each attempt
        max_delay: Upper bound for a single delay
        exceptions: Exception types that may be retried
        should_retry: Predicate deciding whether a caught exception is
            transient; non-transient errors are raised immediately

    Example:
        >>> @retry_with_backoff(max_retries=3, should_retry=is_transient)
        ... def open_stream():
        ...     ...
    """
    delays = backoff_delays(max_retries, base_delay, backoff_factor, max_delay)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt, delay in enumerate(delays, 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if should_retry is not None and not should_retry(e):
                        raise
                    logger.warning(
                        f"{func.__name__} failed (attempt {attempt}/{max_retries}): {e}; "
                        f"retrying in {delay:.1f}s"
                    )
                    time.sleep(delay)

            # Last attempt propagates whatever it raises
            return func(*args, **kwargs)

        return wrapper

    return decorator


def is_transient(error: Exception) -> bool:
    """True for connection failures, rate limiting and server errors."""
    status_code = getattr(error, "status_code", None)
    return status_code is None or status_code == 429 or status_code >= 500
