"""Bounded retry with exponential backoff for blocking calls."""

import random
from typing import Callable, Optional, Tuple, Type, TypeVar

from ..io.logger import get_logger

logger = get_logger("retry")

T = TypeVar("T")


def backoff_delay(
    attempt: int, base_delay: float, max_delay: float, jitter: bool = True
) -> float:
    """Delay before retry number ``attempt`` (0-based)."""
    delay = min(base_delay * (2**attempt), max_delay)
    if jitter:
        delay = delay * (0.5 + 0.5 * random.random())
    return delay


def retry_with_exponential_backoff(
    func: Callable[[], T],
    sleep: Callable[[float], object],
    max_retries: int = 0,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    jitter: bool = True,
    retry_on: Optional[Tuple[Type[Exception], ...]] = None,
) -> T:
    """Call ``func``, retrying up to ``max_retries`` times on failure.

    Args:
        func: Zero-argument callable to run
        sleep: Called with the delay before each retry
        max_retries: Retries after the first failure; 0 means never retry
        base_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        jitter: Whether to randomise delays
        retry_on: Exception types worth retrying (default: all exceptions)

    Raises:
        The last exception once retries are exhausted, or immediately for
        exceptions not listed in ``retry_on``.
    """
    attempt = 0
    while True:
        try:
            return func()
        except Exception as e:
            if retry_on and not isinstance(e, retry_on):
                raise
            if attempt >= max_retries:
                raise

            delay = backoff_delay(attempt, base_delay, max_delay, jitter)
            logger.warning(
                f"Retrying in {delay:.1f}s ({attempt + 1}/{max_retries}) "
                f"after error: {e}"
            )
            sleep(delay)
            attempt += 1
