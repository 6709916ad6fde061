"""Minimum-interval rate limiting for outgoing requests.

This module provides a rate limiter that spaces requests at least a fixed
delay apart. Each limiter owns its own timing state, so independent
scrapers never throttle each other.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

# Type variable for generic function return type
T = TypeVar("T")

# Configure logger
logger = logging.getLogger(__name__)


class RateLimiter:
    """Enforce a minimum delay between consecutive requests.

    The limiter records when the last request started. A new request that
    would start sooner than ``min_delay`` seconds after it sleeps for the
    remainder first. Requests are therefore serialized through this single
    suspension point.
    """

    def __init__(self, min_delay: float = 0.5) -> None:
        """Initialize the rate limiter.

        Args:
            min_delay: Minimum delay between request starts, in seconds
        """
        if min_delay < 0:
            raise ValueError(f"min_delay must not be negative, got {min_delay}")

        self.min_delay = min_delay
        self.last_request_time: float | None = None

    @classmethod
    def from_milliseconds(cls, delay_ms: int) -> "RateLimiter":
        """Create a limiter from a delay expressed in milliseconds."""
        return cls(min_delay=delay_ms / 1000.0)

    def time_until_ready(self) -> float:
        """Return how many seconds remain before the next request may start."""
        if self.last_request_time is None:
            return 0.0

        elapsed = time.monotonic() - self.last_request_time
        return max(0.0, self.min_delay - elapsed)

    def wait(self) -> float:
        """Block until the next request may start and mark it as started.

        Returns
        -------
            The number of seconds spent sleeping
        """
        sleep_time = self.time_until_ready()
        if sleep_time > 0:
            logger.debug(f"Rate limiting: sleeping {sleep_time:.3f}s")
            time.sleep(sleep_time)

        self.last_request_time = time.monotonic()
        return sleep_time

    def execute_with_rate_limit(
        self, func: Callable[..., T], *args: Any, **kwargs: Any
    ) -> T:
        """Execute a function once the minimum delay has elapsed.

        Args:
            func: The function to execute
            args: Positional arguments to pass to the function
            kwargs: Keyword arguments to pass to the function

        Returns
        -------
            The result of the function call
        """
        self.wait()
        return func(*args, **kwargs)
