"""Retry policy for Species Explorer HTTP calls."""

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Times are in seconds. The wait after attempt ``k`` (0-indexed) is
    ``backoff_base * backoff_multiplier ** k``, optionally capped by
    ``backoff_max``.
    """
    max_attempts: int = 3
    backoff_base: float = 1.0
    backoff_multiplier: float = 2.0
    backoff_max: Optional[float] = None
    timeout: float = 30.0

    def delay_for(self, attempt: int) -> float:
        delay = self.backoff_base * self.backoff_multiplier ** attempt
        if self.backoff_max is not None:
            delay = min(delay, self.backoff_max)
        return delay


@dataclass(frozen=True)
class RetryAttempt:
    """One scheduled attempt.

    ``delay`` is how long to wait before the next attempt, or None when this
    is the last one allowed.
    """
    index: int
    delay: Optional[float]

    @property
    def is_last(self) -> bool:
        return self.delay is None


def iter_attempts(config: RetryConfig) -> Iterator[RetryAttempt]:
    """
    Yield the attempt schedule for a retry config.

    Args:
        config: Retry configuration

    Yields:
        RetryAttempt for each allowed attempt, in order

    Example:
        >>> [a.delay for a in iter_attempts(RetryConfig(max_attempts=3))]
        [1.0, 2.0, None]
    """
    for index in range(config.max_attempts):
        if index == config.max_attempts - 1:
            yield RetryAttempt(index=index, delay=None)
        else:
            yield RetryAttempt(index=index, delay=config.delay_for(index))
