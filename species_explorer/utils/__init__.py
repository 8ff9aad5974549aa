"""Species Explorer utilities."""

from .logging import get_logger, setup_logging
from .retry import RetryAttempt, RetryConfig, iter_attempts

__all__ = [
    "get_logger",
    "setup_logging",
    "RetryAttempt",
    "RetryConfig",
    "iter_attempts",
]
