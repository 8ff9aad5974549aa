"""
Species Explorer error types.

Every error that crosses the public API derives from ExplorerError.
Transport failures are ApiError subclasses whose messages are shown to
users directly, so each one says whether it was a timeout, an HTTP status
or a generic network failure.
"""

from typing import Optional


class ExplorerError(Exception):
    """Base class for all Species Explorer errors."""


class ApiError(ExplorerError):
    """A request against a remote endpoint failed."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.endpoint = endpoint


class RequestTimeout(ApiError):
    """No response arrived before the per-attempt deadline."""

    def __init__(self, url: str, timeout: float):
        super().__init__(f"Request timeout after {timeout:g}s: {url}", endpoint=url)
        self.url = url
        self.timeout = timeout


class HttpError(ApiError):
    """The server answered with a status that was not accepted."""

    def __init__(self, url: str, status: int, status_text: str = ""):
        message = f"HTTP {status}: {status_text}" if status_text else f"HTTP {status}"
        super().__init__(message, status=status, endpoint=url)
        self.url = url
        self.status_text = status_text


class NetworkError(ApiError):
    """Transport-level failure (DNS, refused connection, reset...)."""

    def __init__(self, url: str, cause: BaseException):
        super().__init__(f"Network error: {str(cause) or type(cause).__name__}", endpoint=url)
        self.url = url
        self.cause = cause


class ServiceError(ApiError):
    """A domain query failed after all retries."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, status=status, endpoint=endpoint)
        self.cause = cause

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.cause, RequestTimeout)


class ParseFailure(ExplorerError):
    """The species list source was empty, truncated or unparseable."""


class CacheWriteFailure(ExplorerError):
    """A cache store rejected a write (e.g. quota exceeded)."""


class ConfigError(ExplorerError):
    """Configuration value out of range."""
