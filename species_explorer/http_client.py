"""
HTTP helpers built on httpx.

Every remote call in Species Explorer goes through this module so timeouts,
headers and retries behave the same for the Red List API and the UniProt
species list.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from .config import ExplorerConfig
from .errors import ApiError, HttpError, NetworkError, RequestTimeout
from .utils.retry import RetryConfig, iter_attempts

logger = logging.getLogger(__name__)


def build_async_client(
    config: Optional[ExplorerConfig] = None,
    *,
    extra_headers: Optional[Dict[str, str]] = None,
) -> httpx.AsyncClient:
    """
    Create an ``httpx.AsyncClient`` with the explorer defaults.

    Deadlines are enforced per call by :func:`fetch_with_timeout`, so the
    client itself gets no timeout of its own.
    """
    config = config or ExplorerConfig()
    headers = {
        "User-Agent": config.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(None),
        follow_redirects=True,
        headers=headers,
    )


def is_accepted(response: httpx.Response) -> bool:
    """Success, or a client error that retrying would not fix."""
    return response.is_success or 400 <= response.status_code < 500


async def fetch_with_timeout(
    client: httpx.AsyncClient,
    url: str,
    *,
    method: str = "GET",
    timeout: float = 30.0,
    **options: Any,
) -> httpx.Response:
    """
    Issue a single request with a deadline.

    Args:
        client: HTTP client to send the request with
        url: Target URL
        method: HTTP method
        timeout: Deadline in seconds; the request is cancelled when it passes
        **options: Passed through to ``client.request`` (params, headers, ...)

    Returns:
        The raw response, whatever its status

    Raises:
        RequestTimeout: If no response arrived within ``timeout``
        httpx.HTTPError: Other transport failures, unchanged
    """
    try:
        return await asyncio.wait_for(client.request(method, url, **options), timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        raise RequestTimeout(url, timeout) from exc


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    *,
    method: str = "GET",
    config: Optional[RetryConfig] = None,
    max_attempts: Optional[int] = None,
    **options: Any,
) -> httpx.Response:
    """
    Fetch with exponential backoff on server errors and transport failures.

    2xx and 4xx responses are returned as-is. Any other status, a timeout or
    a transport error is retried until ``max_attempts`` is used up. Attempts
    run strictly one after another.

    Args:
        client: HTTP client to send the requests with
        url: Target URL
        method: HTTP method
        config: Retry configuration (default: RetryConfig())
        max_attempts: Overrides ``config.max_attempts`` for this call
        **options: Passed through to ``client.request``

    Returns:
        The first accepted response

    Raises:
        ApiError: The most recent failure once all attempts are used up
    """
    if config is None:
        config = RetryConfig()
    if max_attempts is not None:
        config = RetryConfig(
            max_attempts=max_attempts,
            backoff_base=config.backoff_base,
            backoff_multiplier=config.backoff_multiplier,
            backoff_max=config.backoff_max,
            timeout=config.timeout,
        )

    last_error: Optional[ApiError] = None

    for attempt in iter_attempts(config):
        try:
            response = await fetch_with_timeout(
                client, url, method=method, timeout=config.timeout, **options
            )
        except ApiError as exc:
            last_error = exc
        except (httpx.HTTPError, OSError) as exc:
            last_error = NetworkError(url, exc)
        else:
            if is_accepted(response):
                return response
            last_error = HttpError(url, response.status_code, response.reason_phrase)

        if attempt.is_last:
            break

        logger.debug(
            f"Attempt {attempt.index + 1} for {url} failed: {last_error}, "
            f"retrying in {attempt.delay:.1f}s"
        )
        await asyncio.sleep(attempt.delay)

    if last_error is None:
        raise ApiError("Unknown error", endpoint=url)

    logger.warning(f"All {config.max_attempts} attempts failed for {url}: {last_error}")
    raise last_error
