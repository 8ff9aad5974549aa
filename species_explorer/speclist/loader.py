"""Lazy, deduplicated loader for the UniProt species list.

The list is large (several MB) and only used to enrich Red List records
with common names, so:

- it is fetched and parsed at most once per loader, however many callers
  ask for it concurrently (they all await one shared task);
- the parsed pairs are kept in the TTL cache so a fresh session can skip
  the download;
- a failed load is logged and degrades to an empty mapping. The loader
  never raises to its callers.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

import httpx

from ..cache import TTLCache
from ..errors import HttpError, ParseFailure
from ..http_client import fetch_with_timeout
from .parser import parse_speclist

logger = logging.getLogger(__name__)

CACHE_KEY = "uniprot_species_list"


class LoaderState(Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one load attempt: names on success, error otherwise."""

    names: dict[str, str]
    error: Exception | None = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class SpeciesListLoader:
    """Single-flight loader for the scientific -> common name mapping."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        source_url: str,
        cache: TTLCache,
        *,
        timeout: float = 60.0,
        cache_ttl: float | None = 24 * 60 * 60,
        cache_key: str = CACHE_KEY,
        min_length: int = 1000,
    ) -> None:
        self._client = client
        self._source_url = source_url
        self._cache = cache
        self._timeout = timeout
        self._cache_ttl = cache_ttl
        self._cache_key = cache_key
        self._min_length = min_length

        self._names: Mapping[str, str] | None = None
        self._folded: dict[str, str] = {}
        self._pending: asyncio.Task[Mapping[str, str]] | None = None
        self._fetch_count = 0
        self._last_error: Exception | None = None

    @property
    def state(self) -> LoaderState:
        if self._names is not None:
            return LoaderState.LOADED
        if self._pending is not None:
            return LoaderState.LOADING
        return LoaderState.UNLOADED

    @property
    def fetch_count(self) -> int:
        """Number of network fetches issued so far."""
        return self._fetch_count

    @property
    def last_error(self) -> Exception | None:
        """Why the load degraded to an empty mapping, if it did."""
        return self._last_error

    async def load(self) -> Mapping[str, str]:
        """Return the shared mapping, loading it on first use."""
        if self._names is not None:
            return self._names

        if self._pending is None:
            # Must be set before the first await so concurrent callers join it
            self._pending = asyncio.ensure_future(self._load_and_promote())

        # Shielded: a cancelled caller must not cancel the shared load
        return await asyncio.shield(self._pending)

    async def preload(self) -> None:
        """Start loading in the background of app start-up and wait for it."""
        await self.load()

    async def get_common_name(self, scientific_name: str) -> str | None:
        """Common name for one species, or None."""
        names = await self.load()
        return self._lookup(names, scientific_name)

    async def get_common_names(self, scientific_names: Iterable[str]) -> dict[str, str]:
        """Common names for many species; names without a match are left out."""
        loaded = await self.load()
        names = list(scientific_names)
        results: dict[str, str] = {}
        for name in names:
            common = self._lookup(loaded, name)
            if common:
                results[name] = common
        logger.debug(f"Found {len(results)} common names out of {len(names)} species")
        return results

    def _lookup(self, names: Mapping[str, str], scientific_name: str) -> str | None:
        common = names.get(scientific_name)
        if common:
            return common
        return self._folded.get(scientific_name.lower())

    async def _load_and_promote(self) -> Mapping[str, str]:
        result = await self._load()
        if not result.ok:
            self._last_error = result.error
            logger.error(f"Error loading UniProt species list: {result.error}")

        folded: dict[str, str] = {}
        for scientific, common in result.names.items():
            folded.setdefault(scientific.lower(), common)

        self._folded = folded
        self._names = MappingProxyType(result.names)
        self._pending = None
        return self._names

    async def _load(self) -> LoadResult:
        cached = self._cache.get(self._cache_key)
        if cached:
            try:
                names = {str(k): str(v) for k, v in cached}
            except (TypeError, ValueError) as e:
                logger.warning(f"Ignoring malformed cached species list: {e}")
            else:
                logger.info("UniProt species list loaded from cache")
                return LoadResult(names=names, from_cache=True)

        try:
            names = await self._fetch()
        except Exception as e:
            return LoadResult(names={}, error=e)

        self._cache.set(self._cache_key, [[k, v] for k, v in names.items()], ttl=self._cache_ttl)
        return LoadResult(names=names)

    async def _fetch(self) -> dict[str, str]:
        logger.info(f"Fetching UniProt species list from {self._source_url}")
        self._fetch_count += 1
        response = await fetch_with_timeout(
            self._client, self._source_url, timeout=self._timeout
        )
        if not response.is_success:
            raise HttpError(self._source_url, response.status_code, response.reason_phrase)

        text = response.text
        if not text or len(text) < self._min_length:
            raise ParseFailure("UniProt species list appears to be empty or corrupt")

        names = parse_speclist(text)
        if not names:
            raise ParseFailure("Failed to parse UniProt species list")
        return names
