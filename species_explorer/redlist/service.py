"""IUCN Red List queries through the backend proxy.

All requests go through ``fetch_with_retry`` and successful results are
reused from the session cache. A request that fails is reported as a
ServiceError naming the endpoint; it never turns into an empty result.
Common names are an optional enrichment and come from the species list
loader in one batch per page.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar
from urllib.parse import quote

import httpx

from ..cache import TTLCache
from ..config import ExplorerConfig
from ..errors import ApiError, ServiceError
from ..http_client import fetch_with_retry
from ..speclist import SpeciesListLoader
from ..types import Assessment, AssessmentDetail, Species

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RedListService:
    """Typed Red List queries backed by retrying fetches and the TTL cache."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: TTLCache,
        loader: SpeciesListLoader,
        config: ExplorerConfig | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._loader = loader
        self._config = config or ExplorerConfig()
        self._retry = self._config.retry_config()

    @property
    def loader(self) -> SpeciesListLoader:
        return self._loader

    async def get_species_by_category(self, category: str, page: int = 1) -> list[Assessment]:
        """Assessments in a Red List category (e.g. 'CR', 'EN', 'VU')."""
        path = f"/red_list_categories/{quote(category, safe='')}"
        data = await self._get_json(path, {"page": page}, "species by category")
        return self._assessments(data, path, "species by category")

    async def get_species_by_kingdom(self, kingdom: str, page: int = 1) -> list[Assessment]:
        """Assessments in a kingdom (e.g. 'ANIMALIA', 'PLANTAE')."""
        path = f"/taxa/kingdom/{quote(kingdom, safe='')}"
        data = await self._get_json(path, {"page": page}, "species by kingdom")
        return self._assessments(data, path, "species by kingdom")

    async def get_species_by_class(self, class_name: str, page: int = 1) -> list[Assessment]:
        """Assessments in a class (e.g. 'MAMMALIA', 'AVES', 'REPTILIA')."""
        path = f"/taxa/class/{quote(class_name, safe='')}"
        data = await self._get_json(path, {"page": page}, "species by class")
        return self._assessments(data, path, "species by class")

    async def get_species_by_page(self, page: int = 1) -> list[Species]:
        """One browse page of the configured class, with common names filled in."""
        cache_key = f"iucn_page_{page}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            try:
                species = [Species.from_dict(item) for item in cached]
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Discarding malformed cache entry {cache_key}: {e}")
                self._cache.delete(cache_key)
            else:
                logger.debug(f"Using cached data for page {page}")
                return species

        browse_class = self._config.browse_class
        path = f"/taxa/class/{quote(browse_class, safe='')}"
        what = f"species page {page}"
        data = await self._get_json(path, {"page": page, "latest": "true"}, what)
        assessments = self._assessments(data, path, what)

        common_names = await self._loader.get_common_names(
            [a.taxon_scientific_name for a in assessments]
        )

        species = [
            Species(
                assessment_id=a.assessment_id,
                taxonid=a.sis_taxon_id,
                scientific_name=a.taxon_scientific_name,
                kingdom_name="ANIMALIA",
                phylum_name="CHORDATA",
                class_name=browse_class,
                genus_name=a.genus_name,
                main_common_name=common_names.get(a.taxon_scientific_name, ""),
                published_year=_to_int(a.year_published),
                assessment_date=a.year_published,
                category=a.red_list_category_code,
                terrestrial_system=True,
            )
            for a in assessments
        ]

        self._cache.set(
            cache_key,
            [s.to_dict() for s in species],
            ttl=self._config.species_cache_ttl,
        )
        return species

    async def get_assessment_by_id(self, assessment_id: int) -> AssessmentDetail:
        """Full assessment details in a single API call."""
        cache_key = f"iucn_assessment_{assessment_id}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            try:
                detail = AssessmentDetail.from_dict(cached)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Discarding malformed cache entry {cache_key}: {e}")
                self._cache.delete(cache_key)
            else:
                logger.debug(f"Using cached assessment data for ID {assessment_id}")
                return detail

        path = f"/assessment/{assessment_id}"
        what = f"assessment {assessment_id}"
        data = await self._get_json(path, None, what)
        detail = self._build(lambda: AssessmentDetail.from_dict(data), path, what)

        self._cache.set(cache_key, data, ttl=self._config.species_cache_ttl)
        return detail

    async def _get_json(
        self,
        path: str,
        params: dict[str, Any] | None,
        what: str,
    ) -> dict[str, Any]:
        endpoint = self._config.api_url(path)
        try:
            response = await fetch_with_retry(
                self._client, endpoint, config=self._retry, params=params
            )
        except ApiError as e:
            logger.error(f"Error fetching {what}: {e}")
            raise ServiceError(
                f"Failed to fetch {what}", endpoint=endpoint, status=e.status, cause=e
            ) from e
        except Exception as e:
            logger.error(f"Unexpected error fetching {what}: {e!r}")
            raise ServiceError(f"Failed to fetch {what}", endpoint=endpoint, cause=e) from e

        if not response.is_success:
            logger.error(f"Error fetching {what}: HTTP {response.status_code}")
            raise ServiceError(
                f"Failed to fetch {what}: HTTP {response.status_code} {response.reason_phrase}",
                endpoint=endpoint,
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceError(f"Invalid JSON while fetching {what}", endpoint=endpoint, cause=e) from e

        if not isinstance(data, dict):
            raise ServiceError(f"Unexpected response while fetching {what}", endpoint=endpoint)
        if data.get("error"):
            logger.error(f"API error for {what}: {data['error']}")
            raise ServiceError(f"API error while fetching {what}: {data['error']}", endpoint=endpoint)
        return data

    def _assessments(self, data: dict[str, Any], path: str, what: str) -> list[Assessment]:
        items = data.get("assessments") or []
        return self._build(lambda: [Assessment.from_dict(item) for item in items], path, what)

    def _build(self, factory: Callable[[], T], path: str, what: str) -> T:
        try:
            return factory()
        except (KeyError, TypeError, ValueError) as e:
            raise ServiceError(
                f"Malformed response while fetching {what}",
                endpoint=self._config.api_url(path),
                cause=e,
            ) from e


def _to_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
