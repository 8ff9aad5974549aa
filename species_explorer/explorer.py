"""
Species Explorer facade.

Wires the HTTP client, session cache, species list loader and Red List
service together. The host application creates one SpeciesExplorer per
session and calls into it.
"""

from typing import Iterable, List, Optional

import httpx

from .cache import KeyValueStore, SessionStore, TTLCache
from .config import ExplorerConfig
from .http_client import build_async_client
from .redlist import RedListService
from .speclist import SpeciesListLoader
from .types import Assessment, AssessmentDetail, Species


class SpeciesExplorer:
    """
    Entry point for the species-information core.

    Example:
        async with SpeciesExplorer.from_config("config.yaml") as explorer:
            await explorer.preload()
            species = await explorer.get_species_by_page(1)
    """

    def __init__(
        self,
        config: Optional[ExplorerConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        store: Optional[KeyValueStore] = None,
    ):
        self.config = config or ExplorerConfig()
        self._owns_client = client is None
        self.client = client or build_async_client(self.config)
        self.cache = TTLCache(store or SessionStore(quota_bytes=self.config.cache_quota_bytes))
        self.loader = SpeciesListLoader(
            self.client,
            self.config.uniprot_url,
            self.cache,
            timeout=self.config.uniprot_timeout,
            cache_ttl=self.config.uniprot_cache_ttl,
            min_length=self.config.uniprot_min_length,
        )
        self.service = RedListService(self.client, self.cache, self.loader, self.config)

    @classmethod
    def from_config(cls, path: str, **kwargs) -> "SpeciesExplorer":
        """
        Create an explorer from a YAML configuration file.

        Environment variables override values from the file.
        """
        config = ExplorerConfig.from_env(base=ExplorerConfig.load(path))
        return cls(config=config, **kwargs)

    async def __aenter__(self) -> "SpeciesExplorer":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this explorer created it."""
        if self._owns_client:
            await self.client.aclose()

    # Species list

    async def preload(self) -> None:
        """Load the UniProt species list ahead of the first lookup."""
        await self.loader.preload()

    async def get_common_name(self, scientific_name: str) -> Optional[str]:
        return await self.loader.get_common_name(scientific_name)

    async def get_common_names(self, scientific_names: Iterable[str]) -> dict:
        return await self.loader.get_common_names(scientific_names)

    # Red List

    async def get_species_by_page(self, page: int = 1) -> List[Species]:
        return await self.service.get_species_by_page(page)

    async def get_species_by_category(self, category: str, page: int = 1) -> List[Assessment]:
        return await self.service.get_species_by_category(category, page)

    async def get_species_by_kingdom(self, kingdom: str, page: int = 1) -> List[Assessment]:
        return await self.service.get_species_by_kingdom(kingdom, page)

    async def get_species_by_class(self, class_name: str, page: int = 1) -> List[Assessment]:
        return await self.service.get_species_by_class(class_name, page)

    async def get_assessment_by_id(self, assessment_id: int) -> AssessmentDetail:
        return await self.service.get_assessment_by_id(assessment_id)
