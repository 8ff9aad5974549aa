"""
Species Explorer — remote-data core for a species-information browser.

Fetches IUCN Red List assessments through a backend proxy, enriches them
with common names from the UniProt species list, and caches results for
the session. Network calls are retried with exponential backoff.

Basic Usage:
    import asyncio
    from species_explorer import SpeciesExplorer

    async def main():
        async with SpeciesExplorer.from_config("config.yaml") as explorer:
            for species in await explorer.get_species_by_page(1):
                print(species.scientific_name, species.main_common_name)

    asyncio.run(main())

Lower-level pieces:
    from species_explorer import fetch_with_retry, parse_speclist, TTLCache
"""

__version__ = "0.3.0"

# Configuration
from .config import ExplorerConfig

# Errors
from .errors import (
    ApiError,
    CacheWriteFailure,
    ConfigError,
    ExplorerError,
    HttpError,
    NetworkError,
    ParseFailure,
    RequestTimeout,
    ServiceError,
)

# Building blocks
from .cache import CacheEntry, KeyValueStore, SessionStore, TTLCache
from .http_client import build_async_client, fetch_with_retry, fetch_with_timeout
from .speclist import LoaderState, SpeciesListLoader, parse_speclist
from .redlist import RedListService, category_color, category_info, category_name

# Main class
from .explorer import SpeciesExplorer

# Type definitions
from .types import Assessment, AssessmentDetail, CategoryInfo, Species

__all__ = [
    # Version
    "__version__",
    # Main class
    "SpeciesExplorer",
    # Configuration
    "ExplorerConfig",
    # Errors
    "ApiError",
    "CacheWriteFailure",
    "ConfigError",
    "ExplorerError",
    "HttpError",
    "NetworkError",
    "ParseFailure",
    "RequestTimeout",
    "ServiceError",
    # Cache
    "CacheEntry",
    "KeyValueStore",
    "SessionStore",
    "TTLCache",
    # HTTP
    "build_async_client",
    "fetch_with_retry",
    "fetch_with_timeout",
    # Species list
    "LoaderState",
    "SpeciesListLoader",
    "parse_speclist",
    # Red List
    "RedListService",
    "category_color",
    "category_info",
    "category_name",
    # Types
    "Assessment",
    "AssessmentDetail",
    "CategoryInfo",
    "Species",
]
