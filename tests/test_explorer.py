"""Tests for the SpeciesExplorer facade."""

import os
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest

from species_explorer import ExplorerConfig, SpeciesExplorer
from species_explorer.cache import SessionStore
from species_explorer.speclist import LoaderState

FIXTURES = Path(__file__).parent / "fixtures"
BASE = "http://backend.test"


def routing_client(speclist_text: str) -> AsyncMock:
    """Client answering the speclist URL with text and the API with JSON."""

    async def request(method, url, **kwargs):
        req = httpx.Request(method, url)
        if url.endswith("speclist.txt"):
            return httpx.Response(200, text=speclist_text, request=req)
        return httpx.Response(
            200,
            json={"assessments": [{
                "assessment_id": 11,
                "sis_taxon_id": 3746,
                "taxon_scientific_name": "Canis lupus",
                "red_list_category_code": "LC",
                "year_published": "2018",
            }]},
            request=req,
        )

    client = AsyncMock(spec=httpx.AsyncClient)
    client.request = AsyncMock(side_effect=request)
    return client


@pytest.fixture
def speclist_text() -> str:
    return (FIXTURES / "speclist_sample.txt").read_text()


@pytest.fixture
def config() -> ExplorerConfig:
    return ExplorerConfig(
        backend_base_url=BASE,
        uniprot_url="https://ftp.example.org/speclist.txt",
    )


class TestSpeciesExplorer:
    @pytest.mark.asyncio
    async def test_page_enriched_with_common_names(self, config, speclist_text):
        client = routing_client(speclist_text)
        explorer = SpeciesExplorer(config, client=client)

        species = await explorer.get_species_by_page(1)

        assert species[0].scientific_name == "Canis lupus"
        assert species[0].main_common_name == "Gray wolf"
        assert explorer.loader.state is LoaderState.LOADED

    @pytest.mark.asyncio
    async def test_preload_then_lookup(self, config, speclist_text):
        client = routing_client(speclist_text)
        explorer = SpeciesExplorer(config, client=client)

        await explorer.preload()
        assert await explorer.get_common_name("panthera tigris") == "Tiger"
        assert await explorer.get_common_names(["Felis catus", "Nope"]) == {"Felis catus": "Cat"}
        assert client.request.await_count == 1

    @pytest.mark.asyncio
    async def test_shared_store(self, config, speclist_text):
        store = SessionStore()
        first = SpeciesExplorer(config, client=routing_client(speclist_text), store=store)
        await first.preload()

        # A second explorer on the same session store reuses the cached list
        client = routing_client(speclist_text)
        second = SpeciesExplorer(config, client=client, store=store)
        assert await second.get_common_name("Homo sapiens") == "Human"
        client.request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self, config, speclist_text):
        client = routing_client(speclist_text)
        async with SpeciesExplorer(config, client=client):
            pass
        client.aclose.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self, config):
        async with SpeciesExplorer(config) as explorer:
            client = explorer.client
        assert client.is_closed

    def test_from_config(self, monkeypatch):
        monkeypatch.setenv("SPECIES_EXPLORER_DEFAULT_VIDEO_ID", "from-env")
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("api:\n  backend_base_url: http://from-file\n")
            path = f.name
        try:
            explorer = SpeciesExplorer.from_config(path, client=AsyncMock(spec=httpx.AsyncClient))
            assert explorer.config.backend_base_url == "http://from-file"
            assert explorer.config.default_video_id == "from-env"
        finally:
            os.unlink(path)
