"""Tests for the Red List domain service and category helpers."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from species_explorer.cache import SessionStore, TTLCache
from species_explorer.config import ExplorerConfig
from species_explorer.errors import RequestTimeout, ServiceError
from species_explorer.redlist import (
    CATEGORY_CODES,
    RedListService,
    category_color,
    category_info,
    category_name,
)
from species_explorer.types import AssessmentDetail, Species

BASE = "http://backend.test"


def json_response(status: int, payload) -> httpx.Response:
    return httpx.Response(status, json=payload, request=httpx.Request("GET", BASE))


def assessment(assessment_id: int, name: str, code: str = "LC", year: str = "2020") -> dict:
    return {
        "assessment_id": assessment_id,
        "sis_taxon_id": assessment_id * 10,
        "taxon_scientific_name": name,
        "red_list_category_code": code,
        "year_published": year,
        "latest": True,
    }


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("species_explorer.http_client.asyncio.sleep", new=AsyncMock()):
        yield


@pytest.fixture
def config() -> ExplorerConfig:
    return ExplorerConfig(backend_base_url=BASE, species_cache_ttl=3600)


@pytest.fixture
def cache() -> TTLCache:
    return TTLCache(SessionStore())


@pytest.fixture
def loader():
    loader = AsyncMock()
    loader.get_common_names = AsyncMock(return_value={"Canis lupus": "Gray wolf"})
    return loader


def make_service(config, cache, loader, *responses) -> tuple[RedListService, AsyncMock]:
    client = AsyncMock(spec=httpx.AsyncClient)
    client.request = AsyncMock(side_effect=list(responses))
    return RedListService(client, cache, loader, config), client


class TestSpeciesByPage:
    @pytest.mark.asyncio
    async def test_builds_species_with_common_names(self, config, cache, loader):
        payload = {
            "assessments": [
                assessment(1, "Canis lupus", "LC", "2018"),
                assessment(2, "Lynx pardinus", "EN", "not-a-year"),
            ]
        }
        service, client = make_service(config, cache, loader, json_response(200, payload))

        species = await service.get_species_by_page(2)

        client.request.assert_awaited_once_with(
            "GET",
            f"{BASE}/proxy-api/taxa/class/MAMMALIA",
            params={"page": 2, "latest": "true"},
        )
        loader.get_common_names.assert_awaited_once_with(["Canis lupus", "Lynx pardinus"])

        wolf, lynx = species
        assert wolf.main_common_name == "Gray wolf"
        assert wolf.genus_name == "Canis"
        assert wolf.published_year == 2018
        assert wolf.category == "LC"
        assert wolf.class_name == "MAMMALIA"
        assert lynx.main_common_name == ""
        assert lynx.published_year == 0

    @pytest.mark.asyncio
    async def test_second_call_served_from_cache(self, config, cache, loader):
        payload = {"assessments": [assessment(1, "Canis lupus")]}
        service, client = make_service(config, cache, loader, json_response(200, payload))

        first = await service.get_species_by_page(1)
        second = await service.get_species_by_page(1)

        assert first == second
        assert all(isinstance(s, Species) for s in second)
        assert client.request.await_count == 1
        assert loader.get_common_names.await_count == 1

    @pytest.mark.asyncio
    async def test_pages_cached_separately(self, config, cache, loader):
        service, client = make_service(
            config, cache, loader,
            json_response(200, {"assessments": [assessment(1, "Canis lupus")]}),
            json_response(200, {"assessments": []}),
        )
        assert len(await service.get_species_by_page(1)) == 1
        assert await service.get_species_by_page(2) == []
        assert client.request.await_count == 2

    @pytest.mark.asyncio
    async def test_malformed_cache_entry_refetched(self, config, cache, loader):
        cache.set("iucn_page_1", {"not": "a list"})
        payload = {"assessments": [assessment(1, "Canis lupus")]}
        service, client = make_service(config, cache, loader, json_response(200, payload))

        species = await service.get_species_by_page(1)

        assert species[0].scientific_name == "Canis lupus"
        assert client.request.await_count == 1
        assert cache.get("iucn_page_1")[0]["scientific_name"] == "Canis lupus"

    @pytest.mark.asyncio
    async def test_api_error_field_raises(self, config, cache, loader):
        service, _ = make_service(
            config, cache, loader, json_response(200, {"error": "Token invalid"})
        )
        with pytest.raises(ServiceError, match="Token invalid"):
            await service.get_species_by_page(1)
        assert cache.get("iucn_page_1") is None

    @pytest.mark.asyncio
    async def test_server_errors_exhaust_retries(self, config, cache, loader):
        service, client = make_service(
            config, cache, loader, *[json_response(503, {})] * 3
        )
        with pytest.raises(ServiceError) as exc_info:
            await service.get_species_by_page(1)

        err = exc_info.value
        assert client.request.await_count == 3
        assert err.status == 503
        assert err.endpoint == f"{BASE}/proxy-api/taxa/class/MAMMALIA"
        assert "HTTP 503" in str(err)
        loader.get_common_names.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, config, cache, loader):
        service, client = make_service(config, cache, loader, json_response(404, {}))
        with pytest.raises(ServiceError) as exc_info:
            await service.get_species_by_page(1)
        assert exc_info.value.status == 404
        assert client.request.await_count == 1

    @pytest.mark.asyncio
    async def test_timeout_reported_as_timeout(self, config, cache, loader):
        service, _ = make_service(
            config, cache, loader, *[httpx.ConnectTimeout("slow")] * 3
        )
        with pytest.raises(ServiceError) as exc_info:
            await service.get_species_by_page(1)
        assert exc_info.value.is_timeout
        assert isinstance(exc_info.value.cause, RequestTimeout)
        assert "timeout" in str(exc_info.value).lower()

    @pytest.mark.asyncio
    async def test_malformed_assessment_raises(self, config, cache, loader):
        payload = {"assessments": [{"assessment_id": 1}]}
        service, _ = make_service(config, cache, loader, json_response(200, payload))
        with pytest.raises(ServiceError, match="Malformed response"):
            await service.get_species_by_page(1)

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, config, cache, loader):
        bad = httpx.Response(200, text="<html>", request=httpx.Request("GET", BASE))
        service, _ = make_service(config, cache, loader, bad)
        with pytest.raises(ServiceError, match="Invalid JSON"):
            await service.get_species_by_page(1)

    @pytest.mark.asyncio
    async def test_custom_browse_class(self, cache, loader):
        config = ExplorerConfig(backend_base_url=BASE, browse_class="AVES")
        service, client = make_service(
            config, cache, loader, json_response(200, {"assessments": []})
        )
        await service.get_species_by_page(1)
        assert client.request.await_args.args[1] == f"{BASE}/proxy-api/taxa/class/AVES"


class TestListings:
    @pytest.mark.asyncio
    async def test_by_category(self, config, cache, loader):
        payload = {"assessments": [assessment(7, "Panthera tigris", "EN")]}
        service, client = make_service(config, cache, loader, json_response(200, payload))

        result = await service.get_species_by_category("EN", page=3)

        client.request.assert_awaited_once_with(
            "GET", f"{BASE}/proxy-api/red_list_categories/EN", params={"page": 3}
        )
        assert result[0].taxon_scientific_name == "Panthera tigris"
        assert result[0].red_list_category_code == "EN"

    @pytest.mark.asyncio
    async def test_by_kingdom_encodes_path(self, config, cache, loader):
        service, client = make_service(
            config, cache, loader, json_response(200, {"assessments": []})
        )
        assert await service.get_species_by_kingdom("PLANT AE/X") == []
        assert client.request.await_args.args[1] == f"{BASE}/proxy-api/taxa/kingdom/PLANT%20AE%2FX"

    @pytest.mark.asyncio
    async def test_by_class_missing_assessments_key(self, config, cache, loader):
        service, _ = make_service(config, cache, loader, json_response(200, {}))
        assert await service.get_species_by_class("AVES") == []

    @pytest.mark.asyncio
    async def test_listing_failure_wrapped(self, config, cache, loader):
        service, _ = make_service(
            config, cache, loader, *[httpx.ConnectError("refused")] * 3
        )
        with pytest.raises(ServiceError, match="species by class") as exc_info:
            await service.get_species_by_class("AVES")
        assert "Network error" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unexpected_transport_error_wrapped(self, config, cache, loader):
        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("transport exploded")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = RedListService(client, cache, loader, config)
            with pytest.raises(ServiceError, match="species by category") as exc_info:
                await service.get_species_by_category("CR")

        assert isinstance(exc_info.value.cause, RuntimeError)
        assert exc_info.value.endpoint == f"{BASE}/proxy-api/red_list_categories/CR"

    @pytest.mark.asyncio
    async def test_closed_client_wrapped(self, config, cache, loader):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        await client.aclose()
        service = RedListService(client, cache, loader, config)

        with pytest.raises(ServiceError) as exc_info:
            await service.get_species_by_category("CR")
        assert isinstance(exc_info.value.cause, RuntimeError)


class TestAssessmentById:
    DETAIL = {
        "assessment_id": 42,
        "year_published": "2021",
        "criteria": "A2cd",
        "url": "https://www.iucnredlist.org/species/1/42",
        "taxon": {
            "scientific_name": "Panthera leo",
            "common_names": [
                {"main": False, "name": "African lion", "language": "eng"},
                {"main": True, "name": "Lion", "language": "eng"},
            ],
        },
        "red_list_category": {"code": "VU", "description": {"en": "Vulnerable"}},
        "threats": [{"code": "2.3", "description": {"en": "Livestock farming"}}],
    }

    @pytest.mark.asyncio
    async def test_fetch_and_cache(self, config, cache, loader):
        service, client = make_service(config, cache, loader, json_response(200, self.DETAIL))

        detail = await service.get_assessment_by_id(42)
        again = await service.get_assessment_by_id(42)

        client.request.assert_awaited_once_with(
            "GET", f"{BASE}/proxy-api/assessment/42", params=None
        )
        assert isinstance(detail, AssessmentDetail)
        assert detail.scientific_name == "Panthera leo"
        assert detail.category_code == "VU"
        assert detail.main_common_name == "Lion"
        assert detail.raw["threats"][0]["code"] == "2.3"
        assert again == detail

    @pytest.mark.asyncio
    async def test_failure_names_endpoint(self, config, cache, loader):
        service, _ = make_service(config, cache, loader, *[json_response(500, {})] * 3)
        with pytest.raises(ServiceError) as exc_info:
            await service.get_assessment_by_id(42)
        assert exc_info.value.endpoint == f"{BASE}/proxy-api/assessment/42"
        assert cache.get("iucn_assessment_42") is None

    @pytest.mark.asyncio
    async def test_malformed_cache_entry_refetched(self, config, cache, loader):
        cache.set("iucn_assessment_42", "garbage")
        service, client = make_service(config, cache, loader, json_response(200, self.DETAIL))

        detail = await service.get_assessment_by_id(42)

        assert detail.scientific_name == "Panthera leo"
        client.request.assert_awaited_once()
        assert cache.get("iucn_assessment_42") == self.DETAIL

    @pytest.mark.asyncio
    async def test_missing_id_raises(self, config, cache, loader):
        service, _ = make_service(config, cache, loader, json_response(200, {"taxon": {}}))
        with pytest.raises(ServiceError, match="Malformed response"):
            await service.get_assessment_by_id(42)


class TestCategories:
    def test_known_category(self):
        assert category_name("CR") == "Critically Endangered"
        assert category_color("CR") == "bg-red-600 text-white"

    def test_unknown_category(self):
        assert category_name("XX") == "XX"
        assert category_color("XX") == "bg-gray-400 text-black"

    def test_every_code_has_name_and_color(self):
        for code in CATEGORY_CODES:
            info = category_info(code)
            assert info.name != code
            assert info.color != "bg-gray-400 text-black"

    def test_severity_order(self):
        assert CATEGORY_CODES[0] == "EX"
        assert CATEGORY_CODES.index("CR") < CATEGORY_CODES.index("LC")
