"""HTTP API tests with an in-memory repository."""

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from therapist_finder.api.dependencies import get_directory_service
from therapist_finder.core.config.settings import settings
from therapist_finder.core.exceptions import StorageError
from therapist_finder.main import app
from therapist_finder.services.directory_service import DirectoryService

PREFIX = settings.api_v1_prefix


async def _client_for(repository) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_directory_service] = lambda: DirectoryService(repository)
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(repository) -> AsyncIterator[AsyncClient]:
    """API client backed by the sample directory."""
    async for c in _client_for(repository):
        yield c


@pytest.fixture
async def failing_client() -> AsyncIterator[AsyncClient]:
    """API client whose storage reads always fail."""
    repository = AsyncMock()
    repository.find_page.side_effect = StorageError("find_page")
    repository.grouped_counts.side_effect = StorageError("grouped_counts")
    async for c in _client_for(repository):
        yield c


class TestTherapistsEndpoint:
    """GET /therapists tests."""

    async def test_returns_success_envelope(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/therapists")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalCount": 7,
            "hasNextPage": False,
            "hasPrevPage": False,
            "limit": 10,
        }
        assert [t["name"] for t in body["data"]["therapists"]][:2] == [
            "Ayesha Khan",
            "Bilal Ahmed",
        ]

    async def test_therapist_keys_are_camel_case(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/therapists", params={"limit": 1})
        therapist = response.json()["data"]["therapists"][0]

        assert therapist["experienceYears"] == 3
        assert "profileUrl" in therapist
        assert "experience_years" not in therapist

    async def test_repeated_filters(self, client: AsyncClient) -> None:
        response = await client.get(
            f"{PREFIX}/therapists",
            params=[
                ("cities", "Karachi"),
                ("cities", "Lahore"),
                ("experienceRange", "5-10 years"),
            ],
        )

        ids = [t["id"] for t in response.json()["data"]["therapists"]]
        assert ids == ["t2", "t4"]

    async def test_fee_sort_descending_keeps_missing_fees_last(
        self, client: AsyncClient
    ) -> None:
        response = await client.get(
            f"{PREFIX}/therapists", params={"sortBy": "fees", "sortOrder": "desc"}
        )

        fees = [t["fees"] for t in response.json()["data"]["therapists"]]
        assert fees == [6000, 4500, 3999.99, 2000, 1500, None, None]

    async def test_malformed_paging_falls_back(self, client: AsyncClient) -> None:
        """Malformed parameters never produce a validation error."""
        response = await client.get(
            f"{PREFIX}/therapists", params={"page": "abc", "limit": "-3", "sortBy": "rating"}
        )

        assert response.status_code == 200
        pagination = response.json()["data"]["pagination"]
        assert pagination["currentPage"] == 1
        assert pagination["limit"] == 1
        assert pagination["totalPages"] == 7

    async def test_page_past_the_end_is_empty(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/therapists", params={"page": 3, "limit": 5})

        data = response.json()["data"]
        assert data["therapists"] == []
        assert data["pagination"]["hasNextPage"] is False
        assert data["pagination"]["hasPrevPage"] is True


    async def test_huge_page_number_is_an_empty_page(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/therapists", params={"page": "1e30"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["therapists"] == []
        assert data["pagination"]["hasNextPage"] is False


class TestSearchEndpoint:
    """GET /search tests."""

    async def test_whitespace_query_returns_everything(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/search", params={"q": "   "})

        data = response.json()["data"]
        assert data["pagination"]["totalCount"] == 7
        assert data["query"] is None

    async def test_query_with_filters(self, client: AsyncClient) -> None:
        response = await client.get(
            f"{PREFIX}/search", params={"q": " anxiety ", "cities": "Karachi"}
        )

        data = response.json()["data"]
        assert data["query"] == "anxiety"
        assert [t["id"] for t in data["therapists"]] == ["t1", "t7"]


class TestFiltersEndpoint:
    """GET /filters tests."""

    async def test_returns_facets(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/filters")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["cities"][0] == {"value": "Islamabad", "count": 1}
        assert data["experienceRanges"] == [
            {"range": "0-5 years", "count": 2},
            {"range": "5-10 years", "count": 2},
            {"range": "10-15 years", "count": 2},
            {"range": "15+ years", "count": 1},
        ]
        assert sum(item["count"] for item in data["feeRanges"]) == 5
        assert {item["value"] for item in data["consultationModes"]} == {
            "In-person",
            "Virtual telephonic",
        }

    async def test_facets_ignore_query_parameters(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/filters", params={"cities": "Lahore"})

        cities = response.json()["data"]["cities"]
        assert sum(item["count"] for item in cities) == 7


class TestTherapistDetailEndpoints:
    """GET /therapists/{id} and /therapists/stats tests."""

    async def test_get_by_id(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/therapists/t5")

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Hina Raza"

    async def test_unknown_id_returns_404_envelope(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/therapists/unknown")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": {"message": "Therapist not found"},
        }

    async def test_malformed_id_returns_400(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/therapists/bad%20id")

        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_stats(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/therapists/stats")

        data = response.json()["data"]
        assert data["totalTherapists"] == 7
        assert data["cityStats"][0] == {"city": "Karachi", "count": 3}
        assert data["feeStats"]["min"] == 1500
        assert data["experienceStats"]["max"] == 15


class TestErrorEnvelope:
    """Error envelope tests."""

    async def test_storage_failure_hides_detail(self, failing_client: AsyncClient) -> None:
        response = await failing_client.get(f"{PREFIX}/therapists")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": {"message": "Internal server error"},
        }

    async def test_stack_only_in_development(
        self, failing_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "environment", "development")

        response = await failing_client.get(f"{PREFIX}/filters")

        error = response.json()["error"]
        assert response.status_code == 500
        assert error["message"] == "Internal server error"
        assert "StorageError" in error["stack"]

    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/nowhere")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Route not found"

    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get(f"{PREFIX}/health")

        assert response.json()["status"] == "healthy"
