"""Tests for the chore, calendar, and team HTTP routes."""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from chore_tracker.core.redis_client import RedisClient
from chore_tracker.interface.api_router import get_store
from chore_tracker.main import app
from chore_tracker.services.storage_service import ChoreStore


@pytest.fixture
def client(chore_store: ChoreStore) -> Iterator[TestClient]:
    """Create a test client backed by a fresh in-memory store."""
    app.dependency_overrides[get_store] = lambda: chore_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_chore(client: TestClient, **fields: object) -> dict:
    payload = {"title": "Water the plants", "due_date": "2024-01-01", **fields}
    response = client.post("/chores", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.unit
def test_health_endpoint_returns_healthy(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.unit
def test_storage_health_endpoint(client: TestClient) -> None:
    response = client.get("/health/storage")

    assert response.status_code == 200
    assert response.json()["backend"] == "memory"
    assert response.json()["status"] == "healthy"


@pytest.mark.unit
class TestChoreRoutes:
    """Tests for chore CRUD and completion routes."""

    def test_create_and_list(self, client: TestClient) -> None:
        chore = _create_chore(client, recurrence_type="weekly", days_of_week=[3, 1], interval=2)

        assert chore["recurrence"]["days_of_week"] == [1, 3]
        assert chore["completed_dates"] == []
        assert [c["id"] for c in client.get("/chores").json()] == [chore["id"]]

    def test_create_rejects_blank_title(self, client: TestClient) -> None:
        response = client.post("/chores", json={"title": "  ", "due_date": "2024-01-01"})

        assert response.status_code == 422

    def test_get_chore_includes_schedule(self, client: TestClient) -> None:
        chore = _create_chore(client, recurrence_type="daily", interval=3)

        response = client.get(f"/chores/{chore['id']}")

        assert response.status_code == 200
        assert response.json()["schedule"] == "Every 3 days"
        assert response.json()["next_occurrence"] is not None

    def test_unknown_chore_is_404(self, client: TestClient) -> None:
        response = client.get("/chores/missing")

        assert response.status_code == 404
        assert response.json()["code"] == "ERR_CHORE_NOT_FOUND"

    def test_update_keeps_completions(self, client: TestClient) -> None:
        chore = _create_chore(client, recurrence_type="daily")
        client.post(f"/chores/{chore['id']}/completions/2024-01-02")

        response = client.put(f"/chores/{chore['id']}", json={"title": "Renamed", "due_date": "2024-01-01"})

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"
        assert response.json()["completed_dates"] == ["2024-01-02"]

    def test_delete(self, client: TestClient) -> None:
        chore = _create_chore(client)

        response = client.delete(f"/chores/{chore['id']}")

        assert response.json() == {"status": "deleted", "chore_id": chore["id"]}
        assert client.get("/chores").json() == []

    def test_toggle_completion_twice(self, client: TestClient) -> None:
        chore = _create_chore(client, recurrence_type="daily")
        url = f"/chores/{chore['id']}/completions/2024-01-05"

        first = client.post(url).json()
        second = client.post(url).json()

        assert first["date"] == "2024-01-05"
        assert first["is_completed"] is True
        assert second["is_completed"] is False

    def test_toggle_with_malformed_date_is_422(self, client: TestClient) -> None:
        chore = _create_chore(client)

        response = client.post(f"/chores/{chore['id']}/completions/2024-1-5")

        assert response.status_code == 422
        assert response.json()["code"] == "ERR_INVALID_DATE"

    def test_next_occurrence(self, client: TestClient) -> None:
        chore = _create_chore(client, recurrence_type="daily", interval=2)

        response = client.get(f"/chores/{chore['id']}/next", params={"after": "2024-01-01"})

        assert response.json()["next_occurrence"] == "2024-01-03"


@pytest.mark.unit
class TestCalendarRoutes:
    """Tests for occurrence and calendar views."""

    def test_occurrences_in_range(self, client: TestClient) -> None:
        chore = _create_chore(client, recurrence_type="daily", interval=2, end_date="2024-01-05")

        response = client.get("/occurrences", params={"start": "2024-01-01", "end": "2024-01-31"})

        assert [(i["chore"]["id"], i["date"]) for i in response.json()] == [
            (chore["id"], "2024-01-01"),
            (chore["id"], "2024-01-03"),
            (chore["id"], "2024-01-05"),
        ]

    def test_occurrences_filtered_by_category(self, client: TestClient) -> None:
        _create_chore(client, category="cleaning")
        admin = _create_chore(client, category="admin")

        response = client.get(
            "/occurrences",
            params={"start": "2024-01-01", "end": "2024-01-01", "category": "admin"},
        )

        assert [i["chore"]["id"] for i in response.json()] == [admin["id"]]

    def test_month_view(self, client: TestClient) -> None:
        chore = _create_chore(client, due_date="2024-01-10")
        client.post(f"/chores/{chore['id']}/completions/2024-01-10")

        response = client.get("/calendar/2024/1")
        data = response.json()
        day = next(d for d in data["days"] if d["date"] == "2024-01-10")

        assert response.status_code == 200
        assert data["window_start"] == "2023-12-31"
        assert data["window_end"] == "2024-02-03"
        assert day["instances"][0]["is_completed"] is True

    def test_month_out_of_range_is_422(self, client: TestClient) -> None:
        assert client.get("/calendar/2024/13").status_code == 422

    def test_day_view(self, client: TestClient) -> None:
        chore = _create_chore(client, recurrence_type="weekly", days_of_week=[1])

        monday = client.get("/calendar/days/2024-01-08").json()
        tuesday = client.get("/calendar/days/2024-01-09").json()

        assert [i["chore"]["id"] for i in monday] == [chore["id"]]
        assert tuesday == []


@pytest.mark.unit
class TestTeamRoutes:
    """Tests for team member routes."""

    def test_add_member_assigns_palette_color(self, client: TestClient) -> None:
        first = client.post("/team", json={"name": "Alex"}).json()
        second = client.post("/team", json={"name": "Sam"}).json()

        assert first["color"] == "#4CAF50"
        assert second["color"] == "#2196F3"
        assert len(client.get("/team").json()) == 2

    def test_remove_member_unassigns_chores(self, client: TestClient) -> None:
        member = client.post("/team", json={"name": "Alex"}).json()
        chore = _create_chore(client, assignee_id=member["id"])

        response = client.delete(f"/team/{member['id']}")

        assert response.status_code == 200
        assert client.get("/team").json() == []
        assert client.get(f"/chores/{chore['id']}").json()["chore"]["assignee_id"] is None

    def test_remove_unknown_member_is_404(self, client: TestClient) -> None:
        response = client.delete("/team/missing")

        assert response.status_code == 404
        assert response.json()["code"] == "ERR_MEMBER_NOT_FOUND"

    def test_create_with_unknown_assignee_is_422(self, client: TestClient) -> None:
        response = client.post(
            "/chores",
            json={"title": "Dishes", "due_date": "2024-01-01", "assignee_id": "ghost"},
        )

        assert response.status_code == 422
        assert response.json()["code"] == "ERR_VALIDATION"
        assert client.get("/chores").json() == []


@pytest.mark.unit
class TestEndOfDateRange:
    """Tests for requests that touch the first or last representable date."""

    def test_occurrences_up_to_max_date(self, client: TestClient) -> None:
        _create_chore(client, due_date="9999-12-01", recurrence_type="daily", interval=7)

        response = client.get("/occurrences", params={"start": "9999-12-01", "end": "9999-12-31"})

        assert response.status_code == 200
        assert [i["date"] for i in response.json()][-1] == "9999-12-29"

    def test_first_month_of_year_one(self, client: TestClient) -> None:
        response = client.get("/calendar/1/1")

        assert response.status_code == 200
        assert response.json()["window_start"] == "0001-01-01"

    def test_last_month_of_year_9999(self, client: TestClient) -> None:
        response = client.get("/calendar/9999/12")

        assert response.status_code == 200
        assert response.json()["window_end"] == "9999-12-31"


@pytest.mark.unit
class TestStorageReadFailure:
    """Tests for a storage backend whose reads fail."""

    @pytest.fixture
    def redis_client(self) -> RedisClient:
        redis_client = RedisClient()
        redis_client._enabled = True
        redis_client._client = AsyncMock()
        redis_client._client.get = AsyncMock(side_effect=RedisConnectionError("blip"))
        redis_client._client.set = AsyncMock()
        return redis_client

    @pytest.fixture
    def failing_client(self, redis_client: RedisClient) -> Iterator[TestClient]:
        store = ChoreStore(redis_client)
        app.dependency_overrides[get_store] = lambda: store
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_listing_degrades_to_empty(self, failing_client: TestClient) -> None:
        response = failing_client.get("/chores")

        assert response.status_code == 200
        assert response.json() == []

    def test_create_fails_without_overwriting(self, failing_client: TestClient, redis_client: RedisClient) -> None:
        response = failing_client.post("/chores", json={"title": "Dishes", "due_date": "2024-01-01"})

        assert response.status_code == 503
        assert response.json()["code"] == "ERR_STORAGE_UNAVAILABLE"
        redis_client._client.set.assert_not_called()

    def test_team_change_fails_without_overwriting(
        self, failing_client: TestClient, redis_client: RedisClient
    ) -> None:
        response = failing_client.post("/team", json={"name": "Alex"})

        assert response.status_code == 503
        redis_client._client.set.assert_not_called()
