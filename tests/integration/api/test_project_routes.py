"""Integration tests for project, status and priority routes."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from ticketsmith.api.app import create_app


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Test client over an in-memory database."""
    app = create_app(db_path=":memory:")
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.mark.integration
class TestProjectCrudFullFlow:
    """Integration test for the project lifecycle."""

    def test_project_crud_full_flow(self, client: TestClient) -> None:
        """Create -> Read -> List -> Delete flow."""
        # 1. Create
        create_response = client.post(
            "/api/v1/projects",
            json={"name": "Test Project", "description": "Tracks things"},
        )
        assert create_response.status_code == 201
        project_id = create_response.json()["data"]["id"]

        # 2. Read
        get_response = client.get(f"/api/v1/projects/{project_id}")
        assert get_response.status_code == 200
        assert get_response.json()["data"]["description"] == "Tracks things"

        # 3. List
        list_response = client.get("/api/v1/projects")
        assert [p["name"] for p in list_response.json()["data"]] == ["Test Project"]

        # 4. Delete
        delete_response = client.delete(f"/api/v1/projects/{project_id}")
        assert delete_response.status_code == 204

        get_response2 = client.get(f"/api/v1/projects/{project_id}")
        assert get_response2.status_code == 404
        assert get_response2.json() == {"data": None, "error": "Project not found"}

    def test_create_requires_name(self, client: TestClient) -> None:
        response = client.post("/api/v1/projects", json={"name": ""})

        assert response.status_code == 422

    def test_delete_missing_project(self, client: TestClient) -> None:
        assert client.delete("/api/v1/projects/999").status_code == 404


@pytest.mark.integration
class TestWorkflowMetadataRoutes:
    """Statuses and priorities through the API."""

    def test_create_project_seeds_defaults(self, client: TestClient) -> None:
        project_id = client.post("/api/v1/projects", json={"name": "Seeded"}).json()["data"]["id"]

        statuses = client.get(f"/api/v1/projects/{project_id}/statuses").json()["data"]
        priorities = client.get("/api/v1/priorities").json()["data"]

        assert [s["name"] for s in statuses] == ["backlog"]
        assert [p["name"] for p in priorities] == ["medium"]

    def test_seeding_can_be_disabled(self, client: TestClient) -> None:
        response = client.post("/api/v1/projects", json={"name": "Bare", "seed_defaults": False})
        project_id = response.json()["data"]["id"]

        statuses = client.get(f"/api/v1/projects/{project_id}/statuses").json()["data"]

        assert statuses == []

    def test_create_status(self, client: TestClient) -> None:
        project_id = client.post("/api/v1/projects", json={"name": "P"}).json()["data"]["id"]

        response = client.post(
            f"/api/v1/projects/{project_id}/statuses",
            json={"name": "done", "sort_order": 9, "is_completed": True},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["project_id"] == project_id
        assert data["is_completed"] is True

    def test_duplicate_status_conflict(self, client: TestClient) -> None:
        project_id = client.post("/api/v1/projects", json={"name": "P"}).json()["data"]["id"]

        response = client.post(f"/api/v1/projects/{project_id}/statuses", json={"name": "backlog"})

        assert response.status_code == 409

    def test_status_for_missing_project(self, client: TestClient) -> None:
        response = client.post("/api/v1/projects/404/statuses", json={"name": "backlog"})

        assert response.status_code == 404

    def test_duplicate_priority_conflict(self, client: TestClient) -> None:
        assert client.post("/api/v1/priorities", json={"name": "high"}).status_code == 201

        response = client.post("/api/v1/priorities", json={"name": "high"})

        assert response.status_code == 409
        assert response.json()["error"] == "Priority with this name already exists"


@pytest.mark.integration
class TestOpenAPIDocs:
    """The schema lists every route."""

    def test_openapi_schema(self, client: TestClient) -> None:
        paths = client.get("/openapi.json").json()["paths"]

        assert "/api/v1/projects" in paths
        assert "/api/v1/projects/{project_id}/tickets/generate" in paths
