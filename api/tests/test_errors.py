"""Error body tests for failures outside request validation."""

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from jewelrydam.main import app
from jewelrydam.services import client_service, project_service


def database_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))


class TestDatabaseErrors:
    """Unhandled database errors are rendered as JSON 500s."""

    def test_create_project(self, client, monkeypatch):
        monkeypatch.setattr(project_service, "create_project", database_down)

        response = client.post("/api/projects", json={"name": "Spring 2024"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Database operation failed"
        assert "server closed the connection" in body["details"]

    def test_create_client(self, client, monkeypatch):
        monkeypatch.setattr(client_service, "create_client", database_down)

        response = client.post("/api/clients", json={"name": "Aurora Jewels"})

        assert response.status_code == 500
        assert "server closed the connection" in response.json()["details"]

    def test_upload_log(self, make_client, storage, monkeypatch):
        from jewelrydam.api.v1.endpoints import uploads

        make_client(storage)
        monkeypatch.setattr(uploads, "list_recent_upload_events", database_down)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/uploads/log")

        assert response.status_code == 500
        assert response.json()["error"] == "Database operation failed"
