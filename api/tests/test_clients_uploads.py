"""Client and upload log endpoint tests."""

from datetime import datetime, timedelta

from jewelrydam.models import UploadLog, UploadLogStatus
from jewelrydam.services.upload_log_service import record_upload_event


class TestClients:
    """Tests for /api/clients."""

    def test_create(self, client):
        response = client.post("/api/clients", json={"name": "  Aurora Jewels "})

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Aurora Jewels"
        assert data["id"]

    def test_list_sorted_by_name(self, client):
        client.post("/api/clients", json={"name": "Zircon Ltd"})
        client.post("/api/clients", json={"name": "Aurora Jewels"})

        response = client.get("/api/clients")

        assert [c["name"] for c in response.json()] == ["Aurora Jewels", "Zircon Ltd"]

    def test_blank_name_rejected(self, client):
        response = client.post("/api/clients", json={"name": " "})

        assert response.status_code == 400
        assert "Client name is required" in response.json()["error"]


class TestUploadLog:
    """Tests for GET /api/uploads/log."""

    def test_newest_first(self, client, test_db):
        now = datetime.utcnow()
        test_db.add_all(
            [
                UploadLog(message="older", status=UploadLogStatus.STARTED, timestamp=now - timedelta(seconds=5)),
                UploadLog(message="newer", status=UploadLogStatus.COMMITTED, timestamp=now),
            ]
        )
        test_db.commit()

        response = client.get("/api/uploads/log")

        assert response.status_code == 200
        assert [e["message"] for e in response.json()] == ["newer", "older"]

    def test_limited_to_recent_entries(self, client, test_db):
        for i in range(55):
            record_upload_event(test_db, UploadLogStatus.STARTED, f"entry {i}")

        response = client.get("/api/uploads/log")

        assert len(response.json()) == 50

    def test_records_upload(self, client, post_images):
        asset = post_images(client, ["ring.jpg"]).json()["assets"][0]

        entries = client.get("/api/uploads/log").json()

        assert {e["status"] for e in entries if e["asset_id"] == asset["id"]} == {
            "started",
            "uploaded",
            "committed",
        }
