"""Project endpoint tests."""

from jewelrydam.models import Asset, Project


class TestCreateProject:
    """Tests for POST /api/projects."""

    def test_create_project(self, client):
        response = client.post("/api/projects", json={"name": "Spring 2024"})
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Spring 2024"
        assert data["id"]
        assert data["description"] is None

    def test_duplicate_name_rejected(self, client):
        assert client.post("/api/projects", json={"name": "Spring 2024"}).status_code == 201

        response = client.post("/api/projects", json={"name": "Spring 2024"})
        assert response.status_code == 400
        assert "already exists" in response.json()["error"]

    def test_name_match_is_case_sensitive(self, client):
        assert client.post("/api/projects", json={"name": "Spring 2024"}).status_code == 201
        assert client.post("/api/projects", json={"name": "spring 2024"}).status_code == 201

    def test_different_name_succeeds(self, client, test_db):
        client.post("/api/projects", json={"name": "Spring 2024"})
        response = client.post(
            "/api/projects",
            json={"name": "Bridal", "description": "Rings", "project_date": "2024-05-01T00:00:00.000Z"},
        )
        assert response.status_code == 201
        assert response.json()["project_date"] == "2024-05-01"
        assert test_db.query(Project).count() == 2

    def test_missing_name_rejected(self, client):
        response = client.post("/api/projects", json={"description": "no name"})
        assert response.status_code == 400
        assert "name" in response.json()["error"]

    def test_blank_name_rejected(self, client):
        response = client.post("/api/projects", json={"name": "   "})
        assert response.status_code == 400
        assert "Project name is required" in response.json()["error"]


class TestListProjects:
    """Tests for GET /api/projects."""

    def test_empty(self, client):
        response = client.get("/api/projects")
        assert response.status_code == 200
        assert response.json() == []

    def test_enriched_with_assets(self, client, post_images):
        post_images(client, ["ring01.jpg", "ring02.jpg"], projectName="Spring 2024")
        client.post("/api/projects", json={"name": "Empty"})

        projects = {p["name"]: p for p in client.get("/api/projects").json()}

        spring = projects["Spring 2024"]
        assert spring["asset_count"] == 2
        assert spring["latest_image"].startswith("http://localhost:9000/jewelrydam/assets/")
        assert len(spring["upload_dates"]) == 1

        empty = projects["Empty"]
        assert empty["asset_count"] == 0
        assert empty["latest_image"] is None
        assert empty["upload_dates"] == []


class TestProjectDetail:
    """Tests for GET /api/projects/{id} and /assets."""

    def test_detail_groups_assets_by_date(self, client, post_images):
        response = post_images(client, ["ring01.jpg", "ring02.jpg"], projectName="Spring 2024")
        project_id = response.json()["assets"][0]["project_id"]

        detail = client.get(f"/api/projects/{project_id}")
        assert detail.status_code == 200
        data = detail.json()
        assert data["asset_count"] == 2
        (day, assets), = data["assets_by_date"].items()
        assert {a["name"] for a in assets} == {"ring01.jpg", "ring02.jpg"}

    def test_detail_not_found(self, client):
        response = client.get("/api/projects/does-not-exist")
        assert response.status_code == 404
        assert "not found" in response.json()["error"]

    def test_project_assets(self, client, post_images):
        response = post_images(client, ["ring01.jpg"], projectName="Spring 2024")
        post_images(client, ["other.jpg"], projectName="Bridal")
        project_id = response.json()["assets"][0]["project_id"]

        assets = client.get(f"/api/projects/{project_id}/assets").json()
        assert [a["name"] for a in assets] == ["ring01.jpg"]

    def test_unknown_project_assets_empty(self, client):
        response = client.get("/api/projects/unknown/assets")
        assert response.status_code == 200
        assert response.json() == []


class TestUpdateProject:
    """Tests for PUT /api/projects/{id}."""

    def test_rename_updates_assets(self, client, post_images, test_db):
        response = post_images(client, ["ring01.jpg"], projectName="Spring 2024")
        project_id = response.json()["assets"][0]["project_id"]

        response = client.put(
            f"/api/projects/{project_id}",
            json={"name": "Spring Collection", "project_date": "2024-04-02"},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Spring Collection"

        asset = test_db.query(Asset).one()
        assert asset.project_name == "Spring Collection"
        assert asset.project_date.isoformat() == "2024-04-02"

    def test_rename_to_existing_rejected(self, client):
        first = client.post("/api/projects", json={"name": "Spring 2024"}).json()
        client.post("/api/projects", json={"name": "Bridal"})

        response = client.put(f"/api/projects/{first['id']}", json={"name": "Bridal"})
        assert response.status_code == 400
        assert "already exists" in response.json()["error"]

    def test_update_description_only(self, client):
        project = client.post("/api/projects", json={"name": "Spring 2024"}).json()

        response = client.put(f"/api/projects/{project['id']}", json={"description": "Pearls"})
        assert response.status_code == 200
        assert response.json()["description"] == "Pearls"
        assert response.json()["name"] == "Spring 2024"

    def test_update_not_found(self, client):
        response = client.put("/api/projects/missing", json={"name": "X"})
        assert response.status_code == 404
