"""End-to-end project lifecycle."""


def test_project_lifecycle(client, post_images):
    created = client.post("/api/projects", json={"name": "Spring 2024"})
    assert created.status_code == 201
    project_id = created.json()["id"]

    duplicate = client.post("/api/projects", json={"name": "Spring 2024"})
    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "Project with name 'Spring 2024' already exists"

    uploaded = post_images(client, ["ring01.jpg", "ring02.jpg"], projectId=project_id)
    assert uploaded.status_code == 201

    summary = client.get("/api/projects").json()[0]
    assert summary["asset_count"] == 2
    assert summary["latest_image"] is not None

    assert len(client.get(f"/api/projects/{project_id}/assets").json()) == 2
    assert len(client.get("/api/assets/search", params={"q": "spring"}).json()) == 2

    assert client.delete(f"/api/projects/{project_id}").status_code == 200
    assert client.get(f"/api/projects/{project_id}/assets").json() == []
    assert client.get("/api/assets").json() == []
    assert client.get("/api/projects").json() == []
