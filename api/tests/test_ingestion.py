"""Asset upload (ingestion) tests."""

import asyncio
from io import BytesIO
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError
from starlette.datastructures import Headers, UploadFile

from jewelrydam.models import Asset, Project, UploadLog, UploadLogStatus
from jewelrydam.services.errors import IngestionError
from jewelrydam.services.ingestion_service import IngestionMetadata, IngestionService

from conftest import PUBLIC_URL, FailingStorageDriver


class TestUploadAssets:
    """Tests for POST /api/assets."""

    def test_new_project_name_creates_one_project(self, client, post_images, test_db):
        response = post_images(
            client,
            ["ring01.jpg", "ring02.jpg"],
            projectName="Spring 2024",
            projectDate="2024-03-01",
            clientName="Aurora Jewels",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Assets created successfully"
        assert len(data["assets"]) == 2

        projects = test_db.query(Project).all()
        assert len(projects) == 1
        project = projects[0]
        assert project.name == "Spring 2024"

        assets = test_db.query(Asset).all()
        assert len(assets) == 2
        assert {a.project_id for a in assets} == {project.id}
        assert {a["project_id"] for a in data["assets"]} == {project.id}
        assert {a["project_name"] for a in data["assets"]} == {"Spring 2024"}
        assert {a.client_name for a in assets} == {"Aurora Jewels"}
        assert {a.project_date.isoformat() for a in assets} == {"2024-03-01"}

    def test_existing_project_name_is_reused(self, client, post_images, test_db):
        existing = client.post("/api/projects", json={"name": "Spring 2024"}).json()

        response = post_images(client, ["ring01.jpg"], projectName="Spring 2024")

        assert response.status_code == 201
        assert response.json()["assets"][0]["project_id"] == existing["id"]
        assert test_db.query(Project).count() == 1

    def test_project_id_used_directly(self, client, post_images):
        project = client.post("/api/projects", json={"name": "Bridal"}).json()

        response = post_images(client, ["ring01.jpg"], projectId=project["id"])

        assert response.status_code == 201
        asset = response.json()["assets"][0]
        assert asset["project_id"] == project["id"]
        assert asset["project_name"] == "Bridal"

    def test_unknown_project_id_rejected(self, client, post_images, test_db):
        response = post_images(client, ["ring01.jpg"], projectId="missing")

        assert response.status_code == 400
        assert "does not exist" in response.json()["error"]
        assert test_db.query(Asset).count() == 0

    def test_without_project(self, client, post_images):
        response = post_images(client, ["loose.jpg"])

        assert response.status_code == 201
        asset = response.json()["assets"][0]
        assert asset["project_id"] is None
        assert asset["project_name"] is None

    def test_no_files_rejected(self, client):
        response = client.post("/api/assets", data={"projectName": "Spring 2024"})

        assert response.status_code == 400
        assert "At least one image" in response.json()["error"]

    def test_blob_stored_under_asset_key(self, client, post_images, storage_config):
        response = post_images(client, ["ring01.jpg"])

        asset = response.json()["assets"][0]
        assert asset["url"] == f"{PUBLIC_URL}/assets/{asset['id']}.jpg"
        blob = Path(storage_config["base_path"]) / "assets" / f"{asset['id']}.jpg"
        assert blob.read_bytes().endswith(b"ring01.jpg")

    def test_asset_name_is_original_filename(self, client, post_images, test_db):
        post_images(client, ["Gold Ring Front.jpg"])

        assert test_db.query(Asset).one().name == "Gold Ring Front.jpg"

    def test_tags_and_description_applied(self, client, post_images, test_db):
        post_images(client, ["ring01.jpg"], tags='["gold", "ring", "gold"]', description="Front view")

        asset = test_db.query(Asset).one()
        assert asset.tags == "gold,ring"
        assert asset.description == "Front view"

    def test_iso_datetime_project_date(self, client, post_images, test_db):
        post_images(client, ["ring01.jpg"], projectDate="2024-03-01T00:00:00.000Z")

        assert test_db.query(Asset).one().project_date.isoformat() == "2024-03-01"

    def test_invalid_project_date_rejected(self, client, post_images):
        response = post_images(client, ["ring01.jpg"], projectDate="first of march")

        assert response.status_code == 400

    def test_audit_trail_written(self, client, post_images, test_db):
        response = post_images(client, ["ring01.jpg"])
        asset_id = response.json()["assets"][0]["id"]

        statuses = {
            entry.status
            for entry in test_db.query(UploadLog).filter(UploadLog.asset_id == asset_id)
        }
        assert statuses == {
            UploadLogStatus.STARTED,
            UploadLogStatus.UPLOADED,
            UploadLogStatus.COMMITTED,
        }


class TestHighResolutionUpload:
    """Tests for paired TIFF uploads."""

    def test_tiff_paired_by_stem(self, client, storage_config, test_db):
        response = client.post(
            "/api/assets",
            files=[
                ("images", ("ring01.jpg", b"jpg-bytes", "image/jpeg")),
                ("images", ("ring02.jpg", b"jpg-bytes", "image/jpeg")),
                ("tiffs", ("ring01.tiff", b"tiff-bytes", "image/tiff")),
            ],
        )

        assert response.status_code == 201
        by_name = {a["name"]: a for a in response.json()["assets"]}
        ring01 = by_name["ring01.jpg"]
        assert ring01["secondary_url"] == f"{PUBLIC_URL}/assets/{ring01['id']}.tiff"
        assert by_name["ring02.jpg"]["secondary_url"] is None

        blob = Path(storage_config["base_path"]) / "assets" / f"{ring01['id']}.tiff"
        assert blob.read_bytes() == b"tiff-bytes"

    def test_unmatched_tiff_rejected(self, client, test_db):
        response = client.post(
            "/api/assets",
            files=[
                ("images", ("ring01.jpg", b"jpg-bytes", "image/jpeg")),
                ("tiffs", ("necklace.tiff", b"tiff-bytes", "image/tiff")),
            ],
        )

        assert response.status_code == 400
        assert test_db.query(Asset).count() == 0


class TestUploadStorageFailure:
    """Object storage failures abort the batch."""

    def test_failure_aborts_batch_and_keeps_earlier_files(
        self, make_client, storage_config, post_images, test_db
    ):
        failing = FailingStorageDriver(storage_config, fail_upload_after=1)
        client = make_client(failing)

        response = post_images(
            client, ["ring01.jpg", "ring02.jpg", "ring03.jpg"], projectName="Spring 2024"
        )

        assert response.status_code == 500
        data = response.json()
        assert "ring02.jpg" in data["error"]
        assert "connection reset" in data["details"]
        assert [a["name"] for a in data["assets"]] == ["ring01.jpg"]

        # ring03 was never attempted
        assert failing.upload_calls == 2
        assert [a.name for a in test_db.query(Asset).all()] == ["ring01.jpg"]

        failed = test_db.query(UploadLog).filter(UploadLog.status == UploadLogStatus.FAILED).one()
        assert "ring02.jpg" in failed.message

    def test_first_file_failure_creates_no_assets(
        self, make_client, storage_config, post_images, test_db
    ):
        client = make_client(FailingStorageDriver(storage_config, fail_upload_after=0))

        response = post_images(client, ["ring01.jpg"])

        assert response.status_code == 500
        assert response.json()["assets"] == []
        assert test_db.query(Asset).count() == 0


class TestUploadContentTypes:
    """Blobs are stored with the declared content type."""

    @pytest.fixture
    def recording(self, storage_config):
        return FailingStorageDriver(storage_config)

    def test_declared_type_kept(self, make_client, recording):
        client = make_client(recording)

        response = client.post(
            "/api/assets", files=[("images", ("ring.png", b"png-bytes", "image/png"))]
        )

        asset_id = response.json()["assets"][0]["id"]
        assert recording.uploads == [(f"assets/{asset_id}.jpg", "image/png")]

    def test_untyped_image_defaults_to_jpeg(self, make_client, recording):
        client = make_client(recording)

        response = client.post(
            "/api/assets",
            files=[("images", ("ring", b"raw-bytes", "application/octet-stream"))],
        )

        assert response.status_code == 201
        assert [content_type for _, content_type in recording.uploads] == ["image/jpeg"]

    def test_tiff_tagged_as_tiff(self, make_client, recording):
        client = make_client(recording)

        response = client.post(
            "/api/assets",
            files=[
                ("images", ("ring.jpg", b"jpg-bytes", "image/jpeg")),
                ("tiffs", ("ring.tiff", b"tiff-bytes", "application/octet-stream")),
            ],
        )

        asset_id = response.json()["assets"][0]["id"]
        assert recording.uploads == [
            (f"assets/{asset_id}.jpg", "image/jpeg"),
            (f"assets/{asset_id}.tiff", "image/tiff"),
        ]


def make_upload(name, content=b"jpg-bytes", content_type="image/jpeg"):
    return UploadFile(
        file=BytesIO(content),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


class TestRecordFailure:
    """A failed asset insert aborts the batch like a storage failure."""

    def test_insert_failure_reports_committed_assets(
        self, test_db, storage, storage_config, monkeypatch
    ):
        commit = test_db.commit

        def failing_commit():
            if any(isinstance(obj, Asset) and obj.name == "ring02.jpg" for obj in test_db.new):
                raise OperationalError("INSERT INTO assets", {}, Exception("disk I/O error"))
            commit()

        monkeypatch.setattr(test_db, "commit", failing_commit)
        service = IngestionService(test_db, storage)

        with pytest.raises(IngestionError) as exc_info:
            asyncio.run(
                service.ingest(
                    [make_upload("ring01.jpg"), make_upload("ring02.jpg"), make_upload("ring03.jpg")],
                    IngestionMetadata(),
                )
            )

        error = exc_info.value
        assert "ring02.jpg" in str(error)
        assert "disk I/O error" in error.details
        assert [asset.name for asset in error.committed] == ["ring01.jpg"]
        assert [a.name for a in test_db.query(Asset).all()] == ["ring01.jpg"]

        failed = test_db.query(UploadLog).filter(UploadLog.status == UploadLogStatus.FAILED).one()
        assert "ring02.jpg" in failed.message

        # the stored blob for the unrecorded asset is removed again
        blobs = list((Path(storage_config["base_path"]) / "assets").iterdir())
        assert [blob.name for blob in blobs] == [f"{error.committed[0].id}.jpg"]
