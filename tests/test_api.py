"""Tests for the HTTP routes."""

from unittest.mock import MagicMock, patch

import pytest

from glacier_gateway.main import app
from glacier_gateway.routes.jobs import content_disposition
from tests.conftest import client_error


@pytest.fixture
def vault(glacier):
    glacier.create_vault("archive-vault")
    return "archive-vault"


class TestVaultRoutes:

    def test_create_vault(self, client, glacier):
        response = client.post("/create-vault", params={"vault_name": "archive-vault"})

        assert response.status_code == 201
        assert response.json()["name"] == "archive-vault"
        assert "archive-vault" in glacier.vaults

    def test_create_existing_vault(self, client, vault):
        response = client.post("/create-vault", params={"vault_name": vault})

        assert response.status_code == 400
        assert response.json()["code"] == "VaultAlreadyExists"

    def test_create_blank_vault_name(self, client, glacier):
        response = client.post("/create-vault", params={"vault_name": " "})

        assert response.status_code == 400
        assert response.json()["code"] == "ValidationError"
        assert glacier.calls == []

    def test_list_vaults(self, client, vault):
        response = client.get("/list-vaults", params={"limit": 5})

        assert response.status_code == 200
        assert [v["name"] for v in response.json()] == [vault]

    def test_list_vaults_limit_validated(self, client):
        assert client.get("/list-vaults", params={"limit": 0}).status_code == 422

    def test_describe_missing_vault(self, client):
        response = client.get("/describe-vault", params={"vault_name": "missing"})

        assert response.status_code == 404
        assert "missing" in response.json()["detail"]

    def test_delete_missing_vault(self, client, glacier):
        response = client.delete("/delete-vault", params={"vault_name": "missing"})

        assert response.status_code == 404
        assert glacier.called("delete_vault") == []

    def test_delete_vault(self, client, glacier, vault):
        response = client.delete("/delete-vault", params={"vault_name": vault})

        assert response.status_code == 200
        assert vault not in glacier.vaults

    def test_remote_failure_is_bad_request(self, client, glacier):
        glacier.failures["list_vaults"] = client_error("ThrottlingException", "ListVaults", "Slow down")

        response = client.get("/list-vaults")

        assert response.status_code == 400
        assert "Slow down" in response.json()["detail"]


class TestArchiveRoutes:

    def test_upload_archive(self, client, glacier, index, vault):
        glacier.next_archive_ids.append("abc123")

        response = client.post(
            "/upload-archive",
            data={"vault_name": vault, "description": "Q1"},
            files={"file": ("report.pdf", b"%PDF-1.7", "application/pdf")},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["archive_id"] == "abc123"
        assert body["indexed"] is True
        assert index.find("abc123").file_description == "Q1"

    def test_upload_to_missing_vault(self, client):
        response = client.post(
            "/upload-archive",
            data={"vault_name": "missing"},
            files={"file": ("report.pdf", b"%PDF-1.7", "application/pdf")},
        )

        assert response.status_code == 404

    def test_delete_archive(self, client, glacier, vault):
        glacier.next_archive_ids.append("abc123")
        glacier.upload_archive(vault, b"x", "x.txt", "00")

        response = client.delete("/delete-archive", params={"vault_name": vault, "archive_id": "abc123"})

        assert response.status_code == 200
        assert glacier.archives[vault] == {}


class TestJobRoutes:

    def test_initiate_job_rejects_unknown_tier(self, client, vault):
        response = client.post(
            "/initiate-job", json={"vault_name": vault, "archive_id": "abc123", "tier": "Instant"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "ValidationError"
        assert "Instant" in response.json()["detail"]

    def test_get_unknown_job(self, client, vault):
        response = client.get("/get-job-description", params={"vault_name": vault, "job_id": "job-9"})

        assert response.status_code == 404
        assert response.json()["code"] == "JobNotFound"

    def test_inventory_flow(self, client, glacier, vault):
        glacier.next_archive_ids.append("abc123")
        glacier.upload_archive(vault, b"%PDF", "report.pdf", "00")

        job = client.get("/inventory-retrieval-by-vault-name", params={"vault_name": vault}).json()
        assert job["job_type"] == "inventory-retrieval"

        glacier.complete_job(vault, job["job_id"])
        response = client.get("/get-inventory", params={"vault_name": vault, "job_id": job["job_id"]})

        assert response.status_code == 200
        assert response.json()[0]["id"] == "abc123"

    def test_list_jobs(self, client, glacier, vault):
        glacier.initiate_job(vault, "inventory-retrieval")

        response = client.get("/list-jobs", params={"vault_name": vault})

        assert response.status_code == 200
        assert len(response.json()) == 1


class TestEndToEnd:

    def test_upload_retrieve_download(self, client, glacier, index):
        assert client.post("/create-vault", params={"vault_name": "archive-vault"}).status_code == 201

        glacier.next_archive_ids.append("abc123")
        upload = client.post(
            "/upload-archive",
            data={"vault_name": "archive-vault"},
            files={"file": ("report.pdf", b"%PDF-1.7 quarterly", "application/pdf")},
        )
        assert upload.json()["archive_id"] == "abc123"

        records = client.get("/read-file-archive-description-storage-local").json()
        assert records == [{
            "fileName": "report.pdf",
            "fileDescription": "",
            "archiveId": "abc123",
            "vaultName": "archive-vault",
        }]

        job = client.post(
            "/initiate-job",
            json={"vault_name": "archive-vault", "archive_id": "abc123", "tier": "Standard"},
        )
        assert job.status_code == 201
        assert job.json()["state"] == "initiated"
        job_id = job.json()["job_id"]

        params = {"vault_name": "archive-vault", "job_id": job_id}
        assert client.get("/get-job-description", params=params).json()["completed"] is False

        glacier.complete_job("archive-vault", job_id)
        assert client.get("/get-job-description", params=params).json()["completed"] is True

        download = client.get("/get-archive", params=params)

        assert download.status_code == 200
        assert download.headers["content-type"] == "application/pdf"
        assert download.headers["content-disposition"] == 'attachment; filename="report.pdf"'
        assert download.content == b"%PDF-1.7 quarterly"

    def test_download_before_completion(self, client, glacier, vault):
        glacier.next_archive_ids.append("abc123")
        glacier.upload_archive(vault, b"%PDF", "report.pdf", "00")
        job_id = client.post(
            "/initiate-job", json={"vault_name": vault, "archive_id": "abc123"}
        ).json()["job_id"]

        response = client.get("/get-archive", params={"vault_name": vault, "job_id": job_id})

        assert response.status_code == 400
        assert response.json()["code"] == "JobNotReady"
        assert glacier.called("get_job_output") == []


class TestDescriptionRoutes:

    def test_write_and_read(self, client):
        record = {"fileName": "a.txt", "fileDescription": "notes", "archiveId": "id-1", "vaultName": "v"}

        assert client.post("/write-file-archive-description-storage-local", json=record).status_code == 201
        assert client.get("/read-file-archive-description-storage-local").json() == [record]

    def test_write_rejects_blank_archive_id(self, client):
        record = {"fileName": "a.txt", "archiveId": " ", "vaultName": "v"}

        response = client.post("/write-file-archive-description-storage-local", json=record)

        assert response.status_code == 400

    def test_index_failure_is_distinct(self, client, index, tmp_path):
        index.path = str(tmp_path)
        record = {"fileName": "a.txt", "archiveId": "id-1", "vaultName": "v"}

        response = client.post("/write-file-archive-description-storage-local", json=record)

        assert response.status_code == 500
        assert response.json()["code"] == "LocalIndexIOError"


class TestConfigRoutes:

    def test_missing_config_is_bad_request(self):
        from fastapi.testclient import TestClient

        with patch("glacier_gateway.core.aws.get_current_config", return_value=None):
            response = TestClient(app).get("/list-vaults")

        assert response.status_code == 400
        assert response.json()["code"] == "ConfigurationError"

    def test_get_config_hides_secret(self, client):
        collection = MagicMock()
        collection.find_one.return_value = {
            "_id": "x", "account": "-", "key": "AKIA", "secret": "s3cr3t", "region": "us-east-1",
        }

        with patch("glacier_gateway.core.utils.get_collection", return_value=collection):
            response = client.get("/configs/")

        assert response.status_code == 200
        assert response.json()["key"] == "AKIA"
        assert "secret" not in response.json()

    def test_post_config_when_already_set(self, client):
        collection = MagicMock()
        collection.find_one.return_value = {"_id": "x"}
        config = {"key": "AKIA", "secret": "s", "region": "us-east-1"}

        with patch("glacier_gateway.routes.configs.get_collection", return_value=collection):
            response = client.post("/configs/", json=config)

        assert response.status_code == 400
        collection.insert_one.assert_not_called()

    def test_post_config_validates_credentials(self, client):
        collection = MagicMock()
        collection.find_one.return_value = None
        config = {"key": "AKIA", "secret": "s", "region": "us-east-1"}

        with patch("glacier_gateway.routes.configs.get_collection", return_value=collection), \
                patch("glacier_gateway.routes.configs.GlacierService") as service_cls:
            service_cls.from_config.return_value.list_vaults.side_effect = client_error(
                "UnrecognizedClientException", "ListVaults", "The security token is invalid"
            )
            response = client.post("/configs/", json=config)

        assert response.status_code == 400
        assert "security token" in response.json()["detail"]
        collection.insert_one.assert_not_called()


class TestContentDisposition:

    def test_plain_name_is_quoted(self):
        assert content_disposition("report.pdf") == 'attachment; filename="report.pdf"'

    def test_non_ascii_name_is_encoded(self):
        assert content_disposition("relatório.pdf") == "attachment; filename*=utf-8''relat%C3%B3rio.pdf"

    def test_control_characters_are_encoded(self):
        header = content_disposition("evil\r\nname.txt")

        assert "\r" not in header and "\n" not in header
        assert header == "attachment; filename*=utf-8''evil%0D%0Aname.txt"

    def test_download_with_indexed_name_containing_newline(self, client, glacier, index, vault):
        glacier.next_archive_ids.append("nl")
        glacier.upload_archive(vault, b"hello", "", "00")
        client.post("/write-file-archive-description-storage-local", json={
            "fileName": "evil\r\nname.txt", "archiveId": "nl", "vaultName": vault,
        })
        job_id = client.post("/initiate-job", json={"vault_name": vault, "archive_id": "nl"}).json()["job_id"]
        glacier.complete_job(vault, job_id)

        response = client.get("/get-archive", params={"vault_name": vault, "job_id": job_id})

        assert response.status_code == 200
        assert response.headers["content-disposition"] == "attachment; filename*=utf-8''evil%0D%0Aname.txt"
        assert response.content == b"hello"
