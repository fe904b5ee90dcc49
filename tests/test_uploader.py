# ============================================================================
# ARTIFACT UPLOAD TESTS
# ============================================================================
# STATUS: Tests - Results folder upload and blob repository
# PURPOSE: Verify file selection, blob paths, content types, failure handling
# CREATED: 17 OCT 2026
# ============================================================================
"""
Artifact Upload Tests

ArtifactUploader runs against a MagicMock BlobRepository; BlobRepository
itself runs against a MagicMock BlobServiceClient. No Azure traffic.

Run with:
    pytest tests/test_uploader.py -v
"""

import pytest
from unittest.mock import MagicMock

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
)

from core.errors import AuthenticationError, UploadError
from infrastructure.storage import BlobRepository
from services.uploader import ArtifactUploader


def _ok(container, blob_path, **kwargs):
    return {"success": True, "container": container, "blob_path": blob_path}


@pytest.fixture
def results_dir(tmp_path):
    folder = tmp_path / "Nightly-Tests"
    folder.mkdir()
    (folder / "pipeline-results.json").write_text("{}")
    (folder / "last-run.svg").write_text("<svg/>")
    (folder / "notes.md").write_text("ignored")
    return folder


# ============================================================================
# UPLOADER
# ============================================================================

class TestArtifactUploader:

    def test_uploads_matching_files_only(self, results_dir):
        blob_repo = MagicMock()
        blob_repo.upload_file.side_effect = _ok

        results = ArtifactUploader(blob_repo).upload(results_dir, version="4.0", pipeline_folder="Nightly-Tests")

        assert len(results) == 2
        calls = [c.kwargs for c in blob_repo.upload_file.call_args_list]
        assert [c["blob_path"] for c in calls] == [
            "4.0/Nightly-Tests/last-run.svg",
            "4.0/Nightly-Tests/pipeline-results.json",
        ]
        assert calls[0]["content_type"] == "image/svg+xml"
        assert calls[1]["content_type"] == "application/json"
        assert all(c["container"] == "pipelineresults" for c in calls)
        assert all(c["cache_control"] == "no-cache" for c in calls)

    def test_text_files_uploaded_as_text_plain(self, tmp_path):
        (tmp_path / "Build-id.txt").write_text("4711")
        blob_repo = MagicMock()
        blob_repo.upload_file.side_effect = _ok

        ArtifactUploader(blob_repo).upload(tmp_path, version="4.0", pipeline_folder="p")

        assert blob_repo.upload_file.call_args.kwargs["content_type"] == "text/plain"

    def test_missing_folder(self, tmp_path):
        with pytest.raises(UploadError):
            ArtifactUploader(MagicMock()).upload(tmp_path / "nope", version="4.0", pipeline_folder="p")

    def test_folder_without_matching_files(self, tmp_path):
        (tmp_path / "readme.md").write_text("x")
        blob_repo = MagicMock()

        with pytest.raises(UploadError):
            ArtifactUploader(blob_repo).upload(tmp_path, version="4.0", pipeline_folder="p")
        blob_repo.upload_file.assert_not_called()

    def test_failure_aborts_remaining_uploads(self, results_dir):
        blob_repo = MagicMock()
        blob_repo.upload_file.return_value = {"success": False, "error": "403"}

        with pytest.raises(UploadError):
            ArtifactUploader(blob_repo).upload(results_dir, version="4.0", pipeline_folder="Nightly-Tests")
        assert blob_repo.upload_file.call_count == 1

    def test_unreadable_file_becomes_upload_error(self, results_dir):
        blob_repo = MagicMock()
        blob_repo.upload_file.side_effect = PermissionError(13, "Permission denied")

        with pytest.raises(UploadError) as exc_info:
            ArtifactUploader(blob_repo).upload(results_dir, version="4.0", pipeline_folder="Nightly-Tests")

        assert isinstance(exc_info.value.cause, PermissionError)
        assert blob_repo.upload_file.call_count == 1


# ============================================================================
# BLOB REPOSITORY
# ============================================================================

def _repo_with_container():
    service = MagicMock()
    container = MagicMock()
    service.get_container_client.return_value = container
    return BlobRepository("mystorage", account_key="key", blob_service=service), container


class TestBlobRepository:

    def test_requires_account_name(self):
        with pytest.raises(ValueError):
            BlobRepository("")

    def test_verify_access_ok(self):
        repo, container = _repo_with_container()
        repo.verify_access("pipelineresults")
        container.get_container_properties.assert_called_once()

    def test_bad_credentials(self):
        repo, container = _repo_with_container()
        container.get_container_properties.side_effect = ClientAuthenticationError("bad key")

        with pytest.raises(AuthenticationError):
            repo.verify_access("pipelineresults")

    def test_forbidden_is_authentication_error(self):
        repo, container = _repo_with_container()
        error = HttpResponseError("forbidden")
        error.status_code = 403
        container.get_container_properties.side_effect = error

        with pytest.raises(AuthenticationError):
            repo.verify_access("pipelineresults")

    def test_missing_container(self):
        repo, container = _repo_with_container()
        container.get_container_properties.side_effect = ResourceNotFoundError("gone")

        with pytest.raises(UploadError):
            repo.verify_access("pipelineresults")

    def test_unreachable_account(self):
        repo, container = _repo_with_container()
        container.get_container_properties.side_effect = ServiceRequestError("dns")

        with pytest.raises(UploadError):
            repo.verify_access("pipelineresults")

    def test_upload_file_sets_content_settings(self, tmp_path):
        repo, container = _repo_with_container()
        blob_client = container.get_blob_client.return_value
        blob_client.upload_blob.return_value = {"etag": "0x1"}
        source = tmp_path / "last-run.svg"
        source.write_bytes(b"<svg/>")

        result = repo.upload_file(
            "pipelineresults", "4.0/p/last-run.svg", str(source),
            content_type="image/svg+xml", cache_control="no-cache",
        )

        assert result["success"] is True
        assert result["bytes_transferred"] == 6
        assert result["etag"] == "0x1"
        container.get_blob_client.assert_called_once_with("4.0/p/last-run.svg")
        kwargs = blob_client.upload_blob.call_args.kwargs
        assert kwargs["overwrite"] is True
        assert kwargs["content_settings"].content_type == "image/svg+xml"
        assert kwargs["content_settings"].cache_control == "no-cache"

    def test_upload_failure_reported(self, tmp_path):
        repo, container = _repo_with_container()
        container.get_blob_client.return_value.upload_blob.side_effect = HttpResponseError("503")
        source = tmp_path / "a.txt"
        source.write_text("x")

        result = repo.upload_file("pipelineresults", "4.0/p/a.txt", str(source))

        assert result["success"] is False
        assert "error" in result

    def test_upload_missing_file(self, tmp_path):
        repo, _ = _repo_with_container()
        with pytest.raises(FileNotFoundError):
            repo.upload_file("pipelineresults", "x", str(tmp_path / "missing.txt"))
