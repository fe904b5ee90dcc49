# ============================================================================
# ARTIFACT UPLOADER
# ============================================================================
# STATUS: Service - Push result artifacts to blob storage
# PURPOSE: Upload .txt/.svg/.json files under {version}/{pipeline folder}/
# CREATED: 16 OCT 2026
# ============================================================================
"""
Artifact Uploader

    results/Nightly-Tests/pipeline-results.json
        -> pipelineresults/4.0/Nightly-Tests/pipeline-results.json

Only files directly inside the results folder with an allowed extension are
uploaded, in name order. No retry here: a missing folder, an empty folder or
any failed upload raises UploadError and stops the remaining uploads.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.config.defaults import StorageDefaults
from core.errors import UploadError
from infrastructure.storage import BlobRepository

logger = logging.getLogger(__name__)


class ArtifactUploader:
    """Uploads one run's results folder."""

    def __init__(self, blob_repo: BlobRepository, defaults: Optional[StorageDefaults] = None):
        self._blob_repo = blob_repo
        self._defaults = defaults or StorageDefaults()

    def collect_files(self, source_dir: Path) -> List[Path]:
        """
        Files eligible for upload.

        Raises:
            UploadError: Folder missing or holds no matching files
        """
        source_dir = Path(source_dir)
        if not source_dir.is_dir():
            raise UploadError(f"Results folder does not exist: {source_dir}")

        extensions = {ext.lower() for ext in self._defaults.upload_extensions}
        files = sorted(
            p for p in source_dir.iterdir()
            if p.is_file() and p.suffix.lower() in extensions
        )
        if not files:
            raise UploadError(
                f"No {', '.join(self._defaults.upload_extensions)} files found in {source_dir}"
            )
        return files

    def upload(self, source_dir: Path, version: str, pipeline_folder: str) -> List[Dict[str, Any]]:
        """
        Upload every eligible file to {version}/{pipeline_folder}/{file name}.

        Returns:
            Per-file upload results from BlobRepository.upload_file

        Raises:
            UploadError: See collect_files; or a per-file upload failure
        """
        files = self.collect_files(source_dir)
        container = self._defaults.container
        logger.info(f"Uploading {len(files)} file(s) to {container}/{version}/{pipeline_folder}")

        results = []
        for path in files:
            blob_path = f"{version}/{pipeline_folder}/{path.name}"
            try:
                result = self._blob_repo.upload_file(
                    container=container,
                    blob_path=blob_path,
                    local_path=str(path),
                    content_type=self._defaults.content_type_for(path.suffix),
                    cache_control=self._defaults.cache_control,
                )
            except OSError as e:
                raise UploadError(f"Cannot read {path} for upload", cause=e)
            if not result.get("success"):
                raise UploadError(
                    f"Upload of {path.name} to {container}/{blob_path} failed: {result.get('error')}"
                )
            results.append(result)

        logger.info(f"Uploaded {len(results)} file(s)")
        return results


__all__ = ["ArtifactUploader"]
