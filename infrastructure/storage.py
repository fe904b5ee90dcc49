# ============================================================================
# BLOB STORAGE INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage operations
# PURPOSE: Credential check and file upload for result artifacts
# CREATED: 15 OCT 2026
# ============================================================================
"""
Blob Storage Infrastructure

Provides BlobRepository for Azure Blob Storage operations:
- verify_access: Confirm the storage credentials work before a run starts
- upload_file: Stream a local file to a blob with content settings

Authenticates with the storage account key when one is given, otherwise
with DefaultAzureCredential (works with Managed Identity).
Container clients are cached per container name.
"""

import time
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
)
from azure.storage.blob import BlobServiceClient, ContentSettings

from core.errors import AuthenticationError, UploadError
from infrastructure.auth import get_storage_credential

logger = logging.getLogger(__name__)


# ============================================================================
# BLOB REPOSITORY
# ============================================================================

class BlobRepository:
    """
    Azure Blob Storage repository for one storage account.

    Usage:
        repo = BlobRepository(account_name="funcresults", account_key=key)
        repo.verify_access("pipelineresults")

        result = repo.upload_file(
            container="pipelineresults",
            blob_path="4.0/Nightly-Tests/pipeline-results.json",
            local_path="results/Nightly-Tests/pipeline-results.json",
            content_type="application/json",
        )
    """

    def __init__(
        self,
        account_name: str,
        account_key: Optional[str] = None,
        blob_service: Optional[BlobServiceClient] = None,
    ):
        """Initialize blob repository for storage account."""
        if not account_name:
            raise ValueError("BlobRepository requires an explicit account_name")

        self.account_name = account_name
        self._account_key = account_key

        self._container_clients: Dict[str, Any] = {}
        self._blob_service = blob_service

        logger.info(f"BlobRepository initialized for account: {self.account_name}")

    # ========================================================================
    # AZURE CLIENT INITIALIZATION
    # ========================================================================

    @property
    def account_url(self) -> str:
        return f"https://{self.account_name}.blob.core.windows.net"

    def _get_blob_service(self) -> BlobServiceClient:
        """Get BlobServiceClient (lazy initialization)."""
        if self._blob_service is None:
            self._blob_service = BlobServiceClient(
                account_url=self.account_url,
                credential=get_storage_credential(self._account_key),
            )
            logger.debug(f"BlobServiceClient initialized for {self.account_url}")
        return self._blob_service

    def _get_container_client(self, container: str):
        """Get or create cached container client."""
        if container not in self._container_clients:
            self._container_clients[container] = self._get_blob_service().get_container_client(container)
            logger.debug(f"Created container client for: {container}")
        return self._container_clients[container]

    # ========================================================================
    # ACCESS CHECK
    # ========================================================================

    def verify_access(self, container: str) -> None:
        """
        Confirm the credentials can reach the container.

        Raises:
            AuthenticationError: Storage account rejected the credentials
            UploadError: Container does not exist or storage is unreachable
        """
        try:
            self._get_container_client(container).get_container_properties()
        except ClientAuthenticationError as e:
            raise AuthenticationError(
                f"Storage account '{self.account_name}' rejected the supplied credentials", cause=e
            )
        except ResourceNotFoundError as e:
            raise UploadError(
                f"Container '{container}' does not exist in "
                f"storage account '{self.account_name}'",
                cause=e,
            )
        except HttpResponseError as e:
            if e.status_code in (401, 403):
                raise AuthenticationError(
                    f"Storage account '{self.account_name}' denied access to '{container}'", cause=e
                )
            raise UploadError(f"Cannot reach container '{container}'", cause=e)
        except AzureError as e:
            raise UploadError(f"Cannot reach storage account '{self.account_name}'", cause=e)

        logger.info(f"Verified access to {self.account_name}/{container}")

    # ========================================================================
    # UPLOAD
    # ========================================================================

    def upload_file(
        self,
        container: str,
        blob_path: str,
        local_path: str,
        content_type: str = "application/octet-stream",
        cache_control: Optional[str] = None,
        overwrite_existing: bool = True,
    ) -> Dict[str, Any]:
        """
        Stream a local file to a blob.

        Args:
            container: Destination container name
            blob_path: Destination blob path within container
            local_path: Source file
            content_type: Content type stored on the blob
            cache_control: Cache-Control header stored on the blob
            overwrite_existing: Overwrite if blob exists (default True)

        Returns:
            Dict with operation results:
            - success: bool
            - bytes_transferred: int
            - duration_seconds: float
            - destination_uri: str
            - error: str (if failed)
        """
        path = Path(local_path)
        dest_uri = f"blob://{container}/{blob_path}"

        if not path.is_file():
            raise FileNotFoundError(f"Source file does not exist: {local_path}")

        file_size = path.stat().st_size
        logger.info(f"Uploading {path.name} -> {dest_uri} ({file_size} bytes, {content_type})")

        start_time = time.time()

        try:
            blob_client = self._get_container_client(container).get_blob_client(blob_path)
            content_settings = ContentSettings(content_type=content_type, cache_control=cache_control)

            with open(path, "rb") as f:
                result = blob_client.upload_blob(
                    f,
                    overwrite=overwrite_existing,
                    content_settings=content_settings,
                    length=file_size,
                )

            duration = time.time() - start_time
            return {
                "success": True,
                "bytes_transferred": file_size,
                "duration_seconds": round(duration, 2),
                "destination_uri": dest_uri,
                "blob_path": blob_path,
                "container": container,
                "etag": (result or {}).get("etag"),
                "content_type": content_type,
            }

        except AzureError as e:
            duration = time.time() - start_time
            logger.error(f"Upload of {path.name} failed: {e}")
            return {
                "success": False,
                "bytes_transferred": 0,
                "duration_seconds": round(duration, 2),
                "destination_uri": dest_uri,
                "blob_path": blob_path,
                "container": container,
                "error": str(e),
            }


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["BlobRepository"]
