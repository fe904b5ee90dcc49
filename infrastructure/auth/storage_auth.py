# ============================================================================
# STORAGE AUTHENTICATION
# ============================================================================
# PURPOSE: Credential selection for Azure Blob/Queue Storage
# CREATED: 15 OCT 2026
# ============================================================================
"""
Storage credential selection.

Order of preference:
1. Explicit storage account key (the pipeline CLI always passes one)
2. User-assigned Managed Identity when AZURE_CLIENT_ID is set
3. DefaultAzureCredential (system MI, az login, environment)

Environment Variables:
---------------------
AZURE_CLIENT_ID=<guid>  # User-assigned MI client ID
"""

import os
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


def get_storage_credential(account_key: Optional[str] = None) -> Any:
    """
    Get a credential usable by BlobServiceClient / QueueServiceClient.

    Args:
        account_key: Storage account key; used as-is when provided

    Returns:
        Account key string or an azure.identity token credential
    """
    if account_key:
        logger.debug("Using storage account key credential")
        return account_key

    from azure.identity import DefaultAzureCredential, ManagedIdentityCredential

    client_id = os.environ.get("AZURE_CLIENT_ID")
    if client_id:
        logger.info(f"Using user-assigned Managed Identity: {client_id[:8]}...")
        return ManagedIdentityCredential(client_id=client_id)

    logger.info("Using DefaultAzureCredential (system MI or az login)")
    return DefaultAzureCredential()


__all__ = ["get_storage_credential"]
