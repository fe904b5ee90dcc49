# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - HTTP and Azure storage operations
# PURPOSE: Outbound HTTP with retry, blob uploads, storage queues
# CREATED: 15 OCT 2026
# ============================================================================
"""
Infrastructure module for the pipeline runner.

Provides:
- HttpClient: httpx wrapper with fixed-interval retry
- BlobRepository: Azure Blob Storage credential check and uploads
- QueueRepository: Azure Storage Queue send/receive/delete

Usage:
    from infrastructure import BlobRepository, HttpClient

    repo = BlobRepository(account_name="funcresults", account_key=key)
    repo.verify_access("pipelineresults")
"""

from infrastructure.http_client import HttpClient
from infrastructure.storage import BlobRepository
from infrastructure.queue_storage import QueueRepository

__all__ = [
    "HttpClient",
    "BlobRepository",
    "QueueRepository",
]
