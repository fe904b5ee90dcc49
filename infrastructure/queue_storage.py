# ============================================================================
# QUEUE STORAGE INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - Azure Storage Queue operations
# PURPOSE: Send / receive / delete for the queue-trigger validation tool
# CREATED: 16 OCT 2026
# ============================================================================
"""
Queue Storage Infrastructure

Repository for Azure Storage Queues, the transport behind Azure Functions
queue triggers.

Message bodies are passed through untouched: callers hand in an already
base64-encoded body and get the raw body back (see core.models.queue_message).
Deletion needs message id + pop receipt, so a message is removed only by
the consumer that received it.

Dual auth:
    - connection string (AzureWebJobsStorage style)
    - account name + key / DefaultAzureCredential
"""

import logging
from typing import Any, Dict, List, Optional

from azure.core.exceptions import ResourceExistsError
from azure.storage.queue import QueueClient, QueueServiceClient

from core.models.queue_message import QueueMessage
from infrastructure.auth import get_storage_credential

logger = logging.getLogger(__name__)


class QueueRepository:
    """
    Azure Storage Queue repository.

    Usage:
        repo = QueueRepository.from_connection_string(conn_str)
        repo.send("test-input", encode_message_content("hello"))

        for message in repo.receive("test-output"):
            print(message.text)
            repo.delete("test-output", message)
    """

    def __init__(self, service_client: QueueServiceClient):
        self._service = service_client
        self._queue_clients: Dict[str, QueueClient] = {}

    @classmethod
    def from_connection_string(cls, connection_string: str) -> "QueueRepository":
        """Build from a storage connection string."""
        if not connection_string:
            raise ValueError("Storage connection string is empty")
        return cls(QueueServiceClient.from_connection_string(connection_string))

    @classmethod
    def from_account(cls, account_name: str, account_key: Optional[str] = None) -> "QueueRepository":
        """Build from an account name plus key (or DefaultAzureCredential)."""
        if not account_name:
            raise ValueError("QueueRepository requires an explicit account_name")
        return cls(QueueServiceClient(
            account_url=f"https://{account_name}.queue.core.windows.net",
            credential=get_storage_credential(account_key),
        ))

    def _get_queue_client(self, queue_name: str) -> QueueClient:
        """Get or create cached queue client."""
        if queue_name not in self._queue_clients:
            self._queue_clients[queue_name] = self._service.get_queue_client(queue_name)
        return self._queue_clients[queue_name]

    def ensure_queue(self, queue_name: str) -> None:
        """Create the queue if it does not exist yet."""
        try:
            self._get_queue_client(queue_name).create_queue()
            logger.info(f"Created queue: {queue_name}")
        except ResourceExistsError:
            logger.debug(f"Queue already exists: {queue_name}")

    def send(self, queue_name: str, content: str) -> str:
        """
        Enqueue a message body.

        Returns:
            Message id assigned by the queue
        """
        result = self._get_queue_client(queue_name).send_message(content)
        message_id = result.id
        logger.info(f"Message sent to {queue_name}: {message_id}")
        return message_id

    def receive(
        self,
        queue_name: str,
        max_messages: int = 32,
        visibility_timeout: int = 30,
    ) -> List[QueueMessage]:
        """Receive up to max_messages; they stay invisible for visibility_timeout seconds."""
        client = self._get_queue_client(queue_name)
        messages = [
            QueueMessage.from_sdk(m)
            for m in client.receive_messages(
                messages_per_page=max_messages,
                visibility_timeout=visibility_timeout,
                max_messages=max_messages,
            )
        ]
        logger.debug(f"Received {len(messages)} message(s) from {queue_name}")
        return messages

    def delete(self, queue_name: str, message: QueueMessage) -> None:
        """Acknowledge (delete) a received message."""
        self._get_queue_client(queue_name).delete_message(message.message_id, message.pop_receipt)
        logger.info(f"Deleted message {message.message_id} from {queue_name}")

    def queue_properties(self, queue_name: str) -> Dict[str, Any]:
        """Approximate message count, for diagnostics."""
        props = self._get_queue_client(queue_name).get_queue_properties()
        return {"name": queue_name, "approximate_message_count": props.approximate_message_count}


__all__ = ["QueueRepository"]
