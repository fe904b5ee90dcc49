# ============================================================================
# QUEUE MESSAGE MODEL
# ============================================================================
# STATUS: Core model - Storage queue message for trigger validation
# PURPOSE: Base64 payload plus the ids needed to delete it after receipt
# CREATED: 16 OCT 2026
# EXPORTS: QueueMessage, encode_message_content, decode_message_content
# DEPENDENCIES: pydantic
# ============================================================================
"""
Queue Message Model

Azure Functions queue triggers expect base64-encoded message bodies, and the
queue output binding writes base64 too. The validation tool therefore
encodes on send and decodes on receive, explicitly, instead of relying on an
SDK encode policy.

A received message carries message_id + pop_receipt; both are required to
delete it, which is what makes consumption at-most-once.
"""

import base64
import binascii
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


def encode_message_content(text: str) -> str:
    """UTF-8 text -> base64 string for the queue body."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_message_content(content: str) -> str:
    """
    Base64 queue body -> original UTF-8 text.

    Raises:
        ValueError: If the body is not valid base64 or not UTF-8
    """
    try:
        return base64.b64decode(content, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Queue message body is not base64-encoded UTF-8: {e}")


class QueueMessage(BaseModel):
    """A message received from a storage queue."""

    message_id: str = Field(..., description="Queue-assigned message id")
    pop_receipt: str = Field(..., description="Receipt required to delete the message")
    content: str = Field(..., description="Raw (base64) message body")
    dequeue_count: int = Field(default=1, ge=0)
    inserted_on: Optional[datetime] = None

    model_config = {"frozen": True}

    @property
    def text(self) -> str:
        """Decoded message body."""
        return decode_message_content(self.content)

    @classmethod
    def from_sdk(cls, message) -> "QueueMessage":
        """Build from an azure.storage.queue.QueueMessage."""
        return cls(
            message_id=message.id,
            pop_receipt=message.pop_receipt,
            content=message.content,
            dequeue_count=message.dequeue_count or 0,
            inserted_on=message.inserted_on,
        )


__all__ = ["QueueMessage", "encode_message_content", "decode_message_content"]
