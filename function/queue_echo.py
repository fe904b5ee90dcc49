# ============================================================================
# QUEUE ECHO
# ============================================================================
# STATUS: Function - Queue trigger body
# PURPOSE: Turn a triggering queue message into the echoed output body
# CREATED: 17 OCT 2026
# ============================================================================
"""
Queue Echo

The Functions host base64-decodes the triggering message before handing it
over, and the queue output binding base64-encodes whatever is set. The echo
itself is therefore plain text in, plain text out.
"""

import logging

logger = logging.getLogger(__name__)


def echo_message_body(body: bytes, message_id: str = "") -> str:
    """
    Decode a triggering message body for the output queue.

    Raises:
        UnicodeDecodeError: Body is not UTF-8
    """
    text = body.decode("utf-8")
    logger.info(f"Echoing queue message {message_id} ({len(text)} chars)")
    return text


__all__ = ["echo_message_body"]
