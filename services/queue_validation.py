# ============================================================================
# QUEUE TRIGGER VALIDATION
# ============================================================================
# STATUS: Service - End-to-end check of a queue-triggered function
# PURPOSE: Send a unique message, wait for the function's echo, clean up
# CREATED: 17 OCT 2026
# ============================================================================
"""
Queue Trigger Validation

    producer -> [input queue] -> queue_trigger_echo (function_app.py) -> [output queue] -> consumer

1. Producer base64-encodes a unique UTF-8 text and sends it to the input queue.
2. The deployed function echoes the decoded body to the output queue.
3. Consumer polls the output queue, decodes each message, and looks for the
   exact text. The match is deleted (id + pop receipt); other messages are
   left for their own consumers once their visibility timeout lapses.

A missing echo after max_tries polls raises QueueValidationError.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from core.errors import QueueValidationError
from core.models.queue_message import encode_message_content
from infrastructure.queue_storage import QueueRepository

logger = logging.getLogger(__name__)


@dataclass
class QueueValidationResult:
    """Outcome of one round trip."""
    sent_message_id: str
    received_message_id: str
    content: str
    attempts: int


def make_probe_text() -> str:
    """Unique probe text, including one non-ASCII character."""
    return f"queue-trigger-probe {uuid.uuid4()} {datetime.now(timezone.utc).isoformat()} ✓"


class QueueTriggerValidator:
    """Round-trips one message through a queue-triggered function."""

    def __init__(
        self,
        queues: QueueRepository,
        input_queue: str,
        output_queue: str,
        max_tries: int = 30,
        wait_seconds: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._queues = queues
        self.input_queue = input_queue
        self.output_queue = output_queue
        self._max_tries = max_tries
        self._wait_seconds = wait_seconds
        self._sleep = sleep

    def run(self, text: Optional[str] = None) -> QueueValidationResult:
        """
        Send text (or a generated probe) and wait for its echo.

        Raises:
            QueueValidationError: Echo never arrived
        """
        text = text if text is not None else make_probe_text()

        self._queues.ensure_queue(self.input_queue)
        self._queues.ensure_queue(self.output_queue)

        sent_id = self._queues.send(self.input_queue, encode_message_content(text))
        logger.info(f"Probe sent to {self.input_queue}, waiting for echo on {self.output_queue}")

        for attempt in range(1, self._max_tries + 1):
            self._sleep(self._wait_seconds)

            for message in self._queues.receive(self.output_queue):
                try:
                    received = message.text
                except ValueError as e:
                    logger.warning(f"Skipping undecodable message {message.message_id}: {e}")
                    continue

                if received == text:
                    self._queues.delete(self.output_queue, message)
                    logger.info(f"Echo received after {attempt} poll(s): {message.message_id}")
                    return QueueValidationResult(
                        sent_message_id=sent_id,
                        received_message_id=message.message_id,
                        content=received,
                        attempts=attempt,
                    )

            logger.debug(f"No echo yet ({attempt}/{self._max_tries})")

        raise QueueValidationError(
            f"No echo of message {sent_id} on '{self.output_queue}' after {self._max_tries} polls"
        )


__all__ = ["QueueTriggerValidator", "QueueValidationResult", "make_probe_text"]
