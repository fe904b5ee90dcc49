# ============================================================================
# RUN POLLER
# ============================================================================
# STATUS: Service - Fixed-interval build status polling
# PURPOSE: Wait for a queued build to leave notStarted/inProgress
# CREATED: 15 OCT 2026
# ============================================================================
"""
Run Poller

Loop, at most max_tries times:
    1. sleep wait_seconds
    2. GET the build status url (HttpClient retries 3x internally)
    3. status notStarted / inProgress  -> keep waiting
       anything else                   -> return the response

A status query whose retries are exhausted counts as "no response this
cycle": it is logged and the loop continues. Running out of tries raises
PollTimeoutError carrying the url for manual inspection.

Defaults: 10s x 360 tries, roughly one hour.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from core.config.defaults import PollingDefaults
from core.contracts import RunStatus
from core.errors import HttpRequestError, PollTimeoutError

logger = logging.getLogger(__name__)


class RunPoller:
    """Blocking poll loop for one build."""

    def __init__(
        self,
        fetch_status: Callable[[str], Dict[str, Any]],
        polling: Optional[PollingDefaults] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            fetch_status: Callable taking the status url, e.g. DevOpsClient.get_run_status
            polling: Wait interval and attempt ceiling
            sleep: Blocking sleep, injectable for tests
        """
        self._fetch_status = fetch_status
        self._polling = polling or PollingDefaults()
        self._sleep = sleep

    def wait_for_completion(self, status_url: str) -> Dict[str, Any]:
        """
        Poll until the build reaches a non-pending status.

        Returns:
            The first response whose status is not notStarted/inProgress

        Raises:
            PollTimeoutError: max_tries queries without a terminal status
        """
        wait_seconds = self._polling.wait_seconds
        max_tries = self._polling.max_tries
        last_status: Optional[str] = None
        last_logged_minute = 0

        logger.info(f"Polling {status_url} every {wait_seconds:g}s (max {max_tries} tries)")

        for attempt in range(1, max_tries + 1):
            self._sleep(wait_seconds)

            try:
                response = self._fetch_status(status_url)
            except HttpRequestError as e:
                logger.warning(f"Status check {attempt}/{max_tries} got no response: {e}")
                continue

            status = str(response.get("status", ""))
            if status != last_status:
                logger.info(f"Run status: {status or 'unknown'}")
                last_status = status

            if not RunStatus.is_pending_value(status):
                logger.info(
                    f"Run finished after {attempt} status checks: "
                    f"status={status}, result={response.get('result')}"
                )
                return response

            # Progress line once per whole minute of waiting
            elapsed_minutes = int(attempt * wait_seconds) // 60
            if elapsed_minutes > last_logged_minute:
                last_logged_minute = elapsed_minutes
                logger.info(f"Still waiting ({elapsed_minutes} min elapsed, status={status})")

        logger.error(f"Run did not finish within {max_tries} status checks")
        raise PollTimeoutError(status_url, max_tries)


__all__ = ["RunPoller"]
