# ============================================================================
# AZURE DEVOPS CLIENT
# ============================================================================
# STATUS: Service - Build and test REST API client
# PURPOSE: Queue a build, read its status, fetch its test summary
# CREATED: 15 OCT 2026
# ============================================================================
"""
Azure DevOps Client

Sync client for the three DevOps endpoints the workflow uses:

    POST {org}/{project}/_apis/build/builds?api-version=5.0
    GET  {build status url}
    GET  {org}/{project}/_apis/test/ResultSummaryByBuild?buildId=N

All calls go through HttpClient, so each one already retries transient
failures (3 attempts, 1s apart). This module only decides what a final
failure means:
    - submit_run: fatal, SubmissionError
    - get_run_status / get_test_summary: HttpRequestError, caller decides
"""

import logging
from typing import Any, Dict, Optional

from core.config.defaults import DevOpsDefaults, RetryDefaults
from core.errors import HttpRequestError, SubmissionError
from core.models import PipelineDefinition, QueuedRun
from infrastructure.auth import build_basic_auth_header
from infrastructure.http_client import HttpClient

logger = logging.getLogger(__name__)


class DevOpsClient:
    """Client for one DevOps organization/project."""

    def __init__(
        self,
        organization: str,
        project: str,
        username: str,
        token: str,
        defaults: Optional[DevOpsDefaults] = None,
        http: Optional[HttpClient] = None,
        retry: Optional[RetryDefaults] = None,
    ):
        self._defaults = defaults or DevOpsDefaults()
        self.organization = organization
        self.project = project
        self._http = http or HttpClient(
            headers={
                **build_basic_auth_header(username, token),
                "Accept": "application/json",
            },
            retry=retry,
        )

    @property
    def project_url(self) -> str:
        return f"{self._defaults.base_url.rstrip('/')}/{self.organization}/{self.project}"

    # ------------------------------------------------------------------
    # SUBMIT
    # ------------------------------------------------------------------

    def submit_run(self, definition: PipelineDefinition) -> QueuedRun:
        """
        Queue a build for the definition.

        POST {org}/{project}/_apis/build/builds

        Raises:
            SubmissionError: Retries exhausted, request rejected, or response without id/url
        """
        url = f"{self.project_url}/_apis/build/builds"
        payload = definition.request_body.to_api_payload()

        logger.info(
            f"Queueing pipeline '{definition.name}' "
            f"(definition {definition.id}, branch {definition.request_body.source_branch})"
        )
        logger.debug(f"Request body: {payload}")

        try:
            body = self._http.post_json(
                url, payload, params={"api-version": self._defaults.api_version}
            )
        except HttpRequestError as e:
            raise SubmissionError(
                f"Could not queue pipeline '{definition.name}' (definition {definition.id})",
                cause=e,
            )

        build_id = body.get("id")
        status_url = body.get("url")
        if build_id is None or not status_url:
            raise SubmissionError(
                f"Build API response for '{definition.name}' is missing 'id' or 'url': {body}"
            )

        web_url = ((body.get("_links") or {}).get("web") or {}).get("href")
        run = QueuedRun(build_id=int(build_id), status_url=status_url, web_url=web_url)
        logger.info(f"Queued build {run.build_id}: {run.web_url or run.status_url}")
        return run

    # ------------------------------------------------------------------
    # STATUS
    # ------------------------------------------------------------------

    def get_run_status(self, status_url: str) -> Dict[str, Any]:
        """
        GET {build status url}

        Returns:
            Build resource; the poller reads 'status' and 'result'

        Raises:
            HttpRequestError: Retries exhausted
        """
        return self._http.get_json(status_url)

    # ------------------------------------------------------------------
    # TEST SUMMARY
    # ------------------------------------------------------------------

    def get_test_summary(self, build_id: int) -> Dict[str, Any]:
        """
        GET {org}/{project}/_apis/test/ResultSummaryByBuild?buildId=N

        Raises:
            HttpRequestError: Retries exhausted
        """
        url = f"{self.project_url}/_apis/test/ResultSummaryByBuild"
        return self._http.get_json(
            url,
            params={"buildId": build_id, "api-version": self._defaults.test_api_version},
        )


__all__ = ["DevOpsClient"]
