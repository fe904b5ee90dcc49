# ============================================================================
# RESULT REPORTER
# ============================================================================
# STATUS: Service - Badges and result artifacts
# PURPOSE: Render status badges and write per-run result files
# CREATED: 16 OCT 2026
# ============================================================================
"""
Result Reporter

Writes every artifact that ends up in the results folder:

    last-run.svg           "last run | 2026-10-14 09:12 UTC"       (blue)
    pipeline-result.svg    "<display name> | succeeded"            (green/orange/red)
    test-results.svg       "tests | 7 passed | 2 failed | 1 skipped"
    Build-id.txt           queued build id
    Build-url.txt          link to the build
    pipeline-results.json  PipelineInvocationResult (camelCase)

Badge images are not drawn here. BadgeRenderer builds a shields-style URL
    {base}/badge/{label}-{content}-{color}.svg
and downloads the SVG the service returns.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from core.config.defaults import BadgeDefaults, StorageDefaults
from core.contracts import BadgeColor
from core.errors import HttpRequestError, RenderError, UploadError
from core.models import PipelineInvocationResult, QueuedRun, TestOutcomeSummary
from infrastructure.http_client import HttpClient
from services.devops_client import DevOpsClient

logger = logging.getLogger(__name__)


# ============================================================================
# BADGE RENDERING
# ============================================================================

def escape_badge_text(text: str) -> str:
    """
    Escape one badge path segment.

    '-' and '_' are separators for the badge service, so they are doubled
    before URL quoting.
    """
    escaped = str(text).replace("-", "--").replace("_", "__")
    return quote(escaped, safe="")


def build_badge_url(base_url: str, label: str, content: str, color: str) -> str:
    """{base}/badge/{label}-{content}-{color}.svg"""
    return (
        f"{base_url.rstrip('/')}/badge/"
        f"{escape_badge_text(label)}-{escape_badge_text(content)}-{escape_badge_text(color)}.svg"
    )


class BadgeRenderer:
    """Fetches badge SVGs from the external badge service."""

    def __init__(
        self,
        http: Optional[HttpClient] = None,
        defaults: Optional[BadgeDefaults] = None,
    ):
        self._http = http or HttpClient()
        self._defaults = defaults or BadgeDefaults()

    def render(self, label: str, content: str, color: str, destination: Path) -> Path:
        """
        Download a badge image to destination.

        Raises:
            RenderError: Badge service still failing after the retry budget
        """
        url = build_badge_url(self._defaults.base_url, label, content, color)
        try:
            size = self._http.download(url, destination)
        except HttpRequestError as e:
            raise RenderError(f"Could not render badge '{label}: {content}'", cause=e)
        except OSError as e:
            raise RenderError(f"Could not write badge {Path(destination).name}", cause=e)

        logger.info(f"Badge written: {Path(destination).name} ({label}: {content}, {color}, {size} bytes)")
        return Path(destination)


# ============================================================================
# REPORTER
# ============================================================================

class ResultReporter:
    """Writes badges and result files for one run into a results folder."""

    def __init__(
        self,
        devops: DevOpsClient,
        renderer: BadgeRenderer,
        results_dir: Path,
        badge_defaults: Optional[BadgeDefaults] = None,
        storage_defaults: Optional[StorageDefaults] = None,
    ):
        self._devops = devops
        self._renderer = renderer
        self.results_dir = Path(results_dir)
        self._badges = badge_defaults or BadgeDefaults()
        self._storage = storage_defaults or StorageDefaults()

    def prepare(self) -> Path:
        """
        Create the results folder.

        Raises:
            UploadError: Folder cannot be created (e.g. a file is in the way)
        """
        try:
            self.results_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise UploadError(f"Cannot create results folder {self.results_dir}", cause=e)
        return self.results_dir

    def _write_file(self, name: str, text: str) -> Path:
        """Write one text artifact; RenderError on filesystem failure."""
        path = self.results_dir / name
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise RenderError(f"Could not write {path}", cause=e)
        return path

    # ------------------------------------------------------------------
    # QUEUE-TIME ARTIFACTS
    # ------------------------------------------------------------------

    def write_queued(self, run: QueuedRun, queued_at: Optional[datetime] = None) -> None:
        """Build id/url files plus the last-run badge, right after a submit."""
        self._write_file(self._storage.build_id_file, str(run.build_id))
        self._write_file(self._storage.build_url_file, run.web_url or run.status_url)

        stamp = (queued_at or datetime.now(timezone.utc)).strftime("%Y-%m-%d %H:%M UTC")
        self._renderer.render(
            "last run", stamp, BadgeColor.BLUE.value,
            self.results_dir / self._badges.last_run_file,
        )

    # ------------------------------------------------------------------
    # COMPLETION ARTIFACTS
    # ------------------------------------------------------------------

    def write_pipeline_result(self, display_name: str, result: str) -> None:
        """pipeline-result.svg colored by build result."""
        self._renderer.render(
            display_name,
            result,
            BadgeColor.for_result(result).value,
            self.results_dir / self._badges.pipeline_result_file,
        )

    def fetch_test_summary(self, build_id: int) -> Optional[TestOutcomeSummary]:
        """
        Aggregated test outcomes for a build.

        Returns:
            None when the run published no tests
        """
        summary = TestOutcomeSummary.from_api(self._devops.get_test_summary(build_id))
        if summary is None:
            logger.info(f"Build {build_id} published no test results, skipping test badge")
        else:
            logger.info(f"Test results for build {build_id}: {summary.content}")
        return summary

    def write_test_results(self, summary: TestOutcomeSummary) -> None:
        """test-results.svg"""
        self._renderer.render(
            "tests",
            summary.content,
            summary.color,
            self.results_dir / self._badges.test_results_file,
        )

    def write_results_json(self, result: PipelineInvocationResult) -> Path:
        """pipeline-results.json"""
        path = self._write_file(self._storage.results_json_file, result.to_artifact_json())
        logger.info(f"Results written: {path}")
        return path


__all__ = [
    "escape_badge_text",
    "build_badge_url",
    "BadgeRenderer",
    "ResultReporter",
]
