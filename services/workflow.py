# ============================================================================
# PIPELINE WORKFLOW
# ============================================================================
# STATUS: Service - Top-level pipeline run sequence
# PURPOSE: Parse -> submit -> poll -> report -> upload, one outcome value
# CREATED: 16 OCT 2026
# ============================================================================
"""
Pipeline Workflow

One run, strictly sequential:

    1. parse parameters, build definition  (ValidationError)
    2. verify storage credentials          (AuthenticationError)
    3. submit                              (SubmissionError)
       -> Build-id.txt, Build-url.txt, last-run.svg
    4. poll until terminal                 (PollTimeoutError)
       -> pipeline-result.svg
    5. fetch test summary                  (skipped when no tests published)
       -> test-results.svg
    6. pipeline-results.json
    7. upload results folder               (UploadError)

The PipelineInvocationResult is created here, passed to each step and
returned in the WorkflowOutcome. Any PipelineRunnerError ends the run and is
returned, not raised; the CLI turns the outcome into an exit status.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as ModelValidationError

from core.config.settings import PipelineRunSettings
from core.errors import PipelineRunnerError, ValidationError
from core.logging import log_checkpoint, log_context
from core.models import PipelineDefinition, PipelineInvocationResult
from infrastructure.http_client import HttpClient
from infrastructure.storage import BlobRepository
from services.devops_client import DevOpsClient
from services.parameters import parse_pipeline_parameters
from services.poller import RunPoller
from services.reporter import BadgeRenderer, ResultReporter
from services.uploader import ArtifactUploader

logger = logging.getLogger(__name__)


def pipeline_folder_name(pipeline_name: str) -> str:
    """Folder used locally and in blob storage: whitespace runs become '-'."""
    return re.sub(r"\s+", "-", pipeline_name.strip())


# ============================================================================
# OUTCOME
# ============================================================================

@dataclass
class WorkflowOutcome:
    """Single value returned by PipelineWorkflow.run()."""

    success: bool
    result: Optional[PipelineInvocationResult] = None
    error: Optional[PipelineRunnerError] = None
    uploaded: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


# ============================================================================
# WORKFLOW
# ============================================================================

class PipelineWorkflow:
    """
    Runs one pipeline end to end.

    Collaborators are built from settings unless injected (tests inject mocks).
    """

    def __init__(
        self,
        settings: PipelineRunSettings,
        devops: Optional[DevOpsClient] = None,
        blob_repo: Optional[BlobRepository] = None,
        renderer: Optional[BadgeRenderer] = None,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.settings = settings
        self._defaults = settings.defaults
        self._sleep = sleep
        self._now = now

        self._devops = devops or DevOpsClient(
            organization=settings.organization_name,
            project=settings.project_name,
            username=settings.devops_user_name,
            token=settings.devops_user_pat,
            defaults=self._defaults.devops,
            retry=self._defaults.retry,
        )
        self._blob_repo = blob_repo or BlobRepository(
            account_name=settings.storage_account_name,
            account_key=settings.storage_account_key,
        )
        self._renderer = renderer or BadgeRenderer(
            http=HttpClient(retry=self._defaults.retry, sleep=sleep),
            defaults=self._defaults.badge,
        )

    @property
    def folder_name(self) -> str:
        return pipeline_folder_name(self.settings.pipeline_name)

    @property
    def results_dir(self) -> Path:
        return Path(self.settings.results_dir) / self.folder_name

    def build_definition(self) -> PipelineDefinition:
        """
        Parameters string + settings -> PipelineDefinition.

        Raises:
            ValidationError: Malformed parameters or invalid definition fields
        """
        parameters = parse_pipeline_parameters(self.settings.pipeline_parameters)
        devops = self._defaults.devops
        try:
            return PipelineDefinition.build(
                name=self.settings.pipeline_name,
                definition_id=self.settings.pipeline_definition_id,
                source_branch=self.settings.source_branch,
                parameters=parameters,
                display_name=self.settings.effective_display_name,
                owner=self.settings.owner,
                pipeline_type=self.settings.pipeline_type,
                integration_definition_id=devops.integration_definition_id,
                integration_param=devops.integration_build_number_param,
                integration_prefix=devops.integration_build_number_prefix,
                now=self._now(),
            )
        except ModelValidationError as e:
            raise ValidationError(f"Invalid pipeline definition: {e}", cause=e)

    def run(self) -> WorkflowOutcome:
        """Execute the run; failures come back on the outcome, never raised."""
        outcome = WorkflowOutcome(success=False)

        with log_context(pipeline=self.settings.pipeline_name,
                         definition_id=self.settings.pipeline_definition_id,
                         component="workflow"):
            try:
                with log_context(operation="validate"):
                    definition = self.build_definition()
                    self._blob_repo.verify_access(self._defaults.storage.container)

                outcome.result = PipelineInvocationResult.for_definition(definition)

                self._execute(definition, outcome)
                outcome.success = True
                log_checkpoint("run_finished", {"status": outcome.result.status}, logger)

            except PipelineRunnerError as e:
                outcome.error = e
                logger.error(f"Pipeline run failed: {e}")

            except OSError as e:
                outcome.error = PipelineRunnerError("Local file operation failed", cause=e)
                logger.error(f"Pipeline run failed: {outcome.error}")

        return outcome

    def _execute(self, definition: PipelineDefinition, outcome: WorkflowOutcome) -> None:
        result = outcome.result
        reporter = ResultReporter(
            devops=self._devops,
            renderer=self._renderer,
            results_dir=self.results_dir,
            badge_defaults=self._defaults.badge,
            storage_defaults=self._defaults.storage,
        )
        reporter.prepare()

        with log_context(operation="submit"):
            run = self._devops.submit_run(definition)
        queued_at = self._now()
        result.record_queued(run, queued_at)

        with log_context(build_id=run.build_id):
            log_checkpoint("run_queued", {"build_url": result.build_url}, logger)
            reporter.write_queued(run, queued_at)

            with log_context(operation="poll"):
                poller = RunPoller(
                    fetch_status=self._devops.get_run_status,
                    polling=self._defaults.polling,
                    sleep=self._sleep,
                )
                final = poller.wait_for_completion(run.status_url)
            result.record_completed(
                status=str(final.get("status", "")),
                result=final.get("result"),
                finished_at=self._now(),
            )
            log_checkpoint("run_completed", {"status": result.status}, logger)

            reporter.write_pipeline_result(definition.display_name, result.status)

            with log_context(operation="report"):
                summary = reporter.fetch_test_summary(run.build_id)
                if summary is not None:
                    result.test_results = summary.to_result_counts()
                    reporter.write_test_results(summary)
                reporter.write_results_json(result)

            with log_context(operation="upload"):
                uploader = ArtifactUploader(self._blob_repo, self._defaults.storage)
                outcome.uploaded = uploader.upload(
                    self.results_dir,
                    version=self.settings.functions_version,
                    pipeline_folder=self.folder_name,
                )


__all__ = ["PipelineWorkflow", "WorkflowOutcome", "pipeline_folder_name"]
