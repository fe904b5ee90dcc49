# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Business logic layer
# PURPOSE: Pipeline submission, polling, reporting, upload, queue validation
# CREATED: 15 OCT 2026
# ============================================================================
"""
Services Module

Business logic for the pipeline runner.
Services coordinate between the DevOps API, the badge service and storage.

Usage:
    from services import PipelineWorkflow

    outcome = PipelineWorkflow(settings).run()
    sys.exit(outcome.exit_code)
"""

from .parameters import parse_pipeline_parameters
from .devops_client import DevOpsClient
from .poller import RunPoller
from .reporter import BadgeRenderer, ResultReporter, build_badge_url
from .uploader import ArtifactUploader
from .workflow import PipelineWorkflow, WorkflowOutcome, pipeline_folder_name
from .queue_validation import QueueTriggerValidator, QueueValidationResult

__all__ = [
    "parse_pipeline_parameters",
    "DevOpsClient",
    "RunPoller",
    "BadgeRenderer",
    "ResultReporter",
    "build_badge_url",
    "ArtifactUploader",
    "PipelineWorkflow",
    "WorkflowOutcome",
    "pipeline_folder_name",
    "QueueTriggerValidator",
    "QueueValidationResult",
]
