# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export contracts, errors and models
# CREATED: 14 OCT 2026
# ============================================================================

from core.contracts import PipelineType, RunStatus, RunResult, BadgeColor
from core.errors import (
    PipelineRunnerError,
    ValidationError,
    ParameterParseError,
    AuthenticationError,
    HttpRequestError,
    SubmissionError,
    PollTimeoutError,
    RenderError,
    UploadError,
    QueueValidationError,
)
from core.models import (
    PipelineRequestBody,
    PipelineDefinition,
    QueuedRun,
    PipelineInvocationResult,
    TestOutcomeSummary,
    QueueMessage,
)

__all__ = [
    # Enums
    "PipelineType",
    "RunStatus",
    "RunResult",
    "BadgeColor",
    # Errors
    "PipelineRunnerError",
    "ValidationError",
    "ParameterParseError",
    "AuthenticationError",
    "HttpRequestError",
    "SubmissionError",
    "PollTimeoutError",
    "RenderError",
    "UploadError",
    "QueueValidationError",
    # Models
    "PipelineRequestBody",
    "PipelineDefinition",
    "QueuedRun",
    "PipelineInvocationResult",
    "TestOutcomeSummary",
    "QueueMessage",
]
