# ============================================================================
# ERROR TYPES
# ============================================================================
# STATUS: Foundation - Fatal error hierarchy
# PURPOSE: Typed errors raised by every pipeline runner component
# CREATED: 14 OCT 2026
# EXPORTS: PipelineRunnerError and subclasses
# ============================================================================
"""
Error types for the pipeline runner.

Every error here is fatal for the run that raised it. Components raise them;
the workflow catches PipelineRunnerError in exactly one place and turns it
into a failed WorkflowOutcome.

The only non-fatal conditions are handled locally and never surface as one
of these types:
    - a poll query that exhausts its retries (treated as "no response")
    - a test summary without aggregated analysis (test badge skipped)
"""

from typing import Optional


class PipelineRunnerError(Exception):
    """Base class for all fatal pipeline runner errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} (caused by {type(self.cause).__name__}: {self.cause})"
        return self.message


class ValidationError(PipelineRunnerError):
    """Missing or invalid CLI parameter."""


class ParameterParseError(ValidationError):
    """Malformed key=value;... parameter string."""

    def __init__(self, segment: str):
        super().__init__(
            f"Invalid pipeline parameter '{segment}': expected exactly one '=' (key=value)"
        )
        self.segment = segment


class AuthenticationError(PipelineRunnerError):
    """Rejected or missing credentials (storage account or DevOps PAT)."""


class HttpRequestError(PipelineRunnerError):
    """HTTP call that still failed after the client's retry budget."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code


class SubmissionError(PipelineRunnerError):
    """Pipeline run could not be queued."""


class PollTimeoutError(PipelineRunnerError, TimeoutError):
    """Run did not reach a terminal state within the attempt budget."""

    def __init__(self, poll_url: str, attempts: int):
        super().__init__(
            f"Pipeline run did not complete after {attempts} status checks. "
            f"Check the run manually: {poll_url}"
        )
        self.poll_url = poll_url
        self.attempts = attempts


class RenderError(PipelineRunnerError):
    """Badge image or result file could not be produced in the results folder."""


class UploadError(PipelineRunnerError):
    """Results folder unusable, or its artifacts could not be uploaded to blob storage."""


class QueueValidationError(PipelineRunnerError):
    """Queue-trigger round trip did not return the expected message."""


__all__ = [
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
]
