# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by all components
# PURPOSE: Pipeline types and Azure DevOps build status/result values
# CREATED: 14 OCT 2026
# EXPORTS: PipelineType, RunStatus, RunResult, BadgeColor
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the pipeline runner.

Enum values match the strings used on the wire by the Azure DevOps
build API (camelCase) so responses can be compared directly.
"""

from enum import Enum


# ============================================================================
# PIPELINE TYPE
# ============================================================================

class PipelineType(str, Enum):
    """Kind of pipeline being invoked."""
    BUILD = "Build"
    TEST = "Test"

    @classmethod
    def parse(cls, value: str) -> "PipelineType":
        """Look up a pipeline type by its value, case-insensitively."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(
            f"Unknown pipeline type '{value}'. Valid: {[m.value for m in cls]}"
        )


# ============================================================================
# RUN STATUS / RESULT
# ============================================================================

class RunStatus(str, Enum):
    """
    Build status reported by GET {build status url}.

    State transitions:
        NOT_STARTED -> IN_PROGRESS -> COMPLETED
                                   -> CANCELLING -> COMPLETED
    """
    NONE = "none"
    NOT_STARTED = "notStarted"   # Queued, no agent yet
    IN_PROGRESS = "inProgress"   # Agent running the build
    COMPLETED = "completed"      # Finished, see RunResult
    CANCELLING = "cancelling"
    POSTPONED = "postponed"
    ALL = "all"

    def is_pending(self) -> bool:
        """Check if the poller should keep waiting on this status."""
        return self in (RunStatus.NOT_STARTED, RunStatus.IN_PROGRESS)

    @classmethod
    def is_pending_value(cls, value: str) -> bool:
        """Same as is_pending for a raw response string."""
        return value in (cls.NOT_STARTED.value, cls.IN_PROGRESS.value)


class RunResult(str, Enum):
    """Build result once status is completed."""
    SUCCEEDED = "succeeded"
    PARTIALLY_SUCCEEDED = "partiallySucceeded"
    FAILED = "failed"
    CANCELED = "canceled"
    NONE = "none"


# ============================================================================
# BADGE COLORS
# ============================================================================

class BadgeColor(str, Enum):
    """Colors understood by the badge rendering service."""
    GREEN = "green"
    RED = "red"
    ORANGE = "orange"
    BLUE = "blue"
    LIGHTGREY = "lightgrey"

    @classmethod
    def for_result(cls, result: str) -> "BadgeColor":
        """Pick the pipeline-result badge color for a build result."""
        if result == RunResult.SUCCEEDED.value:
            return cls.GREEN
        if result == RunResult.PARTIALLY_SUCCEEDED.value:
            return cls.ORANGE
        return cls.RED


__all__ = ["PipelineType", "RunStatus", "RunResult", "BadgeColor"]
