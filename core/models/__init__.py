# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# CREATED: 14 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

All Pydantic models for the pipeline runner.
"""

from core.models.pipeline import (
    PipelineRequestBody,
    PipelineDefinition,
    QueuedRun,
    PipelineInvocationResult,
)
from core.models.test_summary import TestOutcomeSummary
from core.models.queue_message import (
    QueueMessage,
    encode_message_content,
    decode_message_content,
)

__all__ = [
    # Pipeline
    "PipelineRequestBody",
    "PipelineDefinition",
    "QueuedRun",
    "PipelineInvocationResult",
    # Tests
    "TestOutcomeSummary",
    # Queue
    "QueueMessage",
    "encode_message_content",
    "decode_message_content",
]
