# ============================================================================
# PIPELINE MODELS
# ============================================================================
# STATUS: Core model - Pipeline definition and invocation result
# PURPOSE: Typed request body, immutable definition, per-run result record
# CREATED: 14 OCT 2026
# EXPORTS: PipelineRequestBody, PipelineDefinition, QueuedRun, PipelineInvocationResult
# DEPENDENCIES: pydantic
# ============================================================================
"""
Pipeline Models

Lifecycle:
    1. CLI settings -> PipelineDefinition.build() (immutable)
    2. DevOpsClient.submit_run(definition) -> QueuedRun
    3. Workflow records the QueuedRun on PipelineInvocationResult (build_id set once)
    4. Poller/Reporter fill in status, execution_time, test_results
    5. Workflow writes pipeline-results.json via to_artifact_json()

The request body is an explicit model: definition id, source branch and a
single mapping of user-supplied parameters. On the wire Azure DevOps wants
"parameters" as a JSON-encoded string, so to_api_payload() does that.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, model_validator

from core.contracts import PipelineType


ParameterValue = Union[bool, str]


# ============================================================================
# REQUEST BODY
# ============================================================================

class PipelineRequestBody(BaseModel):
    """Body of POST _apis/build/builds."""

    definition_id: int = Field(..., ge=1, description="Build definition id")
    source_branch: str = Field(..., min_length=1, description="e.g. refs/heads/dev")
    parameters: Dict[str, ParameterValue] = Field(
        default_factory=dict,
        description="User-supplied key/value parameters passed to the run",
    )

    model_config = {"frozen": True}

    def to_api_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON body the build API expects."""
        return {
            "parameters": json.dumps(dict(self.parameters)),
            "definition": {"id": self.definition_id},
            "sourceBranch": self.source_branch,
        }


# ============================================================================
# DEFINITION
# ============================================================================

class PipelineDefinition(BaseModel):
    """
    One pipeline invocation as requested by the operator.

    Constructed once per run, then only read.
    """

    name: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    owner: Optional[str] = None
    request_body: PipelineRequestBody
    id: int = Field(..., ge=1, description="Same as request_body.definition_id")
    type: PipelineType = PipelineType.BUILD

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_id_matches_body(self) -> "PipelineDefinition":
        if self.id != self.request_body.definition_id:
            raise ValueError(
                f"Definition id {self.id} does not match request body "
                f"definition id {self.request_body.definition_id}"
            )
        return self

    @classmethod
    def build(
        cls,
        name: str,
        definition_id: int,
        source_branch: str,
        parameters: Optional[Dict[str, ParameterValue]] = None,
        display_name: Optional[str] = None,
        owner: Optional[str] = None,
        pipeline_type: PipelineType = PipelineType.BUILD,
        integration_definition_id: int = 11,
        integration_param: str = "IntegrationBuildNumber",
        integration_prefix: str = "PreRelease",
        now: Optional[datetime] = None,
    ) -> "PipelineDefinition":
        """
        Build a definition, stamping the integration build number when needed.

        The integration pipeline (definition 11 by default) receives an extra
        parameter named IntegrationBuildNumber with value PreRelease{yyMMdd-HHmm}.
        The stamp is always UTC; an aware `now` in another zone is converted.
        """
        params: Dict[str, ParameterValue] = dict(parameters or {})
        if definition_id == integration_definition_id:
            stamped_at = now or datetime.now(timezone.utc)
            if stamped_at.tzinfo is not None:
                stamped_at = stamped_at.astimezone(timezone.utc)
            stamp = stamped_at.strftime("%y%m%d-%H%M")
            params[integration_param] = f"{integration_prefix}{stamp}"

        body = PipelineRequestBody(
            definition_id=definition_id,
            source_branch=source_branch,
            parameters=params,
        )
        return cls(
            name=name,
            display_name=display_name or name,
            owner=owner,
            request_body=body,
            id=definition_id,
            type=pipeline_type,
        )


# ============================================================================
# SUBMISSION RESULT
# ============================================================================

class QueuedRun(BaseModel):
    """What the build API returns for a successfully queued run."""

    build_id: int
    status_url: str = Field(..., description="REST url polled for status")
    web_url: Optional[str] = Field(default=None, description="Human-facing results page")

    model_config = {"frozen": True}


# ============================================================================
# INVOCATION RESULT
# ============================================================================

class PipelineInvocationResult(BaseModel):
    """
    Result record for one run, written to pipeline-results.json.

    Owned by a single workflow instance. build_id may be assigned once;
    reassigning raises ValueError.
    """

    name: str
    display_name: str = Field(..., serialization_alias="displayName")
    type: PipelineType
    source_branch: str = Field(..., serialization_alias="sourceBranch")
    execution_time: Optional[str] = Field(default=None, serialization_alias="executionTime")
    status: str = Field(default="notStarted")
    test_results: Optional[Dict[str, int]] = Field(default=None, serialization_alias="testResults")
    build_url: Optional[str] = Field(default=None, serialization_alias="buildUrl")
    build_id: Optional[int] = Field(default=None, serialization_alias="buildId")

    queued_at: Optional[datetime] = Field(default=None, exclude=True)

    model_config = {"frozen": False}

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "build_id" and self.build_id is not None:
            raise ValueError(f"build_id already set to {self.build_id}")
        super().__setattr__(name, value)

    @classmethod
    def for_definition(cls, definition: PipelineDefinition) -> "PipelineInvocationResult":
        """Start a result record for a definition that is about to be queued."""
        return cls(
            name=definition.name,
            display_name=definition.display_name,
            type=definition.type,
            source_branch=definition.request_body.source_branch,
        )

    def record_queued(self, run: QueuedRun, queued_at: Optional[datetime] = None) -> None:
        """Record a successful submit. Allowed exactly once."""
        self.build_id = run.build_id
        self.build_url = run.web_url or run.status_url
        self.status = "queued"
        self.queued_at = queued_at or datetime.now(timezone.utc)

    def record_completed(
        self,
        status: str,
        result: Optional[str],
        finished_at: Optional[datetime] = None,
    ) -> None:
        """Record the terminal state; status becomes the build result when present."""
        self.status = result or status
        if self.queued_at is not None:
            elapsed = (finished_at or datetime.now(timezone.utc)) - self.queued_at
            total = max(int(elapsed.total_seconds()), 0)
            hours, remainder = divmod(total, 3600)
            minutes, seconds = divmod(remainder, 60)
            self.execution_time = f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def to_artifact_json(self) -> str:
        """Serialize for pipeline-results.json (camelCase keys)."""
        return self.model_dump_json(by_alias=True, indent=2)


__all__ = [
    "PipelineRequestBody",
    "PipelineDefinition",
    "QueuedRun",
    "PipelineInvocationResult",
]
