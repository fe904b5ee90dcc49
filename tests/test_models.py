# ============================================================================
# PIPELINE MODEL TESTS
# ============================================================================
# STATUS: Tests - Definition, request body, invocation result
# PURPOSE: Verify integration build stamping, set-once build id, JSON shape
# CREATED: 17 OCT 2026
# ============================================================================
"""
Pipeline Model Tests

Run with:
    pytest tests/test_models.py -v
"""

import json
import pytest
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError as ModelValidationError

from core.contracts import BadgeColor, PipelineType, RunStatus
from core.models import (
    PipelineDefinition,
    PipelineInvocationResult,
    PipelineRequestBody,
    QueuedRun,
)

NOW = datetime(2026, 10, 14, 9, 5, tzinfo=timezone.utc)


def _definition(definition_id=21, **kwargs):
    return PipelineDefinition.build(
        name="Nightly Tests",
        definition_id=definition_id,
        source_branch="refs/heads/dev",
        parameters={"Runtime": "python"},
        now=NOW,
        **kwargs,
    )


# ============================================================================
# CONTRACTS
# ============================================================================

class TestContracts:

    def test_pipeline_type_parse(self):
        assert PipelineType.parse("test") is PipelineType.TEST
        assert PipelineType.parse(" Build ") is PipelineType.BUILD
        with pytest.raises(ValueError):
            PipelineType.parse("Deploy")

    def test_pending_statuses(self):
        assert RunStatus.is_pending_value("notStarted")
        assert RunStatus.is_pending_value("inProgress")
        assert not RunStatus.is_pending_value("completed")
        assert not RunStatus.is_pending_value("")
        assert RunStatus.IN_PROGRESS.is_pending()

    def test_badge_color_for_result(self):
        assert BadgeColor.for_result("succeeded") is BadgeColor.GREEN
        assert BadgeColor.for_result("partiallySucceeded") is BadgeColor.ORANGE
        assert BadgeColor.for_result("canceled") is BadgeColor.RED


# ============================================================================
# DEFINITION
# ============================================================================

class TestPipelineDefinition:

    def test_build_defaults(self):
        definition = _definition()
        assert definition.id == 21
        assert definition.display_name == "Nightly Tests"
        assert definition.type is PipelineType.BUILD
        assert definition.request_body.parameters == {"Runtime": "python"}

    def test_integration_build_number_stamped(self):
        definition = _definition(definition_id=11)
        assert definition.request_body.parameters == {
            "Runtime": "python",
            "IntegrationBuildNumber": "PreRelease261014-0905",
        }

    def test_integration_stamp_converted_to_utc(self):
        local = NOW.astimezone(timezone(timedelta(hours=2)))
        definition = PipelineDefinition.build(
            name="Integration", definition_id=11, source_branch="refs/heads/dev", now=local,
        )
        assert definition.request_body.parameters["IntegrationBuildNumber"] == "PreRelease261014-0905"

    def test_other_definitions_not_stamped(self):
        assert "IntegrationBuildNumber" not in _definition(definition_id=12).request_body.parameters

    def test_definition_is_immutable(self):
        definition = _definition()
        with pytest.raises(ModelValidationError):
            definition.name = "other"

    def test_id_must_match_body(self):
        body = PipelineRequestBody(definition_id=21, source_branch="refs/heads/dev")
        with pytest.raises(ModelValidationError):
            PipelineDefinition(name="x", display_name="x", request_body=body, id=22)

    def test_api_payload(self):
        payload = _definition().request_body.to_api_payload()
        assert payload["definition"] == {"id": 21}
        assert payload["sourceBranch"] == "refs/heads/dev"
        assert isinstance(payload["parameters"], str)
        assert json.loads(payload["parameters"]) == {"Runtime": "python"}

    def test_boolean_parameters_survive_payload(self):
        definition = PipelineDefinition.build(
            name="x", definition_id=21, source_branch="refs/heads/dev",
            parameters={"Smoke": True, "Label": "true-ish"},
        )
        encoded = json.loads(definition.request_body.to_api_payload()["parameters"])
        assert encoded == {"Smoke": True, "Label": "true-ish"}


# ============================================================================
# INVOCATION RESULT
# ============================================================================

class TestPipelineInvocationResult:

    def _queued(self):
        result = PipelineInvocationResult.for_definition(_definition(pipeline_type=PipelineType.TEST))
        result.record_queued(
            QueuedRun(build_id=4711, status_url="https://x/builds/4711", web_url="https://x/web/4711"),
            queued_at=NOW,
        )
        return result

    def test_record_queued(self):
        result = self._queued()
        assert result.build_id == 4711
        assert result.build_url == "https://x/web/4711"
        assert result.status == "queued"

    def test_build_id_set_once(self):
        result = self._queued()
        with pytest.raises(ValueError):
            result.build_id = 9999
        assert result.build_id == 4711

    def test_record_completed_uses_result(self):
        result = self._queued()
        result.record_completed("completed", "partiallySucceeded", finished_at=NOW + timedelta(hours=1, minutes=2, seconds=3))
        assert result.status == "partiallySucceeded"
        assert result.execution_time == "01:02:03"

    def test_record_completed_without_result(self):
        result = self._queued()
        result.record_completed("cancelling", None, finished_at=NOW)
        assert result.status == "cancelling"
        assert result.execution_time == "00:00:00"

    def test_artifact_json_is_camel_case(self):
        result = self._queued()
        result.record_completed("completed", "succeeded", finished_at=NOW + timedelta(minutes=5))
        result.test_results = {"total": 3, "passed": 3, "failed": 0, "skipped": 0}

        data = json.loads(result.to_artifact_json())

        assert data == {
            "name": "Nightly Tests",
            "displayName": "Nightly Tests",
            "type": "Test",
            "sourceBranch": "refs/heads/dev",
            "executionTime": "00:05:00",
            "status": "succeeded",
            "testResults": {"total": 3, "passed": 3, "failed": 0, "skipped": 0},
            "buildUrl": "https://x/web/4711",
            "buildId": 4711,
        }
