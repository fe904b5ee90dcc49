# ============================================================================
# CLI PIPELINE RUNNER TESTS
# ============================================================================
# STATUS: Tests - tools/run_pipeline.py entry point
# PURPOSE: Verify exit status and stderr reporting for each outcome
# CREATED: 19 OCT 2026
# ============================================================================
"""
CLI Pipeline Runner Tests

PipelineWorkflow is patched so main() runs without DevOps or storage.
configure_logging is patched to leave pytest's log capture alone.

Run with:
    pytest tests/test_run_pipeline.py -v
"""

import pytest
from unittest.mock import MagicMock, patch

from core.config.settings import ENV_VARS
from core.errors import SubmissionError
from core.models import PipelineDefinition, PipelineInvocationResult
from services.workflow import WorkflowOutcome
from tools import run_pipeline

ARGS = [
    "--storage-account-name", "mystorage",
    "--storage-account-key", "key",
    "--functions-version", "4.0",
    "--devops-user-name", "builder",
    "--devops-user-pat", "pat",
    "--organization-name", "contoso",
    "--project-name", "functions",
    "--pipeline-name", "Nightly Tests",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("tools.run_pipeline.configure_logging"):
        yield


def _result():
    definition = PipelineDefinition.build(
        name="Nightly Tests", definition_id=21, source_branch="refs/heads/dev",
    )
    return PipelineInvocationResult.for_definition(definition)


def _patch_workflow(outcome):
    workflow_cls = MagicMock()
    workflow_cls.return_value.run.return_value = outcome
    return patch("services.workflow.PipelineWorkflow", workflow_cls)


class TestRunPipelineMain:

    def test_failed_outcome_exits_1_with_error_line(self, capsys):
        outcome = WorkflowOutcome(success=False, result=_result(), error=SubmissionError("rejected"))

        with _patch_workflow(outcome) as workflow_cls:
            code = run_pipeline.main(ARGS)

        assert code == 1
        err = capsys.readouterr().err
        assert "ERROR: rejected" in err
        settings = workflow_cls.call_args[0][0]
        assert settings.pipeline_name == "Nightly Tests"

    def test_failure_before_result_prints_no_json(self, capsys):
        outcome = WorkflowOutcome(success=False, error=SubmissionError("rejected"))

        with _patch_workflow(outcome):
            code = run_pipeline.main(ARGS)

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert captured.err.startswith("ERROR:")

    def test_success_exits_0_and_prints_result(self, capsys):
        outcome = WorkflowOutcome(success=True, result=_result())

        with _patch_workflow(outcome):
            code = run_pipeline.main(ARGS)

        captured = capsys.readouterr()
        assert code == 0
        assert '"displayName"' in captured.out
        assert "ERROR:" not in captured.err

    def test_missing_required_parameters(self, capsys):
        with _patch_workflow(WorkflowOutcome(success=True)) as workflow_cls:
            code = run_pipeline.main(["--pipeline-name", "Nightly Tests"])

        assert code == 1
        err = capsys.readouterr().err
        assert err.startswith("ERROR: Missing required parameter(s)")
        assert "StorageAccountName" in err
        workflow_cls.assert_not_called()
