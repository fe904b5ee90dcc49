# ============================================================================
# LOGGING TESTS
# ============================================================================
# STATUS: Tests - Run context and formatters
# PURPOSE: Verify context nesting and both output formats
# CREATED: 17 OCT 2026
# ============================================================================
"""
Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import json
import logging

from core.logging import (
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    log_context,
)


def _record(message="Polling run"):
    return logging.LogRecord(
        name="services.poller", level=logging.INFO, pathname=__file__,
        lineno=1, msg=message, args=(), exc_info=None,
    )


class TestLogContext:

    def test_nested_context_inherits(self):
        with log_context(pipeline="Nightly Tests", definition_id=21):
            with log_context(build_id=4711):
                context = get_current_context()
                assert context.pipeline == "Nightly Tests"
                assert context.definition_id == 21
                assert context.build_id == 4711
            assert get_current_context().build_id is None
        assert get_current_context().pipeline is None

    def test_operation_replaced_component_kept(self):
        with log_context(pipeline="Nightly Tests", component="workflow"):
            with log_context(operation="submit"):
                assert get_current_context().to_dict() == {
                    "pipeline": "Nightly Tests",
                    "component": "workflow",
                    "operation": "submit",
                }
            with log_context(operation="poll"):
                assert get_current_context().operation == "poll"
                assert get_current_context().component == "workflow"
            assert get_current_context().operation is None


class TestFormatters:

    def test_human_format_includes_context(self):
        with log_context(pipeline="Nightly Tests", build_id=4711):
            line = HumanFormatter().format(_record())
        assert "INFO" in line
        assert "[pipeline=Nightly Tests, build=4711]" in line
        assert line.endswith("services.poller [pipeline=Nightly Tests, build=4711]: Polling run")

    def test_human_format_shows_operation(self):
        with log_context(pipeline="Nightly Tests", build_id=4711, operation="poll"):
            line = HumanFormatter().format(_record())
        assert "[pipeline=Nightly Tests, build=4711, op=poll]" in line

    def test_json_format(self):
        with log_context(pipeline="Nightly Tests"):
            data = json.loads(StructuredFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["message"] == "Polling run"
        assert data["context"] == {"pipeline": "Nightly Tests"}

    def test_json_format_includes_component_and_operation(self):
        with log_context(pipeline="Nightly Tests", component="workflow", operation="upload"):
            data = json.loads(StructuredFormatter().format(_record()))
        assert data["context"] == {
            "pipeline": "Nightly Tests",
            "component": "workflow",
            "operation": "upload",
        }
