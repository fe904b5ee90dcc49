# ============================================================================
# SETTINGS TESTS
# ============================================================================
# STATUS: Tests - CLI/env settings and defaults
# PURPOSE: Verify env fallback, required parameter checks, normalization
# CREATED: 17 OCT 2026
# ============================================================================
"""
Settings Tests

Run with:
    pytest tests/test_settings.py -v
"""

import pytest

from core.config import PipelineRunSettings, get_defaults, reset_defaults
from core.contracts import PipelineType
from core.errors import ValidationError

REQUIRED = {
    "storage_account_name": "mystorage",
    "storage_account_key": "key",
    "functions_version": "4.0",
    "devops_user_name": "builder",
    "devops_user_pat": "pat",
    "organization_name": "contoso",
    "project_name": "functions",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "STORAGE_ACCOUNT_NAME", "STORAGE_ACCOUNT_KEY", "FUNCTIONS_VERSION",
        "DEVOPS_USER_NAME", "DEVOPS_USER_PAT", "DEVOPS_ORGANIZATION", "DEVOPS_PROJECT",
        "POLL_WAIT_SECONDS", "POLL_MAX_TRIES",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_defaults()
    yield
    reset_defaults()


class TestPipelineRunSettings:

    def test_defaults_applied(self):
        settings = PipelineRunSettings.from_sources(dict(REQUIRED)).validate()
        assert settings.pipeline_definition_id == 21
        assert settings.source_branch == "refs/heads/dev"
        assert settings.pipeline_type is PipelineType.BUILD
        assert settings.results_dir == "results"
        assert settings.effective_display_name == "Pipeline"

    def test_none_values_ignored(self):
        values = dict(REQUIRED, pipeline_definition_id=None, source_branch=None)
        settings = PipelineRunSettings.from_sources(values)
        assert settings.pipeline_definition_id == 21

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("STORAGE_ACCOUNT_KEY", "env-key")
        monkeypatch.setenv("DEVOPS_USER_PAT", "env-pat")
        values = {k: v for k, v in REQUIRED.items() if k not in ("storage_account_key", "devops_user_pat")}

        settings = PipelineRunSettings.from_sources(values).validate()

        assert settings.storage_account_key == "env-key"
        assert settings.devops_user_pat == "env-pat"

    def test_cli_beats_env(self, monkeypatch):
        monkeypatch.setenv("DEVOPS_PROJECT", "other")
        settings = PipelineRunSettings.from_sources(dict(REQUIRED))
        assert settings.project_name == "functions"

    def test_missing_required_listed(self):
        values = dict(REQUIRED, storage_account_key=None, project_name="  ")

        with pytest.raises(ValidationError) as exc_info:
            PipelineRunSettings.from_sources(values).validate()

        message = str(exc_info.value)
        assert "StorageAccountKey" in message
        assert "ProjectName" in message

    def test_pipeline_type_parsed(self):
        settings = PipelineRunSettings.from_sources(dict(REQUIRED, pipeline_type="test")).validate()
        assert settings.pipeline_type is PipelineType.TEST

    def test_invalid_pipeline_type(self):
        with pytest.raises(ValidationError):
            PipelineRunSettings.from_sources(dict(REQUIRED, pipeline_type="Deploy")).validate()

    def test_invalid_definition_id(self):
        with pytest.raises(ValidationError):
            PipelineRunSettings.from_sources(dict(REQUIRED, pipeline_definition_id="abc")).validate()

    def test_unknown_keys_ignored(self):
        settings = PipelineRunSettings.from_sources(dict(REQUIRED, log_level="DEBUG"))
        assert not hasattr(settings, "log_level")

    def test_masked_hides_secrets(self):
        masked = PipelineRunSettings.from_sources(dict(REQUIRED)).masked()
        assert masked["storage_account_key"] == "***"
        assert masked["devops_user_pat"] == "***"
        assert masked["storage_account_name"] == "mystorage"


class TestDefaults:

    def test_polling_from_env(self, monkeypatch):
        monkeypatch.setenv("POLL_WAIT_SECONDS", "2")
        monkeypatch.setenv("POLL_MAX_TRIES", "5")
        reset_defaults()

        defaults = get_defaults()

        assert defaults.polling.wait_seconds == 2.0
        assert defaults.polling.max_tries == 5

    def test_content_types(self):
        storage = get_defaults().storage
        assert storage.content_type_for(".JSON") == "application/json"
        assert storage.content_type_for(".svg") == "image/svg+xml"
        assert storage.content_type_for(".bin") == "application/octet-stream"
