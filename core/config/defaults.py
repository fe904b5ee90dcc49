# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for polling, retries, badges, storage, DevOps
# CREATED: 14 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the pipeline runner. Each group can be overridden via
environment variables; CLI flags override both.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class PollingDefaults:
    """
    Defaults for the run status poll loop.

    360 tries at 10s is roughly one hour of waiting.
    """
    wait_seconds: float = 10.0
    max_tries: int = 360

    @classmethod
    def from_env(cls) -> "PollingDefaults":
        """Create from environment variables."""
        return cls(
            wait_seconds=float(os.getenv("POLL_WAIT_SECONDS", 10.0)),
            max_tries=int(os.getenv("POLL_MAX_TRIES", 360)),
        )


@dataclass(frozen=True)
class RetryDefaults:
    """
    Defaults for HTTP retries.

    Fixed interval, no backoff.
    """
    count: int = 3
    delay_seconds: float = 1.0
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> "RetryDefaults":
        """Create from environment variables."""
        return cls(
            count=int(os.getenv("HTTP_RETRY_COUNT", 3)),
            delay_seconds=float(os.getenv("HTTP_RETRY_DELAY", 1.0)),
            timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", 30.0)),
        )


@dataclass(frozen=True)
class BadgeDefaults:
    """Defaults for the external badge rendering service."""
    base_url: str = "https://img.shields.io"

    # Artifact file names
    last_run_file: str = "last-run.svg"
    pipeline_result_file: str = "pipeline-result.svg"
    test_results_file: str = "test-results.svg"

    @classmethod
    def from_env(cls) -> "BadgeDefaults":
        """Create from environment variables."""
        return cls(
            base_url=os.getenv("BADGE_SERVICE_URL", "https://img.shields.io"),
        )


@dataclass(frozen=True)
class StorageDefaults:
    """
    Defaults for result artifact storage.

    Controls the results container and which local files get uploaded.
    """
    container: str = "pipelineresults"
    results_dir: str = "results"
    upload_extensions: tuple = (".txt", ".svg", ".json")
    cache_control: str = "no-cache"

    content_types: Dict[str, str] = field(default_factory=lambda: {
        ".json": "application/json",
        ".txt": "text/plain",
        ".svg": "image/svg+xml",
    })
    fallback_content_type: str = "application/octet-stream"

    # Artifact file names
    results_json_file: str = "pipeline-results.json"
    build_url_file: str = "Build-url.txt"
    build_id_file: str = "Build-id.txt"

    def content_type_for(self, extension: str) -> str:
        """Map a file extension to the content type stored on the blob."""
        return self.content_types.get(extension.lower(), self.fallback_content_type)

    @classmethod
    def from_env(cls) -> "StorageDefaults":
        """Create from environment variables."""
        return cls(
            container=os.getenv("RESULTS_CONTAINER", "pipelineresults"),
            results_dir=os.getenv("RESULTS_DIR", "results"),
        )


@dataclass(frozen=True)
class DevOpsDefaults:
    """Defaults for the Azure DevOps REST API."""
    base_url: str = "https://dev.azure.com"
    api_version: str = "5.0"
    test_api_version: str = "5.0-preview.1"

    default_definition_id: int = 21
    default_source_branch: str = "refs/heads/dev"

    # The integration pipeline gets a PreRelease build number stamped in
    integration_definition_id: int = 11
    integration_build_number_param: str = "IntegrationBuildNumber"
    integration_build_number_prefix: str = "PreRelease"

    @classmethod
    def from_env(cls) -> "DevOpsDefaults":
        """Create from environment variables."""
        return cls(
            base_url=os.getenv("DEVOPS_BASE_URL", "https://dev.azure.com"),
            api_version=os.getenv("DEVOPS_API_VERSION", "5.0"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    polling: PollingDefaults = field(default_factory=PollingDefaults)
    retry: RetryDefaults = field(default_factory=RetryDefaults)
    badge: BadgeDefaults = field(default_factory=BadgeDefaults)
    storage: StorageDefaults = field(default_factory=StorageDefaults)
    devops: DevOpsDefaults = field(default_factory=DevOpsDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            polling=PollingDefaults.from_env(),
            retry=RetryDefaults.from_env(),
            badge=BadgeDefaults.from_env(),
            storage=StorageDefaults.from_env(),
            devops=DevOpsDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PollingDefaults",
    "RetryDefaults",
    "BadgeDefaults",
    "StorageDefaults",
    "DevOpsDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
