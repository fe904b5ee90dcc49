# ============================================================================
# FUNCTION APP CONFIGURATION
# ============================================================================
# STATUS: Function - Configuration management
# PURPOSE: Environment-based configuration for the queue-trigger function app
# CREATED: 17 OCT 2026
# ============================================================================
"""
Function App Configuration

Loads configuration from environment variables (app settings) with defaults.
Queue names must be known when the host indexes the functions, so they are
read once at import time by function_app.py.

App settings:
- AzureWebJobsStorage: connection used by the queue trigger and output binding
- QUEUE_TRIGGER_INPUT: queue the function listens on
- QUEUE_TRIGGER_OUTPUT: queue the function echoes to
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_INPUT_QUEUE = "test-input-python"
DEFAULT_OUTPUT_QUEUE = "test-output-python"


@dataclass
class FunctionConfig:
    """Configuration for the function app."""

    storage_connection_setting: str = "AzureWebJobsStorage"
    input_queue: str = DEFAULT_INPUT_QUEUE
    output_queue: str = DEFAULT_OUTPUT_QUEUE

    # App Info
    service_name: str = "pipeline-runner-queue-trigger"

    @classmethod
    def from_env(cls) -> "FunctionConfig":
        """Load configuration from environment variables."""
        return cls(
            storage_connection_setting=os.environ.get("QUEUE_TRIGGER_CONNECTION", "AzureWebJobsStorage"),
            input_queue=os.environ.get("QUEUE_TRIGGER_INPUT", DEFAULT_INPUT_QUEUE),
            output_queue=os.environ.get("QUEUE_TRIGGER_OUTPUT", DEFAULT_OUTPUT_QUEUE),
            service_name=os.environ.get("SERVICE_NAME", "pipeline-runner-queue-trigger"),
        )


# Global config singleton
_config: Optional[FunctionConfig] = None


def get_config() -> FunctionConfig:
    """Get the global configuration singleton."""
    global _config
    if _config is None:
        _config = FunctionConfig.from_env()
    return _config


__all__ = ["FunctionConfig", "get_config", "DEFAULT_INPUT_QUEUE", "DEFAULT_OUTPUT_QUEUE"]
