# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 14 OCT 2026
# ============================================================================
"""
Configuration Module

Provides defaults and per-run settings for the pipeline runner.
"""

from core.config.defaults import (
    PollingDefaults,
    RetryDefaults,
    BadgeDefaults,
    StorageDefaults,
    DevOpsDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)
from core.config.settings import PipelineRunSettings

__all__ = [
    "PollingDefaults",
    "RetryDefaults",
    "BadgeDefaults",
    "StorageDefaults",
    "DevOpsDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
    "PipelineRunSettings",
]
