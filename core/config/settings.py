# ============================================================================
# RUN SETTINGS
# ============================================================================
# STATUS: Core - Per-run configuration
# PURPOSE: Collect CLI/env values for one pipeline run and validate them
# CREATED: 14 OCT 2026
# ============================================================================
"""
Pipeline Run Settings

Everything a single invocation of tools/run_pipeline.py needs. Values come
from CLI flags first, then environment variables, then defaults.

Secrets (storage key, DevOps PAT) are usually supplied through the
environment so they never show up in shell history:

    STORAGE_ACCOUNT_NAME, STORAGE_ACCOUNT_KEY, FUNCTIONS_VERSION,
    DEVOPS_USER_NAME, DEVOPS_USER_PAT, DEVOPS_ORGANIZATION, DEVOPS_PROJECT
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from core.config.defaults import Defaults, get_defaults
from core.contracts import PipelineType
from core.errors import ValidationError

logger = logging.getLogger(__name__)


# Attribute name -> environment variable
ENV_VARS = {
    "storage_account_name": "STORAGE_ACCOUNT_NAME",
    "storage_account_key": "STORAGE_ACCOUNT_KEY",
    "functions_version": "FUNCTIONS_VERSION",
    "devops_user_name": "DEVOPS_USER_NAME",
    "devops_user_pat": "DEVOPS_USER_PAT",
    "organization_name": "DEVOPS_ORGANIZATION",
    "project_name": "DEVOPS_PROJECT",
}

# Attribute name -> CLI parameter name shown in validation errors
REQUIRED_PARAMETERS = {
    "storage_account_name": "StorageAccountName",
    "storage_account_key": "StorageAccountKey",
    "functions_version": "FunctionsVersion",
    "devops_user_name": "DevOpsUserName",
    "devops_user_pat": "DevOpsUserPAT",
    "organization_name": "OrganizationName",
    "project_name": "ProjectName",
}


@dataclass
class PipelineRunSettings:
    """Configuration for one pipeline run."""

    # Required
    storage_account_name: str = ""
    storage_account_key: str = ""
    functions_version: str = ""
    devops_user_name: str = ""
    devops_user_pat: str = ""
    organization_name: str = ""
    project_name: str = ""

    # Optional
    pipeline_name: str = "Pipeline"
    display_name: Optional[str] = None
    owner: Optional[str] = None
    pipeline_definition_id: int = 21
    source_branch: str = "refs/heads/dev"
    pipeline_parameters: str = ""
    pipeline_type: Union[PipelineType, str] = PipelineType.BUILD

    # Local output
    results_dir: str = "results"

    defaults: Defaults = field(default_factory=get_defaults)

    @classmethod
    def from_sources(cls, cli_values: Dict[str, Any]) -> "PipelineRunSettings":
        """
        Build settings from parsed CLI values, falling back to environment variables.

        Args:
            cli_values: Mapping of attribute name -> value (None means "not given")

        Returns:
            PipelineRunSettings (not yet validated)
        """
        values = {k: v for k, v in cli_values.items() if v is not None}

        for attr, env_var in ENV_VARS.items():
            if not values.get(attr):
                env_value = os.environ.get(env_var)
                if env_value:
                    values[attr] = env_value

        defaults = get_defaults()
        values.setdefault("pipeline_definition_id", defaults.devops.default_definition_id)
        values.setdefault("source_branch", defaults.devops.default_source_branch)
        values.setdefault("results_dir", defaults.storage.results_dir)

        known = set(cls.__dataclass_fields__)
        return cls(**{k: v for k, v in values.items() if k in known})

    def validate(self) -> "PipelineRunSettings":
        """
        Check required parameters and normalize typed fields.

        Returns:
            self, for chaining

        Raises:
            ValidationError: Listing every missing or invalid parameter
        """
        missing: List[str] = [
            name for attr, name in REQUIRED_PARAMETERS.items()
            if not str(getattr(self, attr) or "").strip()
        ]
        if missing:
            raise ValidationError(f"Missing required parameter(s): {', '.join(missing)}")

        if not isinstance(self.pipeline_type, PipelineType):
            try:
                self.pipeline_type = PipelineType.parse(str(self.pipeline_type))
            except ValueError as e:
                raise ValidationError(f"Invalid PipelineType: {e}", cause=e)

        try:
            self.pipeline_definition_id = int(self.pipeline_definition_id)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Invalid PipelineDefinitionId '{self.pipeline_definition_id}': must be an integer",
                cause=e,
            )

        if not self.pipeline_name.strip():
            raise ValidationError("PipelineName must not be empty")

        logger.debug(
            f"Settings validated: org={self.organization_name}, project={self.project_name}, "
            f"definition={self.pipeline_definition_id}, type={self.pipeline_type.value}"
        )
        return self

    @property
    def effective_display_name(self) -> str:
        """Display name, falling back to the pipeline name."""
        return self.display_name or self.pipeline_name

    def masked(self) -> Dict[str, Any]:
        """Settings as a dict with secrets masked, for logging."""
        return {
            "storage_account_name": self.storage_account_name,
            "storage_account_key": "***" if self.storage_account_key else "",
            "functions_version": self.functions_version,
            "devops_user_name": self.devops_user_name,
            "devops_user_pat": "***" if self.devops_user_pat else "",
            "organization_name": self.organization_name,
            "project_name": self.project_name,
            "pipeline_name": self.pipeline_name,
            "pipeline_definition_id": self.pipeline_definition_id,
            "source_branch": self.source_branch,
            "pipeline_type": getattr(self.pipeline_type, "value", self.pipeline_type),
        }


__all__ = ["PipelineRunSettings", "REQUIRED_PARAMETERS", "ENV_VARS"]
