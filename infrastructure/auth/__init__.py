# ============================================================================
# AUTHENTICATION MODULE
# ============================================================================
# PURPOSE: Credentials for Azure DevOps and Azure Storage
# CREATED: 15 OCT 2026
# ============================================================================
"""
Authentication module for the pipeline runner.

Provides:
- Basic-Auth header for the Azure DevOps REST API (user name + PAT)
- Storage credential selection (account key, else DefaultAzureCredential)

Usage:
    from infrastructure.auth import build_basic_auth_header, get_storage_credential
"""

from infrastructure.auth.devops_auth import build_basic_auth_header
from infrastructure.auth.storage_auth import get_storage_credential

__all__ = [
    'build_basic_auth_header',
    'get_storage_credential',
]
