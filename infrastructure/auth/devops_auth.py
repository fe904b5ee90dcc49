# ============================================================================
# AZURE DEVOPS AUTHENTICATION
# ============================================================================
# STATUS: Infrastructure - Basic auth for the DevOps REST API
# PURPOSE: Build the Authorization header from a user name + PAT
# CREATED: 15 OCT 2026
# ============================================================================
"""
Azure DevOps authentication.

The build and test APIs accept HTTP Basic auth where the password is a
Personal Access Token (PAT). The user name is informational; DevOps only
checks the token, but it still has to be present in the header.

Usage:
------
```python
from infrastructure.auth import build_basic_auth_header

headers = build_basic_auth_header("build-bot", os.environ["DEVOPS_USER_PAT"])
```
"""

import base64
import logging
from typing import Dict

from core.errors import AuthenticationError

logger = logging.getLogger(__name__)


def build_basic_auth_header(username: str, token: str) -> Dict[str, str]:
    """
    Build a Basic-Auth header for the DevOps REST API.

    Args:
        username: DevOps user name
        token: Personal access token

    Returns:
        {"Authorization": "Basic <base64(username:token)>"}

    Raises:
        AuthenticationError: If the token is empty
    """
    if not token:
        raise AuthenticationError("DevOps personal access token is empty")

    credentials = f"{username or ''}:{token}".encode("utf-8")
    encoded = base64.b64encode(credentials).decode("ascii")
    logger.debug(f"Built DevOps Basic auth header for user '{username}'")
    return {"Authorization": f"Basic {encoded}"}


__all__ = ["build_basic_auth_header"]
