"""Registry API access for pubctl.

This package contains the registry session and the HTTP client.
"""

from pubctl.api.client import ApiResponse, RegistryClient
from pubctl.api.session import AuthInfo, RegistrySession, auth_info

__all__ = ["ApiResponse", "AuthInfo", "RegistryClient", "RegistrySession", "auth_info"]
