"""Directory (LDAP) client package.

Public API:
    - DirectoryConfig
    - DirectoryIdentity
    - DirectoryResult
    - DirectoryClient
"""

from .models import DirectoryConfig, DirectoryIdentity, DirectoryResult
from .client import DirectoryClient

__all__ = ["DirectoryConfig", "DirectoryIdentity", "DirectoryResult", "DirectoryClient"]
