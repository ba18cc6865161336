"""Error taxonomy of the password change pipeline.

Three kinds of failure flow through the pipeline and callers branch on
their ``tag`` instead of isinstance checks on generic exceptions:

- ``ValidationError``: a policy violation for one form field. Always shown to
  the user, per field, in a fixed order.
- ``DirectoryError``: the LDAP dial/bind/modify sequence failed. The detail is
  logged, the user only ever sees one generic message.
- ``BreachServiceError``: the breach lookup service could not be queried.
  Never shown to the user.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Field(str, Enum):
    USERNAME = "username"
    CURRENT_PASSWORD = "current_password"
    NEW_PASSWORD = "new_password"
    NEW_PASSWORD_CONFIRM = "new_password_confirm"


class Reason(str, Enum):
    REQUIRED = "required"
    FORMAT = "format"
    LENGTH = "length"
    MISMATCH = "mismatch"
    WEAK = "weak"
    PWNED = "pwned"


class DirectoryErrorKind(str, Enum):
    DIAL = "dial"
    BIND = "bind"
    MODIFY = "modify"


@dataclass(frozen=True)
class ValidationError:
    field: Field
    reason: Reason
    tag: str = field(default="validation", init=False, repr=False)


@dataclass(frozen=True)
class DirectoryError:
    kind: DirectoryErrorKind
    detail: str = ""
    tag: str = field(default="directory", init=False, repr=False)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.detail}" if self.detail else self.kind.value


class BreachServiceError(Exception):
    """The compromised-password lookup failed (network, status or body)."""

    tag = "breach_service"


class ConfigurationError(Exception):
    """Startup configuration is unusable (e.g. pinned CA file missing)."""
