from __future__ import annotations

from dataclasses import dataclass

from ..errors import ConfigurationError, DirectoryError


@dataclass(frozen=True)
class DirectoryConfig:
    host: str
    port: int
    server_name: str
    ca_pem: str
    user_dn_template: str = "uid={username},ou=People,dc=ank,dc=chnet"
    timeout_s: float = 10.0

    def __post_init__(self) -> None:
        # Without the placeholder every user would bind as the same DN.
        if "{username}" not in self.user_dn_template:
            raise ConfigurationError(
                f"LDAP user DN template must contain {{username}}: {self.user_dn_template!r}"
            )


@dataclass(frozen=True)
class DirectoryIdentity:
    """A user entry in the directory, addressed by its DN."""

    username: str
    dn: str


@dataclass(frozen=True)
class DirectoryResult:
    ok: bool
    error: DirectoryError | None = None
