"""Application bootstrap.

Everything shared between requests is built here exactly once, before the
first request is served, and handed to the routers through ``app.state``:
the pinned CA (inside the directory client's TLS settings), the breach
lookup client and the policy. Nothing here is mutated afterwards.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .env_settings import EnvSettings
from .errors import ConfigurationError
from .ldap import DirectoryClient, DirectoryConfig
from .ldap.utils import looks_like_pem_certificate, normalize_pem
from .policy import InputValidator, PwnedPasswordsClient
from .services import PasswordChangeService


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortalContext:
    settings: EnvSettings
    service: PasswordChangeService
    breach_client: PwnedPasswordsClient | None = None

    def close(self) -> None:
        if self.breach_client is not None:
            self.breach_client.close()


def load_ca_pem(path: str) -> str:
    """Read the organisation CA used to verify the LDAP server certificate."""
    if not path or not os.path.isfile(path):
        raise ConfigurationError(f"LDAP CA certificate not found: {path!r}")
    with open(path, "r", encoding="utf-8") as f:
        data = normalize_pem(f.read())
    # Sanity check only; a bad file would otherwise surface as a TLS error on the first request.
    if not looks_like_pem_certificate(data):
        raise ConfigurationError(f"LDAP CA file is not a PEM certificate: {path!r}")
    return data


def build_context(settings: EnvSettings) -> PortalContext:
    ca_pem = load_ca_pem(settings.ldap_ca_cert_file)

    directory = DirectoryClient(
        DirectoryConfig(
            host=settings.ldap_host,
            port=settings.ldap_port,
            server_name=settings.ldap_server_name,
            ca_pem=ca_pem,
            user_dn_template=settings.ldap_user_dn_template,
            timeout_s=settings.ldap_timeout_s,
        )
    )

    breach_client: PwnedPasswordsClient | None = None
    if settings.hibp_enabled:
        breach_client = PwnedPasswordsClient(
            base_url=settings.hibp_api_url,
            timeout_s=settings.hibp_timeout_s,
        )
    else:
        log.warning("HIBP check disabled (HIBP_ENABLED=false)")

    validator = InputValidator(
        min_length=settings.password_min_length,
        min_score=settings.password_min_score,
        breach_checker=breach_client,
    )

    log.info(
        "Directory: %s:%d (server name %s), CA: %s",
        settings.ldap_host, settings.ldap_port, settings.ldap_server_name, settings.ldap_ca_cert_file,
    )
    return PortalContext(
        settings=settings,
        service=PasswordChangeService(validator, directory),
        breach_client=breach_client,
    )
