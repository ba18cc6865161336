from __future__ import annotations

import logging
import ssl

from ldap3 import Server, Connection, NONE, Tls
from ldap3.core.exceptions import LDAPException

from ..errors import DirectoryError, DirectoryErrorKind
from .models import DirectoryConfig, DirectoryIdentity, DirectoryResult
from .utils import escape_dn_value


log = logging.getLogger(__name__)


class DirectoryClient:
    """Self password change against an LDAP server over LDAPS.

    The TLS settings (pinned CA) and the ``Server`` description are built once
    in ``__init__``; every ``change_password`` call opens its own connection
    and unbinds it before returning.
    """

    def __init__(self, cfg: DirectoryConfig) -> None:
        self.cfg = cfg

        tls = Tls(
            validate=ssl.CERT_REQUIRED,
            ca_certs_data=cfg.ca_pem,
            valid_names=[cfg.server_name],
            sni=cfg.server_name,
        )

        self.server = Server(
            host=cfg.host,
            port=cfg.port,
            use_ssl=True,
            get_info=NONE,
            tls=tls,
            connect_timeout=float(cfg.timeout_s),
        )

    def identity_for(self, username: str) -> DirectoryIdentity:
        dn = self.cfg.user_dn_template.format(username=escape_dn_value(username))
        return DirectoryIdentity(username=username, dn=dn)

    def _connection(self, user: str, password: str) -> Connection:
        return Connection(
            self.server,
            user=user,
            password=password,
            auto_bind=False,
            receive_timeout=float(self.cfg.timeout_s),
        )

    @staticmethod
    def _describe(conn: Connection) -> str:
        res = dict(conn.result or {})
        desc = str(res.get("description") or "")
        msg = str(res.get("message") or "")
        if desc and msg:
            return f"{desc} ({msg})"
        return desc or msg or "unknown error"

    @staticmethod
    def _close(conn: Connection | None) -> None:
        if conn is None:
            return
        try:
            conn.unbind()
        except LDAPException as e:
            log.debug("unbind failed: %s", e)

    def change_password(
        self,
        identity: DirectoryIdentity,
        current_password: str,
        new_password: str,
    ) -> DirectoryResult:
        """Bind as ``identity`` and issue an RFC 3062 password modify.

        Returns ``DirectoryResult(ok=False, error=...)`` on any failure; the
        error carries the failing step and the server detail for logging.
        """
        conn: Connection | None = None
        try:
            try:
                conn = self._connection(identity.dn, current_password)
                conn.open()
            except LDAPException as e:
                return _failure(DirectoryErrorKind.DIAL, str(e))

            try:
                bound = bool(conn.bind())
            except LDAPException as e:
                return _failure(DirectoryErrorKind.BIND, str(e))
            if not bound:
                return _failure(DirectoryErrorKind.BIND, self._describe(conn))

            try:
                modified = bool(
                    conn.extend.standard.modify_password(
                        user=identity.dn,
                        old_password=current_password,
                        new_password=new_password,
                    )
                )
            except LDAPException as e:
                return _failure(DirectoryErrorKind.MODIFY, str(e))
            if not modified:
                return _failure(DirectoryErrorKind.MODIFY, self._describe(conn))

            return DirectoryResult(ok=True)
        finally:
            self._close(conn)


def _failure(kind: DirectoryErrorKind, detail: str) -> DirectoryResult:
    log.debug("directory step failed: %s", kind.value)
    return DirectoryResult(ok=False, error=DirectoryError(kind=kind, detail=detail))
