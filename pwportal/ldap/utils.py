from __future__ import annotations

from ldap3.utils.dn import escape_rdn


def escape_ldap_filter_value(value: str) -> str:
    """RFC 4515 escaping for LDAP filter values."""
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\5c")
        elif ch == "*":
            out.append("\\2a")
        elif ch == "(":
            out.append("\\28")
        elif ch == ")":
            out.append("\\29")
        elif ch == "\x00":
            out.append("\\00")
        else:
            out.append(ch)
    return "".join(out)


def escape_dn_value(value: str) -> str:
    """Escape a value for use inside a single RDN (``uid=<value>``).

    Filter escaping first, then ldap3's RFC 4514 RDN escaping on top.
    """
    if not value:
        return ""
    return escape_rdn(escape_ldap_filter_value(value))


def normalize_pem(pem: str) -> str:
    """Normalize PEM text (strip outer whitespace and normalize line endings)."""
    data = (pem or "").strip()
    return data.replace("\r\n", "\n").replace("\r", "\n")


def looks_like_pem_certificate(pem: str) -> bool:
    return "-----BEGIN CERTIFICATE-----" in pem and "-----END CERTIFICATE-----" in pem
