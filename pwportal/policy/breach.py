from __future__ import annotations

import hashlib
import logging

import httpx

from ..errors import BreachServiceError


log = logging.getLogger(__name__)

PREFIX_LENGTH = 5


def sha1_hex(password: str) -> str:
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()


def parse_range_body(body: str) -> set[str]:
    """Parse a range response (``SUFFIX:COUNT`` per line) into the set of suffixes.

    Padding entries (count 0) are dropped.
    """
    suffixes: set[str] = set()
    for raw in body.splitlines():
        line = raw.strip()
        if not line:
            continue
        suffix, sep, count = line.partition(":")
        if not sep:
            raise BreachServiceError(f"malformed range line: {line[:64]!r}")
        try:
            n = int(count.strip())
        except ValueError:
            raise BreachServiceError(f"malformed range count: {line[:64]!r}") from None
        if n > 0:
            suffixes.add(suffix.strip().upper())
    return suffixes


class PwnedPasswordsClient:
    """Have I Been Pwned "range" API client (k-anonymity).

    Only the first five hex digits of the SHA-1 of the password leave the
    process; the returned suffixes are matched locally.
    """

    def __init__(
        self,
        base_url: str = "https://api.pwnedpasswords.com",
        timeout_s: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=float(timeout_s), headers={"User-Agent": "pwportal"})

    def range(self, prefix: str) -> set[str]:
        url = f"{self.base_url}/range/{prefix}"
        try:
            resp = self._client.get(url, headers={"Add-Padding": "true"})
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BreachServiceError(f"range lookup returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise BreachServiceError(f"range lookup failed: {e}") from e
        return parse_range_body(resp.text)

    def is_compromised(self, password: str) -> bool:
        digest = sha1_hex(password)
        prefix, suffix = digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]
        found = suffix in self.range(prefix)
        log.debug("range lookup for prefix %s: match=%s", prefix, found)
        return found

    def close(self) -> None:
        self._client.close()
