from __future__ import annotations

import httpx
import pytest

from pwportal.errors import BreachServiceError
from pwportal.policy import PwnedPasswordsClient
from pwportal.policy.breach import parse_range_body, sha1_hex

# SHA-1("password") = 5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8
PASSWORD_PREFIX = "5BAA6"
PASSWORD_SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"


def _client(handler) -> PwnedPasswordsClient:
    transport = httpx.MockTransport(handler)
    return PwnedPasswordsClient(base_url="https://hibp.test/", client=httpx.Client(transport=transport))


def test_sha1_hex():
    assert sha1_hex("password") == PASSWORD_PREFIX + PASSWORD_SUFFIX


def test_only_hash_prefix_is_sent():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="0018A45C4D1DEF81644B54AB7F969B88D65:1\r\n")

    assert _client(handler).is_compromised("password") is False

    assert len(seen) == 1
    req = seen[0]
    assert req.method == "GET"
    assert str(req.url) == f"https://hibp.test/range/{PASSWORD_PREFIX}"
    assert req.headers["Add-Padding"] == "true"
    assert PASSWORD_SUFFIX not in str(req.url)
    assert b"password" not in req.content


def test_match_found():
    body = "\r\n".join(
        [
            "0018A45C4D1DEF81644B54AB7F969B88D65:1",
            f"{PASSWORD_SUFFIX.lower()}:3861493",
            "00D4F6E8FA6EECAD2A3AA415EEC418D38EC:2",
        ]
    )
    client = _client(lambda request: httpx.Response(200, text=body))
    assert client.is_compromised("password") is True


def test_padding_entries_are_ignored():
    body = f"{PASSWORD_SUFFIX}:0\r\n0018A45C4D1DEF81644B54AB7F969B88D65:0"
    client = _client(lambda request: httpx.Response(200, text=body))
    assert client.is_compromised("password") is False


def test_http_error_status_raises():
    client = _client(lambda request: httpx.Response(503, text="unavailable"))
    with pytest.raises(BreachServiceError, match="503"):
        client.is_compromised("password")


def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BreachServiceError):
        _client(handler).is_compromised("password")


def test_malformed_body_raises():
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(BreachServiceError):
        client.is_compromised("password")


def test_parse_range_body_skips_blank_lines():
    assert parse_range_body("ABC:2\n\n  \nDEF:1\n") == {"ABC", "DEF"}
