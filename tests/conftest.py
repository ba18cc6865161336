"""Shared pytest fixtures and fakes for pwportal tests."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from pwportal.errors import BreachServiceError
from pwportal.ldap import DirectoryClient, DirectoryConfig
from pwportal.policy import InputValidator
from pwportal.services import PasswordChangeService

FAKE_CA_PEM = "-----BEGIN CERTIFICATE-----\nMIIBfake\n-----END CERTIFICATE-----"


class FakeBreachChecker:
    """Stands in for PwnedPasswordsClient."""

    def __init__(self, compromised: set[str] | None = None, error: Exception | None = None) -> None:
        self.compromised = compromised or set()
        self.error = error
        self.calls: list[str] = []

    def is_compromised(self, password: str) -> bool:
        self.calls.append(password)
        if self.error is not None:
            raise self.error
        return password in self.compromised


class FakeConnection:
    """Minimal ldap3.Connection double with the calls DirectoryClient makes."""

    def __init__(
        self,
        *,
        open_exc: Exception | None = None,
        bind_result: bool = True,
        bind_exc: Exception | None = None,
        modify_result: Any = True,
        modify_exc: Exception | None = None,
        unbind_exc: Exception | None = None,
        result: dict | None = None,
    ) -> None:
        self.open_exc = open_exc
        self.bind_result = bind_result
        self.bind_exc = bind_exc
        self.modify_result = modify_result
        self.modify_exc = modify_exc
        self.unbind_exc = unbind_exc
        self.result = result or {}
        self.user: str | None = None
        self.password: str | None = None
        self.opened = False
        self.bound = False
        self.unbind_calls = 0
        self.modify_calls: list[dict] = []
        self.extend = SimpleNamespace(standard=SimpleNamespace(modify_password=self._modify_password))

    def open(self) -> None:
        if self.open_exc is not None:
            raise self.open_exc
        self.opened = True

    def bind(self) -> bool:
        if self.bind_exc is not None:
            raise self.bind_exc
        self.bound = self.bind_result
        return self.bind_result

    def _modify_password(self, user=None, old_password=None, new_password=None, **kwargs):
        self.modify_calls.append({"user": user, "old_password": old_password, "new_password": new_password})
        if self.modify_exc is not None:
            raise self.modify_exc
        return self.modify_result

    def unbind(self) -> bool:
        self.unbind_calls += 1
        if self.unbind_exc is not None:
            raise self.unbind_exc
        return True


def strong_scorer(password, user_inputs) -> int:
    return 4


def failing_scorer(password, user_inputs) -> int:
    raise AssertionError("strength estimator must not be called")


@pytest.fixture
def directory_config() -> DirectoryConfig:
    return DirectoryConfig(
        host="ldap.test",
        port=636,
        server_name="ank.chnet",
        ca_pem=FAKE_CA_PEM,
        timeout_s=2.0,
    )


@pytest.fixture
def directory(directory_config: DirectoryConfig) -> DirectoryClient:
    return DirectoryClient(directory_config)


@pytest.fixture
def fake_conn(directory: DirectoryClient, monkeypatch) -> FakeConnection:
    """A successful connection wired into the ``directory`` fixture."""
    conn = FakeConnection()
    _wire(directory, conn, monkeypatch)
    return conn


def _wire(directory: DirectoryClient, conn: FakeConnection, monkeypatch) -> None:
    def factory(user: str, password: str) -> FakeConnection:
        conn.user = user
        conn.password = password
        return conn

    monkeypatch.setattr(directory, "_connection", factory)


@pytest.fixture
def wire_connection(directory: DirectoryClient, monkeypatch):
    """Return a helper that installs a given FakeConnection into ``directory``."""

    def install(conn: FakeConnection) -> FakeConnection:
        _wire(directory, conn, monkeypatch)
        return conn

    return install


@pytest.fixture
def breach_checker() -> FakeBreachChecker:
    return FakeBreachChecker()


@pytest.fixture
def unreachable_breach_checker() -> FakeBreachChecker:
    return FakeBreachChecker(error=BreachServiceError("connection refused"))


@pytest.fixture
def service(directory: DirectoryClient, breach_checker: FakeBreachChecker) -> PasswordChangeService:
    """Service with a strength estimator that always scores 4."""
    validator = InputValidator(scorer=strong_scorer, breach_checker=breach_checker)
    return PasswordChangeService(validator, directory)
