from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping

from ..errors import Field, Reason, ValidationError


@dataclass(frozen=True)
class PasswordChangeRequest:
    username: str
    current_password: str = field(default="", repr=False)
    new_password: str = field(default="", repr=False)
    new_password_confirm: str = field(default="", repr=False)

    @classmethod
    def from_form(cls, form: Mapping) -> "PasswordChangeRequest":
        """Build a request from the submitted form fields.

        All values are taken exactly as submitted.
        """
        return cls(
            username=str(form.get("username") or ""),
            current_password=str(form.get("currentPassword") or ""),
            new_password=str(form.get("newPassword1") or ""),
            new_password_confirm=str(form.get("newPassword2") or ""),
        )

    @property
    def is_credentials_only(self) -> bool:
        """Only username and current password were submitted."""
        return not self.new_password and not self.new_password_confirm


@dataclass(frozen=True)
class ValidationOutcome:
    errors: tuple[ValidationError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def reasons(self, fld: Field) -> list[Reason]:
        return [e.reason for e in self.errors if e.field == fld]

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
