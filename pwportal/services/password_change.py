from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..errors import DirectoryError
from ..ldap import DirectoryClient
from ..policy import InputValidator, PasswordChangeRequest, ValidationOutcome, is_valid_username


log = logging.getLogger(__name__)


class ChangeState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ChangeOutcome:
    """Terminal state of one password change request."""
    state: ChangeState
    violations: ValidationOutcome = ValidationOutcome()
    directory_error: DirectoryError | None = None

    @property
    def ok(self) -> bool:
        return self.state is ChangeState.SUCCEEDED


class PasswordChangeService:
    def __init__(self, validator: InputValidator, directory: DirectoryClient) -> None:
        self.validator = validator
        self.directory = directory

    def change(self, request: PasswordChangeRequest) -> ChangeOutcome:
        """Validate the request and, only if it passes, change the password.

        A request with both new password fields empty is a credentials-only
        submission: just the username and current password rules apply, and
        the directory is then called with an empty new password.
        """
        state = ChangeState.VALIDATING
        log.debug("%s: %s", request.username, state.value)

        if request.is_credentials_only:
            outcome = self.validator.validate_credentials_only(request)
        else:
            outcome = self.validator.validate(request)

        if not outcome.ok:
            log.info(
                "password change rejected for %r: %s",
                request.username,
                ", ".join(f"{e.field.value}={e.reason.value}" for e in outcome),
            )
            return ChangeOutcome(state=ChangeState.REJECTED, violations=outcome)

        # The username passed the format rule above; re-check before it becomes a DN.
        if not is_valid_username(request.username):
            raise ValueError("username must be validated before building a DN")

        state = ChangeState.SUBMITTING
        log.debug("%s: %s", request.username, state.value)
        identity = self.directory.identity_for(request.username)
        result = self.directory.change_password(identity, request.current_password, request.new_password)

        if not result.ok:
            log.warning("password modify failure for %s: %s", request.username, result.error)
            return ChangeOutcome(state=ChangeState.FAILED, directory_error=result.error)

        log.info("password modify success for %s", request.username)
        return ChangeOutcome(state=ChangeState.SUCCEEDED)
