from __future__ import annotations

from ..errors import DirectoryError, Field, Reason
from ..policy import ValidationOutcome
from .password_change import ChangeOutcome, ChangeState


DIRECTORY_FAILURE_MESSAGE = "Password could not be modified, is the current password correct?"

_MESSAGES: dict[tuple[Field, Reason], str] = {
    (Field.USERNAME, Reason.FORMAT): "Username is invalid",
    (Field.CURRENT_PASSWORD, Reason.REQUIRED): "Current password is invalid",
    (Field.NEW_PASSWORD, Reason.REQUIRED): "New password is required",
    (Field.NEW_PASSWORD, Reason.LENGTH): "New password must be at least {min_length} characters",
    (Field.NEW_PASSWORD, Reason.WEAK): "New password is too weak",
    (Field.NEW_PASSWORD, Reason.PWNED): "New password is compromised according to 'Have I Been Pwned'",
    (Field.NEW_PASSWORD_CONFIRM, Reason.MISMATCH): "New passwords do not match",
}


def present_violations(outcome: ValidationOutcome, *, min_length: int = 8) -> list[str]:
    """One message per violation, in the order the validator produced them."""
    out: list[str] = []
    for err in outcome:
        msg = _MESSAGES.get((err.field, err.reason))
        if msg is None:
            raise KeyError(f"no message for {err.field.value}/{err.reason.value}")
        out.append(msg.format(min_length=min_length))
    return out


def present_directory_failure(error: DirectoryError | None = None) -> list[str]:
    # Same text for every failure kind.
    return [DIRECTORY_FAILURE_MESSAGE]


def present(outcome: ChangeOutcome, *, min_length: int = 8) -> list[str]:
    if outcome.state is ChangeState.REJECTED:
        return present_violations(outcome.violations, min_length=min_length)
    if outcome.state is ChangeState.FAILED:
        return present_directory_failure(outcome.directory_error)
    return []
