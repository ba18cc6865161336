from __future__ import annotations

import logging
import re
from typing import Callable

from ..errors import BreachServiceError, Field, Reason, ValidationError
from .models import PasswordChangeRequest, ValidationOutcome
from .strength import StrengthScorer, zxcvbn_score


log = logging.getLogger(__name__)

# Starts with a letter, then letters/digits/hyphen/underscore. Always matched
# with fullmatch: usernames reach the DN template only after passing it.
USERNAME_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9_-]+")


def is_valid_username(username: str) -> bool:
    return bool(USERNAME_RE.fullmatch(username or ""))


Rule = Callable[[PasswordChangeRequest], list[ValidationError]]


class InputValidator:
    """Fixed, ordered password policy.

    Violations come out in form order: username, current password, new
    password (required/length/weak/pwned), confirmation. The strength rule
    runs for any non-empty new password, even a short one; a weak password
    never reaches the breach lookup.
    """

    def __init__(
        self,
        *,
        min_length: int = 8,
        min_score: int = 3,
        scorer: StrengthScorer = zxcvbn_score,
        breach_checker=None,
    ) -> None:
        self.min_length = min_length
        self.min_score = min_score
        self.scorer = scorer
        self.breach_checker = breach_checker

        self._credential_rules: list[Rule] = [self._username, self._current_password]
        self._rules: list[Rule] = [
            self._username,
            self._current_password,
            self._new_password,
            self._confirmation,
        ]

    def validate(self, request: PasswordChangeRequest) -> ValidationOutcome:
        return self._run(self._rules, request)

    def validate_credentials_only(self, request: PasswordChangeRequest) -> ValidationOutcome:
        return self._run(self._credential_rules, request)

    @staticmethod
    def _run(rules: list[Rule], request: PasswordChangeRequest) -> ValidationOutcome:
        errors: list[ValidationError] = []
        for rule in rules:
            errors.extend(rule(request))
        return ValidationOutcome(errors=tuple(errors))

    # -- rules ---------------------------------------------------------------

    def _username(self, request: PasswordChangeRequest) -> list[ValidationError]:
        # An empty username is a format violation like any other non-matching value.
        if not is_valid_username(request.username):
            return [ValidationError(Field.USERNAME, Reason.FORMAT)]
        return []

    def _current_password(self, request: PasswordChangeRequest) -> list[ValidationError]:
        if not request.current_password:
            return [ValidationError(Field.CURRENT_PASSWORD, Reason.REQUIRED)]
        return []

    def _new_password(self, request: PasswordChangeRequest) -> list[ValidationError]:
        pw = request.new_password
        if not pw:
            return [ValidationError(Field.NEW_PASSWORD, Reason.REQUIRED)]
        errors: list[ValidationError] = []
        if len(pw) < self.min_length:
            errors.append(ValidationError(Field.NEW_PASSWORD, Reason.LENGTH))

        score = self.scorer(pw, [request.username, request.current_password])
        if score < self.min_score:
            errors.append(ValidationError(Field.NEW_PASSWORD, Reason.WEAK))
        elif self._is_pwned(pw):
            errors.append(ValidationError(Field.NEW_PASSWORD, Reason.PWNED))
        return errors

    def _confirmation(self, request: PasswordChangeRequest) -> list[ValidationError]:
        if request.new_password_confirm != request.new_password:
            return [ValidationError(Field.NEW_PASSWORD_CONFIRM, Reason.MISMATCH)]
        return []

    def _is_pwned(self, password: str) -> bool:
        if self.breach_checker is None:
            return False
        try:
            return bool(self.breach_checker.is_compromised(password))
        except BreachServiceError as e:
            # Fail open: an unreachable lookup service must not block password changes.
            log.warning("could not check hibp: %s", e)
            return False
