"""Password policy: request model, ordered validator, strength and breach checks."""

from .models import PasswordChangeRequest, ValidationOutcome
from .validator import InputValidator, is_valid_username
from .breach import PwnedPasswordsClient
from .strength import zxcvbn_score

__all__ = [
    "PasswordChangeRequest",
    "ValidationOutcome",
    "InputValidator",
    "is_valid_username",
    "PwnedPasswordsClient",
    "zxcvbn_score",
]
