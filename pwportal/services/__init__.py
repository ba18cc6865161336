"""Application service layer.

Stable import surface for routers:
    from pwportal.services import ...
"""

from .password_change import ChangeOutcome, ChangeState, PasswordChangeService
from .presenter import DIRECTORY_FAILURE_MESSAGE, present, present_directory_failure, present_violations

__all__ = [
    "ChangeOutcome",
    "ChangeState",
    "PasswordChangeService",
    "DIRECTORY_FAILURE_MESSAGE",
    "present",
    "present_directory_failure",
    "present_violations",
]
