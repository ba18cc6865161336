from __future__ import annotations

from typing import Callable, Sequence

from zxcvbn import zxcvbn

# zxcvbn runtime grows quickly with length; longer input adds nothing to the score.
MAX_LENGTH = 72

StrengthScorer = Callable[[str, Sequence[str]], int]


def zxcvbn_score(password: str, user_inputs: Sequence[str] = ()) -> int:
    """Return the zxcvbn score (0..4) of ``password``.

    ``user_inputs`` are penalized as known tokens (username, current password).
    """
    inputs = [x for x in user_inputs if x]
    report = zxcvbn(password[:MAX_LENGTH], user_inputs=inputs, max_length=MAX_LENGTH)
    return int(report["score"])
