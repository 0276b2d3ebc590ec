import re

from pydantic import BaseModel, Field

_CHECKS = (
    lambda p: len(p) >= 8,
    lambda p: re.search(r"[a-z]", p) is not None,
    lambda p: re.search(r"[A-Z]", p) is not None,
    lambda p: re.search(r"[0-9]", p) is not None,
    lambda p: re.search(r"[^a-zA-Z0-9]", p) is not None,
)


class StrengthResult(BaseModel):
    level: int = Field(default=0, ge=0, le=3, description="0 none, 1 weak, 2 medium, 3 strong")
    label: str = ""


def password_score(password: str) -> int:
    """Number of the five strength rules the password satisfies."""
    return sum(1 for check in _CHECKS if check(password))


def score_password(password: str) -> StrengthResult:
    """
    Classify a password:
      empty              -> 0 ""
      score <= 2         -> 1 "Weak"
      score in (3, 4)    -> 2 "Medium"
      score == 5         -> 3 "Strong"
    """
    if not password:
        return StrengthResult()

    score = password_score(password)
    if score <= 2:
        return StrengthResult(level=1, label="Weak")
    if score < 5:
        return StrengthResult(level=2, label="Medium")
    return StrengthResult(level=3, label="Strong")
