"""Registration password policy: four character-class requirements plus a zxcvbn strength score."""

from __future__ import annotations

import re
from dataclasses import dataclass

from zxcvbn import zxcvbn

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'
_SPECIAL_RE = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")

MIN_LENGTH = 8
MIN_STRENGTH_SCORE = 3


@dataclass(frozen=True)
class Requirement:
    text: str
    met: bool


@dataclass(frozen=True)
class PasswordReport:
    requirements: list[Requirement]
    score: int
    min_score: int

    @property
    def requirements_met(self) -> bool:
        return all(r.met for r in self.requirements)

    @property
    def can_submit(self) -> bool:
        return self.requirements_met and self.score >= self.min_score


def password_requirements(password: str, min_length: int = MIN_LENGTH) -> list[Requirement]:
    return [
        Requirement(f"At least {min_length} characters", len(password) >= min_length),
        Requirement("Contains numbers", bool(re.search(r"\d", password))),
        Requirement("Contains uppercase letters", bool(re.search(r"[A-Z]", password))),
        Requirement("Contains special characters", bool(_SPECIAL_RE.search(password))),
    ]


def password_strength(password: str) -> int:
    """zxcvbn score from 0 (weakest) to 4."""
    if not password:
        return 0
    return int(zxcvbn(password)["score"])


def evaluate_password(
    password: str,
    min_length: int = MIN_LENGTH,
    min_score: int = MIN_STRENGTH_SCORE,
) -> PasswordReport:
    return PasswordReport(
        requirements=password_requirements(password, min_length),
        score=password_strength(password),
        min_score=min_score,
    )
