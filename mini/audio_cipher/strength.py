from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .config import MIN_PASSPHRASE_SCORE
from .errors import InputError


class StrengthLevel(Enum):
    TOO_SHORT = "Too Short"
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class PassphraseStrength:
    level: StrengthLevel
    score: int

    @property
    def allowed(self) -> bool:
        """Whether encryption may proceed with this passphrase."""
        return self.score >= MIN_PASSPHRASE_SCORE


_CHECKS = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^A-Za-z0-9]"),
)


def score(passphrase: str) -> PassphraseStrength:
    """Heuristic strength score; a gate for the UI, not a security guarantee."""
    if len(passphrase) < 6:
        return PassphraseStrength(StrengthLevel.TOO_SHORT, 0)
    points = 1
    if len(passphrase) >= 12:
        points += 1
    points += sum(1 for pattern in _CHECKS if pattern.search(passphrase))
    if points < 2:
        level = StrengthLevel.WEAK
    elif points < 5:
        level = StrengthLevel.MEDIUM
    else:
        level = StrengthLevel.STRONG
    return PassphraseStrength(level, points)


def require_passphrase(passphrase: str | None, *, check_strength: bool = True) -> PassphraseStrength:
    """Reject a missing passphrase and, for encryption, a weak one."""
    if not passphrase:
        raise InputError("Secret key is required")
    strength = score(passphrase)
    if check_strength and not strength.allowed:
        raise InputError("Password is too weak. Please use a stronger password.")
    return strength
