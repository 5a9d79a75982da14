"""Chain-continuity and word-membership checks for a submitted word."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from enum import StrEnum

from wordchains.models.lexicon import INPUT_RE, Lexicon


class RejectReason(StrEnum):
    EMPTY = "empty"
    BAD_SHAPE = "bad_shape"
    ALREADY_USED = "already_used"
    WRONG_START = "wrong_start"
    MISSING_LETTER = "missing_letter"
    NOT_A_WORD = "not_a_word"


# Rejections that cost the player a life.
LIFE_COSTING = frozenset(
    {
        RejectReason.BAD_SHAPE,
        RejectReason.WRONG_START,
        RejectReason.MISSING_LETTER,
        RejectReason.NOT_A_WORD,
    }
)


@dataclass(frozen=True)
class ValidationResult:
    accepted: bool
    reason: RejectReason | None = None
    message: str = ""

    @property
    def costs_life(self) -> bool:
        return self.reason in LIFE_COSTING

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectReason, message: str) -> ValidationResult:
        return cls(accepted=False, reason=reason, message=message)


class WordValidator:
    """Applies the chain rules in order and reports the first failure."""

    def __init__(self, lexicon: Lexicon, strict: bool = True) -> None:
        self.lexicon = lexicon
        self.strict = strict

    def validate(
        self,
        candidate: str,
        last_word: str | None,
        used_words: Collection[str] = (),
    ) -> ValidationResult:
        """Check *candidate* against *last_word* (``None`` means no previous word)."""
        word = candidate.strip()
        if not word:
            return ValidationResult.reject(RejectReason.EMPTY, "")

        if not INPUT_RE.match(word):
            return ValidationResult.reject(
                RejectReason.BAD_SHAPE,
                "Invalid: Use letters, spaces, apostrophes, hyphens, '&' or '.' only.",
            )

        lw = word.lower()
        if lw in used_words:
            return ValidationResult.reject(RejectReason.ALREADY_USED, "Already used.")

        if last_word:
            need_first = last_word[-1].lower()
            if lw[0] != need_first:
                return ValidationResult.reject(
                    RejectReason.WRONG_START, f"Invalid: Must start with “{need_first}”."
                )
            need_inside = last_word[0].lower()
            if need_inside not in lw:
                return ValidationResult.reject(
                    RejectReason.MISSING_LETTER, f"Invalid: Must include “{need_inside}”."
                )

        if self.strict and not self.lexicon.is_known(word):
            return ValidationResult.reject(RejectReason.NOT_A_WORD, "Invalid: Not an official word.")

        return ValidationResult.ok()
