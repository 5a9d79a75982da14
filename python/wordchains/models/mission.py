"""Mission definitions and the fixed track each owner plays through."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from wordchains.models.categories import LABELS, MAIN, OWNERS, Category


class MissionKind(StrEnum):
    # category-owned
    ENTER_CHAIN = "enter_chain"
    COMBO = "combo"
    REACH_MULTIPLIER = "reach_multiplier"
    SCORE_WORD = "score_word"
    # main-owned
    REACH_SAME_LETTER = "reach_same_letter"
    TOTAL_SCORE = "total_score"
    SEQUENCE = "sequence"


MISSION_REWARD = 1.0


@dataclass(frozen=True)
class Mission:
    id: str
    owner: str
    kind: MissionKind
    target: float = 0.0
    reward: float = MISSION_REWARD
    sequence: tuple[Category, ...] = ()

    @property
    def goal(self) -> float:
        """Progress value at which the mission counts as finished."""
        if self.kind is MissionKind.SEQUENCE:
            return float(len(self.sequence))
        return self.target

    def describe(self) -> str:
        label = LABELS[self.owner]
        t = self.target
        if self.kind is MissionKind.ENTER_CHAIN:
            plural = "s" if t > 1 else ""
            return f"Get {t:g} {label.lower()} word{plural}"
        if self.kind is MissionKind.COMBO:
            return f"Chain {t:g} consecutive {label} words"
        if self.kind is MissionKind.REACH_MULTIPLIER:
            return f"Reach {label} multiplier of x{t:.2f}"
        if self.kind is MissionKind.SCORE_WORD:
            return f"Score {t:g} with a {label} word"
        if self.kind is MissionKind.REACH_SAME_LETTER:
            return f"Reach Same-Letter multiplier of x{t:.2f}"
        if self.kind is MissionKind.TOTAL_SCORE:
            return f"Reach a total score of {t:g}"
        steps = " -> ".join(LABELS[c] for c in self.sequence)
        return f"Sequence: {steps}"


# -- track builders -----------------------------------------------------------


def build_category_track(category: Category) -> list[Mission]:
    steps: list[tuple[MissionKind, float]] = [
        (MissionKind.ENTER_CHAIN, 1),
        (MissionKind.COMBO, 2),
        (MissionKind.REACH_MULTIPLIER, 2.0),
        (MissionKind.SCORE_WORD, 500),
        (MissionKind.COMBO, 3),
        (MissionKind.REACH_MULTIPLIER, 4.0),
        (MissionKind.SCORE_WORD, 2000),
    ]
    return [
        Mission(id=f"{category}-{i}", owner=category, kind=kind, target=target)
        for i, (kind, target) in enumerate(steps, 1)
    ]


def build_main_track() -> list[Mission]:
    return [
        Mission(id="main-1", owner=MAIN, kind=MissionKind.TOTAL_SCORE, target=250),
        Mission(id="main-2", owner=MAIN, kind=MissionKind.TOTAL_SCORE, target=1000),
        Mission(id="main-3", owner=MAIN, kind=MissionKind.REACH_SAME_LETTER, target=1.5),
        Mission(id="main-4", owner=MAIN, kind=MissionKind.REACH_SAME_LETTER, target=3.0),
        Mission(id="main-5", owner=MAIN, kind=MissionKind.TOTAL_SCORE, target=5000),
        Mission(
            id="main-6",
            owner=MAIN,
            kind=MissionKind.SEQUENCE,
            sequence=(Category.ANIMAL, Category.COUNTRY, Category.FOOD),
        ),
        Mission(id="main-7", owner=MAIN, kind=MissionKind.TOTAL_SCORE, target=10000),
    ]


def build_tracks() -> dict[str, list[Mission]]:
    """Return the full mission tree, one track per owner."""
    tracks: dict[str, list[Mission]] = {}
    for owner in OWNERS:
        if owner == MAIN:
            tracks[owner] = build_main_track()
        else:
            tracks[owner] = build_category_track(Category(owner))
    return tracks
