"""Tracks the mutable state of a run in progress."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from wordchains.models.categories import (
    CATEGORIES,
    MAIN,
    MAX_LIVES,
    OWNERS,
    START_LIVES,
    Category,
    PowerKey,
)
from wordchains.models.stats import RunStats

# Gaps longer than this between accepted words are treated as idle time.
MAX_WORD_GAP_MS = 10 * 60 * 1000


@dataclass
class ChainState:
    length: int = 0
    multiplier: float = 1.0
    frozen: bool = False

    def grow(self, step: float) -> None:
        self.length += 1
        self.multiplier = max(1.0, round(self.multiplier + step, 6))
        self.frozen = False

    def reset(self) -> None:
        self.length = 0
        self.multiplier = 1.0
        self.frozen = False

    def copy(self) -> ChainState:
        return ChainState(self.length, self.multiplier, self.frozen)


@dataclass(frozen=True)
class WordEvent:
    """Everything the mission and power-up engines need about one accepted word."""

    word: str
    categories: frozenset[Category]
    points: int
    chains: Mapping[Category, ChainState]
    same_letter: bool
    same_letter_multiplier: float
    total_score: int

    def in_category(self, category: Category) -> bool:
        return category in self.categories


class RunState:
    """Holds every piece of per-run state: words, score, chains, missions, powers."""

    def __init__(self, starter: str | None = None) -> None:
        # -- words ------------------------------------------------------------
        self.last_word: str | None = starter
        self.used_words: set[str] = set()
        self.recent: list[str] = []

        # -- score & resources ------------------------------------------------
        self.score: int = 0
        self.links: float = 0.0
        self.lives: int = START_LIVES

        # -- multipliers ------------------------------------------------------
        self.chains: dict[Category, ChainState] = {c: ChainState() for c in CATEGORIES}
        self.previous_categories: frozenset[Category] = frozenset()
        self.same_letter_multiplier: float = 1.0

        # -- missions ---------------------------------------------------------
        self.mission_index: dict[str, int] = {owner: 0 for owner in OWNERS}
        self.mission_progress: dict[str, float] = {}
        self.completed_mission_ids: set[str] = set()
        self.completed_tracks: set[str] = set()
        self.unlock_order: list[str] = [MAIN]

        # -- power-ups --------------------------------------------------------
        self.unique_seen: dict[PowerKey, set[str]] = {k: set() for k in PowerKey}
        self.power_charges: dict[PowerKey, int] = {k: 0 for k in PowerKey}
        self.power_buckets: dict[PowerKey, int] = {k: 0 for k in PowerKey}
        self.next_word_bonus: float = 0.0
        self.surge_active: bool = False
        self.freeze_until_answer: bool = False
        self.active_montages: int = 0

        # -- analytics --------------------------------------------------------
        self.stats = RunStats()
        self.word_gaps_ms: list[float] = []
        self._last_accept_at: float | None = None
        self.peak_multiplier: float = 1.0
        self.current_chain: int = 0
        self.longest_chain: int = 0

    # -- missions -------------------------------------------------------------

    @property
    def unlocked(self) -> frozenset[str]:
        return frozenset(self.unlock_order)

    def is_unlocked(self, owner: str) -> bool:
        return owner in self.unlock_order

    # -- lives & links --------------------------------------------------------

    def add_life(self) -> None:
        self.lives = min(MAX_LIVES, self.lives + 1)

    def remove_life(self) -> None:
        self.lives = max(0, self.lives - 1)

    def earn_links(self, amount: float) -> None:
        self.links += amount
        self.stats.links_earned += amount

    def spend_links(self, amount: float) -> None:
        self.links = max(0.0, self.links - amount)
        self.stats.links_spent += amount

    # -- analytics ------------------------------------------------------------

    def record_accept_time(self, now: float) -> None:
        """Note the monotonic time (seconds) of an accepted word."""
        if self._last_accept_at is not None:
            gap_ms = (now - self._last_accept_at) * 1000
            if 0 < gap_ms < MAX_WORD_GAP_MS:
                self.word_gaps_ms.append(gap_ms)
        self._last_accept_at = now

    def extend_chain(self) -> None:
        self.current_chain += 1
        self.longest_chain = max(self.longest_chain, self.current_chain)

    def break_chain(self) -> None:
        self.current_chain = 0

    def record_peak(self, effective: float) -> None:
        self.peak_multiplier = max(self.peak_multiplier, effective)

    @property
    def average_word_ms(self) -> float | None:
        if not self.word_gaps_ms:
            return None
        return sum(self.word_gaps_ms) / len(self.word_gaps_ms)
