"""Category detection, multiplier chains, and per-word points."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from wordchains.engine.gamestate.state import ChainState, RunState
from wordchains.models.categories import (
    CHAIN_BASE,
    CHAIN_STEP_GROWTH,
    NORMAL_BASE,
    SAME_LETTER_GROWTH,
    SURGE_BONUS,
    SWITCH_LINK_COST,
    TRACK_COMPLETION_BONUS,
    Category,
)
from wordchains.models.lexicon import Lexicon
from wordchains.models.stats import round_half_up

# -- pure helpers -------------------------------------------------------------


def categorize(word: str, lexicon: Lexicon) -> set[Category]:
    """Return every category *word* belongs to (possibly none)."""
    return {cat for cat in Category if lexicon.matches(cat, word)}


def is_same_letter(word: str) -> bool:
    w = word.strip().lower()
    return bool(w) and w[0] == w[-1]


def category_base(categories: Iterable[Category]) -> float:
    return max((CHAIN_BASE[c] for c in categories), default=NORMAL_BASE)


def total_multiplier(
    chains: Mapping[Category, ChainState],
    same_letter_multiplier: float,
    completed_tracks: int,
) -> float:
    """``(max(1, Σ chain multipliers) + 10 × completed tracks) × same-letter``."""
    category_sum = sum(chain.multiplier for chain in chains.values())
    base_plus_missions = max(1.0, category_sum) + TRACK_COMPLETION_BONUS * completed_tracks
    return base_plus_missions * same_letter_multiplier


def effective_multiplier(total: float, surge_active: bool, next_word_bonus: float) -> float:
    return total + (SURGE_BONUS if surge_active else 0.0) + next_word_bonus


def word_points(word: str, categories: Iterable[Category], effective: float) -> int:
    return round_half_up(len(word) * category_base(categories) * effective)


# -- chain updates ------------------------------------------------------------


@dataclass
class ChainUpdate:
    """What happened to the multiplier tracks for one accepted word."""

    entered: frozenset[Category]
    leaving: frozenset[Category] = frozenset()
    frozen: bool = False
    surge_cancelled: bool = False
    same_letter: bool = False
    reset: set[Category] = field(default_factory=set)

    @property
    def switched(self) -> bool:
        return bool(self.leaving)


class ScoringEngine:
    """Applies an accepted word to the chains and same-letter multiplier."""

    def __init__(self, lexicon: Lexicon) -> None:
        self.lexicon = lexicon

    def categorize(self, word: str) -> set[Category]:
        return categorize(word, self.lexicon)

    def total_multiplier(self, state: RunState) -> float:
        return total_multiplier(
            state.chains, state.same_letter_multiplier, len(state.completed_tracks)
        )

    def effective_multiplier(self, state: RunState) -> float:
        return effective_multiplier(
            self.total_multiplier(state), state.surge_active, state.next_word_bonus
        )

    def apply(self, state: RunState, word: str, categories: Iterable[Category]) -> ChainUpdate:
        entered = frozenset(categories)
        update = ChainUpdate(entered=entered, same_letter=is_same_letter(word))

        if update.same_letter:
            state.same_letter_multiplier = round(state.same_letter_multiplier + SAME_LETTER_GROWTH, 6)
            state.stats.same_letter_words += 1
        else:
            state.same_letter_multiplier = 1.0

        for cat in entered:
            state.chains[cat].grow(CHAIN_STEP_GROWTH)

        self._switch(state, update)
        state.previous_categories = entered
        return update

    def _switch(self, state: RunState, update: ChainUpdate) -> None:
        """Leaving a category either spends a LINK to freeze it or resets it."""
        leaving = state.previous_categories - update.entered
        update.leaving = leaving
        if not leaving:
            return

        if state.links >= SWITCH_LINK_COST:
            state.spend_links(SWITCH_LINK_COST)
            for cat in leaving:
                state.chains[cat].frozen = True
            update.frozen = True
        else:
            for cat in leaving:
                state.chains[cat].reset()
            update.reset = set(leaving)
            if state.surge_active:
                state.surge_active = False
                update.surge_cancelled = True
        state.stats.switches += 1
