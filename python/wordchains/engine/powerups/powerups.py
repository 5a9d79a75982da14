"""Unique-word power-up charging and the effect of spending a charge."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from wordchains.engine.gamestate.clock import RunClock
from wordchains.engine.gamestate.state import RunState, WordEvent
from wordchains.models.categories import (
    MIRROR_BONUS,
    MONTAGE_SECONDS,
    POWER_LINK_REWARD,
    POWER_NAMES,
    POWER_THRESHOLDS,
    SPONSOR_BONUS,
    PowerKey,
)
from wordchains.models.lexicon import normalize

logger = logging.getLogger(__name__)

_USE_MESSAGES: dict[PowerKey, str] = {
    PowerKey.COUNTRY: "NUKE deployed: you may reuse any previous word.",
    PowerKey.NAME: "Timer frozen until your next valid word!",
    PowerKey.ANIMAL: "Wild Surge active: +20x until you lose your multiplier.",
    PowerKey.FOOD: "Extra Life gained! (Max 5)",
    PowerKey.BRAND: "Sponsor Boost armed: +50x on the next word!",
    PowerKey.SCREEN: f"Montage: timer frozen for {MONTAGE_SECONDS}s!",
    PowerKey.SAME: "Mirror Charm armed: +10x on the next word!",
}


@dataclass(frozen=True)
class Charge:
    key: PowerKey
    count: int
    links: float


class PowerUpEngine:
    """Turns unique-word discovery into charges and applies charge effects."""

    def __init__(self, thresholds: dict[PowerKey, int] | None = None) -> None:
        self.thresholds = dict(thresholds or POWER_THRESHOLDS)

    # -- charging -------------------------------------------------------------

    def observe(self, state: RunState, event: WordEvent) -> list[Charge]:
        """Credit the word to every power key it qualifies for."""
        keys = [PowerKey.for_category(c) for c in sorted(event.categories)]
        if event.same_letter:
            keys.append(PowerKey.SAME)
        charges: list[Charge] = []
        for key in keys:
            charge = self.credit(state, key, event.word)
            if charge is not None:
                charges.append(charge)
        return charges

    def credit(self, state: RunState, key: PowerKey, word: str) -> Charge | None:
        """Record *word* as seen for *key*; grant any newly completed buckets."""
        need = self.thresholds.get(key)
        if not need:
            return None

        seen = state.unique_seen[key]
        token = normalize(word)
        if token in seen:
            return None
        seen.add(token)

        buckets = len(seen) // need
        delta = buckets - state.power_buckets[key]
        if delta <= 0:
            return None

        state.power_buckets[key] = buckets
        state.power_charges[key] += delta
        links = POWER_LINK_REWARD * delta
        state.earn_links(links)
        logger.debug("power %s charged x%d", key, delta)
        return Charge(key=key, count=delta, links=links)

    def progress(self, state: RunState, key: PowerKey) -> tuple[int, int]:
        """Return ``(current, needed)``; a just-filled bucket shows as full."""
        need = self.thresholds.get(key) or 1
        seen = len(state.unique_seen[key])
        mod = seen % need
        cur = need if seen > 0 and mod == 0 else mod
        return cur, need

    # -- spending -------------------------------------------------------------

    def available(self, state: RunState, key: PowerKey) -> int:
        return state.power_charges.get(key, 0)

    def use(self, state: RunState, key: PowerKey, clock: RunClock) -> str | None:
        """Spend one charge of *key*.  Returns the effect message, or None."""
        if state.power_charges.get(key, 0) <= 0:
            return None
        state.power_charges[key] -= 1

        if key is PowerKey.COUNTRY:
            state.used_words.clear()
        elif key is PowerKey.NAME:
            state.freeze_until_answer = True
            clock.pause()
        elif key is PowerKey.ANIMAL:
            state.surge_active = True
        elif key is PowerKey.FOOD:
            state.add_life()
        elif key is PowerKey.BRAND:
            state.next_word_bonus += SPONSOR_BONUS
        elif key is PowerKey.SCREEN:
            state.active_montages += 1
            clock.pause()
            clock.call_later(MONTAGE_SECONDS, lambda: self._end_montage(state, clock))
        elif key is PowerKey.SAME:
            state.next_word_bonus += MIRROR_BONUS

        logger.debug("power %s (%s) used", key, POWER_NAMES[key])
        return _USE_MESSAGES[key]

    @staticmethod
    def _end_montage(state: RunState, clock: RunClock) -> None:
        # Overlapping montages keep the clock paused until the last one ends.
        state.active_montages = max(0, state.active_montages - 1)
        if state.active_montages == 0 and not state.freeze_until_answer:
            clock.resume()
