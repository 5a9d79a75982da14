"""Unique-word charging and the effect of each power-up."""

from __future__ import annotations

import pytest

from wordchains.engine.gamestate.clock import RunClock
from wordchains.engine.gamestate.state import ChainState, RunState, WordEvent
from wordchains.engine.powerups.powerups import PowerUpEngine
from wordchains.models.categories import CATEGORIES, MAX_LIVES, MONTAGE_SECONDS, Category, PowerKey

_LETTERS = "abcdefghijklmnopqrstuvwxyz"


def _unique_words(n: int) -> list[str]:
    return [f"beast{_LETTERS[i // 26]}{_LETTERS[i % 26]}" for i in range(n)]


@pytest.fixture
def powers() -> PowerUpEngine:
    return PowerUpEngine()


@pytest.fixture
def clock() -> RunClock:
    c = RunClock()
    c.start()
    return c


# -- charging -----------------------------------------------------------------


def test_ten_unique_animals_grant_one_charge(powers: PowerUpEngine) -> None:
    state = RunState()
    words = _unique_words(20)

    granted = [powers.credit(state, PowerKey.ANIMAL, w) for w in words[:10]]
    assert granted[:9] == [None] * 9
    assert granted[9] is not None and granted[9].count == 1
    assert state.power_charges[PowerKey.ANIMAL] == 1
    assert state.links == pytest.approx(0.5)

    for w in words[10:19]:
        assert powers.credit(state, PowerKey.ANIMAL, w) is None
    assert state.power_charges[PowerKey.ANIMAL] == 1

    assert powers.credit(state, PowerKey.ANIMAL, words[19]) is not None
    assert state.power_charges[PowerKey.ANIMAL] == 2
    assert state.links == pytest.approx(1.0)
    assert state.stats.links_earned == pytest.approx(1.0)


def test_repeats_and_variants_do_not_count(powers: PowerUpEngine) -> None:
    state = RunState()
    for w in ("Cat", "cat", "CAT", "c-a-t"):
        powers.credit(state, PowerKey.ANIMAL, w)
    assert len(state.unique_seen[PowerKey.ANIMAL]) == 1


def test_food_and_brand_charge_after_five(powers: PowerUpEngine) -> None:
    state = RunState()
    for w in _unique_words(5):
        powers.credit(state, PowerKey.FOOD, w)
    assert state.power_charges[PowerKey.FOOD] == 1


def test_progress_shows_full_bucket(powers: PowerUpEngine) -> None:
    state = RunState()
    assert powers.progress(state, PowerKey.ANIMAL) == (0, 10)
    words = _unique_words(11)
    for w in words[:10]:
        powers.credit(state, PowerKey.ANIMAL, w)
    assert powers.progress(state, PowerKey.ANIMAL) == (10, 10)
    powers.credit(state, PowerKey.ANIMAL, words[10])
    assert powers.progress(state, PowerKey.ANIMAL) == (1, 10)


def test_observe_credits_every_category_and_same_letter(powers: PowerUpEngine) -> None:
    state = RunState()
    event = WordEvent(
        word="jaguaj",
        categories=frozenset({Category.ANIMAL, Category.BRAND}),
        points=0,
        chains={c: ChainState() for c in CATEGORIES},
        same_letter=True,
        same_letter_multiplier=1.2,
        total_score=0,
    )
    powers.observe(state, event)
    for key in (PowerKey.ANIMAL, PowerKey.BRAND, PowerKey.SAME):
        assert state.unique_seen[key] == {"jaguaj"}
    assert state.unique_seen[PowerKey.COUNTRY] == set()


# -- spending -----------------------------------------------------------------


def test_use_without_charge(powers: PowerUpEngine, clock: RunClock) -> None:
    state = RunState()
    assert powers.use(state, PowerKey.COUNTRY, clock) is None


def _charged(key: PowerKey) -> RunState:
    state = RunState()
    state.power_charges[key] = 1
    return state


def test_nuke_clears_used_words(powers: PowerUpEngine, clock: RunClock) -> None:
    state = _charged(PowerKey.COUNTRY)
    state.used_words.update({"tiger", "rabbit"})
    assert powers.use(state, PowerKey.COUNTRY, clock)
    assert state.used_words == set()
    assert state.power_charges[PowerKey.COUNTRY] == 0


def test_freeze_pauses_until_answer(powers: PowerUpEngine, clock: RunClock) -> None:
    state = _charged(PowerKey.NAME)
    powers.use(state, PowerKey.NAME, clock)
    assert state.freeze_until_answer
    assert clock.paused


def test_surge(powers: PowerUpEngine, clock: RunClock) -> None:
    state = _charged(PowerKey.ANIMAL)
    powers.use(state, PowerKey.ANIMAL, clock)
    assert state.surge_active


def test_extra_life_is_capped(powers: PowerUpEngine, clock: RunClock) -> None:
    state = RunState()
    state.power_charges[PowerKey.FOOD] = 3
    for _ in range(3):
        powers.use(state, PowerKey.FOOD, clock)
    assert state.lives == MAX_LIVES


def test_next_word_bonuses_stack(powers: PowerUpEngine, clock: RunClock) -> None:
    state = RunState()
    state.power_charges[PowerKey.BRAND] = 1
    state.power_charges[PowerKey.SAME] = 1
    powers.use(state, PowerKey.BRAND, clock)
    powers.use(state, PowerKey.SAME, clock)
    assert state.next_word_bonus == pytest.approx(60.0)


def test_montage_resumes_after_fifteen_ticks(powers: PowerUpEngine, clock: RunClock) -> None:
    state = _charged(PowerKey.SCREEN)
    powers.use(state, PowerKey.SCREEN, clock)
    assert clock.paused
    for _ in range(MONTAGE_SECONDS - 1):
        clock.tick()
    assert clock.paused
    assert clock.remaining == 30
    clock.tick()
    assert not clock.paused


def test_montage_keeps_an_active_freeze(powers: PowerUpEngine, clock: RunClock) -> None:
    state = RunState()
    state.power_charges[PowerKey.NAME] = 1
    state.power_charges[PowerKey.SCREEN] = 1
    powers.use(state, PowerKey.NAME, clock)
    powers.use(state, PowerKey.SCREEN, clock)
    for _ in range(MONTAGE_SECONDS + 2):
        clock.tick()
    assert clock.paused


def test_back_to_back_montages_each_last_full_length(
    powers: PowerUpEngine, clock: RunClock
) -> None:
    state = RunState()
    state.power_charges[PowerKey.SCREEN] = 2
    powers.use(state, PowerKey.SCREEN, clock)
    for _ in range(10):
        clock.tick()
    powers.use(state, PowerKey.SCREEN, clock)

    # the first montage ends at t=15, the second must hold until t=25
    for _ in range(MONTAGE_SECONDS - 1):
        clock.tick()
    assert clock.paused
    assert clock.remaining == 30
    assert state.active_montages == 1

    clock.tick()
    assert not clock.paused
    assert state.active_montages == 0
