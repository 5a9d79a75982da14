"""Run summary payload and the all-time stats store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wordchains.models.stats import RunStats, RunSummary, StatsStore, round_half_up


def _summary(**overrides) -> RunSummary:
    values = dict(
        best_score=300,
        longest_chain=3,
        highest_multiplier=6.6,
        total_words=3,
        unique_words=3,
        animals=2,
        countries=0,
        names=0,
        same_letter_words=1,
        switches=1,
        links_earned=1.5,
        links_spent=1.0,
        average_word_ms=1500.0,
    )
    values.update(overrides)
    return RunSummary(**values)


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.49, 1), (2.5, 3), (0.0, 0)])
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


def test_payload_fields_are_integers() -> None:
    payload = _summary().to_payload()
    assert set(payload) == {
        "bestScore", "longestChain", "highestMultiplier", "totalWords", "uniqueWords",
        "animals", "countries", "names", "sameLetterWords", "switches",
        "linksEarned", "linksSpent",
    }
    assert all(isinstance(v, int) for v in payload.values())
    assert payload["highestMultiplier"] == 7
    assert payload["linksEarned"] == 2
    assert payload["linksSpent"] == 1


def test_payload_multiplier_is_at_least_one() -> None:
    assert _summary(highest_multiplier=0.2).to_payload()["highestMultiplier"] == 1


def test_record_run_sums_and_keeps_records(tmp_path: Path) -> None:
    path = tmp_path / "stats.json"
    store = StatsStore(path)

    store.record_run(RunStats(total_words=3, animals=2, highest_word_score=120), _summary())
    store.record_run(
        RunStats(total_words=5, animals=1, highest_word_score=80),
        _summary(best_score=200, longest_chain=5, average_word_ms=None),
    )

    st = StatsStore(path).stats
    assert st.sessions == 2
    assert st.totals["totalWords"] == 8
    assert st.totals["animals"] == 3
    assert st.records["bestScore"] == 300
    assert st.records["longestChain"] == 5
    assert st.records["highestWordScore"] == 120
    assert st.session_speeds == [1500.0]
    assert st.peak_multipliers == [6.6, 6.6]


def test_unreadable_file_starts_fresh(tmp_path: Path) -> None:
    path = tmp_path / "stats.json"
    path.write_text("not json")
    store = StatsStore(path)
    assert store.stats.sessions == 0

    store.record_run(RunStats(total_words=1), _summary())
    assert json.loads(path.read_text())["sessions"] == 1


@pytest.mark.parametrize(
    "data",
    [
        {"totals": [1, 2], "sessions": 3},
        {"records": "x", "sessions": 3},
        {"sessionSpeeds": {"a": 1}, "peakMultipliers": 7, "sessions": 3},
        [1, 2, 3],
    ],
)
def test_wrongly_shaped_file_is_tolerated(tmp_path: Path, data: object) -> None:
    path = tmp_path / "stats.json"
    path.write_text(json.dumps(data))

    store = StatsStore(path)

    st = store.stats
    assert st.sessions == (3 if isinstance(data, dict) else 0)
    assert isinstance(st.totals, dict)
    assert isinstance(st.records, dict)
    assert st.session_speeds == []
    assert st.peak_multipliers == []

    store.record_run(RunStats(total_words=2), _summary())
    assert store.stats.totals["totalWords"] == 2
