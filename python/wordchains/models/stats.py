"""Per-run counters, the run summary payload, and all-time stats persistence."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class RunStats:
    """Counters accumulated while a run is in progress."""

    total_words: int = 0
    animals: int = 0
    countries: int = 0
    names: int = 0
    same_letter_words: int = 0
    longest_animal_streak: int = 0
    longest_country_streak: int = 0
    longest_name_streak: int = 0
    highest_word_score: int = 0
    switches: int = 0
    links_earned: float = 0.0
    links_spent: float = 0.0


@dataclass(frozen=True)
class RunSummary:
    best_score: int
    longest_chain: int
    highest_multiplier: float
    total_words: int
    unique_words: int
    animals: int
    countries: int
    names: int
    same_letter_words: int
    switches: int
    links_earned: float
    links_spent: float
    average_word_ms: float | None = None

    def to_payload(self) -> dict[str, int]:
        """JSON body for the leaderboard sink; every field is an integer."""
        return {
            "bestScore": int(self.best_score),
            "longestChain": int(self.longest_chain),
            "highestMultiplier": max(1, round_half_up(self.highest_multiplier)),
            "totalWords": int(self.total_words),
            "uniqueWords": int(self.unique_words),
            "animals": int(self.animals),
            "countries": int(self.countries),
            "names": int(self.names),
            "sameLetterWords": int(self.same_letter_words),
            "switches": int(self.switches),
            "linksEarned": round_half_up(self.links_earned),
            "linksSpent": round_half_up(self.links_spent),
        }


# Counters that add up across runs, and records that keep the best value.
_SUM_FIELDS: dict[str, str] = {
    "totalWords": "total_words",
    "animals": "animals",
    "countries": "countries",
    "names": "names",
    "sameLetterWords": "same_letter_words",
    "switches": "switches",
    "linksEarned": "links_earned",
    "linksSpent": "links_spent",
}
_STAT_RECORDS: dict[str, str] = {
    "highestWordScore": "highest_word_score",
    "longestAnimalStreak": "longest_animal_streak",
    "longestCountryStreak": "longest_country_streak",
    "longestNameStreak": "longest_name_streak",
}


def _num(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value if math.isfinite(value) else 0


@dataclass
class AllTimeStats:
    totals: dict[str, float] = field(default_factory=dict)
    records: dict[str, float] = field(default_factory=dict)
    sessions: int = 0
    session_speeds: list[float] = field(default_factory=list)
    peak_multipliers: list[float] = field(default_factory=list)


class StatsStore:
    """Loads, merges, and saves all-time stats from a JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self.stats = AllTimeStats()
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text())
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable stats file %s: %s", self.filepath, exc)
            return
        if not isinstance(data, dict):
            logger.warning("ignoring stats file %s: not a JSON object", self.filepath)
            return
        self.stats = AllTimeStats(
            totals={k: _num(v) for k, v in self._field(data, "totals", dict).items()},
            records={k: _num(v) for k, v in self._field(data, "records", dict).items()},
            sessions=int(_num(data.get("sessions"))),
            session_speeds=[_num(v) for v in self._field(data, "sessionSpeeds", list)],
            peak_multipliers=[_num(v) for v in self._field(data, "peakMultipliers", list)],
        )

    def _field(self, data: dict, key: str, kind: type) -> dict | list:
        """Return ``data[key]`` if it is a *kind*, else an empty one."""
        value = data.get(key)
        if value is None:
            return kind()
        if not isinstance(value, kind):
            logger.warning(
                "ignoring %r in stats file %s: expected %s", key, self.filepath, kind.__name__
            )
            return kind()
        return value

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        s = self.stats
        data = {
            "totals": s.totals,
            "records": s.records,
            "sessions": s.sessions,
            "sessionSpeeds": s.session_speeds,
            "peakMultipliers": s.peak_multipliers,
        }
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- merging --------------------------------------------------------------

    def record_run(self, stats: RunStats, summary: RunSummary) -> AllTimeStats:
        """Fold one finished run into the all-time totals and save."""
        s = self.stats
        run = asdict(stats)
        for key, attr in _SUM_FIELDS.items():
            s.totals[key] = _num(s.totals.get(key)) + run[attr]

        records = {key: run[attr] for key, attr in _STAT_RECORDS.items()}
        records["bestScore"] = summary.best_score
        records["longestChain"] = summary.longest_chain
        records["highestMultiplier"] = round(summary.highest_multiplier, 2)
        records["uniqueWords"] = summary.unique_words
        for key, value in records.items():
            s.records[key] = max(_num(s.records.get(key)), value)

        s.sessions += 1
        if summary.average_word_ms is not None and summary.average_word_ms > 0:
            s.session_speeds.append(round(summary.average_word_ms, 1))
        s.peak_multipliers.append(round(summary.highest_multiplier, 2))
        self.save()
        return s
