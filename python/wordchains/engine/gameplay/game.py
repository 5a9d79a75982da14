"""Core gameplay logic: runs the word pipeline, the clock, and the run lifecycle."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

from wordchains.engine.gamestate.clock import RunClock
from wordchains.engine.gamestate.state import RunState, WordEvent
from wordchains.engine.missions.missions import MissionEngine, MissionReport
from wordchains.engine.powerups.powerups import Charge, PowerUpEngine
from wordchains.engine.scoring.scoring import ScoringEngine, word_points
from wordchains.engine.submission.sink import SubmitResult
from wordchains.engine.validator.validator import RejectReason, WordValidator
from wordchains.models.categories import LABELS, RECENT_WORDS, SURGE_BONUS, Category, PowerKey
from wordchains.models.lexicon import Lexicon
from wordchains.models.mission import Mission
from wordchains.models.stats import AllTimeStats, RunSummary, StatsStore

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    ENDED = "ended"


class RunSink(Protocol):
    def submit(self, summary: RunSummary) -> SubmitResult: ...


@dataclass
class TurnResult:
    """Outcome of a submission or a clock tick, ready to show to the player."""

    accepted: bool
    message: str = ""
    points: int = 0
    reason: RejectReason | None = None
    life_lost: bool = False
    ended: bool = False
    event: WordEvent | None = None
    missions: MissionReport | None = None
    charges: list[Charge] = field(default_factory=list)


@dataclass
class RunReport:
    reason: str
    summary: RunSummary
    all_time: AllTimeStats | None = None
    submission: SubmitResult | None = None

    @property
    def saved_globally(self) -> bool:
        return self.submission is not None and self.submission.ok


class GameEngine:
    """Orchestrates a single player's runs.

    One instance owns the lexicon-backed sub-engines and the current
    :class:`RunState`.  All entry points (:meth:`submit`, :meth:`tick`,
    :meth:`use_power`) are synchronous and must not be called concurrently.
    """

    def __init__(
        self,
        lexicon: Lexicon,
        *,
        strict: bool = True,
        sink: RunSink | None = None,
        store: StatsStore | None = None,
        rng: random.Random | None = None,
        now: Callable[[], float] = time.monotonic,
        tracks: Mapping[str, list[Mission]] | None = None,
    ) -> None:
        self.lexicon = lexicon
        self.rng = rng or random.Random()
        self.validator = WordValidator(lexicon, strict=strict)
        self.scoring = ScoringEngine(lexicon)
        self.missions = MissionEngine(tracks, rng=self.rng)
        self.powerups = PowerUpEngine()
        self.clock = RunClock()
        self.sink = sink
        self.store = store
        self._now = now

        self.state = RunState()
        self.phase = Phase.NOT_STARTED
        self.report: RunReport | None = None

    # -- configuration --------------------------------------------------------

    @property
    def strict(self) -> bool:
        return self.validator.strict

    @strict.setter
    def strict(self, value: bool) -> None:
        self.validator.strict = value

    # -- lifecycle ------------------------------------------------------------

    def start(self) -> RunState:
        """Discard any previous run and begin a fresh one."""
        self.clock.cancel_all()
        self.state = RunState(starter=self.lexicon.starter_word(self.rng))
        self.phase = Phase.RUNNING
        self.report = None
        self.clock.start()
        logger.info("run started with %r", self.state.last_word)
        return self.state

    def end(self, reason: str = "Run ended.") -> RunReport:
        """Stop the run, persist all-time stats, and submit the summary.

        Calling it again after the run ended returns the same report.
        """
        if self.phase is Phase.ENDED and self.report is not None:
            return self.report

        self.phase = Phase.ENDED
        self.clock.stop()
        summary = self.summary()
        report = RunReport(reason=reason, summary=summary)

        if self.store is not None:
            try:
                report.all_time = self.store.record_run(self.state.stats, summary)
            except OSError as exc:
                logger.warning("could not save all-time stats: %s", exc)

        if self.sink is not None:
            report.submission = self.sink.submit(summary)

        self.report = report
        logger.info("run ended (%s): score=%d", reason, summary.best_score)
        return report

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.ENDED

    @property
    def is_paused(self) -> bool:
        return self.is_running and self.clock.paused

    @property
    def time_remaining(self) -> int:
        return self.clock.remaining

    # -- multipliers ----------------------------------------------------------

    @property
    def total_multiplier(self) -> float:
        return self.scoring.total_multiplier(self.state)

    @property
    def effective_multiplier(self) -> float:
        return self.scoring.effective_multiplier(self.state)

    def active_missions(self) -> list[Mission]:
        return self.missions.active_missions(self.state)

    def categorize(self, word: str) -> set[Category]:
        return self.scoring.categorize(word)

    # -- events ---------------------------------------------------------------

    def tick(self) -> TurnResult | None:
        """Advance the clock by one second; an expiry costs one life."""
        if not self.is_running:
            return None
        if self.clock.tick():
            return self.lose_life("Time's up!")
        return None

    def submit(self, text: str) -> TurnResult:
        """Process one submitted entry through the full word pipeline."""
        if not self.is_running:
            return TurnResult(accepted=False, message="Start a run to play.")

        raw = text.strip()
        if raw.startswith("?"):
            probe = raw[1:].strip()
            cats = ", ".join(sorted(self.categorize(probe))) or "none"
            return TurnResult(accepted=False, message=f"Debug: {probe} -> {cats}")

        result = self.validator.validate(raw, self.state.last_word, self.state.used_words)
        if not result.accepted:
            if result.costs_life:
                turn = self.lose_life(result.message)
                turn.reason = result.reason
                return turn
            return TurnResult(accepted=False, message=result.message, reason=result.reason)

        return self._accept(raw)

    def use_power(self, key: PowerKey | str) -> str | None:
        """Spend one charge of *key*.  Returns the effect message, or None."""
        if not self.is_running:
            return None
        try:
            key = PowerKey(key)
        except ValueError:
            return None
        message = self.powerups.use(self.state, key, self.clock)
        if message is not None:
            self.state.record_peak(self.effective_multiplier)
        return message

    def lose_life(self, reason: str) -> TurnResult:
        if not self.is_running:
            return TurnResult(accepted=False, message=reason, ended=self.is_over)
        s = self.state
        s.remove_life()
        s.break_chain()
        s.surge_active = False

        if s.lives <= 0:
            self.end(reason)
            return TurnResult(
                accepted=False,
                message=f"Game over: {reason}",
                life_lost=True,
                ended=True,
            )

        self.clock.reset()
        return TurnResult(accepted=False, message=f"{reason} (-1 life)", life_lost=True)

    # -- acceptance -----------------------------------------------------------

    def _accept(self, word: str) -> TurnResult:
        s = self.state

        if s.freeze_until_answer:
            s.freeze_until_answer = False
            if s.active_montages == 0:
                self.clock.resume()

        s.record_accept_time(self._now())
        s.extend_chain()

        categories = self.scoring.categorize(word)
        bonus = s.next_word_bonus
        surge = s.surge_active
        effective = self.scoring.effective_multiplier(s)
        s.record_peak(effective)
        points = word_points(word, categories, effective)

        update = self.scoring.apply(s, word, categories)
        s.score += points
        s.next_word_bonus = 0.0
        self._record_stats(points, categories)

        s.used_words.add(word.lower())
        s.recent.insert(0, word)
        del s.recent[RECENT_WORDS:]
        s.last_word = word
        self.clock.reset()

        event = WordEvent(
            word=word,
            categories=frozenset(categories),
            points=points,
            chains={c: chain.copy() for c, chain in s.chains.items()},
            same_letter=update.same_letter,
            same_letter_multiplier=s.same_letter_multiplier,
            total_score=s.score,
        )
        charges = self.powerups.observe(s, event)
        self.missions.observe(s, event)
        report = self.missions.collect(s)
        s.record_peak(self.effective_multiplier)

        parts = [f"+{points} points (total x{effective:.2f}"]
        if bonus > 0:
            parts.append(f" · +{bonus:g}x next-word")
        if surge:
            parts.append(f" · +{SURGE_BONUS:g}x surge")
        parts.append(")")
        messages = ["".join(parts)]
        for charge in charges:
            messages.append(f"Powerup charged: {LABELS[charge.key]} (+{charge.links:g} LINK)")
        if report.links > 0:
            plural = "" if report.links == 1 else "s"
            messages.append(f"Mission complete! +{report.links:.1f} LINK{plural}")
        if report.unlocked is not None:
            messages.append(f"New category unlocked: {LABELS[report.unlocked]}!")

        return TurnResult(
            accepted=True,
            message="  ".join(messages),
            points=points,
            event=event,
            missions=report,
            charges=charges,
        )

    def _record_stats(self, points: int, categories: set[Category]) -> None:
        s = self.state
        st = s.stats
        st.total_words += 1
        st.highest_word_score = max(st.highest_word_score, points)
        if Category.ANIMAL in categories:
            st.animals += 1
            st.longest_animal_streak = max(
                st.longest_animal_streak, s.chains[Category.ANIMAL].length
            )
        if Category.COUNTRY in categories:
            st.countries += 1
            st.longest_country_streak = max(
                st.longest_country_streak, s.chains[Category.COUNTRY].length
            )
        if Category.NAME in categories:
            st.names += 1
            st.longest_name_streak = max(st.longest_name_streak, s.chains[Category.NAME].length)

    # -- summary --------------------------------------------------------------

    def summary(self) -> RunSummary:
        s = self.state
        st = s.stats
        return RunSummary(
            best_score=s.score,
            longest_chain=s.longest_chain,
            highest_multiplier=round(s.peak_multiplier, 2),
            total_words=st.total_words,
            unique_words=len(s.used_words),
            animals=st.animals,
            countries=st.countries,
            names=st.names,
            same_letter_words=st.same_letter_words,
            switches=st.switches,
            links_earned=st.links_earned,
            links_spent=st.links_spent,
            average_word_ms=s.average_word_ms,
        )
