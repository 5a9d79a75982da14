"""Mission progress, rewards, track completion and category unlocking."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from wordchains.engine.gamestate.state import RunState, WordEvent
from wordchains.models.categories import CATEGORIES, MAIN, Category
from wordchains.models.mission import Mission, MissionKind, build_tracks

logger = logging.getLogger(__name__)


@dataclass
class MissionReport:
    """Outcome of one reward pass."""

    finished: list[Mission] = field(default_factory=list)
    links: float = 0.0
    completed_tracks: list[str] = field(default_factory=list)
    unlocked: Category | None = None


class MissionEngine:
    """Advances the active mission of every unlocked owner.

    Only the mission at ``state.mission_index[owner]`` receives progress.
    Rewards are paid at most once per mission id.
    """

    def __init__(
        self,
        tracks: Mapping[str, list[Mission]] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.tracks: dict[str, list[Mission]] = dict(tracks or build_tracks())
        self.rng = rng or random.Random()

    # -- queries --------------------------------------------------------------

    def active_missions(self, state: RunState) -> list[Mission]:
        out: list[Mission] = []
        for owner in state.unlock_order:
            track = self.tracks.get(owner, [])
            idx = state.mission_index.get(owner, 0)
            if idx < len(track):
                out.append(track[idx])
        return out

    def progress(self, state: RunState, mission: Mission) -> float:
        return state.mission_progress.get(mission.id, 0.0)

    def locked_categories(self, state: RunState) -> list[Category]:
        return [c for c in CATEGORIES if not state.is_unlocked(c)]

    # -- progress -------------------------------------------------------------

    def observe(self, state: RunState, event: WordEvent) -> None:
        """Update the progress of every active mission for one accepted word."""
        for mission in self.active_missions(state):
            cur = state.mission_progress.get(mission.id, 0.0)
            state.mission_progress[mission.id] = self._advance(mission, cur, event)

    @staticmethod
    def _advance(mission: Mission, cur: float, event: WordEvent) -> float:
        kind = mission.kind
        target = mission.target

        if kind is MissionKind.SEQUENCE:
            seq = mission.sequence
            idx = int(cur)
            if idx < len(seq) and event.in_category(seq[idx]):
                return float(idx + 1)
            return 1.0 if seq and event.in_category(seq[0]) else 0.0

        if kind is MissionKind.REACH_SAME_LETTER:
            return min(target, event.same_letter_multiplier)
        if kind is MissionKind.TOTAL_SCORE:
            return min(target, cur + event.points)

        category = Category(mission.owner)
        in_cat = event.in_category(category)
        if kind is MissionKind.ENTER_CHAIN:
            return min(target, cur + 1) if in_cat else cur
        if kind is MissionKind.COMBO:
            return min(target, cur + 1) if in_cat else 0.0
        if kind is MissionKind.REACH_MULTIPLIER:
            return min(target, event.chains[category].multiplier)
        if kind is MissionKind.SCORE_WORD:
            return target if in_cat and event.points >= target else cur
        raise ValueError(f"Unknown mission kind {kind!r}.")

    # -- rewards --------------------------------------------------------------

    def finished_missions(self, state: RunState) -> list[Mission]:
        return [
            m
            for m in self.active_missions(state)
            if self.progress(state, m) >= m.goal and m.id not in state.completed_mission_ids
        ]

    def collect(self, state: RunState) -> MissionReport:
        """Pay out every just-finished active mission and apply unlock gating."""
        return self.grant(state, self.finished_missions(state))

    def grant(self, state: RunState, missions: Iterable[Mission]) -> MissionReport:
        """Reward *missions*, skipping any id that was already rewarded."""
        report = MissionReport()
        for mission in missions:
            if mission.id in state.completed_mission_ids:
                continue
            state.completed_mission_ids.add(mission.id)
            report.finished.append(mission)

            if mission.reward > 0:
                state.earn_links(mission.reward)
                report.links += mission.reward

            owner = mission.owner
            track_len = len(self.tracks[owner])
            state.mission_index[owner] = min(state.mission_index.get(owner, 0) + 1, track_len)
            if state.mission_index[owner] >= track_len and owner not in state.completed_tracks:
                state.completed_tracks.add(owner)
                report.completed_tracks.append(owner)
                logger.debug("track %s completed", owner)

        if report.finished:
            report.unlocked = self._gate_unlock(state, report.finished)
        return report

    # -- unlocking ------------------------------------------------------------

    def _gate_unlock(self, state: RunState, finished: list[Mission]) -> Category | None:
        if len(state.unlock_order) == 1:
            if any(m.owner == MAIN for m in finished):
                return self.unlock_random(state)
            return None

        newest = state.unlock_order[-1]
        if newest == MAIN:
            return None
        track = self.tracks.get(newest) or []
        if track and any(m.id == track[0].id for m in finished):
            return self.unlock_random(state)
        return None

    def unlock_random(self, state: RunState) -> Category | None:
        remaining = self.locked_categories(state)
        if not remaining:
            return None
        pick = self.rng.choice(remaining)
        state.unlock_order.append(pick)
        logger.debug("unlocked category %s", pick)
        return pick
