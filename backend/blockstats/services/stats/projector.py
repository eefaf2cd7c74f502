"""Tick-driven rotation of the below-name scoreboard between mined and placed."""

import enum
import logging
from dataclasses import dataclass

from blockstats.models import StatField


DEFAULT_SWITCH_INTERVAL = 100  # ticks, 5s at 20 ticks/sec


class ProjectorState(enum.Enum):
    SHOWING_MINED = StatField.MINED
    SHOWING_PLACED = StatField.PLACED

    @property
    def metric(self) -> StatField:
        return self.value

    @property
    def objective(self) -> str:
        return f"stats_{self.value.value}"

    @property
    def label(self) -> str:
        return f"Blocks {self.value.value.capitalize()}"

    def flipped(self) -> 'ProjectorState':
        if self is ProjectorState.SHOWING_MINED:
            return ProjectorState.SHOWING_PLACED
        return ProjectorState.SHOWING_MINED


@dataclass
class DisplayState:
    state: ProjectorState = ProjectorState.SHOWING_MINED
    tick_count: int = 0

    @property
    def metric(self) -> StatField:
        return self.state.metric

    def to_dict(self):
        return {
            'state': self.state.name,
            'metric': self.metric.value,
            'tick_count': self.tick_count,
        }


class Projector:
    def __init__(self, cache, sink, roster, interval=DEFAULT_SWITCH_INTERVAL, logger=None):
        if int(interval) < 1:
            raise ValueError('interval must be at least one tick')
        self.cache = cache
        self.sink = sink
        self.roster = roster
        self.interval = int(interval)
        self.display = DisplayState()
        self.logger = logger or logging.getLogger(__name__)
        self._objective = None

    @property
    def objective(self):
        """Name of the objective currently on the sink, if any."""
        return self._objective

    def tick(self) -> bool:
        """Advance one tick; returns True when the display flipped."""
        self.display.tick_count += 1
        if self.display.tick_count < self.interval:
            return False
        self.display.tick_count = 0
        self.display.state = self.display.state.flipped()
        self.rebuild()
        return True

    def rebuild(self) -> None:
        """Replace the objective with the active metric and push every online player."""
        state = self.display.state
        if self._objective is not None:
            self.sink.remove_objective(self._objective)
            self._objective = None
        self.sink.replace_objective(state.objective, state.label)
        self._objective = state.objective
        pushed = 0
        for player_id in self.roster.online_ids():
            self._push(player_id)
            pushed += 1
        self.logger.debug(f"[scoreboard-rotate] objective={state.objective} players={pushed}")

    def push_one(self, player_id: str) -> None:
        """Show the active metric for one player without waiting for a rotation."""
        if self._objective is None:
            state = self.display.state
            self.sink.replace_objective(state.objective, state.label)
            self._objective = state.objective
        self._push(player_id)

    def _push(self, player_id):
        counters = self.cache.lookup(player_id)
        self.sink.set_score(player_id, self._objective, counters.value_of(self.display.metric))
