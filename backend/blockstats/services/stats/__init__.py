"""Block statistics services: counter store, cache, scoreboard projector.

This package contains the counter core that should be imported by HTTP
routes and socket handlers, keeping transport concerns separated from the
counting and display logic.
"""

from .store import CounterStore, player_key
from .cache import StatsCache
from .projector import DisplayState, Projector, ProjectorState
from .tracker import StatsTracker
