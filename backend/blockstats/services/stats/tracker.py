"""Stats tracker: the boundary between the game host and the counter core.

Storage errors stop here. Event recording and ticks never raise into the
host; a failed write is logged and dropped, a failed read yields zeroes.
"""

import logging
import threading

from blockstats.errors import StorageInitError, StorageOperationError
from blockstats.models import EventKind, PlayerCounters, StatField, ZERO
from blockstats.services.stats.store import player_key
from .cache import StatsCache
from .projector import DEFAULT_SWITCH_INTERVAL, Projector


class StatsTracker:
    def __init__(self, store, sink, roster, interval=DEFAULT_SWITCH_INTERVAL, logger=None):
        self.store = store
        self.roster = roster
        self.logger = logger or logging.getLogger(__name__)
        self.cache = StatsCache(self._load)
        self.projector = Projector(self.cache, sink, roster, interval=interval, logger=self.logger)
        # Request threads and the tick task share one logical update stream
        self._lock = threading.RLock()
        self.enabled = False

    def start(self) -> bool:
        """Open the store. On failure the tracker stays inert instead of raising."""
        try:
            self.store.init_schema()
        except StorageInitError as exc:
            self.logger.error(f"[stats-init] counter store unavailable, stats disabled: {exc}")
            self.enabled = False
            return False
        self.enabled = True
        return True

    @property
    def display(self):
        return self.projector.display

    def read(self, player_id) -> PlayerCounters:
        """Counters from storage, zeroed when disabled or on error."""
        try:
            return self._load(player_id)
        except StorageOperationError:
            return ZERO

    def _load(self, player_id) -> PlayerCounters:
        # Cache loader: logs and re-raises, the cache evicts on failure
        if not self.enabled:
            return ZERO
        try:
            return self.store.get(player_id)
        except StorageOperationError as exc:
            self.logger.error(f"[stats-store] {exc}")
            raise

    def record(self, player_id, kind) -> PlayerCounters:
        """Count one mined/placed block and refresh the cache entry."""
        field = EventKind(kind).field
        key = player_key(player_id)
        with self._lock:
            self._write('increment', key, field)
            return self.cache.refresh(key)

    def set_stat(self, player_id, field, value: int) -> PlayerCounters:
        """Overwrite one counter and push the new value to the scoreboard at once."""
        field = StatField.parse(field)
        key = player_key(player_id)
        with self._lock:
            self._write('set', key, field, value)
            counters = self.cache.refresh(key)
            self.projector.push_one(key)
            return counters

    def stats_for(self, player_id) -> PlayerCounters:
        return self.read(player_key(player_id))

    def lookup(self, player_id) -> PlayerCounters:
        with self._lock:
            return self.cache.lookup(player_key(player_id))

    def tick(self, count: int = 1) -> int:
        """Advance the projector ``count`` ticks; returns the number of flips."""
        flips = 0
        with self._lock:
            for _ in range(max(0, int(count))):
                if self.projector.tick():
                    flips += 1
        return flips

    def _write(self, operation, key, field, *args) -> None:
        if not self.enabled:
            return
        try:
            getattr(self.store, operation)(key, field, *args)
        except StorageOperationError as exc:
            self.logger.error(f"[stats-store] {exc}")
