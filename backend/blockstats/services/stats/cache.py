from typing import Callable, Dict

from blockstats.errors import StorageOperationError
from blockstats.models import PlayerCounters, ZERO


class StatsCache:
    """Last-known counters per player, shadowing the counter store.

    Entries never expire; ``refresh`` is called after every write this
    process makes so a lookup never returns counts older than that write.
    A failed load evicts the entry and yields zeroes, so the next lookup
    goes back to storage.
    """

    def __init__(self, loader: Callable[[str], PlayerCounters]):
        self._loader = loader
        self._entries: Dict[str, PlayerCounters] = {}

    def refresh(self, player_id: str) -> PlayerCounters:
        try:
            counters = self._loader(player_id)
        except StorageOperationError:
            self._entries.pop(player_id, None)
            return ZERO
        self._entries[player_id] = counters
        return counters

    def lookup(self, player_id: str) -> PlayerCounters:
        counters = self._entries.get(player_id)
        if counters is None:
            counters = self.refresh(player_id)
        return counters

    def __contains__(self, player_id) -> bool:
        return player_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
