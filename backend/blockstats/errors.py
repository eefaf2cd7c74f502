"""Error types raised across the stats core."""


class StatsError(Exception):
    """Base class for block statistics errors."""


class StorageInitError(StatsError):
    """The durable store could not be opened or its schema created."""


class StorageOperationError(StatsError):
    """A single read or write against the store failed."""

    def __init__(self, operation, player_id, cause=None):
        self.operation = operation
        self.player_id = player_id
        self.cause = cause
        super().__init__(f"{operation} failed for player {player_id}: {cause}")


class PlayerLookupError(StatsError, LookupError):
    """Target player is unknown or not online."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Player not found: {name}")


class ValidationError(StatsError, ValueError):
    """Rejected command input, e.g. a negative counter value."""
