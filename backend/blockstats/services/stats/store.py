"""Durable per-player counters.

Every write is a single ``INSERT ... ON CONFLICT DO UPDATE`` statement so
concurrent increments on one player never lose updates, whatever thread the
caller runs on. Failures surface as ``StorageOperationError``; deciding how to
degrade is left to the caller.
"""

import logging
from uuid import UUID

from sqlalchemy import inspect, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from blockstats.errors import StorageInitError, StorageOperationError
from blockstats.models import PlayerCounters, PlayerStats, StatField, ZERO


# Binding failures the driver raises without SQLAlchemy wrapping them
_DRIVER_ERRORS = (SQLAlchemyError, OverflowError, ValueError, TypeError)

_UPSERT_DIALECTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


def player_key(player_id) -> str:
    if isinstance(player_id, UUID):
        return str(player_id)
    key = str(player_id or '').strip()
    if not key:
        raise ValueError('player_id is required')
    return key


class CounterStore:
    def __init__(self, session, logger=None):
        self.session = session
        self.logger = logger or logging.getLogger(__name__)
        self._insert = None

    @property
    def ready(self) -> bool:
        return self._insert is not None

    def init_schema(self) -> None:
        """Create ``player_stats`` if missing and pick the upsert dialect."""
        try:
            bind = self.session.get_bind()
            dialect = bind.dialect.name
            if dialect not in _UPSERT_DIALECTS:
                raise StorageInitError(f"Unsupported database dialect for atomic upserts: {dialect}")
            PlayerStats.__table__.create(bind=bind, checkfirst=True)
            if not inspect(bind).has_table(PlayerStats.__tablename__):
                raise StorageInitError('player_stats table missing after create')
        except SQLAlchemyError as exc:
            raise StorageInitError(f"Could not open counter store: {exc}") from exc
        self._insert = _UPSERT_DIALECTS[dialect]
        self.logger.info(f"[stats-store] ready dialect={dialect}")

    def increment(self, player_id, field) -> None:
        """Add 1 to ``field``; a missing row is created with that field at 1."""
        field = StatField.parse(field)
        key = player_key(player_id)
        values = {'id': key, 'mined': 0, 'placed': 0}
        values[field.value] = 1
        column = PlayerStats.__table__.c[field.value]
        stmt = self._insert_stmt('increment', key).values(**values).on_conflict_do_update(
            index_elements=[PlayerStats.__table__.c.id],
            set_={field.value: column + 1},
        )
        self._write('increment', key, stmt)

    def set(self, player_id, field, value: int) -> None:
        """Overwrite ``field`` with ``value``; the other counter is left alone.

        ``value`` is not validated here, callers reject negatives first.
        """
        field = StatField.parse(field)
        key = player_key(player_id)
        values = {'id': key, 'mined': 0, 'placed': 0}
        values[field.value] = int(value)
        stmt = self._insert_stmt('set', key).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[PlayerStats.__table__.c.id],
            set_={field.value: stmt.excluded[field.value]},
        )
        self._write('set', key, stmt)

    def get(self, player_id) -> PlayerCounters:
        """Return counters for ``player_id``; ``(0, 0)`` when never written."""
        key = player_key(player_id)
        if not self.ready:
            raise StorageOperationError('get', key, 'store not initialized')
        try:
            row = self.session.execute(
                select(PlayerStats.mined, PlayerStats.placed).where(PlayerStats.id == key)
            ).first()
            self.session.commit()
        except _DRIVER_ERRORS as exc:
            self.session.rollback()
            raise StorageOperationError('get', key, exc) from exc
        if row is None:
            return ZERO
        return PlayerCounters(mined=int(row.mined or 0), placed=int(row.placed or 0))

    def _insert_stmt(self, operation, key):
        if not self.ready:
            raise StorageOperationError(operation, key, 'store not initialized')
        return self._insert(PlayerStats.__table__)

    def _write(self, operation, key, stmt) -> None:
        try:
            self.session.execute(stmt)
            self.session.commit()
        except _DRIVER_ERRORS as exc:
            self.session.rollback()
            raise StorageOperationError(operation, key, exc) from exc
