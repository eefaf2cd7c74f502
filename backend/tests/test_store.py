import threading
import uuid

import pytest

import conftest
from blockstats import create_app, db
from blockstats.models import PlayerCounters, PlayerStats, StatField


def test_unknown_player_reads_zero_without_creating_row(store):
    assert store.get('player-b') == PlayerCounters(0, 0)
    assert PlayerStats.query.count() == 0


def test_increment_mined_three_times(store):
    for _ in range(3):
        store.increment('player-a', StatField.MINED)
    assert store.get('player-a') == PlayerCounters(mined=3, placed=0)


def test_first_increment_creates_row_at_one(store):
    store.increment('player-a', 'placed')
    row = db.session.get(PlayerStats, 'player-a')
    assert (row.mined, row.placed) == (0, 1)


def test_increment_leaves_other_field_untouched(store):
    store.set('player-a', StatField.PLACED, 7)
    store.increment('player-a', StatField.MINED)
    store.increment('player-a', StatField.MINED)
    assert store.get('player-a') == PlayerCounters(mined=2, placed=7)


def test_set_overwrites_only_named_field(store):
    for _ in range(3):
        store.increment('player-a', StatField.MINED)
    store.set('player-a', StatField.PLACED, 10)
    assert store.get('player-a') == PlayerCounters(mined=3, placed=10)

    store.set('player-a', StatField.MINED, 50)
    assert store.get('player-a') == PlayerCounters(mined=50, placed=10)


def test_set_on_absent_player_defaults_other_field(store):
    store.set('player-c', 'Mined', 42)
    assert store.get('player-c') == PlayerCounters(mined=42, placed=0)


def test_uuid_and_string_ids_share_a_row(store):
    pid = uuid.uuid4()
    store.increment(pid, StatField.MINED)
    assert store.get(str(pid)).mined == 1
    assert PlayerStats.query.count() == 1


def test_unknown_field_is_rejected(store):
    with pytest.raises(ValueError):
        store.increment('player-a', 'broken')


class FileDbConfig(conftest.TestConfig):
    SQLALCHEMY_ENGINE_OPTIONS = {'connect_args': {'check_same_thread': False, 'timeout': 30}}


def test_concurrent_increments_lose_no_updates(tmp_path):
    FileDbConfig.SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'stats.db'}"
    app = create_app(FileDbConfig)
    store = app.extensions['blockstats'].store
    threads_n, per_thread = 4, 25
    errors = []

    def worker():
        try:
            with app.app_context():
                for _ in range(per_thread):
                    store.increment('player-a', StatField.MINED)
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(threads_n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    with app.app_context():
        assert store.get('player-a') == PlayerCounters(mined=threads_n * per_thread, placed=0)
        db.session.remove()
        db.engine.dispose()


def test_driver_binding_errors_surface_as_storage_errors(store):
    from blockstats.errors import StorageOperationError
    with pytest.raises(StorageOperationError):
        store.set('player-a', StatField.MINED, 10 ** 20)
    # Session was rolled back and stays usable
    store.increment('player-a', StatField.MINED)
    assert store.get('player-a') == PlayerCounters(mined=1, placed=0)
