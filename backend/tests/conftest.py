import os
import sys
import pytest

# Ensure the backend root (containing the `blockstats` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from blockstats import create_app, db, socketio
from blockstats.scoreboard import ScoreboardSink


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STATS_SWITCH_INTERVAL_TICKS = 100
    STATS_TICK_RATE_HZ = 20
    STATS_TICKER_ENABLED = False
    TICKER_HEARTBEAT_SEC = 0
    ADMIN_PERMISSION_LEVEL = 2
    STATS_CREDITS = 'Credits: https://github.com/ProjectPersistence'
    CORS_ORIGINS = ['http://localhost:5173']


class RecordingScoreboard(ScoreboardSink):
    """Scoreboard sink that remembers every call, in order."""

    def __init__(self):
        self.calls = []

    def replace_objective(self, name, label):
        self.calls.append(('replace', name, label))

    def remove_objective(self, name):
        self.calls.append(('remove', name))

    def set_score(self, player_id, objective, value):
        self.calls.append(('score', player_id, objective, value))

    def scores(self, objective):
        latest = {}
        for call in self.calls:
            if call[0] == 'score' and call[2] == objective:
                latest[call[1]] = call[3]
        return latest

    def clear(self):
        self.calls = []


def _app_fixture(application):
    with application.app_context():
        # Ensure models are imported so tables are created
        import blockstats.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def flask_app():
    yield from _app_fixture(create_app(TestConfig))


@pytest.fixture()
def sink():
    return RecordingScoreboard()


@pytest.fixture()
def recorded_app(sink):
    yield from _app_fixture(create_app(TestConfig, sink=sink))


@pytest.fixture()
def tracker(recorded_app):
    return recorded_app.extensions['blockstats']


@pytest.fixture()
def store(flask_app):
    return flask_app.extensions['blockstats'].store


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def recorded_client(recorded_app):
    return recorded_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
