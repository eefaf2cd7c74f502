import time
from typing import Optional

from blockstats import socketio


_running_apps = set()


def tracker_for(app):
    return app.extensions['blockstats']


def start_ticker(app) -> bool:
    """Start the background tick loop driving the scoreboard rotation.

    - No-ops in TESTING mode and when STATS_TICKER_ENABLED is off
    - Ensures a single loop per app
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_TICKER_IN_TESTS'):
        return False
    if not app.config.get('STATS_TICKER_ENABLED', True):
        app.logger.info('[ticker-skip] disabled; host drives ticks through /api/stats/tick')
        return False
    if id(app) in _running_apps:
        app.logger.info('[ticker-skip] already running')
        return False
    _running_apps.add(id(app))
    hz = max(1, int(app.config.get('STATS_TICK_RATE_HZ', 20)))
    app.logger.info(f"[ticker-start] rate={hz}Hz interval={tracker_for(app).projector.interval} ticks")
    socketio.start_background_task(run_ticker, app)
    return True


def run_ticker(app, max_ticks: Optional[int] = None) -> int:
    """Tick at STATS_TICK_RATE_HZ until ``max_ticks`` (forever when None)."""
    hz = max(1, int(app.config.get('STATS_TICK_RATE_HZ', 20)))
    period = 1.0 / hz
    try:
        hb = int(app.config.get('TICKER_HEARTBEAT_SEC', 0))
    except Exception:
        hb = 0
    ticks = 0
    last_beat = time.monotonic()
    try:
        while max_ticks is None or ticks < max_ticks:
            started = time.monotonic()
            with app.app_context():
                try:
                    tracker_for(app).tick()
                except Exception:
                    # The game loop must never see a scoreboard failure
                    app.logger.exception('[ticker-error] tick failed')
            ticks += 1
            if hb > 0 and started - last_beat >= hb:
                last_beat = started
                display = tracker_for(app).display
                app.logger.info(
                    f"[ticker-heartbeat] ticks={ticks} state={display.state.name} tick_count={display.tick_count}"
                )
            socketio.sleep(max(0.0, period - (time.monotonic() - started)))
    finally:
        _running_apps.discard(id(app))
    return ticks
