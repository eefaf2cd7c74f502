import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///statistics.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Scoreboard rotation: ticks between mined/placed flips (100 ticks ~ 5s at 20Hz)
    STATS_SWITCH_INTERVAL_TICKS = int(os.environ.get('STATS_SWITCH_INTERVAL_TICKS', '100'))
    STATS_TICK_RATE_HZ = int(os.environ.get('STATS_TICK_RATE_HZ', '20'))
    # Disable when the game host drives ticks through /api/stats/tick
    STATS_TICKER_ENABLED = os.environ.get('STATS_TICKER_ENABLED', '1').lower() in ('1', 'true', 'yes', 'on')
    # Optional: heartbeat interval for ticker logs (sec). 0 disables.
    TICKER_HEARTBEAT_SEC = int(os.environ.get('TICKER_HEARTBEAT_SEC', '0'))
    # Permission level the host must report for `stats set`
    ADMIN_PERMISSION_LEVEL = int(os.environ.get('ADMIN_PERMISSION_LEVEL', '2'))
    STATS_CREDITS = os.environ.get('STATS_CREDITS') or 'Credits: https://github.com/ProjectPersistence'
    CORS_ORIGINS = [
        o.strip() for o in (os.environ.get('CORS_ORIGINS') or 'http://localhost:5173,http://127.0.0.1:5173').split(',')
        if o.strip()
    ]
