from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config, sink=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from blockstats.routes import main
    flask_app.register_blueprint(main)

    from blockstats.api.stats import stats
    flask_app.register_blueprint(stats, url_prefix='/api/stats')

    from blockstats.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # One tracker per app, shared by routes, socket handlers and the ticker
    from blockstats.roster import PlayerRoster
    from blockstats.scoreboard import SocketIOScoreboard
    from blockstats.services.stats import CounterStore, StatsTracker

    tracker = StatsTracker(
        CounterStore(db.session, logger=flask_app.logger),
        sink if sink is not None else SocketIOScoreboard(),
        PlayerRoster(),
        interval=flask_app.config.get('STATS_SWITCH_INTERVAL_TICKS', 100),
        logger=flask_app.logger,
    )
    flask_app.extensions['blockstats'] = tracker
    with flask_app.app_context():
        if tracker.start():
            flask_app.logger.info('[stats-init] counter store initialized')

    from blockstats.services.stats.ticker import start_ticker
    start_ticker(flask_app)

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the statistics tables."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    @click.command('stats-show')
    @click.argument('player_id')
    def stats_show_command(player_id):
        """Prints stored counters for PLAYER_ID."""
        with flask_app.app_context():
            counters = tracker.stats_for(player_id)
            click.echo(f"{player_id}: mined={counters.mined} placed={counters.placed}")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(stats_show_command)

    return flask_app
