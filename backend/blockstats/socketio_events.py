from flask_socketio import join_room, leave_room, emit
from flask import current_app
from blockstats.models import EventKind
from blockstats.scoreboard import SCOREBOARD_ROOM


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_watch_scoreboard(data=None):
    join_room(SCOREBOARD_ROOM)
    tracker = current_app.extensions['blockstats']
    emit('watching', {'room': SCOREBOARD_ROOM, **tracker.display.to_dict(), 'objective': tracker.projector.objective})


def handle_unwatch_scoreboard(data=None):
    leave_room(SCOREBOARD_ROOM)
    emit('left', {'room': SCOREBOARD_ROOM})


def handle_block_event(data):
    player_id = (data or {}).get('player_id')
    kind = (data or {}).get('kind')
    if not player_id or not kind:
        emit('error', {'message': 'player_id and kind are required'})
        return
    try:
        kind = EventKind(str(kind).lower())
    except ValueError:
        emit('error', {'message': f'Unknown event kind: {kind}'})
        return
    if kind is EventKind.BLOCK_PLACED and (data or {}).get('is_block_item', True) is False:
        return
    counters = current_app.extensions['blockstats'].record(player_id, kind)
    emit('recorded', {'player_id': player_id, **counters.to_dict()})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    from blockstats import socketio

    handlers = {
        'connect': handle_connect,
        'watch_scoreboard': handle_watch_scoreboard,
        'unwatch_scoreboard': handle_unwatch_scoreboard,
        'block_event': handle_block_event,
        'ping': handle_ping,
    }
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for event, handler in handlers.items():
            socketio.on_event(event, handler, namespace=namespace)
