from flask import Blueprint, jsonify, request, current_app
from blockstats.commands import CommandSource, StatsCommand
from blockstats.models import EventKind


stats = Blueprint('stats', __name__)


def _tracker():
    return current_app.extensions['blockstats']


def _command():
    return StatsCommand(
        _tracker(),
        _tracker().roster,
        admin_level=current_app.config.get('ADMIN_PERMISSION_LEVEL', 2),
        credits=current_app.config.get('STATS_CREDITS'),
    )


@stats.route('/events', methods=['POST'])
def record_event():
    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id')
    kind = data.get('kind')
    if not all([player_id, kind]):
        return jsonify({'error': 'player_id and kind are required'}), 400
    try:
        kind = EventKind(str(kind).lower())
    except ValueError:
        return jsonify({'error': f'Unknown event kind: {kind}'}), 400
    # Placing only counts when the host reports a block item in hand
    if kind is EventKind.BLOCK_PLACED and data.get('is_block_item', True) is False:
        return jsonify({'counted': False, 'player_id': player_id}), 200
    counters = _tracker().record(player_id, kind)
    return jsonify({'counted': True, 'player_id': player_id, **counters.to_dict()}), 200


@stats.route('/players/join', methods=['POST'])
def player_join():
    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id')
    name = data.get('name')
    if not all([player_id, name]):
        return jsonify({'error': 'player_id and name are required'}), 400
    tracker = _tracker()
    tracker.roster.join(player_id, name)
    counters = tracker.lookup(player_id)
    current_app.logger.info(f"[roster-join] player={player_id} name={name}")
    return jsonify({'player_id': player_id, 'name': name, **counters.to_dict()}), 201


@stats.route('/players/leave', methods=['POST'])
def player_leave():
    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id')
    if not player_id:
        return jsonify({'error': 'player_id is required'}), 400
    if not _tracker().roster.leave(player_id):
        return jsonify({'error': 'Player not online'}), 404
    current_app.logger.info(f"[roster-leave] player={player_id}")
    return jsonify({'player_id': player_id}), 200


@stats.route('/players', methods=['GET'])
def list_players():
    return jsonify(_tracker().roster.to_list())


@stats.route('/players/<string:player_id>', methods=['GET'])
def player_stats(player_id):
    counters = _tracker().stats_for(player_id)
    return jsonify({'player_id': player_id, **counters.to_dict()})


@stats.route('/commands', methods=['POST'])
def run_command():
    data = request.get_json(silent=True) or {}
    line = data.get('command')
    if line is None:
        return jsonify({'error': 'command is required'}), 400
    source = CommandSource.from_dict(data.get('source'))
    result = _command().execute(source, line)
    return jsonify(result.to_dict()), 200


@stats.route('/tick', methods=['POST'])
def tick():
    data = request.get_json(silent=True) or {}
    try:
        count = int(data.get('count', 1))
    except (TypeError, ValueError):
        return jsonify({'error': 'count must be an integer'}), 400
    if count < 0:
        return jsonify({'error': 'count must be 0 or greater'}), 400
    tracker = _tracker()
    flips = tracker.tick(count)
    return jsonify({'flips': flips, **tracker.display.to_dict()}), 200


@stats.route('/display', methods=['GET'])
def display_state():
    tracker = _tracker()
    return jsonify({**tracker.display.to_dict(), 'objective': tracker.projector.objective})
