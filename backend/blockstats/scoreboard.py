from blockstats import socketio


SCOREBOARD_ROOM = 'scoreboard'
DISPLAY_SLOT = 'below_name'


class ScoreboardSink:
    """Where the projector pushes objectives and scores.

    Write-only: the projector never reads anything back.
    """

    def replace_objective(self, name: str, label: str) -> None:
        raise NotImplementedError

    def remove_objective(self, name: str) -> None:
        raise NotImplementedError

    def set_score(self, player_id: str, objective: str, value: int) -> None:
        raise NotImplementedError


class SocketIOScoreboard(ScoreboardSink):
    """Broadcast scoreboard changes to clients watching room ``scoreboard`` on /ws."""

    def __init__(self, namespace='/ws', room=SCOREBOARD_ROOM):
        self.namespace = namespace
        self.room = room

    def _emit(self, event, payload):
        socketio.emit(event, payload, to=self.room, namespace=self.namespace)

    def replace_objective(self, name, label):
        self._emit('objective_replaced', {'objective': name, 'label': label, 'slot': DISPLAY_SLOT})

    def remove_objective(self, name):
        self._emit('objective_removed', {'objective': name})

    def set_score(self, player_id, objective, value):
        self._emit('score_set', {'player_id': player_id, 'objective': objective, 'value': int(value)})
