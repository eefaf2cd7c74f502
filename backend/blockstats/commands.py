"""The `stats` chat command.

    stats                               own counters
    stats <name>                        counters of an online player
    stats set {mined|placed} <name> <n> overwrite a counter (admin)
    stats credits                       credits line

Results carry exit code 1 on success and 0 on failure, like the host's
command dispatcher expects.
"""

import shlex
from dataclasses import dataclass, field
from typing import List, Optional

from blockstats.errors import PlayerLookupError, ValidationError
from blockstats.models import StatField


PREFIX = '[STATISTICS]'
FRAME_TOP = '|------------------[STATISTICS]------------------|'
FRAME_BOTTOM = '|-----------------------------------------------|'


@dataclass
class CommandSource:
    """Sender as reported by the host, permission already checked there."""
    player_id: Optional[str] = None
    name: Optional[str] = None
    permission_level: int = 0

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        try:
            level = int(data.get('permission_level') or 0)
        except (TypeError, ValueError):
            level = 0
        return cls(player_id=data.get('player_id'), name=data.get('name'), permission_level=level)


@dataclass
class CommandResult:
    exit_code: int
    messages: List[str] = field(default_factory=list)
    is_error: bool = False

    def to_dict(self):
        return {'exit_code': self.exit_code, 'messages': self.messages, 'error': self.is_error}


def info(message: str) -> CommandResult:
    return CommandResult(1, [f"{PREFIX} {message}"])


def error(message: str) -> CommandResult:
    return CommandResult(0, [f"{PREFIX} {message}"], is_error=True)


def stats_block(name, counters) -> List[str]:
    return [
        FRAME_TOP,
        f"| {name} has {counters.mined} Blocks Mined",
        f"| {name} has {counters.placed} Blocks Placed",
        FRAME_BOTTOM,
    ]


MAX_COUNT = 2 ** 31 - 1  # counters are 32-bit signed integers in the host


def parse_count(raw: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid number: {raw}") from None
    if value < 0:
        raise ValidationError(f"Value must be 0 or greater, got {value}")
    if value > MAX_COUNT:
        raise ValidationError(f"Value must be {MAX_COUNT} or less, got {value}")
    return value


class StatsCommand:
    def __init__(self, tracker, roster, admin_level=2, credits='Credits: https://github.com/ProjectPersistence'):
        self.tracker = tracker
        self.roster = roster
        self.admin_level = int(admin_level)
        self.credits = credits

    def execute(self, source: CommandSource, line: str) -> CommandResult:
        try:
            args = shlex.split(line or '')
        except ValueError as exc:
            return error(f"Malformed command: {exc}")
        if args and args[0].lstrip('/').lower() in ('stats', 'statistics'):
            args = args[1:]

        if not args:
            return self.show_self(source)
        if args[0].lower() == 'credits' and len(args) == 1:
            return info(self.credits)
        if args[0].lower() == 'set':
            return self.set_stat(source, args[1:])
        if len(args) == 1:
            return self.show_player(args[0])
        return error('Usage: stats [credits | <player> | set <mined|placed> <player> <number>]')

    def show_self(self, source: CommandSource) -> CommandResult:
        if not source.player_id:
            # Console senders have no counters of their own
            return CommandResult(0, [], is_error=True)
        name = source.name or self.roster.name_of(source.player_id) or source.player_id
        return CommandResult(1, stats_block(name, self.tracker.stats_for(source.player_id)))

    def show_player(self, name: str) -> CommandResult:
        try:
            player_id = self._resolve(name)
        except PlayerLookupError:
            return error('Player not found.')
        return CommandResult(1, stats_block(name, self.tracker.stats_for(player_id)))

    def set_stat(self, source: CommandSource, args) -> CommandResult:
        if source.permission_level < self.admin_level:
            return error('You do not have permission to use this command.')
        if len(args) != 3:
            return error('Usage: stats set <mined|placed> <player> <number>')
        raw_field, name, raw_value = args
        try:
            stat = StatField.parse(raw_field)
            value = parse_count(raw_value)
        except ValueError as exc:
            return error(str(exc))
        try:
            player_id = self._resolve(name)
        except PlayerLookupError:
            return error('Player not found or not online!')
        self.tracker.set_stat(player_id, stat, value)
        return info(f"{name} has been set to {value} {stat.value} blocks.")

    def _resolve(self, name):
        player_id = self.roster.resolve(name)
        if player_id is None:
            raise PlayerLookupError(name)
        return player_id
