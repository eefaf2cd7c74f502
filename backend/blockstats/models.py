from blockstats import db
from dataclasses import dataclass
import enum


class StatField(enum.Enum):
    MINED = 'mined'
    PLACED = 'placed'

    @classmethod
    def parse(cls, value):
        """Resolve 'mined' / 'Placed' / StatField into a StatField."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown stat field: {value!r}") from None


class EventKind(enum.Enum):
    BLOCK_MINED = 'block_mined'
    BLOCK_PLACED = 'block_placed'

    @property
    def field(self) -> StatField:
        return StatField.MINED if self is EventKind.BLOCK_MINED else StatField.PLACED


@dataclass(frozen=True)
class PlayerCounters:
    mined: int = 0
    placed: int = 0

    def value_of(self, field: StatField) -> int:
        return self.mined if field is StatField.MINED else self.placed

    def to_dict(self):
        return {'mined': self.mined, 'placed': self.placed}


ZERO = PlayerCounters()


class PlayerStats(db.Model):
    __tablename__ = 'player_stats'
    id = db.Column(db.String(36), primary_key=True)
    mined = db.Column(db.Integer, nullable=False, default=0, server_default='0')
    placed = db.Column(db.Integer, nullable=False, default=0, server_default='0')

    __table_args__ = (
        db.CheckConstraint('mined >= 0', name='ck_player_stats_mined_non_negative'),
        db.CheckConstraint('placed >= 0', name='ck_player_stats_placed_non_negative'),
    )
