from blockstats.roster import PlayerRoster


class JoiningName(str):
    """A name whose comparison lets another player join mid-scan."""

    def __new__(cls, value, roster):
        obj = super().__new__(cls, value)
        obj.roster = roster
        return obj

    def lower(self):
        self.roster.join(f"late-{len(self.roster.online_ids())}", 'Late')
        return str.lower(self)


def test_resolve_is_case_insensitive():
    roster = PlayerRoster()
    roster.join('uuid-a', 'Alex')
    assert roster.resolve('ALEX') == 'uuid-a'
    assert roster.resolve('nobody') is None
    assert roster.resolve('  ') is None


def test_leave_removes_player():
    roster = PlayerRoster()
    roster.join(' uuid-a ', 'Alex')
    assert roster.leave('uuid-a') is True
    assert roster.leave('uuid-a') is False
    assert roster.resolve('Alex') is None


def test_resolve_tolerates_joins_during_scan():
    roster = PlayerRoster()
    roster.join('uuid-a', JoiningName('Alex', roster))
    roster.join('uuid-b', 'Blair')
    assert roster.resolve('blair') == 'uuid-b'
    assert len(roster.online_ids()) > 2
