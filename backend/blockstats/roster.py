from typing import Dict, List, Optional


class PlayerRoster:
    """Players currently connected to the game host.

    Names resolve case-insensitively; offline players do not resolve.
    """

    def __init__(self):
        self._names: Dict[str, str] = {}

    def join(self, player_id: str, name: str) -> None:
        self._names[str(player_id).strip()] = name

    def leave(self, player_id: str) -> bool:
        return self._names.pop(str(player_id).strip(), None) is not None

    def resolve(self, name: str) -> Optional[str]:
        wanted = (name or '').strip().lower()
        if not wanted:
            return None
        for player_id, player_name in list(self._names.items()):
            if player_name.lower() == wanted:
                return player_id
        return None

    def name_of(self, player_id: str) -> Optional[str]:
        return self._names.get(str(player_id))

    def online_ids(self) -> List[str]:
        return list(self._names)

    def to_list(self):
        return [{'player_id': pid, 'name': name} for pid, name in list(self._names.items())]
