from typing import Any, Dict

from .room import Room


def public_state(room: Room) -> Dict[str, Any]:
    """Client-visible view of a room. Tile owners are never exposed."""
    return {
        'board': [tile.to_dict() for tile in room.board],
        'players': [player.to_dict() for player in room.players],
        'status': room.status,
    }
