"""In-memory registry of live rooms keyed by room code."""
import logging
import random
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from .board import Tile
from .errors import RoomNotFound
from .room import Room

logger = logging.getLogger(__name__)

# No 0/O or 1/I
CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'

_system_random = random.SystemRandom()


def generate_room_code(length: int = 4, rng: Optional[random.Random] = None) -> str:
    rng = rng or _system_random
    return ''.join(rng.choice(CODE_ALPHABET) for _ in range(length))


def normalize_code(code: Any) -> str:
    return str(code if code is not None else '').strip().upper()


class RoomRegistry:
    """Process-wide map of room code to Room.

    The map itself is guarded by a lock of its own. Room contents are
    guarded by each room's lock, which must be taken before this one when
    both are needed; the registry never takes a room lock.
    """

    def __init__(self, board_factory: Callable[[], List[Tile]],
                 code_length: int = 4,
                 code_factory: Optional[Callable[[], str]] = None,
                 **room_options):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()
        self.board_factory = board_factory
        self.code_length = code_length
        self.code_factory = code_factory or (lambda: generate_room_code(self.code_length))
        self.room_options = room_options

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def create_room(self) -> Tuple[str, Room]:
        # Board generation may touch the phrase store; keep it outside the lock
        board = self.board_factory()
        with self._lock:
            code = self.code_factory()
            while code in self._rooms:
                code = self.code_factory()
            room = Room(code, board, board_factory=self.board_factory, **self.room_options)
            self._rooms[code] = room
        logger.info(f"[room] created code={code}")
        return code, room

    def get_room(self, code: Any) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(normalize_code(code))

    def require_room(self, code: Any) -> Room:
        room = self.get_room(code)
        if room is None:
            raise RoomNotFound()
        return room

    def delete_room(self, code: Any) -> bool:
        with self._lock:
            room = self._rooms.pop(normalize_code(code), None)
        if room is None:
            return False
        room.closed = True
        logger.info(f"[room] deleted code={room.code}")
        return True

    def leave(self, room: Room, user_id: str) -> bool:
        """Remove user_id from room, dropping the room once it is empty.

        The caller must hold room.lock.
        """
        if not room.remove_player(user_id):
            return False
        if room.is_empty:
            self.delete_room(room.code)
        return True

    def rooms_with(self, user_id: str) -> List[Room]:
        with self._lock:
            rooms = list(self._rooms.values())
        return [room for room in rooms if room.has_player(user_id)]

    def list_summaries(self) -> List[Dict[str, Any]]:
        """Lobby view of every live room.

        The count goes out as `playersCount`, the field name clients of the
        room feed already read, rather than `playerCount`.
        """
        with self._lock:
            rooms = list(self._rooms.values())
        return [
            {'code': room.code, 'playersCount': len(room.players), 'status': room.status}
            for room in rooms
        ]
