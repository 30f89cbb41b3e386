"""Fan-out of room state to Socket.IO clients."""
from typing import Any, Dict

from bingo.services.game.projection import public_state
from bingo.services.game.registry import RoomRegistry
from bingo.services.game.room import Room

DEFAULT_NAMESPACE = '/ws'


def channel(code: str) -> str:
    """Socket.IO room name used for one bingo room."""
    return f"room:{code}"


class Broadcaster:
    def __init__(self, socketio, registry: RoomRegistry):
        self.socketio = socketio
        self.registry = registry

    def to_client(self, sid: str, event: str, data: Dict[str, Any],
                  namespace: str = DEFAULT_NAMESPACE) -> None:
        self.socketio.emit(event, data, to=sid, namespace=namespace)

    def state_update(self, room: Room, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.socketio.emit('stateUpdate', public_state(room), to=channel(room.code), namespace=namespace)

    def game_over(self, room: Room, result: Dict[str, Any], namespace: str = DEFAULT_NAMESPACE) -> None:
        self.socketio.emit('gameOver', result, to=channel(room.code), namespace=namespace)

    def game_started(self, room: Room, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.socketio.emit('gameStarted', to=channel(room.code), namespace=namespace)

    def rooms_update(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        # No `to`: every client connected to the namespace
        self.socketio.emit('roomsUpdate', self.registry.list_summaries(), namespace=namespace)
