from contextlib import contextmanager
from typing import Any, Dict, Optional
import uuid

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from bingo import socketio
from bingo.broadcast import Broadcaster, channel
from bingo.services.game.errors import GameError, RoomNotFound
from bingo.services.game.projection import public_state
from bingo.services.game.registry import RoomRegistry, normalize_code


def coerce_index(value: Any) -> Optional[int]:
    """Board index from a client payload; None when it is not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


class RoomSessionHandler:
    """Routes Socket.IO events from one connection to the room it names.

    Each connection gets an opaque user id on connect, kept until it
    disconnects. Every room mutation happens under that room's lock and
    is broadcast before the lock is released.
    """

    def __init__(self, registry: RoomRegistry, broadcaster: Broadcaster, default_name: str = 'Player'):
        self.registry = registry
        self.broadcaster = broadcaster
        self.default_name = default_name
        self._sid_to_user: Dict[str, str] = {}

    # ---- helpers ----

    def _current_user(self) -> Optional[str]:
        return self._sid_to_user.get(_get_sid())

    def _name_hint(self) -> str:
        return f"{self.default_name}-{str(_get_sid())[-4:]}"

    @contextmanager
    def _locked_room(self, code: str):
        """Yield the live room for code with its lock held, or None."""
        room = self.registry.get_room(code)
        if room is None:
            yield None
            return
        with room.lock:
            yield None if room.closed else room

    def _changed(self, room) -> None:
        self.broadcaster.state_update(room, namespace=request.namespace)

    def _rooms_changed(self) -> None:
        self.broadcaster.rooms_update(namespace=request.namespace)

    # ---- connection lifecycle ----

    def handle_connect(self, auth=None):
        user_id = str(uuid.uuid4())
        self._sid_to_user[_get_sid()] = user_id
        current_app.logger.info(f"[socket] connected user={user_id} sid={_get_sid()}")
        emit('hello', {'userId': user_id})
        emit('roomsUpdate', self.registry.list_summaries())

    def handle_disconnect(self, *args):
        user_id = self._sid_to_user.pop(_get_sid(), None)
        if not user_id:
            return
        current_app.logger.info(f"[socket] disconnected user={user_id} sid={_get_sid()}")
        for room in self.registry.rooms_with(user_id):
            with room.lock:
                if room.closed or not self.registry.leave(room, user_id):
                    continue
                if not room.closed:
                    self._changed(room)
        self._rooms_changed()

    # ---- membership ----

    def handle_create_room(self, data=None):
        user_id = self._current_user()
        if not user_id:
            return
        code, room = self.registry.create_room()
        with room.lock:
            room.join(user_id, self._name_hint())
            join_room(channel(code))
            current_app.logger.info(f"[socket] createRoom user={user_id} code={code}")
            emit('roomCreated', {'roomCode': code})
            emit('joined', {'roomCode': code, 'state': public_state(room)})
            self._changed(room)
            self._rooms_changed()

    def handle_join_room(self, data=None):
        user_id = self._current_user()
        if not user_id:
            return
        code = normalize_code(_payload(data).get('roomCode'))
        try:
            with self._locked_room(code) as room:
                if room is None:
                    raise RoomNotFound()
                room.join(user_id, self._name_hint())
                join_room(channel(code))
                current_app.logger.info(f"[socket] joinRoom user={user_id} code={code}")
                emit('joined', {'roomCode': code, 'state': public_state(room)})
                self._changed(room)
                self._rooms_changed()
        except GameError as exc:
            current_app.logger.info(f"[socket] joinRoom rejected user={user_id} code={code}: {exc}")
            emit('error', {'message': str(exc)})

    def handle_leave_room(self, data=None):
        user_id = self._current_user()
        code = normalize_code(_payload(data).get('roomCode'))
        with self._locked_room(code) as room:
            if room is None or not user_id:
                return
            leave_room(channel(code))
            if not self.registry.leave(room, user_id):
                return
            current_app.logger.info(f"[socket] leaveRoom user={user_id} code={code}")
            if not room.closed:
                self._changed(room)
            self._rooms_changed()

    def handle_choose_color(self, data=None):
        data = _payload(data)
        with self._locked_room(normalize_code(data.get('roomCode'))) as room:
            if room is not None and room.choose_color(self._current_user(), data.get('color')):
                self._changed(room)

    def handle_set_name(self, data=None):
        data = _payload(data)
        with self._locked_room(normalize_code(data.get('roomCode'))) as room:
            if room is not None and room.set_name(self._current_user(), data.get('name')):
                self._changed(room)

    # ---- tiles ----

    def handle_click_tile(self, data=None):
        data = _payload(data)
        user_id = self._current_user()
        with self._locked_room(normalize_code(data.get('roomCode'))) as room:
            if room is None:
                return
            move = room.click_tile(user_id, coerce_index(data.get('index')))
            if move is None:
                return
            current_app.logger.info(f"[socket] clickTile user={user_id} code={room.code} {move.action} index={move.index}")
            self._changed(room)
            if move.game_over is not None:
                current_app.logger.info(
                    f"[socket] gameOver code={room.code} winner={move.game_over['winner']} reason={move.game_over['reason']}"
                )
                self.broadcaster.game_over(room, move.game_over, namespace=request.namespace)

    def handle_undo_tile(self, data=None):
        data = _payload(data)
        with self._locked_room(normalize_code(data.get('roomCode'))) as room:
            if room is not None and room.undo_tile(self._current_user(), coerce_index(data.get('index'))):
                self._changed(room)

    def handle_edit_tile(self, data=None):
        data = _payload(data)
        with self._locked_room(normalize_code(data.get('roomCode'))) as room:
            if room is not None and room.edit_tile(coerce_index(data.get('tileId')), data.get('text')):
                self._changed(room)

    # ---- board-wide ----

    def handle_clear_room(self, data=None):
        with self._locked_room(normalize_code(_payload(data).get('roomCode'))) as room:
            if room is not None and room.reset_board():
                self._changed(room)

    def handle_clear_board(self, data=None):
        with self._locked_room(normalize_code(_payload(data).get('roomCode'))) as room:
            if room is not None and room.clear_labels():
                self._changed(room)

    def handle_start_game(self, data=None):
        with self._locked_room(normalize_code(_payload(data).get('roomCode'))) as room:
            if room is None:
                return
            room.start_game()
            current_app.logger.info(f"[socket] startGame code={room.code}")
            self._changed(room)
            self.broadcaster.game_started(room, namespace=request.namespace)

    def events(self):
        return {
            'connect': self.handle_connect,
            'disconnect': self.handle_disconnect,
            'createRoom': self.handle_create_room,
            'joinRoom': self.handle_join_room,
            'leaveRoom': self.handle_leave_room,
            'chooseColor': self.handle_choose_color,
            'setName': self.handle_set_name,
            'clickTile': self.handle_click_tile,
            'undoTile': self.handle_undo_tile,
            'editTile': self.handle_edit_tile,
            'clearRoom': self.handle_clear_room,
            'clearBoard': self.handle_clear_board,
            'startGame': self.handle_start_game,
        }


def register_socketio_handlers(handler: RoomSessionHandler, testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for event, callback in handler.events().items():
            socketio.on_event(event, callback, namespace=namespace)
