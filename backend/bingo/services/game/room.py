"""Room state and the operations players perform on it.

Every operation returns a falsy value when its precondition fails and
leaves the room untouched; callers broadcast only on a truthy result.
Callers are expected to hold ``room.lock`` for the whole
validate/mutate/broadcast sequence.
"""
import threading
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from .board import Tile
from .errors import RoomFull
from .lines import BINGO_LINES, LineCatalog

WAITING = 'waiting'
STARTED = 'started'
FINISHED = 'finished'

ALLOWED_COLORS = ('#e74c3c', '#3498db', '#2ecc71', '#f1c40f', '#9b59b6')

CLAIM = 'claim'
UNDO = 'undo'


class Move(NamedTuple):
    action: str
    index: int
    game_over: Optional[Dict[str, Any]] = None


class Player:
    def __init__(self, user_id: str, name: str, color: Optional[str] = None, score: int = 0):
        self.user_id = user_id
        self.name = name
        self.color = color
        self.score = score

    def to_dict(self) -> Dict[str, Any]:
        return {
            'userId': self.user_id,
            'name': self.name,
            'color': self.color,
            'score': self.score,
        }


class Room:
    def __init__(self, code: str, board: List[Tile],
                 board_factory: Optional[Callable[[], List[Tile]]] = None,
                 catalog: LineCatalog = BINGO_LINES,
                 max_players: int = 2,
                 name_max_length: int = 24,
                 label_max_length: int = 50):
        self.code = code
        self.board = board
        self.players: List[Player] = []
        self.status = WAITING
        self.catalog = catalog
        self.board_factory = board_factory
        self.max_players = max_players
        self.name_max_length = name_max_length
        self.label_max_length = label_max_length
        self.lock = threading.RLock()
        # Set once the registry drops the room
        self.closed = False

    # ---- lookups ----

    @property
    def is_empty(self) -> bool:
        return not self.players

    def find_player(self, user_id: str) -> Optional[Player]:
        for player in self.players:
            if player.user_id == user_id:
                return player
        return None

    def has_player(self, user_id: str) -> bool:
        return self.find_player(user_id) is not None

    def _valid_index(self, index: Any) -> bool:
        return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self.board)

    def owned_mask(self, user_id: str) -> int:
        mask = 0
        for idx, tile in enumerate(self.board):
            if tile.owner_id == user_id:
                mask |= 1 << idx
        return mask

    def owned_count(self, user_id: str) -> int:
        return sum(1 for tile in self.board if tile.owner_id == user_id)

    def point_winner(self) -> Optional[str]:
        """Strictly highest scoring member, or None on any tie."""
        best = None
        tied = False
        for player in self.players:
            if best is None or player.score > best.score:
                best, tied = player, False
            elif player.score == best.score:
                tied = True
        if best is None or tied:
            return None
        return best.user_id

    # ---- membership ----

    def join(self, user_id: str, name_hint: str) -> bool:
        """Add a player. Returns False if already a member, raises RoomFull."""
        if self.has_player(user_id):
            return False
        if len(self.players) >= self.max_players:
            raise RoomFull()
        self.players.append(Player(user_id, name_hint))
        return True

    def remove_player(self, user_id: str) -> bool:
        player = self.find_player(user_id)
        if player is None:
            return False
        self.players.remove(player)
        # Tiles may only be owned by current members
        for tile in self.board:
            if tile.owner_id == user_id:
                tile.release()
        return True

    def choose_color(self, user_id: str, color: Any) -> bool:
        if not isinstance(color, str) or color not in ALLOWED_COLORS:
            return False
        player = self.find_player(user_id)
        if player is None:
            return False
        if any(p.user_id != user_id and p.color == color for p in self.players):
            return False
        player.color = color
        # Keep already claimed tiles in the owner's current color
        for tile in self.board:
            if tile.owner_id == user_id:
                tile.color = color
        return True

    def set_name(self, user_id: str, name: Any) -> bool:
        player = self.find_player(user_id)
        if player is None:
            return False
        trimmed = str(name if name is not None else '').strip()[:self.name_max_length]
        if not trimmed:
            return False
        player.name = trimmed
        return True

    # ---- tiles ----

    def click_tile(self, user_id: str, index: Any) -> Optional[Move]:
        """Claim a free tile, or undo the acting player's own claim."""
        if self.status == FINISHED:
            return None
        player = self.find_player(user_id)
        if player is None or not player.color:
            return None
        if not self._valid_index(index):
            return None
        tile = self.board[index]
        if tile.owner_id == user_id:
            self._release(player, tile)
            return Move(UNDO, index)
        if tile.is_owned:
            return None

        tile.claim(user_id, player.color)
        player.score += 1
        return Move(CLAIM, index, self._check_game_over(player))

    def undo_tile(self, user_id: str, index: Any) -> Optional[Move]:
        if self.status == FINISHED:
            return None
        player = self.find_player(user_id)
        if player is None or not self._valid_index(index):
            return None
        tile = self.board[index]
        if tile.owner_id != user_id:
            return None
        self._release(player, tile)
        return Move(UNDO, index)

    def _release(self, player: Player, tile: Tile) -> None:
        tile.release()
        player.score = max(0, player.score - 1)

    def _check_game_over(self, player: Player) -> Optional[Dict[str, Any]]:
        if self.catalog.has_line(self.owned_mask(player.user_id)):
            self.status = FINISHED
            return {'winner': player.user_id, 'reason': 'bingo'}
        if all(tile.is_owned for tile in self.board):
            self.status = FINISHED
            return {'winner': self.point_winner(), 'reason': 'points'}
        return None

    def edit_tile(self, index: Any, text: Any) -> bool:
        if not self._valid_index(index):
            return False
        tile = self.board[index]
        if tile.is_owned:
            return False
        tile.label = str(text if text is not None else '').strip()[:self.label_max_length]
        return True

    # ---- board-wide ----

    def recount_scores(self) -> None:
        for player in self.players:
            player.score = self.owned_count(player.user_id)

    def reset_board(self) -> bool:
        """Replace the board with a fresh draw. Status is left alone."""
        if self.board_factory is None:
            return False
        self.board = self.board_factory()
        self.recount_scores()
        return True

    def clear_labels(self) -> bool:
        """Blank every label and release every claim, keeping the board size."""
        for tile in self.board:
            tile.label = ''
            tile.release()
        self.recount_scores()
        return True

    def start_game(self) -> bool:
        self.status = STARTED
        return True
