class GameError(Exception):
    """Base class for errors reported back to the acting client."""

    message = 'Game error'

    def __init__(self, message=None):
        super().__init__(message or self.message)


class RoomNotFound(GameError):
    message = 'Room not found'


class RoomFull(GameError):
    message = 'Room full'
