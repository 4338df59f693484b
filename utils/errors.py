"""
Error taxonomy for room and game operations.

Every error here is recoverable: it is raised before any room state is
touched and is reported only to the connection that caused it.
"""


class RoomError(Exception):
    """Base class for all user-facing room errors."""

    code = 'room_error'
    default_message = 'Something went wrong'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'error': self.code, 'message': self.message}


class RoomNotFound(RoomError):
    code = 'room_not_found'
    default_message = 'Room not found.'


class GameInProgress(RoomError):
    code = 'game_in_progress'
    default_message = 'The game has already started.'


class RoomFull(RoomError):
    code = 'room_full'
    default_message = 'Room is full.'


class NameTaken(RoomError):
    code = 'name_taken'
    default_message = 'That name is already in use.'


class InvalidInput(RoomError):
    code = 'invalid_input'
    default_message = 'Invalid request.'


class Unauthorized(RoomError):
    code = 'unauthorized'
    default_message = 'Only the host can do that.'


class RecoveryFailed(RoomError):
    code = 'recovery_failed'
    default_message = 'Could not find your seat in that room.'
