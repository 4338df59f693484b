"""
Socket.IO Event Handlers for The Impostor.

Pure routing layer that delegates to the room and game managers.
Contains no business logic - only payload unpacking and error reporting.
"""

import logging
from flask import request
from flask_socketio import emit

from utils.errors import RoomError

logger = logging.getLogger(__name__)


def _field(data, key, default=None):
    """Read a key from a dict payload; older clients send bare strings."""
    if isinstance(data, dict):
        return data.get(key, default)
    if isinstance(data, str) and key in ('roomCode', 'playerName'):
        return data
    return default


def register_socket_handlers(socketio, room_manager, game_manager):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        room_manager: Room management instance
        game_manager: Game management instance
    """

    def _report(action, error):
        if isinstance(error, RoomError):
            logger.info(f"{action} rejected for {request.sid}: {error.code}")
            emit('error_message', error.to_dict())
        else:
            logger.error(f"Error handling {action}: {error}")
            emit('error_message', {'error': 'server_error', 'message': f"Failed to {action}"})

    @socketio.on('connect')
    def handle_connect():
        """Handle client connection."""
        logger.info(f"Client connected: {request.sid}")

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Handle client disconnection."""
        logger.info(f"Client disconnected: {request.sid}")

        try:
            room_manager.handle_disconnect(request.sid)
        except Exception as e:
            logger.error(f"Error handling disconnect: {e}")

    @socketio.on('create_room')
    def handle_create_room(data=None):
        """Handle room creation request."""
        try:
            room_manager.create_room(request.sid, _field(data, 'playerName'))
        except Exception as e:
            _report('create room', e)

    @socketio.on('join_room')
    def handle_join_room(data=None):
        """Handle player joining a room."""
        try:
            room_manager.join_room(
                _field(data, 'roomCode'),
                request.sid,
                _field(data, 'playerName')
            )
        except Exception as e:
            _report('join room', e)

    @socketio.on('rejoin_room')
    def handle_rejoin_room(data=None):
        """Handle a returning player reclaiming their seat."""
        try:
            room_manager.rejoin_room(
                _field(data, 'roomCode'),
                _field(data, 'playerName'),
                request.sid
            )
        except Exception as e:
            _report('rejoin room', e)

    @socketio.on('leave_room')
    def handle_leave_room(data=None):
        """Handle player leaving a room."""
        try:
            room_manager.leave_room(_field(data, 'roomCode'), request.sid)
        except Exception as e:
            _report('leave room', e)

    @socketio.on('start_game')
    def handle_start_game(data=None):
        """Handle game start request."""
        try:
            game_manager.start_game(
                _field(data, 'roomCode'),
                request.sid,
                _field(data, 'wordData'),
                _field(data, 'impostorCount', 1)
            )
        except Exception as e:
            _report('start game', e)

    @socketio.on('start_voting')
    def handle_start_voting(data=None):
        """Handle the host opening a vote."""
        try:
            game_manager.start_voting(_field(data, 'roomCode'), request.sid)
        except Exception as e:
            _report('start voting', e)

    @socketio.on('cast_vote')
    def handle_cast_vote(data=None):
        """Handle vote being cast."""
        try:
            game_manager.cast_vote(
                _field(data, 'roomCode'),
                request.sid,
                _field(data, 'targetId')
            )
        except Exception as e:
            _report('cast vote', e)

    @socketio.on('reset_game')
    def handle_reset_game(data=None):
        """Handle the host sending everyone back to the lobby."""
        try:
            game_manager.reset_game(_field(data, 'roomCode'), request.sid)
        except Exception as e:
            _report('reset game', e)

    @socketio.on('send_chat')
    def handle_send_chat(data=None):
        """Handle a chat message."""
        try:
            game_manager.send_chat(
                _field(data, 'roomCode'),
                request.sid,
                _field(data, 'message')
            )
        except Exception as e:
            _report('send message', e)

    logger.info("Socket.IO handlers registered successfully")
