"""
Handlers Module for The Impostor.

Contains all web layer handlers (Socket.IO and API) with no business logic.
Handlers coordinate between the web layer and the room/game managers.
"""

from .socket_handlers import register_socket_handlers
from .api_handlers import register_api_handlers
from .notifier import SocketIONotifier

__all__ = [
    'register_socket_handlers',
    'register_api_handlers',
    'SocketIONotifier'
]
