"""
Lobby Module for The Impostor.

Contains all room management logic and components.
Handles room creation, membership, host succession and reconnection.
"""

from .models import Phase, Player, Room
from .room_store import RoomStore
from .player_manager import PlayerManager
from .disconnect_scheduler import DisconnectScheduler
from .manager import RoomManager

__all__ = [
    # Data models
    'Phase',
    'Player',
    'Room',

    # Managers
    'RoomStore',
    'PlayerManager',
    'DisconnectScheduler',
    'RoomManager'
]
