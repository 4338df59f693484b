"""
Utilities module for The Impostor.

This module contains constants, errors, helper functions, and utility
classes used throughout the application.
"""

from .constants import (
    ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH, ROLES, WINNER_TYPES,
    GAME_OVER_REASONS, GAME_CONFIG
)
from .errors import (
    RoomError, RoomNotFound, GameInProgress, RoomFull, NameTaken,
    InvalidInput, Unauthorized, RecoveryFailed
)
from .helpers import generate_room_code, names_match, normalize_name, normalize_room_code
from .timers import TimerRegistry

__all__ = [
    'ROOM_CODE_ALPHABET',
    'ROOM_CODE_LENGTH',
    'ROLES',
    'WINNER_TYPES',
    'GAME_OVER_REASONS',
    'GAME_CONFIG',
    'RoomError',
    'RoomNotFound',
    'GameInProgress',
    'RoomFull',
    'NameTaken',
    'InvalidInput',
    'Unauthorized',
    'RecoveryFailed',
    'generate_room_code',
    'names_match',
    'normalize_name',
    'normalize_room_code',
    'TimerRegistry'
]
