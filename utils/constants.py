"""
Game constants for The Impostor.

This module contains all constant values used throughout the game,
including room code settings, roles, phases, and result reasons.
"""

import string

# Room codes are sampled from uppercase letters only
ROOM_CODE_ALPHABET = string.ascii_uppercase
ROOM_CODE_LENGTH = 4

# Secret roles
ROLES = {
    'IMPOSTOR': 'impostor',
    'CITIZEN': 'citizen'
}

# Winner types
WINNER_TYPES = {
    'CITIZENS': 'citizen',
    'IMPOSTORS': 'impostor'
}

# Game over reasons
GAME_OVER_REASONS = {
    'IMPOSTORS_ELIMINATED': 'All impostors have been voted out',
    'IMPOSTORS_OUTNUMBER': 'The impostors now equal or outnumber the citizens',
    'IMPOSTORS_LEFT': 'The impostors left the game',
    'CITIZENS_LEFT': 'Too many citizens left the game'
}

# Room limits
GAME_CONFIG = {
    'MAX_PLAYERS': 12,
    'MIN_PLAYERS': 2,
    'MIN_IMPOSTORS': 1,
    'GRACE_PERIOD_SECONDS': 30,
    'GAME_OVER_DELAY_SECONDS': 10
}
