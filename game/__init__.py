"""
Game Module for The Impostor.

Contains all game-specific logic and components.
Game operations happen within rooms but are separate from room management.
"""

from .models import GameResult, RoleData, WordData
from .role_assigner import RoleAssigner
from .vote_manager import VoteManager, VoteResults
from .manager import GameManager

__all__ = [
    # Data models
    'GameResult',
    'RoleData',
    'WordData',
    'VoteResults',

    # Managers
    'GameManager',
    'RoleAssigner',
    'VoteManager'
]
