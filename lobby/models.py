"""
Data models for room management.

These are the in-memory structures shared by the lobby and game
managers. A Room owns its Players; nothing here is persisted.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from utils.helpers import names_match

if TYPE_CHECKING:
    from game.models import RoleData


class Phase(Enum):
    """Room phase enumeration."""
    LOBBY = "lobby"
    PLAYING = "playing"
    VOTING = "voting"


@dataclass
class Player:
    """Represents one occupant of a room."""
    id: str
    name: str
    is_dead: bool = False
    is_connected: bool = True
    role_data: Optional['RoleData'] = None

    @property
    def is_impostor(self) -> bool:
        return self.role_data is not None and self.role_data.is_impostor

    def to_dict(self) -> Dict[str, Any]:
        """Public form of the player. Never includes role data."""
        return {
            'id': self.id,
            'name': self.name,
            'isDead': self.is_dead,
            'connected': self.is_connected
        }


@dataclass(eq=False)
class Room:
    """Represents one game session and everything it owns."""
    code: str
    host_id: str
    phase: Phase = Phase.LOBBY
    players: List[Player] = field(default_factory=list)
    votes: Dict[str, str] = field(default_factory=dict)  # voter id -> target id
    game_number: int = 0
    winner: Optional[str] = None
    impostor_names: List[str] = field(default_factory=list)  # fixed at game start
    closed: bool = False
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def is_finished(self) -> bool:
        """True between game over and the return to lobby."""
        return self.winner is not None

    @property
    def living_players(self) -> List[Player]:
        return [p for p in self.players if not p.is_dead]

    def get_player(self, player_id: str) -> Optional[Player]:
        """Find player by connection identity."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_player_by_name(self, name: str) -> Optional[Player]:
        """Find player by display name, ignoring case."""
        for player in self.players:
            if names_match(player.name, name):
                return player
        return None

    def index_of(self, player_id: str) -> int:
        """Join-order position of a player, or -1."""
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return -1

    def is_host(self, player_id: str) -> bool:
        return self.host_id == player_id

    def public_players(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.players]

    def roster(self) -> Dict[str, Any]:
        """Payload shared by update_players, join_success and game_reset."""
        return {
            'players': self.public_players(),
            'hostId': self.host_id
        }

    def to_summary(self, max_players: int) -> Dict[str, Any]:
        """Lightweight public info for the HTTP API."""
        return {
            'code': self.code,
            'phase': self.phase.value,
            'player_count': self.player_count,
            'max_players': max_players,
            'is_full': self.player_count >= max_players
        }
