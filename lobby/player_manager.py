"""
Player management for rooms.

Handles roster operations like joining, leaving, rejoining and host
succession. Works on a Room the caller has already locked.
"""

import logging
from typing import Optional, Tuple

from .models import Phase, Player, Room
from utils.constants import GAME_CONFIG
from utils.errors import GameInProgress, InvalidInput, NameTaken, RecoveryFailed, RoomFull

logger = logging.getLogger(__name__)


class PlayerManager:
    """Manages player operations within rooms."""

    def __init__(self, max_players: int = GAME_CONFIG['MAX_PLAYERS']):
        self.max_players = max_players

    def validate_join(self, room: Room, name: str) -> None:
        """
        Check that ``name`` may join ``room`` right now.

        Raises:
            InvalidInput: empty name
            GameInProgress: room is not in the lobby
            RoomFull: roster already at capacity
            NameTaken: another player has the same name, ignoring case
        """
        if not name:
            raise InvalidInput('Please enter a name.')
        if room.phase != Phase.LOBBY:
            raise GameInProgress()
        if room.player_count >= self.max_players:
            raise RoomFull(f"Room is full ({self.max_players} players max).")
        if room.get_player_by_name(name) is not None:
            raise NameTaken()

    def add_player(self, room: Room, player_id: str, name: str) -> Player:
        """Validate and append a new player to the end of the roster."""
        self.validate_join(room, name)

        player = Player(id=player_id, name=name)
        room.players.append(player)

        logger.info(f"Player {name} joined room {room.code} ({room.player_count} players)")
        return player

    def remove_player(self, room: Room, player_id: str) -> Tuple[Optional[Player], bool]:
        """
        Remove a player and hand the host role on if needed.

        The new host is the earliest-joined player still seated.

        Returns:
            tuple: (removed_player or None if not seated, host_changed)
        """
        index = room.index_of(player_id)
        if index == -1:
            return None, False

        player = room.players.pop(index)
        room.votes.pop(player_id, None)
        logger.info(f"Player {player.name} removed from room {room.code}")

        host_changed = False
        if room.players and room.host_id == player_id:
            room.host_id = room.players[0].id
            host_changed = True
            logger.info(f"New host in {room.code}: {room.players[0].name}")

        return player, host_changed

    def rebind_player(self, room: Room, name: str, new_id: str) -> Tuple[Player, str]:
        """
        Move a seated player onto a new connection identity.

        Args:
            room: Room to search
            name: Seated player's display name
            new_id: Identity of the reconnected connection

        Returns:
            tuple: (player, old_id)

        Raises:
            RecoveryFailed: nobody with that name is seated in the room
        """
        player = room.get_player_by_name(name) if name else None
        if player is None:
            raise RecoveryFailed()

        old_id = player.id
        player.id = new_id
        player.is_connected = True

        if room.host_id == old_id:
            room.host_id = new_id
        if old_id in room.votes:
            room.votes[new_id] = room.votes.pop(old_id)
        for voter, target in room.votes.items():
            if target == old_id:
                room.votes[voter] = new_id

        logger.info(f"Player {player.name} reconnected to room {room.code}")
        return player, old_id

    def mark_disconnected(self, room: Room, player_id: str) -> Optional[Player]:
        """Flag a player as disconnected without removing them."""
        player = room.get_player(player_id)
        if player is not None:
            player.is_connected = False
            logger.info(f"Player {player.name} disconnected from room {room.code}")
        return player
