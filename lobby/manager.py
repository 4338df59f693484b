"""
Main room management system.

Coordinates room creation, membership, reconnection and host succession.
Every operation locks exactly one room, validates, then mutates, then
notifies the room through the Notifier.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from .disconnect_scheduler import DisconnectScheduler
from .models import Phase, Player, Room
from .player_manager import PlayerManager
from .room_store import RoomStore
from utils.errors import InvalidInput, RoomNotFound
from utils.helpers import names_match, normalize_name, normalize_room_code
from utils.notifier import Notifier

logger = logging.getLogger(__name__)

DepartureListener = Callable[[Room, Player], None]


class RoomManager:
    """Main room management coordinator."""

    def __init__(self,
                 store: RoomStore,
                 player_manager: PlayerManager,
                 disconnect_scheduler: DisconnectScheduler,
                 notifier: Notifier):
        self.store = store
        self.player_manager = player_manager
        self.disconnect_scheduler = disconnect_scheduler
        self.notifier = notifier
        self._departure_listeners: List[DepartureListener] = []

    def add_departure_listener(self, listener: DepartureListener) -> None:
        """
        Register a callback for players removed while a game is running.

        Called with the room still locked, after the roster update has
        been broadcast.
        """
        self._departure_listeners.append(listener)

    def create_room(self, identity: str, name: Any) -> Room:
        """
        Create a new room with the caller as host.

        Args:
            identity: Connection identity of the creator
            name: Requested display name

        Returns:
            The newly created room

        Raises:
            InvalidInput: if the name is empty after normalization
        """
        name = normalize_name(name)
        if not name:
            raise InvalidInput('Please enter a name.')

        previous_code = self.store.room_code_for(identity)

        room = self.store.create_room(identity, name)
        with room.lock:
            self.notifier.join_group(identity, room.code)
            self.notifier.send(identity, 'room_created', {
                'roomCode': room.code,
                'isHost': True,
                **room.roster()
            })

        if previous_code and previous_code != room.code:
            self.leave_room(previous_code, identity)
        return room

    def join_room(self, code: Any, identity: str, name: Any) -> Room:
        """
        Add a player to an existing room.

        Raises:
            RoomNotFound, GameInProgress, RoomFull, NameTaken, InvalidInput
        """
        code = normalize_room_code(code)
        name = normalize_name(name)
        previous_code = self.store.room_code_for(identity)

        with self.store.locked(code) as room:
            if room.get_player(identity) is not None:
                raise InvalidInput('You are already in this room.')

            self.player_manager.add_player(room, identity, name)
            self.store.bind(identity, room.code)
            self.notifier.join_group(identity, room.code)

            self.notifier.send(identity, 'join_success', {
                'roomCode': room.code,
                **room.roster()
            })
            self.notifier.broadcast(room.code, 'update_players', room.roster())

        if previous_code and previous_code != code:
            self.leave_room(previous_code, identity)
        return room

    def leave_room(self, code: Any, identity: str) -> bool:
        """
        Remove a player from a room on request.

        Returns:
            True if the player was seated in the room and is now gone
        """
        code = normalize_room_code(code)
        self.disconnect_scheduler.cancel_eviction(identity)
        try:
            with self.store.locked(code) as room:
                removed = self._remove_player(room, identity)
        except RoomNotFound:
            logger.debug(f"Leave for unknown room {code} ignored")
            return False
        return removed is not None

    def rejoin_room(self, code: Any, name: Any, identity: str) -> Room:
        """
        Reclaim a seat by name after a reconnect.

        The player's seat, role and vote move to the new identity; a
        pending eviction for the old identity is cancelled.

        Raises:
            RoomNotFound: no such room
            RecoveryFailed: nobody with that name is seated there
            InvalidInput: the identity already holds another seat here
        """
        code = normalize_room_code(code)
        name = normalize_name(name)
        previous_code = self.store.room_code_for(identity)

        with self.store.locked(code) as room:
            seated = room.get_player(identity)
            if seated is not None and not names_match(seated.name, name):
                raise InvalidInput('You are already seated here under another name.')

            player, old_id = self.player_manager.rebind_player(room, name, identity)
            self.disconnect_scheduler.cancel_eviction(old_id)

            if old_id != identity:
                self.store.unbind(old_id, room.code)
                self.notifier.leave_group(old_id, room.code)
            self.store.bind(identity, room.code)
            self.notifier.join_group(identity, room.code)

            self.notifier.broadcast(room.code, 'update_players', room.roster())

            if (room.phase == Phase.PLAYING and not room.is_finished
                    and player.role_data is not None):
                self.notifier.send(identity, 'game_started', player.role_data.to_dict())
            else:
                payload: Dict[str, Any] = {
                    'roomCode': room.code,
                    'phase': room.phase.value,
                    **room.roster()
                }
                if room.phase == Phase.VOTING:
                    payload['candidates'] = [p.to_dict() for p in room.living_players]
                self.notifier.send(identity, 'rejoin_success', payload)

        if previous_code and previous_code != code:
            self.leave_room(previous_code, identity)
        return room

    def handle_disconnect(self, identity: str) -> Optional[str]:
        """
        Start the grace window for a dropped connection.

        Returns:
            The room code the identity was seated in, or None
        """
        code = self.store.room_code_for(identity)
        if not code:
            return None

        try:
            with self.store.locked(code) as room:
                player = self.player_manager.mark_disconnected(room, identity)
                if player is None:
                    self.store.unbind(identity, code)
                    return None
                self.notifier.broadcast(room.code, 'update_players', room.roster())
                self.disconnect_scheduler.schedule_eviction(
                    identity, lambda stale_id: self.expire_seat(code, stale_id)
                )
        except RoomNotFound:
            self.store.unbind(identity, code)
            return None
        return code

    def expire_seat(self, code: str, identity: str) -> bool:
        """
        Grace window elapsed: remove the player still holding ``identity``.

        A no-op if the player rejoined under a new identity or the room is
        already gone.
        """
        try:
            with self.store.locked(code) as room:
                removed = self._remove_player(room, identity)
        except RoomNotFound:
            self.store.unbind(identity, code)
            return False
        if removed is not None:
            logger.info(f"Grace window expired for {removed.name} in room {code}")
        return removed is not None

    def get_room_summary(self, code: Any) -> Optional[Dict[str, Any]]:
        room = self.store.get_room(normalize_room_code(code))
        if room is None:
            return None
        with room.lock:
            return room.to_summary(self.player_manager.max_players)

    def _remove_player(self, room: Room, identity: str) -> Optional[Player]:
        """Shared removal path for leave and grace expiry. Caller holds the room lock."""
        player, _ = self.player_manager.remove_player(room, identity)
        if player is None:
            return None

        self.store.unbind(identity, room.code)
        self.notifier.leave_group(identity, room.code)

        if not room.players:
            self.store.delete_room(room)
            return player

        self.notifier.broadcast(room.code, 'update_players', room.roster())

        if room.phase != Phase.LOBBY:
            for listener in self._departure_listeners:
                listener(room, player)
        return player
