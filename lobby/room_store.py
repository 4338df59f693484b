"""
In-process room store.

Maps room codes to Room objects and connection identities to the room
they sit in. Nothing survives a process restart.
"""

import logging
import random
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from .models import Player, Room
from utils.errors import RoomNotFound
from utils.helpers import generate_room_code

logger = logging.getLogger(__name__)


class RoomStore:
    """
    Owns room creation, lookup and deletion.

    The store lock only guards the two tables. Room contents are guarded
    by each room's own lock, taken through ``locked()``.
    """

    def __init__(self, rng=random):
        self.rooms: Dict[str, Room] = {}
        self.identity_rooms: Dict[str, str] = {}  # identity -> room code
        self.rng = rng
        self._lock = threading.Lock()

    def create_room(self, host_id: str, host_name: str) -> Room:
        """
        Create a room with a fresh code and the host as its only player.

        Args:
            host_id: Connection identity of the creator
            host_name: Already-normalized display name of the creator

        Returns:
            The new Room, already registered in the store
        """
        with self._lock:
            code = generate_room_code(lambda candidate: candidate in self.rooms, rng=self.rng)
            room = Room(code=code, host_id=host_id, players=[Player(id=host_id, name=host_name)])
            self.rooms[code] = room
            self.identity_rooms[host_id] = code

        logger.info(f"Created room {code} for {host_name}")
        return room

    def get_room(self, code: str) -> Optional[Room]:
        with self._lock:
            return self.rooms.get(code)

    @contextmanager
    def locked(self, code: str) -> Iterator[Room]:
        """
        Hold a room's lock for the duration of an operation.

        Raises:
            RoomNotFound: if the code is unknown, or the room was deleted
                while we were waiting for its lock
        """
        room = self.get_room(code)
        if room is None:
            raise RoomNotFound()
        with room.lock:
            if room.closed:
                raise RoomNotFound()
            yield room

    def delete_room(self, room: Room) -> None:
        """Remove a room and every identity still mapped to it. Caller holds the room lock."""
        room.closed = True
        with self._lock:
            if self.rooms.get(room.code) is room:
                del self.rooms[room.code]
            stale = [identity for identity, code in self.identity_rooms.items() if code == room.code]
            for identity in stale:
                del self.identity_rooms[identity]
        logger.info(f"Deleted room {room.code}")

    def bind(self, identity: str, code: str) -> None:
        with self._lock:
            self.identity_rooms[identity] = code

    def unbind(self, identity: str, code: Optional[str] = None) -> None:
        """Forget an identity's room, optionally only if it still points at ``code``."""
        with self._lock:
            if code is None or self.identity_rooms.get(identity) == code:
                self.identity_rooms.pop(identity, None)

    def room_code_for(self, identity: str) -> Optional[str]:
        with self._lock:
            return self.identity_rooms.get(identity)

    def codes(self) -> List[str]:
        with self._lock:
            return list(self.rooms)

    def __contains__(self, code: str) -> bool:
        with self._lock:
            return code in self.rooms

    def __len__(self) -> int:
        with self._lock:
            return len(self.rooms)
