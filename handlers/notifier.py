"""
Socket.IO-backed Notifier.

Uses the server object directly rather than flask_socketio.emit so that
timer threads, which have no request context, can deliver messages too.
"""

import logging
from typing import Any, Dict

from utils.notifier import Notifier

logger = logging.getLogger(__name__)


class SocketIONotifier(Notifier):
    """Delivers room broadcasts and targeted messages over Socket.IO."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def join_group(self, identity: str, code: str) -> None:
        self.socketio.server.enter_room(identity, code, namespace=self.namespace)

    def leave_group(self, identity: str, code: str) -> None:
        self.socketio.server.leave_room(identity, code, namespace=self.namespace)

    def broadcast(self, code: str, event: str, payload: Dict[str, Any]) -> None:
        logger.debug(f"-> room {code}: {event}")
        self.socketio.emit(event, payload, to=code, namespace=self.namespace)

    def send(self, identity: str, event: str, payload: Dict[str, Any]) -> None:
        logger.debug(f"-> {identity}: {event}")
        self.socketio.emit(event, payload, to=identity, namespace=self.namespace)
