"""
Outbound messaging interface.

The room and game managers only ever talk to the transport through a
Notifier. Socket handlers supply a Socket.IO-backed one; tests supply a
recording one.
"""

from typing import Any, Dict


class Notifier:
    """Fire-and-forget delivery to one connection or to a whole room."""

    def join_group(self, identity: str, code: str) -> None:
        """Start delivering ``code``'s broadcasts to ``identity``."""

    def leave_group(self, identity: str, code: str) -> None:
        """Stop delivering ``code``'s broadcasts to ``identity``."""

    def broadcast(self, code: str, event: str, payload: Dict[str, Any]) -> None:
        """Deliver to every connection in the room."""

    def send(self, identity: str, event: str, payload: Dict[str, Any]) -> None:
        """Deliver to one connection only."""
