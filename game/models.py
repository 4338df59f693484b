"""
Data models for game management.

These represent game-specific data structures that live inside rooms.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from utils.constants import ROLES
from utils.errors import InvalidInput


@dataclass
class WordData:
    """The secret the host picked for this game."""
    word: str
    category: str
    hint: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> 'WordData':
        """
        Build word data from a client ``wordData`` object.

        Raises:
            InvalidInput: if word or category is missing or blank
        """
        if not isinstance(payload, dict):
            raise InvalidInput('Pick a word before starting.')
        word = payload.get('word')
        category = payload.get('category')
        if not isinstance(word, str) or not word.strip():
            raise InvalidInput('Pick a word before starting.')
        if not isinstance(category, str) or not category.strip():
            raise InvalidInput('Pick a category before starting.')
        hint = payload.get('hint')
        if not isinstance(hint, str) or not hint.strip():
            hint = None
        return cls(word=word.strip(), category=category.strip(), hint=hint.strip() if hint else None)


@dataclass
class RoleData:
    """A player's private role. Only ever sent to that player."""
    role: str
    category: str
    starting_player: str
    word: Optional[str] = None
    impostor_hint: Optional[str] = None

    @property
    def is_impostor(self) -> bool:
        return self.role == ROLES['IMPOSTOR']

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'role': self.role,
            'word': self.word,
            'category': self.category,
            'impostorHint': self.impostor_hint,
            'startingPlayer': self.starting_player
        }


@dataclass
class GameResult:
    """Represents the final result of a game."""
    winner: str  # 'citizen' or 'impostor'
    reason: str
    impostor_names: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'winner': self.winner,
            'reason': self.reason,
            'impostorNames': self.impostor_names
        }
