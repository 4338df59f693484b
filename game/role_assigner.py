"""
Role assignment for The Impostor.

Splits a roster into impostors and citizens and builds each player's
private role payload. Pure logic: no locking and no messaging.
"""

import logging
import random
from typing import Dict, List, Sequence, Set, Tuple

from lobby.models import Player
from utils.constants import GAME_CONFIG, ROLES
from utils.helpers import clamp
from .models import RoleData, WordData

logger = logging.getLogger(__name__)


class RoleAssigner:
    """Deals secret roles to a room's players."""

    def __init__(self, rng=random):
        """
        Args:
            rng: Random source (module ``random`` or a seeded ``random.Random``)
        """
        self.rng = rng

    @staticmethod
    def effective_impostor_count(requested: int, player_count: int) -> int:
        """Never zero impostors, never every player an impostor."""
        return clamp(requested, GAME_CONFIG['MIN_IMPOSTORS'], player_count - 1)

    def pick_impostors(self, players: Sequence[Player], count: int) -> Set[str]:
        """Draw ``count`` distinct player ids uniformly, retrying on repeats."""
        impostor_ids: Set[str] = set()
        while len(impostor_ids) < count:
            candidate = players[self.rng.randrange(len(players))]
            impostor_ids.add(candidate.id)
        return impostor_ids

    def pick_starting_player(self, players: Sequence[Player]) -> Player:
        return players[self.rng.randrange(len(players))]

    def assign_roles(self,
                     players: Sequence[Player],
                     word_data: WordData,
                     requested_impostors: int) -> Tuple[Dict[str, RoleData], str]:
        """
        Compute every player's role payload.

        Args:
            players: Current roster, in join order
            word_data: Secret word, category and impostor hint
            requested_impostors: Impostor count the host asked for

        Returns:
            tuple: (role data by player id, starting player name)
        """
        count = self.effective_impostor_count(requested_impostors, len(players))
        impostor_ids = self.pick_impostors(players, count)
        starting_player = self.pick_starting_player(players).name

        roles: Dict[str, RoleData] = {}
        for player in players:
            if player.id in impostor_ids:
                roles[player.id] = RoleData(
                    role=ROLES['IMPOSTOR'],
                    category=word_data.category,
                    starting_player=starting_player,
                    word=None,
                    impostor_hint=word_data.hint
                )
            else:
                roles[player.id] = RoleData(
                    role=ROLES['CITIZEN'],
                    category=word_data.category,
                    starting_player=starting_player,
                    word=word_data.word,
                    impostor_hint=None
                )

        logger.info(f"Assigned {count} impostor(s) among {len(players)} players")
        return roles, starting_player

    def impostor_names(self, players: List[Player]) -> List[str]:
        """Names of every impostor, living or dead, in join order."""
        return [p.name for p in players if p.is_impostor]
