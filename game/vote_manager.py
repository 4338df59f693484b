"""
Vote Manager for The Impostor.

Handles vote validation, counting, elimination and win evaluation.
Contains no locking or messaging - purely voting mechanics on a Room
the caller has already locked.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lobby.models import Phase, Room
from utils.constants import GAME_OVER_REASONS, WINNER_TYPES
from .models import GameResult

logger = logging.getLogger(__name__)


@dataclass
class VoteResults:
    """Results of a voting round."""
    vote_counts: Dict[str, int] = field(default_factory=dict)  # target id -> count
    eliminated_id: Optional[str] = None
    tied_ids: List[str] = field(default_factory=list)
    total_votes: int = 0

    @property
    def is_tie(self) -> bool:
        return len(self.tied_ids) > 1


class VoteManager:
    """
    Manages voting rounds and win conditions.

    One vote per living player per round; the first vote counts. The
    round closes as soon as every living player has voted.
    """

    def validate_vote(self, room: Room, voter_id: str, target_id: str) -> Optional[str]:
        """
        Check a vote before recording it.

        Returns:
            None if the vote is acceptable, otherwise the reason it is ignored
        """
        if room.phase != Phase.VOTING or room.is_finished:
            return "Voting is not open"

        voter = room.get_player(voter_id)
        if voter is None or voter.is_dead:
            return "Voter is not a living player"

        if voter_id in room.votes:
            return "Voter already voted this round"

        target = room.get_player(target_id)
        if target is None or target.is_dead:
            return "Invalid vote target"

        return None

    def record_vote(self, room: Room, voter_id: str, target_id: str) -> bool:
        """
        Record a vote if it is valid.

        Returns:
            True if the vote was recorded, False if it was ignored
        """
        reason = self.validate_vote(room, voter_id, target_id)
        if reason:
            logger.debug(f"Ignored vote {voter_id} -> {target_id} in {room.code}: {reason}")
            return False

        room.votes[voter_id] = target_id
        logger.info(f"Vote recorded in {room.code}: {len(room.votes)}/{len(room.living_players)}")
        return True

    def is_voting_complete(self, room: Room) -> bool:
        living = len(room.living_players)
        return living > 0 and len(room.votes) >= living

    def discard_votes_involving(self, room: Room, player_id: str) -> None:
        """Drop a departed player's vote and every vote cast for them."""
        room.votes.pop(player_id, None)
        for voter in [v for v, target in room.votes.items() if target == player_id]:
            del room.votes[voter]

    def calculate_results(self, room: Room) -> VoteResults:
        """
        Tally the votes.

        The target with the most votes is eliminated. Among targets tied
        for the most votes, the one earliest in join order goes.
        """
        vote_counts = Counter(room.votes.values())
        if not vote_counts:
            return VoteResults(total_votes=0)

        max_votes = max(vote_counts.values())
        tied_ids = [p.id for p in room.players if vote_counts.get(p.id) == max_votes]

        results = VoteResults(
            vote_counts=dict(vote_counts),
            eliminated_id=tied_ids[0] if tied_ids else None,
            tied_ids=tied_ids,
            total_votes=len(room.votes)
        )
        logger.info(f"Calculated results in {room.code}: {results.total_votes} votes, "
                    f"eliminated: {results.eliminated_id}, tie: {results.is_tie}")
        return results

    def check_winner(self, room: Room, after_vote: bool = True) -> Optional[GameResult]:
        """
        Evaluate the win condition on the living roster.

        Args:
            room: Room to evaluate
            after_vote: True right after an elimination, False after a player
                left mid-game (only changes the reason text)

        Returns:
            GameResult if the game is over, None if it continues
        """
        living = room.living_players
        living_impostors = sum(1 for p in living if p.is_impostor)
        living_citizens = len(living) - living_impostors

        if living_impostors == 0:
            reason = (GAME_OVER_REASONS['IMPOSTORS_ELIMINATED'] if after_vote
                      else GAME_OVER_REASONS['IMPOSTORS_LEFT'])
            return GameResult(winner=WINNER_TYPES['CITIZENS'], reason=reason,
                              impostor_names=list(room.impostor_names))

        if living_impostors >= living_citizens:
            reason = (GAME_OVER_REASONS['IMPOSTORS_OUTNUMBER'] if after_vote
                      else GAME_OVER_REASONS['CITIZENS_LEFT'])
            return GameResult(winner=WINNER_TYPES['IMPOSTORS'], reason=reason, impostor_names=list(room.impostor_names))

        return None
