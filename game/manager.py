"""
Game Manager - Coordinator for game operations.

Drives the room phase machine (lobby -> playing -> voting -> playing or
lobby) by coordinating RoleAssigner and VoteManager on rooms owned by
the RoomManager.
"""

import logging
from typing import Any, Optional

from lobby.manager import RoomManager
from lobby.models import Phase, Player, Room
from utils.constants import GAME_CONFIG
from utils.errors import GameInProgress, InvalidInput, RoomNotFound, Unauthorized
from utils.helpers import normalize_room_code, parse_int
from utils.timers import TimerRegistry
from .models import GameResult, WordData
from .role_assigner import RoleAssigner
from .vote_manager import VoteManager

logger = logging.getLogger(__name__)


class GameManager:
    """Coordinates all game operations within rooms."""

    def __init__(self,
                 room_manager: RoomManager,
                 timers: TimerRegistry,
                 role_assigner: Optional[RoleAssigner] = None,
                 vote_manager: Optional[VoteManager] = None,
                 min_players: int = GAME_CONFIG['MIN_PLAYERS'],
                 game_over_delay: float = GAME_CONFIG['GAME_OVER_DELAY_SECONDS']):
        self.room_manager = room_manager
        self.store = room_manager.store
        self.notifier = room_manager.notifier
        self.timers = timers
        self.role_assigner = role_assigner or RoleAssigner()
        self.vote_manager = vote_manager or VoteManager()
        self.min_players = min_players
        self.game_over_delay = game_over_delay

        room_manager.add_departure_listener(self._handle_departure)

    def start_game(self, code: Any, requester_id: str, word_payload: Any, impostor_count: Any) -> Room:
        """
        Deal roles and move the room from lobby to playing.

        Args:
            code: Room code
            requester_id: Identity asking to start; must be the host
            word_payload: Client ``wordData`` with word, category and hint
            impostor_count: Requested number of impostors

        Returns:
            The started room

        Raises:
            RoomNotFound, Unauthorized, GameInProgress, InvalidInput
        """
        with self.store.locked(normalize_room_code(code)) as room:
            if not room.is_host(requester_id):
                raise Unauthorized('Only the host can start the game.')
            if room.phase != Phase.LOBBY:
                raise GameInProgress()

            word_data = WordData.from_payload(word_payload)
            requested = parse_int(impostor_count)
            if requested is None:
                raise InvalidInput('Impostor count must be a number.')
            if room.player_count < self.min_players:
                raise InvalidInput(f"Need at least {self.min_players} players to start.")

            roles, starting_player = self.role_assigner.assign_roles(room.players, word_data, requested)

            room.phase = Phase.PLAYING
            room.game_number += 1
            room.winner = None
            room.votes.clear()
            for player in room.players:
                player.is_dead = False
                player.role_data = roles[player.id]
            room.impostor_names = self.role_assigner.impostor_names(room.players)

            for player in room.players:
                self.notifier.send(player.id, 'game_started', player.role_data.to_dict())

            logger.info(f"Started game {room.game_number} in room {room.code}, "
                        f"{starting_player} goes first")
            return room

    def start_voting(self, code: Any, requester_id: str) -> Room:
        """
        Open a voting round for the living players.

        Raises:
            RoomNotFound, Unauthorized, InvalidInput
        """
        with self.store.locked(normalize_room_code(code)) as room:
            if not room.is_host(requester_id):
                raise Unauthorized('Only the host can start the vote.')
            if room.phase != Phase.PLAYING or room.is_finished:
                raise InvalidInput('Voting can only start during a round.')

            room.phase = Phase.VOTING
            room.votes.clear()

            self.notifier.broadcast(room.code, 'voting_phase_started', {
                'candidates': [p.to_dict() for p in room.living_players]
            })
            logger.info(f"Voting started in room {room.code}")
            return room

    def cast_vote(self, code: Any, voter_id: str, target_id: Any) -> bool:
        """
        Record one vote; resolve the round once every living player voted.

        Invalid or duplicate votes are ignored.

        Returns:
            True if the vote was recorded
        """
        try:
            with self.store.locked(normalize_room_code(code)) as room:
                if not self.vote_manager.record_vote(room, voter_id, target_id):
                    return False
                if self.vote_manager.is_voting_complete(room):
                    self._resolve_votes(room)
                return True
        except RoomNotFound:
            logger.debug(f"Vote for unknown room {code} ignored")
            return False

    def reset_game(self, code: Any, requester_id: str) -> Room:
        """
        Host sends everyone back to the lobby with the same roster.

        Raises:
            RoomNotFound, Unauthorized
        """
        with self.store.locked(normalize_room_code(code)) as room:
            if not room.is_host(requester_id):
                raise Unauthorized('Only the host can reset the game.')

            self.timers.cancel(self._reset_key(room.code))
            self._reset_to_lobby(room)
            return room

    def send_chat(self, code: Any, sender_id: str, message: Any) -> bool:
        """
        Relay a chat message to the room under the sender's seated name.

        Returns:
            True if the message was broadcast
        """
        if not isinstance(message, str) or not message.strip():
            return False

        with self.store.locked(normalize_room_code(code)) as room:
            sender = room.get_player(sender_id)
            if sender is None:
                logger.debug(f"Chat from {sender_id} not seated in {room.code} ignored")
                return False
            self.notifier.broadcast(room.code, 'receive_chat', {
                'name': sender.name,
                'message': message.strip()
            })
            return True

    @staticmethod
    def _reset_key(code: str):
        return ('reset', code)

    def _resolve_votes(self, room: Room) -> None:
        """Eliminate the most-voted player and decide what happens next."""
        results = self.vote_manager.calculate_results(room)
        room.votes.clear()

        victim = room.get_player(results.eliminated_id) if results.eliminated_id else None
        if victim is None:
            survivors = room.living_players
            self._start_next_round(room, survivors[0] if survivors else None)
            return

        victim.is_dead = True
        for player in room.players:
            self.notifier.send(player.id, 'player_eliminated', {
                'eliminatedId': victim.id,
                'name': victim.name,
                'isYou': player.id == victim.id,
                'wasImpostor': victim.is_impostor
            })
        logger.info(f"{victim.name} eliminated in room {room.code} "
                    f"({'impostor' if victim.is_impostor else 'citizen'})")

        result = self.vote_manager.check_winner(room, after_vote=True)
        if result is not None:
            self._finish_game(room, result)
        else:
            self._start_next_round(room)

    def _start_next_round(self, room: Room, starting: Optional[Player] = None) -> None:
        survivors = room.living_players
        if starting is None and survivors:
            starting = self.role_assigner.pick_starting_player(survivors)
        starting_name = starting.name if starting else None

        room.phase = Phase.PLAYING
        room.votes.clear()
        for player in room.players:
            if player.role_data is not None and starting_name:
                player.role_data.starting_player = starting_name

        self.notifier.broadcast(room.code, 'next_round', {
            'startingPlayer': starting_name,
            'players': room.public_players()
        })
        logger.info(f"Next round in room {room.code}, {starting_name} goes first")

    def _finish_game(self, room: Room, result: GameResult) -> None:
        room.winner = result.winner
        room.votes.clear()
        self.notifier.broadcast(room.code, 'game_over', result.to_dict())
        logger.info(f"Game over in room {room.code}: {result.winner} win ({result.reason})")

        game_number = room.game_number
        self.timers.schedule(
            self._reset_key(room.code),
            self.game_over_delay,
            lambda: self._delayed_reset(room.code, game_number)
        )

    def _delayed_reset(self, code: str, game_number: int) -> None:
        """Return a finished game to the lobby, unless the host already moved on."""
        try:
            with self.store.locked(code) as room:
                if room.game_number != game_number or not room.is_finished:
                    return
                self._reset_to_lobby(room)
        except RoomNotFound:
            return

    def _reset_to_lobby(self, room: Room) -> None:
        room.phase = Phase.LOBBY
        room.votes.clear()
        room.winner = None
        room.impostor_names = []
        for player in room.players:
            player.is_dead = False
            player.role_data = None

        self.notifier.broadcast(room.code, 'game_reset', room.roster())
        logger.info(f"Room {room.code} back in lobby")

    def _handle_departure(self, room: Room, player: Player) -> None:
        """A player left mid-game: fix up the vote, then re-check the win condition."""
        if room.is_finished:
            return

        if room.phase == Phase.VOTING:
            self.vote_manager.discard_votes_involving(room, player.id)
            if self.vote_manager.is_voting_complete(room):
                self._resolve_votes(room)
                return

        result = self.vote_manager.check_winner(room, after_vote=False)
        if result is not None:
            self._finish_game(room, result)
