import random

import pytest

from game import RoleAssigner, WordData
from lobby import Phase, Player
from tests.conftest import WORD
from utils.errors import GameInProgress, InvalidInput, RoomNotFound, Unauthorized


@pytest.mark.parametrize('players, requested, expected', [
    (4, 1, 1),
    (4, 0, 1),
    (4, -3, 1),
    (4, 3, 3),
    (4, 9, 3),
    (12, 5, 5),
    (3, 2, 2),
])
def test_effective_impostor_count(players, requested, expected):
    assert RoleAssigner.effective_impostor_count(requested, players) == expected


@pytest.mark.parametrize('requested', [1, 2, 3, 10])
def test_assign_roles_partitions_players(requested):
    players = [Player(id=f'sid-{i}', name=f'P{i}') for i in range(6)]
    assigner = RoleAssigner(rng=random.Random(requested))

    roles, starting = assigner.assign_roles(players, WordData('Moon', 'Space', 'Night sky'), requested)

    impostors = [pid for pid, data in roles.items() if data.role == 'impostor']
    assert len(impostors) == min(requested, 5)
    assert len(set(impostors)) == len(impostors)
    assert starting in {p.name for p in players}
    for data in roles.values():
        assert not (data.word and data.impostor_hint)
        assert data.category == 'Space'
        assert data.starting_player == starting
        if data.is_impostor:
            assert data.word is None and data.impostor_hint == 'Night sky'
        else:
            assert data.word == 'Moon' and data.impostor_hint is None


def test_word_data_requires_word_and_category():
    with pytest.raises(InvalidInput):
        WordData.from_payload({'word': 'Moon'})
    with pytest.raises(InvalidInput):
        WordData.from_payload({'category': 'Space'})
    with pytest.raises(InvalidInput):
        WordData.from_payload(None)

    data = WordData.from_payload({'word': ' Moon ', 'category': 'Space', 'hint': '  '})
    assert data == WordData('Moon', 'Space', None)


def test_start_game_deals_private_roles(make_room, game_manager, notifier):
    room = make_room(4)

    game_manager.start_game(room.code, 'sid-0', WORD, 1)

    assert room.phase == Phase.PLAYING
    roles = [notifier.last(p.id, 'game_started') for p in room.players]
    assert sum(1 for r in roles if r['role'] == 'impostor') == 1
    assert len({r['startingPlayer'] for r in roles}) == 1
    for player, payload in zip(room.players, roles):
        assert payload == player.role_data.to_dict()
        # exactly one game_started per player, never broadcast
        assert len(notifier.received(player.id, 'game_started')) == 1
    assert not any(event == 'game_started' for _, event, _ in notifier.broadcasts)
    assert room.impostor_names == [p.name for p in room.players if p.is_impostor]


def test_roster_broadcasts_never_carry_roles(started_room, notifier, room_manager):
    room_manager.handle_disconnect('sid-3')

    update = notifier.last('sid-0', 'update_players')
    for player in update['players']:
        assert set(player) == {'id', 'name', 'isDead', 'connected'}


def test_start_game_host_only(make_room, game_manager):
    room = make_room(4)

    with pytest.raises(Unauthorized):
        game_manager.start_game(room.code, 'sid-1', WORD, 1)
    assert room.phase == Phase.LOBBY
    assert all(p.role_data is None for p in room.players)


def test_start_game_twice(started_room, game_manager):
    with pytest.raises(GameInProgress):
        game_manager.start_game(started_room.code, 'sid-0', WORD, 1)


def test_start_game_bad_payloads_leave_room_untouched(make_room, game_manager):
    room = make_room(4)

    with pytest.raises(InvalidInput):
        game_manager.start_game(room.code, 'sid-0', {'word': 'Moon'}, 1)
    with pytest.raises(InvalidInput):
        game_manager.start_game(room.code, 'sid-0', WORD, 'lots')
    assert room.phase == Phase.LOBBY
    assert room.game_number == 0


def test_start_game_needs_minimum_players(make_room, game_manager):
    room = make_room(1)

    with pytest.raises(InvalidInput):
        game_manager.start_game(room.code, 'sid-0', WORD, 1)
    assert room.phase == Phase.LOBBY


def test_two_player_game_deals_one_impostor(make_room, game_manager):
    room = make_room(2)

    game_manager.start_game(room.code, 'sid-0', WORD, 3)

    assert room.phase == Phase.PLAYING
    assert sum(p.is_impostor for p in room.players) == 1
    assert len(room.impostor_names) == 1


def test_start_game_unknown_room(game_manager):
    with pytest.raises(RoomNotFound):
        game_manager.start_game('ZZZZ', 'sid-0', WORD, 1)


def test_impostor_count_string_is_accepted(make_room, game_manager):
    room = make_room(5)

    game_manager.start_game(room.code, 'sid-0', WORD, '2')

    assert sum(1 for p in room.players if p.is_impostor) == 2
