import os
import random
import sys
from collections import defaultdict

import pytest

# Ensure the project root (containing the top-level packages) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from game import GameManager, RoleAssigner, VoteManager
from lobby import DisconnectScheduler, PlayerManager, RoomManager, RoomStore
from utils.notifier import Notifier
from utils.timers import TimerRegistry


class ManualTimer:
    """threading.Timer stand-in that only fires when a test says so."""

    def __init__(self, interval, function, factory):
        self.interval = interval
        self.function = function
        self.factory = factory
        self.daemon = False
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self):
        self.started = True
        self.factory.timers.append(self)

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if self.cancelled or self.fired:
            return
        self.fired = True
        self.function()


class ManualTimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        return ManualTimer(interval, function, self)

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire_all(self):
        for timer in list(self.pending):
            timer.fire()


class RecordingNotifier(Notifier):
    """Keeps every delivery per identity, resolving broadcasts at send time."""

    def __init__(self):
        self.groups = defaultdict(set)
        self.inbox = defaultdict(list)
        self.broadcasts = []

    def join_group(self, identity, code):
        self.groups[code].add(identity)

    def leave_group(self, identity, code):
        self.groups[code].discard(identity)

    def broadcast(self, code, event, payload):
        self.broadcasts.append((code, event, payload))
        for identity in sorted(self.groups[code]):
            self.inbox[identity].append((event, payload))

    def send(self, identity, event, payload):
        self.inbox[identity].append((event, payload))

    def received(self, identity, event):
        return [payload for name, payload in self.inbox[identity] if name == event]

    def last(self, identity, event):
        payloads = self.received(identity, event)
        return payloads[-1] if payloads else None

    def broadcast_count(self, code, event):
        return sum(1 for c, e, _ in self.broadcasts if c == code and e == event)

    def clear(self):
        self.inbox.clear()
        self.broadcasts.clear()


WORD = {'word': 'Lighthouse', 'category': 'Places', 'hint': 'Near water'}


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def timer_factory():
    return ManualTimerFactory()


@pytest.fixture()
def timers(timer_factory):
    return TimerRegistry(timer_factory=timer_factory)


@pytest.fixture()
def store():
    return RoomStore(rng=random.Random(7))


@pytest.fixture()
def room_manager(store, timers, notifier):
    return RoomManager(
        store=store,
        player_manager=PlayerManager(max_players=12),
        disconnect_scheduler=DisconnectScheduler(timers, grace_seconds=30),
        notifier=notifier
    )


@pytest.fixture()
def game_manager(room_manager, timers):
    return GameManager(
        room_manager=room_manager,
        timers=timers,
        role_assigner=RoleAssigner(rng=random.Random(42)),
        vote_manager=VoteManager(),
        min_players=2,
        game_over_delay=10
    )


@pytest.fixture()
def make_room(room_manager):
    """Create a room hosted by sid-0 and seat ``count`` players in total."""
    names = ['Ann', 'Ben', 'Cid', 'Dee', 'Eve', 'Fay', 'Gus', 'Hal', 'Ivy', 'Jon', 'Kim', 'Lou', 'Max']

    def _make(count=4):
        room = room_manager.create_room('sid-0', names[0])
        for index in range(1, count):
            room_manager.join_room(room.code, f'sid-{index}', names[index])
        return room

    return _make


@pytest.fixture()
def started_room(make_room, game_manager):
    """A four-player game in progress with one impostor."""
    room = make_room(4)
    game_manager.start_game(room.code, 'sid-0', WORD, 1)
    return room


def impostor_ids(room):
    return [p.id for p in room.players if p.is_impostor]


def citizen_ids(room):
    return [p.id for p in room.players if not p.is_impostor]


def vote_out(game_manager, room, target_id):
    """Every living player votes for ``target_id``."""
    game_manager.start_voting(room.code, room.host_id)
    for player in list(room.living_players):
        game_manager.cast_vote(room.code, player.id, target_id)
