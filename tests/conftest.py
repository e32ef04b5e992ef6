"""Shared test fixtures for hotel engine tests."""

import random

import pytest
from hotel.config import GameConfig, HotelData
from hotel.game import create_game
from hotel.player import Player
from hotel.tiles import Entrance

# 5 x 6 board. The path is the ring of rows 1 and 3 joined at columns 0 and 5;
# (2, 3) is decorative. Cycle from START:
#   (1,0) S  (1,1) H  (1,2) B  (1,3) E  (1,4) H  (1,5) C  (2,5) H
#   (3,5) H  (3,4) B  (3,3) H  (3,2) C  (3,1) H  (3,0) E  (2,0) H
LAYOUT = [
    [1, 1, 2, 2, 3, 3],
    ["S", "H", "B", "E", "H", "C"],
    ["H", 4, 4, "F", 5, "H"],
    ["E", "H", "C", "H", "B", "H"],
    [6, 6, 6, 6, 6, 6],
]

CYCLE = [
    (1, 0), (1, 1), (1, 2), (1, 3), (1, 4), (1, 5), (2, 5),
    (3, 5), (3, 4), (3, 3), (3, 2), (3, 1), (3, 0), (2, 0),
]

HOTELS = [
    HotelData(hotel_id=1, name="Aurora", buying_cost=1000, forced_buying_cost=1500, entrance_cost=200,
              building_costs=[500, 800], staying_costs=[100, 300]),
    HotelData(hotel_id=2, name="Bellagio", buying_cost=1200, forced_buying_cost=1600, entrance_cost=250,
              building_costs=[600, 900], staying_costs=[300, 500]),
    HotelData(hotel_id=3, name="Cosmo", buying_cost=900, forced_buying_cost=1300, entrance_cost=150,
              building_costs=[400], staying_costs=[80]),
    HotelData(hotel_id=4, name="Dune", buying_cost=2000, forced_buying_cost=2500, entrance_cost=300,
              building_costs=[1000, 1500, 2000], staying_costs=[200, 300, 400]),
    HotelData(hotel_id=5, name="Eden", buying_cost=1500, forced_buying_cost=2000, entrance_cost=250,
              building_costs=[700, 1000], staying_costs=[150, 600]),
    HotelData(hotel_id=6, name="Flamingo", buying_cost=3000, forced_buying_cost=3600, entrance_cost=500,
              building_costs=[1200, 1800], staying_costs=[250, 400]),
]

ALICE, BOB, CHARLIE = 1, 2, 3


class ScriptedRandom(random.Random):
    """Random source whose randint replays a fixed list of values."""

    def __init__(self, values=()):
        super().__init__(0)
        self.values = list(values)

    def push(self, *values):
        self.values.extend(values)

    def randint(self, a, b):
        if not self.values:
            raise AssertionError(f"No scripted value left for randint({a}, {b})")
        value = self.values.pop(0)
        assert a <= value <= b, f"Scripted value {value} outside [{a}, {b}]"
        return value


def tile_at(game, row, col):
    """Path tile at the given grid coordinates."""
    return game.board.get(row, col)


def place(game, player_id, row, col):
    """Put a player on the path tile at (row, col)."""
    game.players[player_id].position = tile_at(game, row, col).index


def give_hotel(game, player_id, hotel_id, level=-1):
    """Hand a hotel to a player at the given construction level."""
    hotel = game.hotels[hotel_id]
    hotel.owner_id = player_id
    hotel.level = level
    game.players[player_id].hotels.add(hotel_id)


def open_entrance(game, row, col, direction: Entrance):
    tile_at(game, row, col).entrance = direction


@pytest.fixture
def rng():
    """Scripted random source; push dice and building draws onto it."""
    return ScriptedRandom()


@pytest.fixture
def make_game(rng):
    """Factory for games on the test board with a fixed turn order."""

    def _make(num_players=2, **config_overrides):
        names = ["Alice", "Bob", "Charlie"]
        players = [Player(i + 1, names[i]) for i in range(num_players)]
        config = GameConfig(shuffle_turn_order=False, num_players=num_players, **config_overrides)
        return create_game(config, players, LAYOUT, HOTELS, rng=rng)

    return _make


@pytest.fixture
def basic_game(make_game):
    """Two-player game: Alice moves first, both on START."""
    return make_game()


@pytest.fixture
def three_player_game(make_game):
    return make_game(num_players=3)
