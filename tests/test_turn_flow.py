"""
Tests for round flow: rotation, dice, movement and action eligibility.
"""

import random

import pytest
from hotel.config import GameConfig
from hotel.exceptions import ConfigurationError, InvalidActionError
from hotel.game import ActionType, create_game
from hotel.player import Player

from conftest import ALICE, BOB, CHARLIE, HOTELS, LAYOUT, give_hotel, place, tile_at


def positions(game, indices):
    return [game.board.position_of(i) for i in indices]


def test_initial_state(basic_game):
    """Everybody starts on START with the starting stake and nobody is current."""
    assert basic_game.get_current_player() is None
    assert basic_game.last_dice_roll is None
    assert basic_game.enabled_actions() == set()
    assert basic_game.turn_order == [ALICE, BOB]

    for player in basic_game.players.values():
        assert player.funds == 12000
        assert player.peak_funds == 12000
        assert player.is_active
        assert basic_game.board.path_tile(player.position).position == (1, 0)


def test_basic_round(basic_game, rng):
    rng.push(3)
    round_state = basic_game.advance_round()

    assert basic_game.get_current_player().player_id == ALICE
    assert round_state.dice_roll == 3
    assert basic_game.last_dice_roll == 3
    assert positions(basic_game, round_state.path) == [(1, 1), (1, 2), (1, 3)]
    assert basic_game.player_positions()[ALICE] == (1, 3)
    assert round_state.passed_treasury
    assert not round_state.passed_office


def test_rotation_alternates(basic_game, rng):
    rng.push(1, 1, 1)

    basic_game.advance_round()
    assert basic_game.current_player_id == ALICE
    basic_game.advance_round()
    assert basic_game.current_player_id == BOB
    basic_game.advance_round()
    assert basic_game.current_player_id == ALICE
    assert basic_game.round_number == 3


def test_rotation_skips_inactive_players(three_player_game, rng):
    game = three_player_game
    game.players[BOB].is_active = False
    game.players[BOB].position = None
    rng.push(1, 1, 1)

    order = []
    for _ in range(3):
        game.advance_round()
        order.append(game.current_player_id)

    assert order == [ALICE, CHARLIE, ALICE]


def test_shuffled_turn_order_is_seeded():
    players = [Player(1, "Alice"), Player(2, "Bob"), Player(3, "Charlie")]
    first = create_game(GameConfig(seed=5), players, LAYOUT, HOTELS)
    second = create_game(GameConfig(seed=5), players, LAYOUT, HOTELS)

    assert first.turn_order == second.turn_order
    assert sorted(first.turn_order) == [ALICE, BOB, CHARLIE]


def test_player_count_must_match_config():
    players = [Player(1, "Alice"), Player(2, "Bob")]

    with pytest.raises(ConfigurationError):
        create_game(GameConfig(num_players=3), players, LAYOUT, HOTELS)


def test_move_past_occupied_destination(basic_game, rng):
    """Landing on another player's tile pushes the mover one tile further."""
    place(basic_game, BOB, 1, 3)
    rng.push(3)

    round_state = basic_game.advance_round()

    assert positions(basic_game, round_state.path) == [(1, 1), (1, 2), (1, 3), (1, 4)]
    assert basic_game.player_positions()[ALICE] == (1, 4)


def test_move_past_several_occupied_tiles(three_player_game, rng):
    game = three_player_game
    place(game, BOB, 1, 3)
    place(game, CHARLIE, 1, 4)
    rng.push(3)

    round_state = game.advance_round()

    assert game.board.position_of(round_state.destination) == (1, 5)
    assert len(round_state.path) == 5


def test_passing_occupied_tile_is_allowed(basic_game, rng):
    place(basic_game, BOB, 1, 2)
    rng.push(3)

    basic_game.advance_round()

    assert basic_game.player_positions()[ALICE] == (1, 3)


def test_movement_wraps_around_start(basic_game, rng):
    place(basic_game, ALICE, 2, 0)
    place(basic_game, BOB, 3, 0)
    rng.push(2)

    round_state = basic_game.advance_round()

    assert positions(basic_game, round_state.path) == [(1, 0), (1, 1)]


def test_expand_tile_enables_building_and_entrance(basic_game, rng):
    rng.push(3)
    basic_game.advance_round()

    assert basic_game.enabled_actions() == {
        ActionType.REQUEST_RELIEF,
        ActionType.BUY_ENTRANCE,
        ActionType.REQUEST_BUILDING,
    }


def test_acquire_tile_enables_buying_next_to_unbuilt_hotel(basic_game, rng):
    rng.push(1)
    basic_game.advance_round()

    assert basic_game.enabled_actions() == {ActionType.BUY_HOTEL}


def test_acquire_tile_next_to_built_hotels_only(basic_game, rng):
    give_hotel(basic_game, BOB, 1, level=0)
    give_hotel(basic_game, BOB, 4, level=1)
    rng.push(1)

    basic_game.advance_round()

    assert basic_game.enabled_actions() == set()


def test_office_passed_enables_entrance(three_player_game, rng):
    game = three_player_game
    place(game, BOB, 1, 3)
    place(game, CHARLIE, 1, 4)
    rng.push(3)

    game.advance_round()

    assert game.enabled_actions() == {ActionType.REQUEST_RELIEF, ActionType.BUY_ENTRANCE}


def test_origin_tile_does_not_count_as_passed(basic_game, rng):
    """Starting on a treasury tile does not make relief available."""
    place(basic_game, ALICE, 1, 2)
    rng.push(1)

    round_state = basic_game.advance_round()

    assert not round_state.passed_treasury
    assert ActionType.REQUEST_RELIEF not in basic_game.enabled_actions()


def test_flags_reset_each_round(basic_game, rng):
    rng.push(3, 1)
    basic_game.advance_round()
    assert ActionType.REQUEST_RELIEF in basic_game.enabled_actions()

    basic_game.advance_round()
    assert basic_game.current_player_id == BOB
    assert basic_game.enabled_actions() == {ActionType.BUY_HOTEL}


def test_advance_after_game_over_raises(basic_game):
    basic_game.game_over = True
    basic_game.winner = BOB

    with pytest.raises(InvalidActionError):
        basic_game.advance_round()


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_destination_is_never_shared(seed):
    """Across many rounds the mover never ends on another active player's tile."""
    players = [Player(1, "Alice"), Player(2, "Bob"), Player(3, "Charlie")]
    game = create_game(GameConfig(seed=seed), players, LAYOUT, HOTELS, rng=random.Random(seed))

    for _ in range(300):
        round_state = game.advance_round()
        assert 1 <= round_state.dice_roll <= 6
        assert len(round_state.path) >= round_state.dice_roll

        mover = game.players[round_state.player_id]
        for other in game.get_active_players():
            if other.player_id != mover.player_id:
                assert other.position != mover.position

        decorative = tile_at(game, 2, 3).index
        assert decorative not in round_state.path
