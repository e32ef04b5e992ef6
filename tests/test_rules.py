"""
Tests for the legal-action listing and action dispatch.
"""

import pytest
from hotel.exceptions import InvalidActionError
from hotel.game import ActionType
from hotel.rules import Action, apply_action, get_legal_actions
from hotel.tiles import Entrance

from conftest import ALICE, BOB, give_hotel, open_entrance


def test_no_actions_before_first_round(basic_game):
    assert get_legal_actions(basic_game) == []


def test_buyable_hotels_listed(basic_game, rng):
    rng.push(1)
    basic_game.advance_round()

    actions = get_legal_actions(basic_game)

    assert actions == [
        Action(ActionType.BUY_HOTEL, hotel_id=1),
        Action(ActionType.BUY_HOTEL, hotel_id=4),
    ]


def test_unaffordable_hotels_not_listed(basic_game, rng):
    basic_game.players[ALICE].funds = 1200
    give_hotel(basic_game, BOB, 1)
    rng.push(1)
    basic_game.advance_round()

    # Aurora's forced price is 1500 and Dune costs 2000
    assert get_legal_actions(basic_game) == []


def test_expand_tile_actions(basic_game, rng):
    give_hotel(basic_game, ALICE, 2, level=0)
    give_hotel(basic_game, ALICE, 3, level=0)
    rng.push(3)
    basic_game.advance_round()

    actions = get_legal_actions(basic_game)

    assert Action(ActionType.REQUEST_RELIEF) in actions
    assert Action(ActionType.REQUEST_BUILDING, hotel_id=2) in actions
    # Cosmo is fully built
    assert Action(ActionType.REQUEST_BUILDING, hotel_id=3) not in actions
    assert Action(ActionType.BUY_ENTRANCE, hotel_id=2) in actions
    assert Action(ActionType.BUY_ENTRANCE, hotel_id=3) in actions


def test_entrance_not_listed_without_free_tile(basic_game, rng):
    give_hotel(basic_game, ALICE, 2, level=0)
    open_entrance(basic_game, 1, 3, Entrance.NORTH)
    rng.push(3)
    basic_game.advance_round()

    actions = get_legal_actions(basic_game)

    assert Action(ActionType.BUY_ENTRANCE, hotel_id=2) not in actions


def test_apply_action_dispatches(basic_game, rng):
    rng.push(1)
    basic_game.advance_round()

    assert apply_action(basic_game, Action(ActionType.BUY_HOTEL, hotel_id=1))
    assert basic_game.hotels[1].owner_id == ALICE
    assert get_legal_actions(basic_game) == []


def test_apply_action_building_and_relief(basic_game, rng):
    give_hotel(basic_game, ALICE, 2)
    rng.push(3, 40)
    basic_game.advance_round()

    assert apply_action(basic_game, Action(ActionType.REQUEST_BUILDING, hotel_id=2))
    assert apply_action(basic_game, Action(ActionType.REQUEST_RELIEF))
    assert basic_game.hotels[2].level == 0
    assert basic_game.players[ALICE].funds == 12000 - 600 + 1000


def test_apply_unknown_action_type(basic_game):
    with pytest.raises(InvalidActionError):
        apply_action(basic_game, Action("teleport"))


def test_no_actions_after_game_over(basic_game, rng):
    rng.push(1)
    basic_game.advance_round()
    basic_game.game_over = True

    assert get_legal_actions(basic_game) == []
