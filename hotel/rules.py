"""
High-level rules API for driving a game.
This module lists the concrete actions open to the current player and
dispatches chosen actions to the engine.
"""

from typing import Any, List

from hotel.exceptions import InvalidActionError
from hotel.game import ActionType, GameState
from hotel.tiles import Entrance, TileKind


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, **params: Any):
        self.action_type = action_type
        self.params = params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Action):
            return NotImplemented
        return self.action_type == other.action_type and self.params == other.params


def _has_free_front_tile(game: GameState, hotel_id: int) -> bool:
    return any(
        tile.entrance == Entrance.NONE and tile.kind in (TileKind.ACQUIRE, TileKind.EXPAND)
        for tile in game.board.front_of(hotel_id)
    )


def get_legal_actions(game_state: GameState) -> List[Action]:
    """
    Get the actions the current player can meaningfully take this round.

    Only actions enabled for the round are considered, and for hotel actions
    only hotels that pass the engine's checks (building requests can still
    be rejected or turn out too expensive by the draw).

    Args:
        game_state: Current game state

    Returns:
        List of legal Action objects
    """
    enabled = game_state.enabled_actions()
    if not enabled:
        return []

    player = game_state.get_current_player()
    actions: List[Action] = []

    if ActionType.REQUEST_RELIEF in enabled:
        actions.append(Action(ActionType.REQUEST_RELIEF))

    if ActionType.BUY_HOTEL in enabled:
        tile = game_state.board.path_tile(player.position)
        for hotel_id in sorted(set(game_state.board.hotels_around(tile).values())):
            hotel = game_state.hotels[hotel_id]
            if hotel.owner_id == player.player_id:
                continue
            if hotel.is_owned() and hotel.is_built():
                continue
            price = hotel.buying_cost if not hotel.is_owned() else hotel.forced_buying_cost
            if player.can_afford(price):
                actions.append(Action(ActionType.BUY_HOTEL, hotel_id=hotel_id))

    if ActionType.REQUEST_BUILDING in enabled:
        for hotel_id in sorted(player.hotels):
            if game_state.hotels[hotel_id].next_building_cost() is not None:
                actions.append(Action(ActionType.REQUEST_BUILDING, hotel_id=hotel_id))

    if ActionType.BUY_ENTRANCE in enabled:
        for hotel_id in sorted(player.hotels):
            hotel = game_state.hotels[hotel_id]
            if not hotel.is_built() or not player.can_afford(hotel.entrance_cost):
                continue
            if _has_free_front_tile(game_state, hotel_id):
                actions.append(Action(ActionType.BUY_ENTRANCE, hotel_id=hotel_id))

    return actions


def apply_action(game_state: GameState, action: Action) -> bool:
    """
    Apply an action for the current player.

    Returns:
        The engine's result for the action

    Raises:
        InvalidActionError: if the action type is not a discretionary action
    """
    if action.action_type == ActionType.REQUEST_RELIEF:
        return game_state.request_relief()
    if action.action_type == ActionType.BUY_HOTEL:
        return game_state.buy_hotel(action.params["hotel_id"])
    if action.action_type == ActionType.REQUEST_BUILDING:
        return game_state.request_building(action.params["hotel_id"])
    if action.action_type == ActionType.BUY_ENTRANCE:
        return game_state.buy_entrance(action.params["hotel_id"])
    raise InvalidActionError(f"Unknown action type: {action.action_type}")
