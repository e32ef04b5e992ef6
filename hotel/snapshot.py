"""
Public snapshot serialization of GameState.

Produces a UI-friendly, JSON-ready view of the current game for
presentation layers.
"""

from __future__ import annotations

from typing import Any, Dict, List

from hotel.game import GameState


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The snapshot includes:
    - round number, current player and dice result
    - players with funds, peak funds, grid position and owned hotels
    - hotels with owner and construction level
    - entrances placed on the board
    - the actions enabled for the current round
    """
    positions = game.player_positions()
    entrances_by_player = game.players_entrances()

    players: List[Dict[str, Any]] = []
    for pid, pstate in sorted(game.players.items()):
        players.append(
            {
                "player_id": pid,
                "name": pstate.name,
                "funds": pstate.funds,
                "peak_funds": pstate.peak_funds,
                "position": list(positions[pid]) if positions[pid] is not None else None,
                "is_active": pstate.is_active,
                "hotels": sorted(pstate.hotels),
                "hotel_count": len(pstate.hotels),
                "entrances": entrances_by_player[pid],
            }
        )

    hotels: List[Dict[str, Any]] = []
    for hid in game.hotel_ids():
        hotel = game.hotels[hid]
        hotels.append(
            {
                "hotel_id": hid,
                "name": hotel.name,
                "owner_id": hotel.owner_id,
                "level": hotel.level,
                "max_level": hotel.max_level,
            }
        )

    entrances: List[Dict[str, Any]] = []
    for tile in game.board.cycle():
        hid = game.board.hotel_behind(tile)
        if hid is not None:
            entrances.append({"position": list(tile.position), "direction": tile.entrance.value, "hotel_id": hid})

    return {
        "round_number": game.round_number,
        "current_player_id": game.current_player_id,
        "turn_order": list(game.turn_order),
        "dice_roll": game.last_dice_roll,
        "players": players,
        "hotels": hotels,
        "available_hotels": game.available_hotels(),
        "entrances": entrances,
        "enabled_actions": sorted(a.value for a in game.enabled_actions()),
        "game_over": game.game_over,
        "winner": game.winner,
    }
