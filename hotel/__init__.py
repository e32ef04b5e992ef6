"""
Hotel Rules Engine

A turn-based hotel-trading board game: board topology, economy and
round flow, with seedable randomness.
"""

from .game import ActionType, GameState, RoundState, create_game
from .player import Player, PlayerState
from .board import Board
from .hotels import Hotel
from .config import GameConfig, HotelData

__all__ = [
    "ActionType",
    "GameState",
    "RoundState",
    "create_game",
    "Player",
    "PlayerState",
    "Board",
    "Hotel",
    "GameConfig",
    "HotelData",
]
