"""
Custom exception hierarchy for the hotel game engine.

Action-level rejections (insufficient funds, wrong owner, ...) are reported
as boolean results by the engine; these exceptions cover configuration
failures and calls that make no sense in the current state.
"""


class HotelGameError(Exception):
    """Base exception for all game-related errors."""


class ConfigurationError(HotelGameError):
    """Board or hotel definitions are malformed or inconsistent."""


class BoardTopologyError(ConfigurationError):
    """The board grid does not encode a single closed path."""


class InvalidActionError(HotelGameError):
    """Action is not legal in the current state."""
