"""
Player state and management.
"""

from typing import Optional


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(self, player_id: int, name: str, starting_funds: int):
        self.player_id = player_id
        self.name = name
        self.funds = starting_funds
        self.peak_funds = starting_funds
        self.is_active = True
        self.position: Optional[int] = None  # path tile index, None once eliminated
        self.hotels: set[int] = set()

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', "
            f"funds={self.funds}, position={self.position}, active={self.is_active})"
        )

    def earn(self, amount: int) -> None:
        """Add funds, keeping the peak up to date."""
        self.funds += amount
        if self.funds > self.peak_funds:
            self.peak_funds = self.funds

    def pay(self, amount: int) -> None:
        self.funds -= amount

    def can_afford(self, amount: int) -> bool:
        return self.funds >= amount


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(self, player_id: int, name: str):
        self.player_id = player_id
        self.name = name

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}')"
