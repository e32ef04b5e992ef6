"""
Hotel ownership and construction state.
"""

from typing import List, Optional, Tuple

from hotel.config import HotelData

UNBUILT = -1


class Hotel:
    """
    A purchasable hotel.

    ``level`` is -1 while the hotel is unbuilt and otherwise indexes
    ``building_costs`` / ``staying_costs``. Only the game engine changes
    ``owner_id`` and ``level``.
    """

    def __init__(
        self,
        hotel_id: int,
        name: str,
        buying_cost: int,
        forced_buying_cost: int,
        entrance_cost: int,
        building_costs: List[int],
        staying_costs: List[int],
    ):
        if len(building_costs) != len(staying_costs):
            raise ValueError("building_costs and staying_costs must have the same length")
        self.hotel_id = hotel_id
        self.name = name
        self.buying_cost = buying_cost
        self.forced_buying_cost = forced_buying_cost
        self.entrance_cost = entrance_cost
        self.building_costs: Tuple[int, ...] = tuple(building_costs)
        self.staying_costs: Tuple[int, ...] = tuple(staying_costs)
        self.owner_id: Optional[int] = None
        self.level = UNBUILT

    @classmethod
    def from_data(cls, data: HotelData) -> "Hotel":
        return cls(
            data.hotel_id,
            data.name,
            data.buying_cost,
            data.forced_buying_cost,
            data.entrance_cost,
            list(data.building_costs),
            list(data.staying_costs),
        )

    def __repr__(self) -> str:
        return f"Hotel(id={self.hotel_id}, name='{self.name}', owner={self.owner_id}, level={self.level})"

    @property
    def max_level(self) -> int:
        return len(self.building_costs) - 1

    def is_owned(self) -> bool:
        return self.owner_id is not None

    def is_built(self) -> bool:
        return self.level > UNBUILT

    def is_fully_built(self) -> bool:
        return self.level >= self.max_level

    def next_building_cost(self) -> Optional[int]:
        """Cost of the next upgrade, or None if the hotel is fully built."""
        if self.is_fully_built():
            return None
        return self.building_costs[self.level + 1]

    def staying_cost(self) -> int:
        """Per-pip cost of a stay at the current level (0 while unbuilt)."""
        if not self.is_built():
            return 0
        return self.staying_costs[self.level]

    def toll(self, dice_roll: int) -> int:
        """Amount owed for a stay with the given dice roll."""
        return self.staying_cost() * dice_roll

    def upgrade(self) -> None:
        if not self.is_fully_built():
            self.level += 1

    def tear_down(self) -> None:
        self.level = UNBUILT
