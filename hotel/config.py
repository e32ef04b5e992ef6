"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


@dataclass
class GameConfig:
    """Configuration for a hotel game."""

    starting_funds: int = 12000
    relief_amount: int = 1000
    num_players: int = 3

    seed: Optional[int] = None
    shuffle_turn_order: bool = True

    # When set, request_relief only succeeds on rounds that passed a treasury tile.
    strict_relief: bool = False

    max_rounds: Optional[int] = None


class HotelData(BaseModel):
    """Validated definition of a hotel, as read from a scenario."""

    model_config = ConfigDict(frozen=True)

    hotel_id: int = Field(ge=1)
    name: str = Field(min_length=1)
    buying_cost: int = Field(ge=0)
    forced_buying_cost: int = Field(ge=0)
    entrance_cost: int = Field(ge=0)
    building_costs: List[int] = Field(min_length=1)
    staying_costs: List[int] = Field(min_length=1)

    @model_validator(mode="after")
    def check_cost_schedule(self) -> "HotelData":
        """Building and staying costs are indexed by the same levels."""
        if len(self.building_costs) != len(self.staying_costs):
            raise ValueError(
                f"building_costs ({len(self.building_costs)}) and staying_costs "
                f"({len(self.staying_costs)}) must have the same length"
            )
        if any(c < 0 for c in self.building_costs + self.staying_costs):
            raise ValueError("costs must be non-negative")
        return self
