"""
Board tile definitions and types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class TileKind(Enum):
    """Kinds of path tiles a player can stand on."""

    START = "start"
    OFFICE = "office"
    TREASURY = "treasury"
    ACQUIRE = "acquire"
    EXPAND = "expand"
    DECORATIVE = "decorative"


class Entrance(Enum):
    """Direction of an entrance placed on a path tile."""

    NONE = "none"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    NORTH = "north"

    @property
    def delta(self) -> Tuple[int, int]:
        """(row, column) offset from a tile to the neighbour in this direction."""
        return _DELTAS[self]


_DELTAS = {
    Entrance.NONE: (0, 0),
    Entrance.EAST: (0, 1),
    Entrance.SOUTH: (1, 0),
    Entrance.WEST: (0, -1),
    Entrance.NORTH: (-1, 0),
}

# Neighbour scan order used by path building and adjacency queries.
DIRECTIONS = (Entrance.EAST, Entrance.SOUTH, Entrance.WEST, Entrance.NORTH)

# Board file tokens for path tiles.
TOKEN_KINDS = {
    "S": TileKind.START,
    "C": TileKind.OFFICE,
    "B": TileKind.TREASURY,
    "H": TileKind.ACQUIRE,
    "E": TileKind.EXPAND,
    "F": TileKind.DECORATIVE,
}


@dataclass
class PathTile:
    """
    A tile players move over.

    Path tiles live in the board's path arena; ``index`` is the tile's slot
    there and ``next_index`` the slot of its successor on the cycle.
    Decorative tiles never get a successor.
    """

    index: int
    row: int
    col: int
    kind: TileKind
    entrance: Entrance = Entrance.NONE
    next_index: Optional[int] = None

    @property
    def is_decorative(self) -> bool:
        return self.kind == TileKind.DECORATIVE

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def __repr__(self) -> str:
        return f"PathTile(index={self.index}, kind={self.kind.value}, at=({self.row}, {self.col}))"


@dataclass(frozen=True)
class PropertyTile:
    """A cell covered by a hotel. Several cells may belong to the same hotel."""

    hotel_id: int
    row: int
    col: int


Tile = Union[PathTile, PropertyTile]
