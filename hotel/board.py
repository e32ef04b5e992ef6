"""
The board grid: hotel cells and the path players move along.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from hotel.tiles import DIRECTIONS, Entrance, PathTile, PropertyTile, Tile, TileKind


class Board:
    """
    A rectangular grid of tiles.

    Every cell holds either a ``PathTile`` or a ``PropertyTile``. Path tiles are
    additionally kept in ``path_tiles`` (the arena) so that the cycle and the
    hotel fronts can be stored as plain indices. The cycle and the fronts are
    filled in by ``hotel.topology`` and are not changed afterwards.
    """

    def __init__(self, cells: Sequence[Sequence[Tile]]):
        if not cells or not cells[0]:
            raise ValueError("Board needs at least one row and one column")
        self.rows = len(cells)
        self.columns = len(cells[0])
        self.cells: List[List[Tile]] = [list(row) for row in cells]

        self.path_tiles: List[PathTile] = []
        for row in self.cells:
            for tile in row:
                if isinstance(tile, PathTile):
                    self.path_tiles.append(tile)

        self.start_index: Optional[int] = None
        self.fronts: Dict[int, Tuple[int, ...]] = {}

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, columns={self.columns}, path_tiles={len(self.path_tiles)})"

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.columns

    def get(self, row: int, col: int) -> Optional[Tile]:
        """Get the tile at (row, col), or None outside the grid."""
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def neighbour(self, row: int, col: int, direction: Entrance) -> Optional[Tile]:
        """Get the tile next to (row, col) in the given direction."""
        d_row, d_col = direction.delta
        return self.get(row + d_row, col + d_col)

    def path_tile(self, index: int) -> PathTile:
        return self.path_tiles[index]

    @property
    def start(self) -> PathTile:
        if self.start_index is None:
            raise ValueError("Board path has not been built")
        return self.path_tiles[self.start_index]

    def next_tile(self, tile: PathTile) -> PathTile:
        """Get the successor of a tile on the cycle."""
        if tile.next_index is None:
            raise ValueError(f"{tile!r} is not on the path")
        return self.path_tiles[tile.next_index]

    def cycle(self) -> Iterator[PathTile]:
        """Iterate over the cycle once, starting at the START tile."""
        tile = self.start
        while True:
            yield tile
            tile = self.next_tile(tile)
            if tile.index == self.start_index:
                return

    def cycle_length(self) -> int:
        return sum(1 for _ in self.cycle())

    def tiles_of_kind(self, kind: TileKind) -> List[PathTile]:
        return [t for t in self.path_tiles if t.kind == kind]

    def hotels_around(self, tile: PathTile) -> Dict[Entrance, int]:
        """
        Map each direction in which a hotel cell touches the tile to that hotel's id.

        Directions are reported in east, south, west, north order.
        """
        hotels: Dict[Entrance, int] = {}
        for direction in DIRECTIONS:
            other = self.neighbour(tile.row, tile.col, direction)
            if isinstance(other, PropertyTile):
                hotels[direction] = other.hotel_id
        return hotels

    def hotel_behind(self, tile: PathTile) -> Optional[int]:
        """Get the id of the hotel the tile's entrance opens into, if any."""
        if tile.entrance == Entrance.NONE:
            return None
        other = self.neighbour(tile.row, tile.col, tile.entrance)
        if isinstance(other, PropertyTile):
            return other.hotel_id
        return None

    def front_of(self, hotel_id: int) -> List[PathTile]:
        """Get the path tiles bordering a hotel, in cycle order from START."""
        return [self.path_tiles[i] for i in self.fronts.get(hotel_id, ())]

    def hotel_ids(self) -> List[int]:
        """Get the ids of all hotels placed on the grid."""
        ids = {tile.hotel_id for row in self.cells for tile in row if isinstance(tile, PropertyTile)}
        return sorted(ids)

    def position_of(self, index: int) -> Tuple[int, int]:
        """Get the (row, col) of a path tile."""
        return self.path_tiles[index].position
