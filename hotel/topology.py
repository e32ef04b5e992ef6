"""
One-time derivation of the board topology.

Builds the single movement cycle over the path tiles and the index of
hotel fronts (path tiles bordering each hotel) from a raw grid layout.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from hotel.board import Board
from hotel.exceptions import BoardTopologyError, ConfigurationError
from hotel.tiles import DIRECTIONS, TOKEN_KINDS, PathTile, PropertyTile, Tile, TileKind

logger = logging.getLogger(__name__)

LayoutToken = Union[str, int]


def parse_layout(layout: Sequence[Sequence[LayoutToken]]) -> List[List[Tile]]:
    """
    Turn a grid of layout tokens into tiles.

    A token is either a hotel id (int, or a string of digits) or one of the
    path letters in ``TOKEN_KINDS``.

    Raises:
        ConfigurationError: on ragged rows or unknown tokens
    """
    if not layout or not layout[0]:
        raise ConfigurationError("Board layout is empty")

    width = len(layout[0])
    cells: List[List[Tile]] = []
    path_count = 0
    for r, row in enumerate(layout):
        if len(row) != width:
            raise ConfigurationError(f"Board row {r} has {len(row)} cells, expected {width}")
        cells_row: List[Tile] = []
        for c, token in enumerate(row):
            if isinstance(token, int) or str(token).strip().isdecimal():
                cells_row.append(PropertyTile(int(token), r, c))
                continue
            kind = TOKEN_KINDS.get(str(token).strip().upper())
            if kind is None:
                raise ConfigurationError(f"Unknown board token {token!r} at ({r}, {c})")
            cells_row.append(PathTile(path_count, r, c, kind))
            path_count += 1
        cells.append(cells_row)
    return cells


def _find_seed(board: Board) -> PathTile:
    """First non-decorative path tile in row-major order."""
    for tile in board.path_tiles:
        if not tile.is_decorative:
            return tile
    raise BoardTopologyError("Board has no path tiles")


def _step(board: Board, current: PathTile, previous: Optional[PathTile]) -> Optional[PathTile]:
    """Pick the successor of ``current`` using east, south, west, north priority."""
    for direction in DIRECTIONS:
        other = board.neighbour(current.row, current.col, direction)
        if not isinstance(other, PathTile) or other.is_decorative:
            continue
        if previous is not None and other.index == previous.index:
            continue
        return other
    return None


def build_cycle(board: Board) -> PathTile:
    """
    Link every non-decorative path tile into one directed cycle.

    Sets ``next_index`` on the tiles and ``board.start_index``.

    Returns:
        The START tile

    Raises:
        BoardTopologyError: if there is not exactly one START tile, or the
            tiles do not form a single closed loop covering all of them
    """
    starts = board.tiles_of_kind(TileKind.START)
    if len(starts) != 1:
        raise BoardTopologyError(f"Board must have exactly one start tile, found {len(starts)}")

    seed = _find_seed(board)
    previous: Optional[PathTile] = None
    current = seed
    linked = 0
    while True:
        nxt = _step(board, current, previous)
        if nxt is None:
            raise BoardTopologyError(f"Path is broken at ({current.row}, {current.col})")
        current.next_index = nxt.index
        linked += 1
        if nxt.next_index is not None:
            if nxt.index != seed.index:
                raise BoardTopologyError(
                    f"Path loops back into itself at ({nxt.row}, {nxt.col}) instead of closing"
                )
            break
        previous, current = current, nxt

    expected = sum(1 for t in board.path_tiles if not t.is_decorative)
    if linked != expected:
        raise BoardTopologyError(
            f"Path covers {linked} of {expected} path tiles; the board must form a single loop"
        )

    board.start_index = starts[0].index
    logger.debug("Built path cycle of %d tiles", linked)
    return starts[0]


def build_front_index(board: Board) -> Dict[int, Tuple[int, ...]]:
    """
    Collect, for each hotel, the path tiles orthogonally adjacent to any of its cells.

    The cycle is walked once from START, so each front lists its tiles in
    cycle order. The result is also stored on ``board.fronts``.
    """
    fronts: Dict[int, List[int]] = {}
    for tile in board.cycle():
        for hotel_id in board.hotels_around(tile).values():
            members = fronts.setdefault(hotel_id, [])
            if tile.index not in members:
                members.append(tile.index)

    board.fronts = {hotel_id: tuple(members) for hotel_id, members in fronts.items()}
    return board.fronts


def create_board(
    layout: Sequence[Sequence[LayoutToken]],
    hotel_ids: Optional[Iterable[int]] = None,
) -> Board:
    """
    Build a ready-to-play board from a layout grid.

    Args:
        layout: Grid of layout tokens
        hotel_ids: Ids of the defined hotels; when given, every hotel cell on
            the grid must refer to one of them

    Raises:
        ConfigurationError: if the layout or the hotel references are invalid
    """
    board = Board(parse_layout(layout))

    if hotel_ids is not None:
        known = set(hotel_ids)
        missing = [hid for hid in board.hotel_ids() if hid not in known]
        if missing:
            raise ConfigurationError(f"Board references undefined hotels: {missing}")

    build_cycle(board)
    build_front_index(board)
    return board
