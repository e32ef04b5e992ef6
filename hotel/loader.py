"""
Scenario loading from a boards directory.

A scenario is a directory holding ``board.txt`` (the grid) and one
``<hotel id>.txt`` file per hotel. Any problem here is fatal: the
engine assumes validated input.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from hotel.config import HotelData
from hotel.exceptions import ConfigurationError
from hotel.topology import LayoutToken

logger = logging.getLogger(__name__)

BOARD_FILE = "board.txt"
BOARD_ROWS = 12
BOARD_COLUMNS = 15

_SEPARATORS = re.compile(r"[,\s]+")


@dataclass
class Scenario:
    """A parsed scenario ready to be passed to ``create_game``."""

    name: str
    layout: List[List[LayoutToken]]
    hotels: List[HotelData]


def _tokens(text: str) -> List[str]:
    return [t for t in _SEPARATORS.split(text) if t]


def load_layout(path: Path, rows: int = BOARD_ROWS, columns: int = BOARD_COLUMNS) -> List[List[LayoutToken]]:
    """Read a board grid of ``rows`` x ``columns`` tokens."""
    try:
        tokens = _tokens(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read board file {path}: {e}") from e

    if len(tokens) != rows * columns:
        raise ConfigurationError(f"Board file {path} has {len(tokens)} cells, expected {rows * columns}")

    layout: List[List[LayoutToken]] = []
    for r in range(rows):
        row: List[LayoutToken] = []
        for token in tokens[r * columns : (r + 1) * columns]:
            row.append(int(token) if token.isdecimal() else token.upper())
        layout.append(row)
    return layout


def load_hotel(path: Path) -> HotelData:
    """
    Read a hotel description file.

    Format: the name on the first line, then buying cost, forced buying
    cost and entrance cost, then building / staying cost pairs.
    """
    try:
        hotel_id = int(path.stem)
    except ValueError as e:
        raise ConfigurationError(f"Hotel file name {path.name} is not a hotel id") from e

    try:
        name, _, rest = path.read_text(encoding="utf-8").partition("\n")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read hotel file {path}: {e}") from e

    try:
        numbers = [int(t) for t in _tokens(rest)]
    except ValueError as e:
        raise ConfigurationError(f"Corrupted hotel description file {path}") from e
    if len(numbers) < 5 or (len(numbers) - 3) % 2:
        raise ConfigurationError(f"Corrupted hotel description file {path}")

    pairs = numbers[3:]
    try:
        return HotelData(
            hotel_id=hotel_id,
            name=name.strip(),
            buying_cost=numbers[0],
            forced_buying_cost=numbers[1],
            entrance_cost=numbers[2],
            building_costs=pairs[0::2],
            staying_costs=pairs[1::2],
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid hotel description file {path}: {e}") from e


def load_scenario(directory: Path) -> Scenario:
    """Load the board and every hotel file of a scenario directory."""
    directory = Path(directory)
    board_file = directory / BOARD_FILE
    if not board_file.is_file():
        raise ConfigurationError(f"No {BOARD_FILE} in scenario {directory}")

    layout = load_layout(board_file)
    hotel_files = [p for p in directory.glob("*.txt") if p.name != BOARD_FILE]
    hotels = sorted((load_hotel(p) for p in hotel_files), key=lambda h: h.hotel_id)
    if not hotels:
        raise ConfigurationError(f"No hotel files in scenario {directory}")

    logger.info("Loaded scenario %s with %d hotels", directory.name, len(hotels))
    return Scenario(name=directory.name, layout=layout, hotels=hotels)


def pick_scenario(root: Path, rng: Optional[random.Random] = None) -> Scenario:
    """Load a scenario picked at random among the sub-directories of ``root``."""
    root = Path(root)
    if not root.is_dir():
        raise ConfigurationError(f"No boards directory found at {root}")
    candidates = sorted(p for p in root.iterdir() if p.is_dir())
    if not candidates:
        raise ConfigurationError(f"No scenarios in {root}")

    rng = rng or random.Random()
    return load_scenario(rng.choice(candidates))
