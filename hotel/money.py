"""
Money transfers and event logging.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from hotel.player import PlayerState


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    MOVE = "move"

    RELIEF = "relief"
    TOLL_PAYMENT = "toll_payment"

    PURCHASE = "purchase"
    BUILD = "build"
    BUILD_REJECTED = "build_rejected"
    ENTRANCE_PURCHASE = "entrance_purchase"

    BANKRUPTCY = "bankruptcy"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the game event log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        """Log a game event."""
        event = GameEvent(event_type, player_id, details)
        self.events.append(event)

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]


def transfer(payer: Optional[PlayerState], payee: Optional[PlayerState], amount: int) -> None:
    """
    Move money between two parties. ``None`` stands for the bank,
    which has unlimited funds and absorbs any payment.
    """
    if amount < 0:
        raise ValueError(f"Cannot transfer a negative amount: {amount}")
    if payer is not None:
        payer.pay(amount)
    if payee is not None:
        payee.earn(amount)
