"""
JSONL logger for hotel game events.

Writes the engine's event log, plus optional per-round player snapshots,
to a JSONL file.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from hotel.game import GameState
from hotel.money import GameEvent


def _jsonable(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_jsonable(v) for v in value]
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def map_event(game: GameState, event: GameEvent) -> Dict[str, Any]:
    """Map an engine GameEvent to a flat, JSON-friendly dict."""
    mapped: Dict[str, Any] = {"event_type": event.event_type.value}
    if event.player_id is not None:
        mapped["player_id"] = event.player_id
        mapped["player_name"] = game.players[event.player_id].name
    for key, value in event.details.items():
        mapped[key] = _jsonable(value)
    for key in ("owner", "creditor"):
        if mapped.get(key) is not None:
            mapped[f"{key}_name"] = game.players[mapped[key]].name
    return mapped


class GameLogger:
    """Logger that writes game events to a JSONL file."""

    def __init__(self, log_file: Optional[str] = None):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file. If None, generates timestamped filename.
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"hotel_game_{timestamp}.jsonl"

        self.log_file = Path(log_file)
        self.event_count = 0
        self._engine_last_idx = 0  # last flushed index from engine's internal EventLog

        # Create/clear log file
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.log_file.write_text("", encoding="utf-8")

    def log_event(self, event_type: str, **kwargs):
        """
        Log a game event to JSONL file.

        Args:
            event_type: Type of event (e.g., "game_start", "dice_roll", "purchase")
            **kwargs: Additional event data
        """
        event = {
            "event_id": self.event_count,
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
            **kwargs,
        }

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(event) + "\n")

        self.event_count += 1

    def flush_engine_events(self, game: GameState) -> int:
        """Flush new internal engine events to JSONL.

        Returns the number of events written.
        """
        events = game.event_log.events
        if self._engine_last_idx >= len(events):
            return 0

        wrote = 0
        for event in events[self._engine_last_idx :]:
            mapped = map_event(game, event)
            mapped.setdefault("round_number", game.round_number)
            etype = mapped.pop("event_type")
            self.log_event(etype, **mapped)
            wrote += 1

        self._engine_last_idx = len(events)
        return wrote

    def log_round_snapshot(self, game: GameState) -> None:
        """Log the state of every player at the end of a round."""
        positions = game.player_positions()
        entrances = game.players_entrances()
        for player_id, player in sorted(game.players.items()):
            self.log_event(
                "player_state",
                round_number=game.round_number,
                player_id=player_id,
                player_name=player.name,
                funds=player.funds,
                peak_funds=player.peak_funds,
                position=_jsonable(positions[player_id]),
                hotels=sorted(player.hotels),
                entrances=entrances[player_id],
                is_active=player.is_active,
            )
