"""
Minimal CLI for running hotel games headless.

Loads a random scenario from the boards directory, then advances rounds,
taking every legal action each round, until one player is left or the
round limit is hit.
"""

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional

from hotel.config import GameConfig
from hotel.exceptions import ConfigurationError
from hotel.game import GameState, create_game
from hotel.game_logger import GameLogger
from hotel.loader import pick_scenario
from hotel.player import Player
from hotel.rules import apply_action, get_legal_actions
from hotel.settings import get_game_settings

logger = logging.getLogger(__name__)

PLAYER_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Hank"]
DEFAULT_MAX_ROUNDS = 5000


def print_game_state(game: GameState) -> None:
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"ROUND {game.round_number}  (dice: {game.last_dice_roll})")
    print("=" * 60)

    positions = game.player_positions()
    for player_id in game.turn_order:
        player = game.players[player_id]
        status = f"at {positions[player_id]}" if player.is_active else "BANKRUPT"
        print(
            f"Player {player_id} ({player.name}): {player.funds} | "
            f"{len(player.hotels)} hotels | {status}"
        )


def print_game_summary(game: GameState) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER" if game.game_over else "ROUND LIMIT REACHED")
    print("=" * 60)

    if game.winner is not None:
        winner = game.players[game.winner]
        print(f"\nWinner: {winner.name}")
        print(f"Final Funds: {winner.funds}")
        print(f"Hotels Owned: {len(winner.hotels)}")

    print("\nPeak funds / entrances:")
    entrances = game.players_entrances()
    for player_id, peak in game.players_peak_funds().items():
        player = game.players[player_id]
        status = "BANKRUPT" if not player.is_active else f"{player.funds}"
        print(f"  {player.name}: {status} (peak {peak}, {entrances[player_id]} entrances)")

    print(f"\nTotal Rounds: {game.round_number}")


def play_round(game: GameState) -> List[str]:
    """Advance one round and take every legal action. Returns the actions taken."""
    game.advance_round()
    taken: List[str] = []
    # Each successful action removes itself from the legal list
    for _ in range(len(game.hotels) * 4 + 4):
        legal = get_legal_actions(game)
        done = False
        for action in legal:
            if apply_action(game, action):
                taken.append(action.action_type.value)
                done = True
                break
        if not done:
            break
    return taken


def simulate_game(
    boards_dir: Path,
    num_players: int = 3,
    seed: Optional[int] = None,
    verbose: bool = True,
    max_rounds: Optional[int] = None,
    log_file: Optional[str] = None,
    config: Optional[GameConfig] = None,
) -> GameState:
    """
    Simulate a complete game.

    Args:
        boards_dir: Directory holding scenario directories
        num_players: Number of players (2-8)
        seed: Random seed for reproducibility
        verbose: Whether to print detailed output
        max_rounds: Maximum number of rounds
        log_file: Path to JSONL log file (None = auto-generate)
        config: Base game configuration; seed and player count are applied on top
    """
    rng = random.Random(seed)
    scenario = pick_scenario(boards_dir, rng)

    config = config or GameConfig()
    config.seed = seed
    config.num_players = num_players
    config.max_rounds = max_rounds or DEFAULT_MAX_ROUNDS

    players = [Player(i + 1, PLAYER_NAMES[i]) for i in range(num_players)]
    game = create_game(config, players, scenario.layout, scenario.hotels, rng=rng)

    game_logger = GameLogger(log_file) if log_file is not None else GameLogger()
    game_logger.flush_engine_events(game)

    if verbose:
        print(f"Starting game on scenario '{scenario.name}' with {num_players} players")
        print(f"Seed: {seed}")
        print(f"Logging to: {game_logger.log_file}")

    while not game.game_over and game.round_number < config.max_rounds:
        taken = play_round(game)
        game_logger.flush_engine_events(game)
        game_logger.log_round_snapshot(game)

        if verbose:
            if taken:
                print(f"  {game.get_current_player().name}: {', '.join(taken)}")
            if game.round_number % 25 == 0:
                print_game_state(game)

    game_logger.flush_engine_events(game)
    if not game.game_over:
        logger.warning("Stopped after %d rounds without a winner", game.round_number)

    if verbose:
        print_game_summary(game)
        print(f"\nGame logged to: {game_logger.log_file}")

    return game


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    settings = get_game_settings()

    parser = argparse.ArgumentParser(description="Simulate a hotel game")
    parser.add_argument(
        "--boards",
        type=Path,
        default=settings.boards_dir,
        help="Directory of scenario directories",
    )
    parser.add_argument(
        "--players",
        type=int,
        default=settings.num_players,
        choices=range(2, 9),
        help="Number of players (2-8)",
    )
    parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=None,
        help=f"Maximum number of rounds (default: {DEFAULT_MAX_ROUNDS})",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to JSONL log file (default: timestamped file in the log directory)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    log_file = args.log_file
    if log_file is None:
        log_file = str(settings.log_dir / f"hotel_game_{args.seed if args.seed is not None else 'random'}.jsonl")

    try:
        simulate_game(
            boards_dir=args.boards,
            num_players=args.players,
            seed=args.seed,
            verbose=not args.quiet,
            max_rounds=args.max_rounds,
            log_file=log_file,
            config=settings.to_game_config(),
        )
    except ConfigurationError as e:
        logger.error("Cannot start game: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
