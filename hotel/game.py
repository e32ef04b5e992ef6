"""
Main game engine and state management.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from hotel.board import Board
from hotel.config import GameConfig, HotelData
from hotel.exceptions import ConfigurationError, InvalidActionError
from hotel.hotels import Hotel
from hotel.money import EventLog, EventType, transfer
from hotel.player import Player, PlayerState
from hotel.tiles import Entrance, PathTile, TileKind
from hotel.topology import LayoutToken, create_board

logger = logging.getLogger(__name__)

BUILD_REGULAR_MAX = 50  # draws 1-50: regular cost
BUILD_REJECTED_MAX = 70  # draws 51-70: rejected
BUILD_FREE_MAX = 85  # draws 71-85: free, 86-100: double cost


class ActionType(Enum):
    """Discretionary actions a player can take after moving."""

    REQUEST_RELIEF = "request_relief"
    BUY_HOTEL = "buy_hotel"
    REQUEST_BUILDING = "request_building"
    BUY_ENTRANCE = "buy_entrance"


@dataclass
class RoundState:
    """
    What happened in the current round.

    ``path`` holds the indices of the tiles entered this round (the origin
    excluded); the last one is the destination. ``eligible`` is fixed when the
    player lands; ``used`` grows as actions succeed.
    """

    number: int
    player_id: int
    dice_roll: int
    origin: int
    path: List[int]
    passed_treasury: bool
    passed_office: bool
    eligible: FrozenSet[ActionType]
    used: Set[ActionType] = field(default_factory=set)
    toll_paid: int = 0
    toll_creditor: Optional[int] = None
    eliminated: bool = False

    @property
    def destination(self) -> int:
        return self.path[-1]


class GameState:
    """
    Represents the complete state of a hotel game.
    This is the main interface for the game engine: it is the only writer of
    funds, ownership, construction levels, entrances and positions.
    """

    def __init__(
        self,
        config: GameConfig,
        players: List[Player],
        board: Board,
        hotels: Iterable[Hotel],
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.board = board
        self.event_log = EventLog()

        # Injected RNG keeps dice and building draws reproducible
        self.rng = rng if rng is not None else random.Random(config.seed)

        self.hotels: Dict[int, Hotel] = {h.hotel_id: h for h in hotels}

        self.players: Dict[int, PlayerState] = {}
        for player in players:
            state = PlayerState(player.player_id, player.name, config.starting_funds)
            state.position = board.start_index
            self.players[player.player_id] = state

        self.turn_order: List[int] = [p.player_id for p in players]
        if config.shuffle_turn_order:
            self.rng.shuffle(self.turn_order)

        self.current_player_id: Optional[int] = None
        self.round_number = 0
        self.current_round: Optional[RoundState] = None
        self.game_over = False
        self.winner: Optional[int] = None

        self.event_log.log(
            EventType.GAME_START,
            players=[p.name for p in players],
            turn_order=list(self.turn_order),
            starting_funds=config.starting_funds,
            seed=config.seed,
        )

    # === Queries ===

    def get_current_player(self) -> Optional[PlayerState]:
        """Get the player whose round it is, or None before the first round."""
        if self.current_player_id is None:
            return None
        return self.players[self.current_player_id]

    def get_active_players(self) -> List[PlayerState]:
        """Get all players that have not been eliminated, in turn order."""
        return [self.players[pid] for pid in self.turn_order if self.players[pid].is_active]

    @property
    def last_dice_roll(self) -> Optional[int]:
        return self.current_round.dice_roll if self.current_round else None

    def get_hotel(self, hotel_id: int) -> Optional[Hotel]:
        return self.hotels.get(hotel_id)

    def hotel_ids(self) -> List[int]:
        return sorted(self.hotels)

    def available_hotels(self) -> int:
        """Number of hotels nobody owns."""
        return sum(1 for h in self.hotels.values() if not h.is_owned())

    def owned_hotel_count(self, player_id: int) -> int:
        return len(self.players[player_id].hotels)

    def player_tile(self, player_id: int) -> Optional[PathTile]:
        position = self.players[player_id].position
        if position is None:
            return None
        return self.board.path_tile(position)

    def player_positions(self) -> Dict[int, Optional[Tuple[int, int]]]:
        """Grid coordinates of every player; None for eliminated players."""
        return {
            pid: (self.board.position_of(p.position) if p.position is not None else None)
            for pid, p in sorted(self.players.items())
        }

    def players_peak_funds(self) -> Dict[int, int]:
        return {pid: p.peak_funds for pid, p in sorted(self.players.items())}

    def players_entrances(self) -> Dict[int, int]:
        """Number of entrances leading into each player's hotels."""
        counts = {pid: 0 for pid in self.players}
        for pid, player in self.players.items():
            for hotel_id in player.hotels:
                for tile in self.board.front_of(hotel_id):
                    if self.board.hotel_behind(tile) == hotel_id:
                        counts[pid] += 1
        return dict(sorted(counts.items()))

    def enabled_actions(self) -> Set[ActionType]:
        """Actions the current player is eligible for and has not yet used this round."""
        if not self._round_open():
            return set()
        return set(self.current_round.eligible) - self.current_round.used

    # === Round flow ===

    def advance_round(self) -> RoundState:
        """
        Play one round: rotate to the next active player, roll the dice,
        move, work out which actions are available and settle any toll.

        Raises:
            InvalidActionError: if the game is already over
        """
        if self.game_over:
            raise InvalidActionError("The game is over")

        player = self._next_player()
        self.current_player_id = player.player_id
        self.round_number += 1
        self.event_log.log(EventType.TURN_START, player_id=player.player_id, round=self.round_number)

        dice = self.roll_dice()
        origin = player.position
        path = self._movement(player, dice)
        destination = self.board.path_tile(path[-1])
        player.position = destination.index

        self.event_log.log(
            EventType.MOVE,
            player_id=player.player_id,
            origin=self.board.position_of(origin),
            to=destination.position,
            spaces=len(path),
        )

        entered = [self.board.path_tile(i) for i in path]
        passed_treasury = any(t.kind == TileKind.TREASURY for t in entered)
        passed_office = any(t.kind == TileKind.OFFICE for t in entered)

        self.current_round = RoundState(
            number=self.round_number,
            player_id=player.player_id,
            dice_roll=dice,
            origin=origin,
            path=path,
            passed_treasury=passed_treasury,
            passed_office=passed_office,
            eligible=self._eligible_actions(destination, passed_treasury, passed_office),
        )
        logger.debug(
            "Round %d: %s rolled %d and moved %d tiles to %s",
            self.round_number,
            player.name,
            dice,
            len(path),
            destination.position,
        )

        self._settle_toll(player, destination, dice)
        return self.current_round

    def roll_dice(self) -> int:
        """Roll a single six-sided die."""
        dice = self.rng.randint(1, 6)
        self.event_log.log(EventType.DICE_ROLL, player_id=self.current_player_id, total=dice)
        return dice

    def _next_player(self) -> PlayerState:
        """Next active player in turn order after the current one."""
        if self.current_player_id is None:
            index = -1
        else:
            index = self.turn_order.index(self.current_player_id)
        for _ in range(len(self.turn_order)):
            index = (index + 1) % len(self.turn_order)
            candidate = self.players[self.turn_order[index]]
            if candidate.is_active:
                return candidate
        raise InvalidActionError("No active players left")

    def _occupant(self, tile_index: int, exclude: int) -> Optional[PlayerState]:
        for p in self.players.values():
            if p.player_id != exclude and p.is_active and p.position == tile_index:
                return p
        return None

    def _movement(self, player: PlayerState, steps: int) -> List[int]:
        """
        Walk ``steps`` tiles along the cycle, then keep going while the tile
        reached is taken by another active player.
        """
        path: List[int] = []
        tile = self.board.path_tile(player.position)
        for _ in range(steps):
            tile = self.board.next_tile(tile)
            path.append(tile.index)
        while self._occupant(tile.index, exclude=player.player_id) is not None:
            tile = self.board.next_tile(tile)
            path.append(tile.index)
        return path

    def _eligible_actions(
        self, destination: PathTile, passed_treasury: bool, passed_office: bool
    ) -> FrozenSet[ActionType]:
        eligible: Set[ActionType] = set()
        if passed_treasury:
            eligible.add(ActionType.REQUEST_RELIEF)
        if passed_office:
            eligible.add(ActionType.BUY_ENTRANCE)
        if destination.kind == TileKind.ACQUIRE:
            adjacent = self.board.hotels_around(destination).values()
            if any(not self.hotels[hid].is_built() for hid in adjacent):
                eligible.add(ActionType.BUY_HOTEL)
        elif destination.kind == TileKind.EXPAND:
            eligible.add(ActionType.BUY_ENTRANCE)
            eligible.add(ActionType.REQUEST_BUILDING)
        return frozenset(eligible)

    def _settle_toll(self, player: PlayerState, tile: PathTile, dice: int) -> None:
        """Charge the stay if the tile has an entrance into another player's hotel."""
        hotel_id = self.board.hotel_behind(tile)
        if hotel_id is None:
            return
        hotel = self.hotels[hotel_id]
        if hotel.owner_id is None or hotel.owner_id == player.player_id:
            return

        owner = self.players[hotel.owner_id]
        toll = hotel.toll(dice)

        if not player.can_afford(toll) and self.current_round.passed_treasury:
            self.request_relief()

        if not player.can_afford(toll):
            self._go_bankrupt(player, owner)
            return

        transfer(player, owner, toll)
        self.current_round.toll_paid = toll
        self.current_round.toll_creditor = owner.player_id
        self.event_log.log(
            EventType.TOLL_PAYMENT,
            player_id=player.player_id,
            owner=owner.player_id,
            hotel=hotel_id,
            amount=toll,
            payer_balance=player.funds,
            owner_balance=owner.funds,
        )

    def _go_bankrupt(self, player: PlayerState, creditor: PlayerState) -> None:
        """
        Eliminate a player who cannot cover a toll.

        All remaining funds go to the creditor; the player's hotels lose their
        entrances, are torn down and return to the unowned pool.
        """
        amount = player.funds
        transfer(player, creditor, amount)

        released = sorted(player.hotels)
        for hotel_id in released:
            for tile in self.board.front_of(hotel_id):
                if self.board.hotel_behind(tile) == hotel_id:
                    tile.entrance = Entrance.NONE
            hotel = self.hotels[hotel_id]
            hotel.tear_down()
            hotel.owner_id = None
        player.hotels.clear()

        player.is_active = False
        player.position = None
        if self.current_round is not None and self.current_round.player_id == player.player_id:
            self.current_round.eliminated = True
            self.current_round.toll_creditor = creditor.player_id

        self.event_log.log(
            EventType.BANKRUPTCY,
            player_id=player.player_id,
            creditor=creditor.player_id,
            amount=amount,
            hotels=released,
        )
        logger.info("%s is bankrupt; %d paid to %s", player.name, amount, creditor.name)

        active_players = self.get_active_players()
        if len(active_players) == 1:
            self.game_over = True
            self.winner = active_players[0].player_id
            self.event_log.log(
                EventType.GAME_END,
                player_id=self.winner,
                winner=active_players[0].name,
                rounds=self.round_number,
            )
            logger.info("%s wins after %d rounds", active_players[0].name, self.round_number)

    # === Discretionary actions ===

    def _round_open(self) -> bool:
        if self.game_over or self.current_round is None:
            return False
        return self.players[self.current_round.player_id].is_active

    def _action_open(self, action: ActionType) -> bool:
        return self._round_open() and action not in self.current_round.used

    def request_relief(self) -> bool:
        """
        Award the relief amount from the bank to the current player.

        Can succeed once per round. Unless ``config.strict_relief`` is set,
        passing a treasury tile is left for the caller to check.
        """
        if not self._action_open(ActionType.REQUEST_RELIEF):
            return False
        if self.config.strict_relief and not self.current_round.passed_treasury:
            return False

        player = self.get_current_player()
        transfer(None, player, self.config.relief_amount)
        self.current_round.used.add(ActionType.REQUEST_RELIEF)

        self.event_log.log(
            EventType.RELIEF,
            player_id=player.player_id,
            amount=self.config.relief_amount,
            new_balance=player.funds,
        )
        return True

    def buy_hotel(self, hotel_id: int) -> bool:
        """
        Current player buys a hotel next to the tile they stand on.

        An unowned hotel costs its buying price; an unbuilt hotel owned by
        someone else costs the forced buying price, paid to that owner.
        Returns True if successful, False otherwise.
        """
        if not self._action_open(ActionType.BUY_HOTEL):
            return False
        hotel = self.hotels.get(hotel_id)
        if hotel is None:
            return False

        player = self.get_current_player()
        adjacent = self.board.hotels_around(self.board.path_tile(player.position))
        if hotel_id not in adjacent.values():
            return False

        owner_id = hotel.owner_id
        if owner_id == player.player_id:
            return False
        if owner_id is not None and hotel.is_built():
            return False

        cost = hotel.buying_cost if owner_id is None else hotel.forced_buying_cost
        if not player.can_afford(cost):
            return False

        previous_owner = self.players[owner_id] if owner_id is not None else None
        transfer(player, previous_owner, cost)
        if previous_owner is not None:
            previous_owner.hotels.discard(hotel_id)
        player.hotels.add(hotel_id)
        hotel.owner_id = player.player_id
        self.current_round.used.add(ActionType.BUY_HOTEL)

        self.event_log.log(
            EventType.PURCHASE,
            player_id=player.player_id,
            hotel=hotel_id,
            name=hotel.name,
            price=cost,
            previous_owner=owner_id,
            new_balance=player.funds,
        )
        return True

    def request_building(self, hotel_id: int) -> bool:
        """
        Current player asks to upgrade one of their hotels.

        A draw in 1-100 decides the outcome: up to 50 the regular cost of the
        next level, 51-70 the request is rejected, 71-85 it is free and above
        85 it costs double. Returns True if the hotel was upgraded.
        """
        if not self._action_open(ActionType.REQUEST_BUILDING):
            return False
        hotel = self.hotels.get(hotel_id)
        if hotel is None:
            return False

        player = self.get_current_player()
        if hotel.owner_id != player.player_id:
            return False
        base_cost = hotel.next_building_cost()
        if base_cost is None:
            return False

        draw = self.rng.randint(1, 100)
        if draw <= BUILD_REGULAR_MAX:
            cost = base_cost
        elif draw <= BUILD_REJECTED_MAX:
            self.event_log.log(EventType.BUILD_REJECTED, player_id=player.player_id, hotel=hotel_id, draw=draw)
            return False
        elif draw <= BUILD_FREE_MAX:
            cost = 0
        else:
            cost = 2 * base_cost

        if not player.can_afford(cost):
            return False

        transfer(player, None, cost)
        hotel.upgrade()
        self.current_round.used.add(ActionType.REQUEST_BUILDING)

        self.event_log.log(
            EventType.BUILD,
            player_id=player.player_id,
            hotel=hotel_id,
            level=hotel.level,
            cost=cost,
            draw=draw,
            new_balance=player.funds,
        )
        return True

    def buy_entrance(self, hotel_id: int) -> bool:
        """
        Current player buys an entrance for one of their built hotels.

        The entrance goes on the first free acquire or expand tile of the
        hotel's front, facing the hotel. Returns True if one was placed.
        """
        if not self._action_open(ActionType.BUY_ENTRANCE):
            return False
        hotel = self.hotels.get(hotel_id)
        if hotel is None:
            return False

        player = self.get_current_player()
        if hotel.owner_id != player.player_id:
            return False
        if not hotel.is_built():
            return False
        cost = hotel.entrance_cost
        if not player.can_afford(cost):
            return False

        for tile in self.board.front_of(hotel_id):
            if tile.entrance != Entrance.NONE:
                continue
            if tile.kind not in (TileKind.ACQUIRE, TileKind.EXPAND):
                continue
            direction = next(d for d, hid in self.board.hotels_around(tile).items() if hid == hotel_id)

            transfer(player, None, cost)
            tile.entrance = direction
            self.current_round.used.add(ActionType.BUY_ENTRANCE)

            self.event_log.log(
                EventType.ENTRANCE_PURCHASE,
                player_id=player.player_id,
                hotel=hotel_id,
                tile=tile.position,
                direction=direction.value,
                cost=cost,
                new_balance=player.funds,
            )
            return True
        return False


def create_game(
    config: GameConfig,
    players: List[Player],
    layout: Sequence[Sequence[LayoutToken]],
    hotels: Sequence[HotelData],
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Create a new game with the specified configuration, players and scenario.

    Args:
        config: Game configuration
        players: List of players (at least 2)
        layout: Board grid of layout tokens
        hotels: Parsed hotel definitions
        rng: Optional random source for dice and building draws

    Returns:
        Initialized GameState

    Raises:
        ConfigurationError: if the scenario cannot host the game, or the
            configured player count does not match ``players``
    """
    if len(players) < 2:
        raise ValueError("Game requires at least 2 players")
    if config.num_players != len(players):
        raise ConfigurationError(
            f"Configured for {config.num_players} players but {len(players)} were given"
        )

    ids = [h.hotel_id for h in hotels]
    if len(set(ids)) != len(ids):
        raise ConfigurationError("Hotel ids must be unique")

    board = create_board(layout, ids)
    if board.cycle_length() <= len(players):
        raise ConfigurationError(
            f"Path of {board.cycle_length()} tiles is too short for {len(players)} players"
        )

    return GameState(config, players, board, [Hotel.from_data(h) for h in hotels], rng=rng)
