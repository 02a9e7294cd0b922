"""Single-player game session logic for Broadside.

The class in this module manages a *single* match between the human player
and the computer opponent.  It owns both boards and both fleets and is the
only thing allowed to mutate them; a UI drives it through commands and
reads state back.

Commands
--------
Setup phase      place_ship, remove_ship, rotate_ship, randomize_fleet,
                 set_difficulty, start_game
Playing phase    fire_at (player), computer_turn (computer), play_turn
Any phase        reset_game

Every command returns a falsy value when it is rejected (wrong phase,
wrong turn, invalid target) and leaves the session untouched.  Nothing a
caller does can put the session into an error state.

Collaborators
-------------
subscribe(cb)    receives an :class:`~broadside.events.Event` per hit, miss,
                 sink, match start, match end and reset.
reporter         optional ``(difficulty, won, moves) -> points`` hook to a
                 scoring service, consulted once at game over.
on_game_over     optional ``(difficulty, score)`` hook for a high-score store.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from . import config as _cfg
from . import events as ev_types
from .battleship import Board, Cell, Orientation, RevealState
from .bot_logic import ComputerOpponent
from .coord_utils import format_coord
from .events import Category, Event
from .fleet import Fleet, Ship
from .placement import place_fleet_randomly, place_ship, remove_ship
from .scores import resolve_bonus, sink_points

logger = logging.getLogger(__name__)

PLAYER = "player"
COMPUTER = "computer"

Reporter = Callable[[str, bool, int], Optional[int]]
GameOverHook = Callable[[str, int], None]


class GameState(Enum):
    SETUP = "setup"
    PLAYING = "playing"
    GAMEOVER = "gameover"


@dataclass
class MatchContext:
    """Per-match bookkeeping exposed to the UI."""

    difficulty: str
    player_turn: bool = True
    moves: int = 0  # shots fired by the player
    score: int = 0
    outcome: Optional[str] = None  # "win" | "lose" once the match is over
    bonus: int = 0  # end-of-game reward, separate from score


@dataclass(frozen=True)
class ShotResult:
    """Outcome of one accepted shot."""

    shooter: str
    row: int
    col: int
    result: str  # "hit" | "miss"
    sunk: Optional[str] = None  # name of the ship this shot sank
    game_over: bool = False

    @property
    def coord(self) -> str:
        return format_coord(self.row, self.col)


class GameSession:
    """Engine for one player-versus-computer match."""

    def __init__(
        self,
        difficulty: Optional[str] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        ships: Optional[Sequence[Tuple[str, int]]] = None,
        reporter: Optional[Reporter] = None,
        on_game_over: Optional[GameOverHook] = None,
    ):
        """Create a session in the setup phase.

        Args:
            difficulty: "easy", "medium" or "hard"; defaults to
                ``config.DEFAULT_DIFFICULTY``.
            seed/rng: randomness for computer placement, fleet
                randomisation and the AI.  Pass either for reproducible
                matches; ``config.SEED`` is used when both are omitted.
            ships: roster of (name, size) tuples, the standard fleet by default.
        """
        difficulty = (difficulty or _cfg.DEFAULT_DIFFICULTY).lower()
        if difficulty not in _cfg.DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty!r}")
        self._difficulty = difficulty
        self.rng = rng if rng is not None else random.Random(seed if seed is not None else _cfg.SEED)
        self.ships = list(ships) if ships is not None else list(_cfg.SHIPS)
        self._reporter = reporter
        self._on_game_over = on_game_over

        # Event subscribers
        self._subs: List[Callable[[Event], None]] = []

        self._new_match()

    # -------------------- helpers --------------------
    def _new_match(self) -> None:
        """(Re)create boards, fleets and bookkeeping for a fresh setup phase."""
        self.state = GameState.SETUP
        self.player_board = Board()
        self.computer_board = Board()
        self.player_fleet = Fleet(self.ships)
        self.computer_fleet = Fleet(self.ships)
        self.context = MatchContext(difficulty=self._difficulty)
        self.opponent = ComputerOpponent(self._difficulty, rng=self.rng)
        self.message = "Place your ships on the grid."

    def _reject(self, command: str, why: str) -> None:
        logger.debug("%s rejected: %s", command, why)

    @property
    def difficulty(self) -> str:
        return self._difficulty

    @property
    def fleet(self) -> Fleet:
        """The player's fleet (the one the UI docks and places)."""
        return self.player_fleet

    def computer_view(self) -> List[List[Cell]]:
        """What the player may see of the computer's board."""
        return self.computer_board.revealed_view()

    # -------------------- setup phase --------------------
    def set_difficulty(self, difficulty: str) -> bool:
        if self.state is not GameState.SETUP:
            self._reject("set_difficulty", f"state is {self.state.value}")
            return False
        difficulty = difficulty.lower()
        if difficulty not in _cfg.DIFFICULTIES:
            self._reject("set_difficulty", f"unknown difficulty {difficulty!r}")
            return False
        self._difficulty = difficulty
        self.context.difficulty = difficulty
        self.opponent = ComputerOpponent(difficulty, rng=self.rng)
        return True

    def place_ship(self, ship_id: int, row: int, col: int, orientation: Optional[Orientation] = None) -> bool:
        """Place one of the player's ships; *orientation* defaults to the ship's current one."""
        if self.state is not GameState.SETUP:
            self._reject("place_ship", f"state is {self.state.value}")
            return False
        ship = self.player_fleet.get(ship_id)
        if ship is None:
            self._reject("place_ship", f"unknown ship {ship_id}")
            return False
        return place_ship(self.player_board, ship, row, col, orientation or ship.orientation)

    def remove_ship(self, ship_id: int) -> bool:
        if self.state is not GameState.SETUP:
            self._reject("remove_ship", f"state is {self.state.value}")
            return False
        ship = self.player_fleet.get(ship_id)
        if ship is None:
            self._reject("remove_ship", f"unknown ship {ship_id}")
            return False
        return remove_ship(self.player_board, ship)

    def rotate_ship(self, ship_id: int) -> bool:
        if self.state is not GameState.SETUP:
            self._reject("rotate_ship", f"state is {self.state.value}")
            return False
        return self.player_fleet.rotate_ship(ship_id)

    def randomize_fleet(self) -> bool:
        """Scatter the whole player fleet randomly, replacing any manual placement."""
        if self.state is not GameState.SETUP:
            self._reject("randomize_fleet", f"state is {self.state.value}")
            return False
        place_fleet_randomly(self.player_board, self.player_fleet, self.rng)
        return True

    def start_game(self) -> bool:
        """Move from setup to playing once every player ship is on the board."""
        if self.state is not GameState.SETUP:
            self._reject("start_game", f"state is {self.state.value}")
            return False
        if not self.player_fleet.all_placed():
            self.message = "You must place all ships before starting the game!"
            return False

        self.computer_board = Board()
        self.computer_fleet = Fleet(self.ships)
        place_fleet_randomly(self.computer_board, self.computer_fleet, self.rng)

        self.context = MatchContext(difficulty=self._difficulty)
        self.state = GameState.PLAYING
        self.message = "Game started! Click on the opponent's grid to fire."
        logger.info("Match started – difficulty=%s", self._difficulty)
        self._emit(Event(Category.MATCH, ev_types.START, {"difficulty": self._difficulty}))
        return True

    # -------------------- gameplay --------------------
    def fire_at(self, row: int, col: int) -> Optional[ShotResult]:
        """Player shot at the computer's board. Returns None when rejected."""
        if self.state is not GameState.PLAYING:
            self._reject("fire_at", f"state is {self.state.value}")
            return None
        if not self.context.player_turn:
            self._reject("fire_at", "not the player's turn")
            return None
        if not self.computer_board.in_bounds(row, col):
            self._reject("fire_at", f"({row}, {col}) off the board")
            return None
        if self.computer_board[row, col].state is not RevealState.EMPTY:
            self._reject("fire_at", f"already fired at {format_coord(row, col)}")
            return None

        self.context.moves += 1
        shot = self._execute_shot(PLAYER, row, col)

        if shot.sunk:
            ship = self._ship_at(self.computer_board, self.computer_fleet, row, col)
            self.context.score += sink_points(ship.size, self._difficulty)
            self.message = f"You sunk the enemy's {shot.sunk}!"
        elif shot.result == "hit":
            self.message = "Hit!"
        else:
            self.message = "Miss! Computer's turn."

        if shot.game_over:
            self._conclude("win")
        else:
            self.context.player_turn = False
        return shot

    def computer_turn(self) -> Optional[ShotResult]:
        """Let the computer fire once at the player's board. Returns None when rejected."""
        if self.state is not GameState.PLAYING:
            self._reject("computer_turn", f"state is {self.state.value}")
            return None
        if self.context.player_turn:
            self._reject("computer_turn", "not the computer's turn")
            return None

        row, col = self.opponent.choose_target(self.player_board)
        shot = self._execute_shot(COMPUTER, row, col)

        if shot.sunk:
            self.message = f"The enemy sunk your {shot.sunk}!"
        elif shot.result == "hit":
            self.message = "Your ship was hit! Your turn."
        else:
            self.message = "The enemy missed! Your turn."

        if shot.game_over:
            self._conclude("lose")
        else:
            self.context.player_turn = True
        return shot

    def play_turn(self, row: int, col: int) -> List[ShotResult]:
        """Player shot followed immediately by the computer's reply, if the game goes on."""
        shot = self.fire_at(row, col)
        if shot is None:
            return []
        shots = [shot]
        if self.state is GameState.PLAYING:
            reply = self.computer_turn()
            if reply is not None:
                shots.append(reply)
        return shots

    def reset_game(self) -> None:
        """Throw the current match away and return to an empty setup phase."""
        logger.info("Match reset")
        self._new_match()
        self._emit(Event(Category.MATCH, ev_types.RESET, {}))

    # -------------------- shot execution --------------------
    def _execute_shot(self, shooter: str, row: int, col: int) -> ShotResult:
        """Resolve a validated shot by *shooter* against the other side."""
        if shooter == PLAYER:
            board, fleet = self.computer_board, self.computer_fleet
        else:
            board, fleet = self.player_board, self.player_fleet

        result, ship_id = board.fire_at(row, col)
        coord_txt = format_coord(row, col)
        sunk_name: Optional[str] = None

        if result == "hit":
            outcome = fleet.register_hit(ship_id)  # type: ignore[arg-type]
            self._emit(Event(Category.TURN, ev_types.HIT, {"shooter": shooter, "coord": coord_txt}))
            if outcome == "sunk":
                board.mark_sunk(ship_id)  # type: ignore[arg-type]
                sunk_name = fleet.get(ship_id).name  # type: ignore[union-attr, arg-type]
                self._emit(Event(Category.TURN, ev_types.SUNK, {"shooter": shooter, "coord": coord_txt, "ship": sunk_name}))
        else:
            self._emit(Event(Category.TURN, ev_types.MISS, {"shooter": shooter, "coord": coord_txt}))

        if sunk_name:
            logger.debug("%s sank the %s at %s – %d ships left", shooter, sunk_name, coord_txt, fleet.remaining())
        else:
            logger.debug("%s fired at %s: %s", shooter, coord_txt, result)
        return ShotResult(shooter, row, col, result, sunk_name, fleet.all_sunk())

    @staticmethod
    def _ship_at(board: Board, fleet: Fleet, row: int, col: int) -> Ship:
        return fleet.get(board[row, col].ship_id)  # type: ignore[arg-type, return-value]

    def _conclude(self, outcome: str) -> None:
        won = outcome == "win"
        self.state = GameState.GAMEOVER
        self.context.outcome = outcome
        self.message = "Congratulations! You won the game!" if won else "Game over! The enemy sunk all your ships."

        server_points = self._report_result(won)
        self.context.bonus = resolve_bonus(self._difficulty, won, server_points)

        logger.info(
            "Match over – outcome=%s score=%d bonus=%d moves=%d",
            outcome, self.context.score, self.context.bonus, self.context.moves,
        )
        if logger.isEnabledFor(logging.DEBUG):
            for label, board, fleet in (
                ("Computer", self.computer_board, self.computer_fleet),
                ("Player", self.player_board, self.player_fleet),
            ):
                letters = {ship.id: _cfg.SHIP_LETTERS.get(ship.name, "S") for ship in fleet}
                logger.debug("%s board:\n%s", label, "\n".join(board.grid_rows(reveal=True, letters=letters)))

        if self._on_game_over is not None:
            try:
                self._on_game_over(self._difficulty, self.context.score)
            except Exception:  # noqa: BLE001
                logger.warning("High-score hook failed", exc_info=True)

        self._emit(
            Event(
                Category.MATCH,
                ev_types.END,
                {
                    "outcome": outcome,
                    "score": self.context.score,
                    "bonus": self.context.bonus,
                    "moves": self.context.moves,
                    "difficulty": self._difficulty,
                },
            )
        )

    def _report_result(self, won: bool) -> Optional[int]:
        """Ask the scoring service for points; None when absent or failing."""
        if self._reporter is None:
            return None
        try:
            return self._reporter(self._difficulty, won, self.context.moves)
        except Exception:  # noqa: BLE001
            logger.warning("Scoring service failed – using fixed bonus table", exc_info=True)
            return None

    # -------------------- event bus --------------------
    def subscribe(self, cb: Callable[[Event], None]) -> None:
        """Allow external components (UI/audio/logger) to receive game events."""
        self._subs.append(cb)

    def _emit(self, ev: Event) -> None:
        for cb in tuple(self._subs):
            try:
                cb(ev)
            except Exception:
                # Don't let a misbehaving subscriber break the match
                logger.exception("Event subscriber failed for %s", ev)
