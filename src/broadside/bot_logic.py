from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

import numpy as np

from .battleship import Board, CELL_EMPTY, CELL_HIT
from .config import DIFFICULTIES
from .coord_utils import format_coord

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

# Chance that the medium opponent follows up on an open hit instead of firing blind.
MEDIUM_HUNT_CHANCE = 0.7
# Chance that the hard opponent restricts blind shots to the (row + col) even parity.
HARD_PARITY_CHANCE = 0.5


class ComputerOpponent:
    """
    Difficulty-dependent target selection for the computer side.

    easy
        Uniform random over unfired squares.
    medium
        70 % of the time, when some hit belongs to a ship that is still
        afloat, probe a random orthogonal neighbour of a random such hit.
        Otherwise uniform random.
    hard
        Always probe next to an open hit when there is one.  Blind shots
        favour the even-parity checkerboard half of the time, since every
        ship is at least two cells long.

    The policy only looks at :meth:`Board.reveal_matrix`, i.e. what the
    firing side could legitimately know.
    """

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    def __init__(self, difficulty: str = "medium", *, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        difficulty = difficulty.lower()
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty!r}")
        self.difficulty = difficulty
        self.rng = rng if rng is not None else random.Random(seed)

    # ------------------------------------------------------------------ #
    # Shot selection
    # ------------------------------------------------------------------ #
    def choose_target(self, board: Board) -> Coord:
        """Pick the next square to fire at on *board*."""
        view = board.reveal_matrix()
        if not (view == CELL_EMPTY).any():
            raise ValueError("No unfired squares left on the board")

        hits = _coords(view == CELL_HIT)
        target: Optional[Coord] = None
        if self.difficulty == "medium":
            if hits and self.rng.random() < MEDIUM_HUNT_CHANCE:
                target = self._hunt(view, hits)
        elif self.difficulty == "hard":
            if hits:
                target = self._hunt(view, hits)
            elif self.rng.random() < HARD_PARITY_CHANCE:
                target = self._parity(view)

        if target is None:
            target = self._random_empty(view)
        logger.debug("%s opponent targets %s", self.difficulty, format_coord(*target))
        return target

    # ------------------------------------------------------------------ #
    # Strategies
    # ------------------------------------------------------------------ #
    def _hunt(self, view: np.ndarray, hits: List[Coord]) -> Optional[Coord]:
        """A random empty neighbour of a random open hit, or None.

        When the chosen hit has no empty neighbour the caller falls back to
        a random shot; no other hit is tried.
        """
        r, c = self.rng.choice(hits)
        directions = list(DIRECTIONS)
        self.rng.shuffle(directions)
        size = view.shape[0]
        for dr, dc in directions:
            nr, nc = r + dr, c + dc
            if 0 <= nr < size and 0 <= nc < size and view[nr, nc] == CELL_EMPTY:
                return (nr, nc)
        return None

    def _parity(self, view: np.ndarray) -> Optional[Coord]:
        rows, cols = np.indices(view.shape)
        candidates = _coords((view == CELL_EMPTY) & ((rows + cols) % 2 == 0))
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def _random_empty(self, view: np.ndarray) -> Coord:
        return self.rng.choice(_coords(view == CELL_EMPTY))


def _coords(mask: np.ndarray) -> List[Coord]:
    """Row-major (row, col) tuples where *mask* is set."""
    return [(int(r), int(c)) for r, c in np.argwhere(mask)]
