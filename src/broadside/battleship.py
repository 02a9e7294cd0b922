"""
battleship.py

Core board data structures for Broadside:
 - RevealState / Orientation enums
 - Cell value type (reveal state, owning ship id, sunk flag)
 - Board class storing ship positions, hits and misses on a 10x10 grid

The Board is the *owner* view: it always knows which ship sits on each cell.
What the firing side may see is derived from it on demand
(:meth:`Board.revealed_view`, :meth:`Board.reveal_matrix`) rather than kept
as a second grid that could drift out of sync.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from .config import BOARD_SIZE

Coord = Tuple[int, int]

# Codes used by Board.reveal_matrix()
CELL_EMPTY = 0
CELL_HIT = 1  # hit on a ship that is still afloat
CELL_MISS = 2
CELL_SUNK = 3  # hit on a ship that has been sunk


class RevealState(Enum):
    """What the firing side knows about a cell."""

    EMPTY = "empty"
    HIT = "hit"
    MISS = "miss"


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def toggled(self) -> "Orientation":
        return Orientation.VERTICAL if self is Orientation.HORIZONTAL else Orientation.HORIZONTAL


@dataclass(frozen=True)
class Cell:
    """Immutable snapshot of one grid position."""

    state: RevealState = RevealState.EMPTY
    ship_id: Optional[int] = None
    sunk: bool = False


def ship_cells(row: int, col: int, size: int, orientation: Orientation) -> List[Coord]:
    """Return the *size* coordinates a ship starting at (*row*,*col*) would cover.

    No bounds checking is done here; callers validate the result.
    """
    if orientation is Orientation.HORIZONTAL:
        return [(row, col + i) for i in range(size)]
    return [(row + i, col) for i in range(size)]


class Board:
    """
    Represents a single Battleship board.

    Each position holds a :class:`Cell`.  Cells are replaced, never mutated,
    so snapshots handed out via ``board[row, col]`` stay valid.

    In a match:
      - The player and the computer each own one Board.
      - When a side fires, the session calls ``opponent_board.fire_at(...)``
        and updates the opponent's fleet with the result.
    """

    def __init__(self, size: int = BOARD_SIZE):
        """Initialise an empty *size*×*size* board with no ships placed."""
        self.size = size
        self._grid: List[List[Cell]] = [[Cell() for _ in range(size)] for _ in range(size)]

    # ------------------------------------------------------------------ #
    # Access
    # ------------------------------------------------------------------ #
    def __getitem__(self, rc: Coord) -> Cell:
        r, c = rc
        if not self.in_bounds(r, c):
            raise IndexError(f"({r}, {c}) is outside the board")
        return self._grid[r][c]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def coords(self) -> Iterator[Coord]:
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def ship_positions(self, ship_id: int) -> List[Coord]:
        """All coordinates currently tagged with *ship_id*, row-major."""
        return [rc for rc in self.coords() if self._grid[rc[0]][rc[1]].ship_id == ship_id]

    def occupancy(self) -> Dict[int, List[Coord]]:
        """Map of ship id -> occupied coordinates for every ship on the board."""
        result: Dict[int, List[Coord]] = {}
        for r, c in self.coords():
            ship_id = self._grid[r][c].ship_id
            if ship_id is not None:
                result.setdefault(ship_id, []).append((r, c))
        return result

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #
    def clear(self) -> None:
        """Drop every ship, hit and miss."""
        self._grid = [[Cell() for _ in range(self.size)] for _ in range(self.size)]

    def do_place_ship(self, row: int, col: int, size: int, orientation: Orientation, ship_id: int) -> List[Coord]:
        """Mutating helper that writes *ship_id* into the covered cells and returns them.

        The placement must already have been validated.
        """
        occupied = ship_cells(row, col, size, orientation)
        for r, c in occupied:
            self._grid[r][c] = replace(self._grid[r][c], ship_id=ship_id)
        return occupied

    def remove_ship(self, ship_id: int) -> int:
        """Clear *ship_id* from every cell bearing it; return the number of cells freed."""
        freed = 0
        for r, c in self.coords():
            if self._grid[r][c].ship_id == ship_id:
                self._grid[r][c] = replace(self._grid[r][c], ship_id=None)
                freed += 1
        return freed

    def fire_at(self, row: int, col: int) -> Tuple[str, Optional[int]]:
        """Process a shot at (*row*,*col*) and return (result, ship_id).

        result is "hit", "miss" or "already_shot"; ship_id is set on a hit.
        """
        cell = self._grid[row][col]
        if cell.state is not RevealState.EMPTY:
            return ("already_shot", None)
        if cell.ship_id is not None:
            self._grid[row][col] = replace(cell, state=RevealState.HIT)
            return ("hit", cell.ship_id)
        self._grid[row][col] = replace(cell, state=RevealState.MISS)
        return ("miss", None)

    def mark_sunk(self, ship_id: int) -> None:
        """Flag every cell of *ship_id* as belonging to a sunk ship."""
        for r, c in self.ship_positions(ship_id):
            self._grid[r][c] = replace(self._grid[r][c], sunk=True)

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #
    def revealed_view(self) -> List[List[Cell]]:
        """Opponent-facing copy of the grid: ship ids only show on hit cells."""
        return [
            [cell if cell.state is RevealState.HIT else Cell(state=cell.state) for cell in row]
            for row in self._grid
        ]

    def reveal_matrix(self) -> np.ndarray:
        """int8 matrix of CELL_EMPTY / CELL_HIT / CELL_MISS / CELL_SUNK codes."""
        view = np.full((self.size, self.size), CELL_EMPTY, dtype=np.int8)
        for r, c in self.coords():
            cell = self._grid[r][c]
            if cell.state is RevealState.MISS:
                view[r, c] = CELL_MISS
            elif cell.state is RevealState.HIT:
                view[r, c] = CELL_SUNK if cell.sunk else CELL_HIT
        return view

    def grid_rows(self, *, reveal: bool = False, letters: Optional[Dict[int, str]] = None) -> List[str]:
        """Board -> ["A . . X o ...", ...] rows (ships shown only when *reveal*)."""
        rows: List[str] = []
        for r in range(self.size):
            out = []
            for c in range(self.size):
                cell = self._grid[r][c]
                if cell.state is RevealState.HIT:
                    out.append("X")
                elif cell.state is RevealState.MISS:
                    out.append("o")
                elif reveal and cell.ship_id is not None:
                    out.append((letters or {}).get(cell.ship_id, "S"))
                else:
                    out.append(".")
            rows.append(f"{chr(ord('A') + r)} " + " ".join(out))
        return rows
