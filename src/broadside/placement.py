"""
Ship placement: validation, manual placement and random auto-placement.

Usage:
    ok = place_ship(board, ship, row, col, orientation)
    place_fleet_randomly(board, fleet, rng)
"""

from __future__ import annotations

import logging
import random

from .battleship import Board, Orientation, ship_cells
from .config import PLACEMENT_ATTEMPTS
from .fleet import Fleet, Ship

logger = logging.getLogger(__name__)


class PlacementError(RuntimeError):
    """Raised when random placement cannot find room for a ship."""


def is_valid_placement(board: Board, row: int, col: int, size: int, orientation: Orientation) -> bool:
    """Return `True` if a ship of *size* fits at (*row*,*col*) without overlap."""
    for r, c in ship_cells(row, col, size, orientation):
        if not board.in_bounds(r, c):
            return False
        if board[r, c].ship_id is not None:
            return False
    return True


def place_ship(board: Board, ship: Ship, row: int, col: int, orientation: Orientation) -> bool:
    """Validate and place *ship*; on success mark it placed with *orientation*."""
    if ship.placed:
        return False
    if not is_valid_placement(board, row, col, ship.size, orientation):
        logger.debug("Rejected %s at (%d, %d) %s", ship.name, row, col, orientation.value)
        return False
    board.do_place_ship(row, col, ship.size, orientation, ship.id)
    ship.orientation = orientation
    ship.placed = True
    return True


def remove_ship(board: Board, ship: Ship) -> bool:
    """Lift a placed *ship* off the board; other ships are untouched."""
    if not ship.placed:
        return False
    board.remove_ship(ship.id)
    ship.placed = False
    return True


def place_fleet_randomly(board: Board, fleet: Fleet, rng: random.Random, *, attempts: int = PLACEMENT_ATTEMPTS) -> None:
    """Clear *board* and randomly position every ship of *fleet* without collisions."""
    board.clear()
    for ship in fleet:
        ship.placed = False
    for ship in fleet:
        for _ in range(attempts):
            orientation = rng.choice((Orientation.HORIZONTAL, Orientation.VERTICAL))
            row = rng.randrange(board.size)
            col = rng.randrange(board.size)
            if place_ship(board, ship, row, col, orientation):
                break
        else:
            raise PlacementError(f"Failed to place ship {ship.name}")
