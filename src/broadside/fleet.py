"""Ships and the fleet that owns them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .battleship import Orientation
from .config import SHIPS

logger = logging.getLogger(__name__)


@dataclass
class Ship:
    """Represents one ship of a fleet."""

    id: int
    name: str
    size: int
    orientation: Orientation = Orientation.HORIZONTAL
    placed: bool = False
    hits: int = 0

    @property
    def sunk(self) -> bool:
        """Check if every cell has been hit."""
        return self.hits >= self.size


class Fleet:
    """
    The full set of ships owned by one side.

    Ship ids are stable for the lifetime of the fleet and are the values
    written into board cells.
    """

    def __init__(self, roster: Sequence[Tuple[str, int]] = SHIPS):
        self.ships: List[Ship] = [Ship(id=idx, name=name, size=size) for idx, (name, size) in enumerate(roster, start=1)]

    def __iter__(self) -> Iterator[Ship]:
        return iter(self.ships)

    def __len__(self) -> int:
        return len(self.ships)

    def get(self, ship_id: int) -> Optional[Ship]:
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        return None

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #
    def rotate_ship(self, ship_id: int) -> bool:
        """Toggle orientation of an unplaced ship. Placed ships must be removed first."""
        ship = self.get(ship_id)
        if ship is None or ship.placed:
            return False
        ship.orientation = ship.orientation.toggled()
        return True

    def register_hit(self, ship_id: int) -> Optional[str]:
        """Record a hit on *ship_id*; return "sunk" on the final hit, else "hit".

        Returns None for an unknown ship or one that is already sunk.
        """
        ship = self.get(ship_id)
        if ship is None or ship.sunk:
            return None
        ship.hits += 1
        if ship.sunk:
            logger.debug("%s (id=%d) sunk", ship.name, ship.id)
            return "sunk"
        return "hit"

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def all_placed(self) -> bool:
        return all(ship.placed for ship in self.ships)

    def all_sunk(self) -> bool:
        """Return True if every ship in this fleet has been sunk."""
        return all(ship.sunk for ship in self.ships)

    def remaining(self) -> int:
        return sum(1 for ship in self.ships if not ship.sunk)
