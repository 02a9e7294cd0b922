import logging
import sys
from pathlib import Path

import pytest

# Ensure local `src` directory is importable before project is installed.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from broadside.battleship import Orientation  # noqa: E402
from broadside.session import GameSession  # noqa: E402

# Suppress INFO & DEBUG logs from the engine during tests
logging.basicConfig(level=logging.WARNING)


class ScriptedOpponent:
    """Stand-in for ComputerOpponent that fires at a fixed list of squares."""

    def __init__(self, targets):
        self.targets = list(targets)

    def choose_target(self, board):
        return self.targets.pop(0)


def place_fleet_in_rows(session: GameSession) -> None:
    """Place every player ship horizontally at column 0 on rows 0, 2, 4, ..."""
    for idx, ship in enumerate(session.player_fleet):
        assert session.place_ship(ship.id, idx * 2, 0, Orientation.HORIZONTAL)


def ship_cells_by_name(board, fleet) -> dict:
    """name -> list of coords, read straight from the owner board."""
    occupancy = board.occupancy()
    return {ship.name: occupancy[ship.id] for ship in fleet}


def empty_water(board) -> list:
    """Coordinates with no ship on them."""
    return [rc for rc in board.coords() if board[rc].ship_id is None]


@pytest.fixture
def session() -> GameSession:
    """Seeded session in the setup phase."""
    return GameSession("medium", seed=1234)


@pytest.fixture
def session_factory() -> callable:
    """Factory that returns a started session with the player fleet in fixed rows."""

    def _factory(difficulty: str = "medium", seed: int = 1234, **kwargs) -> GameSession:
        sess = GameSession(difficulty, seed=seed, **kwargs)
        place_fleet_in_rows(sess)
        assert sess.start_game()
        return sess

    return _factory
