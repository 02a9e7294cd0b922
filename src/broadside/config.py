"""Central configuration for runtime-tunable parameters.

Game constants are fixed; the few knobs that make sense to change between
runs (difficulty, seeding, debug logging) can be overridden via environment
variables so that the autoplay simulator and the test-suite can pin them
without touching code.
"""

from __future__ import annotations

import os


# ===========================================================================
# Game Constants
# ===========================================================================
# The board is always 10x10 (rows A-J, columns 1-10).
BOARD_SIZE: int = 10

# Standard ship roster: list of (name, size) tuples. Ship ids are assigned
# 1..N in this order when a fleet is built.
SHIPS = [
    ("Carrier", 5),
    ("Battleship", 4),
    ("Cruiser", 3),
    ("Submarine", 3),
    ("Destroyer", 2),
]

# Unique single-letter representations for each ship in grid dumps.
SHIP_LETTERS = {
    "Carrier": "A",  # "A" for Aircraft carrier to avoid clash with Cruiser's "C"
    "Battleship": "B",
    "Cruiser": "C",
    "Submarine": "S",
    "Destroyer": "D",
}


# ===========================================================================
# Difficulty & Scoring
# ===========================================================================
DIFFICULTIES = ("easy", "medium", "hard")

# Points for sinking a ship are size * 10 * multiplier.
DIFFICULTY_MULTIPLIER = {"easy": 1, "medium": 2, "hard": 3}

# Fixed end-of-game reward for a win when the scoring service gives nothing.
WIN_BONUS = {"easy": 100, "medium": 150, "hard": 200}

# Number of entries kept in the high-score table.
HIGH_SCORE_LIMIT: int = 10

# BROADSIDE_DIFFICULTY: Difficulty used when a session is created without one.
#   Defaults to "medium".
#   Example: export BROADSIDE_DIFFICULTY=hard
DEFAULT_DIFFICULTY: str = os.getenv("BROADSIDE_DIFFICULTY", "medium").lower()


# ===========================================================================
# Randomness
# ===========================================================================
# BROADSIDE_SEED: Integer seed for the session RNG (computer placement + AI).
#   Unset by default, i.e. every game is different.
#   Example: export BROADSIDE_SEED=1234
SEED: int | None = int(os.environ["BROADSIDE_SEED"]) if os.getenv("BROADSIDE_SEED") else None

# BROADSIDE_PLACEMENT_ATTEMPTS: Upper bound on random origin/orientation draws
#   per ship before random placement gives up.
#   Defaults to 1000.
PLACEMENT_ATTEMPTS: int = int(os.getenv("BROADSIDE_PLACEMENT_ATTEMPTS", "1000"))


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# BROADSIDE_DEBUG: If "1", enables detailed debug logging across modules.
#   Defaults to "0" (disabled).
#   Example: export BROADSIDE_DEBUG=1
DEBUG: bool = os.getenv("BROADSIDE_DEBUG", "0") == "1"
