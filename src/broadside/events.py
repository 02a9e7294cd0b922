"""Lightweight event model used by GameSession to decouple game logic from presentation.

The goal is to emit strongly-typed events that a UI, an audio layer or a
logger can consume without parsing the free-text status message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict


class Category(Enum):
    """High-level event categories."""

    TURN = auto()  # per-shot outcomes (hit, miss, sunk)
    MATCH = auto()  # lifecycle (start, end, reset)


# Event types
HIT = "hit"
MISS = "miss"
SUNK = "sunk"
START = "start"
END = "end"
RESET = "reset"


@dataclass(slots=True)
class Event:
    """Immutable event emitted by GameSession."""

    category: Category
    type: str  # finer-grained identifier, e.g. "hit", "sunk", "end"
    payload: Dict[str, Any]
