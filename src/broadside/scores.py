"""Scoring rules and the high-score table.

Everything here is pure: storage of the table and talking to a remote
scoring service belong to the caller.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .config import DIFFICULTY_MULTIPLIER, HIGH_SCORE_LIMIT, WIN_BONUS

HighScore = Dict[str, object]  # {"difficulty": str, "score": int}


def sink_points(size: int, difficulty: str) -> int:
    """Points for sinking a ship of *size* at *difficulty*."""
    return size * 10 * DIFFICULTY_MULTIPLIER[difficulty]


def win_bonus(difficulty: str, won: bool) -> int:
    """Fixed end-of-game reward; a loss is worth nothing."""
    return WIN_BONUS[difficulty] if won else 0


def resolve_bonus(difficulty: str, won: bool, server_points: Optional[int]) -> int:
    """
    End-of-game reward shown to the player.

    A positive amount returned by the scoring service wins over the fixed
    table; anything else (None, 0, junk) falls back to it.
    """
    if not won:
        return 0
    if isinstance(server_points, int) and not isinstance(server_points, bool) and server_points > 0:
        return server_points
    return win_bonus(difficulty, won)


def merge_high_score(
    scores: List[HighScore], difficulty: str, score: int, *, limit: int = HIGH_SCORE_LIMIT
) -> List[HighScore]:
    """Return a new top-*limit* list with the entry added, best score first.

    Ties keep earlier entries ahead of the new one.
    """
    merged = list(scores) + [{"difficulty": difficulty, "score": score}]
    merged.sort(key=lambda entry: entry["score"], reverse=True)
    return merged[:limit]
