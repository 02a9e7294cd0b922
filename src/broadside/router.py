"""Translate GameSession events into audio cues.

The router lives *outside* GameSession so that the event → cue mapping is
declared in a single place.  It is also straight-forward to unit-test by
feeding synthetic Event objects.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from . import events as ev_types
from .events import Category, Event

logger = logging.getLogger(__name__)

# Cue names understood by the audio layer
CUE_HIT = "hit"
CUE_MISS = "miss"
CUE_SUNK = "sunk"
CUE_WIN = "win"
CUE_LOSE = "lose"

_SHOT_CUES = {ev_types.HIT: CUE_HIT, ev_types.MISS: CUE_MISS, ev_types.SUNK: CUE_SUNK}


class CueRouter:
    """Session subscriber that converts `Event` → ``play(cue)`` calls.

    Usage::

        session.subscribe(CueRouter(sound_board.play))
    """

    def __init__(self, play: Callable[[str], None], *, enabled: bool = True) -> None:
        self._play = play
        self.enabled = enabled

    # ------------------------------------------------------------------
    # Public dispatch entry
    # ------------------------------------------------------------------
    def __call__(self, ev: Event) -> None:  # GameSession calls router(event)
        if not self.enabled:
            return
        cue = self.cue_for(ev)
        if cue is None:
            return
        try:
            self._play(cue)
        except Exception:  # noqa: BLE001 – failing to play a sound is never fatal
            logger.debug("Could not play cue %r", cue, exc_info=True)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------
    @staticmethod
    def cue_for(ev: Event) -> Optional[str]:
        if ev.category is Category.TURN:
            return _SHOT_CUES.get(ev.type)
        if ev.category is Category.MATCH and ev.type == ev_types.END:
            return CUE_WIN if ev.payload.get("outcome") == "win" else CUE_LOSE
        return None
