"""Headless computer-vs-computer matches.

The player's side is driven by a second :class:`ComputerOpponent` that fires
at the computer's board, so whole matches run through the real session
state machine without any UI.  Handy for eyeballing how the difficulty
levels compare:

    python -m broadside.autoplay --games 200 --difficulty hard --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from . import config as _cfg
from .bot_logic import ComputerOpponent
from .session import GameSession, GameState, MatchContext

logger = logging.getLogger(__name__)


def run_match(session: GameSession, pilot: ComputerOpponent, *, max_turns: int = 500) -> MatchContext:
    """Randomise the player fleet, start, and alternate shots until game over."""
    if session.state is not GameState.SETUP:
        session.reset_game()
    session.randomize_fleet()
    if not session.start_game():
        raise RuntimeError(session.message)

    for _ in range(max_turns):
        if session.state is not GameState.PLAYING:
            break
        row, col = pilot.choose_target(session.computer_board)
        session.play_turn(row, col)
    else:
        raise RuntimeError("Match did not finish")
    return session.context


def simulate(games: int, difficulty: str, *, pilot_difficulty: str = "hard", seed: Optional[int] = None) -> List[MatchContext]:
    rng = random.Random(seed)
    session = GameSession(difficulty, rng=rng)
    pilot = ComputerOpponent(pilot_difficulty, rng=rng)
    results: List[MatchContext] = []
    for idx in range(games):
        ctx = run_match(session, pilot)
        logger.info("Game %d: %s in %d moves (score %d, bonus %d)", idx + 1, ctx.outcome, ctx.moves, ctx.score, ctx.bonus)
        results.append(ctx)
    return results


# ----------------------------- main -------------------------------


def main(argv: Optional[List[str]] = None) -> None:  # pragma: no cover – CLI entry
    parser = argparse.ArgumentParser(description="Broadside autoplay simulator")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--difficulty", choices=_cfg.DIFFICULTIES, default=_cfg.DEFAULT_DIFFICULTY)
    parser.add_argument("--pilot", choices=_cfg.DIFFICULTIES, default="hard", help="Difficulty of the player-side bot")
    parser.add_argument("--seed", type=int, default=_cfg.SEED)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if (args.debug or _cfg.DEBUG) else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    results = simulate(args.games, args.difficulty, pilot_difficulty=args.pilot, seed=args.seed)
    wins = sum(1 for ctx in results if ctx.outcome == "win")
    avg_moves = sum(ctx.moves for ctx in results) / len(results) if results else 0.0
    print(f"{len(results)} games vs {args.difficulty}: {wins} won, {len(results) - wins} lost, {avg_moves:.1f} moves on average")


if __name__ == "__main__":  # pragma: no cover
    main()
