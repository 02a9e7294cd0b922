import random

import pytest

from broadside.battleship import Board, Orientation, RevealState
from broadside.bot_logic import ComputerOpponent

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


def _neighbours(board: Board, row: int, col: int) -> set:
    out = set()
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        r, c = row + dr, col + dc
        if board.in_bounds(r, c) and board[r, c].state is RevealState.EMPTY:
            out.add((r, c))
    return out


def _board_with_open_hit() -> Board:
    """Cruiser on row 4, hit once in the middle."""
    board = Board()
    board.do_place_ship(4, 3, 3, H, ship_id=3)
    board.fire_at(4, 4)
    return board


def test_unknown_difficulty() -> None:
    with pytest.raises(ValueError):
        ComputerOpponent("impossible")


def test_difficulty_is_case_insensitive() -> None:
    assert ComputerOpponent("HARD").difficulty == "hard"


@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_never_targets_fired_squares(difficulty: str) -> None:
    board = Board()
    board.do_place_ship(0, 0, 5, H, ship_id=1)
    rng = random.Random(99)
    # Fire at most of the board first
    for rc in list(board.coords())[:80]:
        board.fire_at(*rc)
    bot = ComputerOpponent(difficulty, rng=rng)
    for _ in range(300):
        r, c = bot.choose_target(board)
        assert board[r, c].state is RevealState.EMPTY


@pytest.mark.timeout(10)
def test_easy_fires_until_board_is_full_without_repeats() -> None:
    board = Board()
    bot = ComputerOpponent("easy", seed=5)
    seen = set()
    for _ in range(board.size * board.size):
        rc = bot.choose_target(board)
        assert rc not in seen
        seen.add(rc)
        board.fire_at(*rc)
    assert len(seen) == 100
    with pytest.raises(ValueError):
        bot.choose_target(board)


@pytest.mark.parametrize("seed", range(30))
def test_hard_always_hunts_next_to_open_hit(seed: int) -> None:
    board = _board_with_open_hit()
    bot = ComputerOpponent("hard", seed=seed)
    assert bot.choose_target(board) in _neighbours(board, 4, 4)


def test_hard_hunts_remaining_neighbour() -> None:
    board = _board_with_open_hit()
    board.fire_at(3, 4)
    board.fire_at(5, 4)
    board.fire_at(4, 3)  # second hit on the cruiser
    board.fire_at(2, 3)
    board.fire_at(3, 3)
    board.fire_at(5, 3)
    # (4, 3) is boxed in except for (4, 2); (4, 4) still has (4, 5)
    bot = ComputerOpponent("hard", seed=1)
    for _ in range(50):
        assert bot.choose_target(board) in {(4, 2), (4, 5)}


def test_hard_falls_back_when_hit_is_boxed_in() -> None:
    board = Board()
    board.do_place_ship(0, 0, 2, H, ship_id=5)
    board.fire_at(0, 0)
    board.fire_at(0, 1)
    board.fire_at(1, 0)
    board.fire_at(1, 1)
    board.fire_at(0, 2)
    # Nobody marked the destroyer sunk, so both cells are open hits with no
    # empty neighbour left.
    bot = ComputerOpponent("hard", seed=4)
    for _ in range(50):
        r, c = bot.choose_target(board)
        assert board[r, c].state is RevealState.EMPTY


def test_sunk_ships_are_not_hunted() -> None:
    board = Board()
    board.do_place_ship(4, 4, 2, H, ship_id=5)
    board.fire_at(4, 4)
    board.fire_at(4, 5)
    board.mark_sunk(5)
    neighbours = _neighbours(board, 4, 4) | _neighbours(board, 4, 5)

    bot = ComputerOpponent("hard", seed=0)
    picks = [bot.choose_target(board) for _ in range(200)]
    # With no open hit the hard bot shoots blind, so most picks land elsewhere.
    assert any(p not in neighbours for p in picks)


def test_hard_blind_shots_favour_even_parity() -> None:
    board = Board()
    bot = ComputerOpponent("hard", seed=11)
    picks = [bot.choose_target(board) for _ in range(400)]
    even = sum(1 for r, c in picks if (r + c) % 2 == 0)
    # Half the time parity is forced, the other half is a fair coin: ~75 %.
    assert 0.65 < even / len(picks) < 0.85


def test_hard_parity_falls_back_when_even_squares_are_gone() -> None:
    board = Board()
    for r, c in board.coords():
        if (r + c) % 2 == 0:
            board.fire_at(r, c)
    bot = ComputerOpponent("hard", seed=2)
    for _ in range(100):
        r, c = bot.choose_target(board)
        assert (r + c) % 2 == 1


def test_medium_mixes_hunting_and_random_shots() -> None:
    board = _board_with_open_hit()
    neighbours = _neighbours(board, 4, 4)
    bot = ComputerOpponent("medium", seed=3)
    picks = [bot.choose_target(board) for _ in range(300)]
    hunted = sum(1 for p in picks if p in neighbours)
    assert hunted < len(picks)
    assert 0.6 < hunted / len(picks) < 0.85


def test_easy_ignores_open_hits() -> None:
    board = _board_with_open_hit()
    neighbours = _neighbours(board, 4, 4)
    bot = ComputerOpponent("easy", seed=8)
    picks = [bot.choose_target(board) for _ in range(300)]
    assert sum(1 for p in picks if p in neighbours) / len(picks) < 0.2


def test_same_seed_same_shots() -> None:
    board = _board_with_open_hit()
    a = ComputerOpponent("medium", seed=77)
    b = ComputerOpponent("medium", seed=77)
    assert [a.choose_target(board) for _ in range(20)] == [b.choose_target(board) for _ in range(20)]


def test_targeting_ignores_hidden_ship_positions() -> None:
    """Two boards that look the same to the shooter produce the same shots."""
    first = Board()
    first.do_place_ship(0, 0, 5, H, ship_id=1)
    second = Board()
    second.do_place_ship(5, 9, 5, V, ship_id=1)
    for board in (first, second):
        board.fire_at(9, 0)
        board.fire_at(3, 3)

    for difficulty in ("easy", "medium", "hard"):
        a = ComputerOpponent(difficulty, seed=21)
        b = ComputerOpponent(difficulty, seed=21)
        assert [a.choose_target(first) for _ in range(30)] == [b.choose_target(second) for _ in range(30)]
