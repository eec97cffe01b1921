"""
Quickstart example for Minefield.

This script demonstrates the pure engine API, a game session and the hint
benchmarks.
"""

import random

from minefield import (
    DIFFICULTIES,
    Difficulty,
    GameSession,
    check_win,
    format_board,
    get_algorithmic_hint,
    initialize_game,
    reveal_cell,
    run_hint_many_tests,
)


def main():
    print("=" * 60)
    print("Minefield - Quickstart Example")
    print("=" * 60)

    settings = DIFFICULTIES[Difficulty.EASY]
    rng = random.Random(7)

    # Example 1: Pure engine calls
    print("\n1. First click at (4, 4) on an Easy board...")
    print("-" * 60)

    board = initialize_game(settings, 4, 4, rng=rng)
    board = reveal_cell(board, 4, 4)
    print(format_board(board))
    print(f"Won: {check_win(board, settings)}")

    # Example 2: Ask for a hint
    print("\n2. Hint for the current board:")
    print("-" * 60)
    hint = get_algorithmic_hint(board, rng=rng)
    if hint is not None:
        print(f"{hint.action} ({hint.row}, {hint.col}): {hint.reason}")

    # Example 3: A session following hints until the game ends
    print("\n3. Following hints in a game session...")
    print("-" * 60)
    session = GameSession(settings, lives=3, rng=random.Random(7))
    session.click(4, 4)
    while not session.is_over:
        session.continue_game()
        hint = session.hint()
        if hint is None:
            break
        if hint.action == "flag":
            session.toggle_flag(hint.row, hint.col)
        else:
            session.click(hint.row, hint.col)
    print(format_board(session.board, reveal_all=True))
    print(f"Result: {session.status.value}, lives left: {session.lives}")

    # Example 4: Compare difficulty levels
    print("\n4. Win rates by difficulty level (20 games each)...")
    print("-" * 60)

    for difficulty in Difficulty:
        s = DIFFICULTIES[difficulty]
        results = run_hint_many_tests(s, runs=20, seed=0)
        print(
            f"{difficulty.value:8s} ({s.rows}x{s.cols}, {s.mines:2d} mines): "
            f"{results['win_rate']*100:5.1f}% win rate, "
            f"{results['avg_guesses_count']:.1f} guesses per game"
        )

    print("\n" + "=" * 60)
    print("Done! See README.md for more detailed usage instructions.")
    print("=" * 60)


if __name__ == "__main__":
    main()
