"""Analysis and benchmarking tools for the hint solver."""

import random
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np

from .board import DIFFICULTIES, Difficulty, DifficultySettings, count_revealed, format_board
from .session import GameSession, GameStatus
from .solver import FLAG


def run_hint_single_test(
    settings: DifficultySettings,
    *,
    seed: Optional[int] = None,
    lives: int = 1,
    show_boards: bool = False,
) -> Dict[str, object]:
    """
    Play one game by always following the hint solver.

    The first click goes to the centre of the board. After that each hint is
    applied as a flag toggle or a click, and a mine hit with lives left is
    continued immediately.

    Args:
        settings: Board dimensions and mine count.
        seed: Seed for mine placement and guesses.
        lives: Lives available to the session.
        show_boards: If True, print the final and underlying boards.

    Returns:
        Dict with keys "status" (1 win, -1 loss, 0 stuck), "logic_reveals_count",
        "logic_flags_count", "guesses_count", "failed_guesses_count",
        "revealed_cells_count", "lives_lost" and "moves_sequence".
    """
    session = GameSession(settings, lives=lives, rng=random.Random(seed))
    session.click(settings.rows // 2, settings.cols // 2)

    logic_reveals = 0
    logic_flags = 0
    guesses = 0
    failed_guesses = 0
    moves_sequence: List[tuple] = [(settings.rows // 2, settings.cols // 2, "reveal")]

    while not session.is_over:
        if session.status == GameStatus.HIT_MINE:
            session.continue_game()

        hint = session.hint()
        if hint is None:
            break

        moves_sequence.append((hint.row, hint.col, hint.action))
        if hint.action == FLAG:
            logic_flags += 1
            session.toggle_flag(hint.row, hint.col)
            continue

        lives_before = session.lives
        session.click(hint.row, hint.col)
        if hint.is_guess:
            guesses += 1
            if session.lives < lives_before:
                failed_guesses += 1
        else:
            logic_reveals += 1

    if session.status == GameStatus.WON:
        status = 1
    elif session.status == GameStatus.LOST:
        status = -1
    else:
        status = 0

    if show_boards:
        print(f"Board {settings.rows}x{settings.cols}, {settings.mines} mines, seed {seed}")
        print(format_board(session.board))
        print()
        print("Underlying board:")
        print(format_board(session.board, reveal_all=True))
        print(f"\nFinished with status {status}.")

    return {
        "status": status,
        "logic_reveals_count": logic_reveals,
        "logic_flags_count": logic_flags,
        "guesses_count": guesses,
        "failed_guesses_count": failed_guesses,
        "revealed_cells_count": count_revealed(session.board),
        "lives_lost": session.max_lives - session.lives,
        "moves_sequence": moves_sequence,
    }


def run_hint_many_tests(
    settings: DifficultySettings,
    runs: int,
    *,
    seed: Optional[int] = None,
    lives: int = 1,
) -> Dict[str, float]:
    """
    Play many independent hint-driven games and return averaged metrics.

    Args:
        settings: Board dimensions and mine count.
        runs: Number of games, must be > 0.
        seed: Base seed; game i uses ``seed + i``. None leaves every game unseeded.
        lives: Lives available in each game.

    Returns:
        Averages of the numeric single-game metrics (prefixed with "avg_"), plus
        "win_rate" and "guess_failure_rate".

    Raises:
        ValueError: If runs is not positive.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    metric_keys = [
        "logic_reveals_count",
        "logic_flags_count",
        "guesses_count",
        "failed_guesses_count",
        "revealed_cells_count",
        "lives_lost",
    ]
    samples = np.zeros((runs, len(metric_keys)), dtype=float)
    statuses = np.zeros(runs, dtype=int)

    for i in range(runs):
        payload = run_hint_single_test(
            settings, seed=None if seed is None else seed + i, lives=lives
        )
        statuses[i] = int(payload["status"])
        samples[i] = [float(payload[k]) for k in metric_keys]

    means = samples.mean(axis=0)
    out: Dict[str, float] = {
        f"avg_{k}": float(v) for k, v in zip(metric_keys, means)
    }
    out["win_rate"] = float(np.mean(statuses == 1))

    total_guesses = samples[:, metric_keys.index("guesses_count")].sum()
    total_failed = samples[:, metric_keys.index("failed_guesses_count")].sum()
    out["guess_failure_rate"] = (
        float(total_failed / total_guesses) if total_guesses > 0 else 0.0
    )
    return out


def run_hint_difficulty_analysis(
    runs: int,
    *,
    seed: Optional[int] = None,
    lives: int = 1,
    show: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Run hint-driven games on every difficulty preset and plot summaries.

    Args:
        runs: Number of games per difficulty.
        seed: Base seed passed to run_hint_many_tests.
        lives: Lives available in each game.
        show: If True, display the figures; otherwise they are left open for
            the caller.

    Returns:
        Mapping from lower-case difficulty name to run_hint_many_tests() output.
    """
    results: Dict[str, Dict[str, float]] = {}
    for difficulty in Difficulty:
        results[difficulty.value.lower()] = run_hint_many_tests(
            DIFFICULTIES[difficulty], runs, seed=seed, lives=lives
        )

    level_names = list(results.keys())
    x = np.arange(len(level_names))

    # 1) Moves by kind
    flags = [results[n]["avg_logic_flags_count"] for n in level_names]
    reveals = [results[n]["avg_logic_reveals_count"] for n in level_names]
    guesses = [results[n]["avg_guesses_count"] for n in level_names]

    bar_w = 0.25
    plt.figure()
    plt.bar(x - bar_w, flags, width=bar_w, label="logic flag")
    plt.bar(x, reveals, width=bar_w, label="logic reveal")
    plt.bar(x + bar_w, guesses, width=bar_w, label="guess")
    plt.xticks(x, level_names)
    plt.ylabel("Average count")
    plt.title("Average hints followed by kind (per game)")
    plt.legend()
    plt.tight_layout()

    # 2) Win rate by level
    win_rates = [results[n]["win_rate"] for n in level_names]

    plt.figure()
    plt.bar(x, win_rates)
    plt.xticks(x, level_names)
    plt.ylabel("Win rate")
    plt.ylim(0.0, 1.0)
    plt.title("Win rate by difficulty level")
    plt.tight_layout()

    if show:
        plt.show()

    return results


def summarize_hint_mix(
    results: Dict[str, Dict[str, float]],
    *,
    level: str = "hard",
) -> Dict[str, float]:
    """
    Compute the share of each hint kind for one difficulty level.

    Args:
        results: Output of run_hint_difficulty_analysis().
        level: Which level to summarize.

    Returns:
        Dict with "flag_frac", "reveal_frac", "guess_frac", "total_hints" and
        "guess_success_prob".

    Raises:
        KeyError: If the level or a metric is missing.
        ZeroDivisionError: If no hints were followed at all.
    """
    if level not in results:
        raise KeyError(f"Level {level!r} not found in results.")
    m = results[level]

    def get(k: str) -> float:
        if k not in m:
            raise KeyError(f"Missing key {k!r} in metrics for level {level!r}.")
        return float(m[k])

    f = get("avg_logic_flags_count")
    r = get("avg_logic_reveals_count")
    g = get("avg_guesses_count")

    total = f + r + g
    if total == 0.0:
        raise ZeroDivisionError("No hints were followed; cannot compute fractions.")

    return {
        "flag_frac": f / total,
        "reveal_frac": r / total,
        "guess_frac": g / total,
        "total_hints": total,
        "guess_success_prob": 1.0 - get("guess_failure_rate"),
    }
