"""
Minefield

Rules engine and hint solver for grid-based mine-detection puzzles:
- Board generation with a guaranteed safe first click
- Flood-fill reveal and chord reveal over immutable board snapshots
- Win detection
- Greedy single-step hints with a random fallback guess
"""

from .board import (
    DIFFICULTIES,
    Board,
    Cell,
    Difficulty,
    DifficultySettings,
    board_from_mines,
    create_empty_board,
    format_board,
)
from .engine import (
    ChordResult,
    check_win,
    chord_reveal,
    find_chord_mine,
    initialize_game,
    mark_exploded,
    reveal_all_mines,
    reveal_cell,
    toggle_flag,
)
from .solver import FLAG, REVEAL, HintResponse, get_algorithmic_hint
from .session import GameSession, GameStatus, play_cli
from .analysis import (
    run_hint_difficulty_analysis,
    run_hint_many_tests,
    run_hint_single_test,
    summarize_hint_mix,
)

__version__ = "1.0.0"

__all__ = [
    # Data model
    "Board",
    "Cell",
    "Difficulty",
    "DifficultySettings",
    "DIFFICULTIES",
    "HintResponse",
    "ChordResult",
    "REVEAL",
    "FLAG",
    # Core operations
    "create_empty_board",
    "board_from_mines",
    "initialize_game",
    "reveal_cell",
    "chord_reveal",
    "find_chord_mine",
    "toggle_flag",
    "mark_exploded",
    "reveal_all_mines",
    "check_win",
    "get_algorithmic_hint",
    "format_board",
    # Session and CLI
    "GameSession",
    "GameStatus",
    "play_cli",
    # Analysis functions
    "run_hint_single_test",
    "run_hint_many_tests",
    "run_hint_difficulty_analysis",
    "summarize_hint_mix",
]
