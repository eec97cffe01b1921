"""Stateful game session built on the pure engine, plus a terminal front end."""

import logging
import random
from enum import Enum
from typing import Optional, Tuple

from .board import (
    Board,
    DifficultySettings,
    count_flags,
    count_revealed,
    create_empty_board,
    format_board,
    iter_cells,
)
from .engine import (
    chord_reveal,
    find_chord_mine,
    initialize_game,
    mark_exploded,
    reveal_all_mines,
    reveal_cell,
    toggle_flag,
)
from .solver import HintResponse, get_algorithmic_hint
from .utils import check_bounds

logger = logging.getLogger(__name__)

DEFAULT_LIVES = 3


class GameStatus(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    HIT_MINE = "hit_mine"
    WON = "won"
    LOST = "lost"


class GameSession:
    """
    Holds the live board and the game-status state machine.

    The session owns the current board reference and swaps it for the
    snapshot returned by each engine call. Mines are placed on the first
    click. Hitting a mine costs a life; with lives left the game pauses in
    HIT_MINE until ``continue_game`` is called.
    """

    def __init__(
        self,
        settings: DifficultySettings,
        lives: int = DEFAULT_LIVES,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Args:
            settings: Board dimensions and mine count.
            lives: Mines the player may hit before losing, must be > 0.
            rng: Random source for mine placement and guess hints.

        Raises:
            ValueError: If lives is not positive.
        """
        if lives <= 0:
            raise ValueError("lives must be positive.")
        self.max_lives: int = lives
        self.rng: random.Random = rng if rng is not None else random.Random()
        self.reset(settings)

    def reset(self, settings: Optional[DifficultySettings] = None) -> None:
        """Start a new game, optionally with different settings."""
        if settings is not None:
            self.settings = settings
        self.board: Board = create_empty_board(self.settings)
        self.status: GameStatus = GameStatus.IDLE
        self.lives: int = self.max_lives
        self.pending_mine: Optional[Tuple[int, int]] = None
        self.last_hint: Optional[HintResponse] = None

    @property
    def is_over(self) -> bool:
        return self.status in (GameStatus.WON, GameStatus.LOST)

    @property
    def flags_used(self) -> int:
        return count_flags(self.board)

    @property
    def mines_left(self) -> int:
        """Mine count minus placed flags; negative when over-flagged."""
        return self.settings.mines - self.flags_used

    def _accepts_moves(self) -> bool:
        return self.status in (GameStatus.IDLE, GameStatus.PLAYING)

    def click(self, row: int, col: int) -> GameStatus:
        """
        Reveal (row, col), or chord it if it is an already revealed number.

        Flagged cells and revealed mines are ignored, so clicking a mine that
        exploded earlier in the game costs no further life.

        Returns:
            The status after the move.

        Raises:
            ValueError: If the coordinates are outside the board.
        """
        check_bounds(self.settings.rows, self.settings.cols, row, col)
        if not self._accepts_moves():
            return self.status

        cell = self.board[row][col]
        if cell.is_revealed and not cell.is_mine:
            return self._chord(row, col)

        if cell.is_flagged or cell.is_revealed:
            return self.status

        if self.status == GameStatus.IDLE:
            self.board = initialize_game(self.settings, row, col, rng=self.rng)
            self.status = GameStatus.PLAYING
            logger.info(
                "Game started on %dx%d board with %d mines",
                self.settings.rows, self.settings.cols, self.settings.mines,
            )

        if self.board[row][col].is_mine:
            self._hit_mine(self.board, row, col)
            return self.status

        self.board = reveal_cell(self.board, row, col)
        self._check_win()

        if self.last_hint is not None and (self.last_hint.row, self.last_hint.col) == (row, col):
            self.last_hint = None
        return self.status

    def _chord(self, row: int, col: int) -> GameStatus:
        before = self.board
        updated, hit_mine = chord_reveal(before, row, col)
        self.board = updated
        if hit_mine:
            mine = find_chord_mine(before, row, col)
            if mine is not None:
                self._hit_mine(updated, *mine)
                return self.status
        self._check_win()
        return self.status

    def _hit_mine(self, board: Board, row: int, col: int) -> None:
        self.lives -= 1
        board = mark_exploded(board, row, col)
        logger.info("Mine hit at (%d, %d), %d lives left", row, col, self.lives)

        if self.lives > 0:
            self.board = board
            self.status = GameStatus.HIT_MINE
            self.pending_mine = (row, col)
        else:
            self.board = reveal_all_mines(board)
            self.status = GameStatus.LOST
            logger.info("Game lost")

    def _check_win(self) -> None:
        # Mines revealed by a lost life must not stand in for a safe cell.
        exploded = sum(1 for cell in iter_cells(self.board) if cell.exploded)
        if count_revealed(self.board) - exploded == self.settings.safe_cells:
            self.status = GameStatus.WON
            logger.info("Game won")

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Flip the flag on a hidden cell.

        Returns:
            True if the board changed.

        Raises:
            ValueError: If the coordinates are outside the board.
        """
        check_bounds(self.settings.rows, self.settings.cols, row, col)
        if not self._accepts_moves():
            return False
        updated = toggle_flag(self.board, row, col)
        changed = updated is not self.board
        self.board = updated
        return changed

    def continue_game(self) -> GameStatus:
        """Resume after a mine hit that did not end the game."""
        if self.status == GameStatus.HIT_MINE:
            self.status = GameStatus.PLAYING
            self.pending_mine = None
        return self.status

    def hint(self) -> Optional[HintResponse]:
        """Return a hint for the current board; only available while playing."""
        if self.status != GameStatus.PLAYING:
            return None
        self.last_hint = get_algorithmic_hint(self.board, rng=self.rng)
        return self.last_hint


def play_cli(session: GameSession) -> None:
    """
    Run a simple terminal UI for a game session.

    Args:
        session: The GameSession to play.
    """
    print(
        "Minefield CLI. Coordinates are 0-based (row col).\n"
        "  r c    reveal, or chord a revealed number\n"
        "  f r c  toggle a flag\n"
        "  h      hint\n"
        "  c      continue after hitting a mine\n"
        "  q      quit\n"
    )
    print(format_board(session.board))

    while True:
        s = input(f"\n[{session.lives} lives, {session.mines_left} mines left] Move: ").strip()
        cmd = s.lower()
        if cmd in {"q", "quit", "exit"}:
            print("Quit.")
            return

        if cmd == "h":
            hint = session.hint()
            if hint is None:
                print("No hint available right now.")
            else:
                print(f"Hint: {hint.action} ({hint.row}, {hint.col})\n  {hint.reason}")
            continue

        if cmd == "c":
            session.continue_game()
            print(format_board(session.board))
            continue

        parts = s.replace(",", " ").split()
        flag = bool(parts) and parts[0].lower() == "f"
        if flag:
            parts = parts[1:]
        if len(parts) != 2:
            print("Invalid input. Example: 3 5  or  f 3 5")
            continue

        try:
            row = int(parts[0])
            col = int(parts[1])
            if flag:
                session.toggle_flag(row, col)
            else:
                session.click(row, col)
        except ValueError as exc:
            print(f"Invalid input. {exc}")
            continue

        print()
        print(format_board(session.board))

        if session.status == GameStatus.HIT_MINE:
            print(f"\nYou hit a mine, but you have {session.lives} lives left. Type 'c' to continue.")
        elif session.status == GameStatus.LOST:
            print("\nYou hit a mine. No lives remaining. You lost.")
            print("\nFull board:")
            print(format_board(session.board, reveal_all=True))
            return
        elif session.status == GameStatus.WON:
            print("\nYou revealed all safe cells. You won!")
            print("\nFull board:")
            print(format_board(session.board, reveal_all=True))
            return
