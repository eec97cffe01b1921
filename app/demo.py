"""
Minefield - Interactive Demo

Run with: streamlit run app/demo.py
"""

import random
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Optional, Tuple

from minefield import (
    DIFFICULTIES,
    Difficulty,
    DifficultySettings,
    GameSession,
    GameStatus,
)
from minefield.board import Board, cell_symbol


def render_board_html(
    board: Board,
    highlight_cell: Optional[Tuple[int, int]] = None,
) -> str:
    """Render the board as HTML with styling."""
    cols = len(board[0])
    # Scale cell size based on board width
    if cols >= 30:
        cell_size = 14
        font_size = "10px"
    elif cols >= 25:
        cell_size = 16
        font_size = "11px"
    elif cols >= 16:
        cell_size = 20
        font_size = "13px"
    else:
        cell_size = 26
        font_size = "15px"

    colors = {
        "0": "#cccccc",
        "1": "#0000ff",
        "2": "#008000",
        "3": "#ff0000",
        "4": "#000080",
        "5": "#800000",
        "6": "#008080",
        "7": "#000000",
        "8": "#808080",
    }

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for row_cells in board:
        html += "<tr>"
        for cell in row_cells:
            symbol = cell_symbol(cell)

            if symbol == "F":
                bg = "#ffa500"
                text_color = "#ffffff"
            elif symbol == "!":
                symbol = "M"  # Hit mine (cost a life)
                bg = "#ff0000"
                text_color = "#ffffff"
            elif symbol == "M":
                bg = "#ffcccc"
                text_color = "#ff0000"
            elif symbol == ".":
                bg = "#c0c0c0"
                text_color = "#666666"
            else:
                bg = "#f0f0f0" if symbol == "0" else "#ffffff"
                text_color = colors.get(symbol, "#000000")

            # Highlight hinted cell
            if highlight_cell and (cell.row, cell.col) == highlight_cell:
                border = "3px solid #ffbf00"
            else:
                border = "1px solid #999"
            display = symbol if symbol != "0" else " "

            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{display}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def parse_seed(text: str) -> Optional[int]:
    """Read the optional seed field; anything that is not an integer means no seed."""
    try:
        return int(text)
    except ValueError:
        return None


def new_session(settings: DifficultySettings, lives: int, seed: Optional[int]) -> GameSession:
    return GameSession(settings, lives=lives, rng=random.Random(seed))


def main():
    st.set_page_config(
        page_title="Minefield",
        page_icon="💣",
        layout="wide",
    )

    st.title("Minefield")
    st.markdown("""
    Clear the board without hitting a mine. The first click is always safe,
    and the hint system explains each deduction it makes.
    """)

    # Sidebar configuration
    st.sidebar.header("Game Configuration")

    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Easy (9x9, 10)", "Medium (16x16, 40)", "Hard (16x30, 99)", "Custom"],
    )

    if preset == "Easy (9x9, 10)":
        settings = DIFFICULTIES[Difficulty.EASY]
    elif preset == "Medium (16x16, 40)":
        settings = DIFFICULTIES[Difficulty.MEDIUM]
    elif preset == "Hard (16x30, 99)":
        settings = DIFFICULTIES[Difficulty.HARD]
    else:
        rows = st.sidebar.slider("Rows", 5, 30, 16)
        cols = st.sidebar.slider("Columns", 5, 30, 16)
        max_mines = rows * cols - 10
        mines = st.sidebar.slider("Mines", 1, max_mines, min(40, max_mines))
        settings = DifficultySettings(rows=rows, cols=cols, mines=mines)

    lives = st.sidebar.slider("Lives", 1, 5, 3)
    seed_text = st.sidebar.text_input("Seed (optional)", "")
    seed = parse_seed(seed_text)

    # Start a new game when the configuration changes
    current_settings = (settings, lives, seed)
    if st.session_state.get("prev_settings") != current_settings:
        st.session_state.session = new_session(settings, lives, seed)
        st.session_state.prev_settings = current_settings

    session: GameSession = st.session_state.session

    col1, col2 = st.columns([3, 1]) if settings.cols < 25 else st.columns([4, 1])

    with col1:
        st.subheader("Game Board")

        in_col1, in_col2 = st.columns(2)
        with in_col1:
            row = st.number_input("Row", 0, settings.rows - 1, settings.rows // 2)
        with in_col2:
            col = st.number_input("Column", 0, settings.cols - 1, settings.cols // 2)

        btn_col1, btn_col2, btn_col3, btn_col4 = st.columns(4)
        with btn_col1:
            if st.button("Reveal", type="primary"):
                session.click(int(row), int(col))
                st.rerun()
        with btn_col2:
            if st.button("Flag"):
                session.toggle_flag(int(row), int(col))
                st.rerun()
        with btn_col3:
            if st.button("Hint", disabled=session.status != GameStatus.PLAYING):
                session.hint()
                st.rerun()
        with btn_col4:
            if st.button("New Game"):
                st.session_state.session = new_session(settings, lives, seed)
                st.rerun()

        hint = session.last_hint
        highlight = (hint.row, hint.col) if hint is not None else None
        st.markdown(render_board_html(session.board, highlight), unsafe_allow_html=True)

        if session.status == GameStatus.WON:
            st.success("You revealed all safe cells. You won!")
        elif session.status == GameStatus.LOST:
            st.error("Game over! No lives remaining.")
        elif session.status == GameStatus.HIT_MINE:
            st.warning(
                f"You hit a mine, but you have {session.lives} "
                f"{'life' if session.lives == 1 else 'lives'} left."
            )
            if st.button("Continue"):
                session.continue_game()
                st.rerun()

        st.markdown("""
        <div style="font-size: 12px; margin-top: 10px;">
        <b>Legend:</b>
        <span style="background: #c0c0c0; color: #666666; padding: 2px 6px; margin: 0 4px; font-weight: bold;">.</span> Unrevealed
        <span style="background: #f0f0f0; padding: 2px 6px; margin: 0 4px;">&nbsp;</span> Empty (0)
        <span style="color: #0000ff; font-weight: bold; margin: 0 4px;">1-8</span> Adjacent mines
        <span style="background: #ffa500; color: white; padding: 2px 6px; margin: 0 4px; font-weight: bold;">F</span> Flagged
        <span style="background: #ffcccc; color: #ff0000; padding: 2px 6px; margin: 0 4px; font-weight: bold;">M</span> Mine
        <span style="background: #ff0000; color: white; padding: 2px 6px; margin: 0 4px; font-weight: bold;">M</span> Hit mine
        </div>
        """, unsafe_allow_html=True)

    with col2:
        st.subheader("Status")
        st.metric("Status", session.status.value.replace("_", " ").title())
        st.metric("Lives", session.lives)
        st.metric("Mines Left", session.mines_left)

        st.markdown("---")
        st.subheader("Smart Hint")
        if hint is None:
            st.info("Press 'Hint' while playing to get a suggestion.")
        else:
            st.markdown(f"**{hint.action.upper()}** row {hint.row}, col {hint.col}")
            st.caption(hint.reason)


if __name__ == "__main__":
    main()
