"""Command-line interface for two players sharing one terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Union

from .game.board import MoveResult
from .game.rules import GameRules


RESET = "reset"

Command = Union[int, str]

_ERROR_HINTS = {
    "blocked_point": "That point is blocked.",
    "not_a_start_point": "Lines must continue from the open end of the path.",
    "illegal_move": "That line is not allowed; selection cleared.",
    "game_over": "The match is over.",
}


def _render_board(state: GameRules) -> None:
    board = state.board
    selected = state.selected

    print("\n    " + " ".join(str(col) for col in range(board.size)))
    for row in range(board.size):
        cells = []
        for col in range(board.size):
            index = board.point_at(row, col).index
            if index == selected:
                cells.append("*")
            elif board.is_blocked(index):
                cells.append("x")
            else:
                cells.append("o")
        print(f"{row:2}  " + " ".join(cells))

    if board.segments:
        print("Lines:")
        for segment in board.segments:
            start = board.point(segment.origin)
            end = board.point(segment.target)
            print(f"  P{segment.player}: ({start.row},{start.col}) -> ({end.row},{end.col})")
    print()


def _prompt_point(state: GameRules, prompt: str) -> Optional[Command]:
    try:
        value = input(prompt)
    except EOFError:
        return None

    value = value.strip().lower()
    if value in {"q", "quit", "exit"}:
        return None
    if value in {"r", RESET}:
        return RESET

    parts = value.replace(",", " ").split()
    try:
        row, col = (int(part) for part in parts)
        return state.board.point_at(row, col).index
    except ValueError:
        print(f"Enter 'row col' between 0 and {state.board.size - 1}, 'r' to reset or 'q' to quit.")
        return _prompt_point(state, prompt)


def _describe(state: GameRules, result: MoveResult) -> Optional[str]:
    if result.error is not None:
        return _ERROR_HINTS.get(result.error)
    if result.segment is not None:
        start = state.board.point(result.segment.origin)
        end = state.board.point(result.segment.target)
        return f"Player {result.segment.player} drew ({start.row},{start.col}) -> ({end.row},{end.col})."
    return None


def play(state: GameRules) -> int:
    while True:
        _render_board(state)
        print(state.status_text())

        if state.finished:
            again = _prompt_point(state, "Type 'r' to play again or 'q' to quit: ")
            if again == RESET:
                state.reset()
                continue
            break

        if state.selected is None:
            prompt = f"Player {state.turn.to_move}, pick a start point (row col): "
        else:
            prompt = f"Player {state.turn.to_move}, pick the end point (row col): "

        choice = _prompt_point(state, prompt)
        if choice is None:
            break
        if choice == RESET:
            state.reset()
            continue

        message = _describe(state, state.handle_point_activation(choice))
        if message:
            print(message)

    print("Thanks for playing!")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Play lastline in the terminal")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    return play(GameRules())


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    sys.exit(main())
