"""Two-player Tic-Tac-Toe played on a 3x3 keyboard."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from button_games.plugins.grid import parse_coord
from button_games.runtime.model import DRAW, WIN, Outcome


Board = List[List[str]]
EMPTY = " "
TOKENS = ("X", "O")


class Plugin:
    def __init__(self) -> None:
        manifest_path = Path(__file__).with_name("plugin.json")
        self._manifest = json.loads(manifest_path.read_text(encoding="utf-8"))

    def manifest(self) -> Dict[str, Any]:
        return deepcopy(self._manifest)

    def initial_state(self, participants: List[str], options: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "board": [[EMPTY, EMPTY, EMPTY], [EMPTY, EMPTY, EMPTY], [EMPTY, EMPTY, EMPTY]],
            "to_move": 0,
            "last_move": None,
        }

    def decode_move(self, state: Dict[str, Any], payload: str) -> Optional[Tuple[int, int]]:
        return parse_coord(payload, 3, 3)

    def is_legal(self, state: Dict[str, Any], actor_index: int, move: Tuple[int, int]) -> bool:
        row, column = move
        return actor_index == state["to_move"] and state["board"][row][column] == EMPTY

    def apply(self, state: Dict[str, Any], move: Tuple[int, int]) -> Dict[str, Any]:
        row, column = move
        next_state = deepcopy(state)
        token = TOKENS[state["to_move"]]
        next_state["board"][row][column] = token
        next_state["last_move"] = {"player": state["to_move"], "token": token, "row": row, "column": column}
        next_state["to_move"] = 1 - state["to_move"]
        return next_state

    def next_turn(self, state: Dict[str, Any], prior_turn_index: int, move: Tuple[int, int]) -> int:
        return state["to_move"]

    def outcome(self, state: Dict[str, Any]) -> Outcome:
        winner = _winner_for_board(state["board"])
        if winner is not None:
            return Outcome.win(winner)
        if _board_full(state["board"]):
            return Outcome.draw()
        return Outcome.ongoing()

    def cell_labels(self, state: Dict[str, Any]) -> List[List[str]]:
        return deepcopy(state["board"])

    def status_text(
        self,
        state: Dict[str, Any],
        participants: List[str],
        turn_index: int,
        outcome: Outcome,
    ) -> str:
        header = f"{TOKENS[0]} {participants[0]} vs {TOKENS[1]} {participants[1]}"
        if outcome.kind == WIN:
            return f"{header}\nWinner: {participants[outcome.winner]}"
        if outcome.kind == DRAW:
            return f"{header}\nDraw game."
        return f"{header}\n{participants[turn_index]} to move ({TOKENS[turn_index]})"


def _lines(board: Board) -> Iterable[List[str]]:
    for row in board:
        yield row
    for column_index in range(3):
        yield [board[row_index][column_index] for row_index in range(3)]
    yield [board[0][0], board[1][1], board[2][2]]
    yield [board[0][2], board[1][1], board[2][0]]


def _winner_for_board(board: Board) -> Optional[int]:
    for line in _lines(board):
        for index, token in enumerate(TOKENS):
            if all(cell == token for cell in line):
                return index
    return None


def _board_full(board: Board) -> bool:
    return all(cell != EMPTY for row in board for cell in row)
