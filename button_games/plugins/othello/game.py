"""Two-player Othello on an 8x8 keyboard.

The first participant plays black and moves first. A player with no legal
placement is skipped; the game ends when neither side can move.
"""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from button_games.plugins.grid import DIRECTIONS, Coord, contains, parse_coord
from button_games.runtime.model import DRAW, WIN, Outcome


SIZE = 8
Board = List[List[Optional[int]]]
DISCS = ("⚫", "⚪")


class Plugin:
    def __init__(self) -> None:
        manifest_path = Path(__file__).with_name("plugin.json")
        self._manifest = json.loads(manifest_path.read_text(encoding="utf-8"))

    def manifest(self) -> Dict[str, Any]:
        return deepcopy(self._manifest)

    def initial_state(self, participants: List[str], options: Dict[str, Any]) -> Dict[str, Any]:
        board: Board = [[None] * SIZE for _ in range(SIZE)]
        board[3][3] = 1
        board[3][4] = 0
        board[4][3] = 0
        board[4][4] = 1
        return {"board": board, "to_move": 0, "game_over": False, "last_move": None}

    def decode_move(self, state: Dict[str, Any], payload: str) -> Optional[Coord]:
        return parse_coord(payload, SIZE, SIZE)

    def is_legal(self, state: Dict[str, Any], actor_index: int, move: Coord) -> bool:
        if state["game_over"] or actor_index != state["to_move"]:
            return False
        board = state["board"]
        row, column = move
        if board[row][column] is not None:
            return False
        return any(_find_anchor(board, move, direction, actor_index) is not None for direction in DIRECTIONS)

    def apply(self, state: Dict[str, Any], move: Coord) -> Dict[str, Any]:
        next_state = deepcopy(state)
        board = next_state["board"]
        player = state["to_move"]
        for direction in DIRECTIONS:
            _capture(board, move, direction, player)
        board[move[0]][move[1]] = player
        next_state["last_move"] = {"player": player, "row": move[0], "column": move[1]}

        opponent = 1 - player
        if _has_move(board, opponent):
            next_state["to_move"] = opponent
        elif not _has_move(board, player):
            next_state["game_over"] = True
        return next_state

    def next_turn(self, state: Dict[str, Any], prior_turn_index: int, move: Coord) -> int:
        return state["to_move"]

    def outcome(self, state: Dict[str, Any]) -> Outcome:
        if not state["game_over"]:
            return Outcome.ongoing()
        black, white = _score(state["board"])
        if black > white:
            return Outcome.win(0)
        if white > black:
            return Outcome.win(1)
        return Outcome.draw()

    def cell_labels(self, state: Dict[str, Any]) -> List[List[str]]:
        return [[" " if cell is None else DISCS[cell] for cell in row] for row in state["board"]]

    def status_text(
        self,
        state: Dict[str, Any],
        participants: List[str],
        turn_index: int,
        outcome: Outcome,
    ) -> str:
        black, white = _score(state["board"])
        text = f"{participants[0]} {black} vs {white} {participants[1]}"
        if outcome.kind == WIN:
            return f"{text}\nWinner: {participants[outcome.winner]}"
        if outcome.kind == DRAW:
            return f"{text}\nDraw game."
        if turn_index == 1:
            return f"{text} {DISCS[1]}"
        return f"{DISCS[0]} {text}"


def _score(board: Board) -> Tuple[int, int]:
    scores = [0, 0]
    for row in board:
        for cell in row:
            if cell is not None:
                scores[cell] += 1
    return scores[0], scores[1]


def _find_anchor(board: Board, coord: Coord, direction: Coord, player: int) -> Optional[Coord]:
    """Return the first own disc past a run of opponent discs, if there is one."""
    row, column = coord
    seen_opponent = False
    while True:
        row += direction[0]
        column += direction[1]
        if not contains(SIZE, SIZE, (row, column)):
            return None
        cell = board[row][column]
        if cell is None:
            return None
        if cell == player:
            return (row, column) if seen_opponent else None
        seen_opponent = True


def _capture(board: Board, coord: Coord, direction: Coord, player: int) -> bool:
    anchor = _find_anchor(board, coord, direction, player)
    if anchor is None:
        return False
    row, column = anchor
    while True:
        row -= direction[0]
        column -= direction[1]
        if (row, column) == coord:
            return True
        board[row][column] = player


def _has_move(board: Board, player: int) -> bool:
    for row in range(SIZE):
        for column in range(SIZE):
            if board[row][column] is not None:
                continue
            if any(
                _find_anchor(board, (row, column), direction, player) is not None for direction in DIRECTIONS
            ):
                return True
    return False
