"""Cooperative Minesweeper.

There is no flagging: clicking a covered cell uncovers it, and clicking an
uncovered number reveals its covered neighbours once the number is settled.
Mines are laid on the first click, never under it, from a seed stored in the
state so that `apply` stays deterministic.
"""

from __future__ import annotations

import json
import random
from collections import deque
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from button_games.plugins.grid import Coord, neighbors, parse_coord
from button_games.runtime.model import Outcome


MAX_ROWS = 10
MAX_COLUMNS = 8
MIN_SIDE = 2
MINE = -1

COVERED = "covered"
UNCOVERED = "uncovered"
EXPLODED = "exploded"


class Plugin:
    def __init__(self) -> None:
        manifest_path = Path(__file__).with_name("plugin.json")
        self._manifest = json.loads(manifest_path.read_text(encoding="utf-8"))

    def manifest(self) -> Dict[str, Any]:
        return deepcopy(self._manifest)

    def initial_state(self, participants: List[str], options: Dict[str, Any]) -> Dict[str, Any]:
        rows = _clamp(int(options.get("rows", MAX_ROWS)), MIN_SIDE, MAX_ROWS)
        columns = _clamp(int(options.get("columns", MAX_COLUMNS)), MIN_SIDE, MAX_COLUMNS)
        mines = options.get("mines")
        mines = rows * columns // 10 if mines is None else int(mines)
        mines = _clamp(mines, 1, rows * columns - 1)
        seed = options.get("seed")
        if seed is None:
            seed = random.randrange(2**32)
        return {
            "rows": rows,
            "columns": columns,
            "mines": mines,
            "seed": int(seed),
            "initialized": False,
            "values": [[0] * columns for _ in range(rows)],
            "cells": [[COVERED] * columns for _ in range(rows)],
            "uncovered_blank": 0,
            "exploded": 0,
        }

    def decode_move(self, state: Dict[str, Any], payload: str) -> Optional[Coord]:
        return parse_coord(payload, state["rows"], state["columns"])

    def is_legal(self, state: Dict[str, Any], actor_index: int, move: Coord) -> bool:
        row, column = move
        cell = state["cells"][row][column]
        if cell == COVERED:
            return True
        if cell == EXPLODED or state["values"][row][column] == MINE:
            return False
        return _can_chord(state, move)

    def apply(self, state: Dict[str, Any], move: Coord) -> Dict[str, Any]:
        next_state = deepcopy(state)
        if not next_state["initialized"]:
            _lay_mines(next_state, move)
        row, column = move
        if next_state["cells"][row][column] == COVERED:
            if next_state["values"][row][column] == MINE:
                next_state["cells"][row][column] = EXPLODED
                next_state["exploded"] += 1
            else:
                _reveal(next_state, [move])
        else:
            _reveal(next_state, neighbors(state["rows"], state["columns"], move))
        return next_state

    def next_turn(self, state: Dict[str, Any], prior_turn_index: int, move: Coord) -> int:
        return prior_turn_index

    def outcome(self, state: Dict[str, Any]) -> Outcome:
        if state["exploded"] > 0:
            return Outcome.loss()
        if state["uncovered_blank"] + state["mines"] == state["rows"] * state["columns"]:
            return Outcome.win(0)
        return Outcome.ongoing()

    def cell_labels(self, state: Dict[str, Any]) -> List[List[str]]:
        return [
            [_label(cell, value) for cell, value in zip(cell_row, value_row)]
            for cell_row, value_row in zip(state["cells"], state["values"])
        ]

    def status_text(
        self,
        state: Dict[str, Any],
        participants: List[str],
        turn_index: int,
        outcome: Outcome,
    ) -> str:
        return f"{state['rows']}x{state['columns']} {state['mines']} mines"


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def _label(cell: str, value: int) -> str:
    if cell == EXPLODED:
        return "💣"
    if cell == COVERED:
        return "■"
    if value == MINE:
        return "🚩"
    if value == 0:
        return " "
    return str(value)


def _lay_mines(state: Dict[str, Any], avoid: Coord) -> None:
    rows, columns = state["rows"], state["columns"]
    avoid_index = avoid[0] * columns + avoid[1]
    candidates = [index for index in range(rows * columns) if index != avoid_index]
    rng = random.Random(state["seed"])
    values = state["values"]
    for index in rng.sample(candidates, state["mines"]):
        values[index // columns][index % columns] = MINE
    for row in range(rows):
        for column in range(columns):
            if values[row][column] != MINE:
                values[row][column] = sum(
                    1 for r, c in neighbors(rows, columns, (row, column)) if values[r][c] == MINE
                )
    state["initialized"] = True


def _reveal(state: Dict[str, Any], coords: Iterable[Coord]) -> None:
    """Flood-fill reveal; uncovered mines are shown as flags, not explosions."""
    cells, values = state["cells"], state["values"]
    queue = deque(coords)
    while queue:
        row, column = queue.popleft()
        if cells[row][column] != COVERED:
            continue
        cells[row][column] = UNCOVERED
        if values[row][column] == MINE:
            continue
        state["uncovered_blank"] += 1
        if values[row][column] == 0:
            queue.extend(
                coord
                for coord in neighbors(state["rows"], state["columns"], (row, column))
                if cells[coord[0]][coord[1]] == COVERED
            )


def _can_chord(state: Dict[str, Any], coord: Coord) -> bool:
    covered = 0
    uncovered_mines = 0
    for row, column in neighbors(state["rows"], state["columns"], coord):
        if state["cells"][row][column] == COVERED:
            covered += 1
        elif state["values"][row][column] == MINE:
            uncovered_mines += 1
    if covered == 0:
        return False
    value = state["values"][coord[0]][coord[1]]
    return uncovered_mines == value or covered + uncovered_mines == value
