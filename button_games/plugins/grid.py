"""Coordinate helpers shared by grid-based plugins."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple


Coord = Tuple[int, int]

DIRECTIONS: Tuple[Coord, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


def parse_coord(payload: str, rows: int, columns: int) -> Optional[Coord]:
    """Parse a `"row column"` button payload; None when malformed or off the board."""
    parts = payload.split()
    if len(parts) != 2:
        return None
    try:
        row, column = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not contains(rows, columns, (row, column)):
        return None
    return (row, column)


def contains(rows: int, columns: int, coord: Coord) -> bool:
    return 0 <= coord[0] < rows and 0 <= coord[1] < columns


def neighbors(rows: int, columns: int, center: Coord) -> Iterator[Coord]:
    for d_row, d_column in DIRECTIONS:
        coord = (center[0] + d_row, center[1] + d_column)
        if contains(rows, columns, coord):
            yield coord
