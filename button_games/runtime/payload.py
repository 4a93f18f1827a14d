"""Callback data embedded in rendered buttons: `<session_id>:<snapshot>:<payload>`."""

from __future__ import annotations

from typing import Tuple

from button_games.protocol.errors import InvalidInput


SEPARATOR = ":"


def encode_callback(session_id: str, snapshot: int, payload: str) -> str:
    return f"{session_id}{SEPARATOR}{snapshot}{SEPARATOR}{payload}"


def decode_callback(data: str) -> Tuple[str, int, str]:
    parts = data.split(SEPARATOR, 2)
    if len(parts) != 3 or not parts[0]:
        raise InvalidInput(f"Malformed callback data {data!r}")
    session_id, snapshot, payload = parts
    try:
        return session_id, int(snapshot), payload
    except ValueError:
        raise InvalidInput(f"Malformed snapshot in callback data {data!r}") from None


def coord_payload(row: int, column: int) -> str:
    return f"{row} {column}"
