from button_games.protocol.errors import (
    ILLEGAL_MOVE,
    INVALID_INPUT,
    INVALID_OPTIONS,
    INVALID_PARTICIPANTS,
    NOT_A_PARTICIPANT,
    NOT_YOUR_TURN,
    OK,
    OUT_OF_TURN,
    SESSION_NOT_FOUND,
    SESSION_TERMINAL,
    STALE_SNAPSHOT,
    UNKNOWN_GAME,
    AdapterContractError,
    EngineError,
)
from button_games.protocol.models import Button, ClickEvent, RenderView, Response
from button_games.protocol.version import PROTOCOL_VERSION

__all__ = [
    "AdapterContractError",
    "Button",
    "ClickEvent",
    "EngineError",
    "ILLEGAL_MOVE",
    "INVALID_INPUT",
    "INVALID_OPTIONS",
    "INVALID_PARTICIPANTS",
    "NOT_A_PARTICIPANT",
    "NOT_YOUR_TURN",
    "OK",
    "OUT_OF_TURN",
    "PROTOCOL_VERSION",
    "RenderView",
    "Response",
    "SESSION_NOT_FOUND",
    "SESSION_TERMINAL",
    "STALE_SNAPSHOT",
    "UNKNOWN_GAME",
]
