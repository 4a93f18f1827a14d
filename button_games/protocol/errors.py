"""Stable result codes and the engine's rejection types.

Every rejection carries a `code` that transports can map to user-facing text.
Rejections never change session state. `AdapterContractError` is not a
rejection: it marks a rule adapter that broke its contract and is raised to
the caller.
"""

from __future__ import annotations


OK = "OK"
SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
SESSION_TERMINAL = "SESSION_TERMINAL"
NOT_A_PARTICIPANT = "NOT_A_PARTICIPANT"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
OUT_OF_TURN = "OUT_OF_TURN"
INVALID_INPUT = "INVALID_INPUT"
ILLEGAL_MOVE = "ILLEGAL_MOVE"
STALE_SNAPSHOT = "STALE_SNAPSHOT"
UNKNOWN_GAME = "UNKNOWN_GAME"
INVALID_PARTICIPANTS = "INVALID_PARTICIPANTS"
INVALID_OPTIONS = "INVALID_OPTIONS"


class EngineError(Exception):
    code = "ENGINE_ERROR"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.code)
        self.message = message or self.code


class SessionNotFound(EngineError):
    code = SESSION_NOT_FOUND


class SessionTerminal(EngineError):
    code = SESSION_TERMINAL


class NotAParticipant(EngineError):
    code = NOT_A_PARTICIPANT


class NotYourTurn(EngineError):
    code = NOT_YOUR_TURN


class OutOfTurn(EngineError):
    code = OUT_OF_TURN


class InvalidInput(EngineError):
    code = INVALID_INPUT


class IllegalMove(EngineError):
    code = ILLEGAL_MOVE


class StaleSnapshot(EngineError):
    code = STALE_SNAPSHOT


class UnknownGame(EngineError):
    code = UNKNOWN_GAME


class InvalidParticipants(EngineError, ValueError):
    code = INVALID_PARTICIPANTS


class InvalidOptions(EngineError, ValueError):
    code = INVALID_OPTIONS


class AdapterContractError(RuntimeError):
    """A rule adapter returned something the engine cannot commit."""
