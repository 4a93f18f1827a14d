"""Player control: map a click's identity to the seat it may act for."""

from __future__ import annotations

import logging
from typing import Dict, Protocol

from button_games.protocol.errors import NotAParticipant, NotYourTurn


logger = logging.getLogger(__name__)


class SessionLike(Protocol):
    session_id: str
    participants: tuple
    turn_index: int


class Gate(Protocol):
    def authorize(self, session: SessionLike, identity: str) -> int:
        ...


class StrictTurnGate:
    """Only the participant whose turn it is may act."""

    name = "strict"

    def authorize(self, session: SessionLike, identity: str) -> int:
        try:
            index = session.participants.index(identity)
        except ValueError:
            raise NotAParticipant(f"{identity} is not playing in this game") from None
        if index != session.turn_index:
            logger.debug(
                "session %s: %s clicked during %s's turn",
                session.session_id,
                identity,
                session.participants[session.turn_index],
            )
            raise NotYourTurn(f"It is {session.participants[session.turn_index]}'s turn")
        return index


class CooperativeGate:
    """Any participant may act for the shared seat."""

    name = "cooperative"

    def authorize(self, session: SessionLike, identity: str) -> int:
        if identity not in session.participants:
            raise NotAParticipant(f"{identity} is not playing in this game")
        return session.turn_index


GATES: Dict[str, Gate] = {
    StrictTurnGate.name: StrictTurnGate(),
    CooperativeGate.name: CooperativeGate(),
}


def get_gate(name: str) -> Gate:
    try:
        return GATES[name]
    except KeyError:
        raise ValueError(f"unknown gate: {name}") from None
