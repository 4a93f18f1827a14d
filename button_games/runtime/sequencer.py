"""Abstract play: turn order and move legality, assuming the actor is authorized."""

from __future__ import annotations

from button_games.protocol.errors import (
    AdapterContractError,
    IllegalMove,
    InvalidInput,
    OutOfTurn,
    SessionTerminal,
)
from button_games.runtime.model import Outcome, SessionStatus, Transition


class TurnSequencer:
    def validate(self, session, actor_index: int, payload: str) -> Transition:
        """Check a move against the committed session and compute its transition.

        Nothing here mutates the session. Exceptions raised by the adapter while
        computing an accepted move are contract violations and propagate as-is.
        """
        if session.status is not SessionStatus.ACTIVE:
            raise SessionTerminal("The game is already over")
        if actor_index != session.turn_index:
            raise OutOfTurn(f"Seat {actor_index} cannot act on seat {session.turn_index}'s turn")

        adapter = session.definition.adapter
        move = adapter.decode_move(session.state, payload)
        if move is None:
            raise InvalidInput(f"Cannot read move from {payload!r}")
        if not adapter.is_legal(session.state, actor_index, move):
            raise IllegalMove(f"Move {payload!r} is not allowed here")

        new_state = adapter.apply(session.state, move)
        turn_index = adapter.next_turn(new_state, session.turn_index, move)
        outcome = adapter.outcome(new_state)

        if not isinstance(turn_index, int) or not 0 <= turn_index < len(session.participants):
            raise AdapterContractError(
                f"{session.definition.kind}: next_turn returned {turn_index!r} "
                f"for {len(session.participants)} participants"
            )
        check_outcome(session.definition.kind, outcome, len(session.participants))

        return Transition(state=new_state, turn_index=turn_index, outcome=outcome, move=move)


def check_outcome(kind: str, outcome: Outcome, participant_count: int) -> Outcome:
    """Raise `AdapterContractError` unless `outcome` is an `Outcome` naming a real participant."""
    if not isinstance(outcome, Outcome):
        raise AdapterContractError(f"{kind}: outcome returned {outcome!r}")
    if outcome.winner is not None and not 0 <= outcome.winner < participant_count:
        raise AdapterContractError(f"{kind}: winner {outcome.winner!r} out of range")
    return outcome
