from __future__ import annotations

import random
from copy import deepcopy

import pytest

from button_games.protocol.errors import (
    AdapterContractError,
    IllegalMove,
    InvalidInput,
    NotAParticipant,
    NotYourTurn,
    OutOfTurn,
    SessionTerminal,
)
from button_games.runtime.dispatcher import Router
from button_games.runtime.gate import CooperativeGate, StrictTurnGate, get_gate
from button_games.runtime.model import GameDefinition, Outcome, SessionStatus
from button_games.runtime.sequencer import TurnSequencer
from button_games.runtime.serialization import view_hash


class RaceAdapter:
    """Players add 1-3 to a shared counter; adding 3 earns another turn; reaching 10 wins."""

    def manifest(self):
        return {"id": "race", "name": "Race"}

    def initial_state(self, participants, options):
        return {"count": 0, "players": len(participants), "to_move": 0, "last": None}

    def decode_move(self, state, payload):
        return int(payload) if payload.isdigit() else None

    def is_legal(self, state, actor_index, move):
        return 1 <= move <= 3

    def apply(self, state, move):
        next_state = deepcopy(state)
        next_state["count"] += move
        next_state["last"] = state["to_move"]
        if move != 3:
            next_state["to_move"] = (state["to_move"] + 1) % state["players"]
        return next_state

    def next_turn(self, state, prior_turn_index, move):
        return state["to_move"]

    def outcome(self, state):
        if state["count"] >= 10:
            return Outcome.win(state["last"])
        return Outcome.ongoing()

    def cell_labels(self, state):
        return [[str(step) for step in (1, 2, 3)]]

    def status_text(self, state, participants, turn_index, outcome):
        return f"count {state['count']}"


class ExplodingAdapter(RaceAdapter):
    def apply(self, state, move):
        raise RuntimeError("adapter bug")


class WanderingTurnAdapter(RaceAdapter):
    def next_turn(self, state, prior_turn_index, move):
        return 5


class StringOutcomeAdapter(RaceAdapter):
    def outcome(self, state):
        return "ongoing"


def race_router(adapter=None, gate="strict"):
    definition = GameDefinition(
        kind="race",
        name="Race",
        adapter=adapter or RaceAdapter(),
        gate=gate,
        min_players=1,
        max_players=4,
    )
    return Router({"race": definition})


def test_strict_gate_maps_identity_to_current_seat():
    session = race_router().create_session("race", ["A", "B", "C"])
    gate = StrictTurnGate()

    assert gate.authorize(session, "A") == 0
    with pytest.raises(NotYourTurn):
        gate.authorize(session, "B")
    with pytest.raises(NotAParticipant):
        gate.authorize(session, "Z")


def test_cooperative_gate_lets_any_participant_act_for_the_seat():
    session = race_router(gate="cooperative").create_session("race", ["A", "B"])
    gate = CooperativeGate()

    assert gate.authorize(session, "B") == session.turn_index
    with pytest.raises(NotAParticipant):
        gate.authorize(session, "Z")


def test_get_gate_rejects_unknown_names():
    assert isinstance(get_gate("strict"), StrictTurnGate)
    with pytest.raises(ValueError):
        get_gate("spectator")


def test_sequencer_checks_in_order():
    session = race_router().create_session("race", ["A", "B"])
    sequencer = TurnSequencer()

    with pytest.raises(OutOfTurn):
        sequencer.validate(session, 1, "1")
    with pytest.raises(InvalidInput):
        sequencer.validate(session, 0, "one")
    with pytest.raises(IllegalMove):
        sequencer.validate(session, 0, "4")

    transition = sequencer.validate(session, 0, "2")
    assert transition.state["count"] == 2
    assert transition.turn_index == 1
    assert transition.outcome == Outcome.ongoing()
    assert session.state["count"] == 0
    assert session.version == 0


def test_sequencer_rejects_finished_sessions():
    session = race_router().create_session("race", ["A"])
    for _ in range(4):
        session.handle("A", "3")
    assert session.status is SessionStatus.FINISHED

    with pytest.raises(SessionTerminal):
        TurnSequencer().validate(session, 0, "1")


def test_extra_turn_keeps_same_player():
    router = race_router()
    session = router.create_session("race", ["A", "B"])

    view = session.handle("A", "3")
    assert view.current_player == "A"
    view = session.handle("A", "1")
    assert view.current_player == "B"
    with pytest.raises(NotYourTurn):
        session.handle("A", "1")


def test_consecutive_moves_change_actor_unless_extra_turn():
    rng = random.Random(7)
    for players in (["A", "B"], ["A", "B", "C"], ["A", "B", "C", "D"]):
        session = race_router().create_session("race", players)
        previous = None
        while not session.finished:
            actor = session.participants[session.turn_index]
            step = rng.randint(1, 3)
            session.handle(actor, str(step))
            record = session.history[-1]
            if previous is not None and previous[1] != 3:
                assert record.actor_index != previous[0]
            previous = (record.actor_index, step)


def test_finished_session_rejects_everything():
    session = race_router().create_session("race", ["A", "B"])
    for identity, step in (("A", "3"), ("A", "3"), ("A", "3"), ("A", "1")):
        view = session.handle(identity, step)

    assert view.finished is True
    assert view.winner == "A"
    before = view_hash(session.view())
    for identity in ("A", "B", "Z"):
        with pytest.raises(SessionTerminal):
            session.handle(identity, "1")
    assert view_hash(session.view()) == before
    assert session.version == 4


def test_adapter_defect_propagates_and_state_is_kept():
    router = race_router(ExplodingAdapter())
    session = router.create_session("race", ["A", "B"])
    before = view_hash(session.view())

    with pytest.raises(RuntimeError, match="adapter bug"):
        router.dispatch({"session_id": session.session_id, "identity": "A", "payload": "1"})

    assert view_hash(session.view()) == before
    assert session.version == 0
    assert session.history == []


def test_turn_index_outside_participants_is_a_contract_error():
    session = race_router(WanderingTurnAdapter()).create_session("race", ["A", "B"])

    with pytest.raises(AdapterContractError):
        session.handle("A", "1")

    assert session.turn_index == 0
    assert session.state["count"] == 0


def test_initial_outcome_must_be_an_outcome():
    with pytest.raises(AdapterContractError):
        race_router(StringOutcomeAdapter()).create_session("race", ["A", "B"])


def test_contributions_and_history_recorded():
    session = race_router(gate="cooperative").create_session("race", ["A", "B"])
    session.handle("A", "1")
    session.handle("B", "2")
    session.handle("B", "1")

    assert session.contributions == {"A": 1, "B": 2}
    assert [(record.turn, record.identity, record.payload) for record in session.moves()] == [
        (0, "A", "1"),
        (1, "B", "2"),
        (2, "B", "1"),
    ]
