"""Render projection: committed session state to keyboard and status text."""

from __future__ import annotations

from typing import Dict, Optional

from button_games.protocol.models import Button, RenderView
from button_games.runtime.model import WIN, SessionStatus
from button_games.runtime.payload import coord_payload, encode_callback


def project(session) -> RenderView:
    """Build the view for `session` as committed. Never mutates the session."""
    adapter = session.definition.adapter
    participants = list(session.participants)
    cooperative = session.definition.gate == "cooperative"
    finished = session.status is SessionStatus.FINISHED
    outcome = session.outcome

    rows = [
        [
            Button(
                label=label,
                payload=encode_callback(session.session_id, session.version, coord_payload(row, column)),
            )
            for column, label in enumerate(labels)
        ]
        for row, labels in enumerate(adapter.cell_labels(session.state))
    ]

    status_text = adapter.status_text(session.state, participants, session.turn_index, outcome)
    last_actor = session.history[-1].identity if session.history else None
    if cooperative and finished:
        summary = contribution_summary(session.contributions, last_actor, outcome.kind == WIN)
        status_text = f"{status_text}\n{summary}"

    winner: Optional[str] = None
    if outcome.kind == WIN:
        winner = last_actor if cooperative else participants[outcome.winner]

    current_player = None
    if not finished and not cooperative:
        current_player = participants[session.turn_index]

    return RenderView(
        session_id=session.session_id,
        game=session.definition.kind,
        snapshot=session.version,
        rows=rows,
        status_text=status_text,
        finished=finished,
        outcome=outcome.kind,
        winner=winner,
        current_player=current_player,
    )


def contribution_summary(contributions: Dict[str, int], last_actor: Optional[str], solved: bool) -> str:
    """Per-player click counts and who finished a cooperative game."""
    lines = [f"{name} - {count} moves" for name, count in contributions.items()]
    if last_actor is None:
        return "\n".join(lines)

    top_contributor, largest = last_actor, 0
    for name, count in contributions.items():
        if count > largest:
            top_contributor, largest = name, count

    if contributions.get(last_actor, 0) == largest:
        lines.append(f"{last_actor} has won the game!" if solved else f"Boom, {last_actor} is dead!")
    elif solved:
        lines.append(f"{last_actor} has snatched it from {top_contributor}!")
    else:
        lines.append(f"{last_actor} has ruined it for {top_contributor}!")
    return "\n".join(lines)
