"""Session state machine: the only place a game's board state is replaced."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Sequence

from button_games.protocol.errors import SessionTerminal, StaleSnapshot
from button_games.protocol.models import RenderView
from button_games.runtime.gate import Gate
from button_games.runtime.model import GameDefinition, MoveRecord, SessionStatus, Transition
from button_games.runtime.projector import project
from button_games.runtime.sequencer import TurnSequencer, check_outcome


logger = logging.getLogger(__name__)


class Session:
    """One running or finished game.

    Every read of committed state and every move goes through `_lock`, so a
    concurrent caller never observes a half-applied transition. Views are
    built under the lock and returned; delivering them happens outside.
    """

    def __init__(
        self,
        session_id: str,
        definition: GameDefinition,
        participants: Sequence[str],
        state: Dict[str, Any],
        gate: Gate,
        sequencer: Optional[TurnSequencer] = None,
    ) -> None:
        self.session_id = session_id
        self.definition = definition
        self.participants = tuple(participants)
        self.gate = gate
        self.state = state
        self.turn_index = 0
        self.outcome = check_outcome(definition.kind, definition.adapter.outcome(state), len(self.participants))
        self.status = SessionStatus.FINISHED if self.outcome.is_terminal else SessionStatus.ACTIVE
        self.version = 0
        self.history: List[MoveRecord] = []
        self.contributions: Dict[str, int] = {}
        self._sequencer = sequencer or TurnSequencer()
        self._lock = threading.Lock()

    @property
    def finished(self) -> bool:
        return self.status is SessionStatus.FINISHED

    def handle(self, identity: str, payload: str, snapshot: Optional[int] = None) -> RenderView:
        """Apply one click and return the new view, or raise an `EngineError`."""
        with self._lock:
            if self.status is SessionStatus.FINISHED:
                raise SessionTerminal("The game is already over")
            if snapshot is not None and snapshot != self.version:
                raise StaleSnapshot(f"Board {snapshot} was replaced by board {self.version}")

            actor_index = self.gate.authorize(self, identity)
            transition = self._sequencer.validate(self, actor_index, payload)
            self._commit(identity, actor_index, payload, transition)
            return project(self)

    def view(self) -> RenderView:
        with self._lock:
            return project(self)

    def moves(self) -> List[MoveRecord]:
        with self._lock:
            return list(self.history)

    def _commit(self, identity: str, actor_index: int, payload: str, transition: Transition) -> None:
        self.history.append(MoveRecord(self.version, actor_index, identity, payload))
        self.contributions[identity] = self.contributions.get(identity, 0) + 1
        self.state = transition.state
        self.turn_index = transition.turn_index
        self.outcome = transition.outcome
        self.version += 1
        if transition.outcome.is_terminal:
            self.status = SessionStatus.FINISHED
            logger.info(
                "session %s (%s) finished after %d moves: %s",
                self.session_id,
                self.definition.kind,
                self.version,
                transition.outcome.kind,
            )
