"""Value types shared by the session engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence


ONGOING = "ongoing"
WIN = "win"
DRAW = "draw"
LOSS = "loss"


@dataclass(frozen=True)
class Outcome:
    """Result of a board position. `winner` is a participant index for WIN only."""

    kind: str = ONGOING
    winner: Optional[int] = None

    @classmethod
    def ongoing(cls) -> "Outcome":
        return cls(ONGOING)

    @classmethod
    def win(cls, participant_index: int) -> "Outcome":
        return cls(WIN, participant_index)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(DRAW)

    @classmethod
    def loss(cls) -> "Outcome":
        return cls(LOSS)

    @property
    def is_terminal(self) -> bool:
        return self.kind != ONGOING


class SessionStatus(Enum):
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass(frozen=True)
class Transition:
    """Everything one accepted move changes, committed as a unit."""

    state: Dict[str, Any]
    turn_index: int
    outcome: Outcome
    move: Any


@dataclass(frozen=True)
class MoveRecord:
    turn: int
    actor_index: int
    identity: str
    payload: str


@dataclass(frozen=True)
class GameDefinition:
    """A registered game kind. Options are copied, never shared with sessions."""

    kind: str
    name: str
    adapter: Any
    gate: str = "strict"
    min_players: int = 1
    max_players: int = 1
    options: Dict[str, Any] = field(default_factory=dict)

    def resolve_options(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        resolved = dict(self.options)
        resolved.update(overrides or {})
        return resolved

    def initial_state(
        self,
        participants: Sequence[str],
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return self.adapter.initial_state(list(participants), self.resolve_options(options))
