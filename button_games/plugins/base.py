"""Rule adapter contract for button games.

Adapters are pure: they receive board state, return new board state, and never
touch sessions, players' identities or the transport. `apply` must not mutate
its input and is only ever called with a move that passed `is_legal`.
`next_turn` and `outcome` receive the state `apply` returned. A payload that
does not decode is reported by returning None from `decode_move`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol

from button_games.runtime.model import Outcome


class RuleAdapter(Protocol):
    def manifest(self) -> Dict[str, Any]:
        ...

    def initial_state(self, participants: List[str], options: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def decode_move(self, state: Dict[str, Any], payload: str) -> Any:
        ...

    def is_legal(self, state: Dict[str, Any], actor_index: int, move: Any) -> bool:
        ...

    def apply(self, state: Dict[str, Any], move: Any) -> Dict[str, Any]:
        ...

    def next_turn(self, state: Dict[str, Any], prior_turn_index: int, move: Any) -> int:
        ...

    def outcome(self, state: Dict[str, Any]) -> Outcome:
        ...

    def cell_labels(self, state: Dict[str, Any]) -> List[List[str]]:
        ...

    def status_text(
        self,
        state: Dict[str, Any],
        participants: List[str],
        turn_index: int,
        outcome: Outcome,
    ) -> str:
        ...
