"""Event router: resolves click events to sessions and wraps results for transports."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from button_games.config import EngineConfig
from button_games.protocol.errors import (
    INVALID_INPUT,
    OK,
    EngineError,
    InvalidInput,
    InvalidOptions,
    InvalidParticipants,
    SessionNotFound,
    UnknownGame,
)
from button_games.protocol.models import ClickEvent, RenderView, Response
from button_games.runtime.gate import get_gate
from button_games.runtime.model import GameDefinition, MoveRecord
from button_games.runtime.payload import decode_callback
from button_games.runtime.serialization import dump_model, view_hash
from button_games.runtime.session import Session
from button_games.runtime.session_store import SessionStore


logger = logging.getLogger(__name__)


class Router:
    def __init__(
        self,
        games: Dict[str, GameDefinition],
        session_store: Optional[SessionStore] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.games = games
        self.session_store = session_store or SessionStore()
        self.config = config or EngineConfig()

    def _response(
        self,
        *,
        ok: bool,
        code: str,
        message: str,
        view: Optional[RenderView] = None,
        session_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        response = Response(ok=ok, code=code, message=message, view=view, session_id=session_id)
        return dump_model(response)

    def create_session(
        self,
        game_kind: str,
        participants: Sequence[str],
        options: Optional[Dict[str, Any]] = None,
    ) -> Session:
        definition = self.games.get(game_kind)
        if definition is None:
            raise UnknownGame(f"Game '{game_kind}' is not registered")

        participants = list(participants)
        if not participants or len(set(participants)) != len(participants):
            raise InvalidParticipants("Participants must be a non-empty list of distinct identities")
        if not definition.min_players <= len(participants) <= definition.max_players:
            raise InvalidParticipants(
                f"{definition.name} needs {definition.min_players}-{definition.max_players} players, "
                f"got {len(participants)}"
            )

        try:
            state = definition.initial_state(participants, options)
        except (ValueError, TypeError) as exc:
            raise InvalidOptions(f"Bad options for {game_kind}: {exc}") from exc

        session = Session(
            session_id=self.session_store.new_id(),
            definition=definition,
            participants=participants,
            state=state,
            gate=get_gate(definition.gate),
        )
        self.session_store.add(session)
        logger.info("session %s: new %s game for %s", session.session_id, game_kind, ", ".join(participants))
        return session

    def discard_session(self, session_id: str) -> bool:
        removed = self.session_store.remove(session_id) is not None
        if removed:
            logger.info("session %s: discarded", session_id)
        return removed

    def lookup(self, session_id: str) -> Session:
        session = self.session_store.get(session_id)
        if session is None:
            raise SessionNotFound(f"No running game for session {session_id}")
        return session

    def handle(self, event: ClickEvent) -> RenderView:
        """Route one click. Rejections raise `EngineError`; adapter defects propagate."""
        session = self.lookup(event.session_id)
        view = session.handle(event.identity, event.payload, event.snapshot)
        if view.finished and self.config.discard_finished:
            self.discard_session(session.session_id)
        return view

    def dispatch(self, raw_event: Dict[str, Any]) -> Dict[str, Any]:
        """Handle a raw transport event and return a `Response` envelope.

        The event either names `session_id`/`payload` (and optionally
        `snapshot`) directly, or carries the button's encoded callback `data`.
        """
        session_id = raw_event.get("session_id") if isinstance(raw_event, dict) else None
        if not isinstance(session_id, str):
            session_id = None
        try:
            event = self._parse_event(raw_event)
        except EngineError as exc:
            return self._response(ok=False, code=exc.code, message=exc.message, session_id=session_id)
        except ValidationError as exc:
            return self._response(ok=False, code=INVALID_INPUT, message=str(exc), session_id=session_id)

        try:
            view = self.handle(event)
        except EngineError as exc:
            logger.debug(
                "session %s: rejected %r from %s: %s", event.session_id, event.payload, event.identity, exc.code
            )
            return self._response(ok=False, code=exc.code, message=exc.message, session_id=event.session_id)
        except Exception:
            logger.exception("session %s: rule adapter failed on %r", event.session_id, event.payload)
            raise

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "session %s: %s played %r, view %s", event.session_id, event.identity, event.payload, view_hash(view)
            )
        return self._response(ok=True, code=OK, message="Move applied", view=view, session_id=event.session_id)

    def _parse_event(self, raw_event: Dict[str, Any]) -> ClickEvent:
        if isinstance(raw_event, dict) and "data" in raw_event:
            fields = dict(raw_event)
            data = fields.pop("data")
            if not isinstance(data, str):
                raise InvalidInput(f"Callback data must be a string, got {data!r}")
            fields["session_id"], fields["snapshot"], fields["payload"] = decode_callback(data)
            raw_event = fields
        return (
            ClickEvent.model_validate(raw_event)
            if hasattr(ClickEvent, "model_validate")
            else ClickEvent.parse_obj(raw_event)
        )

    def view(self, session_id: str) -> RenderView:
        return self.lookup(session_id).view()

    def history(self, session_id: str) -> List[MoveRecord]:
        return self.lookup(session_id).moves()

    def stats(self) -> Dict[str, Any]:
        sessions = self.session_store.sessions()
        finished = sum(1 for session in sessions if session.finished)
        per_game = Counter(session.definition.kind for session in sessions)
        return {
            "running": len(sessions) - finished,
            "finished": finished,
            "games": dict(sorted(per_game.items())),
        }
