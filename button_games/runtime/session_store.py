"""In-memory session registry shared by every chat the bot serves."""

from __future__ import annotations

import threading
import uuid
from typing import Dict, List, Optional, Set

from button_games.runtime.session import Session


class SessionStore:
    """Maps session ids to live sessions.

    The lock guards only the mapping; moves are serialized by each session's
    own lock. Ids are never handed out twice, even after a session is removed,
    so a stale button cannot reach an unrelated newer game.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._issued: Set[str] = set()
        self._pending: Set[str] = set()
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            while True:
                session_id = uuid.uuid4().hex
                if session_id not in self._issued:
                    self._issued.add(session_id)
                    self._pending.add(session_id)
                    return session_id

    def add(self, session: Session) -> None:
        """Register a session whose id came from `new_id` or was never issued here."""
        with self._lock:
            if session.session_id in self._issued and session.session_id not in self._pending:
                raise ValueError(f"session id {session.session_id} was already used")
            self._pending.discard(session.session_id)
            self._issued.add(session.session_id)
            self._sessions[session.session_id] = session

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.pop(session_id, None)

    def was_issued(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._issued

    def sessions(self) -> List[Session]:
        with self._lock:
            return list(self._sessions.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
