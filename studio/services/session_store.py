"""In-memory registry of browser sessions.

Each session id (carried in a cookie) maps to its own ``SessionController``.
Nothing is persisted; when more than ``max_sessions`` sessions exist the
least recently used one is dropped.
"""
from __future__ import annotations

import logging
import secrets
from collections import OrderedDict
from functools import lru_cache

from studio.config import get_settings
from studio.services.controller import SessionController
from studio.services.genai import get_provider
from studio.services.orchestrator import Orchestrator
from studio.services.uploads import UploadIntake

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, orchestrator: Orchestrator, intake: UploadIntake, *, max_sessions: int = 100) -> None:
        self._orchestrator = orchestrator
        self._intake = intake
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, SessionController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get_or_create(self, session_id: str | None) -> tuple[str, SessionController]:
        """Return ``(session_id, controller)``, opening a new session if needed."""

        if session_id is not None and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return session_id, self._sessions[session_id]

        new_id = secrets.token_urlsafe(16)
        controller = SessionController(self._orchestrator, self._intake)
        self._sessions[new_id] = controller
        logger.debug("Opened session %s", new_id)
        self._evict(keep=new_id)
        return new_id, controller

    def _evict(self, *, keep: str) -> None:
        while len(self._sessions) > self._max_sessions:
            # Sessions with a call in flight are still owned by their handler.
            victim = next(
                (sid for sid, c in self._sessions.items() if sid != keep and not c.state.is_busy),
                None,
            )
            if victim is None:
                return
            del self._sessions[victim]
            logger.info("Evicted idle session %s", victim)


@lru_cache()
def get_session_store() -> SessionStore:
    settings = get_settings()
    orchestrator = Orchestrator(get_provider(), suggestion_count=settings.suggestion_count)
    intake = UploadIntake(
        max_bytes=settings.upload_max_bytes,
        max_dim=settings.upload_max_dim,
        quality=settings.upload_quality,
    )
    return SessionStore(orchestrator, intake, max_sessions=settings.max_sessions)
