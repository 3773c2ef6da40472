from __future__ import annotations

import logging
import re
import threading
import uuid
from collections.abc import Callable

from app.application.exceptions import BookingSessionNotFound
from app.application.use_cases.booking_session import BookingSession


SessionFactory = Callable[[str, bool], BookingSession]
SnapshotCheck = Callable[[str], bool]

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

logger = logging.getLogger(__name__)


class BookingSessionRegistry:
    """
    Live booking sessions by id. A session that is not in memory but has a
    saved draft (e.g. after a restart) is rebuilt from that draft.

    Once a booking has been handed off to the dashboard the session is served
    one last time and then dropped.
    """

    def __init__(self, factory: SessionFactory, has_snapshot: SnapshotCheck) -> None:
        self._factory = factory
        self._has_snapshot = has_snapshot
        self._sessions: dict[str, BookingSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, session_id: str | None = None) -> BookingSession:
        session_id = session_id or uuid.uuid4().hex
        if not _SESSION_ID_RE.match(session_id):
            raise ValueError(f"Invalid session id: {session_id!r}")
        with self._lock:
            self._prune_finished()
            existing = self._sessions.get(session_id)
            if existing is not None:
                return existing
            session = self._factory(session_id, True)
            self._sessions[session_id] = session
            return session

    def get(self, session_id: str) -> BookingSession:
        if not _SESSION_ID_RE.match(session_id):
            raise BookingSessionNotFound(session_id)
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                if session.is_finished:
                    del self._sessions[session_id]
                return session
            if not self._has_snapshot(session_id):
                raise BookingSessionNotFound(session_id)
            session = self._factory(session_id, True)
            self._sessions[session_id] = session
            return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def _prune_finished(self) -> None:
        finished = [session_id for session_id, session in self._sessions.items() if session.is_finished]
        for session_id in finished:
            del self._sessions[session_id]
        if finished:
            logger.info("Evicted finished booking sessions", extra={"reason": str(len(finished))})
