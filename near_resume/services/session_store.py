"""In-memory résumé sessions with expiry. Nothing is written to disk."""

import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from near_resume.config import SESSION_TTL_HOURS
from near_resume.schemas.resume import Resume
from near_resume.schemas.session import ChatMessage, ResumeSession
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class SessionStore:
    """
    Thread-safe session map keyed by session id.

    Expired sessions are invisible to get() and are removed by
    cleanup_expired(); the clock is injectable so expiry can be tested.
    """

    def __init__(self, ttl_hours: float = SESSION_TTL_HOURS, clock: Optional[Clock] = None) -> None:
        self.ttl = timedelta(hours=ttl_hours)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._sessions: Dict[str, ResumeSession] = {}
        self._lock = threading.Lock()

    def create(
        self,
        original_filename: str = "",
        original_text: str = "",
        resume: Optional[Resume] = None,
        detailed_format: bool = True,
    ) -> ResumeSession:
        now = self._clock()
        session = ResumeSession(
            id=uuid.uuid4().hex,
            original_filename=original_filename,
            original_text=original_text,
            resume=resume,
            detailed_format=detailed_format,
            created_at=now,
            expires_at=now + self.ttl,
        )
        self.put(session)
        logger.info("Created session %s for %s", session.id, original_filename or "upload")
        return session

    def put(self, session: ResumeSession) -> None:
        with self._lock:
            self._sessions[session.id] = session.model_copy(deep=True)

    def get(self, session_id: str) -> Optional[ResumeSession]:
        """Return a copy of the session, or None if unknown or expired."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired(self._clock()):
                del self._sessions[session_id]
                logger.info("Session %s expired", session_id)
                return None
            return session.model_copy(deep=True)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def update_resume(self, session_id: str, resume: Resume) -> Optional[ResumeSession]:
        session = self.get(session_id)
        if session is None:
            return None
        session.resume = resume
        self.put(session)
        return session

    def add_message(
        self,
        session_id: str,
        role: str,
        content: str,
        changes: Optional[List[Dict[str, str]]] = None,
    ) -> Optional[ChatMessage]:
        session = self.get(session_id)
        if session is None:
            logger.warning("Cannot add message: session %s not found", session_id)
            return None
        message = ChatMessage(role=role, content=content, changes=changes or [], created_at=self._clock())
        session.messages.append(message)
        self.put(session)
        return message

    def messages(self, session_id: str) -> List[ChatMessage]:
        session = self.get(session_id)
        return session.messages if session else []

    def cleanup_expired(self) -> int:
        """Drop every expired session; returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("Removed %s expired sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
