"""
In-memory session store.

Each session owns its own ConversationHistory; nothing is shared between
sessions and nothing outlives the process.
"""
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from .history import ConversationHistory

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SessionMeta:
    """Metadata about a conversation session."""
    session_id: str
    created_at: datetime
    last_active: datetime
    message_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "session_id": self.session_id,
            "created_at": self.created_at.isoformat(),
            "last_active": self.last_active.isoformat(),
            "message_count": self.message_count,
        }


@dataclass
class _Session:
    history: ConversationHistory = field(default_factory=ConversationHistory)
    created_at: datetime = field(default_factory=_utcnow)
    last_active: datetime = field(default_factory=_utcnow)


class SessionStore:
    """Process-lifetime storage for conversation sessions."""

    def __init__(self):
        self._sessions: Dict[str, _Session] = {}
        self._lock = threading.Lock()

    def create_session(self, history: Optional[ConversationHistory] = None) -> str:
        """
        Create a new session.

        Args:
            history: Existing history to adopt (e.g. from the exchange that
                opened the session); a fresh one is created otherwise.

        Returns:
            session_id: UUID string
        """
        session_id = str(uuid.uuid4())
        with self._lock:
            self._sessions[session_id] = _Session(
                history=history if history is not None else ConversationHistory()
            )
        logger.info(f"Created session {session_id}")
        return session_id

    def session_exists(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def get_history(self, session_id: str) -> ConversationHistory:
        """
        Get the conversation history for a session.

        Raises:
            ValueError: If session doesn't exist
        """
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise ValueError(f"Session {session_id} not found")
        return session.history

    def touch(self, session_id: str) -> None:
        """Mark a session as active now."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                session.last_active = _utcnow()

    def list_sessions(self) -> List[SessionMeta]:
        """
        List all sessions with metadata.

        Returns:
            List of SessionMeta objects, ordered by last_active (most recent first)
        """
        with self._lock:
            items = list(self._sessions.items())

        sessions = [
            SessionMeta(
                session_id=session_id,
                created_at=session.created_at,
                last_active=session.last_active,
                message_count=len(session.history),
            )
            for session_id, session in items
        ]
        sessions.sort(key=lambda s: s.last_active, reverse=True)
        return sessions

    def delete_session(self, session_id: str) -> bool:
        """
        Tear down a session and its history.

        Returns:
            True if session was deleted, False if not found
        """
        with self._lock:
            deleted = self._sessions.pop(session_id, None) is not None

        if deleted:
            logger.info(f"Deleted session {session_id}")
        else:
            logger.warning(f"Session {session_id} not found for deletion")
        return deleted

    def cleanup_expired(self, timeout_minutes: int = 30) -> int:
        """
        Delete sessions that have been inactive for longer than timeout.

        Returns:
            Number of sessions deleted
        """
        cutoff = _utcnow() - timedelta(minutes=timeout_minutes)
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.last_active < cutoff]
            for session_id in expired:
                del self._sessions[session_id]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired sessions")
        return len(expired)
