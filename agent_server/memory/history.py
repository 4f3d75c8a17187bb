"""
Append-only conversation history.
"""
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationEntry(BaseModel):
    """One completed exchange."""

    input: str  # original, unsanitized
    agent_label: str  # agent that answered (always a registry key)
    route_label: str  # raw router output
    response: str
    timestamp: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "input": self.input,
            "agent": self.agent_label,
            "route_label": self.route_label,
            "response": self.response,
            "timestamp": self.timestamp.isoformat(),
        }


class ConversationHistory:
    """Ordered, append-only log of exchanges for one session."""

    def __init__(self):
        self._entries: List[ConversationEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: ConversationEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def entries(self) -> Tuple[ConversationEntry, ...]:
        """Snapshot of all entries in arrival order."""
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self):
        return iter(self.entries())
