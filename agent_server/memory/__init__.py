"""
Memory module for session management and conversation history.
"""
from .history import ConversationEntry, ConversationHistory
from .store import SessionMeta, SessionStore

__all__ = [
    "ConversationEntry",
    "ConversationHistory",
    "SessionMeta",
    "SessionStore",
]
