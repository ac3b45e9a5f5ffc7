"""Memory system for conversation persistence."""

from .kv_store import KeyValueStore, SQLiteKeyValueStore
from .transcript_repository import TranscriptRepository, DEFAULT_STORAGE_KEY
from .conversation_store import ConversationStore

__all__ = [
    "KeyValueStore",
    "SQLiteKeyValueStore",
    "TranscriptRepository",
    "DEFAULT_STORAGE_KEY",
    "ConversationStore",
]
