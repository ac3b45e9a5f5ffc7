"""In-memory conversation log mirrored to persistent storage."""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from schemas.message import Message
from .transcript_repository import TranscriptRepository

logger = logging.getLogger(__name__)


class ConversationStore:
    """Ordered message log for the single active conversation.

    Only this class mutates the transcript. Every mutation swaps in a new
    list and is flushed to the repository before returning, so readers see
    either the old or the new transcript and never a partial one.
    """

    def __init__(self, repository: TranscriptRepository):
        """
        Initialize store and restore any persisted transcript.

        Args:
            repository: Persistence adapter for the transcript
        """
        self.repository = repository
        self._messages: List[Message] = []
        self.restore()

    def restore(self) -> Tuple[Message, ...]:
        """
        Replace the in-memory transcript with the persisted one.

        Missing or unreadable data yields an empty transcript.

        Returns:
            The restored transcript
        """
        try:
            loaded = self.repository.load()
        except Exception as e:
            logger.error(f"Failed to load transcript: {e}")
            loaded = None

        self._messages = list(loaded) if loaded else []
        logger.info(f"Restored transcript with {len(self._messages)} messages")
        return self.all()

    def append(self, message: Message) -> None:
        """Add a message to the end of the transcript and persist."""
        last = self.last_timestamp
        if last is not None and message.timestamp < last:
            raise ValueError("message timestamp precedes the end of the transcript")

        self._messages = self._messages + [message]
        self._flush()

    def all(self) -> Tuple[Message, ...]:
        """Return a read-only snapshot of the transcript."""
        return tuple(self._messages)

    def reset(self) -> None:
        """Replace the transcript with the empty sequence and persist."""
        self._messages = []
        self._flush()
        logger.info("Transcript cleared")

    @property
    def last_timestamp(self) -> Optional[datetime]:
        messages = self._messages
        return messages[-1].timestamp if messages else None

    def __len__(self) -> int:
        return len(self._messages)

    def _flush(self):
        # Durability is best-effort; the in-memory transcript stays authoritative
        try:
            self.repository.save(self._messages)
        except Exception as e:
            logger.error(f"Failed to persist transcript: {e}")
