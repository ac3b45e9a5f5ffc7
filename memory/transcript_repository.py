"""Transcript persistence under a single fixed key."""

import json
import logging
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from schemas.message import Message
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "whatsapp-chat-history"

_transcript_adapter = TypeAdapter(List[Message])


class TranscriptRepository:
    """Serializes the whole transcript to one key of a key-value store."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self.store = store
        self.key = key

    def save(self, transcript: Sequence[Message]) -> None:
        """Overwrite the stored transcript with the given one."""
        payload = json.dumps([
            message.model_dump(mode="json") for message in transcript
        ])
        self.store.set(self.key, payload)

    def load(self) -> Optional[List[Message]]:
        """
        Load the stored transcript.

        Returns:
            Messages in stored order, or None when nothing is stored or the
            stored value is not a valid transcript
        """
        raw = self.store.get(self.key)
        if raw is None:
            return None

        try:
            transcript = _transcript_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Stored transcript under '{self.key}' is corrupt, ignoring it "
                f"({e.error_count()} errors)"
            )
            return None

        problem = _ordering_problem(transcript)
        if problem:
            logger.warning(f"Stored transcript under '{self.key}' is corrupt, ignoring it ({problem})")
            return None
        return transcript


def _ordering_problem(transcript: List[Message]) -> Optional[str]:
    """Describe why a transcript breaks id uniqueness or timestamp order, if it does."""
    seen_ids = set()
    previous = None
    for message in transcript:
        if message.id in seen_ids:
            return f"duplicate message id {message.id}"
        seen_ids.add(message.id)
        if previous is not None and message.timestamp < previous.timestamp:
            return f"message {message.id} is older than the one before it"
        previous = message
    return None
