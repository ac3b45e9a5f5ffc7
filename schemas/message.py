"""Chat message schemas."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageRole(str, Enum):
    """Author of a transcript message."""
    USER = "user"
    ASSISTANT = "assistant"


def _new_message_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """A single turn in the conversation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_message_id)
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=_utc_now)

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("message content must not be empty")
        return value

    @field_validator("timestamp")
    @classmethod
    def _timestamp_aware(cls, value: datetime) -> datetime:
        # Naive instants are assumed to be UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def create(
        cls,
        role: MessageRole,
        content: str,
        not_before: Optional[datetime] = None
    ) -> "Message":
        """
        Build a new message stamped with the current time.

        Args:
            role: Message author
            content: Message text (trimmed, must be non-empty)
            not_before: Earliest allowed timestamp, usually the newest
                transcript entry, so ordering stays non-decreasing

        Returns:
            New Message with a fresh id
        """
        timestamp = _utc_now()
        if not_before is not None and timestamp < not_before:
            timestamp = not_before
        return cls(id=_new_message_id(), role=role, content=content, timestamp=timestamp)


Transcript = List[Message]
