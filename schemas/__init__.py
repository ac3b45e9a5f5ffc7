"""Pydantic schemas for the business chat relay."""

from .message import Message, MessageRole, Transcript
from .business import BusinessProfile, BRIGHTPATH_STUDIO

__all__ = [
    "Message",
    "MessageRole",
    "Transcript",
    "BusinessProfile",
    "BRIGHTPATH_STUDIO",
]
