"""Business identity shown by the chat surfaces."""

from pydantic import BaseModel


class BusinessProfile(BaseModel):
    """Header details for the business the assistant represents."""
    name: str
    avatar: str  # initials
    tagline: str = "Typically replies in minutes"


BRIGHTPATH_STUDIO = BusinessProfile(name="BrightPath Studio", avatar="BP")
