"""Application settings."""

import os
from typing import Optional
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Application configuration settings."""

    # LLM Provider settings
    llm_provider: str = "openai"  # "openai" or "anthropic"
    llm_model: Optional[str] = None  # Override default model (gpt-4o-mini or claude)
    openai_base_url: Optional[str] = None

    # API Keys
    openai_api_key: Optional[str] = Field(None, repr=False)
    anthropic_api_key: Optional[str] = Field(None, repr=False)

    # Fixed request parameters
    temperature: float = 0.6
    max_tokens: int = 180
    request_timeout: Optional[float] = None  # None keeps the transport default

    # Persistence settings
    db_path: str = "data/chat_history.db"
    storage_key: str = "whatsapp-chat-history"

    # Logging
    verbose: bool = False

    def __init__(self, **data):
        # Auto-load API keys from environment if not provided
        if "openai_api_key" not in data or data["openai_api_key"] is None:
            data["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

        if "anthropic_api_key" not in data or data["anthropic_api_key"] is None:
            data["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

        super().__init__(**data)

    def get_llm_api_key(self) -> Optional[str]:
        """Get the API key for the configured LLM provider."""
        if self.llm_provider == "openai":
            return self.openai_api_key
        elif self.llm_provider == "anthropic":
            return self.anthropic_api_key
        return None
