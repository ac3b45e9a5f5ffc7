"""Base completion client interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from schemas.message import Message
from .directive import DIRECTIVE


class CompletionUnavailable(Exception):
    """The provider could not produce a reply for this turn.

    Raised for every failure kind (network, auth, bad status, malformed
    body) so callers cannot tell them apart.
    """


class BaseCompletionClient(ABC):
    """Abstract base class for completion clients."""

    DEFAULT_TEMPERATURE = 0.6
    DEFAULT_MAX_TOKENS = 180

    def __init__(
        self,
        model: str,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        directive: str = DIRECTIVE
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.directive = directive

    def build_messages(self, transcript: Sequence[Message]) -> List[Dict[str, str]]:
        """
        Map the transcript to provider messages, directive first.

        Args:
            transcript: Full conversation in order

        Returns:
            List of {role, content} dicts starting with the system directive
        """
        messages = [{"role": "system", "content": self.directive}]
        for message in transcript:
            messages.append({
                "role": message.role.value,
                "content": message.content
            })
        return messages

    @abstractmethod
    def complete(self, transcript: Sequence[Message]) -> str:
        """
        Request one reply for the transcript.

        Args:
            transcript: Full conversation in order

        Returns:
            Trimmed reply text, possibly empty

        Raises:
            CompletionUnavailable: On any provider failure
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of the completion provider."""
        pass

    def get_model_name(self) -> str:
        """Get the name of the model being used."""
        return self.model
