"""Relay controller: turn-taking between the chat surface and the completion provider."""

import logging
import threading
from enum import Enum
from typing import Callable, List, Optional, Tuple

from config.settings import Settings
from schemas.message import Message, MessageRole

# LLM components
from llm.base_client import BaseCompletionClient, CompletionUnavailable
from llm.factory import create_completion_client, LLMProvider

# Memory components
from memory.kv_store import SQLiteKeyValueStore
from memory.transcript_repository import TranscriptRepository
from memory.conversation_store import ConversationStore

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I couldn't respond right now."
EMPTY_REPLY = "Sorry, something went wrong."


class TurnOutcome(str, Enum):
    """Result of a submitted user turn."""
    IGNORED = "ignored"  # blank input, nothing changed
    BUSY = "busy"  # a turn is already in flight, nothing changed
    REPLIED = "replied"
    FALLBACK = "fallback"  # provider unavailable, fallback reply appended


class RelayState(str, Enum):
    """Turn-processing state."""
    IDLE = "idle"
    AWAITING_COMPLETION = "awaiting_completion"


class RelayEvent(str, Enum):
    """Signal emitted to subscribers."""
    TRANSCRIPT_CHANGED = "transcript_changed"
    PENDING_CHANGED = "pending_changed"


RelayListener = Callable[[RelayEvent, "RelayController"], None]


class RelayController:
    """Drives one conversation: user turn in, exactly one assistant turn out."""

    def __init__(
        self,
        store: ConversationStore,
        completion_client: BaseCompletionClient
    ):
        """
        Initialize controller.

        Args:
            store: Conversation store holding the transcript
            completion_client: Client for the completion provider
        """
        self.store = store
        self.completion_client = completion_client
        self._state = RelayState.IDLE
        self._lock = threading.Lock()
        self._listeners: List[RelayListener] = []

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RelayController":
        """
        Build a controller with SQLite persistence and the configured provider.

        Args:
            settings: Application settings

        Returns:
            Ready-to-use controller with the persisted transcript restored
        """
        settings = settings or Settings()

        provider = LLMProvider(settings.llm_provider)
        completion_client = create_completion_client(
            provider=provider,
            api_key=settings.get_llm_api_key(),
            model=settings.llm_model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout
        )
        logger.info(
            f"Completion client initialized: {completion_client.get_provider_name()} "
            f"({completion_client.get_model_name()})"
        )

        repository = TranscriptRepository(
            SQLiteKeyValueStore(db_path=settings.db_path),
            key=settings.storage_key
        )
        return cls(store=ConversationStore(repository), completion_client=completion_client)

    @property
    def state(self) -> RelayState:
        return self._state

    @property
    def pending(self) -> bool:
        """True while a completion request is in flight."""
        return self._state is RelayState.AWAITING_COMPLETION

    @property
    def transcript(self) -> Tuple[Message, ...]:
        return self.store.all()

    def subscribe(self, listener: RelayListener) -> Callable[[], None]:
        """
        Register a callback for transcript and pending changes.

        Args:
            listener: Called with the event and this controller

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def submit_user_turn(self, text: str) -> TurnOutcome:
        """
        Append a user message and the assistant's reply to it.

        Blank input and submissions made while a turn is in flight are
        ignored. Provider failures produce the fallback reply, so this
        never raises.

        Args:
            text: Raw user input

        Returns:
            What happened to the submission
        """
        content = (text or "").strip()
        if not content:
            logger.debug("Ignoring blank submission")
            return TurnOutcome.IGNORED

        with self._lock:
            if self._state is not RelayState.IDLE:
                logger.info("Turn already in flight, submission refused")
                return TurnOutcome.BUSY
            try:
                self._append(MessageRole.USER, content)
            except Exception as e:
                logger.error(f"Failed to record user message: {e}")
                return TurnOutcome.IGNORED
            self._state = RelayState.AWAITING_COMPLETION

        self._emit(RelayEvent.TRANSCRIPT_CHANGED)
        self._emit(RelayEvent.PENDING_CHANGED)

        outcome = TurnOutcome.FALLBACK
        try:
            reply, outcome = self._request_reply()
            try:
                self._append(MessageRole.ASSISTANT, reply)
            except Exception as e:
                logger.error(f"Failed to record assistant reply, using fallback: {e}")
                outcome = TurnOutcome.FALLBACK
                self._append(MessageRole.ASSISTANT, FALLBACK_REPLY)
            self._emit(RelayEvent.TRANSCRIPT_CHANGED)
        except Exception as e:
            logger.error(f"Failed to record fallback reply: {e}")
        finally:
            self._completion_resolved()

        return outcome

    def reset(self) -> bool:
        """
        Clear the conversation.

        Returns:
            False if a turn is in flight and nothing was cleared
        """
        with self._lock:
            if self._state is not RelayState.IDLE:
                logger.info("Turn in flight, reset refused")
                return False
            self.store.reset()

        self._emit(RelayEvent.TRANSCRIPT_CHANGED)
        return True

    def _request_reply(self) -> Tuple[str, TurnOutcome]:
        """Ask the provider for a reply, substituting fixed text on failure."""
        try:
            reply = self.completion_client.complete(self.store.all())
        except CompletionUnavailable as e:
            logger.warning(f"Completion unavailable, using fallback reply: {e}")
            return FALLBACK_REPLY, TurnOutcome.FALLBACK
        except Exception as e:
            logger.error(f"Unexpected completion client error: {e}")
            return FALLBACK_REPLY, TurnOutcome.FALLBACK

        if not isinstance(reply, str) or not reply.strip():
            logger.warning("Provider returned an empty reply")
            return EMPTY_REPLY, TurnOutcome.REPLIED
        return reply, TurnOutcome.REPLIED

    def _append(self, role: MessageRole, content: str) -> Message:
        message = Message.create(role, content, not_before=self.store.last_timestamp)
        self.store.append(message)
        return message

    def _completion_resolved(self):
        with self._lock:
            self._state = RelayState.IDLE
        self._emit(RelayEvent.PENDING_CHANGED)

    def _emit(self, event: RelayEvent):
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event, self)
            except Exception as e:
                logger.error(f"Relay listener failed on {event.value}: {e}")
