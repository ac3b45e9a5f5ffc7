"""Shared fakes for relay tests."""

from typing import Callable, Dict, List, Optional, Sequence

from llm.base_client import BaseCompletionClient, CompletionUnavailable
from memory.kv_store import KeyValueStore
from schemas.message import Message


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store that records every write."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes: List[str] = []

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append(key)


class FakeCompletionClient(BaseCompletionClient):
    """Completion client returning canned replies and recording calls."""

    def __init__(
        self,
        reply: str = "Happy to help!",
        fail: bool = False,
        on_complete: Optional[Callable[[Sequence[Message]], None]] = None
    ):
        super().__init__(model="fake-model")
        self.reply = reply
        self.fail = fail
        self.on_complete = on_complete
        self.calls: List[List[Message]] = []

    def complete(self, transcript: Sequence[Message]) -> str:
        self.calls.append(list(transcript))
        if self.on_complete:
            self.on_complete(transcript)
        if self.fail:
            raise CompletionUnavailable("provider down")
        return self.reply

    def get_provider_name(self) -> str:
        return "fake"
