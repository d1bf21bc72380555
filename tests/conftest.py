"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from replypredict.llm import ChatMessage, LLMProvider, LLMResponse
from replypredict.prediction import Message, PredictionService, Role
from replypredict.settings import InMemorySettings


class FakeLLMProvider(LLMProvider):
    """LLM provider that records requests and replays canned answers.

    If `gate` is set, every call waits for it before answering, which lets a
    test change the active chat while a request is in flight.
    """

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.gate: asyncio.Event | None = None
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({
            "messages": list(messages),
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        })
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=model or "fake")

    async def close(self) -> None:
        self.closed = True


class Recorder:
    """Listener that remembers every notification."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def __call__(self, chat_id: str, prediction: str) -> None:
        self.calls.append((chat_id, prediction))


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "deepseek": os.getenv("DEEPSEEK_API_KEY")
    }


@pytest.fixture
def provider():
    return FakeLLMProvider(reply="hello!")


@pytest.fixture
def settings():
    return InMemorySettings(ai_enabled=True)


@pytest.fixture
def service(provider, settings):
    """Service with user 'alice' in active chat 'C1'."""
    svc = PredictionService(provider=provider, settings=settings)
    svc.set_current_user("alice")
    svc.set_current_chat("C1")
    return svc


@pytest.fixture
def recorder(service):
    rec = Recorder()
    service.add_prediction_listener(rec)
    return rec


@pytest.fixture
def sample_messages():
    """A short conversation between bob and alice."""
    return [
        Message(role=Role.USER, content="hi", username="bob"),
        Message(role=Role.USER, content="hey bob", username="alice"),
        Message(role=Role.USER, content="lunch today?", username="bob"),
    ]
