"""Next-message prediction service.

Keeps the recent history of the active chat, decides whether a prediction
may be requested, asks the completion boundary for the current user's next
message and broadcasts the answer to listeners.

Hidden design decisions:
- Gating order and the reasons reported for skipped requests
- Mapping of chat messages to completion turns (own messages are the
  assistant side of the conversation)
- Discarding answers that arrive after the chat changed or after a newer
  request for the same chat was issued
"""

import logging
from collections.abc import Sequence
from typing import Any

from ..llm import ChatMessage, LLMProvider
from ..prompts import load_prompt, read_prompt_file
from ..settings import SettingsStore
from .events import PredictionChannel, PredictionListener, Subscription
from .history import ChatHistory
from .models import (
    Message,
    PredictionConfig,
    PredictionResult,
    PredictionStatus,
    Role,
    SkipReason,
)

logger = logging.getLogger(__name__)


class PredictionService:
    """Predicts the current user's next message in the active chat.

    One instance is owned by the host application and passed to whoever
    needs it. All methods except `predict`, `predict_message`, `regenerate`
    and `regenerate_prediction` are synchronous and never yield to the
    event loop.

    Usage:
        service = PredictionService(provider, settings)
        service.set_current_user("alice")
        service.set_current_chat("C1")
        unsubscribe = service.subscribe(on_prediction)
        text = await service.predict_message("C1", messages)
    """

    def __init__(
        self,
        provider: LLMProvider,
        settings: SettingsStore,
        config: PredictionConfig | None = None,
        channel: PredictionChannel | None = None,
    ):
        """Initialize the service.

        Args:
            provider: Completion boundary
            settings: Host settings, read before every attempt
            config: Request parameters (defaults match the stock persona)
            channel: Listener channel (a private one is created if omitted)

        Raises:
            OSError: If the configured prompt file cannot be read
            ValueError: If the configured prompt file is empty or not UTF-8
        """
        self._provider = provider
        self._settings = settings
        self._config = config or PredictionConfig()
        self._channel = channel or PredictionChannel()
        self._history = ChatHistory(limit=self._config.history_limit)
        self._system_prompt = self._resolve_system_prompt(self._config)
        self._current_chat_id: str | None = None
        self._current_user_id: str | None = None
        self._generation = 0
        self._latest_generation: dict[str, int] = {}

    @property
    def config(self) -> PredictionConfig:
        return self._config

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    @property
    def current_chat_id(self) -> str | None:
        return self._current_chat_id

    @property
    def current_user_id(self) -> str | None:
        return self._current_user_id

    # Active context

    def set_current_user(self, user_id: str | None) -> None:
        """Record whose messages count as "mine"."""
        self._current_user_id = user_id

    def set_current_chat(self, chat_id: str | None) -> None:
        """Set the active chat.

        Moving to another chat, or to None, drops the history of every chat
        and invalidates in-flight requests.
        """
        if chat_id is None or chat_id != self._current_chat_id:
            self._history.clear()
            self._latest_generation.clear()
        self._current_chat_id = chat_id

    # Listeners

    def add_prediction_listener(self, listener: PredictionListener) -> None:
        self._channel.add(listener)

    def remove_prediction_listener(self, listener: PredictionListener) -> None:
        self._channel.remove(listener)

    def subscribe(self, listener: PredictionListener) -> Subscription:
        """Register a listener; calling the returned handle removes it."""
        return self._channel.subscribe(listener)

    # History

    def get_history(self, chat_id: str) -> list[Message]:
        return self._history.get(chat_id)

    def update_history(self, chat_id: str, message: Message) -> None:
        """Append a message to the active chat's history.

        Messages for any other chat are ignored.
        """
        if chat_id != self._current_chat_id:
            return
        self._history.append(chat_id, message)

    def clear_history(self, chat_id: str) -> None:
        self._history.discard(chat_id)

    def clear_prediction(self) -> None:
        """Tell listeners there is no current suggestion for the active chat."""
        chat_id = self._current_chat_id
        if not chat_id:
            return
        self._history.discard(chat_id)
        self._channel.publish(chat_id, "")
        logger.debug("Prediction cleared for chat %s", chat_id)

    # Prediction

    @staticmethod
    def _resolve_system_prompt(config: PredictionConfig) -> str:
        if config.system_prompt_path is not None:
            return read_prompt_file(config.system_prompt_path)
        return load_prompt(config.system_prompt_name)

    def _check_gates(self, chat_id: str, messages: Sequence[Message]) -> SkipReason | None:
        if chat_id != self._current_chat_id:
            logger.debug(
                "Prediction skipped: wrong chat (chat_id=%s, current_chat_id=%s)",
                chat_id, self._current_chat_id,
            )
            return SkipReason.INACTIVE_CHAT
        if not self._current_user_id:
            logger.debug("Prediction skipped: no current user (chat_id=%s)", chat_id)
            return SkipReason.NO_USER
        if not messages:
            logger.debug("Prediction skipped: no messages (chat_id=%s)", chat_id)
            return SkipReason.NO_MESSAGES
        if not self._settings.ai_enabled:
            logger.debug("Prediction skipped: AI is disabled")
            return SkipReason.AI_DISABLED
        return None

    def _to_turns(self, messages: Sequence[Message]) -> list[ChatMessage]:
        """Map chat messages to completion turns, dropping usernames."""
        return [
            ChatMessage(
                role=(
                    Role.ASSISTANT.value
                    if msg.username == self._current_user_id
                    else Role.USER.value
                ),
                content=msg.content,
            )
            for msg in messages
        ]

    def _is_current(self, chat_id: str, generation: int) -> bool:
        return (
            chat_id == self._current_chat_id
            and self._latest_generation.get(chat_id) == generation
        )

    async def predict(self, chat_id: str, messages: Sequence[Message]) -> PredictionResult:
        """Request a prediction and report how the attempt ended.

        Args:
            chat_id: Chat the messages belong to
            messages: Conversation so far, oldest first

        Returns:
            PredictionResult; listeners are notified only when its status
            is PREDICTED
        """
        reason = self._check_gates(chat_id, messages)
        if reason is not None:
            return PredictionResult.skipped(chat_id, reason)

        recent = self._history.replace(chat_id, messages)
        # gating rejected empty input, so there is at least one turn
        turns = self._to_turns(recent)

        self._generation += 1
        generation = self._generation
        self._latest_generation[chat_id] = generation

        request = [
            ChatMessage(
                role=Role.SYSTEM.value,
                content=self._system_prompt,
            ),
            *turns,
        ]
        logger.debug(
            "Requesting prediction (chat_id=%s, user=%s, generation=%d, turns=%s)",
            chat_id, self._current_user_id, generation,
            [turn.model_dump() for turn in turns],
        )

        try:
            response = await self._provider.chat_completion(
                request,
                model=self._config.model,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
                presence_penalty=self._config.presence_penalty,
                frequency_penalty=self._config.frequency_penalty,
            )
        except Exception as e:
            logger.exception("Error predicting message for chat %s", chat_id)
            return PredictionResult(
                chat_id=chat_id,
                status=PredictionStatus.FAILED,
                error=f"{type(e).__name__}: {e}",
                generation=generation,
            )

        if not self._is_current(chat_id, generation):
            logger.info(
                "Discarding stale prediction (chat_id=%s, generation=%d, current_chat_id=%s)",
                chat_id, generation, self._current_chat_id,
            )
            return PredictionResult(
                chat_id=chat_id,
                status=PredictionStatus.STALE,
                generation=generation,
            )

        prediction = response.content or ""
        logger.debug("Received prediction for chat %s: %r", chat_id, prediction)
        self._channel.publish(chat_id, prediction)

        return PredictionResult(
            chat_id=chat_id,
            status=PredictionStatus.PREDICTED,
            text=prediction,
            generation=generation,
        )

    async def predict_message(self, chat_id: str, messages: Sequence[Message]) -> str:
        """Predict the current user's next message.

        Returns:
            Predicted text, or "" when skipped, failed or stale
        """
        result = await self.predict(chat_id, messages)
        return result.text

    async def regenerate(self, chat_id: str, messages: Sequence[Message]) -> PredictionResult:
        """Request a fresh prediction if AI is still enabled."""
        if not self._settings.ai_enabled:
            logger.debug("Regeneration skipped: AI is disabled")
            return PredictionResult.skipped(chat_id, SkipReason.AI_DISABLED)
        return await self.predict(chat_id, messages)

    async def regenerate_prediction(self, chat_id: str, messages: Sequence[Message]) -> str:
        result = await self.regenerate(chat_id, messages)
        return result.text

    # Lifecycle

    async def close(self) -> None:
        """Close the completion boundary."""
        await self._provider.close()

    async def __aenter__(self) -> "PredictionService":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self._provider.__aexit__(exc_type, exc_val, exc_tb)
