"""Bounded per-chat message history.

Each chat keeps at most `limit` messages; appending past the limit drops
the oldest one.
"""

from collections import deque
from collections.abc import Iterable

from .models import HISTORY_LIMIT, Message


class ChatHistory:
    """Per-chat FIFO of recent messages."""

    def __init__(self, limit: int = HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._limit = limit
        self._chats: dict[str, deque[Message]] = {}

    @property
    def limit(self) -> int:
        return self._limit

    def get(self, chat_id: str) -> list[Message]:
        """Return a copy of the chat's messages, oldest first."""
        return list(self._chats.get(chat_id, ()))

    def append(self, chat_id: str, message: Message) -> None:
        """Append one message, evicting the oldest past the limit."""
        if chat_id not in self._chats:
            self._chats[chat_id] = deque(maxlen=self._limit)
        self._chats[chat_id].append(message)

    def replace(self, chat_id: str, messages: Iterable[Message]) -> list[Message]:
        """Replace the chat's history with the last `limit` of `messages`.

        Returns:
            The messages actually kept
        """
        kept = deque(messages, maxlen=self._limit)
        self._chats[chat_id] = kept
        return list(kept)

    def discard(self, chat_id: str) -> None:
        """Delete the chat's history if any."""
        self._chats.pop(chat_id, None)

    def clear(self) -> None:
        """Delete history for every chat."""
        self._chats.clear()

    def chat_ids(self) -> list[str]:
        return list(self._chats)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._chats

    def __len__(self) -> int:
        return len(self._chats)
