"""Data models for next-message prediction."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..prompts import PREDICT_NEXT_MESSAGE

HISTORY_LIMIT = 20


class Role(str, Enum):
    """Author role of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Message(BaseModel):
    """A chat message as seen by the host application."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the author")
    content: str = Field(description="Message text")
    username: str | None = Field(
        default=None,
        description="Identifier of the author, compared against the current user"
    )


class PredictionStatus(str, Enum):
    """Outcome of a prediction attempt."""

    PREDICTED = "predicted"  # Boundary answered and listeners were notified
    SKIPPED = "skipped"      # Gating rejected the request, no boundary call
    FAILED = "failed"        # Boundary raised
    STALE = "stale"          # Answer arrived after the chat changed or a newer request


class SkipReason(str, Enum):
    """Why gating rejected a prediction attempt."""

    INACTIVE_CHAT = "inactive_chat"
    NO_USER = "no_user"
    NO_MESSAGES = "no_messages"
    AI_DISABLED = "ai_disabled"


class PredictionResult(BaseModel):
    """Distinguishable result of a prediction attempt.

    Callers that only want text use `text`, which is empty for every
    status other than PREDICTED.
    """

    model_config = ConfigDict(frozen=True)

    chat_id: str = Field(description="Chat the prediction was requested for")
    status: PredictionStatus
    text: str = Field(default="", description="Predicted message text")
    reason: SkipReason | None = Field(default=None, description="Set when skipped")
    error: str | None = Field(default=None, description="Set when failed")
    generation: int | None = Field(
        default=None,
        description="Request counter value, None when no request was issued"
    )

    @property
    def ok(self) -> bool:
        return self.status == PredictionStatus.PREDICTED

    @classmethod
    def skipped(cls, chat_id: str, reason: SkipReason) -> "PredictionResult":
        return cls(chat_id=chat_id, status=PredictionStatus.SKIPPED, reason=reason)


class PredictionConfig(BaseModel):
    """Request parameters for the completion boundary."""

    model_config = ConfigDict(frozen=True)

    model: str | None = Field(
        default=None,
        description="Completion model, None uses the provider's default"
    )
    max_tokens: int = Field(default=100, ge=1, description="Maximum output tokens")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    presence_penalty: float = Field(default=0.6, ge=-2.0, le=2.0)
    frequency_penalty: float = Field(default=0.5, ge=-2.0, le=2.0)
    history_limit: int = Field(
        default=HISTORY_LIMIT,
        ge=1,
        description="Messages kept per chat and sent per request"
    )
    system_prompt_name: str = Field(
        default=PREDICT_NEXT_MESSAGE,
        description="Bundled prompt holding the system instruction"
    )
    system_prompt_path: Path | None = Field(
        default=None,
        description="Explicit prompt file, takes precedence over system_prompt_name"
    )
