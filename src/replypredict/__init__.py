"""
replypredict: predicts the next chat message a user would send.

Forwards the recent messages of the active chat to an LLM and broadcasts
the suggested reply to listeners.
"""

__version__ = "0.1.0"

from .log import configure_logging
from .prediction import (
    Message,
    PredictionConfig,
    PredictionResult,
    PredictionService,
    PredictionStatus,
    Role,
    SkipReason,
    create_prediction_service,
)
from .settings import EnvSettings, InMemorySettings, SettingsStore

__all__ = [
    "EnvSettings",
    "InMemorySettings",
    "Message",
    "PredictionConfig",
    "PredictionResult",
    "PredictionService",
    "PredictionStatus",
    "Role",
    "SettingsStore",
    "SkipReason",
    "configure_logging",
    "create_prediction_service",
]
