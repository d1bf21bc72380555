"""Next-message prediction for chat clients."""

from .events import PredictionChannel, PredictionListener, Subscription
from .factory import create_prediction_service
from .history import ChatHistory
from .models import (
    HISTORY_LIMIT,
    Message,
    PredictionConfig,
    PredictionResult,
    PredictionStatus,
    Role,
    SkipReason,
)
from .service import PredictionService

__all__ = [
    "HISTORY_LIMIT",
    "ChatHistory",
    "Message",
    "PredictionChannel",
    "PredictionConfig",
    "PredictionListener",
    "PredictionResult",
    "PredictionService",
    "PredictionStatus",
    "Role",
    "SkipReason",
    "Subscription",
    "create_prediction_service",
]
