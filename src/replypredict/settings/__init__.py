"""Host settings access for replypredict."""

from .base import SettingsStore
from .env import EnvSettings
from .factory import create_settings_store
from .in_memory import InMemorySettings

__all__ = [
    "SettingsStore",
    "EnvSettings",
    "InMemorySettings",
    "create_settings_store",
]
