"""In-memory settings store.

Holds the flags in process memory. Hosts flip them when the user toggles
a setting; tests use it to drive gating.
"""

from .base import SettingsStore


class InMemorySettings(SettingsStore):
    """Mutable settings held in memory."""

    def __init__(self, ai_enabled: bool = True):
        self._ai_enabled = ai_enabled

    @property
    def ai_enabled(self) -> bool:
        return self._ai_enabled

    @ai_enabled.setter
    def ai_enabled(self, value: bool) -> None:
        self._ai_enabled = bool(value)

    @property
    def backend_type(self) -> str:
        return "memory"
