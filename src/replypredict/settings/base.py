"""Abstract base class for host settings stores.

The prediction service only needs to know whether AI features are enabled.
The abstraction hides where that flag lives (host UI state, environment,
a config file) and how it is refreshed.
"""

from abc import ABC, abstractmethod


class SettingsStore(ABC):
    """Read-only view of the host application's settings.

    Properties are read synchronously before every prediction attempt, so
    implementations must be cheap and must not block.
    """

    @property
    @abstractmethod
    def ai_enabled(self) -> bool:
        """Whether AI predictions are enabled."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
