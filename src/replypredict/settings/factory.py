"""Factory for creating settings stores."""

from typing import Any

from .base import SettingsStore


def create_settings_store(
    backend: str = "memory",
    **kwargs: Any
) -> SettingsStore:
    """Create a settings store.

    Args:
        backend: Backend type ("memory" or "env")
        **kwargs: Backend-specific configuration

    Returns:
        SettingsStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemorySettings
        return InMemorySettings(**kwargs)

    elif backend == "env":
        from .env import EnvSettings
        return EnvSettings(**kwargs)

    raise ValueError(
        f"Unsupported settings backend: {backend}. "
        f"Supported backends: memory, env"
    )
