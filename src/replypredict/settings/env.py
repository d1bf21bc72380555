"""Environment-backed settings store.

Reads flags from environment variables on every access so a change to the
process environment is picked up without rebuilding the service. Variables
from a .env file in the working directory are loaded once at construction.
"""

import logging
import os

from dotenv import load_dotenv

from .base import SettingsStore

logger = logging.getLogger(__name__)

DEFAULT_AI_ENABLED_VAR = "REPLYPREDICT_AI_ENABLED"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def parse_bool(value: str | None, default: bool) -> bool:
    """Parse a boolean flag from a string.

    Args:
        value: Raw value (None when the variable is unset)
        default: Value returned for unset or unrecognised input

    Returns:
        Parsed flag
    """
    if value is None:
        return default

    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False

    logger.warning("Unrecognised boolean value %r, using default %s", value, default)
    return default


class EnvSettings(SettingsStore):
    """Settings read from environment variables.

    Environment variables:
        REPLYPREDICT_AI_ENABLED: Enable predictions (default: true)
    """

    def __init__(
        self,
        ai_enabled_var: str = DEFAULT_AI_ENABLED_VAR,
        default_ai_enabled: bool = True,
        load_env_file: bool = True,
    ):
        self._ai_enabled_var = ai_enabled_var
        self._default_ai_enabled = default_ai_enabled
        if load_env_file:
            load_dotenv()

    @property
    def ai_enabled(self) -> bool:
        return parse_bool(os.getenv(self._ai_enabled_var), self._default_ai_enabled)

    @property
    def backend_type(self) -> str:
        return "env"
