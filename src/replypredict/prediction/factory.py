from typing import Any

from ..llm import create_llm_provider
from ..settings import InMemorySettings, SettingsStore
from .models import PredictionConfig
from .service import PredictionService


def create_prediction_service(
    api_key: str,
    provider: str = "openai",
    settings: SettingsStore | None = None,
    config: PredictionConfig | None = None,
    **provider_config: Any
) -> PredictionService:
    """Create a prediction service backed by a remote LLM.

    Args:
        api_key: API credential for the provider
        provider: Provider type ('openai' or 'deepseek')
        settings: Host settings (defaults to in-memory, AI enabled)
        config: Request parameters; a model set here overrides the
            provider's default
        **provider_config: Extra provider configuration (base_url, ...)

    Returns:
        PredictionService instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> service = create_prediction_service(api_key="sk-...")
        >>> service.set_current_user("alice")
    """
    config = config or PredictionConfig()
    if config.model is not None:
        provider_config.setdefault("model", config.model)
    llm = create_llm_provider(provider, api_key=api_key, **provider_config)
    return PredictionService(
        provider=llm,
        settings=settings or InMemorySettings(ai_enabled=True),
        config=config,
    )
