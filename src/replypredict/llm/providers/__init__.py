"""LLM provider implementations."""

from .openai import DeepSeekProvider, OpenAIProvider

__all__ = ["DeepSeekProvider", "OpenAIProvider"]
