"""LLM client implementations.

All clients implement the BaseLLMClient interface and normalize
provider-specific responses to unified types.
"""

from .base import BaseLLMClient, with_retry
from .factory import create_client, get_available_providers, get_default_model
from .google import GoogleClient
from .openai import OpenAIClient
from .openai_compat import OpenAICompatibleClient

__all__ = [
    "BaseLLMClient",
    "OpenAICompatibleClient",
    "OpenAIClient",
    "GoogleClient",
    "create_client",
    "get_available_providers",
    "get_default_model",
    "with_retry",
]
