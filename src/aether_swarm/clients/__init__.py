"""LLM client implementations.

All clients implement the BaseLLMClient interface and normalize
provider-specific responses to unified types. Provider modules are
imported lazily by the factory so that only the selected SDK is loaded.
"""

from .base import BaseLLMClient, with_retry
from .factory import create_client, get_available_providers, get_default_model

__all__ = [
    "BaseLLMClient",
    "create_client",
    "get_available_providers",
    "get_default_model",
    "with_retry",
]
