"""Factory for creating LLM clients.

This module provides a centralized way to create LLM clients based on provider
name, using a registry pattern that makes it easy to add new providers.
"""

import importlib
import os
from typing import Any

from .base import BaseLLMClient

# registry of provider configurations
_PROVIDER_REGISTRY: dict[str, dict[str, Any]] = {
    "google": {
        "class_path": "aether_swarm.clients.google.GoogleClient",
        "api_key_env": "GOOGLE_API_KEY",
        "default_model": "gemini-2.5-flash",
    },
    "anthropic": {
        "class_path": "aether_swarm.clients.anthropic.AnthropicClient",
        "api_key_env": "ANTHROPIC_API_KEY",
        "default_model": "claude-sonnet-4-5-20250929",
    },
}


def get_available_providers() -> list[str]:
    """Get list of available provider names."""
    return list(_PROVIDER_REGISTRY.keys())


def get_default_model(provider: str) -> str:
    """Get the default model for a provider.

    Raises:
        ValueError: If provider is unknown.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise ValueError(f"Unknown provider: {provider}. Available: {get_available_providers()}")
    return _PROVIDER_REGISTRY[provider]["default_model"]


def create_client(
    provider: str,
    model: str | None = None,
    client_config: dict | None = None,
    api_key: str | None = None,
) -> BaseLLMClient:
    """Create an LLM client for the specified provider.

    Args:
        provider: The provider name (google, anthropic).
        model: Optional model override. If not provided, uses provider default.
        client_config: Optional configuration dict for the client.
        api_key: Optional API key. If not provided, reads from environment.

    Returns:
        An initialized LLM client instance.

    Raises:
        ValueError: If provider is unknown or API key is not available.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise ValueError(f"Unknown provider: {provider}. Available: {get_available_providers()}")

    config = _PROVIDER_REGISTRY[provider]

    resolved_key = api_key or os.getenv(config["api_key_env"])
    if not resolved_key:
        raise ValueError(f"{config['api_key_env']} not set in environment")

    client_class = _import_client_class(config["class_path"])

    return client_class(
        api_key=resolved_key,
        model=model or config["default_model"],
        client_config=client_config,
    )


def _import_client_class(class_path: str) -> type[BaseLLMClient]:
    """Dynamically import a client class from its dotted path.

    Imports are deferred so that only the selected provider's SDK is loaded.
    """
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
