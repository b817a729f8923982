"""
Translation Provider Implementations

Factory functions for creating translation provider instances.

Providers:
    - deepl: DeepL web translator (JSON-RPC)
"""
from typing import Callable, Dict

from ..base import TranslationProvider
from .deepl import DeepLProvider, create_deepl_provider

_FACTORIES: Dict[str, Callable[..., TranslationProvider]] = {
    "deepl": create_deepl_provider,
}

__all__ = [
    'DeepLProvider',
    'create_deepl_provider',
    'create_provider',
    'available_providers',
]


def available_providers() -> list:
    return list(_FACTORIES)


def create_provider(provider_name: str = "deepl", **kwargs) -> TranslationProvider:
    """
    Factory function to create a translation provider by name.

    Args:
        provider_name: Name of the provider ("deepl")
        **kwargs: Additional arguments passed to provider constructor
            - For deepl: transport, api_endpoint, user_preferred_langs

    Returns:
        Provider instance

    Raises:
        ValueError: If provider is not supported
    """
    factory = _FACTORIES.get(provider_name)
    if factory is None:
        available = ", ".join(_FACTORIES)
        raise ValueError(f"Unknown translation provider: {provider_name}. Available: {available}")
    return factory(**kwargs)
