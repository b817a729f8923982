"""
deepl-translator: a translation provider for DeepL's web JSON-RPC endpoint.
"""

__version__ = "0.1.0"

from deepl_translator.config import DeepLConfig
from deepl_translator.core import (
    TranslationResult,
    TranslationError,
    ProtocolError,
    ShapeMismatchError,
)
from deepl_translator.core.providers import DeepLProvider, create_provider

__all__ = [
    "DeepLConfig",
    "DeepLProvider",
    "create_provider",
    "TranslationResult",
    "TranslationError",
    "ProtocolError",
    "ShapeMismatchError",
    "__version__",
]
