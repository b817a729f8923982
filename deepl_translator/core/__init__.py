"""
Core translation logic: provider interface, wire protocol and language codes.
"""
from .base import TranslationProvider, LanguageDetector, TranslationResult, TranslatedParagraphs
from .exceptions import TranslationError, ProtocolError, ShapeMismatchError
from .languages import LanguageMap, DEEPL_LANGUAGE_MAP
from .transport import HttpTransport

__all__ = [
    'TranslationProvider',
    'LanguageDetector',
    'TranslationResult',
    'TranslatedParagraphs',
    'TranslationError',
    'ProtocolError',
    'ShapeMismatchError',
    'LanguageMap',
    'DEEPL_LANGUAGE_MAP',
    'HttpTransport',
]
