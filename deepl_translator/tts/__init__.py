"""
Speech helpers for translation results.
"""
from .speech_url import build_speech_url

__all__ = ['build_speech_url']
