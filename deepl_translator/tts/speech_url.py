"""
Text-to-speech URL builder.

Builds a link to a public speech-synthesis endpoint; no audio is fetched.
"""
import httpx

from deepl_translator.config import (
    SPEECH_ENDPOINT, SPEECH_SPEED, SPEECH_DEFAULT_LANGUAGE, SPEECH_FALLBACK_CODE,
)
from deepl_translator.core.languages import AUTO, DEEPL_LANGUAGE_MAP, LanguageMap


def build_speech_url(text: str, lang: str, language_map: LanguageMap = DEEPL_LANGUAGE_MAP,
                     endpoint: str = SPEECH_ENDPOINT) -> str:
    """
    Build the speech URL for ``text`` spoken in ``lang``.

    "auto" is spoken as SPEECH_DEFAULT_LANGUAGE; unmapped languages fall back
    to SPEECH_FALLBACK_CODE.
    """
    spoken = lang if lang != AUTO else SPEECH_DEFAULT_LANGUAGE
    params = {
        "lan": language_map.to_backend(spoken) or SPEECH_FALLBACK_CODE,
        "ie": "UTF-8",
        "spd": SPEECH_SPEED,
        "text": text,
    }
    return str(httpx.URL(endpoint, params=params))
