"""
Provider interface and result data structures.

Every translation backend exposes the same capability: a name, the list of
languages it accepts, ``translate`` and optionally ``detect``. Providers are
matched structurally against ``TranslationProvider``; they do not share a
base class.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@dataclass
class TranslatedParagraphs:
    """Text split for display, with an optional speech URL"""
    paragraphs: List[str] = field(default_factory=list)
    tts: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"paragraphs": list(self.paragraphs), "tts": self.tts}


@dataclass
class TranslationResult:
    """Result of a full translate call"""
    engine: str
    text: str
    from_lang: str
    to_lang: str
    origin: TranslatedParagraphs = field(default_factory=TranslatedParagraphs)
    trans: TranslatedParagraphs = field(default_factory=TranslatedParagraphs)

    def to_dict(self) -> Dict[str, Any]:
        """Caller-facing JSON shape (``from``/``to`` keys)"""
        return {
            "engine": self.engine,
            "text": self.text,
            "from": self.from_lang,
            "to": self.to_lang,
            "origin": self.origin.to_dict(),
            "trans": self.trans.to_dict(),
        }


@runtime_checkable
class TranslationProvider(Protocol):
    """Capability shared by every translation backend"""

    name: str

    def get_supported_languages(self) -> List[str]:
        ...

    async def translate(self, text: str, from_lang: str, to_lang: str,
                        config: Optional[Any] = None) -> TranslationResult:
        ...


@runtime_checkable
class LanguageDetector(Protocol):
    """Optional capability: providers that can identify a text's language"""

    async def detect(self, text: str) -> str:
        ...
