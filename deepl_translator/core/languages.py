"""
Language code mapping between caller-facing tags and DeepL's codes.
"""
from typing import Dict, Iterable, List, Optional, Tuple


# Order matters: the reverse lookup keeps the last caller code listed for a
# backend code, so "ZH" resolves to "zh-TW". That is a known precision loss,
# not variant detection.
DEEPL_LANGUAGES: List[Tuple[str, str]] = [
    ("auto", "auto"),
    ("zh-CN", "ZH"),
    ("zh-TW", "ZH"),
    ("de", "DE"),
    ("en", "EN"),
    ("es", "ES"),
    ("fr", "FR"),
    ("it", "IT"),
    ("ja", "JA"),
    ("pt", "PT"),
    ("ru", "RU"),
]

AUTO = "auto"


class LanguageMap:
    """Bidirectional, read-only map between caller and backend language codes"""

    def __init__(self, pairs: Iterable[Tuple[str, str]]):
        pairs = list(pairs)
        self._forward: Dict[str, str] = dict(pairs)
        self._reverse: Dict[str, str] = {backend: caller for caller, backend in pairs}

    def to_backend(self, code: str) -> Optional[str]:
        """Backend code for a caller code, or None if unmapped."""
        return self._forward.get(code)

    def to_caller(self, code: str) -> Optional[str]:
        """Caller code for a backend code, or None if unmapped."""
        return self._reverse.get(code)

    def languages(self) -> List[str]:
        return list(self._forward)


DEEPL_LANGUAGE_MAP = LanguageMap(DEEPL_LANGUAGES)
