"""
DeepL web translator provider.

This module provides the DeepLProvider class, which drives the JSON-RPC
endpoint behind DeepL's public web page in two round-trips:

    1. LMT_split_into_sentences - segment the text, detect its language
    2. LMT_handle_jobs          - translate one job per sentence

The endpoint is undocumented. Request ids are random draws; the translate
call reuses the split id plus one.
"""

import asyncio
import json
import logging
import re
from typing import Any, Dict, List, Optional, Union

from deepl_translator.config import (
    API_ENDPOINT, BROWSER_USER_AGENT, DeepLConfig,
    SPLIT_METHOD, TRANSLATE_METHOD, USER_PREFERRED_LANGS,
)
from deepl_translator.tts.speech_url import build_speech_url
from ..base import TranslatedParagraphs, TranslationResult
from ..exceptions import ShapeMismatchError
from ..jsonrpc import (
    SplitJob, SplitOutcome,
    build_envelope, build_jobs, new_request_id, parse_split_result,
    parse_translations, reduce_translations, split_params, translate_params,
)
from ..languages import AUTO, DEEPL_LANGUAGE_MAP, LanguageMap
from ..transport import HttpTransport

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK = re.compile(r"\n+")


class DeepLProvider:
    """
    Provider for DeepL's web JSON-RPC endpoint.

    Holds no per-call state, so one instance can serve concurrent calls.

    Example:
        >>> async with DeepLProvider() as deepl:
        ...     result = await deepl.translate("I love you", "en", "zh-CN")
        >>> result.trans.paragraphs
        ['我爱你', ...]
    """

    name = "deepl"

    def __init__(self, transport: Optional[HttpTransport] = None,
                 api_endpoint: str = API_ENDPOINT,
                 user_preferred_langs: Optional[List[str]] = None,
                 language_map: LanguageMap = DEEPL_LANGUAGE_MAP):
        """
        Args:
            transport: HTTP transport; a pooled one is created when omitted
            api_endpoint: JSON-RPC endpoint URL
            user_preferred_langs: Backend codes sent as the user's preferences
            language_map: Caller <-> backend language code table
        """
        self.transport = transport or HttpTransport()
        self.api_endpoint = api_endpoint
        self.user_preferred_langs = list(user_preferred_langs or USER_PREFERRED_LANGS)
        self.language_map = language_map

    async def __aenter__(self) -> 'DeepLProvider':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        await self.transport.close()

    def get_supported_languages(self) -> List[str]:
        return self.language_map.languages()

    def _backend_code(self, lang: str) -> str:
        # Unmapped languages go through as given
        return self.language_map.to_backend(lang) or lang

    def _split_headers(self, config: DeepLConfig) -> Dict[str, str]:
        return {
            "content-type": "text/plain",
            "Cookie": config.session_cookie,
            "User-Agent": BROWSER_USER_AGENT,
            "Origin": "https://www.deepl.com",
            "Referer": "https://www.deepl.com/translator",
            "sec-fetch-site": "same-site",
            "sec-fetch-mode": "cors",
            "sec-fetch-dest": "empty",
            "authority": "www2.deepl.com",
            "dnt": "1",
        }

    async def _call(self, method: str, request_id: int, params: Dict[str, Any],
                    config: DeepLConfig, headers: Dict[str, str]) -> Any:
        envelope = build_envelope(method, request_id, params, config.jsonrpc)
        logger.debug("DeepL %s id=%s", method, request_id)
        response = await self.transport.request(
            self.api_endpoint,
            method="POST",
            headers=headers,
            content=json.dumps(envelope, ensure_ascii=False),
        )
        try:
            return response.json()
        except ValueError as e:
            raise ShapeMismatchError("Response body is not JSON",
                                     context={"method": method, "status": response.status_code}) from e

    async def split(self, text: str, from_lang: str, request_id: int,
                    config: Optional[DeepLConfig] = None) -> SplitOutcome:
        """
        Segment ``text`` into sentences and detect its language.

        Returns an empty SplitOutcome when the response has no usable split.

        Raises:
            ProtocolError: if the backend returns an error envelope
        """
        config = config or DeepLConfig()
        try:
            payload = await self._call(
                SPLIT_METHOD,
                request_id,
                split_params(text, self._backend_code(from_lang), self.user_preferred_langs),
                config,
                self._split_headers(config),
            )
            return parse_split_result(payload)
        except ShapeMismatchError as e:
            logger.debug("No segmentation available, using whole text: %s", e)
            return SplitOutcome()

    async def handle_jobs(self, jobs: List[SplitJob], from_lang: str, to_lang: str,
                          request_id: int, config: Optional[DeepLConfig] = None) -> List[str]:
        """
        Translate ``jobs`` and reduce their beams to output paragraphs.

        Raises:
            ProtocolError: if the backend returns an error envelope
        """
        config = config or DeepLConfig()
        try:
            payload = await self._call(
                TRANSLATE_METHOD,
                request_id,
                translate_params(
                    jobs,
                    source_lang=self._backend_code(from_lang),
                    target_lang=self._backend_code(to_lang),
                    user_preferred_langs=self.user_preferred_langs,
                ),
                config,
                {"content-type": "text/plain"},
            )
            beams_per_job = parse_translations(payload)
        except ShapeMismatchError as e:
            logger.debug("No translations in response: %s", e)
            return []
        return reduce_translations(beams_per_job, len(jobs))

    def _resolve_detected(self, outcome: SplitOutcome, requested: str) -> str:
        if outcome.detected_lang is None:
            return requested
        if not outcome.lang_is_confident:
            logger.debug("Backend is not confident about detected language %s", outcome.detected_lang)
        return self.language_map.to_caller(outcome.detected_lang) or requested

    async def detect(self, text: str, config: Optional[DeepLConfig] = None) -> str:
        """Detect the language of ``text``; "auto" when the backend cannot tell."""
        outcome = await self.split(text, AUTO, new_request_id(), self._coerce_config(config))
        return self._resolve_detected(outcome, AUTO)

    async def text_to_speech(self, text: str, lang: str) -> Optional[str]:
        return build_speech_url(text, lang, self.language_map)

    async def _speech_url_or_none(self, text: str, lang: str) -> Optional[str]:
        try:
            return (await self.text_to_speech(text, lang)) or None
        except Exception as e:
            logger.warning("Speech URL unavailable for %s: %s", lang, e)
            return None

    @staticmethod
    def _coerce_config(config: Union[DeepLConfig, Dict[str, Any], None]) -> DeepLConfig:
        if config is None:
            return DeepLConfig()
        if isinstance(config, dict):
            return DeepLConfig.from_dict(config)
        return config

    async def translate(self, text: str, from_lang: str, to_lang: str,
                        config: Union[DeepLConfig, Dict[str, Any], None] = None) -> TranslationResult:
        """
        Translate ``text`` from ``from_lang`` to ``to_lang``.

        ``from_lang`` may be "auto"; the result carries the language the
        backend detected, or the requested one if detection failed.

        Raises:
            ProtocolError: if either round-trip returns an error envelope
            httpx.HTTPError: on transport failures
        """
        config = self._coerce_config(config)
        request_id = new_request_id()

        outcome = await self.split(text, from_lang, request_id, config)
        resolved_from = self._resolve_detected(outcome, from_lang)
        jobs = build_jobs(text, outcome.sentences)

        translations = await self.handle_jobs(jobs, resolved_from, to_lang, request_id + 1, config)

        origin_tts, trans_tts = await asyncio.gather(
            self._speech_url_or_none(text, resolved_from),
            self._speech_url_or_none("".join(translations), to_lang),
        )

        return TranslationResult(
            engine=self.name,
            text=text,
            from_lang=resolved_from,
            to_lang=to_lang,
            origin=TranslatedParagraphs(paragraphs=_PARAGRAPH_BREAK.split(text), tts=origin_tts),
            trans=TranslatedParagraphs(paragraphs=translations, tts=trans_tts),
        )


def create_deepl_provider(**kwargs) -> DeepLProvider:
    """Create a DeepLProvider with configuration defaults."""
    return DeepLProvider(**kwargs)
