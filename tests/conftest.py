"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides a fake DeepL
backend: an ``httpx.MockTransport`` that answers JSON-RPC calls by method
name and records every request it receives.
"""

import sys
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import httpx
import pytest

from deepl_translator.core.providers.deepl import DeepLProvider
from deepl_translator.core.transport import HttpTransport

Reply = Union[Any, Callable[[Dict[str, Any]], Any]]


class FakeDeepLBackend:
    """Answers JSON-RPC envelopes with canned payloads, keyed by method.

    A ``bytes`` reply is sent as a raw body instead of JSON.
    """

    def __init__(self):
        self.routes: Dict[str, Reply] = {}
        self.status_code = 200
        self.requests: List[httpx.Request] = []
        self.bodies: List[Dict[str, Any]] = []

    def on(self, method: str, reply: Reply) -> 'FakeDeepLBackend':
        self.routes[method] = reply
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(request)
        self.bodies.append(body)

        if self.status_code != 200:
            return httpx.Response(self.status_code, text="backend unavailable")

        reply = self.routes[body["method"]]
        payload = reply(body) if callable(reply) else reply
        if isinstance(payload, bytes):
            return httpx.Response(200, content=payload, headers={"content-type": "text/html"})
        return httpx.Response(200, json=payload)

    @property
    def methods(self) -> List[str]:
        return [body["method"] for body in self.bodies]

    def body_for(self, method: str) -> Dict[str, Any]:
        return next(body for body in self.bodies if body["method"] == method)

    def request_for(self, method: str) -> httpx.Request:
        index = self.methods.index(method)
        return self.requests[index]


def split_reply(sentences=None, lang=None, nested=True) -> Dict[str, Any]:
    """Successful LMT_split_into_sentences payload."""
    result: Dict[str, Any] = {}
    if lang is not None:
        result["lang"] = lang
        result["lang_is_confident"] = 1
    if sentences is not None:
        result["splitted_texts"] = [sentences] if nested else sentences
    return {"id": 1, "jsonrpc": "2.0", "result": result}


def translate_reply(*beam_texts) -> Dict[str, Any]:
    """Successful LMT_handle_jobs payload; one list of beam texts per job."""
    translations = [
        {"beams": [
            {"num_symbols": len(text), "postprocessed_sentence": text,
             "score": -0.1 * rank, "totalLogProb": -1.0 * rank}
            for rank, text in enumerate(beams)
        ]}
        for beams in beam_texts
    ]
    return {
        "id": 2,
        "jsonrpc": "2.0",
        "result": {
            "date": "20200401",
            "source_lang": "EN",
            "source_lang_is_confident": 0,
            "target_lang": "ZH",
            "timestamp": 1585756800,
            "translations": translations,
        },
    }


def error_reply(code=1042901, message="Too many requests") -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "error": {"code": code, "message": message}}


@pytest.fixture
def fake_backend():
    return FakeDeepLBackend()


@pytest.fixture
def provider(fake_backend):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_backend.handler))
    return DeepLProvider(transport=HttpTransport(client=client))
