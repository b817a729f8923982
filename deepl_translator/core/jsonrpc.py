"""
JSON-RPC envelopes and result shapes for DeepL's web translator.

The web translator answers two methods on a single endpoint:

    LMT_split_into_sentences  - segments text and detects its language
    LMT_handle_jobs           - translates one job per sentence with beam search

This module holds the wire types and the pure functions that build requests
and reduce responses. Nothing here performs I/O.
"""
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from deepl_translator.config import (
    SPLIT_METHOD, TRANSLATE_METHOD, JOB_PRIORITY,
    BEAMS_WITH_CONTEXT, BEAMS_WITHOUT_CONTEXT,
)
from .exceptions import ProtocolError, ShapeMismatchError


@dataclass
class SplitJob:
    """One sentence to translate, with its neighbours as context"""
    sentence: str
    context_before: List[str] = field(default_factory=list)
    context_after: List[str] = field(default_factory=list)
    preferred_num_beams: int = BEAMS_WITHOUT_CONTEXT
    kind: str = "default"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "raw_en_sentence": self.sentence,
            "raw_en_context_before": list(self.context_before),
            "raw_en_context_after": list(self.context_after),
            "preferred_num_beams": self.preferred_num_beams,
        }


@dataclass
class Beam:
    """One ranked candidate translation of a job"""
    postprocessed_sentence: str
    score: float = 0.0
    num_symbols: int = 0
    total_log_prob: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Beam':
        return cls(
            postprocessed_sentence=data.get("postprocessed_sentence", ""),
            score=data.get("score", 0.0),
            num_symbols=data.get("num_symbols", 0),
            total_log_prob=data.get("totalLogProb", 0.0),
        )


@dataclass
class SplitOutcome:
    """Parsed split response.

    ``sentences`` is None when the backend gave no usable segmentation.
    ``detected_lang`` is the raw backend code, if any.
    """
    sentences: Optional[List[str]] = None
    detected_lang: Optional[str] = None
    lang_is_confident: bool = False


def new_request_id() -> int:
    """Draw a request id from a wide random space.

    Not a counter: concurrent calls only rely on collisions being unlikely.
    """
    return 10000 * round(10000 * random.random())


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def build_envelope(method: str, request_id: int, params: Dict[str, Any], jsonrpc: str) -> Dict[str, Any]:
    return {
        "jsonrpc": jsonrpc,
        "id": request_id,
        "method": method,
        "params": params,
    }


def split_params(text: str, lang_user_selected: Optional[str],
                 user_preferred_langs: List[str]) -> Dict[str, Any]:
    return {
        "texts": [text],
        "lang": {
            "lang_user_selected": lang_user_selected,
            "user_preferred_langs": list(user_preferred_langs),
        },
    }


def translate_params(jobs: List[SplitJob], source_lang: Optional[str], target_lang: Optional[str],
                     user_preferred_langs: List[str], timestamp: Optional[int] = None) -> Dict[str, Any]:
    return {
        "jobs": [job.to_dict() for job in jobs],
        "lang": {
            "user_preferred_langs": list(user_preferred_langs),
            "source_lang_computed": source_lang,
            "target_lang": target_lang,
        },
        "priority": JOB_PRIORITY,
        "timestamp": timestamp if timestamp is not None else timestamp_ms(),
    }


def raise_for_error(method: str, payload: Any) -> None:
    """Raise ProtocolError if ``payload`` is an error envelope."""
    if isinstance(payload, dict) and "error" in payload:
        error = payload.get("error")
        if not isinstance(error, dict):
            error = {"message": error}
        raise ProtocolError(method, code=error.get("code"), backend_message=error.get("message"))


def _result_of(method: str, payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ShapeMismatchError("Response is not a JSON object",
                                 context={"method": method, "type": type(payload).__name__})
    result = payload.get("result")
    if not isinstance(result, dict):
        raise ShapeMismatchError("Response has no result object", context={"method": method})
    return result


def parse_split_result(payload: Any) -> SplitOutcome:
    """
    Parse a split response.

    Raises:
        ProtocolError: on an error envelope
        ShapeMismatchError: when the result carries neither a language nor sentences
    """
    raise_for_error(SPLIT_METHOD, payload)
    result = _result_of(SPLIT_METHOD, payload)

    lang = result.get("lang")
    splitted = result.get("splitted_texts")
    if not isinstance(lang, str) and not isinstance(splitted, list):
        raise ShapeMismatchError("Split result has no lang or splitted_texts",
                                 context={"keys": sorted(result)})

    sentences = None
    if isinstance(splitted, list):
        # One entry per submitted text; older responses were already flat
        sentences = []
        for item in splitted:
            if isinstance(item, list):
                sentences.extend(str(s) for s in item)
            else:
                sentences.append(str(item))

    return SplitOutcome(
        sentences=sentences,
        detected_lang=lang if isinstance(lang, str) else None,
        lang_is_confident=bool(result.get("lang_is_confident", 0)),
    )


def parse_translations(payload: Any) -> List[List[Beam]]:
    """
    Parse a handle_jobs response into beams per job, in job order.

    Raises:
        ProtocolError: on an error envelope
        ShapeMismatchError: when the result has no translations list
    """
    raise_for_error(TRANSLATE_METHOD, payload)
    result = _result_of(TRANSLATE_METHOD, payload)

    translations = result.get("translations")
    if not isinstance(translations, list):
        raise ShapeMismatchError("Translate result has no translations",
                                 context={"keys": sorted(result)})

    beams_per_job = []
    for translation in translations:
        beams = translation.get("beams") if isinstance(translation, dict) else None
        if not isinstance(beams, list):
            beams = []
        beams_per_job.append([Beam.from_dict(beam) for beam in beams if isinstance(beam, dict)])
    return beams_per_job


def build_jobs(text: str, sentences: Optional[List[str]]) -> List[SplitJob]:
    """
    Build one job per sentence, each carrying every other sentence as context.

    Args:
        text: The whole input text, used when there is no segmentation
        sentences: Split sentences, or None if the backend gave none

    Returns:
        N jobs for N sentences; a single job otherwise
    """
    if sentences is None:
        return [SplitJob(sentence=text, preferred_num_beams=BEAMS_WITHOUT_CONTEXT)]
    if not sentences:
        return [SplitJob(sentence="", preferred_num_beams=BEAMS_WITHOUT_CONTEXT)]

    num_beams = BEAMS_WITH_CONTEXT if len(sentences) > 1 else BEAMS_WITHOUT_CONTEXT
    return [
        SplitJob(
            sentence=sentence,
            context_before=sentences[:index],
            context_after=sentences[index + 1:],
            preferred_num_beams=num_beams,
        )
        for index, sentence in enumerate(sentences)
    ]


def reduce_translations(beams_per_job: List[List[Beam]], job_count: int) -> List[str]:
    """
    Reduce beam candidates to output paragraphs.

    Several jobs: the top beam of each, concatenated in job order into one
    string (sentences already carry their own spacing). A single job: every
    beam of that job, in the order the backend ranked them.
    """
    if not beams_per_job:
        return []

    if job_count > 1:
        return ["".join(beams[0].postprocessed_sentence for beams in beams_per_job if beams)]

    return [beam.postprocessed_sentence for beam in beams_per_job[0]]
