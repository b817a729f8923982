"""Unit tests for JSON-RPC envelope building, job building and beam reduction."""

import pytest

from deepl_translator.core.exceptions import ProtocolError, ShapeMismatchError
from deepl_translator.core.jsonrpc import (
    Beam,
    SplitJob,
    build_envelope,
    build_jobs,
    new_request_id,
    parse_split_result,
    parse_translations,
    reduce_translations,
    split_params,
    translate_params,
)
from conftest import error_reply, split_reply, translate_reply


def beams(*texts):
    return [Beam(postprocessed_sentence=text) for text in texts]


class TestBuildJobs:
    """One job per split sentence, with neighbours as context."""

    def test_no_split_gives_whole_text_job(self):
        jobs = build_jobs("Hello.\nWorld.", None)
        assert len(jobs) == 1
        assert jobs[0].sentence == "Hello.\nWorld."
        assert jobs[0].context_before == []
        assert jobs[0].context_after == []
        assert jobs[0].preferred_num_beams == 4

    def test_single_sentence_requests_four_beams(self):
        jobs = build_jobs("I love you", ["I love you"])
        assert len(jobs) == 1
        assert jobs[0].preferred_num_beams == 4

    def test_multiple_sentences_request_one_beam_each(self):
        sentences = ["One.", "Two.", "Three."]
        jobs = build_jobs("One. Two. Three.", sentences)

        assert [job.sentence for job in jobs] == sentences
        assert all(job.preferred_num_beams == 1 for job in jobs)

    def test_context_before_and_after(self):
        jobs = build_jobs("", ["A", "B", "C"])

        assert jobs[0].context_before == [] and jobs[0].context_after == ["B", "C"]
        assert jobs[1].context_before == ["A"] and jobs[1].context_after == ["C"]
        assert jobs[2].context_before == ["A", "B"] and jobs[2].context_after == []

    def test_empty_split_gives_single_empty_job(self):
        jobs = build_jobs("ignored", [])
        assert len(jobs) == 1
        assert jobs[0].sentence == ""
        assert jobs[0].preferred_num_beams == 4

    def test_job_wire_format(self):
        job = SplitJob(sentence="B", context_before=["A"], context_after=["C"], preferred_num_beams=1)
        assert job.to_dict() == {
            "kind": "default",
            "raw_en_sentence": "B",
            "raw_en_context_before": ["A"],
            "raw_en_context_after": ["C"],
            "preferred_num_beams": 1,
        }


class TestReduceTranslations:
    """Beam reduction: concatenate top beams, or expose all candidates."""

    def test_multiple_jobs_concatenate_top_beams(self):
        result = reduce_translations([beams("一。", "壹。"), beams("二。"), beams("三。")], job_count=3)
        assert result == ["一。二。三。"]

    def test_single_job_returns_all_beams_in_order(self):
        result = reduce_translations([beams("我爱你", "我爱你们", "我喜欢你")], job_count=1)
        assert result == ["我爱你", "我爱你们", "我喜欢你"]

    def test_no_translations_returns_empty_list(self):
        assert reduce_translations([], job_count=2) == []

    def test_single_job_without_beams(self):
        assert reduce_translations([[]], job_count=1) == []


class TestEnvelopes:
    """Request payload construction."""

    def test_envelope(self):
        envelope = build_envelope("LMT_split_into_sentences", 42, {"texts": ["x"]}, "2.0")
        assert envelope == {
            "jsonrpc": "2.0",
            "id": 42,
            "method": "LMT_split_into_sentences",
            "params": {"texts": ["x"]},
        }

    def test_split_params(self):
        params = split_params("Hello", "EN", ["ZH", "EN"])
        assert params == {
            "texts": ["Hello"],
            "lang": {"lang_user_selected": "EN", "user_preferred_langs": ["ZH", "EN"]},
        }

    def test_translate_params(self):
        jobs = build_jobs("Hi", ["Hi"])
        params = translate_params(jobs, "EN", "ZH", ["ZH", "EN"], timestamp=1585756800000)

        assert params["jobs"] == [jobs[0].to_dict()]
        assert params["lang"] == {
            "user_preferred_langs": ["ZH", "EN"],
            "source_lang_computed": "EN",
            "target_lang": "ZH",
        }
        assert params["priority"] == 1
        assert params["timestamp"] == 1585756800000

    def test_translate_params_stamps_current_time(self):
        params = translate_params([], "EN", "ZH", [])
        assert isinstance(params["timestamp"], int)
        assert params["timestamp"] > 1_500_000_000_000

    def test_request_id_is_wide_random_integer(self):
        ids = {new_request_id() for _ in range(50)}
        assert all(isinstance(i, int) and i % 10000 == 0 for i in ids)
        assert all(0 <= i <= 10000 * 10000 for i in ids)
        assert len(ids) > 1


class TestParseSplitResult:
    """Split response parsing."""

    def test_nested_sentences_are_flattened(self):
        outcome = parse_split_result(split_reply(["One.", "Two."], lang="EN"))
        assert outcome.sentences == ["One.", "Two."]
        assert outcome.detected_lang == "EN"
        assert outcome.lang_is_confident is True

    def test_flat_sentences(self):
        outcome = parse_split_result(split_reply(["One.", "Two."], lang="EN", nested=False))
        assert outcome.sentences == ["One.", "Two."]

    def test_language_without_sentences(self):
        outcome = parse_split_result(split_reply(lang="DE"))
        assert outcome.sentences is None
        assert outcome.detected_lang == "DE"

    def test_empty_result_is_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError) as exc_info:
            parse_split_result(split_reply())
        assert exc_info.value.recoverable is True

    def test_missing_result_is_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            parse_split_result({"id": 1, "jsonrpc": "2.0"})

    @pytest.mark.parametrize("payload", [["EN"], "EN", None, {"result": ["EN"]}])
    def test_non_object_payload_is_shape_mismatch(self, payload):
        with pytest.raises(ShapeMismatchError):
            parse_split_result(payload)

    def test_low_confidence_is_kept(self):
        payload = split_reply(["Hi"], lang="EN")
        payload["result"]["lang_is_confident"] = 0
        assert parse_split_result(payload).lang_is_confident is False

    def test_error_envelope_raises_protocol_error(self):
        with pytest.raises(ProtocolError) as exc_info:
            parse_split_result(error_reply(code=1042911, message="Too many requests"))

        error = exc_info.value
        assert error.message == "API_SERVER_ERROR"
        assert error.code == 1042911
        assert error.context["method"] == "LMT_split_into_sentences"
        assert error.recoverable is False

    def test_error_envelope_without_object_raises_protocol_error(self):
        with pytest.raises(ProtocolError) as exc_info:
            parse_split_result({"jsonrpc": "2.0", "error": "Too many requests"})
        assert exc_info.value.backend_message == "Too many requests"
        assert exc_info.value.code is None


class TestParseTranslations:
    """Translate response parsing."""

    def test_beams_per_job(self):
        parsed = parse_translations(translate_reply(["我爱你", "我爱你们"], ["再见"]))
        assert [[b.postprocessed_sentence for b in job] for job in parsed] == [["我爱你", "我爱你们"], ["再见"]]
        assert parsed[0][1].total_log_prob == -1.0

    def test_missing_translations_is_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            parse_translations({"id": 2, "jsonrpc": "2.0", "result": {"date": "20200401"}})

    def test_error_envelope_raises_protocol_error(self):
        with pytest.raises(ProtocolError) as exc_info:
            parse_translations(error_reply())
        assert exc_info.value.context["method"] == "LMT_handle_jobs"

    def test_null_beams_give_empty_job(self):
        parsed = parse_translations({"result": {"translations": [{"beams": None}, None, "x"]}})
        assert parsed == [[], [], []]

    def test_non_object_beams_are_skipped(self):
        payload = translate_reply(["Hallo"])
        payload["result"]["translations"][0]["beams"].insert(0, "junk")
        parsed = parse_translations(payload)
        assert [b.postprocessed_sentence for b in parsed[0]] == ["Hallo"]

    def test_list_payload_is_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            parse_translations([translate_reply(["Hallo"])])
