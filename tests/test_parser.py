import json
import time

import pytest

from matcher.parser import parse_match_response, round_score, strip_code_fences
from shared.models import MatchResult


class TestStripCodeFences:
    def test_removes_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_json_fence_is_case_insensitive(self):
        assert strip_code_fences('```JSON\n{"a": 1}\n```') == '{"a": 1}'

    def test_removes_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```  ') == '{"a": 1}'

    def test_plain_text_untouched(self):
        assert strip_code_fences("  hello  ") == "hello"


class TestRoundScore:
    @pytest.mark.parametrize(
        "score,expected",
        [(0, 0), (0.4, 0), (0.5, 1), (49.5, 50), (82.6, 83), (99.5, 100), (100, 100)],
    )
    def test_rounds_half_up(self, score, expected):
        assert round_score(score) == expected


class TestParseMatchResponse:
    @pytest.mark.parametrize(
        "score,justification",
        [
            (0, "No overlap at all"),
            (1, "x"),
            (37, "Some transferable skills"),
            (50.4, "Average fit"),
            (82.6, "Strong match"),
            (99.5, "Near-perfect fit, \"quoted\" and accentué"),
            (100, "Perfect match"),
        ],
    )
    def test_serialized_result_round_trips(self, score, justification):
        raw = json.dumps({"score": score, "justification": justification})

        result = parse_match_response(raw)

        assert result == MatchResult(score=round_score(score), justification=justification)

    @pytest.mark.parametrize("score", [-1, -50, 101, 150, 1000])
    def test_out_of_range_score_rejected(self, score):
        raw = json.dumps({"score": score, "justification": "Looks great"})
        assert parse_match_response(raw) is None

    @pytest.mark.parametrize("score", [0, 42, 100])
    def test_empty_justification_rejected(self, score):
        raw = json.dumps({"score": score, "justification": ""})
        assert parse_match_response(raw) is None

    @pytest.mark.parametrize(
        "prefix,suffix",
        [
            ("", ""),
            ("Sure! ", ""),
            ("Here is the analysis:\n\n", "\n\nLet me know if you need more."),
            ("Voici le résultat : ", " Bonne journée."),
        ],
    )
    def test_fenced_payload_with_prose(self, prefix, suffix):
        raw = (
            f'{prefix}```json\n{{"score": 71, "justification": "Good skills overlap"}}\n```{suffix}'
        )

        result = parse_match_response(raw)

        assert result == MatchResult(score=71, justification="Good skills overlap")

    def test_float_score_in_fenced_chatty_response(self):
        raw = 'Sure! ```json\n{"score": 82.6, "justification": "Strong match"}\n```'

        result = parse_match_response(raw)

        assert result.score == 83
        assert result.justification == "Strong match"

    def test_extra_fields_ignored(self):
        raw = '{"score": 12, "justification": "Weak", "confidence": "low"}'
        assert parse_match_response(raw) == MatchResult(score=12, justification="Weak")

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "I cannot evaluate this candidate.",
            '{"score": 80}',
            '{"justification": "Missing score"}',
            '{"score": "80", "justification": "String score"}',
            '{"score": true, "justification": "Boolean score"}',
            '{"score": null, "justification": "Null score"}',
            '{"score": NaN, "justification": "Not a number"}',
            '{"score": Infinity, "justification": "Infinite"}',
            '{"score": 80, "justification": 42}',
            '{"score": 80, "justification": null}',
            '["score", 80]',
            '{"score": 80, "justification": "Unterminated"',
            '{"score": 80 "justification": "Missing comma"}',
        ],
    )
    def test_malformed_output_returns_none(self, raw):
        assert parse_match_response(raw) is None

    def test_spans_first_to_last_brace(self):
        # Two objects make the greedy span invalid JSON
        raw = '{"score": 10, "justification": "a"} and {"score": 20, "justification": "b"}'
        assert parse_match_response(raw) is None

    def test_unbalanced_braces_rejected_quickly(self):
        started = time.perf_counter()

        assert parse_match_response("{" * 200_000) is None
        assert parse_match_response("{" * 100_000 + "}") is None
        assert time.perf_counter() - started < 2.0

    def test_closing_brace_before_opening(self):
        assert parse_match_response('} {"score": 5, "justification": "Poor"') is None

    def test_nested_object_inside_prose(self):
        raw = 'Result: {"score": 55, "justification": "Fair", "details": {"skills": 3}} done'
        assert parse_match_response(raw) == MatchResult(score=55, justification="Fair")


class TestMatchResult:
    @pytest.mark.parametrize(
        "score,justification",
        [(-1, "x"), (101, "x"), (50, ""), (True, "x"), (50.0, "x")],
    )
    def test_invalid_values_raise(self, score, justification):
        with pytest.raises(ValueError):
            MatchResult(score=score, justification=justification)

    def test_application_update(self):
        result = MatchResult(score=75, justification="Good fit")
        assert result.to_application_update() == {
            "matchScore": 75,
            "matchJustification": "Good fit",
        }
