"""
Unit tests for ResponseValidator.

Tests direct parsing, fenced-block recovery and fallback substitution.
"""

import pytest

from culturesense_llm.models.insight_models import CompatibilityReport, PersonalityAnalysis
from culturesense_llm.validation.response_validator import ParsedResult, ResponseValidator


@pytest.fixture
def validator() -> ResponseValidator:
    return ResponseValidator()


class TestParse:
    """Tests for ResponseValidator.parse."""

    def test_direct_json_object(self, validator):
        result = validator.parse('{"score": 82, "tags": ["jazz"]}', fallback={})

        assert result == ParsedResult(value={"score": 82, "tags": ["jazz"]})

    def test_direct_json_with_surrounding_whitespace(self, validator):
        result = validator.parse('\n  {"a": 1}  \n', fallback={})

        assert result.value == {"a": 1}
        assert not result.recovered_from_fence

    def test_any_json_value_is_accepted(self, validator):
        assert validator.parse("[1, 2, 3]", fallback=None).value == [1, 2, 3]
        assert validator.parse("42", fallback=None).value == 42

    def test_json_fence_recovered(self, validator):
        result = validator.parse('```json\n{"a":1}\n```', fallback={"b": 2})

        assert result.value == {"a": 1}
        assert result.recovered_from_fence
        assert not result.used_fallback

    def test_bare_fence_with_prose(self, validator):
        raw = 'Sure! Here is your analysis:\n```\n{"mood": "calm"}\n```\nEnjoy.'

        result = validator.parse(raw, fallback={})

        assert result.value == {"mood": "calm"}
        assert result.recovered_from_fence

    def test_uppercase_fence_tag(self, validator):
        result = validator.parse('```JSON\n{"a": 1}\n```', fallback={})

        assert result.value == {"a": 1}

    def test_first_parseable_fence_wins(self, validator):
        raw = "```\nnot json\n```\nthen\n```json\n{\"second\": true}\n```"

        result = validator.parse(raw, fallback={})

        assert result.value == {"second": True}

    def test_fence_nested_inside_string_value(self, validator):
        """Test the widest object span survives a fence inside a JSON string."""
        raw = '```json\n{"example": "use ```code``` here", "ok": true}\n```'

        result = validator.parse(raw, fallback={})

        assert result.value == {"example": "use ```code``` here", "ok": True}
        assert result.recovered_from_fence

    def test_widest_span_ignores_prose_after_closing_fence(self, validator):
        raw = 'Result:\n```json\n{"quote": "a ```b``` c"}\n```\nLet me know if you need more.'

        result = validator.parse(raw, fallback={})

        assert result.value == {"quote": "a ```b``` c"}

    def test_many_unclosed_fences_fall_back(self, validator):
        """Test a long run of fence openers is scanned without blowing up."""
        raw = "```{" * 50000

        result = validator.parse(raw, fallback={"safe": True})

        assert result.value == {"safe": True}
        assert result.used_fallback

    def test_prose_falls_back(self, validator):
        result = validator.parse("not json at all", fallback={"b": 2})

        assert result.value == {"b": 2}
        assert result.used_fallback
        assert not result.recovered_from_fence
        assert result.raw_excerpt == "not json at all"

    def test_unparseable_fence_falls_back(self, validator):
        result = validator.parse("```json\n{broken: }\n```", fallback={"b": 2})

        assert result.used_fallback
        assert result.value == {"b": 2}

    @pytest.mark.parametrize("raw", ["", "   \n", None, 123])
    def test_empty_or_non_string_falls_back(self, validator, raw):
        result = validator.parse(raw, fallback={"empty": True})

        assert result.value == {"empty": True}
        assert result.used_fallback

    def test_excerpt_is_bounded(self, validator):
        raw = "x" * 2000

        result = validator.parse(raw, fallback={})

        assert len(result.raw_excerpt) == 500

    def test_custom_excerpt_limit(self):
        result = ResponseValidator(excerpt_limit=10).parse("y" * 50, fallback={})

        assert result.raw_excerpt == "y" * 10

    def test_pathological_nesting_never_raises(self, validator):
        result = validator.parse("[" * 100000, fallback={"safe": True})

        assert result.value == {"safe": True}

    def test_deterministic(self, validator):
        raw = 'prefix ```json\n{"a": [1, 2]}\n``` suffix'

        assert validator.parse(raw, {}) == validator.parse(raw, {})


class TestParseModel:
    """Tests for ResponseValidator.parse_model."""

    def test_matching_payload_becomes_model(self, validator):
        raw = '```json\n{"compatibilityScore": 87, "sharedInterests": ["jazz"]}\n```'

        result = validator.parse_model(raw, CompatibilityReport.default())

        assert isinstance(result.value, CompatibilityReport)
        assert result.value.compatibility_score == 87
        assert result.value.shared_interests == ["jazz"]
        assert result.recovered_from_fence
        assert not result.used_fallback

    def test_shape_mismatch_returns_default(self, validator):
        default = PersonalityAnalysis.default()

        result = validator.parse_model('{"coreTraits": "not a list"}', default)

        assert result.value is default
        assert result.used_fallback
        assert result.raw_excerpt == '{"coreTraits": "not a list"}'

    def test_unparseable_returns_default(self, validator):
        default = CompatibilityReport.default()

        result = validator.parse_model("I cannot help with that.", default)

        assert result.value is default
        assert result.used_fallback
