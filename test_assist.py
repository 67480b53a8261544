"""Unit tests for the editing assistant."""

import pytest

from signbraille.assist import COMMON_PHRASES, is_mostly_lowercase, recommend_profile, run_assist
from signbraille.normalization import normalize_input


def flag_ids(result):
    return [flag.id for flag in result.flags]


class TestSuggestions:
    def test_lowercase_hash_and_suite(self):
        result = run_assist("ste #12", None, "en-us-g1")
        by_id = {s.id: s for s in result.suggestions}
        assert list(by_id) == ["uppercase", "remove-hash", "suite-spellout"]
        assert by_id["uppercase"].after == "STE #12"
        assert by_id["remove-hash"].after == "ste 12"
        assert by_id["suite-spellout"].after == "SUITE #12"

    def test_uppercase_text_has_no_suggestions(self):
        assert run_assist("EXIT", None, "en-us-g2").suggestions == []


class TestFlags:
    def test_whitespace_and_street(self):
        assert flag_ids(run_assist("MAIN ST  ", None, "en-us-g2")) == [
            "ambiguous-st", "extra-spaces", "trailing-space",
        ]

    def test_long_line_is_numbered_from_zero(self):
        result = run_assist("OK\nTHIS LINE IS DEFINITELY TOO LONG", None, "en-us-g2")
        assert flag_ids(result) == ["long-line-1"]
        assert "Line 2" in result.flags[0].message

    def test_unsupported_characters_listed_once(self):
        result = run_assist("Café ★ ★", None, "en-us-g2")
        flag = next(f for f in result.flags if f.id == "unsupported")
        assert flag.severity == "high"
        assert flag.message.endswith("é ★")

    def test_phone_number(self):
        assert "phone-number" in flag_ids(run_assist("CALL 860-555-1212", None, "en-us-g1"))


class TestRecommendation:
    @pytest.mark.parametrize("text", ["ROOM 101", "Lobby", "Main office ADA ramp access"])
    def test_grade1(self, text):
        assert recommend_profile(text).profile_id == "en-us-g1"

    def test_grade2_for_longer_phrases(self):
        assert recommend_profile("Please use the side entrance").profile_id == "en-us-g2"


def test_explanation():
    text = "ROOM  101"
    result = run_assist(text, normalize_input(text), "en-us-g2")
    assert result.explanation == [
        "Numbers present; number mode is likely used.",
        "Capital indicators likely used for all-caps text.",
        "Contracted (Grade 2) braille likely applied.",
    ]


def test_explanation_mentions_normalization_changes():
    text = "Room  5★"
    result = run_assist(text, normalize_input(text), "en-us-g1")
    assert result.explanation[-1] == "Normalization changes shown below are estimated."
    assert "Uncontracted (Grade 1) braille applied." in result.explanation


def test_is_mostly_lowercase():
    assert is_mostly_lowercase("room five")
    assert not is_mostly_lowercase("Room FIVE")
    assert not is_mostly_lowercase("101")


def test_to_dict_is_json_ready():
    data = run_assist("exit", None, "en-us-g2").to_dict()
    assert data["recommendation"]["profile_id"] == "en-us-g1"
    assert data["suggestions"][0]["id"] == "uppercase"
    assert data["phrases"] == COMMON_PHRASES
