"""Unit tests for input normalization."""

import pytest

from signbraille.normalization import (
    DEFAULT_NORMALIZATION_OPTIONS,
    NormalizationOptions,
    normalize_input,
    normalize_typography,
)


def test_smart_quotes_and_whitespace(tidy_options):
    result = normalize_input("Room\u2019  101", tidy_options)
    assert result.normalized == "Room' 101"
    assert result.applied == ("smart_quotes", "normalize_whitespace")


def test_preserves_line_breaks():
    options = NormalizationOptions(normalize_whitespace=True, preserve_line_breaks=True)
    assert normalize_input("Line 1\nLine   2", options).normalized == "Line 1\nLine 2"


def test_joins_lines_when_not_preserving():
    options = NormalizationOptions(normalize_whitespace=True, preserve_line_breaks=False)
    assert normalize_input("EXIT  \nCOPY ROOM", options).normalized == "EXIT COPY ROOM"


def test_collapses_tabs_and_trailing_space():
    options = NormalizationOptions(normalize_whitespace=True)
    assert normalize_input("A\t\tB   \nC\f D", options).normalized == "A B\nC D"


def test_line_endings_unified():
    result = normalize_input("EXIT\r\nSTAIRS\rLOBBY")
    assert result.normalized == "EXIT\nSTAIRS\nLOBBY"


def test_ellipsis_and_dashes(tidy_options):
    result = normalize_input("Wait\u2026 \u2013 now", tidy_options)
    assert result.normalized == "Wait... - now"
    kinds = [w.kind for w in result.warnings]
    assert kinds == ["replacement", "replacement"]


def test_non_breaking_space(tidy_options):
    assert normalize_input("NO\u00a0SMOKING", tidy_options).normalized == "NO SMOKING"


class TestUnsupportedCharacters:
    def test_replaced_by_default(self):
        result = normalize_input("Room 101\u2605", DEFAULT_NORMALIZATION_OPTIONS)
        assert result.normalized == "Room 101?"
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.kind == "unsupported_character"
        assert warning.index_range == (8, 9)
        assert "\u2605" in warning.message
        assert result.applied == ("unsupported_replaced",)

    def test_removed(self):
        options = NormalizationOptions(unsupported_handling="remove")
        result = normalize_input("Room\u2605101", options)
        assert result.normalized == "Room101"
        assert result.applied == ("unsupported_removed",)

    def test_one_warning_per_occurrence_left_to_right(self):
        result = normalize_input("\u2605a\u2606")
        assert [w.index_range for w in result.warnings] == [(0, 1), (2, 3)]

    def test_curly_quote_unsupported_without_smart_quotes(self):
        assert normalize_input("Room\u2019s").normalized == "Room?s"


class TestDiff:
    def test_no_diff_when_unchanged(self):
        result = normalize_input("EXIT")
        assert result.diff is None
        assert "diff" not in result.to_dict()

    def test_diff_when_changed(self, tidy_options):
        result = normalize_input("EXIT  ", tidy_options)
        assert result.diff == {"before": "EXIT  ", "after": "EXIT"}


def test_deterministic(tidy_options):
    text = "\u201cCaf\u00e9\u201d  \u2605\nRoom\t5"
    assert normalize_input(text, tidy_options) == normalize_input(text, tidy_options)


class TestOptionsFromDict:
    def test_defaults(self):
        assert NormalizationOptions.from_dict(None) == DEFAULT_NORMALIZATION_OPTIONS

    def test_values(self):
        options = NormalizationOptions.from_dict({
            "smart_quotes": True,
            "unsupported_handling": "REMOVE",
        })
        assert options.smart_quotes is True
        assert options.unsupported_handling == "remove"

    def test_invalid_handling(self):
        with pytest.raises(ValueError):
            NormalizationOptions.from_dict({"unsupported_handling": "drop"})

    @pytest.mark.parametrize("data", ["tidy", [1], 3])
    def test_rejects_non_objects(self, data):
        with pytest.raises(ValueError, match="options must be an object"):
            NormalizationOptions.from_dict(data)

    @pytest.mark.parametrize("value", ["false", 0, None])
    def test_flags_must_be_booleans(self, value):
        with pytest.raises(ValueError, match="smart_quotes"):
            NormalizationOptions.from_dict({"smart_quotes": value})


def test_normalize_typography():
    result = normalize_typography("\u201cHi\u201d\u2014there\u2026")
    assert result.normalized == '"Hi"-there...'
    assert result.changes == (
        "Smart quotes → straight quotes",
        "En/em dash → hyphen",
        "Ellipsis → three dots",
    )
