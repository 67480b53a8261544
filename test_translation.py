"""Unit tests for the line-by-line translation pipeline."""

from signbraille.engine import EngineHandle
from signbraille.normalization import NormalizationOptions
from signbraille.translation import translate_text


def test_lines_translate_independently(fake_engine, g2_profile):
    combined = translate_text("EXIT\nCOPY ROOM", g2_profile, fake_engine)
    first = translate_text("EXIT", g2_profile, fake_engine)
    second = translate_text("COPY ROOM", g2_profile, fake_engine)
    assert combined.lines == first.lines + second.lines
    assert combined.unicode_braille == first.unicode_braille + "\n" + second.unicode_braille


def test_each_line_sent_separately(fake_engine, g1_profile):
    translate_text("EXIT\r\nSTAIRS", g1_profile, fake_engine)
    assert fake_engine.calls == [(("en-us-g1.ctb",), "EXIT"), (("en-us-g1.ctb",), "STAIRS")]


def test_blank_lines_skip_the_engine(fake_engine, g2_profile):
    result = translate_text("EXIT\n   \nSTAIRS", g2_profile, fake_engine)
    assert [text for _, text in fake_engine.calls] == ["EXIT", "STAIRS"]
    assert [len(line) for line in result.lines] == [4, 0, 6]
    assert result.warnings == ()


def test_failed_line_becomes_empty_with_warning(make_engine, g2_profile):
    engine = make_engine(fail_on={"STAIRS"})
    result = translate_text("EXIT\nSTAIRS\nLOBBY", g2_profile, engine)
    assert [len(line) for line in result.lines] == [4, 0, 5]
    assert len(result.warnings) == 1
    assert result.warnings[0].kind == "translation_failed"
    assert "line 2" in result.warnings[0].message


def test_engine_abort_resets_handle(g2_profile, make_engine):
    built = []

    def factory():
        engine = make_engine(raise_on={"BOOM"})
        built.append(engine)
        return engine

    handle = EngineHandle(factory)
    result = translate_text("BOOM\nEXIT", g2_profile, handle)
    assert len(built) == 2
    assert [len(line) for line in result.lines] == [0, 4]
    assert [w.kind for w in result.warnings] == ["translation_failed"]


def test_metadata(fake_engine, g1_profile):
    result = translate_text("EXIT", g1_profile, fake_engine)
    assert result.metadata == {
        "engine_version": "fake-1.0",
        "profile_id": "en-us-g1",
        "table_names": ["en-us-g1.ctb"],
        "normalization_applied": [],
    }
    assert result.normalization is None


def test_normalization_runs_first(fake_engine, g2_profile, tidy_options):
    result = translate_text("Room’s  5", g2_profile, fake_engine, tidy_options)
    assert fake_engine.calls[0][1] == "Room's 5"
    assert result.metadata["normalization_applied"] == ["smart_quotes", "normalize_whitespace"]
    assert result.warnings[0].kind == "replacement"
    assert result.to_dict()["normalization"]["normalized"] == "Room's 5"


def test_unsupported_characters_replaced_before_engine(fake_engine, g2_profile):
    translate_text("Room 5★", g2_profile, fake_engine, NormalizationOptions())
    assert fake_engine.calls[0][1] == "Room 5?"


def test_stable_across_repeats(fake_engine, g1_profile, g2_profile):
    for profile in (g1_profile, g2_profile):
        first = translate_text("RESTROOM", profile, fake_engine)
        assert translate_text("RESTROOM", profile, fake_engine) == first


def test_eight_dot_output_is_truncated(make_engine, g2_profile):
    engine = make_engine(overrides={"X": "⣿"})
    result = translate_text("X", g2_profile, engine)
    assert result.cells[0].bitstring == "111111"
    assert [w.kind for w in result.warnings] == ["eight_dot_detected"]


def test_engine_newlines_collapse_to_one_line(make_engine, g2_profile):
    engine = make_engine(overrides={"X": "⠁\n\n⠃"})
    result = translate_text("X", g2_profile, engine)
    assert len(result.lines) == 1
    assert [cell.dots for cell in result.cells] == ["1", "1-2"]
    assert [w.kind for w in result.warnings] == ["non_braille_output"]


def test_to_dict(fake_engine, g2_profile):
    data = translate_text("AB", g2_profile, fake_engine).to_dict()
    assert data["unicode_braille"] == "⠁⠂"
    assert data["plain_dots"] == "1 2"
    assert [cell["bitstring"] for cell in data["cells"]] == ["100000", "010000"]
    assert len(data["lines"]) == 1
    assert data["warnings"] == []
    assert "normalization" not in data
