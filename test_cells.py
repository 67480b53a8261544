"""Unit tests for decoding Unicode braille into cells."""

import pytest

from signbraille.cells import (
    BRAILLE_BASE,
    braille_unicode_to_dots,
    cell_from_char,
    decode_braille,
    is_braille_char,
    plain_dots,
)


class TestCellFromChar:
    def test_dots_one_and_two(self):
        cell = cell_from_char("⠃")
        assert cell.bitstring == "110000"
        assert cell.dots == "1-2"
        assert cell.pattern == [1, 1, 0, 0, 0, 0]

    def test_blank_cell(self):
        cell = cell_from_char("⠀")
        assert cell.bitstring == "000000"
        assert cell.dots == ""

    def test_all_six_dots(self):
        cell = cell_from_char("⠿")
        assert cell.bitstring == "111111"
        assert cell.dots == "1-2-3-4-5-6"

    def test_eight_dot_cell_is_truncated(self):
        assert cell_from_char("⣿").bitstring == "111111"
        assert cell_from_char("⡀").bitstring == "000000"

    def test_non_braille_is_blank(self):
        assert braille_unicode_to_dots("A") == [0, 0, 0, 0, 0, 0]
        assert braille_unicode_to_dots("") == [0, 0, 0, 0, 0, 0]

    @pytest.mark.parametrize("offset", range(64))
    def test_bit_to_dot_mapping(self, offset):
        cell = cell_from_char(chr(BRAILLE_BASE + offset))
        for k in range(6):
            assert (cell.bitstring[k] == "1") == bool(offset & (1 << k))
        expected_dots = [str(k + 1) for k in range(6) if offset & (1 << k)]
        assert cell.dots == "-".join(expected_dots)


def test_is_braille_char():
    assert is_braille_char("⠀")
    assert is_braille_char("⣿")
    assert not is_braille_char("⤀")
    assert not is_braille_char(" ")


class TestDecodeBraille:
    def test_lines_and_cells(self):
        decoded = decode_braille("⠁⠃\n⠉")
        assert [len(line) for line in decoded.lines] == [2, 1]
        assert [cell.dots for cell in decoded.cells] == ["1", "1-2", "1-4"]
        assert decoded.warnings == ()

    def test_empty_lines_are_kept(self):
        decoded = decode_braille("⠁\n\n⠁")
        assert [len(line) for line in decoded.lines] == [1, 0, 1]

    def test_empty_input_is_one_empty_line(self):
        assert decode_braille("").lines == ((),)

    def test_non_braille_characters_are_skipped_with_warning(self):
        decoded = decode_braille("⠁\n⠁X⠃")
        assert [len(line) for line in decoded.lines] == [1, 2]
        assert len(decoded.warnings) == 1
        warning = decoded.warnings[0]
        assert warning.kind == "non_braille_output"
        assert "line 2" in warning.message

    def test_eight_dot_warning(self, caplog):
        decoded = decode_braille("⣿")
        assert decoded.cells[0].bitstring == "111111"
        assert [w.kind for w in decoded.warnings] == ["eight_dot_detected"]
        assert "truncated" in caplog.text

    def test_idempotent(self):
        text = "⠁⠃⠀\n\n⠿⣀"
        assert decode_braille(text) == decode_braille(text)


def test_plain_dots():
    decoded = decode_braille("⠃⠀⠉\n⠁")
    assert plain_dots(decoded.lines) == "1-2 0 1-4\n1"
    assert decoded.plain_dots == "1-2 0 1-4\n1"
