"""Decode Unicode braille (U+2800-U+28FF) into 6-dot cells."""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .normalization import TranslationWarning

logger = logging.getLogger(__name__)

BRAILLE_BASE = 0x2800
BRAILLE_LAST = 0x28FF
SIX_DOT_MASK = 0b111111


@dataclass(frozen=True)
class BrailleCell:
    bitstring: str
    dots: str
    unicode: str

    @property
    def pattern(self) -> List[int]:
        """Dots 1-6 as a list of 0/1 values."""
        return [1 if bit == "1" else 0 for bit in self.bitstring]

    def to_dict(self):
        return {"bitstring": self.bitstring, "dots": self.dots, "unicode": self.unicode}


@dataclass(frozen=True)
class DecodedBraille:
    lines: Tuple[Tuple[BrailleCell, ...], ...]
    warnings: Tuple[TranslationWarning, ...] = ()

    @property
    def cells(self) -> List[BrailleCell]:
        return [cell for line in self.lines for cell in line]

    @property
    def plain_dots(self) -> str:
        return plain_dots(self.lines)


def is_braille_char(ch: str) -> bool:
    return BRAILLE_BASE <= ord(ch) <= BRAILLE_LAST


def braille_unicode_to_dots(ch: str) -> List[int]:
    """Convert a braille Unicode character to a 6-dot pattern list (dot 1 first)."""
    if not ch or not is_braille_char(ch):
        return [0, 0, 0, 0, 0, 0]
    bits = ord(ch) - BRAILLE_BASE
    return [1 if (bits & (1 << i)) else 0 for i in range(6)]


def cell_from_char(ch: str) -> BrailleCell:
    pattern = braille_unicode_to_dots(ch)
    bitstring = "".join("1" if dot else "0" for dot in pattern)
    dots = "-".join(str(i + 1) for i, dot in enumerate(pattern) if dot)
    return BrailleCell(bitstring=bitstring, dots=dots, unicode=ch)


def decode_braille(text: str) -> DecodedBraille:
    """Split engine output into lines of cells; empty lines stay as empty lists."""
    lines = []
    warnings = []
    for line_index, line in enumerate((text or "").split("\n")):
        line_cells = []
        for ch in line:
            if not is_braille_char(ch):
                warnings.append(TranslationWarning(
                    "non_braille_output",
                    f"Non-braille character in output at line {line_index + 1}.",
                ))
                continue
            line_cells.append(cell_from_char(ch))
            if ord(ch) - BRAILLE_BASE > SIX_DOT_MASK:
                logger.warning("8-dot cell U+%04X truncated to 6-dot preview", ord(ch))
                warnings.append(TranslationWarning(
                    "eight_dot_detected",
                    "Detected 8-dot braille; preview is truncated to 6-dot view.",
                ))
        lines.append(tuple(line_cells))
    return DecodedBraille(lines=tuple(lines), warnings=tuple(warnings))


def plain_dots(lines) -> str:
    """Dot numbers per cell, space separated; blank cells read as "0"."""
    return "\n".join(" ".join(cell.dots or "0" for cell in line) for line in lines)
