"""
Text to braille cells, one input line at a time.

Each line is sent to the engine on its own and decoded on its own, so the
result for "EXIT\\nCOPY ROOM" is exactly the results for "EXIT" and
"COPY ROOM" joined by a newline. A line the engine cannot translate becomes an
empty line plus a warning; the rest of the sign still renders.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .cells import BrailleCell, decode_braille, plain_dots
from .engine import EngineError, EngineHandle
from .normalization import NormalizationOptions, NormalizationResult, TranslationWarning, normalize_input
from .profiles import BrailleProfile

logger = logging.getLogger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")


@dataclass(frozen=True)
class TranslationResult:
    unicode_braille: str
    lines: Tuple[Tuple[BrailleCell, ...], ...]
    warnings: Tuple[TranslationWarning, ...]
    metadata: dict = field(default_factory=dict)
    normalization: Optional[NormalizationResult] = None

    @property
    def cells(self):
        return [cell for line in self.lines for cell in line]

    @property
    def plain_dots(self) -> str:
        return plain_dots(self.lines)

    def to_dict(self):
        data = {
            "unicode_braille": self.unicode_braille,
            "cells": [cell.to_dict() for cell in self.cells],
            "lines": [[cell.to_dict() for cell in line] for line in self.lines],
            "plain_dots": self.plain_dots,
            "warnings": [w.to_dict() for w in self.warnings],
            "metadata": dict(self.metadata),
        }
        if self.normalization is not None:
            data["normalization"] = self.normalization.to_dict()
        return data


def _translate_line(engine, profile, line, line_number, warnings):
    try:
        raw = engine.translate(profile.tables, line)
    except EngineError as e:
        logger.warning("Engine failed on line %d: %s", line_number, e)
        if isinstance(engine, EngineHandle):
            engine.reset()
        raw = None
    if not raw:
        warnings.append(TranslationWarning(
            "translation_failed",
            f"Translation failed on line {line_number}. Tables may be missing or not loaded yet.",
        ))
        return ""
    return re.sub(r"\n+", " ", raw)


def _engine_version(engine) -> str:
    try:
        return engine.version()
    except EngineError as e:
        logger.warning("Engine version query failed: %s", e)
        return "unknown"


def translate_text(text: str, profile: BrailleProfile, engine,
                   options: Optional[NormalizationOptions] = None) -> TranslationResult:
    """Translate ``text`` with ``profile``'s tables and decode the engine output.

    When ``options`` is given the text is normalized first and the
    normalization warnings lead the warning list.
    """
    warnings = []
    normalization = None
    source = text or ""
    if options is not None:
        normalization = normalize_input(source, options)
        source = normalization.normalized
        warnings.extend(normalization.warnings)

    translated = []
    for index, segment in enumerate(LINE_SPLIT.split(source)):
        if not segment.strip():
            translated.append("")
            continue
        translated.append(_translate_line(engine, profile, segment, index + 1, warnings))

    unicode_braille = "\n".join(translated)
    decoded = decode_braille(unicode_braille)
    warnings.extend(decoded.warnings)

    metadata = {
        "engine_version": _engine_version(engine),
        "profile_id": profile.id,
        "table_names": list(profile.tables),
        "normalization_applied": list(normalization.applied) if normalization else [],
    }
    return TranslationResult(
        unicode_braille=unicode_braille,
        lines=decoded.lines,
        warnings=tuple(warnings),
        metadata=metadata,
        normalization=normalization,
    )
