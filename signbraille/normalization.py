"""
Text cleanup that runs before anything is sent to liblouis.

Everything here is deterministic: the same input and options always give the
same normalized string and the same warnings, in left-to-right order.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

UNSUPPORTED_REPLACE = "replace"
UNSUPPORTED_REMOVE = "remove"

# (pattern, replacement, label) -- order matters, applied top to bottom
SMART_REPLACEMENTS = [
    (re.compile("[\u2018\u2019]"), "'", "Curly single quote"),
    (re.compile("[\u201c\u201d]"), '"', "Curly double quote"),
    (re.compile("[\u2013\u2014]"), "-", "Dash"),
    (re.compile("\u2026"), "...", "Ellipsis"),
    (re.compile("\u00a0"), " ", "Non-breaking space"),
]

TYPOGRAPHY_LABELS = {
    "Curly single quote": "Smart quotes → straight apostrophe",
    "Curly double quote": "Smart quotes → straight quotes",
    "Dash": "En/em dash → hyphen",
    "Ellipsis": "Ellipsis → three dots",
    "Non-breaking space": "Non-breaking space → space",
}

SUPPORTED_CHAR = re.compile(r"[A-Za-z0-9 .,;:!?\"'\-/#&()\[\]{}+*=<>@$%\n\r\t]")


@dataclass(frozen=True)
class TranslationWarning:
    """A recoverable problem found somewhere in the pipeline."""

    kind: str
    message: str
    index_range: Optional[Tuple[int, int]] = None

    def to_dict(self):
        data = {"type": self.kind, "message": self.message}
        if self.index_range is not None:
            data["index_range"] = list(self.index_range)
        return data


def option_flag(data, name, default):
    """Read a JSON boolean; strings like "false" are rejected rather than coerced."""
    value = data.get(name, default)
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false")
    return value


@dataclass(frozen=True)
class NormalizationOptions:
    normalize_whitespace: bool = False
    smart_quotes: bool = False
    preserve_line_breaks: bool = True
    unsupported_handling: str = UNSUPPORTED_REPLACE

    @classmethod
    def from_dict(cls, data) -> "NormalizationOptions":
        """Build options from a JSON body, falling back to defaults for missing keys."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("options must be an object")
        handling = str(data.get("unsupported_handling", UNSUPPORTED_REPLACE)).strip().lower()
        if handling not in (UNSUPPORTED_REPLACE, UNSUPPORTED_REMOVE):
            raise ValueError(
                'Invalid unsupported_handling. Must be "replace" or "remove"'
            )
        return cls(
            normalize_whitespace=option_flag(data, "normalize_whitespace", False),
            smart_quotes=option_flag(data, "smart_quotes", False),
            preserve_line_breaks=option_flag(data, "preserve_line_breaks", True),
            unsupported_handling=handling,
        )


DEFAULT_NORMALIZATION_OPTIONS = NormalizationOptions()


@dataclass(frozen=True)
class NormalizationResult:
    original: str
    normalized: str
    applied: Tuple[str, ...] = ()
    warnings: Tuple[TranslationWarning, ...] = ()

    @property
    def diff(self):
        """Before/after pair for display, or None when nothing changed."""
        if self.original == self.normalized:
            return None
        return {"before": self.original, "after": self.normalized}

    def to_dict(self):
        data = {
            "original": self.original,
            "normalized": self.normalized,
            "applied": list(self.applied),
            "warnings": [w.to_dict() for w in self.warnings],
        }
        if self.diff is not None:
            data["diff"] = self.diff
        return data


@dataclass(frozen=True)
class TypographyNormalization:
    normalized: str
    changes: Tuple[str, ...] = field(default_factory=tuple)


def _normalize_line_whitespace(line: str) -> str:
    collapsed = re.sub(r"[\t\f\v]+", " ", line)
    collapsed = re.sub(r" {2,}", " ", collapsed)
    return collapsed.rstrip()


def _dedupe(names: List[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(names))


def normalize_input(text: str, options: NormalizationOptions = DEFAULT_NORMALIZATION_OPTIONS) -> NormalizationResult:
    """Normalize raw sign text and record what changed."""
    working = text.replace("\r\n", "\n").replace("\r", "\n")
    warnings = []
    applied = []

    if options.smart_quotes:
        for pattern, replacement, label in SMART_REPLACEMENTS:
            if pattern.search(working):
                working = pattern.sub(replacement, working)
                warnings.append(TranslationWarning("replacement", f"{label} normalized to ASCII."))
                applied.append("smart_quotes")

    if options.normalize_whitespace:
        lines = [_normalize_line_whitespace(line) for line in working.split("\n")]
        working = "\n".join(lines) if options.preserve_line_breaks else " ".join(lines)
        applied.append("normalize_whitespace")

    chars = []
    for i, ch in enumerate(working):
        if SUPPORTED_CHAR.match(ch):
            chars.append(ch)
            continue

        if options.unsupported_handling == UNSUPPORTED_REMOVE:
            warnings.append(TranslationWarning(
                "unsupported_character",
                f"Removed unsupported character: {ch!r}.",
                (i, i + 1),
            ))
            applied.append("unsupported_removed")
            continue

        warnings.append(TranslationWarning(
            "unsupported_character",
            f"Replaced unsupported character: {ch!r}.",
            (i, i + 1),
        ))
        applied.append("unsupported_replaced")
        chars.append("?")

    result = NormalizationResult(
        original=text,
        normalized="".join(chars),
        applied=_dedupe(applied),
        warnings=tuple(warnings),
    )
    if result.applied:
        logger.debug("Normalization applied %s (%d warnings)", ", ".join(result.applied), len(warnings))
    return result


def normalize_typography(text: str) -> TypographyNormalization:
    """Apply only the smart-punctuation table, with human-readable change labels."""
    working = text
    changes = []
    for pattern, replacement, label in SMART_REPLACEMENTS:
        if pattern.search(working):
            working = pattern.sub(replacement, working)
            changes.append(TYPOGRAPHY_LABELS[label])
    return TypographyNormalization(normalized=working, changes=_dedupe(changes))
