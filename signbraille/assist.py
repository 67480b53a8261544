"""Edit suggestions, soft flags and a profile recommendation for sign text."""

import re
from dataclasses import asdict, dataclass
from typing import List, Optional

from .normalization import SUPPORTED_CHAR, NormalizationResult

COMMON_PHRASES = [
    "EXIT",
    "RESTROOM",
    "MEN",
    "WOMEN",
    "NO SMOKING",
    "EMPLOYEES ONLY",
    "SUITE",
    "ROOM",
    "STAIRS",
    "ELEVATOR",
]

LONG_LINE_CHARS = 20
SHORT_LABEL_CHARS = 12

LOW = "low"
MEDIUM = "medium"
HIGH = "high"

MIXED_ALPHANUMERIC = re.compile(r"[A-Za-z][0-9]|[0-9][A-Za-z]")
ACRONYM = re.compile(r"\b[A-Z]{2,}\b")
HASH_NUMBER = re.compile(r"#([0-9]+)")
SUITE_ABBREVIATION = re.compile(r"\bSTE\b", re.IGNORECASE)
PHONE_NUMBER = re.compile(r"[0-9]{3}[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}")


@dataclass(frozen=True)
class AssistSuggestion:
    id: str
    title: str
    before: str
    after: str
    reason: str


@dataclass(frozen=True)
class AssistFlag:
    id: str
    severity: str
    message: str


@dataclass(frozen=True)
class AssistRecommendation:
    profile_id: str
    reason: str


@dataclass(frozen=True)
class AssistResult:
    suggestions: List[AssistSuggestion]
    flags: List[AssistFlag]
    recommendation: AssistRecommendation
    explanation: List[str]
    phrases: List[str]

    def to_dict(self):
        return asdict(self)


def is_mostly_lowercase(text: str) -> bool:
    letters = [ch for ch in text if ch.isascii() and ch.isalpha()]
    if not letters:
        return False
    lowercase = sum(1 for ch in letters if ch == ch.lower())
    return lowercase / len(letters) > 0.6


def _suggestions(text):
    suggestions = []
    if is_mostly_lowercase(text):
        suggestions.append(AssistSuggestion(
            "uppercase", "Use all caps for sign clarity", text, text.upper(),
            "All caps improves readability on tactile signage.",
        ))
    if HASH_NUMBER.search(text):
        suggestions.append(AssistSuggestion(
            "remove-hash", "Remove # from room or suite numbers", text,
            HASH_NUMBER.sub(r"\1", text),
            "Braille number sign already conveys numeric context.",
        ))
    if SUITE_ABBREVIATION.search(text):
        suggestions.append(AssistSuggestion(
            "suite-spellout", "Spell out SUITE for consistency", text,
            SUITE_ABBREVIATION.sub("SUITE", text),
            "Avoid ambiguous abbreviations in tactile text.",
        ))
    return suggestions


def _flags(text):
    flags = []
    if re.search(r"\bST\b", text):
        flags.append(AssistFlag(
            "ambiguous-st", MEDIUM,
            "ST can be Street or Saint; consider spelling out for clarity.",
        ))
    if re.search(r"\s{2,}", text):
        flags.append(AssistFlag(
            "extra-spaces", LOW, "Multiple spaces found; may collapse during normalization.",
        ))
    if re.search(r"(^\s+|\s+$)", text):
        flags.append(AssistFlag("trailing-space", LOW, "Leading or trailing whitespace detected."))

    for index, line in enumerate(text.split("\n")):
        if len(line) > LONG_LINE_CHARS:
            flags.append(AssistFlag(
                f"long-line-{index}", MEDIUM,
                f"Line {index + 1} exceeds {LONG_LINE_CHARS} characters; consider shortening.",
            ))

    unsupported = [ch for ch in text if not SUPPORTED_CHAR.match(ch)]
    if unsupported:
        distinct = " ".join(dict.fromkeys(unsupported))
        flags.append(AssistFlag("unsupported", HIGH, f"Unsupported characters detected: {distinct}"))

    if PHONE_NUMBER.search(text):
        flags.append(AssistFlag(
            "phone-number", MEDIUM,
            "Phone number detected; verify spacing and number sign usage.",
        ))
    return flags


def recommend_profile(text: str) -> AssistRecommendation:
    has_digits = re.search(r"[0-9]", text) is not None
    if (has_digits or MIXED_ALPHANUMERIC.search(text) or ACRONYM.search(text)
            or len(text.strip()) <= SHORT_LABEL_CHARS):
        return AssistRecommendation(
            "en-us-g1", "Short labels, numbers, or acronyms often translate better in Grade 1.",
        )
    return AssistRecommendation("en-us-g2", "Longer phrases benefit from Grade 2 contractions.")


def run_assist(text: str, normalization: Optional[NormalizationResult], profile_id: str) -> AssistResult:
    explanation = []
    if re.search(r"[0-9]", text):
        explanation.append("Numbers present; number mode is likely used.")
    if ACRONYM.search(text):
        explanation.append("Capital indicators likely used for all-caps text.")
    if profile_id == "en-us-g2":
        explanation.append("Contracted (Grade 2) braille likely applied.")
    else:
        explanation.append("Uncontracted (Grade 1) braille applied.")
    if normalization is not None and normalization.diff is not None:
        explanation.append("Normalization changes shown below are estimated.")

    return AssistResult(
        suggestions=_suggestions(text),
        flags=_flags(text),
        recommendation=recommend_profile(text),
        explanation=explanation,
        phrases=list(COMMON_PHRASES),
    )
