"""
Risk flags for sign text.

Each check looks at the text on its own and contributes at most one flag;
every check runs even after a BLOCK has fired. The report level is the worst
flag level. PASS only ever means "nothing flagged", never "ADA compliant".
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

import regex

from .grading import GRADE2, GradeDecision, SHORT_LABEL_MAX_CHARS, count_words

logger = logging.getLogger(__name__)

PASS = "PASS"
WARN = "WARN"
BLOCK = "BLOCK"

LENGTH_RISK_CHARS = 80
PUNCTUATION_HIGH_RISK_COUNT = 10
PUNCTUATION_DENSE_COUNT = 4

try:
    PICTOGRAPH_PATTERN = regex.compile(r"\p{Extended_Pictographic}")
except regex.error:
    logger.warning("Extended_Pictographic unsupported; using code point range for emoji detection")
    PICTOGRAPH_PATTERN = None
# Narrower stand-in used when the property lookup is unavailable.
PICTOGRAPH_RANGE = re.compile("[\U0001F300-\U0001FAFF]")

try:
    LETTER_PATTERN = regex.compile(r"\p{L}")
except regex.error:
    LETTER_PATTERN = None

SMART_QUOTES = re.compile("[\u2018\u2019\u201c\u201d]")
DASH_VARIANTS = re.compile("[\u2013\u2014]")
ELLIPSIS = re.compile("\u2026")
UNUSUAL_SYMBOLS = re.compile("[\u00a9\u00ae\u2122]")
DIGIT = re.compile(r"[0-9]")
ABBREVIATION = re.compile(r"\b(rm|room|ste|suite|dept|dr\.?|st\.?)\b", re.IGNORECASE)
RISKY_PUNCTUATION = re.compile(r"[/\\\-()\"'&:]")
SLASH_RUN = re.compile(r"[/\\]{3,}")
HYPHEN_RUN = re.compile(r"-{3,}")
PARENTHESIS = re.compile(r"[()]")
TECHNICAL_STRING = re.compile(r"(https?://|www\.|mailto:|tel:|\b\S+@\S+\.\S+\b)", re.IGNORECASE)

LEVEL_RANK = {PASS: 0, WARN: 1, BLOCK: 2}


@dataclass(frozen=True)
class ComplianceFlag:
    code: str
    level: str
    message: str

    def to_dict(self):
        return {"code": self.code, "level": self.level, "message": self.message}


@dataclass(frozen=True)
class ComplianceReport:
    level: str
    flags: Tuple[ComplianceFlag, ...] = ()

    @property
    def codes(self):
        return [flag.code for flag in self.flags]

    @property
    def blocked(self) -> bool:
        return self.level == BLOCK

    def to_dict(self):
        return {"level": self.level, "flags": [flag.to_dict() for flag in self.flags]}


def has_emoji_or_pictograph(text: str) -> bool:
    if PICTOGRAPH_PATTERN is not None:
        return PICTOGRAPH_PATTERN.search(text) is not None
    return PICTOGRAPH_RANGE.search(text) is not None


def has_non_bmp(text: str) -> bool:
    return any(ord(ch) > 0xFFFF for ch in text)


def _check_emoji(text, trimmed, decision):
    if has_emoji_or_pictograph(text):
        return ComplianceFlag(
            "emoji_or_pictograph", BLOCK,
            "Emoji/pictographs detected. Remove them before generating or exporting braille.",
        )


def _check_non_bmp(text, trimmed, decision):
    if has_non_bmp(text):
        return ComplianceFlag(
            "non_bmp_character", BLOCK,
            "Non-standard characters detected (e.g., emoji/flags). "
            "Remove them before generating or exporting braille.",
        )


def _check_quotes(text, trimmed, decision):
    if SMART_QUOTES.search(text):
        return ComplianceFlag(
            "non_ascii_quotes", WARN,
            "Smart quotes detected. Verify punctuation handling "
            "(or normalize typography intentionally).",
        )


def _check_dashes(text, trimmed, decision):
    if DASH_VARIANTS.search(text):
        return ComplianceFlag(
            "dash_variant", WARN,
            "En/em dashes detected. Verify punctuation handling "
            "(or normalize typography intentionally).",
        )


def _check_ellipsis(text, trimmed, decision):
    if ELLIPSIS.search(text):
        return ComplianceFlag(
            "ellipsis", WARN,
            "Ellipsis character detected. Verify punctuation handling "
            "(or normalize typography intentionally).",
        )


def _check_symbols(text, trimmed, decision):
    if UNUSUAL_SYMBOLS.search(text):
        return ComplianceFlag(
            "unusual_symbol", WARN,
            "Trademark/copyright symbols detected. Verify whether these should "
            "appear on the sign and how they should be handled.",
        )


def _check_non_ascii_letters(text, trimmed, decision):
    if LETTER_PATTERN is None:
        if any(ord(ch) > 0x7F and ch.isalpha() for ch in text):
            return ComplianceFlag(
                "non_ascii_letter", WARN,
                "Non-ASCII characters detected. Verify language/profile handling.",
            )
        return None
    if any(ord(ch) > 0x7F and LETTER_PATTERN.match(ch) for ch in text):
        return ComplianceFlag(
            "non_ascii_letter", WARN,
            "Non-English letters/diacritics detected. Verify language/profile "
            "handling (US English tables may be insufficient).",
        )


def _check_all_caps(text, trimmed, decision):
    letters = re.sub(r"[^A-Za-z]+", "", trimmed)
    if letters and letters == letters.upper() and count_words(trimmed) >= 2:
        return ComplianceFlag(
            "all_caps", WARN,
            "All-caps multi-word text detected. Capitalization rules matter in "
            "braille; verify carefully.",
        )


def _check_numbers(text, trimmed, decision):
    if DIGIT.search(text):
        return ComplianceFlag(
            "numbers_present", WARN,
            "Numbers/ordinals detected. Verify number indicators, spacing, and formatting.",
        )


def _check_abbreviations(text, trimmed, decision):
    if ABBREVIATION.search(text):
        return ComplianceFlag(
            "abbreviation_detected", WARN,
            "Abbreviations detected (e.g., Rm/Ste/Dept/St/Dr). Confirm intended "
            "expansion and meaning.",
        )


def _check_punctuation(text, trimmed, decision):
    # High risk wins outright; the dense warning is only considered below it.
    count = len(RISKY_PUNCTUATION.findall(text))
    if count >= PUNCTUATION_HIGH_RISK_COUNT or SLASH_RUN.search(text) or HYPHEN_RUN.search(text):
        return ComplianceFlag(
            "punctuation_high_risk", BLOCK,
            "High punctuation density detected. Simplify the text or verify "
            "punctuation handling before exporting.",
        )
    if count >= PUNCTUATION_DENSE_COUNT or PARENTHESIS.search(text):
        return ComplianceFlag(
            "punctuation_dense", WARN,
            "Punctuation-heavy text detected. Verify punctuation handling and intended meaning.",
        )


def _check_multiline(text, trimmed, decision):
    if "\n" in text:
        return ComplianceFlag(
            "multiline_input", WARN,
            "Multi-line input detected. Sign line breaks and layout rules differ "
            "from document braille; verify layout.",
        )


def _check_length(text, trimmed, decision):
    if len(trimmed) > LENGTH_RISK_CHARS:
        return ComplianceFlag(
            "length_risk", WARN,
            "Long text detected. It may not fit typical sign formats; verify line "
            "breaks, placement, and layout.",
        )


def _check_technical(text, trimmed, decision):
    if TECHNICAL_STRING.search(text):
        return ComplianceFlag(
            "technical_string", WARN,
            "Technical string detected (URL/email/phone/tel/mailto). Verify "
            "formatting and whether Grade 1 is appropriate.",
        )


def _check_grade2_short_label(text, trimmed, decision):
    if decision is not None and decision.grade == GRADE2 and len(trimmed) <= SHORT_LABEL_MAX_CHARS:
        return ComplianceFlag(
            "grade2_short_label_risk", WARN,
            "Smart Select chose Grade 2 for a short label. Verify grade choice; "
            "Grade 1 is often safer for short labels.",
        )


# Evaluation order is also the order flags appear in the report.
COMPLIANCE_CHECKS = [
    _check_emoji,
    _check_non_bmp,
    _check_quotes,
    _check_dashes,
    _check_ellipsis,
    _check_symbols,
    _check_non_ascii_letters,
    _check_all_caps,
    _check_numbers,
    _check_abbreviations,
    _check_punctuation,
    _check_multiline,
    _check_length,
    _check_technical,
    _check_grade2_short_label,
]


def aggregate_level(flags) -> str:
    level = PASS
    for flag in flags:
        if LEVEL_RANK[flag.level] > LEVEL_RANK[level]:
            level = flag.level
    return level


def compliance_check(
    text: str,
    profile_id: str = "en-us-g2",
    smart_select_enabled: bool = False,
    smart_select_decision: Optional[GradeDecision] = None,
) -> ComplianceReport:
    """Scan ``text`` for braille/signage risk patterns.

    ``profile_id`` is accepted so reports can be tied to a profile; no check
    depends on it today.
    """
    text = text or ""
    trimmed = text.strip()
    decision = smart_select_decision if smart_select_enabled else None

    flags = []
    for check in COMPLIANCE_CHECKS:
        flag = check(text, trimmed, decision)
        if flag is not None:
            flags.append(flag)

    report = ComplianceReport(level=aggregate_level(flags), flags=tuple(flags))
    logger.debug("Compliance %s for profile %s: %s", report.level, profile_id, report.codes)
    return report
