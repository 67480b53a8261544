"""
Smart Select: pick Grade 1 or Grade 2 from the raw sign text.

The rules form an ordered table and the first predicate that matches wins.
Order is part of the behaviour: anything of 25 characters or less is
``short_length`` even when it also looks technical.
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

GRADE1 = "grade1"
GRADE2 = "grade2"

SHORT_LABEL_MAX_CHARS = 25
LABEL_MAX_WORDS = 4
LONG_TEXT_MIN_WORDS = 6
LONG_TEXT_MIN_CHARS = 40
TECHNICAL_MIN_DIGITS = 10

URL_PATTERN = re.compile(r"(https?://|www\.)")
SCHEME_PATTERN = re.compile(r"(mailto:|tel:)")
EMAIL_PATTERN = re.compile(r"\b\S+@\S+\.\S+\b")
PHONE_PATTERN = re.compile(r"\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b", re.ASCII)
PATH_CHAR_PATTERN = re.compile(r"[\\/_:]")
CODE_TOKEN_PATTERN = re.compile(r"\b(?=[A-Za-z0-9]{4,}\b)(?=.*\d)(?=.*[A-Za-z])[A-Za-z0-9]+\b", re.ASCII)
JOINED_TOKEN_PATTERN = re.compile(r"\b\w+[-_]\w+\b", re.ASCII)
ROOM_TOKEN_PATTERN = re.compile(r"\b(?:RM|ROOM|STE|SUITE)\s*\d+[A-Z]?\b", re.IGNORECASE | re.ASCII)
SENTENCE_PUNCTUATION = re.compile(r"[.!?;:]")
SENTENCE_TERMINATOR = re.compile(r"[.!?]")


@dataclass(frozen=True)
class GradeDecision:
    grade: str
    rule_id: str
    reason: str

    def to_dict(self):
        return {"grade": self.grade, "rule_id": self.rule_id, "reason": self.reason}


def count_words(text: str) -> int:
    return len(text.split())


def count_digits(text: str) -> int:
    return sum(1 for ch in text if "0" <= ch <= "9")


def looks_technical(text: str) -> bool:
    """True for URLs, emails, phone numbers, paths, part codes and room tokens."""
    lower = text.lower()
    if URL_PATTERN.search(lower) or SCHEME_PATTERN.search(lower):
        return True
    if EMAIL_PATTERN.search(text):
        return True
    if count_digits(text) >= TECHNICAL_MIN_DIGITS or PHONE_PATTERN.search(text):
        return True
    if PATH_CHAR_PATTERN.search(text):
        return True
    if CODE_TOKEN_PATTERN.search(text) or JOINED_TOKEN_PATTERN.search(text):
        return True
    return ROOM_TOKEN_PATTERN.search(text) is not None


def _is_label_like(text: str) -> bool:
    return not SENTENCE_PUNCTUATION.search(text) and count_words(text) <= LABEL_MAX_WORDS


def _is_long_text(text: str) -> bool:
    return (
        len(SENTENCE_TERMINATOR.findall(text)) >= 2
        or count_words(text) >= LONG_TEXT_MIN_WORDS
        or len(text) >= LONG_TEXT_MIN_CHARS
    )


# Each predicate receives the trimmed text.
GRADE_RULES = [
    ("empty", lambda t: not t, GRADE1,
     "Empty/whitespace input defaults to Grade 1."),
    ("short_length", lambda t: len(t) <= SHORT_LABEL_MAX_CHARS, GRADE1,
     "Short labels are usually safer as Grade 1."),
    ("technical_content", looks_technical, GRADE1,
     "Identifiers, codes, and technical strings are usually safer as Grade 1."),
    ("label_like", _is_label_like, GRADE1,
     "Short label-like text without sentence punctuation is usually safer as Grade 1."),
    ("long_text", _is_long_text, GRADE2,
     "Longer, sentence-like text is often more readable in Grade 2 (still requires verification)."),
]

DEFAULT_DECISION = GradeDecision(GRADE1, "default", "Defaulting to Grade 1 for conservative handling.")


def decide_grade(text: str) -> GradeDecision:
    """Run the rule table against ``text``; never raises."""
    trimmed = (text or "").strip()
    for rule_id, predicate, grade, reason in GRADE_RULES:
        if predicate(trimmed):
            logger.debug("Smart Select rule %s -> %s", rule_id, grade)
            return GradeDecision(grade, rule_id, reason)
    logger.debug("Smart Select fell through to default")
    return DEFAULT_DECISION
