"""Braille profiles: which liblouis tables to use for each grade."""

from dataclasses import dataclass
from typing import Tuple

from .grading import GRADE1, GRADE2


@dataclass(frozen=True)
class BrailleProfile:
    id: str
    label: str
    description: str
    tables: Tuple[str, ...]
    grade: str

    def to_dict(self):
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "tables": list(self.tables),
            "grade": self.grade,
        }


BRAILLE_PROFILES = [
    BrailleProfile(
        id="en-us-g2",
        label="US English (Contracted / Grade 2)",
        description="Standard contracted UEB for general signage.",
        tables=("en-us-g2.ctb",),
        grade="g2",
    ),
    BrailleProfile(
        id="en-us-g1",
        label="US English (Uncontracted / Grade 1)",
        description="Literal spelling for part numbers, acronyms, and short labels.",
        tables=("en-us-g1.ctb",),
        grade="g1",
    ),
]

DEFAULT_PROFILE_ID = "en-us-g2"

_PROFILES_BY_ID = {profile.id: profile for profile in BRAILLE_PROFILES}
_PROFILE_FOR_GRADE = {GRADE1: "en-us-g1", GRADE2: "en-us-g2"}


def get_profile(profile_id) -> BrailleProfile:
    """Look up a profile; unknown ids fall back to the first profile."""
    return _PROFILES_BY_ID.get(profile_id, BRAILLE_PROFILES[0])


def profile_for_grade(grade: str) -> BrailleProfile:
    return get_profile(_PROFILE_FOR_GRADE.get(grade, DEFAULT_PROFILE_ID))
