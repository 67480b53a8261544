"""Plain text to braille for signage, with risk flags and a tactile SVG preview."""

from .assist import run_assist
from .cells import BrailleCell, decode_braille, plain_dots
from .compliance import BLOCK, PASS, WARN, ComplianceFlag, ComplianceReport, compliance_check
from .engine import EngineError, EngineHandle, LouTranslateEngine, TranslationEngine
from .grading import GRADE1, GRADE2, GradeDecision, decide_grade
from .normalization import (
    DEFAULT_NORMALIZATION_OPTIONS,
    NormalizationOptions,
    NormalizationResult,
    TranslationWarning,
    normalize_input,
    normalize_typography,
)
from .profiles import BRAILLE_PROFILES, DEFAULT_PROFILE_ID, BrailleProfile, get_profile, profile_for_grade
from .svg import DEFAULT_SVG_LAYOUT, SvgLayout, VectorDocument, export_svg, render_braille_svg
from .translation import TranslationResult, translate_text

__version__ = "0.1.0"
