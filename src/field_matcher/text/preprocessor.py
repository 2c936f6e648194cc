"""
Label preprocessing: NA-instruction detection and qualifier removal.

Real form labels carry instructions meant for the human filling them
("Mobile Number - 10 digits only (Do NOT write +91 or 0)*"). The classifier
only needs the semantic core ("Mobile Number"), and the resolver needs to know
whether the form accepts a literal "NA" when the profile has no value.

Both steps are driven by maintained pattern tables. Each entry is a tuple of
(pattern, type, description) and is covered by a test case.
"""

import re
from typing import List, Optional, Tuple

import structlog

from ..models.results import PreprocessedLabel


logger = structlog.get_logger(__name__)

# "NA", "N/A", "N.A." as a standalone word
_NA = r"n\.?/?a\.?(?![a-z0-9])"


# ============================================================================
# NA INSTRUCTION PATTERNS
# ============================================================================

NA_PATTERNS = [
    (
        rf"\bif\s+(?:no|not|none)\b.*?\b(?:mention|write|enter|put|type|fill)\s+['\"]?{_NA}",
        "conditional_na",
        "If no diploma then mention NA",
    ),
    (
        rf"\b(?:mention|write|enter|put|type|fill)\s+['\"]?{_NA}['\"]?\s+(?:if|in\s+case|when)\b",
        "conditional_na",
        "Mention NA if not applicable",
    ),
    (
        rf"\b(?:or|else|otherwise)\s+(?:write|mention|enter|put|type)?\s*['\"]?{_NA}",
        "alternative_na",
        "... or write NA / else NA",
    ),
    (
        rf"\([^)]*\b{_NA}[^)]*\)",
        "parenthetical_na",
        "(NA if not applicable)",
    ),
]


# ============================================================================
# CLEANING PATTERNS (applied in order)
# ============================================================================

CLEANING_PATTERNS = [
    (r"\([^)]*\)?", "parenthetical", "Parenthetical instructions: (DD/MM/YYYY), (if any)"),
    (r"\[[^\]]*\]?", "option_list", "Bracketed option lists: [Male, Female]"),
    (
        rf"[,;:]?\s*\b(?:if\s+(?:no|not|none)\b|(?:mention|write|enter|put)\s+['\"]?{_NA}|(?:or|else)\s+(?:write\s+)?['\"]?{_NA}).*$",
        "na_tail",
        "Trailing NA instruction outside parentheses",
    ),
    (r"\s+[-–—]+\s+.*$", "dash_qualifier", "Trailing qualifier after a spaced dash: - 10 digits only"),
    (r"\*+", "required_marker", "Required-field asterisks"),
    (r"[\s:?.,;]+$", "trailing_punctuation", "Trailing colon, question mark, period"),
    (r"\s{2,}", "whitespace", "Collapse runs of whitespace"),
]

_COMPILED_NA = [(re.compile(p, re.IGNORECASE), t) for p, t, _ in NA_PATTERNS]
_COMPILED_CLEANING = [
    (re.compile(p, re.IGNORECASE), t, " " if t == "whitespace" else "")
    for p, t, _ in CLEANING_PATTERNS
]


def detect_na_instruction(label: str) -> Optional[str]:
    """
    Find the first NA-instruction pattern that matches a label.

    Args:
        label: Raw label text

    Returns:
        Pattern type of the first match, or None

    Examples:
        >>> detect_na_instruction("Diploma % (If no diploma then mention NA)")
        'conditional_na'
        >>> detect_na_instruction("Mobile Number (Do NOT write +91 or 0)") is None
        True
    """
    for pattern, pattern_type in _COMPILED_NA:
        if pattern.search(label):
            return pattern_type
    return None


def clean_label(label: str) -> Tuple[str, List[str]]:
    """
    Strip qualifiers and markers from a label.

    Args:
        label: Raw label text

    Returns:
        Tuple of (cleaned_label, applied_pattern_types). When nothing was
        removed, or removal would leave nothing, the trimmed label is returned.
    """
    original = label.strip()
    text = original
    applied: List[str] = []

    for pattern, pattern_type, replacement in _COMPILED_CLEANING:
        new_text = pattern.sub(replacement, text)
        if new_text != text:
            applied.append(pattern_type)
            text = new_text

    text = text.strip()
    if not text:
        return original, []
    return text, applied


def preprocess(raw_label: Optional[str]) -> PreprocessedLabel:
    """
    Clean a raw label and flag whether it accepts an NA escape value.

    Never raises; a label no pattern applies to comes back trimmed with
    ``has_na_instruction=False``.

    Args:
        raw_label: Label as scraped from the form

    Returns:
        PreprocessedLabel with cleaned text and NA flag

    Examples:
        >>> preprocess("Mobile Number - 10 digits only (Do NOT write +91 or 0)*").cleaned
        'Mobile Number'
        >>> preprocess("Diploma % (If no diploma then mention NA)").has_na_instruction
        True
    """
    if not raw_label:
        return PreprocessedLabel(cleaned="", has_na_instruction=False)

    na_type = detect_na_instruction(raw_label)
    cleaned, applied = clean_label(raw_label)

    if applied or na_type:
        logger.debug(
            "label_preprocessed",
            raw_label=raw_label,
            cleaned=cleaned,
            applied_patterns=applied,
            na_instruction=na_type,
        )

    return PreprocessedLabel(cleaned=cleaned, has_na_instruction=na_type is not None)
