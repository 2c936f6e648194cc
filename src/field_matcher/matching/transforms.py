"""
Domain-specific option pre-transforms and the numeric guardrail.

Pre-transforms run before the generic cascade and are selected by the
predicted FieldId of the field being filled:
- institution names: keyword/full-name pattern scoring
- branch, gender, role: canonical category keys
- year of study: "3" -> expected graduation year among year options

Each transform returns the chosen candidate, or None to let the generic
cascade run.
"""

import re
from typing import List, Optional, Sequence

from ..models.fields import OptionCandidate
from ..text.normalizer import normalize, words
from .tables import (
    CATEGORY_TABLES,
    INSTITUTION_PATTERNS,
    InstitutionPattern,
    canonical_key,
    phrase_in,
)


INSTITUTION_FIELD_IDS = frozenset({"collegeName", "universityName"})

# FieldId -> CATEGORY_TABLES key
CATEGORY_FIELD_IDS = {
    "branch": "branch",
    "gender": "gender",
    "role": "role",
}

STUDY_YEAR_FIELD_IDS = frozenset({"yearOfGraduation", "yearOfStudy"})

# Full-name words shorter than this are ignored when scoring institutions
INSTITUTION_MIN_WORD_LENGTH = 4

_YEAR = re.compile(r"\d{4}")
_STUDY_YEAR = re.compile(r"\d")
_DIGITS = re.compile(r"\d+")
_NON_DIGIT = re.compile(r"\D")


# ============================================================================
# INSTITUTIONS
# ============================================================================

def _keyword_score(pattern: InstitutionPattern, text: str) -> int:
    return sum(len(normalize(k)) for k in pattern.keywords if phrase_in(k, text))


def _best_institution_pattern(value: str) -> Optional[InstitutionPattern]:
    best = None
    best_score = 0
    for pattern in INSTITUTION_PATTERNS:
        score = _keyword_score(pattern, value)
        if score > best_score:
            best, best_score = pattern, score
    return best


def _names_other_institution(candidate: OptionCandidate, pattern: InstitutionPattern) -> bool:
    text = " ".join(candidate.texts())
    own = _keyword_score(pattern, text)
    return any(
        _keyword_score(other, text) > own
        for other in INSTITUTION_PATTERNS
        if other is not pattern
    )


def _institution_score(candidate: OptionCandidate, pattern: InstitutionPattern) -> int:
    text = " ".join(candidate.texts())
    name_words = pattern.full_name_words()
    score = sum(
        len(w)
        for w in set(words(text, min_length=INSTITUTION_MIN_WORD_LENGTH))
        if w in name_words
    )
    score += sum(2 * len(normalize(k)) for k in pattern.keywords if phrase_in(k, text))
    return score


def match_institution(
    candidates: Sequence[OptionCandidate], value: str
) -> Optional[OptionCandidate]:
    """
    Pick the option naming the same known institution as the value.

    The value is first matched to the institution pattern whose keywords it
    hits hardest (hits weighted by keyword length). Candidates are then scored
    against that pattern: shared words with the official names count their
    length, keyword hits count twice their length. A candidate whose keywords
    point more strongly to another known institution is never chosen, so
    "PCCOE" cannot land on "PCCOE&R" through the shared prefix.

    Args:
        candidates: Options in document order
        value: Resolved profile value

    Returns:
        Highest-scoring candidate (first on ties), or None when the value names
        no known institution or no candidate scores above zero

    Examples:
        >>> opts = [OptionCandidate(value="Pimpri Chinchwad Education Trust's NMIET"),
        ...         OptionCandidate(value="Pimpri Chinchwad Education Trust's PCCOE, Pune")]
        >>> match_institution(opts, "PCCOE").value
        "Pimpri Chinchwad Education Trust's PCCOE, Pune"
    """
    pattern = _best_institution_pattern(value)
    if pattern is None:
        return None

    best = None
    best_score = 0
    for candidate in candidates:
        if _names_other_institution(candidate, pattern):
            continue
        score = _institution_score(candidate, pattern)
        if score > best_score:
            best, best_score = candidate, score
    return best


# ============================================================================
# CATEGORIES
# ============================================================================

def match_category(
    candidates: Sequence[OptionCandidate], value: str, table_name: str
) -> Optional[OptionCandidate]:
    """
    Match value and options through a category synonym table.

    Both sides are reduced to their most specific canonical key; the first
    candidate whose value or label has the same key as the value wins.

    Examples:
        >>> opts = [OptionCandidate(value="Female"), OptionCandidate(value="Male")]
        >>> match_category(opts, "M", "gender").value
        'Male'
    """
    table = CATEGORY_TABLES[table_name]
    key = canonical_key(value, table)
    if key is None:
        return None

    for candidate in candidates:
        if any(canonical_key(text, table) == key for text in candidate.texts()):
            return candidate
    return None


# ============================================================================
# YEAR OF STUDY
# ============================================================================

def graduation_years(study_year: int, current_year: int, program_length: int) -> List[int]:
    """
    Plausible graduation years for a student in a given year of study.

    Examples:
        >>> graduation_years(3, 2024, 4)
        [2025, 2026, 2027]
    """
    expected = current_year + (program_length + 1 - study_year)
    return [expected - 1, expected, expected + 1]


def _is_year_option(candidate: OptionCandidate) -> bool:
    return any(_YEAR.fullmatch(text.strip()) for text in candidate.texts())


def _is_placeholder(candidate: OptionCandidate) -> bool:
    # "Select year" prompts carry an empty value
    return not candidate.value.strip() and not _is_year_option(candidate)


def match_study_year(
    candidates: Sequence[OptionCandidate],
    value: str,
    current_year: int,
    program_length: int,
) -> Optional[OptionCandidate]:
    """
    Translate a year of study into a graduation-year option.

    Applies only when the value is a single digit within the program length
    and every candidate is a four-digit year. Placeholder options with an
    empty value are ignored.

    Args:
        candidates: Options in document order
        value: Resolved profile value, e.g. "3"
        current_year: Calendar year the form is filled in
        program_length: Degree length in years

    Returns:
        First candidate equal to or containing one of the plausible graduation
        years (years tried in ascending order), or None
    """
    text = value.strip()
    if not _STUDY_YEAR.fullmatch(text):
        return None
    study_year = int(text)
    if not 1 <= study_year <= program_length:
        return None
    options = [c for c in candidates if not _is_placeholder(c)]
    if not options or not all(_is_year_option(c) for c in options):
        return None

    for year in graduation_years(study_year, current_year, program_length):
        year_text = str(year)
        for candidate in options:
            if any(t.strip() == year_text or year_text in t for t in candidate.texts()):
                return candidate
    return None


# ============================================================================
# NUMERIC GUARDRAIL
# ============================================================================

def suspicious_numerals(value: str, long_digit_count: int, numeral_digit_count: int) -> List[str]:
    """
    Numerals in a value that must not be guessed into an unrelated option.

    Args:
        value: Resolved profile value
        long_digit_count: Total digit count that marks a phone-like value
        numeral_digit_count: Length of a single numeral that is flagged

    Returns:
        Flagged digit strings, without duplicates

    Examples:
        >>> suspicious_numerals("+91 98765 43210", 10, 6)
        ['919876543210']
        >>> suspicious_numerals("2026", 10, 6)
        []
    """
    flagged = []
    all_digits = _NON_DIGIT.sub("", value)
    if len(all_digits) >= long_digit_count:
        flagged.append(all_digits)
    for numeral in _DIGITS.findall(value):
        if len(numeral) >= numeral_digit_count and numeral not in flagged:
            flagged.append(numeral)
    return flagged


def violates_numeric_guardrail(
    candidates: Sequence[OptionCandidate],
    value: str,
    long_digit_count: int,
    numeral_digit_count: int,
) -> bool:
    """
    Whether a long numeric value has no option actually carrying it.

    A phone number or ID routed to a choice field would otherwise be matched
    to some option by the looser cascade tiers.
    """
    numerals = suspicious_numerals(value, long_digit_count, numeral_digit_count)
    if not numerals:
        return False

    option_digits = [
        _NON_DIGIT.sub("", text) for candidate in candidates for text in candidate.texts()
    ]
    return not any(numeral in digits for numeral in numerals for digits in option_digits)


__all__ = [
    "CATEGORY_FIELD_IDS",
    "INSTITUTION_FIELD_IDS",
    "STUDY_YEAR_FIELD_IDS",
    "graduation_years",
    "match_category",
    "match_institution",
    "match_study_year",
    "suspicious_numerals",
    "violates_numeric_guardrail",
]
