# Option matching module

from .option_matcher import (
    OPTION_MATCHER_VERSION,
    MatchTier,
    OptionMatcher,
    OptionMatchOutcome,
    OptionMatchParams,
    match_option,
)
from .tables import SYNONYM_TABLE_VERSION, canonical_key, canonical_keys, phrase_in
from .transforms import (
    graduation_years,
    match_category,
    match_institution,
    match_study_year,
    suspicious_numerals,
    violates_numeric_guardrail,
)

__all__ = [
    "OPTION_MATCHER_VERSION",
    "SYNONYM_TABLE_VERSION",
    "MatchTier",
    "OptionMatcher",
    "OptionMatchOutcome",
    "OptionMatchParams",
    "match_option",
    "canonical_key",
    "canonical_keys",
    "phrase_in",
    "graduation_years",
    "match_category",
    "match_institution",
    "match_study_year",
    "suspicious_numerals",
    "violates_numeric_guardrail",
]
