"""
Option matching for closed-choice fields (radio, checkbox, select).

Narrows a resolved profile value to one of the options a form offers.

Order of evaluation:
1. Domain pre-transform selected by the predicted FieldId
   (institution names, branch/gender/role categories, year of study)
2. Numeric guardrail: long numerals nobody offers are never guessed
3. Generic cascade, first tier with a match wins:
   literal/ordinal -> normalized exact -> containment -> synonym groups
   -> weighted word overlap

Within a tier, candidates are examined in document order and the first
match wins unless the tier scores candidates.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, List, Optional, Sequence

import structlog

from ..config import settings
from ..models.fields import FieldContext, OptionCandidate
from ..text.normalizer import normalize, words
from ..version import OPTION_MATCHER_VERSION
from .tables import SYNONYM_GROUPS, canonical_keys, ordinal_forms, parse_ordinal
from .transforms import (
    CATEGORY_FIELD_IDS,
    INSTITUTION_FIELD_IDS,
    STUDY_YEAR_FIELD_IDS,
    match_category,
    match_institution,
    match_study_year,
    violates_numeric_guardrail,
)


logger = structlog.get_logger(__name__)


class MatchTier(str, Enum):
    """Strategy that produced an option match."""
    INSTITUTION = "institution"
    CATEGORY = "category"
    STUDY_YEAR = "study_year"
    LITERAL = "literal"
    NORMALIZED = "normalized"
    CONTAINMENT = "containment"
    SYNONYM = "synonym"
    WORD_OVERLAP = "word_overlap"


@dataclass
class OptionMatchOutcome:
    """
    Result of matching one value against an option set.

    ``guardrail_rejected`` separates a deliberate refusal to guess from a
    plain no-match; both leave ``candidate`` empty.
    """
    candidate: Optional[OptionCandidate] = None
    tier: Optional[MatchTier] = None
    guardrail_rejected: bool = False

    @property
    def matched(self) -> bool:
        return self.candidate is not None


@dataclass
class OptionMatchParams:
    """Tunable thresholds of the cascade."""
    word_overlap_min_token_length: int = 3
    word_overlap_min_score: int = 4
    containment_min_length: int = 5
    ordinal_max: int = 10
    guardrail_long_digit_count: int = 10
    guardrail_numeral_digit_count: int = 6
    program_length_years: int = 4

    @classmethod
    def from_config(cls) -> "OptionMatchParams":
        """Load thresholds from settings."""
        return cls(
            word_overlap_min_token_length=settings.word_overlap_min_token_length,
            word_overlap_min_score=settings.word_overlap_min_score,
            containment_min_length=settings.containment_min_length,
            ordinal_max=settings.ordinal_max,
            guardrail_long_digit_count=settings.guardrail_long_digit_count,
            guardrail_numeral_digit_count=settings.guardrail_numeral_digit_count,
            program_length_years=settings.program_length_years,
        )


class OptionMatcher:
    """
    Cascade of option matching strategies.

    Stateless apart from its parameters; safe to share.
    """

    def __init__(
        self,
        params: Optional[OptionMatchParams] = None,
        today: Callable[[], date] = date.today,
    ):
        self.params = params or OptionMatchParams.from_config()
        self.today = today

        self.logger = logger.bind(component="option_matcher")

    def match(
        self,
        candidates: Sequence[OptionCandidate],
        value: Optional[str],
        context: Optional[FieldContext] = None,
        current_year: Optional[int] = None,
    ) -> Optional[OptionCandidate]:
        """
        Find the option a resolved value refers to.

        Args:
            candidates: Options in document order
            value: Resolved profile value
            context: Label and predicted FieldId of the field
            current_year: Override for the calendar year (year-of-study
                conversion); defaults to today's year

        Returns:
            Matching candidate, or None (no match or guardrail rejection)

        Examples:
            >>> matcher = OptionMatcher()
            >>> opts = [OptionCandidate(value="Male"), OptionCandidate(value="Female")]
            >>> matcher.match(opts, "M", FieldContext(predicted_field_id="gender")).value
            'Male'
        """
        return self.explain(candidates, value, context, current_year).candidate

    def explain(
        self,
        candidates: Sequence[OptionCandidate],
        value: Optional[str],
        context: Optional[FieldContext] = None,
        current_year: Optional[int] = None,
    ) -> OptionMatchOutcome:
        """
        Run the cascade and report which tier matched.

        Same arguments as ``match``.

        Returns:
            OptionMatchOutcome
        """
        context = context or FieldContext()
        candidates = list(candidates)
        text = "" if value is None else str(value).strip()

        if not text or not candidates:
            self._log_no_match(context, text, candidates)
            return OptionMatchOutcome()

        outcome = self._pre_transform(candidates, text, context, current_year)
        if outcome is None:
            if violates_numeric_guardrail(
                candidates,
                text,
                self.params.guardrail_long_digit_count,
                self.params.guardrail_numeral_digit_count,
            ):
                self.logger.info(
                    "option_guardrail_rejected",
                    label=context.label,
                    field_id=context.predicted_field_id,
                    candidate_count=len(candidates),
                )
                return OptionMatchOutcome(guardrail_rejected=True)

            outcome = self._cascade(candidates, text)

        if outcome is None:
            self._log_no_match(context, text, candidates)
            return OptionMatchOutcome()

        self.logger.debug(
            "option_matched",
            label=context.label,
            field_id=context.predicted_field_id,
            tier=outcome.tier.value,
            option=outcome.candidate.label or outcome.candidate.value,
            option_matcher_version=OPTION_MATCHER_VERSION,
        )
        return outcome

    def match_all(
        self,
        candidates: Sequence[OptionCandidate],
        values: Sequence[str],
        context: Optional[FieldContext] = None,
        current_year: Optional[int] = None,
    ) -> List[OptionCandidate]:
        """
        Match several values against one option set (checkbox groups).

        Each value is matched on its own; values without a match are dropped.

        Returns:
            Chosen candidates in document order, each at most once
        """
        candidates = list(candidates)
        chosen = set()
        for value in values:
            candidate = self.match(candidates, value, context, current_year)
            if candidate is not None:
                chosen.update(i for i, c in enumerate(candidates) if c is candidate)
        return [c for i, c in enumerate(candidates) if i in chosen]

    # ------------------------------------------------------------------------
    # Pre-transforms
    # ------------------------------------------------------------------------

    def _pre_transform(
        self,
        candidates: List[OptionCandidate],
        value: str,
        context: FieldContext,
        current_year: Optional[int],
    ) -> Optional[OptionMatchOutcome]:
        field_id = context.predicted_field_id

        if field_id in INSTITUTION_FIELD_IDS:
            candidate = match_institution(candidates, value)
            if candidate is not None:
                return OptionMatchOutcome(candidate, MatchTier.INSTITUTION)

        elif field_id in CATEGORY_FIELD_IDS:
            candidate = match_category(candidates, value, CATEGORY_FIELD_IDS[field_id])
            if candidate is not None:
                return OptionMatchOutcome(candidate, MatchTier.CATEGORY)

        elif field_id in STUDY_YEAR_FIELD_IDS:
            year = current_year if current_year is not None else self.today().year
            candidate = match_study_year(
                candidates, value, year, self.params.program_length_years
            )
            if candidate is not None:
                return OptionMatchOutcome(candidate, MatchTier.STUDY_YEAR)

        return None

    # ------------------------------------------------------------------------
    # Generic cascade
    # ------------------------------------------------------------------------

    def _cascade(
        self, candidates: List[OptionCandidate], value: str
    ) -> Optional[OptionMatchOutcome]:
        tiers = (
            (MatchTier.LITERAL, self._literal),
            (MatchTier.NORMALIZED, self._normalized),
            (MatchTier.CONTAINMENT, self._containment),
            (MatchTier.SYNONYM, self._synonym),
            (MatchTier.WORD_OVERLAP, self._word_overlap),
        )
        for tier, strategy in tiers:
            candidate = strategy(candidates, value)
            if candidate is not None:
                return OptionMatchOutcome(candidate, tier)
        return None

    def _literal(self, candidates: List[OptionCandidate], value: str) -> Optional[OptionCandidate]:
        for candidate in candidates:
            if any(text.strip() == value for text in candidate.texts()):
                return candidate

        # "4" <-> "4th" / "fourth", also inside "4th Year"
        n = parse_ordinal(value, self.params.ordinal_max)
        if n is None:
            return None
        forms = set(ordinal_forms(n))
        for candidate in candidates:
            for text in candidate.texts():
                norm = normalize(text)
                if norm == str(n) or norm in forms or forms.intersection(words(text)):
                    return candidate
        return None

    def _normalized(self, candidates: List[OptionCandidate], value: str) -> Optional[OptionCandidate]:
        norm_value = normalize(value)
        if not norm_value:
            return None
        for candidate in candidates:
            if any(normalize(text) == norm_value for text in candidate.texts()):
                return candidate
        return None

    def _containment(self, candidates: List[OptionCandidate], value: str) -> Optional[OptionCandidate]:
        norm_value = normalize(value)
        # Both sides at least this long: "NA" never lands on "Nagpur"
        min_length = max(self.params.containment_min_length, 1)
        if len(norm_value) < min_length:
            return None
        for candidate in candidates:
            for text in candidate.texts():
                norm = normalize(text)
                if min(len(norm), len(norm_value)) >= min_length and (
                    norm_value in norm or norm in norm_value
                ):
                    return candidate
        return None

    def _synonym(self, candidates: List[OptionCandidate], value: str) -> Optional[OptionCandidate]:
        value_keys = canonical_keys(value, SYNONYM_GROUPS)
        if not value_keys:
            return None

        best = None
        best_overlap = 0
        for candidate in candidates:
            keys = set()
            for text in candidate.texts():
                keys |= canonical_keys(text, SYNONYM_GROUPS)
            overlap = len(value_keys & keys)
            if overlap > best_overlap:
                best, best_overlap = candidate, overlap
        return best

    def _word_overlap(self, candidates: List[OptionCandidate], value: str) -> Optional[OptionCandidate]:
        min_length = self.params.word_overlap_min_token_length
        value_words = set(words(value, min_length=min_length))
        if not value_words:
            return None

        best = None
        best_score = 0
        for candidate in candidates:
            option_words = set(words(" ".join(candidate.texts()), min_length=min_length))
            score = sum(len(w) for w in value_words & option_words)
            if score > best_score:
                best, best_score = candidate, score

        if best_score < self.params.word_overlap_min_score:
            return None
        return best

    def _log_no_match(
        self, context: FieldContext, value: str, candidates: List[OptionCandidate]
    ) -> None:
        self.logger.info(
            "option_no_match",
            label=context.label,
            field_id=context.predicted_field_id,
            value=value,
            candidates=[c.label or c.value for c in candidates],
        )


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def match_option(
    candidates: Sequence[OptionCandidate],
    value: Optional[str],
    context: Optional[FieldContext] = None,
    current_year: Optional[int] = None,
    matcher: Optional[OptionMatcher] = None,
) -> Optional[OptionCandidate]:
    """
    Match a value against an option set with a default matcher.

    Args:
        candidates: Options in document order
        value: Resolved profile value
        context: Label and predicted FieldId of the field
        current_year: Override for the calendar year
        matcher: Optional OptionMatcher (default: built from settings)

    Returns:
        Matching candidate or None
    """
    if matcher is None:
        matcher = OptionMatcher()
    return matcher.match(candidates, value, context, current_year)


__all__ = [
    "OPTION_MATCHER_VERSION",
    "MatchTier",
    "OptionMatchOutcome",
    "OptionMatchParams",
    "OptionMatcher",
    "match_option",
]
