"""
Field matching engine: the fill pipeline for one form.

Per detected field:
    preprocess label -> classify -> (cache bias) -> resolve profile value
    -> narrow to an option for closed-choice controls -> FillMapping

Fields that end without a value are omitted from the result; nothing is ever
invented. The engine holds no global state: the trained classifier is shared
by reference and the mapping cache is injected.
"""

import uuid
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import structlog

from .cache.mapping_cache import MappingCache
from .classification.classifier import LabelClassifier, get_default_classifier
from .config import settings
from .logging_config import bind_fill_context, clear_fill_context
from .matching.option_matcher import OptionMatcher
from .models.fields import (
    CheckboxField,
    DateField,
    FieldContext,
    FieldKind,
    FreeTextField,
    SingleChoiceField,
    parse_detected_field,
)
from .models.results import ClassificationResult, FieldMatch, FillMapping, PreprocessedLabel
from .profile.resolver import ProfileResolver
from .text.preprocessor import preprocess
from .version import ENGINE_VERSION


logger = structlog.get_logger(__name__)

AnyDetectedField = Union[FreeTextField, DateField, SingleChoiceField, CheckboxField]


@dataclass
class EngineThresholds:
    """Confidence gates of the fill pipeline."""
    min_classification_confidence: float = 0.5
    option_override_confidence_threshold: float = 0.8

    @classmethod
    def from_config(cls) -> "EngineThresholds":
        """Load thresholds from settings."""
        return cls(
            min_classification_confidence=settings.min_classification_confidence,
            option_override_confidence_threshold=settings.option_override_confidence_threshold,
        )


def split_multi_value(value: Union[str, Sequence[str]]) -> List[str]:
    """
    Values for a checkbox group.

    Examples:
        >>> split_multi_value("Python, SQL ,")
        ['Python', 'SQL']
    """
    parts = value.split(",") if isinstance(value, str) else list(value)
    return [p.strip() for p in parts if p and p.strip()]


class FieldMatchingEngine:
    """
    Fills detected form fields from a profile snapshot.

    Args:
        classifier: Trained label classifier (default: shared bundled model)
        resolver: Profile resolver
        option_matcher: Option matcher for closed-choice fields
        cache: Mapping cache; None disables caching
        thresholds: Confidence gates (default: from settings)
    """

    def __init__(
        self,
        classifier: Optional[LabelClassifier] = None,
        resolver: Optional[ProfileResolver] = None,
        option_matcher: Optional[OptionMatcher] = None,
        cache: Optional[MappingCache] = None,
        thresholds: Optional[EngineThresholds] = None,
    ):
        self.classifier = classifier or get_default_classifier()
        self.resolver = resolver or ProfileResolver()
        self.option_matcher = option_matcher or OptionMatcher()
        self.cache = cache
        self.thresholds = thresholds or EngineThresholds.from_config()

        self._fillers = {
            FreeTextField: self._fill_free_text,
            DateField: self._fill_free_text,
            SingleChoiceField: self._fill_single_choice,
            CheckboxField: self._fill_checkboxes,
        }

        self.logger = logger.bind(component="field_matching_engine")

    # ------------------------------------------------------------------------
    # Single-field API
    # ------------------------------------------------------------------------

    def classify(self, label: str) -> Tuple[PreprocessedLabel, ClassificationResult]:
        """Preprocess a raw label and classify its cleaned form."""
        preprocessed = preprocess(label)
        return preprocessed, self.classifier.predict(preprocessed.cleaned)

    def match_field(self, label: str) -> Optional[ClassificationResult]:
        """
        Predict the FieldId of a label.

        Returns:
            ClassificationResult, or None when nothing was recognized or the
            confidence is below the skip threshold

        Examples:
            >>> FieldMatchingEngine().match_field("Year of graduation").predicted_field
            'yearOfGraduation'
        """
        _, result = self.classify(label)
        if not self._is_confident(result.predicted_field, result.confidence):
            return None
        return result

    def match_field_with_value(
        self,
        label: str,
        profile: Optional[Mapping[str, Any]],
        custom_fields: Optional[Mapping[str, Any]] = None,
    ) -> Optional[FieldMatch]:
        """
        Predict the FieldId of a label and resolve its profile value.

        Returns:
            FieldMatch, or None when the label is not recognized or the
            profile holds no value for it
        """
        preprocessed, result = self.classify(label)
        if not self._is_confident(result.predicted_field, result.confidence):
            return None

        value = self.resolver.resolve(
            result.predicted_field,
            profile,
            custom_fields,
            has_na_instruction=preprocessed.has_na_instruction,
        )
        if value is None:
            return None
        return FieldMatch(field=result.predicted_field, value=value, confidence=result.confidence)

    # ------------------------------------------------------------------------
    # Fill pass
    # ------------------------------------------------------------------------

    async def fill(
        self,
        fields: Sequence[Union[AnyDetectedField, Mapping[str, Any]]],
        profile: Optional[Mapping[str, Any]],
        custom_fields: Optional[Mapping[str, Any]] = None,
        current_year: Optional[int] = None,
    ) -> List[FillMapping]:
        """
        Compute fill instructions for every detected field of a form.

        Args:
            fields: Detected fields (variants or plain mappings with ``kind``)
            profile: Profile snapshot, read-only
            custom_fields: User-defined fields keyed by id
            current_year: Override for the calendar year used by the
                year-of-study conversion

        Returns:
            FillMapping per field that produced a value, in field order
        """
        bind_fill_context(fill_pass=uuid.uuid4().hex[:12])
        try:
            if self.cache is not None:
                await self.cache.cleanup()

            mappings = []
            for index, raw_field in enumerate(fields):
                detected = (
                    parse_detected_field(raw_field) if isinstance(raw_field, Mapping) else raw_field
                )
                mapping = await self._fill_one(index, detected, profile, custom_fields, current_year)
                if mapping is None:
                    continue

                mappings.append(mapping)
                if self.cache is not None:
                    await self.cache.store(mapping.label, mapping.field, mapping.confidence)

            self.logger.info(
                "fill_completed",
                fields=len(fields),
                filled=len(mappings),
                engine_version=ENGINE_VERSION,
            )
            return mappings
        finally:
            clear_fill_context("fill_pass")

    async def _fill_one(
        self,
        index: int,
        detected: AnyDetectedField,
        profile: Optional[Mapping[str, Any]],
        custom_fields: Optional[Mapping[str, Any]],
        current_year: Optional[int],
    ) -> Optional[FillMapping]:
        filler = self._fillers.get(type(detected))
        if filler is None:
            raise TypeError(f"Unsupported detected field type: {type(detected).__name__}")

        preprocessed, result = self.classify(detected.label)
        field_id, confidence = result.predicted_field, result.confidence

        if self.cache is not None:
            cached = await self.cache.get(detected.label)
            if cached is not None and cached.confidence > confidence:
                self.logger.debug(
                    "cache_prediction_used",
                    index=index,
                    label=detected.label,
                    predicted_field=field_id,
                    cached_field=cached.field,
                )
                field_id, confidence = cached.field, cached.confidence

        if not self._is_confident(field_id, confidence):
            self.logger.debug(
                "field_skipped_low_confidence",
                index=index,
                label=detected.label,
                predicted_field=field_id,
                confidence=round(confidence, 4),
            )
            return None

        kind = FieldKind(detected.kind)
        value = self.resolver.resolve(
            field_id,
            profile,
            custom_fields,
            has_na_instruction=preprocessed.has_na_instruction,
            field_kind=kind,
        )
        if value is None:
            self.logger.debug("field_value_missing", index=index, label=detected.label, field=field_id)
            return None

        return filler(detected, field_id, value, confidence, current_year)

    def _is_confident(self, field_id: Optional[str], confidence: float) -> bool:
        return field_id is not None and confidence >= self.thresholds.min_classification_confidence

    # ------------------------------------------------------------------------
    # Per-variant fill strategies
    # ------------------------------------------------------------------------

    def _fill_free_text(
        self,
        detected: Union[FreeTextField, DateField],
        field_id: str,
        value: str,
        confidence: float,
        current_year: Optional[int],
    ) -> FillMapping:
        return FillMapping(field=field_id, label=detected.label, value=value, confidence=confidence)

    def _fill_single_choice(
        self,
        detected: SingleChoiceField,
        field_id: str,
        value: str,
        confidence: float,
        current_year: Optional[int],
    ) -> Optional[FillMapping]:
        if confidence < self.thresholds.option_override_confidence_threshold:
            # Left to the filling collaborator to write literally
            return FillMapping(field=field_id, label=detected.label, value=value, confidence=confidence)

        context = FieldContext(label=detected.label, predicted_field_id=field_id)
        candidate = self.option_matcher.match(detected.options, value, context, current_year)
        if candidate is None:
            return None

        return FillMapping(
            field=field_id,
            label=detected.label,
            value=candidate.value or candidate.label,
            confidence=confidence,
            selected=[candidate],
        )

    def _fill_checkboxes(
        self,
        detected: CheckboxField,
        field_id: str,
        value: str,
        confidence: float,
        current_year: Optional[int],
    ) -> Optional[FillMapping]:
        values = split_multi_value(value)
        if confidence < self.thresholds.option_override_confidence_threshold:
            return FillMapping(field=field_id, label=detected.label, value=values, confidence=confidence)

        context = FieldContext(label=detected.label, predicted_field_id=field_id)
        chosen = self.option_matcher.match_all(detected.options, values, context, current_year)
        if not chosen:
            return None

        return FillMapping(
            field=field_id,
            label=detected.label,
            value=[c.value or c.label for c in chosen],
            confidence=confidence,
            selected=chosen,
        )


__all__ = ["EngineThresholds", "FieldMatchingEngine", "split_multi_value"]
