# Data models for the field matching engine

from .engine_version import EngineVersion
from .cache import CacheEntry
from .fields import (
    CLOSED_CHOICE_KINDS,
    CheckboxField,
    DateField,
    DetectedField,
    FieldContext,
    FieldKind,
    FreeTextField,
    OptionCandidate,
    SingleChoiceField,
    parse_detected_field,
)
from .results import (
    ClassificationResult,
    FieldMatch,
    FillMapping,
    ModelStats,
    PreprocessedLabel,
)
from .training import TrainingExample

__all__ = [
    "EngineVersion",
    "CacheEntry",
    "CLOSED_CHOICE_KINDS",
    "CheckboxField",
    "DateField",
    "DetectedField",
    "FieldContext",
    "FieldKind",
    "FreeTextField",
    "OptionCandidate",
    "SingleChoiceField",
    "parse_detected_field",
    "ClassificationResult",
    "FieldMatch",
    "FillMapping",
    "ModelStats",
    "PreprocessedLabel",
    "TrainingExample",
]
