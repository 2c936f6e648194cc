"""
Per-call result models produced by the engine components.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .fields import OptionCandidate


class PreprocessedLabel(BaseModel):
    """Label with instructional noise removed."""
    cleaned: str
    has_na_instruction: bool = False

    model_config = {"frozen": True}


class ClassificationResult(BaseModel):
    """
    Classifier output for one label.

    Confidence is comparable across calls but is not a calibrated probability.
    """
    predicted_field: Optional[str] = Field(
        default=None, description="Predicted FieldId, None when no token was recognized"
    )
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    model_config = {"frozen": True}


class ModelStats(BaseModel):
    """Size summary of a trained classifier."""
    vocabulary_size: int
    classes: int
    total_documents: int
    class_names: List[str]


class FieldMatch(BaseModel):
    """Single-field match with its resolved profile value."""
    field: str
    value: str
    confidence: float = Field(ge=0.0, le=1.0)


class FillMapping(BaseModel):
    """
    Fill instruction for one detected form field.

    ``selected`` holds the chosen option candidates for closed-choice fields
    so the filling collaborator gets the handles back; it is empty for free
    text and for raw-value fills.
    """
    field: str = Field(description="FieldId the label resolved to")
    label: str = Field(description="Original label of the form field")
    value: Union[str, List[str]]
    confidence: float = Field(ge=0.0, le=1.0)
    selected: List[OptionCandidate] = Field(default_factory=list, exclude=True)
