"""
Detected form field models.

Field discovery is done by an external collaborator; the engine receives one
of the variants below per form control. Each variant carries only the data its
fill strategy needs: free text and date controls carry a label, closed-choice
controls also carry their candidate options.
"""

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator


# ============================================================================
# ENUMS
# ============================================================================

class FieldKind(str, Enum):
    """Form control kinds the engine knows how to fill."""
    TEXT = "text"
    TEXTAREA = "textarea"
    DATE = "date"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    SELECT = "select"


CLOSED_CHOICE_KINDS = frozenset({FieldKind.RADIO, FieldKind.CHECKBOX, FieldKind.SELECT})


# ============================================================================
# OPTIONS
# ============================================================================

class OptionCandidate(BaseModel):
    """
    One selectable option of a radio group, checkbox group or select.

    ``ref`` is an opaque handle owned by the caller (typically a DOM node).
    The engine never inspects it; it only hands the chosen candidate back.
    """
    value: str = Field(default="", description="Submitted value of the option")
    label: str = Field(default="", description="Visible text of the option")
    ref: Any = Field(default=None, exclude=True, repr=False)

    @field_validator("value", "label", mode="before")
    @classmethod
    def coerce_text(cls, v):
        """Option attributes arrive as numbers from some form builders."""
        if v is None:
            return ""
        return str(v)

    def texts(self) -> List[str]:
        """Value and label, skipping empty ones (value first)."""
        return [t for t in (self.value, self.label) if t]


class FieldContext(BaseModel):
    """Label and predicted field id handed to the option matcher."""
    label: str = ""
    predicted_field_id: Optional[str] = None


# ============================================================================
# DETECTED FIELD VARIANTS
# ============================================================================

class FreeTextField(BaseModel):
    """Single-line or multi-line text input."""
    kind: Literal["text", "textarea"] = "text"
    label: str


class DateField(BaseModel):
    """Date control; resolved dates are written as YYYY-MM-DD."""
    kind: Literal["date"] = "date"
    label: str


class SingleChoiceField(BaseModel):
    """Radio group or select: exactly one option is chosen."""
    kind: Literal["radio", "select"] = "select"
    label: str
    options: List[OptionCandidate] = Field(default_factory=list)


class CheckboxField(BaseModel):
    """Checkbox group: every option matching one of the values is chosen."""
    kind: Literal["checkbox"] = "checkbox"
    label: str
    options: List[OptionCandidate] = Field(default_factory=list)


DetectedField = Annotated[
    Union[FreeTextField, DateField, SingleChoiceField, CheckboxField],
    Field(discriminator="kind"),
]

_detected_field_adapter = TypeAdapter(DetectedField)


def parse_detected_field(data: Any) -> Union[FreeTextField, DateField, SingleChoiceField, CheckboxField]:
    """
    Build the matching variant from a plain mapping.

    Args:
        data: Mapping with at least ``label`` and ``kind``

    Returns:
        Detected field variant selected by ``kind``

    Raises:
        pydantic.ValidationError: If ``kind`` is unknown or data is malformed

    Examples:
        >>> parse_detected_field({"label": "Gender", "kind": "radio", "options": []}).kind
        'radio'
    """
    return _detected_field_adapter.validate_python(data)
