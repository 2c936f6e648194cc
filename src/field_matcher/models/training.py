"""
Training example model for the label classifier.
"""

from pydantic import BaseModel, Field


class TrainingExample(BaseModel):
    """
    One labelled form caption.

    Many labels map to the same target; duplicates reinforce the class prior.
    """
    label: str = Field(..., description="Form label as written on real forms")
    target: str = Field(..., min_length=1, description="FieldId the label refers to")

    model_config = {"frozen": True}
