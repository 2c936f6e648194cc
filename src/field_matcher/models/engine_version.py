"""
Engine version model.

Same version parameters + same input = same fill decisions.
"""

from pydantic import BaseModel, Field


class EngineVersion(BaseModel):
    """
    Immutable version contract for the matching engine.

    The classifier and every table-driven matcher are deterministic, so two
    engines reporting equal versions produce identical FillMappings.
    """

    engine_version: str = Field(description="Package version", examples=["1.0.0"])

    # Label understanding
    normalizer_version: str = Field(description="Normalizer algorithm version")
    preprocessor_version: str = Field(
        description="NA/qualifier pattern table version", examples=["label-preprocessor-1.1.0"]
    )
    corpus_version: str = Field(
        description="Training corpus version", examples=["corpus-in-college-forms-2.1"]
    )
    label_synonym_version: str = Field(description="Classifier label synonym table version")
    classifier_version: str = Field(description="Classifier algorithm version")

    # Value resolution
    resolver_version: str = Field(description="Profile resolver rules version")
    synonym_table_version: str = Field(
        description="Synonym, category and institution table version"
    )
    option_matcher_version: str = Field(description="Option cascade version")
    cache_format_version: str = Field(description="Serialized cache blob format")

    model_config = {"frozen": True}

    def to_repr(self) -> str:
        """
        Short representation for logging.

        Returns:
            Compact string with the data-table versions.
        """
        return (
            f"Engine-{self.engine_version}-"
            f"{self.corpus_version}-{self.synonym_table_version}"
        )
