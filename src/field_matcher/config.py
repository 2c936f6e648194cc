"""
Engine configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Engine configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Classification
    min_classification_confidence: float = 0.5  # Below this the field is skipped
    self_consistency_min_pass_rate: float = 0.95  # Regression gate for the bundled corpus
    classifier_smoothing_alpha: float = 0.02  # Lidstone; 1.0 is Laplace

    # Option matching
    option_override_confidence_threshold: float = 0.8  # Trust option matcher over raw value
    word_overlap_min_token_length: int = 3
    word_overlap_min_score: int = 4
    containment_min_length: int = 5  # Shorter side of a containment match
    ordinal_max: int = 10  # "1st".."10th", "first".."tenth"

    # Numeric guardrail
    guardrail_long_digit_count: int = 10  # Phone-like values
    guardrail_numeral_digit_count: int = 6  # Any long numeral

    # Year-of-study conversion
    program_length_years: int = 4  # Indian undergraduate engineering degree

    # Mapping cache
    cache_storage_key: str = "fieldMappingCache"
    cache_retention_days: int = 30
    cache_file_path: str = "data/field_mapping_cache.json"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
