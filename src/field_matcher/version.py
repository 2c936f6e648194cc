"""
Version constants for the field matching engine.

Every data table the engine consults (training corpus, NA patterns, synonym
and institution tables) carries a version so a fill decision can be traced
back to the exact tables that produced it.
"""

from .models.engine_version import EngineVersion

# Package version
ENGINE_VERSION = "1.0.0"

# Component versions (update these when implementations or tables change)
NORMALIZER_VERSION = "normalizer-1.0.0"
PREPROCESSOR_VERSION = "label-preprocessor-1.1.0"
CORPUS_VERSION = "corpus-in-college-forms-2.1"
LABEL_SYNONYM_VERSION = "label-synonyms-in-1.0"
CLASSIFIER_VERSION = "bow-naive-bayes-1.1.0"
RESOLVER_VERSION = "profile-resolver-1.0.0"
SYNONYM_TABLE_VERSION = "synonyms-in-engineering-1.2"
OPTION_MATCHER_VERSION = "option-cascade-1.1.0"
CACHE_FORMAT_VERSION = "field-mapping-cache-1"


def get_current_engine_version() -> EngineVersion:
    """
    Get current engine version configuration.

    Returns:
        EngineVersion instance with current versions
    """
    return EngineVersion(
        engine_version=ENGINE_VERSION,
        normalizer_version=NORMALIZER_VERSION,
        preprocessor_version=PREPROCESSOR_VERSION,
        corpus_version=CORPUS_VERSION,
        label_synonym_version=LABEL_SYNONYM_VERSION,
        classifier_version=CLASSIFIER_VERSION,
        resolver_version=RESOLVER_VERSION,
        synonym_table_version=SYNONYM_TABLE_VERSION,
        option_matcher_version=OPTION_MATCHER_VERSION,
        cache_format_version=CACHE_FORMAT_VERSION,
    )
