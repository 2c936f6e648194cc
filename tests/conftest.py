"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- The trained classifier (built once per session)
- Sample profile snapshots and custom fields
- Mapping cache storage backends
- Settings with safe defaults
"""

import copy
from datetime import datetime, timezone

import pytest

from field_matcher.cache.mapping_cache import MappingCache
from field_matcher.cache.storage import InMemoryKeyValueStore
from field_matcher.classification.classifier import LabelClassifier
from field_matcher.classification.corpus import load_training_corpus
from field_matcher.config import Settings
from fixtures.profiles import EMPTY_PROFILE, SAMPLE_CUSTOM_FIELDS, SAMPLE_PROFILE


FIXED_NOW = datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def classifier() -> LabelClassifier:
    """
    Classifier trained on the bundled corpus.

    Session scoped: the trained model is immutable.
    """
    return LabelClassifier.train(load_training_corpus())


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="INFO",
        log_json=False,  # Easier to read in tests
        cache_file_path="unused-in-tests.json",
    )


@pytest.fixture
def sample_profile() -> dict:
    """Deep copy of the sample profile, safe to mutate in a test."""
    return copy.deepcopy(SAMPLE_PROFILE)


@pytest.fixture
def sample_custom_fields() -> dict:
    """Deep copy of the sample custom fields."""
    return copy.deepcopy(SAMPLE_CUSTOM_FIELDS)


@pytest.fixture
def empty_profile() -> dict:
    """Profile with empty sections."""
    return copy.deepcopy(EMPTY_PROFILE)


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Empty in-memory key/value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def fixed_clock():
    """Clock returning FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def mapping_cache(memory_store, fixed_clock) -> MappingCache:
    """Mapping cache over an in-memory store with a fixed clock."""
    return MappingCache(
        memory_store,
        storage_key="fieldMappingCache",
        retention_days=30,
        clock=fixed_clock,
    )
