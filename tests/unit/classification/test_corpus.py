"""
Unit tests for the bundled training corpus.
"""

import pytest

from field_matcher.classification.corpus import CORPUS_LABELS, load_training_corpus
from field_matcher.models.training import TrainingExample
from field_matcher.profile.resolver import FIELD_PATHS


class TestCorpus:
    """Test corpus structure and maintenance rules."""

    @pytest.mark.unit
    def test_flattened_in_group_order(self):
        """Test examples keep the group order used for tie-breaks."""
        examples = load_training_corpus()

        assert all(isinstance(e, TrainingExample) for e in examples)
        assert examples[0] == TrainingExample(label="Full Name", target="fullName")
        targets = list(dict.fromkeys(e.target for e in examples))
        assert targets == list(CORPUS_LABELS)

    @pytest.mark.unit
    def test_class_sizes_balanced(self):
        """Test every class has between 4 and 10 labels."""
        for field_id, labels in CORPUS_LABELS.items():
            assert 4 <= len(labels) <= 10, field_id

    @pytest.mark.unit
    def test_labels_unique(self):
        """Test no label is listed twice."""
        labels = [label for group in CORPUS_LABELS.values() for label in group]
        assert len(labels) == len(set(labels))

    @pytest.mark.unit
    def test_every_field_resolvable(self):
        """Test every corpus field has a lookup path or a composition rule."""
        assert set(CORPUS_LABELS) - set(FIELD_PATHS) == {"fullName"}
