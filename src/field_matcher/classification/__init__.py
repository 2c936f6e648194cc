"""
Label classification package.

Main components:
- corpus: bundled labelled form captions, grouped by FieldId
- classifier: bag-of-words naive Bayes trained on the corpus
"""

from .classifier import (
    ClassModel,
    LabelClassifier,
    MalformedTrainingCorpusError,
    SelfConsistencyReport,
    evaluate_self_consistency,
    get_default_classifier,
    label_tokens,
)
from .corpus import CORPUS_LABELS, load_training_corpus

__all__ = [
    "ClassModel",
    "LabelClassifier",
    "MalformedTrainingCorpusError",
    "SelfConsistencyReport",
    "evaluate_self_consistency",
    "get_default_classifier",
    "label_tokens",
    "CORPUS_LABELS",
    "load_training_corpus",
]
