"""
Bag-of-words naive Bayes label classifier.

Maps a cleaned form label to the FieldId it most likely refers to.

Training (once, at construction):
- Each example label is preprocessed and tokenized; a document contributes
  each distinct token once.
- Per class: document count and per-token document frequency.
- Vocabulary: union of all tokens.

Inference:
    score(c) = log P(c) + sum over recognized query tokens of
               log((count_c(t) + a) / (total_c + a * |V|))

with Lidstone smoothing a (settings.classifier_smoothing_alpha; a = 1 is
Laplace). A small a keeps rare but decisive tokens sharp.

Ties are broken by training corpus order: the class inserted first wins.
Confidence is the softmax weight of the winning class over all classes, so a
label that several classes explain equally well scores low.

The trained model is immutable; one instance can be shared by any number of
concurrent callers.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from ..config import settings
from ..models.results import ClassificationResult, ModelStats
from ..models.training import TrainingExample
from ..text.normalizer import tokenize
from ..text.preprocessor import preprocess
from ..version import CLASSIFIER_VERSION, CORPUS_VERSION
from .corpus import load_training_corpus


logger = structlog.get_logger(__name__)


class MalformedTrainingCorpusError(ValueError):
    """Raised when a classifier cannot be built from the given examples."""


# ============================================================================
# MODEL PARTS
# ============================================================================

@dataclass(frozen=True)
class ClassModel:
    """Per-FieldId statistics derived from training."""
    field_id: str
    document_count: int
    token_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        return sum(self.token_counts.values())


@dataclass(frozen=True)
class SelfConsistencyReport:
    """Outcome of classifying every training label with its own model."""
    total: int
    passed: int
    failures: List[Tuple[str, str, Optional[str]]]  # (label, expected, predicted)

    @property
    def pass_rate(self) -> float:
        return self.passed / self.total if self.total else 0.0


def label_tokens(label: str) -> List[str]:
    """Distinct tokens of a label after preprocessing, in first-seen order."""
    return list(dict.fromkeys(tokenize(preprocess(label).cleaned)))


# ============================================================================
# CLASSIFIER
# ============================================================================

class LabelClassifier:
    """
    Multinomial-style naive Bayes over label tokens.

    Build with ``LabelClassifier.train(examples)``; the constructor takes the
    already computed arrays and is not meant to be called directly.
    """

    def __init__(
        self,
        classes: List[str],
        vocabulary: Dict[str, int],
        doc_counts: np.ndarray,
        token_counts: np.ndarray,
        smoothing: Optional[float] = None,
    ):
        self.classes = classes
        self.vocabulary = vocabulary
        self._doc_counts = doc_counts
        self._token_counts = token_counts
        self.smoothing = settings.classifier_smoothing_alpha if smoothing is None else smoothing
        if self.smoothing <= 0:
            raise MalformedTrainingCorpusError("Smoothing must be positive")

        vocab_size = len(vocabulary)
        class_totals = token_counts.sum(axis=1)

        self._log_prior = np.log(doc_counts / doc_counts.sum())
        self._log_likelihood = np.log(token_counts + self.smoothing) - np.log(
            class_totals + self.smoothing * vocab_size
        )[:, np.newaxis]

        for array in (self._doc_counts, self._token_counts, self._log_prior, self._log_likelihood):
            array.flags.writeable = False

        self.logger = logger.bind(component="label_classifier")

    @classmethod
    def train(
        cls,
        examples: Sequence[TrainingExample],
        smoothing: Optional[float] = None,
    ) -> "LabelClassifier":
        """
        Train a classifier from labelled examples.

        Args:
            examples: Training examples; duplicates reinforce the prior
            smoothing: Lidstone pseudo-count; defaults to
                settings.classifier_smoothing_alpha

        Returns:
            Trained, immutable LabelClassifier

        Raises:
            MalformedTrainingCorpusError: If the corpus is empty or no
                example yields a single token, or smoothing is not positive
        """
        if not examples:
            raise MalformedTrainingCorpusError("Training corpus is empty")

        classes: List[str] = []
        class_index: Dict[str, int] = {}
        vocabulary: Dict[str, int] = {}
        documents: List[Tuple[int, List[int]]] = []

        for example in examples:
            if example.target not in class_index:
                class_index[example.target] = len(classes)
                classes.append(example.target)

            token_ids = []
            for token in label_tokens(example.label):
                if token not in vocabulary:
                    vocabulary[token] = len(vocabulary)
                token_ids.append(vocabulary[token])
            documents.append((class_index[example.target], token_ids))

        if not vocabulary:
            raise MalformedTrainingCorpusError(
                "Training corpus labels produced no tokens"
            )

        doc_counts = np.zeros(len(classes), dtype=np.float64)
        token_counts = np.zeros((len(classes), len(vocabulary)), dtype=np.float64)
        for class_id, token_ids in documents:
            doc_counts[class_id] += 1
            token_counts[class_id, token_ids] += 1

        logger.info(
            "classifier_trained",
            documents=len(documents),
            classes=len(classes),
            vocabulary_size=len(vocabulary),
            classifier_version=CLASSIFIER_VERSION,
        )

        return cls(classes, vocabulary, doc_counts, token_counts, smoothing)

    def scores(self, cleaned_label: str) -> Optional[np.ndarray]:
        """
        Log score per class, in class order.

        Args:
            cleaned_label: Label already passed through preprocess()

        Returns:
            Array of log scores, or None when no token is in the vocabulary
        """
        token_ids = [
            self.vocabulary[t]
            for t in dict.fromkeys(tokenize(cleaned_label))
            if t in self.vocabulary
        ]
        if not token_ids:
            return None
        return self._log_prior + self._log_likelihood[:, token_ids].sum(axis=1)

    def predict(self, cleaned_label: str) -> ClassificationResult:
        """
        Predict the FieldId for a cleaned label.

        Args:
            cleaned_label: Label already passed through preprocess()

        Returns:
            ClassificationResult; predicted_field is None and confidence 0
            when the label has no recognized token

        Examples:
            >>> clf = get_default_classifier()
            >>> clf.predict("Year of graduation").predicted_field
            'yearOfGraduation'
        """
        class_scores = self.scores(cleaned_label)
        if class_scores is None:
            self.logger.debug("no_recognized_tokens", label=cleaned_label)
            return ClassificationResult(predicted_field=None, confidence=0.0)

        # argmax returns the first maximum: corpus order breaks ties
        best = int(np.argmax(class_scores))
        weights = np.exp(class_scores - class_scores[best])
        confidence = float(weights[best] / weights.sum())

        return ClassificationResult(
            predicted_field=self.classes[best],
            confidence=float(np.clip(confidence, 0.0, 1.0)),
        )

    def class_model(self, field_id: str) -> Optional[ClassModel]:
        """Training statistics of one class, or None if unknown."""
        if field_id not in self.classes:
            return None
        row = self.classes.index(field_id)
        tokens = list(self.vocabulary)
        counts = {
            tokens[i]: int(c) for i, c in enumerate(self._token_counts[row]) if c > 0
        }
        return ClassModel(
            field_id=field_id,
            document_count=int(self._doc_counts[row]),
            token_counts=counts,
        )

    def get_model_stats(self) -> ModelStats:
        """
        Model size summary.

        Returns:
            ModelStats with vocabulary size, class count, document count and
            sorted class names
        """
        return ModelStats(
            vocabulary_size=len(self.vocabulary),
            classes=len(self.classes),
            total_documents=int(self._doc_counts.sum()),
            class_names=sorted(self.classes),
        )


# ============================================================================
# SELF-CONSISTENCY
# ============================================================================

def evaluate_self_consistency(
    classifier: LabelClassifier, examples: Sequence[TrainingExample]
) -> SelfConsistencyReport:
    """
    Classify every example's cleaned label and compare with its target.

    Args:
        classifier: Trained classifier
        examples: Labelled examples (normally the training corpus)

    Returns:
        SelfConsistencyReport with pass count and failing examples
    """
    failures = []
    for example in examples:
        result = classifier.predict(preprocess(example.label).cleaned)
        if result.predicted_field != example.target:
            failures.append((example.label, example.target, result.predicted_field))

    report = SelfConsistencyReport(
        total=len(examples),
        passed=len(examples) - len(failures),
        failures=failures,
    )

    logger.info(
        "self_consistency_evaluated",
        total=report.total,
        passed=report.passed,
        pass_rate=round(report.pass_rate, 4),
        corpus_version=CORPUS_VERSION,
    )
    return report


# ============================================================================
# SHARED INSTANCE
# ============================================================================

_default_classifier: Optional[LabelClassifier] = None


def get_default_classifier() -> LabelClassifier:
    """
    Get or build the classifier trained on the bundled corpus (singleton).

    Returns:
        Shared LabelClassifier instance
    """
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = LabelClassifier.train(load_training_corpus())
    return _default_classifier
