# Label text handling: normalization, tokenization, preprocessing

from .normalizer import FILLER_PREFIXES, STOPWORDS, normalize, tokenize, words
from .preprocessor import (
    CLEANING_PATTERNS,
    NA_PATTERNS,
    clean_label,
    detect_na_instruction,
    preprocess,
)

__all__ = [
    "normalize",
    "tokenize",
    "words",
    "FILLER_PREFIXES",
    "STOPWORDS",
    "preprocess",
    "clean_label",
    "detect_na_instruction",
    "NA_PATTERNS",
    "CLEANING_PATTERNS",
]
