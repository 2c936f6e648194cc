"""
Label normalization and tokenization.

Provides the comparison form used by every matcher:
- normalize(): lowercase, keep only [a-z0-9]; used for equality checks
- tokenize(): word tokens for the classifier (filler words dropped,
  label synonyms appended)
- words(): plain word split for option word-overlap scoring
"""

import re
from typing import Any, List, Optional

from .synonyms import expand_synonyms


_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# Leading instruction words that never carry meaning in a label
# ("Please enter your name" -> "name")
FILLER_PREFIXES = (
    "your",
    "enter",
    "please",
    "provide",
    "input",
    "fill",
    "write",
    "type",
    "select",
    "choose",
)

# Function words dropped anywhere in the label.
# "number"/"no" are shared by phone, roll, PRN, Aadhaar, PAN and house labels
# and would otherwise pull every "... Number" label towards the largest class.
STOPWORDS = frozenset(
    {
        "a",
        "an",
        "and",
        "any",
        "as",
        "for",
        "in",
        "is",
        "of",
        "on",
        "or",
        "per",
        "the",
        "to",
        "your",
        "number",
        "no",
    }
)


def normalize(text: Optional[Any]) -> str:
    """
    Canonical comparison form of a label or option text.

    Idempotent: normalize(normalize(x)) == normalize(x).

    Args:
        text: Any text; None is treated as empty

    Returns:
        Lowercase string containing only [a-z0-9]

    Examples:
        >>> normalize("  E&TC Engineering ")
        'etcengineering'
        >>> normalize(None)
        ''
    """
    if text is None:
        return ""
    return _NON_ALNUM.sub("", str(text).lower()).strip()


def words(text: Optional[Any], min_length: int = 1) -> List[str]:
    """
    Split text into lowercase alphanumeric words.

    Args:
        text: Input text; None is treated as empty
        min_length: Drop words shorter than this

    Returns:
        Words in order of appearance (duplicates kept)

    Examples:
        >>> words("Pimpri Chinchwad College of Engineering", min_length=3)
        ['pimpri', 'chinchwad', 'college', 'engineering']
    """
    if text is None:
        return []
    return [w for w in _NON_ALNUM.sub(" ", str(text).lower()).split() if len(w) >= min_length]


def tokenize(text: Optional[Any]) -> List[str]:
    """
    Tokenize a label for the classifier.

    Leading filler words are stripped repeatedly, stopwords are dropped and
    the canonical tokens of listed synonyms are appended.

    Args:
        text: Label text

    Returns:
        Token list without duplicates (may be empty)

    Examples:
        >>> tokenize("Please Enter Your Mobile Number")
        ['mobile', 'phone']
        >>> tokenize("Year of Graduation*")
        ['year', 'graduation']
    """
    tokens = words(text)
    while tokens and tokens[0] in FILLER_PREFIXES:
        tokens = tokens[1:]
    return expand_synonyms(t for t in tokens if t not in STOPWORDS)
