"""
Label synonym table for the classifier tokenizer.

A label word listed here also contributes the canonical tokens it stands for,
so "Contact", "Mobile" and "Phone" labels share a ``phone`` token and
"SSC Marks" shares ``tenthpercentage`` with "10th %". Expansion is applied the
same way to training labels and to queries.

Bump LABEL_SYNONYM_VERSION whenever an entry changes: the trained model
depends on it.
"""

from typing import Dict, Iterable, List, Tuple

from ..version import LABEL_SYNONYM_VERSION


LABEL_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    # Institutions
    "college": ("collegename", "universityname"),
    "university": ("universityname", "collegename"),
    "institution": ("collegename", "universityname"),
    "institute": ("collegename", "universityname"),
    # Registration numbers
    "prn": ("prnnumber",),
    "registration": ("prnnumber", "registrationnumber"),
    "reg": ("prnnumber", "registrationnumber"),
    # Scores
    "percent": ("percentage",),
    "marks": ("percentage",),
    "10th": ("tenthpercentage",),
    "tenth": ("tenthpercentage",),
    "ssc": ("tenthpercentage",),
    "12th": ("twelfthpercentage",),
    "twelfth": ("twelfthpercentage",),
    "hsc": ("twelfthpercentage",),
    # Phone
    "mobile": ("phone",),
    "contact": ("phone",),
}

# A "University PRN" label asks for the PRN, not the university
REGISTRATION_MARKERS = frozenset({"prn", "registration", "reg"})
INSTITUTION_TOKENS = frozenset({"collegename", "universityname"})


def expand_synonyms(tokens: Iterable[str]) -> List[str]:
    """
    Append the canonical tokens of every listed word.

    Institution tokens are withheld from labels that mention a registration
    number.

    Args:
        tokens: Label tokens in order

    Returns:
        Tokens followed by their synonyms, without duplicates

    Examples:
        >>> expand_synonyms(["contact"])
        ['contact', 'phone']
        >>> expand_synonyms(["university", "prn"])
        ['university', 'prn', 'prnnumber']
    """
    tokens = list(tokens)
    registration = not REGISTRATION_MARKERS.isdisjoint(tokens)

    expanded = list(tokens)
    for token in tokens:
        for synonym in LABEL_SYNONYMS.get(token, ()):
            if registration and synonym in INSTITUTION_TOKENS:
                continue
            expanded.append(synonym)
    return list(dict.fromkeys(expanded))


__all__ = [
    "LABEL_SYNONYM_VERSION",
    "LABEL_SYNONYMS",
    "expand_synonyms",
]
