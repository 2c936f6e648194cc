"""
Static, versioned data tables used by the option matcher.

The tables are region-specific (Indian engineering colleges) and are kept
apart from the cascade logic so they can be swapped or extended on their own.
Bump SYNONYM_TABLE_VERSION whenever an entry changes.

Phrase matching rule (see ``phrase_in``):
- phrases whose normalized form is 5+ characters match by normalized
  containment ("computerscience" in "bteccomputerscienceengg")
- shorter phrases must match whole words ("it" in "B.Tech IT", never in "Kit")
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..text.normalizer import normalize, words
from ..version import SYNONYM_TABLE_VERSION

CONTAINMENT_MIN_PHRASE_LENGTH = 5


# ============================================================================
# ORDINALS
# ============================================================================

ORDINAL_WORDS = (
    "first",
    "second",
    "third",
    "fourth",
    "fifth",
    "sixth",
    "seventh",
    "eighth",
    "ninth",
    "tenth",
)


def ordinal_suffix(n: int) -> str:
    """
    Numeric ordinal form.

    Examples:
        >>> [ordinal_suffix(n) for n in (1, 2, 3, 4, 11)]
        ['1st', '2nd', '3rd', '4th', '11th']
    """
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def ordinal_forms(n: int) -> Tuple[str, ...]:
    """Numeric and spelled ordinal forms of n ("4th", "fourth")."""
    forms = [ordinal_suffix(n)]
    if 1 <= n <= len(ORDINAL_WORDS):
        forms.append(ORDINAL_WORDS[n - 1])
    return tuple(forms)


def parse_ordinal(text: str, maximum: int) -> Optional[int]:
    """
    Number expressed by a bare numeral or ordinal ("4", "4th", "fourth").

    Returns:
        The number when 1 <= n <= maximum, else None
    """
    token = normalize(text)
    if not token:
        return None
    for n in range(1, maximum + 1):
        if token == str(n) or token in ordinal_forms(n):
            return n
    return None


# ============================================================================
# GENERIC SYNONYM GROUPS (cascade tier 4)
# ============================================================================

SYNONYM_GROUPS: Dict[str, Tuple[str, ...]] = {
    # Gender
    "male": ("male", "m", "man"),
    "female": ("female", "f", "fem", "woman"),
    "other": ("other", "o", "prefer not to say", "transgender", "non binary"),
    # Engineering branches
    "computerscience": (
        "computer science",
        "cs",
        "cse",
        "comp",
        "computer engineering",
        "computer science and engineering",
    ),
    "informationtechnology": ("information technology", "it"),
    "civilengineering": ("civil", "ce", "civil engineering"),
    "mechanicalengineering": ("mechanical", "mech", "me", "mechanical engineering"),
    "electricalengineering": ("electrical", "ee", "eee", "electrical engineering"),
    "electronicsengineering": (
        "electronics",
        "ece",
        "ec",
        "etc",
        "e&tc",
        "entc",
        "electronics and telecommunication",
        "electronics and communication",
    ),
    "chemicalengineering": ("chemical", "che", "ch", "chemical engineering"),
    # Institution naming
    "institute": ("institute", "inst", "iit", "nit", "iim"),
    "university": ("university", "univ", "uni"),
    "technology": ("technology", "tech"),
}


# ============================================================================
# CATEGORY TABLES (pre-transforms keyed by FieldId)
# ============================================================================

CATEGORY_TABLES: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "branch": {
        "computerscience": SYNONYM_GROUPS["computerscience"],
        "informationtechnology": SYNONYM_GROUPS["informationtechnology"],
        "civil": SYNONYM_GROUPS["civilengineering"],
        "mechanical": SYNONYM_GROUPS["mechanicalengineering"],
        "electronics": SYNONYM_GROUPS["electronicsengineering"],
        "electrical": SYNONYM_GROUPS["electricalengineering"],
        "chemical": SYNONYM_GROUPS["chemicalengineering"],
    },
    "gender": {
        "male": ("male", "m", "man", "boy"),
        "female": ("female", "f", "fem", "woman", "girl"),
        "other": SYNONYM_GROUPS["other"],
    },
    "role": {
        "sales": ("sales", "business development"),
        "itsales": (
            "it sales",
            "itsales",
            "international it sales",
            "business development executive",
        ),
        "intern": ("intern", "internship", "sales intern"),
    },
}


# ============================================================================
# INSTITUTIONS
# ============================================================================

@dataclass(frozen=True)
class InstitutionPattern:
    """Known institution: identifying keywords and its official names."""
    key: str
    keywords: Tuple[str, ...]
    full_names: Tuple[str, ...]

    def full_name_words(self) -> Set[str]:
        return {w for name in self.full_names for w in words(name)}


INSTITUTION_PATTERNS: Tuple[InstitutionPattern, ...] = (
    InstitutionPattern(
        key="pccoe",
        keywords=("pccoe", "pimpri", "chinchwad", "pimpri chinchwad college of engineering"),
        full_names=(
            "Pimpri Chinchwad Education Trust's PCCOE, Pune",
            "Pimpri Chinchwad College of Engineering",
        ),
    ),
    InstitutionPattern(
        key="pccoer",
        keywords=(
            "pccoe&r",
            "pccoer",
            "pimpri",
            "chinchwad",
            "pimpri chinchwad college of engineering and research",
        ),
        full_names=(
            "Pimpri Chinchwad Education Trust's PCCOE&R",
            "Pimpri Chinchwad College of Engineering and Research",
        ),
    ),
    InstitutionPattern(
        key="nmiet",
        keywords=("nmiet", "nutan maharashtra", "pimpri", "chinchwad"),
        full_names=(
            "Pimpri Chinchwad Education Trust's NMIET",
            "Nutan Maharashtra Institute of Engineering and Technology",
        ),
    ),
    InstitutionPattern(
        key="ncer",
        keywords=("ncer", "pimpri", "chinchwad"),
        full_names=("Pimpri Chinchwad Education Trust's NCER",),
    ),
)


# ============================================================================
# PHRASE MATCHING
# ============================================================================

def _contains_word_sequence(haystack: List[str], needle: List[str]) -> bool:
    if not needle or len(needle) > len(haystack):
        return False
    n = len(needle)
    return any(haystack[i : i + n] == needle for i in range(len(haystack) - n + 1))


def phrase_in(phrase: str, text: str) -> bool:
    """
    Whether a table phrase occurs in a text.

    Examples:
        >>> phrase_in("it", "B.Tech IT")
        True
        >>> phrase_in("male", "Female")
        False
        >>> phrase_in("computer science", "ComputerScience Engg")
        True
    """
    norm_phrase = normalize(phrase)
    if not norm_phrase:
        return False
    norm_text = normalize(text)
    if norm_phrase == norm_text:
        return True
    if len(norm_phrase) >= CONTAINMENT_MIN_PHRASE_LENGTH:
        return norm_phrase in norm_text
    return _contains_word_sequence(words(text), words(phrase))


def canonical_keys(text: str, table: Dict[str, Iterable[str]]) -> Set[str]:
    """All table keys with at least one phrase occurring in text."""
    return {key for key, phrases in table.items() if any(phrase_in(p, text) for p in phrases)}


def canonical_key(text: str, table: Dict[str, Iterable[str]]) -> Optional[str]:
    """
    Most specific table key for a text: the key whose longest occurring
    phrase is longest. Ties go to table order.

    Examples:
        >>> canonical_key("Sales Intern", CATEGORY_TABLES["role"])
        'intern'
    """
    best_key = None
    best_length = 0
    for key, phrases in table.items():
        for phrase in phrases:
            length = len(normalize(phrase))
            if length > best_length and phrase_in(phrase, text):
                best_key, best_length = key, length
    return best_key


__all__ = [
    "SYNONYM_TABLE_VERSION",
    "ORDINAL_WORDS",
    "SYNONYM_GROUPS",
    "CATEGORY_TABLES",
    "INSTITUTION_PATTERNS",
    "InstitutionPattern",
    "canonical_key",
    "canonical_keys",
    "ordinal_forms",
    "ordinal_suffix",
    "parse_ordinal",
    "phrase_in",
]
