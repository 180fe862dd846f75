#!/usr/bin/env python3
"""
Fuzzy Text Matcher - Approximate matching for skill names and categories.

Three tools:
- partial_match(): substring containment between two skill names
- matches_category(): normalize -> synonym expansion -> tokenize -> stem
  pipeline for reconciling free text against taxonomy categories
- similarity() / fuzzy_lookup(): edit-distance percentage for validating a
  typed skill name against the known skill list
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from rapidfuzz import fuzz

logger = logging.getLogger(__name__)

# Both names must be longer than this for substring containment to count.
MIN_PARTIAL_MATCH_LENGTH = 3

# Edit-distance acceptance threshold (percent).
FUZZY_THRESHOLD = 80.0

# Longest suffix first; a suffix is stripped only if the stem stays longer
# than the suffix itself.
STEM_SUFFIXES: Tuple[str, ...] = tuple(sorted(
    ("ers", "er", "ors", "or", "ing", "ments", "ment", "ions", "ion",
     "ists", "ist", "als", "al", "s"),
    key=len,
    reverse=True,
))

SYNONYMS: Dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "ai": "machine learning",
    "ml": "machine learning",
    "k8s": "kubernetes",
    "golang": "go",
    "reactjs": "react",
    "react.js": "react",
    "vuejs": "vue",
    "vue.js": "vue",
    "nodejs": "node.js",
    "node": "node.js",
    "ui": "user interface",
    "ux": "user experience",
    "seo": "search engine optimization",
    "smm": "social media marketing",
    "va": "virtual assistant",
    "qa": "quality assurance",
    "db": "database",
    "postgres": "postgresql",
    "csharp": "c#",
    "cpp": "c++",
}

_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9+.#]+")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lower-case, replace characters outside [a-z0-9+.#] with spaces, collapse whitespace."""
    if not text:
        return ""
    lowered = _NON_TOKEN_CHARS.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", lowered).strip()


def tokenize(text: str) -> List[str]:
    # Trailing dots ("skills.") are punctuation, not part of "node.js".
    return [t.strip(".") for t in normalize(text).split(" ") if t.strip(".")]


def stem(token: str) -> str:
    """Strip the longest common suffix whose removal leaves a stem longer than the suffix."""
    for suffix in STEM_SUFFIXES:
        if token.endswith(suffix) and len(token) - len(suffix) > len(suffix):
            return token[:-len(suffix)]
    return token


def expand_synonyms(text: str) -> str:
    """Replace known abbreviations with their canonical phrase."""
    normalized = normalize(text)
    if normalized in SYNONYMS:
        return SYNONYMS[normalized]
    return " ".join(SYNONYMS.get(token, token) for token in tokenize(normalized))


def partial_match(a: str, b: str) -> bool:
    """True if one name contains the other and both are long enough to mean something."""
    left = a.strip().lower()
    right = b.strip().lower()
    if len(left) <= MIN_PARTIAL_MATCH_LENGTH or len(right) <= MIN_PARTIAL_MATCH_LENGTH:
        return False
    return left in right or right in left


def stems(text: str) -> List[str]:
    return [stem(token) for token in tokenize(text)]


def matches_category(query: str, category: str) -> bool:
    """
    Decide whether free text refers to a taxonomy category.

    Synonyms are expanded first, then exact normalized equality is tried,
    then stemmed token overlap must reach min(2, number of category tokens).
    """
    query_text = expand_synonyms(query)
    category_text = expand_synonyms(category)
    if not query_text or not category_text:
        return False
    if query_text == category_text:
        return True

    category_stems = set(stems(category_text))
    overlap = len(set(stems(query_text)) & category_stems)
    needed = min(2, len(category_stems))
    return needed > 0 and overlap >= needed


def reconcile_category(query: str, categories: Iterable[str]) -> Optional[str]:
    """Return the first category the query reconciles to, or None."""
    for category in categories:
        if matches_category(query, category):
            return category
    return None


def similarity(a: str, b: str) -> float:
    """Edit-distance similarity percentage (0-100), case-insensitive."""
    return float(fuzz.ratio(a.strip().lower(), b.strip().lower()))


def fuzzy_lookup(
    value: str,
    known: Iterable[str],
    threshold: float = FUZZY_THRESHOLD
) -> Tuple[Optional[str], int]:
    """
    Find the closest known skill name.

    Returns (match, confidence). An exact case-insensitive hit has confidence
    100; otherwise the best edit-distance candidate is returned only if it
    reaches ``threshold``, and (None, best_confidence) is returned if not.
    """
    value = value.strip()
    if not value:
        return None, 0

    names = list(known)
    lowered = value.lower()
    for name in names:
        if name.strip().lower() == lowered:
            return name, 100

    best_name = None
    best_score = 0.0
    for name in names:
        score = similarity(value, name)
        if score > best_score:
            best_score = score
            best_name = name

    if best_score >= threshold:
        logger.debug(f"Fuzzy matched '{value}' -> '{best_name}' ({best_score:.0f}%)")
        return best_name, round(best_score)
    return None, round(best_score)
