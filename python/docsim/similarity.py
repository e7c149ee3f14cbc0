"""Similarity scorers for docsim.

All scores are percentages in ``[0, 100]`` and every length is measured in
characters (Python ``str`` code points), both in the scorers and in the
length pre-filter.

Scorers:
    - ``jaccard_similarity``: word-set overlap, linear in the token count
    - ``ngram_similarity``: character n-gram set overlap, linear in length
    - ``levenshtein_similarity``: exact edit distance, quadratic time,
      linear memory, optional early abort
    - ``hybrid_similarity``: Jaccard gate, then Levenshtein for small texts
      or trigrams for large ones

Example usage:
    >>> from docsim.similarity import levenshtein, jaccard_similarity
    >>> levenshtein("kitten", "sitting")
    3
    >>> jaccard_similarity("hello world", "hello there world")
    66.66666666666666
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from docsim._utils import ensure_text, normalize_method
from docsim.enums import SimilarityMethod
from docsim.errors import ValidationError

DEFAULT_NGRAM_SIZE = 3


@dataclass(frozen=True)
class HybridPolicy:
    """Tuning knobs for :func:`hybrid_similarity`.

    Attributes:
        jaccard_floor: Jaccard scores below this are returned as-is. Also the
            value returned when the edit distance exceeds its budget.
        small_text_limit: Both texts must be shorter than this (in characters)
            for the exact edit distance to be computed.
        budget_fraction: Fraction of the longer length allowed as edit
            distance before the computation aborts.
    """

    jaccard_floor: float = 20.0
    small_text_limit: int = 1000
    budget_fraction: float = 0.8

    def __post_init__(self) -> None:
        if not 0.0 <= self.jaccard_floor <= 100.0:
            raise ValidationError(f"jaccard_floor must be between 0 and 100, got {self.jaccard_floor}")
        if self.small_text_limit < 0:
            raise ValidationError(f"small_text_limit must be >= 0, got {self.small_text_limit}")
        if not 0.0 <= self.budget_fraction <= 1.0:
            raise ValidationError(f"budget_fraction must be between 0 and 1, got {self.budget_fraction}")


DEFAULT_POLICY = HybridPolicy()


def pre_filter_by_length(source: str, target: str, threshold: float) -> bool:
    """Cheap length gate run before any scorer.

    The relative length gap bounds how similar two texts can be, so pairs
    whose gap alone exceeds ``100 - threshold`` percent are rejected.

    Returns:
        True if the pair should be scored, False if it can be skipped.
    """
    source_len = len(source)
    target_len = len(target)
    max_len = max(source_len, target_len)
    if max_len == 0:
        return True
    difference = abs(source_len - target_len)
    # (difference / max_len) * 100 <= 100 - threshold, cross-multiplied so
    # integer thresholds compare exactly
    return difference * 100.0 <= (100.0 - threshold) * max_len


def _overlap_percentage(left: set, right: set) -> float:
    union_size = len(left | right)
    if union_size == 0:
        return 0.0
    return (len(left & right) / union_size) * 100.0


def jaccard_similarity(source: str, target: str) -> float:
    """Word-level Jaccard similarity.

    Both texts are split on whitespace and lowercased; duplicate words
    collapse. Two texts without any words score 0.0.

    Example:
        >>> jaccard_similarity("Hello World", "world hello")
        100.0
    """
    ensure_text(source, "source")
    ensure_text(target, "target")
    source_words = {word.lower() for word in source.split()}
    target_words = {word.lower() for word in target.split()}
    return _overlap_percentage(source_words, target_words)


def _normalize_for_ngrams(text: str) -> str:
    return " ".join(text.lower().split())


def extract_ngrams(text: str, n: int = DEFAULT_NGRAM_SIZE) -> set[str]:
    """Return the set of character n-grams of the normalized text.

    Normalization lowercases and collapses whitespace runs into single
    spaces. Texts shorter than ``n`` after normalization yield an empty set.

    Raises:
        ValidationError: If n is smaller than 1.

    Example:
        >>> sorted(extract_ngrams("Abc  D"))
        ['abc', 'bc ', 'c d']
    """
    if n < 1:
        raise ValidationError(f"n must be >= 1, got {n}")
    ensure_text(text, "text")
    cleaned = _normalize_for_ngrams(text)
    if len(cleaned) < n:
        return set()
    return {cleaned[i : i + n] for i in range(len(cleaned) - n + 1)}


def ngram_similarity(source: str, target: str, n: int = DEFAULT_NGRAM_SIZE) -> float:
    """Jaccard overlap of character n-gram sets (trigrams by default)."""
    return _overlap_percentage(extract_ngrams(source, n), extract_ngrams(target, n))


def levenshtein(source: str, target: str, max_distance: Optional[int] = None) -> int:
    """Levenshtein edit distance between two strings.

    Only two rows of the DP table are kept, each as wide as the shorter
    string plus one, so memory is linear in the shorter length.

    Args:
        source: First string.
        target: Second string.
        max_distance: Optional distance budget. When every cell of a row
            exceeds it the computation stops early.

    Returns:
        The edit distance, or ``max_distance + 1`` when a budget was given
        and the distance exceeds it.

    Raises:
        ValidationError: If max_distance is negative.

    Example:
        >>> levenshtein("kitten", "sitting")
        3
        >>> levenshtein("abcdef", "ghijkl", max_distance=3)
        4
    """
    if max_distance is not None and max_distance < 0:
        raise ValidationError(f"max_distance must be >= 0, got {max_distance}")
    ensure_text(source, "source")
    ensure_text(target, "target")

    if not source or not target:
        distance = len(source) + len(target)
        if max_distance is not None and distance > max_distance:
            return max_distance + 1
        return distance

    if len(source) < len(target):
        shorter, longer = source, target
    else:
        shorter, longer = target, source

    previous = list(range(len(shorter) + 1))
    current = [0] * (len(shorter) + 1)

    for i, long_char in enumerate(longer, 1):
        current[0] = i
        row_min = i
        for j, short_char in enumerate(shorter, 1):
            cost = 0 if long_char == short_char else 1
            value = min(current[j - 1] + 1, previous[j] + 1, previous[j - 1] + cost)
            current[j] = value
            if value < row_min:
                row_min = value

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        previous, current = current, previous

    distance = previous[-1]
    if max_distance is not None and distance > max_distance:
        return max_distance + 1
    return distance


def levenshtein_bounded(source: str, target: str, max_distance: int) -> Optional[int]:
    """Like :func:`levenshtein` but returns None when the budget is exceeded."""
    distance = levenshtein(source, target, max_distance=max_distance)
    if distance > max_distance:
        return None
    return distance


def _distance_to_percentage(distance: int, max_len: int) -> float:
    return ((max_len - distance) / max_len) * 100.0


def levenshtein_similarity(source: str, target: str, max_distance: Optional[int] = None) -> float:
    """Edit distance expressed as a percentage of the longer length.

    Two empty strings score 100.0. When ``max_distance`` is given and the
    distance exceeds it, the score is 0.0.

    Example:
        >>> levenshtein_similarity("hello", "hallo")
        80.0
    """
    max_len = max(len(source), len(target))
    if max_len == 0:
        return 100.0

    distance = levenshtein(source, target, max_distance=max_distance)
    if max_distance is not None and distance > max_distance:
        return 0.0

    return _distance_to_percentage(distance, max_len)


def hybrid_similarity(source: str, target: str, policy: Optional[HybridPolicy] = None) -> float:
    """Progressive similarity: cheap Jaccard first, exact or n-gram after.

    1. Jaccard below ``policy.jaccard_floor`` is returned immediately.
    2. If both texts are shorter than ``policy.small_text_limit``, the edit
       distance is computed with a budget of
       ``floor(policy.budget_fraction * max_len)``. Exceeding the budget
       yields ``policy.jaccard_floor``; otherwise the exact percentage.
    3. Larger texts use trigram similarity.

    Args:
        source: First text.
        target: Second text.
        policy: Optional HybridPolicy; defaults to ``HybridPolicy()``.

    Returns:
        Similarity percentage between 0 and 100.
    """
    policy = policy or DEFAULT_POLICY

    jaccard_score = jaccard_similarity(source, target)
    if jaccard_score < policy.jaccard_floor:
        return jaccard_score

    if len(source) < policy.small_text_limit and len(target) < policy.small_text_limit:
        max_len = max(len(source), len(target))
        budget = math.floor(max_len * policy.budget_fraction)
        distance = levenshtein(source, target, max_distance=budget)
        if distance > budget:
            return policy.jaccard_floor
        return _distance_to_percentage(distance, max_len)

    return ngram_similarity(source, target, DEFAULT_NGRAM_SIZE)


def calculate_similarity(
    source: str,
    target: str,
    method: Union[str, SimilarityMethod] = SimilarityMethod.HYBRID,
    policy: Optional[HybridPolicy] = None,
) -> float:
    """Score two texts with the requested method.

    Unknown method names are scored with the hybrid method.

    Example:
        >>> calculate_similarity("abc", "abd", method="levenshtein")
        66.66666666666666
    """
    method = normalize_method(method)
    if method is SimilarityMethod.JACCARD:
        return jaccard_similarity(source, target)
    if method is SimilarityMethod.NGRAM:
        return ngram_similarity(source, target, DEFAULT_NGRAM_SIZE)
    if method is SimilarityMethod.LEVENSHTEIN:
        return levenshtein_similarity(source, target)
    return hybrid_similarity(source, target, policy)


__all__ = [
    "HybridPolicy",
    "DEFAULT_POLICY",
    "DEFAULT_NGRAM_SIZE",
    "pre_filter_by_length",
    "jaccard_similarity",
    "extract_ngrams",
    "ngram_similarity",
    "levenshtein",
    "levenshtein_bounded",
    "levenshtein_similarity",
    "hybrid_similarity",
    "calculate_similarity",
]
