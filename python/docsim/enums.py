"""Enums for docsim API."""

from enum import Enum


class SimilarityMethod(str, Enum):
    """Available text similarity methods.

    This enum provides type-safe method selection for comparisons.
    String values are accepted anywhere a method is expected.

    Example:
        >>> from docsim import SimilarityMethod, compare
        >>> matches = compare(
        ...     "The quick brown fox",
        ...     ["The quick brown fox jumps", "Something else"],
        ...     method=SimilarityMethod.JACCARD,
        ...     threshold=50.0,
        ... )
    """

    JACCARD = "jaccard"
    """Word-set overlap (lowercased whitespace tokens)"""

    NGRAM = "ngram"
    """Character trigram set overlap on normalized text"""

    LEVENSHTEIN = "levenshtein"
    """Exact edit distance converted to a percentage"""

    HYBRID = "hybrid"
    """Jaccard gate, then Levenshtein for small texts or trigrams for large ones"""


class ExecutorKind(str, Enum):
    """How :func:`docsim.batch.compare` distributes work."""

    PROCESS = "process"
    THREAD = "thread"
    SEQUENTIAL = "sequential"


__all__ = ["SimilarityMethod", "ExecutorKind"]
