"""Internal utilities for docsim."""

import math
import numbers
from typing import Union

from loguru import logger

from docsim.enums import SimilarityMethod
from docsim.errors import ValidationError

# Valid method names (lowercase)
VALID_METHODS = frozenset(m.value for m in SimilarityMethod)

DEFAULT_METHOD = SimilarityMethod.HYBRID


def normalize_method(method: Union[str, SimilarityMethod]) -> SimilarityMethod:
    """Convert a method name to a SimilarityMethod.

    Unknown names resolve to ``SimilarityMethod.HYBRID`` rather than failing,
    so callers forwarding user-provided strings always get a usable scorer.

    Args:
        method: Either a SimilarityMethod value or a string method name
            (case-insensitive, surrounding whitespace ignored).

    Returns:
        The matching SimilarityMethod.

    Raises:
        TypeError: If method is not a string or SimilarityMethod.

    Example:
        >>> normalize_method("Levenshtein")
        <SimilarityMethod.LEVENSHTEIN: 'levenshtein'>
        >>> normalize_method("cosine")
        <SimilarityMethod.HYBRID: 'hybrid'>
    """
    if isinstance(method, SimilarityMethod):
        return method

    if isinstance(method, str):
        name = method.strip().lower()
        if name in VALID_METHODS:
            return SimilarityMethod(name)
        logger.debug("Unknown similarity method {!r}, falling back to {}", method, DEFAULT_METHOD.value)
        return DEFAULT_METHOD

    raise TypeError(
        f"method must be str or SimilarityMethod enum, got {type(method).__name__}"
    )


def validate_threshold(threshold: float) -> float:
    """Check that a threshold is a real number in [0, 100]."""
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
        raise TypeError(f"threshold must be a number, got {type(threshold).__name__}")
    threshold = float(threshold)
    if math.isnan(threshold) or not 0.0 <= threshold <= 100.0:
        raise ValidationError(f"threshold must be between 0 and 100, got {threshold}")
    return threshold


def ensure_text(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")
    return value


__all__ = ["normalize_method", "validate_threshold", "ensure_text", "VALID_METHODS", "DEFAULT_METHOD"]
