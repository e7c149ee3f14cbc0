"""
docsim - Text similarity engine for document triage

Compares a piece of extracted text against a corpus of reference texts and
reports the references that reach a similarity threshold, for duplicate
and near-duplicate detection in document-processing pipelines.

Example usage:
    >>> import docsim

    # Pairwise scores (percentages, 0 to 100)
    >>> docsim.levenshtein("kitten", "sitting")
    3
    >>> docsim.jaccard_similarity("hello world", "world hello")
    100.0

    # One text against a corpus (returns MatchResult objects)
    >>> matches = docsim.compare(
    ...     "The quick brown fox",
    ...     ["The quick brown fox jumps", "A completely different text", "The quick brown fox"],
    ...     method="hybrid",
    ...     threshold=50.0,
    ... )
    >>> [(m.reference_index, round(m.similarity_percentage)) for m in matches]
    [(0, 76), (2, 100)]
"""

from importlib.metadata import version as _get_version

from loguru import logger as _logger

from docsim._logging import configure_logging
from docsim._utils import normalize_method
from docsim.batch import MatchResult, compare
from docsim.config import Settings, load_settings
from docsim.enums import ExecutorKind, SimilarityMethod
from docsim.errors import DocSimError, ExtractionError, ValidationError
from docsim.extraction import (
    ExtractedText,
    FileHandler,
    TextHandler,
    compare_extracted,
    decode_text,
    detect_encoding,
    extract,
    is_text_mime_type,
)
from docsim.polars_ext import compare_dataframe, compare_series
from docsim.similarity import (
    HybridPolicy,
    calculate_similarity,
    extract_ngrams,
    hybrid_similarity,
    jaccard_similarity,
    levenshtein,
    levenshtein_bounded,
    levenshtein_similarity,
    ngram_similarity,
    pre_filter_by_length,
)

# Silent unless the application opts in via configure_logging()
_logger.disable("docsim")

__version__ = _get_version("docsim")
__all__ = [
    # Version
    "__version__",
    # Custom exceptions
    "DocSimError",
    "ValidationError",
    "ExtractionError",
    # Result types
    "MatchResult",
    "ExtractedText",
    # Enums
    "SimilarityMethod",
    "ExecutorKind",
    # Scorers
    "pre_filter_by_length",
    "jaccard_similarity",
    "extract_ngrams",
    "ngram_similarity",
    "levenshtein",
    "levenshtein_bounded",
    "levenshtein_similarity",
    "hybrid_similarity",
    "HybridPolicy",
    # Dispatch
    "calculate_similarity",
    "normalize_method",
    # Batch comparison
    "compare",
    # Extraction boundary
    "FileHandler",
    "TextHandler",
    "is_text_mime_type",
    "detect_encoding",
    "decode_text",
    "extract",
    "compare_extracted",
    # Polars integration
    "compare_series",
    "compare_dataframe",
    # Configuration and logging
    "Settings",
    "load_settings",
    "configure_logging",
]


# Convenience aliases
edit_distance = levenshtein
similarity = calculate_similarity
