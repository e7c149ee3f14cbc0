"""Polars helpers for docsim.

Functions in This Module
------------------------
- ``compare_series()``: Compare a source text against a Series of references
- ``compare_dataframe()``: Add a ``similarity`` column to a DataFrame

Both delegate to :func:`docsim.batch.compare`, so the length pre-filter,
threshold semantics and parallel execution are identical. Null values are
never compared and keep their positions.

Example Usage
-------------
>>> import polars as pl
>>> from docsim.polars_ext import compare_series
>>> refs = pl.Series(["The quick brown fox jumps", None, "The quick brown fox"])
>>> compare_series("The quick brown fox", refs, threshold=50.0)["reference_index"].to_list()
[2, 0]
"""

from typing import Optional, Union

import polars as pl

from docsim.batch import DEFAULT_THRESHOLD, compare
from docsim.enums import ExecutorKind, SimilarityMethod
from docsim.similarity import HybridPolicy

SIMILARITY_COLUMN = "similarity"


def _matches_by_position(
    source: str,
    values: list,
    method: Union[str, SimilarityMethod],
    threshold: float,
    max_workers: Optional[int],
    executor: Optional[Union[str, ExecutorKind]],
    policy: Optional[HybridPolicy],
) -> dict[int, float]:
    positions = [i for i, value in enumerate(values) if value is not None]
    texts = [str(values[i]) for i in positions]
    matches = compare(
        source,
        texts,
        method=method,
        threshold=threshold,
        max_workers=max_workers,
        executor=executor,
        policy=policy,
    )
    return {positions[m.reference_index]: m.similarity_percentage for m in matches}


def compare_series(
    source: str,
    references: "pl.Series",
    method: Union[str, SimilarityMethod] = "hybrid",
    threshold: float = DEFAULT_THRESHOLD,
    *,
    max_workers: Optional[int] = None,
    executor: Optional[Union[str, ExecutorKind]] = None,
    policy: Optional[HybridPolicy] = None,
) -> "pl.DataFrame":
    """
    Compare a source text against every value of a Series.

    Args:
        source: Text to compare
        references: Series of reference strings (nulls are skipped)
        method: Similarity method ("jaccard", "ngram", "levenshtein", "hybrid")
        threshold: Minimum similarity percentage (0 to 100)

    Returns:
        DataFrame with columns: reference_index, reference, similarity,
        sorted by similarity descending (ties by reference_index)

    Example:
        >>> refs = pl.Series(["hello world", "goodbye"])
        >>> result = compare_series("hello world", refs, method="jaccard", threshold=50.0)
        >>> result["reference"].to_list()
        ['hello world']
    """
    values = references.to_list()
    scores = _matches_by_position(source, values, method, threshold, max_workers, executor, policy)
    rows = sorted(scores.items(), key=lambda item: (-item[1], item[0]))

    return pl.DataFrame(
        {
            "reference_index": [index for index, _ in rows],
            "reference": [str(values[index]) for index, _ in rows],
            SIMILARITY_COLUMN: [score for _, score in rows],
        },
        schema={
            "reference_index": pl.UInt32,
            "reference": pl.Utf8,
            SIMILARITY_COLUMN: pl.Float64,
        },
    )


def compare_dataframe(
    df: "pl.DataFrame",
    column: str,
    source: str,
    method: Union[str, SimilarityMethod] = "hybrid",
    threshold: float = DEFAULT_THRESHOLD,
    *,
    max_workers: Optional[int] = None,
    executor: Optional[Union[str, ExecutorKind]] = None,
    policy: Optional[HybridPolicy] = None,
) -> "pl.DataFrame":
    """
    Score a DataFrame column against a source text.

    Returns the DataFrame with a ``similarity`` column appended. Rows that
    did not reach the threshold (or were null) get a null similarity, so
    ``df.filter(pl.col("similarity").is_not_null())`` keeps the matches.

    Raises:
        ValueError: If the column does not exist.
    """
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found. Available columns: {df.columns}")

    values = df[column].to_list()
    scores = _matches_by_position(source, values, method, threshold, max_workers, executor, policy)
    similarity = [scores.get(i) for i in range(len(values))]
    return df.with_columns(pl.Series(SIMILARITY_COLUMN, similarity, dtype=pl.Float64))


__all__ = ["compare_series", "compare_dataframe", "SIMILARITY_COLUMN"]
