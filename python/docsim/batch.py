"""Batch comparison of one text against a reference corpus.

Each reference is scored independently: length pre-filter, then the
selected scorer, then the threshold gate. References are split into
contiguous chunks; every worker builds its own list of matches and the
lists are merged once all workers finish, so no collector is shared
between workers.

Example usage:
    >>> from docsim.batch import compare
    >>> matches = compare(
    ...     "The quick brown fox",
    ...     ["The quick brown fox jumps", "A completely different text", "The quick brown fox"],
    ...     method="hybrid",
    ...     threshold=50.0,
    ... )
    >>> [m.reference_index for m in matches]
    [0, 2]
"""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from loguru import logger

from docsim._utils import ensure_text, normalize_method, validate_threshold
from docsim.config import Settings, load_settings, parse_executor
from docsim.enums import ExecutorKind, SimilarityMethod
from docsim.errors import ValidationError
from docsim.similarity import DEFAULT_POLICY, HybridPolicy, calculate_similarity, pre_filter_by_length

__all__ = ["MatchResult", "compare", "DEFAULT_THRESHOLD", "CHUNKS_PER_WORKER"]

DEFAULT_THRESHOLD = 30.0

# Hybrid cost varies a lot between references; several chunks per worker
# keep the pool busy when one chunk is slow.
CHUNKS_PER_WORKER = 4


@dataclass(frozen=True, order=True)
class MatchResult:
    """A reference that met the threshold.

    Supports equality comparison and hashing for use in sets and as dict keys.
    Ordering follows ``reference_index``.
    """

    reference_index: int
    similarity_percentage: float


def _compare_chunk(
    source: str,
    chunk: Sequence[tuple[int, str]],
    method: SimilarityMethod,
    threshold: float,
    policy: HybridPolicy,
) -> tuple[list[tuple[int, float]], int]:
    """Score one chunk; returns the matches and the pre-filter rejection count."""
    matches = []
    rejected = 0
    for index, reference in chunk:
        if not pre_filter_by_length(source, reference, threshold):
            rejected += 1
            continue
        score = calculate_similarity(source, reference, method, policy)
        if score >= threshold:
            matches.append((index, score))
    return matches, rejected


def _split(items: list[tuple[int, str]], parts: int) -> list[list[tuple[int, str]]]:
    size = max(1, -(-len(items) // parts))
    return [items[i : i + size] for i in range(0, len(items), size)]


def _resolve_executor(
    executor: Optional[Union[str, ExecutorKind]],
    max_workers: Optional[int],
    corpus_size: int,
    settings: Settings,
) -> ExecutorKind:
    if executor is not None:
        kind = parse_executor(executor)
    elif settings.disable_parallel or corpus_size < settings.parallel_threshold:
        kind = ExecutorKind.SEQUENTIAL
    else:
        kind = settings.executor

    if max_workers == 1 or corpus_size <= 1:
        return ExecutorKind.SEQUENTIAL
    return kind


def compare(
    source: str,
    references: Iterable[str],
    method: Union[str, SimilarityMethod] = SimilarityMethod.HYBRID,
    threshold: float = DEFAULT_THRESHOLD,
    *,
    max_workers: Optional[int] = None,
    executor: Optional[Union[str, ExecutorKind]] = None,
    policy: Optional[HybridPolicy] = None,
) -> list[MatchResult]:
    """Compare a source text against every reference text.

    A reference is reported when it passes the length pre-filter and its
    similarity under ``method`` is at least ``threshold``. The matches are
    the same whatever executor or worker count is used.

    Args:
        source: Text to compare.
        references: Reference corpus. Each reference's position is its
            ``reference_index`` in the results.
        method: Similarity method (string or SimilarityMethod enum). Options:
            - "jaccard": Word-set overlap
            - "ngram": Character trigram overlap
            - "levenshtein": Exact edit distance percentage
            - "hybrid": Progressive strategy (default)
            Unknown names fall back to "hybrid".
        threshold: Minimum similarity percentage, inclusive (default: 30.0).
        max_workers: Pool size. Defaults to ``DOCSIM_MAX_WORKERS`` or the
            CPU count. ``1`` forces a sequential run.
        executor: "process", "thread" or "sequential". When omitted, small
            corpora run sequentially and larger ones use ``DOCSIM_EXECUTOR``.
        policy: Optional HybridPolicy for the hybrid method.

    Returns:
        List of MatchResult objects sorted by reference_index.

    Raises:
        ValidationError: If threshold is outside [0, 100], max_workers is
            below 1 or the executor name is unknown.
        TypeError: If source or a reference is not a string.
    """
    ensure_text(source, "source")
    corpus = list(references)
    for index, reference in enumerate(corpus):
        ensure_text(reference, f"references[{index}]")
    threshold = validate_threshold(threshold)
    if max_workers is not None and max_workers < 1:
        raise ValidationError(f"max_workers must be >= 1, got {max_workers}")

    method = normalize_method(method)
    policy = policy or DEFAULT_POLICY
    # Environment settings only fill in arguments the caller left out
    settings = load_settings() if executor is None or max_workers is None else Settings()
    kind = _resolve_executor(executor, max_workers, len(corpus), settings)
    indexed = list(enumerate(corpus))

    logger.debug(
        "Comparing against {} references (method={}, threshold={}, executor={})",
        len(corpus),
        method.value,
        threshold,
        kind.value,
    )

    if kind is ExecutorKind.SEQUENTIAL:
        pairs, rejected = _compare_chunk(source, indexed, method, threshold, policy)
    else:
        workers = max_workers or settings.max_workers or os.cpu_count() or 1
        chunks = _split(indexed, workers * CHUNKS_PER_WORKER)
        pool_cls = ProcessPoolExecutor if kind is ExecutorKind.PROCESS else ThreadPoolExecutor
        logger.debug("Dispatching {} chunks to {} {} workers", len(chunks), workers, kind.value)

        pairs = []
        rejected = 0
        with pool_cls(max_workers=workers) as pool:
            futures = [
                pool.submit(_compare_chunk, source, chunk, method, threshold, policy)
                for chunk in chunks
            ]
            for future in as_completed(futures):
                chunk_pairs, chunk_rejected = future.result()
                pairs.extend(chunk_pairs)
                rejected += chunk_rejected

    results = sorted(MatchResult(index, score) for index, score in pairs)
    logger.debug(
        "{} references rejected by length pre-filter, {} matches",
        rejected,
        len(results),
    )
    return results
