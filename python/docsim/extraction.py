"""Boundary between text extraction and comparison.

Text extraction itself (PDF, Word, spreadsheets, OCR) lives outside docsim.
This module defines the value extractors hand back, a plain-text handler
that detects each payload's encoding, first-match dispatch over a list of
handlers, and :func:`compare_extracted`, which drops failed or empty
extractions before comparison and reports matches against the caller's
original document positions.

Example usage:
    >>> from docsim.extraction import ExtractedText, compare_extracted
    >>> docs = [
    ...     ExtractedText("a.txt", "text/plain", "The quick brown fox"),
    ...     ExtractedText("b.pdf", "application/pdf", error="encrypted"),
    ...     ExtractedText("c.txt", "text/plain", "The quick brown fox jumps"),
    ... ]
    >>> [m.reference_index for m in compare_extracted("The quick brown fox", docs, threshold=50.0)]
    [0, 2]
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Union

import charset_normalizer
from loguru import logger

from docsim.batch import DEFAULT_THRESHOLD, MatchResult, compare
from docsim.enums import ExecutorKind, SimilarityMethod
from docsim.errors import ExtractionError
from docsim.similarity import HybridPolicy

__all__ = [
    "ExtractedText",
    "FileHandler",
    "TextHandler",
    "TEXT_APPLICATION_TYPES",
    "is_text_mime_type",
    "detect_encoding",
    "decode_text",
    "extract",
    "compare_extracted",
]

DEFAULT_ENCODING = "utf-8"

TEXT_APPLICATION_TYPES = frozenset({
    "application/json",
    "application/xml",
    "application/javascript",
    "application/typescript",
    "application/x-javascript",
    "application/xhtml+xml",
    "application/ld+json",
})


@dataclass(frozen=True)
class ExtractedText:
    """Outcome of extracting text from one file.

    Exactly one of ``text`` or ``error`` is meaningful: a failed extraction
    carries an error description and no text.
    """

    name: str
    mime_type: str
    text: str = ""
    error: Optional[str] = None

    @property
    def is_usable(self) -> bool:
        """True when the extraction succeeded and produced non-blank text."""
        return self.error is None and bool(self.text.strip())


def is_text_mime_type(mime_type: str) -> bool:
    """Whether a MIME type carries plain text (``text/*`` or a known text application type)."""
    mime_type = mime_type.split(";", 1)[0].strip().lower()
    return mime_type.startswith("text/") or mime_type in TEXT_APPLICATION_TYPES


def detect_encoding(content: bytes) -> str:
    """Guess the character encoding of a payload.

    Byte-order marks are honoured; otherwise ``charset_normalizer`` picks the
    most plausible encoding. Empty or undecidable content reports UTF-8.

    Example:
        >>> detect_encoding("naïve".encode("utf-16"))
        'utf_16'
    """
    if not content:
        return DEFAULT_ENCODING
    return charset_normalizer.detect(content)["encoding"] or DEFAULT_ENCODING


def decode_text(content: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode bytes with the named encoding.

    Unknown encoding labels fall back to UTF-8. Content that does not decode
    cleanly yields an empty string.
    """
    try:
        codec = codecs.lookup(encoding)
    except LookupError:
        codec = codecs.lookup(DEFAULT_ENCODING)
    try:
        return codec.decode(content, "strict")[0]
    except UnicodeDecodeError:
        return ""


class FileHandler(Protocol):
    """Anything that can turn a payload of some MIME types into text."""

    def can_handle(self, mime_type: str) -> bool: ...

    def extract_text(self, content: bytes, filename: str, mime_type: str) -> str: ...


class TextHandler:
    """Extracts text from plain-text payloads (text/*, JSON, XML, scripts).

    By default each payload's encoding is detected before decoding, so UTF-16
    and legacy single-byte files (cp1252, latin-1, ...) decode without any
    configuration. Passing ``encoding`` pins every payload to that codec.

    Instances hold no state and can be shared between threads.
    """

    def __init__(self, encoding: Optional[str] = None):
        self.encoding = encoding

    def can_handle(self, mime_type: str) -> bool:
        return is_text_mime_type(mime_type)

    def extract_text(self, content: bytes, filename: str, mime_type: str) -> str:
        """Decode the payload.

        Raises:
            ExtractionError: If the bytes are not valid in the pinned or
                detected encoding.
        """
        encoding = self.encoding or detect_encoding(content)
        text = decode_text(content, encoding)
        if not text and content:
            raise ExtractionError(f"Failed to decode {filename!r} ({mime_type}) as {encoding}")
        return text


def extract(
    handlers: Union[FileHandler, Sequence[FileHandler]],
    content: bytes,
    filename: str,
    mime_type: str,
) -> ExtractedText:
    """Run the first handler that accepts ``mime_type`` and wrap its outcome.

    Args:
        handlers: One handler or an ordered sequence of handlers. The first
            whose ``can_handle`` returns True is used.
        content: Raw file bytes.
        filename: Name reported in errors and in the result.
        mime_type: Declared MIME type of the payload.

    Returns:
        ExtractedText carrying the text, or the error when no handler accepts
        the type or extraction fails.
    """
    if hasattr(handlers, "can_handle"):
        handlers = [handlers]
    handler = next((h for h in handlers if h.can_handle(mime_type)), None)
    if handler is None:
        return ExtractedText(filename, mime_type, error=f"Unsupported content type: {mime_type}")
    try:
        text = handler.extract_text(content, filename, mime_type)
    except ExtractionError as exc:
        logger.debug("Extraction failed for {!r}: {}", filename, exc)
        return ExtractedText(filename, mime_type, error=str(exc))
    return ExtractedText(filename, mime_type, text=text)


def compare_extracted(
    source: str,
    documents: Sequence[ExtractedText],
    method: Union[str, SimilarityMethod] = SimilarityMethod.HYBRID,
    threshold: float = DEFAULT_THRESHOLD,
    *,
    max_workers: Optional[int] = None,
    executor: Optional[Union[str, ExecutorKind]] = None,
    policy: Optional[HybridPolicy] = None,
) -> list[MatchResult]:
    """Compare a source text against extracted documents.

    Unusable documents (failed or blank extractions) are skipped. The
    ``reference_index`` of each result is the document's position in
    ``documents``.
    """
    positions = [i for i, doc in enumerate(documents) if doc.is_usable]
    texts = [documents[i].text for i in positions]
    matches = compare(
        source,
        texts,
        method=method,
        threshold=threshold,
        max_workers=max_workers,
        executor=executor,
        policy=policy,
    )
    return [MatchResult(positions[m.reference_index], m.similarity_percentage) for m in matches]
