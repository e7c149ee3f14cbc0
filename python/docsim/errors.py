"""Exception hierarchy for docsim."""


class DocSimError(Exception):
    """Base exception for all docsim errors."""


class ValidationError(DocSimError, ValueError):
    """Raised when input validation fails (invalid parameters, out of range values)."""


class ExtractionError(DocSimError):
    """Raised when a text handler cannot turn a payload into text."""


__all__ = ["DocSimError", "ValidationError", "ExtractionError"]
