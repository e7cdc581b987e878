"""
Custom exception hierarchy for Fast Reader.
"""

class FastReaderError(Exception):
    """Base exception class for Fast Reader."""
    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ReadingConditionError(FastReaderError):
    """A condition that ends the current reading attempt.

    These are reported to the user through the notifier rather than
    propagated; the session always returns to a well-defined state.
    """
    default_code = "UNKNOWN_ERROR"

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message, error_code or self.default_code, details)


class ExtractionFailure(ReadingConditionError):
    """Raised when the document could not produce text for the current view."""
    default_code = "EXTRACTION_FAILED"


class EmptySegmentation(ReadingConditionError):
    """Text was extracted but segmentation produced no display units."""
    default_code = "EMPTY_SEGMENTATION"


class EndOfDocument(ReadingConditionError):
    """The page-advance protocol found no further content."""
    default_code = "END_OF_DOCUMENT"


class DocumentError(FastReaderError):
    """Raised when a document cannot be opened or parsed."""
    pass


class ConfigurationError(FastReaderError):
    """Raised when configuration is invalid or missing."""
    def __init__(self, message: str, field: str = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
