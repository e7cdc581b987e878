"""Error codes and messages for the Fast Reader application."""

from typing import Dict, Tuple

# Error code format: CATEGORY_SPECIFIC_ERROR
# Categories: DOC (documents), CFG (configuration). Reading conditions are unprefixed.

ERROR_CODES: Dict[str, Tuple[str, str]] = {
    # Reading session conditions
    "EXTRACTION_FAILED": (
        "Could not extract text",
        "No text could be extracted from this document type. Check the log for details."
    ),
    "EMPTY_SEGMENTATION": (
        "Nothing to read",
        "Text was found on this page but it contains no readable words."
    ),
    "END_OF_DOCUMENT": (
        "End of document",
        "You have reached the end of the document."
    ),

    # Document errors
    "DOC_UNSUPPORTED": (
        "Unsupported document",
        "This file type cannot be opened. Supported types are PDF and plain text."
    ),
    "DOC_PDF_BACKEND": (
        "PDF support unavailable",
        "pdfplumber is required for PDF documents. Install with: pip install pdfplumber"
    ),

    # Configuration Errors
    "CFG_INVALID_SETTINGS": (
        "Invalid settings",
        "Some settings are invalid. The default values were kept."
    ),

    # Generic fallback
    "UNKNOWN_ERROR": (
        "Unexpected error occurred",
        "An unexpected error occurred. Please try again."
    )
}


def get_error_message(error_code: str, details: str = "") -> Tuple[str, str]:
    """Get formatted error title and message.

    Args:
        error_code: The error code from ERROR_CODES
        details: Additional error details

    Returns:
        Tuple of (title, message) for display
    """
    if error_code not in ERROR_CODES:
        error_code = "UNKNOWN_ERROR"

    title, hint = ERROR_CODES[error_code]

    message_parts = [hint]

    if details:
        message_parts.append(f"\nDetails: {details}")

    return title, "\n".join(message_parts)
