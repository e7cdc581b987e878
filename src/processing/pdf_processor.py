"""
PDF Processor for the RSVP Reader

Extracts text from PDF files one page at a time using pdfplumber.
"""

from typing import Callable, List, Optional

from utils.exceptions import DocumentError
from utils.structured_logging import get_logger, timed

logger = get_logger(__name__)


class PDFProcessor:
    """Handles per-page PDF text extraction."""

    def __init__(self):
        """Initialize the PDF processor."""
        self._pdfplumber_available = None

    @property
    def pdfplumber_available(self) -> bool:
        """Check if pdfplumber is available."""
        if self._pdfplumber_available is None:
            try:
                import pdfplumber  # noqa: F401
                self._pdfplumber_available = True
            except ImportError:
                self._pdfplumber_available = False
                logger.warning("pdfplumber not available")
        return self._pdfplumber_available

    @timed("pdf_extraction")
    def extract_pages(
        self,
        file_path: str,
        progress_callback: Optional[Callable[[str], None]] = None
    ) -> List[str]:
        """Extract the text of every page in a PDF file.

        Pages without a text layer come back as empty strings, so page
        numbers stay aligned with the viewer.

        Args:
            file_path: Path to the PDF file
            progress_callback: Optional callback for progress updates (message: str)

        Returns:
            One string per page

        Raises:
            DocumentError: If pdfplumber is missing or the file cannot be parsed
        """
        if not self.pdfplumber_available:
            raise DocumentError(
                "pdfplumber is required for PDF processing.\n"
                "Install with: pip install pdfplumber",
                error_code="DOC_PDF_BACKEND"
            )

        import pdfplumber

        pages: List[str] = []
        try:
            with pdfplumber.open(file_path) as pdf:
                page_count = len(pdf.pages)
                for i, page in enumerate(pdf.pages):
                    if progress_callback:
                        progress_callback(f"Processing page {i + 1} of {page_count}...")
                    pages.append(page.extract_text() or "")
        except Exception as e:
            raise DocumentError(
                f"Failed to read PDF: {e}",
                error_code="DOC_UNSUPPORTED",
                details={"path": file_path}
            ) from e

        logger.info("PDF pages extracted", path=file_path, pages=len(pages))
        return pages


# Singleton instance
_pdf_processor = None


def get_pdf_processor() -> PDFProcessor:
    """Get the singleton PDF processor instance."""
    global _pdf_processor
    if _pdf_processor is None:
        _pdf_processor = PDFProcessor()
    return _pdf_processor


__all__ = ["PDFProcessor", "get_pdf_processor"]
