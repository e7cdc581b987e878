"""
Document collaborators for the RSVP session.

Two document shapes are supported, matching the two ways a reader can be
positioned:

- PagedDocument: fixed pages (PDF), fingerprinted by page number
- ReflowableDocument: a scrolling view over lines of plain text,
  fingerprinted by the first visible line

Both satisfy ``rsvp.interfaces.DocumentProtocol``.
"""

import os
from typing import Callable, List, Optional, Sequence, Tuple

from processing.pdf_processor import get_pdf_processor
from utils.exceptions import DocumentError, ExtractionFailure
from utils.structured_logging import get_logger, log_operation

logger = get_logger(__name__)

PositionListener = Callable[[], None]

TEXT_EXTENSIONS = (".txt", ".md", ".text")
PDF_EXTENSIONS = (".pdf",)


class _ObservableDocument:
    """Notifies listeners when the reading position changes."""

    def __init__(self, identity: str):
        self.identity = identity
        self._listeners: List[PositionListener] = []

    def add_position_listener(self, listener: PositionListener) -> None:
        self._listeners.append(listener)

    def _notify_position_changed(self) -> None:
        for listener in list(self._listeners):
            listener()


class PagedDocument(_ObservableDocument):
    """A document made of fixed pages, read one page at a time.

    Attributes:
        pages: Text of each page
        identity: Document identity (usually the file path)
        current_page: 1-based page number on screen
    """

    def __init__(self, pages: Sequence[str], identity: str):
        super().__init__(identity)
        self.pages = list(pages)
        self.current_page = 1

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def visible_text(self) -> str:
        if 1 <= self.current_page <= len(self.pages):
            return self.pages[self.current_page - 1]
        return ""

    def extract_page_text(self) -> str:
        text = self.visible_text
        if not text.strip():
            raise ExtractionFailure(
                f"No text on page {self.current_page}",
                details={"page": self.current_page, "document": self.identity}
            )
        return text

    def current_fingerprint_inputs(self) -> Tuple[str, str]:
        return f"page_{self.current_page}", self.identity

    def advance_position(self) -> bool:
        if self.current_page >= len(self.pages):
            return False
        self.current_page += 1
        logger.debug("Advanced page", page=self.current_page, total=len(self.pages))
        self._notify_position_changed()
        return True

    def retreat_position(self) -> bool:
        """Move to the previous page; False on the first page."""
        if self.current_page <= 1:
            return False
        self.current_page -= 1
        self._notify_position_changed()
        return True


class ReflowableDocument(_ObservableDocument):
    """A plain-text document viewed through a fixed-height window of lines.

    Advancing scrolls by one screen. The fingerprint discriminator is the
    index of the first visible line, so re-entering the same view resumes.
    """

    def __init__(self, text: str, identity: str, lines_per_screen: int = 20):
        if lines_per_screen < 1:
            raise ValueError("lines_per_screen must be positive")
        super().__init__(identity)
        self.lines = text.splitlines()
        self.lines_per_screen = lines_per_screen
        self.top_line = 0

    @property
    def visible_text(self) -> str:
        return "\n".join(self.lines[self.top_line:self.top_line + self.lines_per_screen])

    def extract_page_text(self) -> str:
        if not self.lines:
            raise ExtractionFailure(
                "Document has no text",
                details={"document": self.identity}
            )
        return self.visible_text

    def current_fingerprint_inputs(self) -> Tuple[str, str]:
        return f"rolling_{self.top_line}", self.identity

    def advance_position(self) -> bool:
        next_top = self.top_line + self.lines_per_screen
        if next_top >= len(self.lines):
            return False
        self.top_line = next_top
        logger.debug("Scrolled view", top_line=self.top_line, total_lines=len(self.lines))
        self._notify_position_changed()
        return True

    def retreat_position(self) -> bool:
        if self.top_line == 0:
            return False
        self.top_line = max(0, self.top_line - self.lines_per_screen)
        self._notify_position_changed()
        return True


def open_document(
    path: str,
    lines_per_screen: int = 20,
    progress_callback: Optional[Callable[[str], None]] = None
):
    """Open a file as a reading document.

    Args:
        path: Path to a PDF or plain-text file
        lines_per_screen: View height for plain-text documents
        progress_callback: Optional progress callback for PDF extraction

    Returns:
        PagedDocument for PDFs, ReflowableDocument for text files

    Raises:
        DocumentError: If the file is missing or of an unsupported type
    """
    if not os.path.isfile(path):
        raise DocumentError(f"File not found: {path}", error_code="DOC_UNSUPPORTED",
                            details={"path": path})

    extension = os.path.splitext(path)[1].lower()
    identity = os.path.abspath(path)

    with log_operation(logger, "open_document", path=path, extension=extension):
        if extension in PDF_EXTENSIONS:
            pages = get_pdf_processor().extract_pages(path, progress_callback)
            return PagedDocument(pages, identity)

        if extension in TEXT_EXTENSIONS:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
            return ReflowableDocument(text, identity, lines_per_screen=lines_per_screen)

        raise DocumentError(
            f"Unsupported document type: {extension or '(none)'}",
            error_code="DOC_UNSUPPORTED",
            details={"path": path}
        )


__all__ = ["PagedDocument", "ReflowableDocument", "open_document"]
