"""
Unit tests for document collaborators and the PDF processor.
"""

import pytest
from unittest.mock import MagicMock, patch

from processing.documents import PagedDocument, ReflowableDocument, open_document
from processing.pdf_processor import PDFProcessor
from utils.exceptions import DocumentError, ExtractionFailure


class TestPagedDocument:

    def test_fingerprint_inputs(self):
        """Test the fingerprint discriminator is the page number."""
        document = PagedDocument(["a", "b"], identity="/docs/a.pdf")
        assert document.current_fingerprint_inputs() == ("page_1", "/docs/a.pdf")

    def test_advance_until_last_page(self):
        """Test advancing stops at the last page."""
        document = PagedDocument(["a", "b"], identity="doc")
        assert document.advance_position() is True
        assert document.current_page == 2
        assert document.advance_position() is False
        assert document.current_page == 2

    def test_blank_page_raises_extraction_failure(self):
        """Test a whitespace-only page is an extraction failure."""
        document = PagedDocument(["  \n "], identity="doc")
        with pytest.raises(ExtractionFailure) as exc_info:
            document.extract_page_text()
        assert exc_info.value.details["page"] == 1

    def test_empty_document(self):
        """Test a document with no pages cannot be read or advanced."""
        document = PagedDocument([], identity="doc")
        with pytest.raises(ExtractionFailure):
            document.extract_page_text()
        assert document.advance_position() is False

    def test_position_listeners_notified(self):
        """Test listeners hear about real moves only."""
        document = PagedDocument(["a", "b"], identity="doc")
        listener = MagicMock()
        document.add_position_listener(listener)

        document.advance_position()
        document.advance_position()

        listener.assert_called_once()

    def test_retreat_stops_at_first_page(self):
        """Test turning back moves one page and stops at page one."""
        document = PagedDocument(["a", "b", "c"], identity="doc")
        document.advance_position()
        document.advance_position()
        listener = MagicMock()
        document.add_position_listener(listener)

        assert document.retreat_position() is True
        assert document.current_fingerprint_inputs()[0] == "page_2"
        assert document.retreat_position() is True
        assert document.retreat_position() is False
        assert document.current_page == 1
        assert listener.call_count == 2


class TestReflowableDocument:

    def test_visible_window(self):
        """Test only one screen of lines is visible."""
        document = ReflowableDocument("1\n2\n3\n4\n5", identity="t.txt", lines_per_screen=2)
        assert document.extract_page_text() == "1\n2"
        assert document.current_fingerprint_inputs() == ("rolling_0", "t.txt")

    def test_scroll_by_screen(self):
        """Test advancing scrolls a full screen until the last line is shown."""
        document = ReflowableDocument("1\n2\n3\n4\n5", identity="t.txt", lines_per_screen=2)
        assert document.advance_position() is True
        assert document.advance_position() is True
        assert document.extract_page_text() == "5"
        assert document.current_fingerprint_inputs() == ("rolling_4", "t.txt")
        assert document.advance_position() is False

    def test_scroll_back_by_screen(self):
        """Test retreating scrolls back a screen and stops at the top."""
        document = ReflowableDocument("1\n2\n3\n4\n5", identity="t.txt", lines_per_screen=2)
        document.advance_position()
        document.advance_position()

        assert document.retreat_position() is True
        assert document.current_fingerprint_inputs() == ("rolling_2", "t.txt")
        assert document.retreat_position() is True
        assert document.retreat_position() is False
        assert document.extract_page_text() == "1\n2"

    def test_empty_text_raises(self):
        """Test an empty text file is an extraction failure."""
        with pytest.raises(ExtractionFailure):
            ReflowableDocument("", identity="t.txt").extract_page_text()

    def test_invalid_screen_height(self):
        """Test a zero-line screen is rejected."""
        with pytest.raises(ValueError):
            ReflowableDocument("x", identity="t.txt", lines_per_screen=0)


class TestOpenDocument:

    def test_text_file(self, temp_dir):
        """Test a .txt file opens as a reflowable document."""
        path = temp_dir / "notes.txt"
        path.write_text("hello world\nsecond line", encoding="utf-8")

        document = open_document(str(path))

        assert isinstance(document, ReflowableDocument)
        assert document.extract_page_text() == "hello world\nsecond line"

    def test_missing_file(self, temp_dir):
        """Test a missing path raises DocumentError."""
        with pytest.raises(DocumentError) as exc_info:
            open_document(str(temp_dir / "missing.txt"))
        assert exc_info.value.error_code == "DOC_UNSUPPORTED"

    def test_unsupported_extension(self, temp_dir):
        """Test unknown extensions are refused."""
        path = temp_dir / "book.epub"
        path.write_bytes(b"not really an epub")
        with pytest.raises(DocumentError, match="Unsupported document type"):
            open_document(str(path))

    def test_pdf_uses_processor(self, temp_dir):
        """Test a .pdf file opens as a paged document from extracted pages."""
        path = temp_dir / "paper.pdf"
        path.write_bytes(b"%PDF-1.4")
        processor = MagicMock()
        processor.extract_pages.return_value = ["page one", "page two"]

        with patch("processing.documents.get_pdf_processor", return_value=processor):
            document = open_document(str(path))

        assert isinstance(document, PagedDocument)
        assert document.page_count == 2
        assert document.extract_page_text() == "page one"

    def test_broken_pdf_raises_document_error(self, temp_dir):
        """Test a file that is not really a PDF fails as DocumentError."""
        path = temp_dir / "broken.pdf"
        path.write_bytes(b"this is not a pdf at all")

        with pytest.raises(DocumentError) as exc_info:
            open_document(str(path))

        assert exc_info.value.error_code == "DOC_UNSUPPORTED"
        assert exc_info.value.details["path"] == str(path)


class TestPDFProcessor:

    def test_missing_backend_raises_document_error(self):
        """Test a missing pdfplumber install is reported, not raised raw."""
        processor = PDFProcessor()
        processor._pdfplumber_available = False
        with pytest.raises(DocumentError) as exc_info:
            processor.extract_pages("whatever.pdf")
        assert exc_info.value.error_code == "DOC_PDF_BACKEND"

    def test_extracts_one_string_per_page(self):
        """Test pages without a text layer come back as empty strings."""
        pages = [MagicMock(), MagicMock()]
        pages[0].extract_text.return_value = "first"
        pages[1].extract_text.return_value = None
        pdf = MagicMock()
        pdf.pages = pages
        pdf.__enter__.return_value = pdf

        processor = PDFProcessor()
        processor._pdfplumber_available = True
        progress = MagicMock()

        with patch("pdfplumber.open", return_value=pdf):
            result = processor.extract_pages("doc.pdf", progress_callback=progress)

        assert result == ["first", ""]
        assert progress.call_count == 2

    def test_parser_errors_become_document_error(self):
        """Test any parser exception is wrapped with the original as cause."""
        class ParserError(Exception):
            pass

        processor = PDFProcessor()
        processor._pdfplumber_available = True

        with patch("pdfplumber.open", side_effect=ParserError("bad xref")):
            with pytest.raises(DocumentError) as exc_info:
                processor.extract_pages("doc.pdf")

        assert exc_info.value.error_code == "DOC_UNSUPPORTED"
        assert isinstance(exc_info.value.__cause__, ParserError)
