from types import SimpleNamespace

import pytest

from extractors.document_loader import DocumentLoader, ResumeSession
from extractors.pdf_extractor import ExtractionError, PDFExtractor


def make_config(**overrides):
    values = {'enable_ocr': False, 'min_extracted_chars': 50, 'max_file_size_mb': 10}
    values.update(overrides)
    return SimpleNamespace(**values)


class StubPDFExtractor:
    """Stands in for the PDF fallback chain."""

    def __init__(self, text="Experience\n5 years at Acme", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def extract_with_fallback(self, file_bytes, filename, enable_ocr=False):
        self.calls.append((filename, enable_ocr))
        if self.error:
            raise self.error
        return self.text, "pdfplumber"


class TestDocumentLoader:

    def test_text_file(self):
        loader = DocumentLoader(make_config(), StubPDFExtractor())
        text, method = loader.load("Skills\r\nPython".encode('utf-8'), "resume.txt")
        assert text == "Skills\nPython"
        assert method == "text"

    def test_text_file_with_bom(self):
        loader = DocumentLoader(make_config(), StubPDFExtractor())
        text, _ = loader.load("\ufeffSummary".encode('utf-8'), "RESUME.TXT")
        assert text == "Summary"

    def test_undecodable_text(self):
        loader = DocumentLoader(make_config(), StubPDFExtractor())
        with pytest.raises(ExtractionError, match="UTF-8"):
            loader.load(b"\xff\xfe\xfa\x00", "resume.txt")

    def test_unsupported_type(self):
        loader = DocumentLoader(make_config(), StubPDFExtractor())
        with pytest.raises(ExtractionError, match="Unsupported"):
            loader.load(b"PK\x03\x04", "resume.docx")

    def test_pdf_goes_through_extractor(self):
        stub = StubPDFExtractor()
        loader = DocumentLoader(make_config(enable_ocr=True), stub)
        text, method = loader.load(b"%PDF-1.4", "../cv.pdf")

        assert text == "Experience\n5 years at Acme"
        assert method == "pdfplumber"
        assert stub.calls == [("cv.pdf", True)]

    def test_corrupt_pdf_with_real_extractor(self):
        loader = DocumentLoader(make_config())
        with pytest.raises(ExtractionError, match="Could not parse"):
            loader.load(b"definitely not a pdf", "broken.pdf")


class TestPDFExtractor:

    def test_clean_text_keeps_lines(self):
        extractor = PDFExtractor(make_config())
        cleaned = extractor.clean_text("Experience\n\n\n\nAcme   Corp \t x\n")
        assert cleaned == "Experience\n\nAcme Corp x"

    def test_min_text_length_coerced(self):
        assert PDFExtractor(make_config(min_extracted_chars="lots")).min_text_length == 50
        assert PDFExtractor(make_config(min_extracted_chars=0)).min_text_length == 1

    def test_pages_joined_with_newline(self):
        extractor = PDFExtractor(make_config(min_extracted_chars=5))
        text, success = extractor._join_pages(["Page one", "Page two"], "stub", "cv.pdf")
        assert text == "Page one\nPage two"
        assert success


class TestResumeSession:

    def test_latest_upload_wins(self):
        session = ResumeSession("original")
        first = session.begin_upload()
        second = session.begin_upload()

        assert session.complete_upload(second, "newer").applied
        stale = session.complete_upload(first, "older")

        assert not stale.applied
        assert session.text == "newer"

    def test_failure_keeps_previous_text(self):
        session = ResumeSession("original")
        generation = session.begin_upload()
        outcome = session.fail_upload(generation, ExtractionError("Could not parse cv.pdf"))

        assert not outcome.applied
        assert outcome.message == "Could not parse cv.pdf"
        assert session.text == "original"

    def test_stale_failure_does_not_overwrite_message(self):
        session = ResumeSession("original")
        first = session.begin_upload()
        second = session.begin_upload()
        session.complete_upload(second, "newer", method="pdfplumber")
        session.fail_upload(first, ExtractionError("boom"))

        assert session.message == "PDF parsed to text. Review and clean up any spacing."

    def test_manual_edit_supersedes_pending_upload(self):
        session = ResumeSession("original")
        generation = session.begin_upload()
        session.set_text("typed by hand")

        assert not session.complete_upload(generation, "from file").applied
        assert session.text == "typed by hand"

    def test_upload_end_to_end(self):
        session = ResumeSession("original")
        loader = DocumentLoader(make_config(), StubPDFExtractor())

        outcome = session.upload(loader, b"Skills\nGo", "cv.txt")
        assert outcome.applied
        assert outcome.message == "Loaded text file into editor."
        assert session.text == "Skills\nGo"

        failed = session.upload(loader, b"", "cv.rtf")
        assert not failed.applied
        assert session.text == "Skills\nGo"

    def test_upload_pdf_failure(self):
        session = ResumeSession("original")
        stub = StubPDFExtractor(error=ExtractionError("Could not parse cv.pdf"))
        outcome = session.upload(DocumentLoader(make_config(), stub), b"%PDF", "cv.pdf")

        assert not outcome.applied
        assert session.text == "original"
        assert session.message == "Could not parse cv.pdf"
