"""
PDF text extraction module with fallback chain.
Supports PyPDF2, pdfplumber, and OCR via Tesseract.
"""
import logging
import re
import time
from io import BytesIO
from typing import Callable, List, Tuple

import PyPDF2
import pdfplumber

from utils.sanitizers import coerce_number

logger = logging.getLogger(__name__)

try:
    from pdf2image import convert_from_bytes
    import pytesseract
    OCR_AVAILABLE = True
except ImportError:
    OCR_AVAILABLE = False
    logger.info("OCR dependencies not installed; OCR fallback disabled")


class ExtractionError(RuntimeError):
    """Raised when a document cannot be turned into text."""


class PDFExtractor:
    """Extract text from PDF files with multiple fallback strategies."""

    def __init__(self, config):
        """
        Initialize PDF extractor.

        Args:
            config: Configuration object
        """
        self.config = config
        self.min_text_length = coerce_number(
            getattr(config, 'min_extracted_chars', 50), 50, 1, integer=True
        )

    def _join_pages(self, pages: List[str], method: str, filename: str) -> Tuple[str, bool]:
        full_text = "\n".join(pages)
        success = len(full_text.strip()) >= self.min_text_length
        if success:
            logger.info(f"{method} extracted {len(full_text)} chars from {filename}")
        return full_text, success

    def extract_with_pypdf2(self, file_bytes: BytesIO, filename: str) -> Tuple[str, bool]:
        """
        Extract text using PyPDF2.

        Args:
            file_bytes: PDF file as BytesIO
            filename: Name of the file (for logging)

        Returns:
            Tuple of (extracted_text, success)
        """
        try:
            file_bytes.seek(0)
            reader = PyPDF2.PdfReader(file_bytes)

            pages = []
            for page_num, page in enumerate(reader.pages):
                try:
                    pages.append(page.extract_text() or "")
                except Exception as e:
                    logger.warning(f"PyPDF2 page {page_num} error in {filename}: {str(e)}")

            return self._join_pages(pages, "PyPDF2", filename)

        except Exception as e:
            logger.warning(f"PyPDF2 failed for {filename}: {str(e)}")
            return "", False

    def extract_with_pdfplumber(self, file_bytes: BytesIO, filename: str) -> Tuple[str, bool]:
        """
        Extract text using pdfplumber.

        Args:
            file_bytes: PDF file as BytesIO
            filename: Name of the file (for logging)

        Returns:
            Tuple of (extracted_text, success)
        """
        try:
            file_bytes.seek(0)
            pages = []

            with pdfplumber.open(file_bytes) as pdf:
                for page_num, page in enumerate(pdf.pages):
                    try:
                        pages.append(page.extract_text() or "")
                    except Exception as e:
                        logger.warning(f"pdfplumber page {page_num} error in {filename}: {str(e)}")

            return self._join_pages(pages, "pdfplumber", filename)

        except Exception as e:
            logger.warning(f"pdfplumber failed for {filename}: {str(e)}")
            return "", False

    def extract_with_ocr(self, file_bytes: BytesIO, filename: str) -> Tuple[str, bool]:
        """
        Extract text using OCR (Tesseract).

        Args:
            file_bytes: PDF file as BytesIO
            filename: Name of the file (for logging)

        Returns:
            Tuple of (extracted_text, success)
        """
        if not OCR_AVAILABLE:
            logger.warning(f"OCR requested but not available for {filename}")
            return "", False

        try:
            file_bytes.seek(0)
            images = convert_from_bytes(file_bytes.read(), dpi=300, fmt='jpeg', thread_count=2)

            pages = []
            for page_num, image in enumerate(images):
                try:
                    pages.append(pytesseract.image_to_string(image, lang='eng') or "")
                except Exception as e:
                    logger.warning(f"OCR page {page_num} error in {filename}: {str(e)}")

            return self._join_pages(pages, "OCR", filename)

        except Exception as e:
            logger.warning(f"OCR failed for {filename}: {str(e)}")
            return "", False

    def clean_text(self, text: str) -> str:
        """
        Normalize extracted text while keeping line structure.

        Section detection works line by line, so only runs of spaces/tabs
        inside a line are collapsed.

        Args:
            text: Raw extracted text

        Returns:
            Cleaned text
        """
        text = ''.join(char for char in text if char.isprintable() or char in '\n\t')
        text = re.sub(r'[ \t]+', ' ', text)
        text = re.sub(r' *\n *', '\n', text)
        text = re.sub(r'\n{3,}', '\n\n', text)

        text = re.sub(r'<script.*?</script>', '', text, flags=re.IGNORECASE | re.DOTALL)
        text = re.sub(r'javascript:', '', text, flags=re.IGNORECASE)

        return text.strip()

    def extract_with_fallback(
        self,
        file_bytes: BytesIO,
        filename: str,
        enable_ocr: bool = False
    ) -> Tuple[str, str]:
        """
        Extract text using fallback chain.

        Args:
            file_bytes: PDF file as BytesIO
            filename: Name of the file
            enable_ocr: Whether to enable OCR fallback

        Returns:
            Tuple of (extracted_text, method_used)

        Raises:
            ExtractionError: If every method fails
        """
        start_time = time.time()

        chain: List[Tuple[str, Callable[[BytesIO, str], Tuple[str, bool]]]] = [
            ("PyPDF2", self.extract_with_pypdf2),
            ("pdfplumber", self.extract_with_pdfplumber),
        ]
        if enable_ocr:
            chain.append(("OCR", self.extract_with_ocr))

        for method, extract in chain:
            text, success = extract(file_bytes, filename)
            if success:
                duration = time.time() - start_time
                logger.info(f"{filename}: {method} success in {duration:.2f}s")
                return self.clean_text(text), method

        duration = time.time() - start_time
        logger.error(f"{filename}: All extraction methods failed in {duration:.2f}s")
        raise ExtractionError(
            f"Could not parse {filename}. Try exporting as .txt or simplify the layout."
        )
