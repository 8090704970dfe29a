"""
Resume upload handling: turn an uploaded file into plain text and apply it
to the live session.
"""
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

from utils.sanitizers import sanitize_filename, sanitize_text

from .pdf_extractor import ExtractionError, PDFExtractor

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Dispatch uploads to the right extractor by file extension."""

    def __init__(self, config, pdf_extractor: Optional[PDFExtractor] = None):
        self.config = config
        self.pdf_extractor = pdf_extractor or PDFExtractor(config)

    def load(self, data: bytes, filename: str) -> Tuple[str, str]:
        """
        Convert an uploaded document to plain text.

        Args:
            data: Raw file bytes
            filename: Original file name

        Returns:
            Tuple of (text, method_used)

        Raises:
            ExtractionError: Unsupported type, undecodable text or unreadable PDF
        """
        safe_name = sanitize_filename(filename)
        lowered = safe_name.lower()

        if lowered.endswith('.pdf'):
            text, method = self.pdf_extractor.extract_with_fallback(
                BytesIO(data), safe_name, enable_ocr=bool(self.config.enable_ocr)
            )
            return sanitize_text(text), method

        if lowered.endswith('.txt'):
            try:
                text = data.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                raise ExtractionError(f"{safe_name} is not valid UTF-8 text: {e}") from e
            logger.info(f"Loaded {len(text)} chars of text from {safe_name}")
            return sanitize_text(text), "text"

        raise ExtractionError(f"Unsupported file type for {safe_name}; upload .txt or .pdf")


@dataclass(frozen=True)
class UploadOutcome:
    applied: bool
    message: str


class ResumeSession:
    """
    Live resume text plus upload bookkeeping.

    Each upload gets a generation number. Only the most recently started
    upload may replace the text; results for older generations are dropped.
    A failed upload leaves the current text untouched.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.generation = 0
        self.message: Optional[str] = None

    def set_text(self, text: str) -> None:
        """Direct edit from the text box; supersedes any pending upload."""
        self.generation += 1
        self.text = text

    def begin_upload(self) -> int:
        self.generation += 1
        self.message = "Parsing document…"
        return self.generation

    def complete_upload(self, generation: int, text: str, method: str = "text") -> UploadOutcome:
        if generation != self.generation:
            logger.info(f"Discarding stale upload result (generation {generation}, current {self.generation})")
            return UploadOutcome(False, "A newer upload replaced this one.")

        self.text = text
        if method == "text":
            self.message = "Loaded text file into editor."
        else:
            self.message = "PDF parsed to text. Review and clean up any spacing."
        return UploadOutcome(True, self.message)

    def fail_upload(self, generation: int, error: Exception) -> UploadOutcome:
        if generation != self.generation:
            logger.info(f"Ignoring failure of stale upload (generation {generation})")
            return UploadOutcome(False, "A newer upload replaced this one.")

        logger.warning(f"Upload failed: {error}")
        self.message = str(error)
        return UploadOutcome(False, self.message)

    def upload(self, loader: DocumentLoader, data: bytes, filename: str) -> UploadOutcome:
        """Run one upload end to end through ``loader``."""
        generation = self.begin_upload()
        try:
            text, method = loader.load(data, filename)
        except ExtractionError as e:
            return self.fail_upload(generation, e)
        return self.complete_upload(generation, text, method)
