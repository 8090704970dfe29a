"""Document-to-text extraction."""
from .pdf_extractor import ExtractionError, PDFExtractor
from .document_loader import DocumentLoader, ResumeSession, UploadOutcome

__all__ = [
    'DocumentLoader',
    'ExtractionError',
    'PDFExtractor',
    'ResumeSession',
    'UploadOutcome',
]
