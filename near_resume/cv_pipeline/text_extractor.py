"""Extract raw text from uploaded résumé files (PDF, DOCX). In-memory only."""

import re
import unicodedata
from io import BytesIO
from typing import List, Optional

import pdfplumber
from docx import Document

from near_resume.config import SUPPORTED_EXTENSIONS
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)

# Below this, a PDF is most likely a scan with no text layer
MIN_PDF_TEXT_CHARS = 100


def _normalize_unicode(text: str) -> str:
    """Normalize unicode (NFC) and replace problematic chars."""
    if not text:
        return ""
    text = unicodedata.normalize("NFC", text)
    return text.replace("\u00a0", " ").replace("\u200b", "")


def _clean_resume_text(text: str, max_chars: int = 50000) -> str:
    """Remove excessive whitespace and normalize unicode for résumé content."""
    if not text or not text.strip():
        return ""
    t = _normalize_unicode(text)
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    t = t.strip()
    if len(t) > max_chars:
        t = t[:max_chars] + "\n\n[Content truncated.]"
    return t


def _extract_pdf(bytes_io: BytesIO) -> Optional[str]:
    """Extract text from PDF using pdfplumber."""
    try:
        with pdfplumber.open(bytes_io) as pdf:
            parts = []
            for page in pdf.pages:
                ptext = page.extract_text()
                if ptext:
                    parts.append(ptext)
    except Exception as e:
        logger.exception("PDF extraction failed: %s", e)
        return None
    text = "\n\n".join(parts)
    if len(text.strip()) < MIN_PDF_TEXT_CHARS:
        logger.warning("PDF yielded only %s characters; it may be a scanned document", len(text.strip()))
    return text or None


def _extract_docx(bytes_io: BytesIO) -> Optional[str]:
    """Extract text from DOCX using python-docx, including table cells (common in résumé templates)."""
    try:
        doc = Document(bytes_io)
        parts: List[str] = [p.text for p in doc.paragraphs if p.text.strip()]
        for table in doc.tables:
            for row in table.rows:
                cells = [c.text.strip() for c in row.cells if c.text.strip()]
                if cells:
                    parts.append(" | ".join(dict.fromkeys(cells)))
    except Exception as e:
        logger.exception("DOCX extraction failed: %s", e)
        return None
    return "\n\n".join(parts) if parts else None


def is_supported_file(filename: str) -> bool:
    return (filename or "").lower().strip().endswith(SUPPORTED_EXTENSIONS)


def extract_text_from_file(file_bytes: bytes, filename: str) -> Optional[str]:
    """
    Extract and clean text from an uploaded résumé (PDF or DOCX).
    File is read from bytes in memory; no disk write.
    Returns cleaned text or None if unsupported type or extraction fails.
    """
    if not is_supported_file(filename):
        logger.warning("Unsupported file type: %s", filename)
        return None

    bio = BytesIO(file_bytes)
    if filename.lower().strip().endswith(".pdf"):
        raw = _extract_pdf(bio)
    else:
        raw = _extract_docx(bio)

    if not raw or not raw.strip():
        return None
    return _clean_resume_text(raw)
