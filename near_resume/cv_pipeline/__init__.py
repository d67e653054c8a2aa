"""Résumé pipeline: text extraction (PDF/DOCX), LLM rewrite, deterministic post-processing."""

from typing import Optional

from near_resume.cv_pipeline.post_processor import ResumePostProcessor, process_resume
from near_resume.cv_pipeline.resume_rewriter import apply_feedback, rewrite_resume
from near_resume.cv_pipeline.resume_validator import coerce_resume
from near_resume.cv_pipeline.text_extractor import extract_text_from_file
from near_resume.schemas.resume import Resume
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)


def run_resume_pipeline(file_bytes: bytes, filename: str) -> Optional[Resume]:
    """
    Run the full pipeline: extract text from file, LLM rewrite, post-process.
    Returns None when the file cannot be read or the rewrite fails.
    """
    raw_text = extract_text_from_file(file_bytes, filename)
    if not raw_text:
        logger.warning("No text extracted from %s", filename)
        return None
    raw_resume = rewrite_resume(raw_text)
    if raw_resume is None:
        return None
    return process_resume(raw_resume)


__all__ = [
    "run_resume_pipeline",
    "extract_text_from_file",
    "rewrite_resume",
    "apply_feedback",
    "coerce_resume",
    "process_resume",
    "ResumePostProcessor",
    "Resume",
]
