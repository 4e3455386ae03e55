"""
Format Detection

Classifies an uploaded artifact from its declared filename and mime type.
Only metadata is inspected; the payload itself is never read here.
"""

from enum import Enum

from docdigest.config import IMAGE_EXTENSIONS, PDF_MIME, PLAIN_TEXT_MIME, PPTX_MIME


class Format(Enum):
    """Input formats understood by the pipeline."""

    IMAGE = "image"
    PDF = "pdf"
    DOCX = "docx"
    PPTX = "pptx"
    PLAIN_TEXT = "txt"
    UNSUPPORTED = "unsupported"


SUPPORTED_INPUTS_MESSAGE = "Supported inputs: PDF, DOCX, PPTX, TXT, images (PNG/JPG/JPEG/WEBP)"


def detect_format(filename: str | None, mime_type: str | None) -> Format:
    """
    Classify an artifact.

    Rules are applied in order; the first match wins:
    image mime prefix or image extension, then PDF, DOCX, PPTX, plain text.

    Args:
        filename: Declared filename (may be empty or None)
        mime_type: Declared mime type (may be empty or None)

    Returns:
        The detected Format (UNSUPPORTED when nothing matches)
    """
    name = (filename or "").strip().lower()
    mime = (mime_type or "").strip().lower()

    if mime.startswith("image/") or name.endswith(IMAGE_EXTENSIONS):
        return Format.IMAGE
    if name.endswith(".pdf") or mime == PDF_MIME:
        return Format.PDF
    if name.endswith(".docx"):
        return Format.DOCX
    if name.endswith(".pptx") or mime == PPTX_MIME:
        return Format.PPTX
    if mime == PLAIN_TEXT_MIME or name.endswith(".txt"):
        return Format.PLAIN_TEXT
    return Format.UNSUPPORTED
