"""
PDF text extraction via pdfplumber.

Reads the digital text layer of every page in order. Scanned PDFs without a
text layer produce empty text, which the pipeline reports as empty content.
"""

import io

import pdfplumber

from docdigest.config import DEBUG_MODE
from docdigest.errors import ExtractionError, ExtractionKind
from docdigest.extraction.base import TextExtractor
from docdigest.logging_config import debug_log, error


class PdfExtractor(TextExtractor):
    """Extracts the linear text content of a PDF."""

    name = "PDF"

    def extract(self, data: bytes) -> str:
        text = ""
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                page_count = len(pdf.pages)
                debug_log(f"[PDF] Document has {page_count} pages")

                for i, page in enumerate(pdf.pages, 1):
                    if DEBUG_MODE and i % 10 == 0:
                        debug_log(f"[PDF] Extracting page {i}/{page_count}")

                    page_text = page.extract_text()
                    if page_text:
                        text += page_text + "\n"

        except Exception as e:
            raise self._classify_failure(e) from e

        return text

    def _classify_failure(self, exc: Exception) -> ExtractionError:
        """
        Map a pdfplumber/pdfminer failure onto an ExtractionError.

        pdfminer reports encryption problems through several exception types
        depending on version, so the message text is inspected as well.
        """
        error_msg = f"{type(exc).__name__} {exc}".lower()

        if "password" in error_msg or "encrypt" in error_msg:
            error("[PDF] PDF is password-protected or encrypted")
            return ExtractionError(
                "PDF is password-protected or encrypted",
                ExtractionKind.UNSUPPORTED_SUBFORMAT,
            )

        error(f"[PDF] Failed to extract PDF text: {exc}", exc_info=True)
        return ExtractionError(
            f"PDF file appears to be corrupted or damaged: {exc}",
            ExtractionKind.CORRUPT,
        )
