"""
DOCX text extraction via python-docx.

Walks the document body in order so paragraphs and tables keep their
original interleaving. Each paragraph becomes one line; each table row
becomes one line with tab-separated cell text.
"""

import io

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from docx.text.paragraph import Paragraph

from docdigest.errors import ExtractionError, ExtractionKind
from docdigest.extraction.base import TextExtractor
from docdigest.logging_config import debug_log, error


class DocxExtractor(TextExtractor):
    """Extracts the linear text content of a Word document."""

    name = "DOCX"

    def extract(self, data: bytes) -> str:
        try:
            document = Document(io.BytesIO(data))
        except PackageNotFoundError as e:
            error(f"[DOCX] Not a valid DOCX package: {e}")
            raise ExtractionError("DOCX file is not a valid package", ExtractionKind.CORRUPT) from e
        except ValueError as e:
            # python-docx raises ValueError when the main part is not a Word document
            error(f"[DOCX] Unsupported document type: {e}")
            raise ExtractionError(
                f"DOCX package is not a Word document: {e}",
                ExtractionKind.UNSUPPORTED_SUBFORMAT,
            ) from e
        except Exception as e:
            error(f"[DOCX] Failed to open document: {e}", exc_info=True)
            raise ExtractionError(
                f"DOCX file appears to be corrupted or damaged: {e}",
                ExtractionKind.CORRUPT,
            ) from e

        try:
            lines = list(self._iter_block_text(document))
        except Exception as e:
            error(f"[DOCX] Failed to read document body: {e}", exc_info=True)
            raise ExtractionError(
                f"DOCX body could not be read: {e}", ExtractionKind.CORRUPT
            ) from e

        debug_log(f"[DOCX] Extracted {len(lines)} paragraphs/table rows")
        return "\n".join(lines)

    def _iter_block_text(self, document):
        """Yield the text of each paragraph and table row in body order."""
        for block in document.iter_inner_content():
            if isinstance(block, Paragraph):
                yield block.text
            elif isinstance(block, Table):
                for row in block.rows:
                    yield "\t".join(cell.text for cell in row.cells)
