"""
PPTX text extraction via python-pptx.

Slide order is preserved. For each slide the text of its shapes comes first,
followed by the speaker notes on a new line; either part is omitted when the
slide has none. Slides are separated by a blank line.
"""

import io

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE
from pptx.exc import PackageNotFoundError

from docdigest.errors import ExtractionError, ExtractionKind
from docdigest.extraction.base import TextExtractor
from docdigest.logging_config import debug_log, error


class PptxExtractor(TextExtractor):
    """Extracts slide text and speaker notes from a PowerPoint deck."""

    name = "PPTX"

    def extract(self, data: bytes) -> str:
        try:
            presentation = Presentation(io.BytesIO(data))
        except PackageNotFoundError as e:
            error(f"[PPTX] Not a valid PPTX package: {e}")
            raise ExtractionError("PPTX file is not a valid package", ExtractionKind.CORRUPT) from e
        except ValueError as e:
            # python-pptx raises ValueError when the main part is not a presentation
            error(f"[PPTX] Unsupported presentation type: {e}")
            raise ExtractionError(
                f"PPTX package is not a PowerPoint presentation: {e}",
                ExtractionKind.UNSUPPORTED_SUBFORMAT,
            ) from e
        except Exception as e:
            error(f"[PPTX] Failed to open presentation: {e}", exc_info=True)
            raise ExtractionError(
                f"PPTX file appears to be corrupted or damaged: {e}",
                ExtractionKind.CORRUPT,
            ) from e

        try:
            slides = [self._slide_text(slide) for slide in presentation.slides]
        except Exception as e:
            error(f"[PPTX] Failed to read slides: {e}", exc_info=True)
            raise ExtractionError(
                f"PPTX slides could not be read: {e}", ExtractionKind.CORRUPT
            ) from e

        debug_log(f"[PPTX] Extracted text from {len(slides)} slides")
        return "\n\n".join(slides).strip()

    def _slide_text(self, slide) -> str:
        """Combine a slide's shape text and speaker notes."""
        body = "\n".join(
            text for text in (self._shape_text(shape) for shape in self._iter_shapes(slide.shapes))
            if text.strip()
        )

        notes = ""
        if slide.has_notes_slide:
            notes_frame = slide.notes_slide.notes_text_frame
            if notes_frame is not None:
                notes = notes_frame.text

        return "\n".join(part for part in (body, notes) if part.strip())

    def _iter_shapes(self, shapes):
        """Yield shapes in z-order, descending into group shapes."""
        for shape in shapes:
            if shape.shape_type == MSO_SHAPE_TYPE.GROUP:
                yield from self._iter_shapes(shape.shapes)
            else:
                yield shape

    def _shape_text(self, shape) -> str:
        if shape.has_text_frame:
            return shape.text_frame.text
        if shape.has_table:
            return "\n".join(
                "\t".join(cell.text for cell in row.cells)
                for row in shape.table.rows
            )
        return ""
