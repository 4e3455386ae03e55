"""
Extractor Registry

Maps each text-bearing Format to the extractor that handles it. The mapping
is plain data (dotted import paths), so the parsing library behind a format
(pdfplumber, python-docx, python-pptx) is imported only when a document of
that format is actually processed. Constructed extractors are cached on the
registry instance.
"""

import importlib

from docdigest.errors import ValidationError, ValidationReason
from docdigest.extraction.base import TextExtractor
from docdigest.extraction.format_detector import SUPPORTED_INPUTS_MESSAGE, Format
from docdigest.logging_config import Timer

DEFAULT_EXTRACTORS = {
    Format.PDF: "docdigest.extraction.pdf_extractor:PdfExtractor",
    Format.DOCX: "docdigest.extraction.docx_extractor:DocxExtractor",
    Format.PPTX: "docdigest.extraction.pptx_extractor:PptxExtractor",
    Format.PLAIN_TEXT: "docdigest.extraction.plain_text_extractor:PlainTextExtractor",
}


class ExtractorRegistry:
    """
    Lazily constructs and caches one extractor per Format.

    Attributes:
        targets: Format -> "module.path:ClassName" for the extractor class.
    """

    def __init__(self, targets: dict[Format, str] | None = None):
        self.targets = dict(DEFAULT_EXTRACTORS if targets is None else targets)
        self._instances: dict[Format, TextExtractor] = {}

    def supports(self, fmt: Format) -> bool:
        return fmt in self.targets

    def get(self, fmt: Format) -> TextExtractor:
        """
        Return the extractor for fmt, importing and constructing it on first use.

        Raises:
            ValidationError: fmt has no registered extractor (Image, Unsupported).
        """
        if fmt in self._instances:
            return self._instances[fmt]

        target = self.targets.get(fmt)
        if target is None:
            raise ValidationError(
                f"No text extractor for format '{fmt.value}'. {SUPPORTED_INPUTS_MESSAGE}",
                ValidationReason.UNSUPPORTED_FORMAT,
            )

        module_path, class_name = target.split(":")
        with Timer(f"Loading {fmt.value} extractor"):
            module = importlib.import_module(module_path)
            extractor = getattr(module, class_name)()

        self._instances[fmt] = extractor
        return extractor

    def extract(self, fmt: Format, data: bytes) -> str:
        """Extract text from data using the extractor registered for fmt."""
        extractor = self.get(fmt)
        with Timer(f"{extractor.name} text extraction"):
            return extractor.extract(data)
