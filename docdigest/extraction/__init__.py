"""
Extraction Package

Handles the first stages of the summarization pipeline:
- Format detection from the declared filename and mime type
- Conversion of PDF/DOCX/PPTX/TXT bytes into plain text

Concrete extractors are loaded on demand through ExtractorRegistry, so they
are not imported here.
"""

from docdigest.extraction.base import TextExtractor
from docdigest.extraction.format_detector import Format, detect_format
from docdigest.extraction.registry import ExtractorRegistry

__all__ = ['ExtractorRegistry', 'Format', 'TextExtractor', 'detect_format']
