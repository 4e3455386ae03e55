"""
Plain text extraction (direct decode).
"""

from docdigest.extraction.base import TextExtractor


class PlainTextExtractor(TextExtractor):
    """Decodes UTF-8 bytes; invalid sequences are replaced rather than rejected."""

    name = "plain text"

    def extract(self, data: bytes) -> str:
        # utf-8-sig drops a leading byte order mark if one is present
        return data.decode('utf-8-sig', errors='replace')
