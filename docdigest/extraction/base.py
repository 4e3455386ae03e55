"""
Base class for format-specific text extractors.
"""

from abc import ABC, abstractmethod


class TextExtractor(ABC):
    """
    Converts the raw bytes of one document format into plain text.

    Implementations raise ExtractionError when the payload cannot be read.
    An empty return value is not an error here; the pipeline decides what
    to do with documents that have no text.
    """

    #: Short label used in log messages
    name: str = "text"

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """
        Extract plain text.

        Args:
            data: Raw file contents.

        Returns:
            The document's linear text content.
        """
        pass
