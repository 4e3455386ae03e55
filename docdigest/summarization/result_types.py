"""
Data Types for the Summarization Pipeline

All of these live for a single pipeline invocation and are never shared
between requests.

Key Types:
    Artifact - Uploaded bytes plus declared filename and mime type
    ExtractedDocument - Text extracted from an Artifact
    PartialSummary - Completion output for one chunk
    MapReduceResult - Partial summaries plus the final summary
    SummaryResult - Outcome of one summarize() call (summary or classified error)

Usage:
    artifact = Artifact.from_path("report.pdf")
    result = pipeline.summarize(artifact)
    if result.success:
        print(result.summary)
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from docdigest.extraction.format_detector import Format


@dataclass(frozen=True)
class Artifact:
    """
    An uploaded document or image.

    Attributes:
        data: Raw file contents.
        filename: Declared filename (may be empty).
        mime_type: Declared mime type (may be empty).
    """
    data: bytes
    filename: str = ""
    mime_type: str = ""

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> Artifact:
        """
        Read a file from disk into an Artifact.

        Args:
            path: File to read.
            mime_type: Declared mime type. Guessed from the extension if None.
        """
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(data=path.read_bytes(), filename=path.name, mime_type=mime_type)

    def __repr__(self) -> str:
        return f"Artifact(filename={self.filename!r}, mime_type={self.mime_type!r}, size={len(self.data)})"


@dataclass(frozen=True)
class ExtractedDocument:
    """Plain text extracted from an Artifact, with its source format."""
    text: str
    source_format: Format

    @property
    def char_count(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class PartialSummary:
    """Summary of one chunk. chunk_index matches Chunk.index."""
    chunk_index: int
    text: str


@dataclass
class MapReduceResult:
    """
    Output of the map-reduce orchestrator for one document.

    Attributes:
        final_summary: The summary returned to the caller.
        partial_summaries: One PartialSummary per chunk, in chunk order.
        reduce_called: Whether a reduce call was issued.
        reduce_fallback_used: Whether final_summary is the plain concatenation
            of partial summaries because the reduce call failed.
    """
    final_summary: str
    partial_summaries: list[PartialSummary] = field(default_factory=list)
    reduce_called: bool = False
    reduce_fallback_used: bool = False


@dataclass
class SummaryResult:
    """
    Result of summarizing one artifact.

    Attributes:
        filename: Declared filename of the artifact.
        summary: Final summary ("" on failure).
        source_format: Detected format (None if detection never ran).
        chunk_count: Number of chunks summarized (0 for images and failures).
        partial_summaries: Per-chunk summaries, in order.
        reduce_fallback_used: See MapReduceResult.
        processing_time_seconds: Wall-clock time for the invocation.
        success: Whether a summary was produced.
        error_classification: Error category on failure (configuration,
            validation, extraction, transport, timeout).
        error_reason: Refinement of the classification, if any.
        error_message: Error description on failure.
    """
    filename: str
    summary: str = ""
    source_format: Format | None = None
    chunk_count: int = 0
    partial_summaries: list[PartialSummary] = field(default_factory=list)
    reduce_fallback_used: bool = False
    processing_time_seconds: float = 0.0
    success: bool = True
    error_classification: str | None = None
    error_reason: str | None = None
    error_message: str | None = None

    def __post_init__(self):
        """Validate that failed results have an error message and classification."""
        if not self.success:
            if not self.error_message:
                self.error_message = "Unknown error during summarization"
            if not self.error_classification:
                self.error_classification = "error"

    def to_dict(self) -> dict:
        """
        Caller-facing representation: {"summary": ...} on success,
        {"error": ..., "classification": ..., "reason": ...} on failure.
        """
        if self.success:
            return {"summary": self.summary}
        return {
            "error": self.error_message,
            "classification": self.error_classification,
            "reason": self.error_reason,
        }
