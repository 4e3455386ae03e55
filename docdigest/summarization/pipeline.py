"""
Summarization Pipeline - artifact in, summary (or classified error) out

Wires the stages together for one uploaded artifact:

    detect_format → (ExtractorRegistry | image passthrough)
                  → ChunkingEngine → MapReduceOrchestrator → CompletionClient

Each call to summarize() is independent; nothing is kept between calls
except stateless extractor instances cached by the registry. Failures are
fail-fast: the first classified error ends the invocation and is reported
in the returned SummaryResult.

Usage:
    from docdigest.summarization import Artifact, build_default_pipeline

    pipeline = build_default_pipeline()
    result = pipeline.summarize(Artifact.from_path("deck.pptx"), timeout_seconds=120)
    print(result.summary if result.success else result.error_message)
"""

from __future__ import annotations

import time
from typing import Callable

from docdigest.ai.completion_client import CompletionClient
from docdigest.chunking_engine import ChunkingEngine
from docdigest.config import get_api_key, get_model_name
from docdigest.deadline import Deadline
from docdigest.errors import (
    ConfigurationError,
    SummarizationError,
    ValidationError,
    ValidationReason,
)
from docdigest.extraction.format_detector import SUPPORTED_INPUTS_MESSAGE, Format, detect_format
from docdigest.extraction.registry import ExtractorRegistry
from docdigest.logging_config import Timer, debug_log, error, info
from docdigest.prompt_config import PromptConfig

from .map_reduce_orchestrator import MapReduceOrchestrator
from .result_types import Artifact, ExtractedDocument, SummaryResult


class SummarizationPipeline:
    """
    Summarizes one artifact per call.

    Attributes:
        model: Completion model identifier.
        chunking_engine: Splits extracted text into chunks.
        extractor_registry: Provides format-specific extractors.
        orchestrator: Issues the completion requests.
    """

    def __init__(
        self,
        client: CompletionClient,
        model: str,
        chunking_engine: ChunkingEngine | None = None,
        extractor_registry: ExtractorRegistry | None = None,
        prompts: PromptConfig | None = None,
    ):
        self.model = (model or "").strip()
        self.chunking_engine = chunking_engine or ChunkingEngine()
        self.extractor_registry = extractor_registry or ExtractorRegistry()
        self.orchestrator = MapReduceOrchestrator(client, self.model, prompts)

    def summarize(
        self,
        artifact: Artifact | None,
        timeout_seconds: float | None = None,
        progress_callback: Callable[[int, str], None] | None = None,
    ) -> SummaryResult:
        """
        Summarize an artifact, reporting failures as a classified result.

        Args:
            artifact: The uploaded document or image.
            timeout_seconds: Optional overall deadline for this call.
            progress_callback: Optional callback(percent, message).

        Returns:
            SummaryResult; success=False carries error_classification,
            error_reason and error_message.
        """
        start_time = time.time()
        filename = artifact.filename if artifact is not None else ""
        result = SummaryResult(filename=filename)

        try:
            self._run(artifact, result, Deadline.from_timeout(timeout_seconds), progress_callback)
        except SummarizationError as e:
            error(f"[PIPELINE] {filename or '<no artifact>'}: {e.classification} error: {e.message}")
            result.summary = ""
            result.success = False
            result.error_classification = e.classification
            result.error_reason = e.reason
            result.error_message = e.message

        result.processing_time_seconds = time.time() - start_time
        if result.success:
            info(
                f"[PIPELINE] {filename}: {len(result.summary)} chars from "
                f"{result.chunk_count} chunk(s) in {result.processing_time_seconds:.1f}s"
            )
        return result

    def run(
        self,
        artifact: Artifact | None,
        timeout_seconds: float | None = None,
        progress_callback: Callable[[int, str], None] | None = None,
    ) -> str:
        """
        Summarize an artifact and return the summary text.

        Same as summarize(), but classified failures are raised instead of
        returned.
        """
        result = SummaryResult(filename=artifact.filename if artifact is not None else "")
        self._run(artifact, result, Deadline.from_timeout(timeout_seconds), progress_callback)
        return result.summary

    def _run(
        self,
        artifact: Artifact | None,
        result: SummaryResult,
        deadline: Deadline | None,
        progress_callback: Callable[[int, str], None] | None,
    ):
        """Execute the stages, filling in result. Raises SummarizationError."""
        if not self.model:
            raise ConfigurationError("Missing completion model identifier")

        if artifact is None:
            raise ValidationError("No file was supplied", ValidationReason.NO_ARTIFACT)

        fmt = detect_format(artifact.filename, artifact.mime_type)
        result.source_format = fmt
        debug_log(f"[PIPELINE] {artifact!r} detected as {fmt.value}")

        if fmt is Format.UNSUPPORTED:
            raise ValidationError(
                f"Unsupported file type. {SUPPORTED_INPUTS_MESSAGE}",
                ValidationReason.UNSUPPORTED_FORMAT,
            )

        if fmt is Format.IMAGE:
            if progress_callback:
                progress_callback(10, "Summarizing image")
            result.summary = self.orchestrator.summarize_image(artifact, deadline)
            if progress_callback:
                progress_callback(100, "Complete")
            return

        if progress_callback:
            progress_callback(2, f"Extracting {fmt.value} text")
        document = self._extract(artifact, fmt)
        if deadline is not None:
            deadline.check("chunking")

        with Timer("Chunking"):
            chunks = self.chunking_engine.chunk_text(document.text)
        result.chunk_count = len(chunks)
        debug_log(f"[PIPELINE] {artifact.filename}: {len(chunks)} chunk(s)")

        outcome = self.orchestrator.summarize_chunks(chunks, deadline, progress_callback)
        result.summary = outcome.final_summary
        result.partial_summaries = outcome.partial_summaries
        result.reduce_fallback_used = outcome.reduce_fallback_used

        if progress_callback:
            progress_callback(100, "Complete")

    def _extract(self, artifact: Artifact, fmt: Format) -> ExtractedDocument:
        """Extract text and reject documents with no readable content."""
        text = self.extractor_registry.extract(fmt, artifact.data)
        if not text.strip():
            raise ValidationError(
                "The document contains no readable text",
                ValidationReason.EMPTY_CONTENT,
            )
        debug_log(f"[PIPELINE] Extracted {len(text)} chars from {artifact.filename or 'artifact'}")
        return ExtractedDocument(text=text, source_format=fmt)


def build_default_pipeline(
    model: str | None = None,
    language: str | None = None,
) -> SummarizationPipeline:
    """
    Build a pipeline from environment configuration.

    Args:
        model: Model identifier override. Defaults to get_model_name().
        language: Output language override for the prompts.

    Raises:
        ConfigurationError: No model identifier or API key is configured.
    """
    model = (model or get_model_name()).strip()
    if not model:
        raise ConfigurationError(
            "Missing completion model identifier (set DOCDIGEST_MODEL or TOGETHER_MODEL)"
        )

    client = CompletionClient(api_key=get_api_key())
    prompts = PromptConfig(language=language) if language else None
    return SummarizationPipeline(client, model, prompts=prompts)
