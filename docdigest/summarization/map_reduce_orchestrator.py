"""
Map-Reduce Orchestrator - Sequential Chunk Summarization

Drives the completion endpoint for one document:

1. Map Phase: each chunk is summarized in index order, one request at a
   time. The prompt tells the model which part it is looking at ("i/N").
2. Reduce Phase: when there is more than one chunk, a single extra request
   merges the partial summaries into the final summary.

Images skip both phases and are summarized with one multimodal request.

Chunk requests are never issued concurrently: at most one completion call
is in flight per document, and partial summaries keep chunk order. Any
failure in the map phase aborts the document. A transport failure (or an
empty answer) in the reduce phase falls back to joining the partial
summaries in order.

Usage:
    from docdigest.ai import CompletionClient
    from docdigest.summarization import MapReduceOrchestrator

    orchestrator = MapReduceOrchestrator(CompletionClient(api_key), model="my-model")
    result = orchestrator.summarize_chunks(chunks)
    print(result.final_summary)
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING, Callable

from docdigest.ai.completion_client import image_part, text_message, text_part
from docdigest.config import (
    DEFAULT_IMAGE_MIME,
    FALLBACK_SUMMARY_SEPARATOR,
    REDUCE_INPUT_SEPARATOR,
)
from docdigest.errors import TransportError
from docdigest.logging_config import Timer, debug_log, info, warning
from docdigest.prompt_config import PromptConfig, get_prompt_config

from .result_types import Artifact, MapReduceResult, PartialSummary

if TYPE_CHECKING:
    from docdigest.ai.completion_client import CompletionClient
    from docdigest.chunking_engine import Chunk
    from docdigest.deadline import Deadline


class MapReduceOrchestrator:
    """
    Sequences per-chunk summarization and the final reduce call.

    Attributes:
        client: CompletionClient (or any object with the same complete() signature).
        model: Model identifier sent with every request.
        prompts: PromptConfig supplying prompt texts and generation parameters.
    """

    def __init__(
        self,
        client: CompletionClient,
        model: str,
        prompts: PromptConfig | None = None,
    ):
        self.client = client
        self.model = model
        self.prompts = prompts or get_prompt_config()

    def summarize_image(self, artifact: Artifact, deadline: Deadline | None = None) -> str:
        """
        Summarize an image with a single multimodal request.

        Args:
            artifact: Image artifact; its bytes are sent inline as a data URL.
            deadline: Optional overall deadline.

        Returns:
            The model's answer, unchanged.
        """
        if deadline is not None:
            deadline.check("image summarization")

        mime = (artifact.mime_type or "").strip().lower()
        if not mime.startswith("image/"):
            mime = DEFAULT_IMAGE_MIME
        encoded = base64.b64encode(artifact.data).decode('ascii')
        data_url = f"data:{mime};base64,{encoded}"

        messages = [
            text_message("user", [
                text_part(self.prompts.image_instruction()),
                image_part(data_url),
            ]),
        ]

        with Timer(f"Image summarization ({artifact.filename or 'unnamed'})"):
            return self.client.complete(
                self.model,
                messages,
                max_tokens=self.prompts.image_max_tokens,
                temperature=self.prompts.temperature,
                deadline=deadline,
            )

    def summarize_chunks(
        self,
        chunks: list[Chunk],
        deadline: Deadline | None = None,
        progress_callback: Callable[[int, str], None] | None = None,
    ) -> MapReduceResult:
        """
        Summarize document chunks and merge the results.

        Args:
            chunks: Chunks in index order (at least one).
            deadline: Optional overall deadline, checked before every request.
            progress_callback: Optional callback(percent, message).

        Returns:
            MapReduceResult with partial summaries and the final summary.

        Raises:
            TransportError: A chunk request failed.
            PipelineTimeoutError: The deadline expired.
        """
        if not chunks:
            raise ValueError("summarize_chunks() requires at least one chunk")

        total = len(chunks)
        partials: list[PartialSummary] = []

        for chunk in sorted(chunks, key=lambda c: c.index):
            part = chunk.index + 1

            if progress_callback:
                progress_callback(int(5 + (chunk.index / total) * 85), f"Summarizing part {part}/{total}")

            partials.append(PartialSummary(
                chunk_index=chunk.index,
                text=self._summarize_chunk(chunk.text, part, total, deadline),
            ))

        if total == 1:
            debug_log("[MAP-REDUCE] Single chunk: partial summary is the final summary")
            return MapReduceResult(final_summary=partials[0].text, partial_summaries=partials)

        if progress_callback:
            progress_callback(92, f"Merging {total} partial summaries")

        final_summary, fallback_used = self._reduce(partials, deadline)
        return MapReduceResult(
            final_summary=final_summary,
            partial_summaries=partials,
            reduce_called=True,
            reduce_fallback_used=fallback_used,
        )

    def _summarize_chunk(self, text: str, part: int, total: int, deadline: Deadline | None) -> str:
        """Map step: one request for one chunk."""
        if deadline is not None:
            deadline.check(f"part {part}/{total}")

        messages = [
            text_message("system", self.prompts.chunk_system_prompt()),
            text_message("user", self.prompts.chunk_user_prompt(part, total, text)),
        ]

        with Timer(f"Chunk summary {part}/{total} ({len(text)} chars)"):
            return self.client.complete(
                self.model,
                messages,
                max_tokens=self.prompts.chunk_max_tokens,
                temperature=self.prompts.temperature,
                deadline=deadline,
            )

    def _reduce(self, partials: list[PartialSummary], deadline: Deadline | None) -> tuple[str, bool]:
        """
        Reduce step: merge partial summaries with one request.

        Returns:
            (final_summary, fallback_used)
        """
        fallback = FALLBACK_SUMMARY_SEPARATOR.join(p.text for p in partials)

        if deadline is not None:
            deadline.check("reduce")

        messages = [
            text_message("system", self.prompts.reduce_system_prompt()),
            text_message("user", REDUCE_INPUT_SEPARATOR.join(p.text for p in partials)),
        ]

        try:
            with Timer(f"Reduce of {len(partials)} partial summaries"):
                merged = self.client.complete(
                    self.model,
                    messages,
                    max_tokens=self.prompts.reduce_max_tokens,
                    temperature=self.prompts.temperature,
                    deadline=deadline,
                )
        except TransportError as e:
            warning(f"[MAP-REDUCE] Reduce call failed ({e.message}); using concatenated partial summaries")
            return fallback, True

        if not merged.strip():
            warning("[MAP-REDUCE] Reduce call returned no text; using concatenated partial summaries")
            return fallback, True

        info(f"[MAP-REDUCE] Merged {len(partials)} partial summaries into {len(merged)} chars")
        return merged, False
