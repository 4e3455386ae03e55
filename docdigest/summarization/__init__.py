"""
Summarization Package for DocDigest - Unified API for Artifact Summarization.

Import everything summarization-related from this package:

    from docdigest.summarization import (
        Artifact, SummaryResult,
        SummarizationPipeline, build_default_pipeline,
        MapReduceOrchestrator,
    )

Architecture:
    ┌─────────────────────────────────────────────────────────────┐
    │  SummarizationPipeline.summarize(artifact)                  │
    │            ↓                                                │
    │  detect_format → ExtractorRegistry (or image passthrough)   │
    │            ↓                                                │
    │  ChunkingEngine (one-shot or fixed windows)                 │
    │            ↓                                                │
    │  MapReduceOrchestrator → CompletionClient                   │
    │            ↓                                                │
    │  Chunk Summaries → Reduce → Final Summary                   │
    └─────────────────────────────────────────────────────────────┘
"""

from .result_types import (
    Artifact,
    ExtractedDocument,
    MapReduceResult,
    PartialSummary,
    SummaryResult,
)

from .map_reduce_orchestrator import MapReduceOrchestrator

from .pipeline import SummarizationPipeline, build_default_pipeline

__all__ = [
    # Data types
    'Artifact',
    'ExtractedDocument',
    'PartialSummary',
    'MapReduceResult',
    'SummaryResult',
    # Orchestration
    'MapReduceOrchestrator',
    'SummarizationPipeline',
    'build_default_pipeline',
]
