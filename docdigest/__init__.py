"""
DocDigest - document and image summarization over a chat/completions endpoint.

    from docdigest import Artifact, build_default_pipeline

    result = build_default_pipeline().summarize(Artifact.from_path("report.pdf"))
"""

from docdigest.summarization import Artifact, SummaryResult, build_default_pipeline

__all__ = ['Artifact', 'SummaryResult', 'build_default_pipeline']

__version__ = "0.1.0"
