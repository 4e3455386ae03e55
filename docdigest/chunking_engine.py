"""
Document Chunking Engine

Splits extracted document text into ordered, size-bounded chunks for the
map-reduce summarizer:

1. Token estimation: characters / CHARS_PER_TOKEN, rounded up
2. One-shot path: documents at or under the safe threshold stay whole
3. Window path: longer documents are cut into fixed-size character windows

Splitting is purely positional. Concatenating the chunks in order reproduces
the input text exactly (no overlap, no reordering, nothing dropped).
"""

import math
from dataclasses import dataclass

from docdigest.config import CHARS_PER_TOKEN, CHUNK_WINDOW_CHARS, SAFE_TOKEN_THRESHOLD
from docdigest.logging_config import debug_log


@dataclass
class Chunk:
    """Represents a single text chunk with metadata."""
    index: int  # 0-based position in the document
    text: str
    char_count: int = 0

    def __post_init__(self):
        """Keep char_count consistent with text."""
        if self.char_count != len(self.text):
            self.char_count = len(self.text)


class ChunkingEngine:
    """
    Positional document chunker driven by an estimated token budget.

    Attributes:
        safe_token_threshold: Estimated-token cutoff for the one-shot path.
        window_chars: Characters per chunk on the window path.
        chars_per_token: Characters counted as one estimated token.
    """

    def __init__(
        self,
        safe_token_threshold: int = SAFE_TOKEN_THRESHOLD,
        window_chars: int = CHUNK_WINDOW_CHARS,
        chars_per_token: int = CHARS_PER_TOKEN,
    ):
        if window_chars <= 0:
            raise ValueError(f"window_chars must be positive, got {window_chars}")
        if chars_per_token <= 0:
            raise ValueError(f"chars_per_token must be positive, got {chars_per_token}")
        if safe_token_threshold < 0:
            raise ValueError(f"safe_token_threshold must not be negative, got {safe_token_threshold}")

        self.safe_token_threshold = safe_token_threshold
        self.window_chars = window_chars
        self.chars_per_token = chars_per_token

    def estimate_tokens(self, text: str) -> int:
        """Estimate the token count of text (characters / chars_per_token, rounded up)."""
        return math.ceil(len(text) / self.chars_per_token)

    def chunk_text(self, text: str) -> list[Chunk]:
        """
        Split text into chunks.

        Args:
            text: Extracted document text.

        Returns:
            One Chunk holding the whole text if the estimate is within the safe
            threshold, otherwise ceil(len(text) / window_chars) window chunks.
        """
        estimated = self.estimate_tokens(text)

        if estimated <= self.safe_token_threshold:
            debug_log(
                f"[CHUNKING] {len(text)} chars (~{estimated} tokens) within "
                f"threshold {self.safe_token_threshold}: single chunk"
            )
            return [Chunk(index=0, text=text)]

        chunks = [
            Chunk(index=i, text=text[start:start + self.window_chars])
            for i, start in enumerate(range(0, len(text), self.window_chars))
        ]
        debug_log(
            f"[CHUNKING] {len(text)} chars (~{estimated} tokens) over threshold "
            f"{self.safe_token_threshold}: {len(chunks)} chunks of <= {self.window_chars} chars"
        )
        return chunks
