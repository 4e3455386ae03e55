"""
Deadline - caller-supplied time budget for one pipeline invocation.

A Deadline is created once per summarize() call and threaded through the
orchestrator into every completion request. Components ask it how much time
is left (to bound a blocking HTTP call) and call check() between stages.
"""

from __future__ import annotations

import time

from docdigest.errors import PipelineTimeoutError


class Deadline:
    """
    Absolute point in time after which the pipeline must stop.

    Attributes:
        timeout_seconds: The budget the deadline was created with.
        expires_at: time.monotonic() value at which the budget runs out.
    """

    def __init__(self, timeout_seconds: float):
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")
        self.timeout_seconds = timeout_seconds
        self.expires_at = time.monotonic() + timeout_seconds

    @classmethod
    def from_timeout(cls, timeout_seconds: float | None) -> Deadline | None:
        """Build a Deadline, or None when no timeout was requested."""
        if timeout_seconds is None:
            return None
        return cls(timeout_seconds)

    def remaining(self) -> float:
        """Seconds left before expiry (never negative)."""
        return max(0.0, self.expires_at - time.monotonic())

    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, stage: str = "pipeline"):
        """
        Raise PipelineTimeoutError if the deadline has passed.

        Args:
            stage: Name of the step about to run (used in the error message).
        """
        if self.expired():
            raise PipelineTimeoutError(
                f"Deadline of {self.timeout_seconds:g}s exceeded before {stage}"
            )
