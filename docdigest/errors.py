"""
Error Taxonomy for the DocDigest Pipeline

Every failure the pipeline reports to its caller is one of the classes below.
Each carries a ``classification`` string (the category reported in a failed
SummaryResult) and an optional ``reason`` refining it.

    SummarizationError
        ├── ConfigurationError   (configuration)
        ├── ValidationError      (validation: no_artifact / unsupported_format / empty_content)
        ├── ExtractionError      (extraction: corrupt / unsupported_subformat)
        ├── TransportError       (transport: carries status_code and body)
        └── PipelineTimeoutError (timeout)
"""

from __future__ import annotations

from enum import Enum


class ValidationReason(str, Enum):
    """Why an artifact was rejected before summarization."""

    NO_ARTIFACT = "no_artifact"
    UNSUPPORTED_FORMAT = "unsupported_format"
    EMPTY_CONTENT = "empty_content"


class ExtractionKind(str, Enum):
    """Why a recognized document could not be converted to text."""

    CORRUPT = "corrupt"
    UNSUPPORTED_SUBFORMAT = "unsupported_subformat"


class SummarizationError(Exception):
    """
    Base error for all classified pipeline failures.

    Attributes:
        message: Human-readable error message.
        reason: Optional refinement of the classification.
    """

    classification = "error"

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


class ConfigurationError(SummarizationError):
    """Required configuration (model identifier, credential) is missing."""

    classification = "configuration"


class ValidationError(SummarizationError):
    """The artifact is absent, unsupported, or has no readable content."""

    classification = "validation"

    def __init__(self, message: str, reason: ValidationReason):
        super().__init__(message, reason.value)


class ExtractionError(SummarizationError):
    """A document of a recognized format could not be read."""

    classification = "extraction"

    def __init__(self, message: str, kind: ExtractionKind = ExtractionKind.CORRUPT):
        super().__init__(message, kind.value)
        self.kind = kind


class TransportError(SummarizationError):
    """
    The completion endpoint did not return a success status.

    Attributes:
        status_code: HTTP status, or None when no response was received.
        body: Raw response body (or the underlying error text).
    """

    classification = "transport"

    def __init__(self, status_code: int | None, body: str):
        if status_code is None:
            message = f"Completion request failed: {body}"
        else:
            message = f"Completion endpoint returned status {status_code}: {body}"
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class PipelineTimeoutError(SummarizationError):
    """The caller's deadline expired before the pipeline finished."""

    classification = "timeout"
