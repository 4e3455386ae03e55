"""
Completion Client for DocDigest
Calls an OpenAI-compatible chat/completions endpoint over HTTPS.

This is the only network boundary of the pipeline. It supports:
- Text-only requests (system/user/assistant messages with string content)
- Multimodal requests (user content as an ordered list of text and
  inline image parts)

Failures are reported as classified errors:
- TransportError: non-2xx status (status code and raw body preserved),
  connection failures, request-level timeouts
- PipelineTimeoutError: the caller's deadline ran out during the call

There are no retries here; the caller decides what a failure means.
"""

from __future__ import annotations

import time
from typing import Any

import requests

from docdigest.config import COMPLETIONS_API_URL, COMPLETIONS_TIMEOUT_SECONDS
from docdigest.deadline import Deadline
from docdigest.errors import ConfigurationError, PipelineTimeoutError, TransportError
from docdigest.logging_config import debug_log, debug_timing

ROLES = ("system", "user", "assistant")


def text_part(text: str) -> dict[str, Any]:
    """Text element of a multimodal user message."""
    return {"type": "text", "text": text}


def image_part(data_url: str) -> dict[str, Any]:
    """Inline image element of a multimodal user message (data: URL)."""
    return {"type": "image_url", "image_url": {"url": data_url}}


def text_message(role: str, content: str | list[dict[str, Any]]) -> dict[str, Any]:
    """
    Build a role-tagged message.

    Args:
        role: One of "system", "user", "assistant"
        content: Plain text, or a list of text_part()/image_part() elements

    Raises:
        ValueError: Unknown role
    """
    if role not in ROLES:
        raise ValueError(f"Unknown message role '{role}'. Expected one of {ROLES}")
    return {"role": role, "content": content}


class CompletionClient:
    """
    Blocking client for the chat/completions endpoint.

    Attributes:
        api_url: Full URL of the chat/completions endpoint.
        timeout_seconds: Upper bound for a single request.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = COMPLETIONS_API_URL,
        timeout_seconds: float = COMPLETIONS_TIMEOUT_SECONDS,
    ):
        if not (api_key or "").strip():
            raise ConfigurationError("Missing API key for the completion endpoint")
        self._api_key = api_key.strip()
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _request_timeout(self, deadline: Deadline | None) -> float:
        """Per-request timeout, shortened to whatever the deadline has left."""
        if deadline is None:
            return self.timeout_seconds
        deadline.check("completion request")
        remaining = deadline.remaining()
        if remaining <= 0:
            raise PipelineTimeoutError(
                f"Deadline of {deadline.timeout_seconds:g}s exceeded before completion request"
            )
        return min(self.timeout_seconds, remaining)

    def complete(
        self,
        model: str,
        messages: list[dict[str, Any]],
        max_tokens: int | None = None,
        temperature: float | None = None,
        deadline: Deadline | None = None,
    ) -> str:
        """
        Request a completion and return the first choice's text.

        Args:
            model: Model identifier
            messages: Ordered role-tagged messages (see text_message())
            max_tokens: Optional cap on generated tokens
            temperature: Optional sampling temperature
            deadline: Optional overall deadline for the pipeline

        Returns:
            str: choices[0].message.content, or "" if the response has none

        Raises:
            TransportError: Non-success status or no response
            PipelineTimeoutError: The deadline expired during the call
        """
        payload: dict[str, Any] = {"model": model, "messages": messages}
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if temperature is not None:
            payload["temperature"] = temperature

        timeout = self._request_timeout(deadline)

        debug_log(
            f"[COMPLETION] model={model} messages={len(messages)} "
            f"max_tokens={max_tokens} temperature={temperature} timeout={timeout:.1f}s"
        )

        start_time = time.time()
        try:
            response = requests.post(
                self.api_url,
                json=payload,
                headers=self._headers(),
                timeout=timeout,
            )
        except requests.exceptions.Timeout as e:
            if deadline is not None and deadline.expired():
                raise PipelineTimeoutError(
                    f"Deadline of {deadline.timeout_seconds:g}s exceeded during completion request"
                ) from e
            raise TransportError(None, f"request timed out after {timeout:.1f}s") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(None, str(e)) from e

        elapsed = time.time() - start_time
        self._check_deadline_after_response(deadline)

        if not 200 <= response.status_code < 300:
            debug_log(f"[COMPLETION] Endpoint returned {response.status_code} after {elapsed:.2f}s")
            raise TransportError(response.status_code, response.text)

        content = self._extract_content(response)
        debug_timing(f"[COMPLETION] Request ({len(content)} chars returned)", elapsed)
        return content

    def _check_deadline_after_response(self, deadline: Deadline | None):
        """
        Fail a request whose response finished after the deadline.

        The requests timeout bounds each socket read, not the whole transfer,
        so a slowly streamed body can outlive the deadline.
        """
        if deadline is not None and deadline.expired():
            raise PipelineTimeoutError(
                f"Deadline of {deadline.timeout_seconds:g}s exceeded during completion request"
            )

    def _extract_content(self, response: requests.Response) -> str:
        """Pull choices[0].message.content out of a response, defaulting to ""."""
        try:
            data = response.json()
        except ValueError:
            debug_log("[COMPLETION] Response body is not JSON; treating as empty")
            return ""

        if not isinstance(data, dict):
            return ""
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            return ""
        content = message.get("content")
        return content if isinstance(content, str) else ""
