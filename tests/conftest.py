"""
Shared fixtures for DocDigest tests.

FakeCompletionClient stands in for CompletionClient: it records every
request and answers from a script (or echoes a marker per call).
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from docdigest.errors import TransportError
from docdigest.prompt_config import PromptConfig


class FakeCompletionClient:
    """
    Records complete() calls and returns scripted responses.

    Args:
        responses: Optional list of return values (str) or exceptions, used in
            call order. When exhausted (or not given), each call returns
            "summary-<n>" where n is the 1-based call number.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def complete(self, model, messages, max_tokens=None, temperature=None, deadline=None):
        self.calls.append({
            'model': model,
            'messages': messages,
            'max_tokens': max_tokens,
            'temperature': temperature,
            'deadline': deadline,
        })
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return f"summary-{len(self.calls)}"

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def user_content(self, call_index: int):
        """Content of the user message of a recorded call."""
        for message in self.calls[call_index]['messages']:
            if message['role'] == 'user':
                return message['content']
        return None

    def system_content(self, call_index: int):
        for message in self.calls[call_index]['messages']:
            if message['role'] == 'system':
                return message['content']
        return None


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def prompts(tmp_path):
    """PromptConfig built from defaults only (no file on disk)."""
    return PromptConfig(config_path=tmp_path / "missing.yaml")


@pytest.fixture
def transport_failure():
    return TransportError(502, '{"error": "bad gateway"}')
