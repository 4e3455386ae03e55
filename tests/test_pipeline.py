"""
End-to-end tests for SummarizationPipeline with a fake completion client.

Extraction runs for real (plain text) or through a stub registry; only the
network boundary is replaced.
"""

from unittest.mock import MagicMock, patch

import pytest

from docdigest.ai.completion_client import CompletionClient
from docdigest.chunking_engine import ChunkingEngine
from docdigest.errors import (
    ConfigurationError,
    ExtractionError,
    ExtractionKind,
    PipelineTimeoutError,
    ValidationError,
)
from docdigest.extraction import Format
from docdigest.summarization import Artifact, SummarizationPipeline, build_default_pipeline

from conftest import FakeCompletionClient


def _txt(text, filename="notes.txt"):
    return Artifact(data=text.encode('utf-8'), filename=filename, mime_type="text/plain")


@pytest.fixture
def pipeline(fake_client, prompts):
    return SummarizationPipeline(fake_client, "test-model", prompts=prompts)


class TestSuccessfulRuns:

    def test_short_text_single_request(self, pipeline, fake_client):
        result = pipeline.summarize(_txt("a" * 100))

        assert result.success is True
        assert result.summary == "summary-1"
        assert result.chunk_count == 1
        assert result.source_format is Format.PLAIN_TEXT
        assert fake_client.call_count == 1
        assert "1/1" in fake_client.user_content(0)
        assert result.to_dict() == {"summary": "summary-1"}

    def test_long_text_three_chunks_then_reduce(self, fake_client, prompts):
        engine = ChunkingEngine(safe_token_threshold=5_000, window_chars=15_000)
        pipeline = SummarizationPipeline(fake_client, "test-model", chunking_engine=engine,
                                         prompts=prompts)

        result = pipeline.summarize(_txt("word " * 8_000))  # 40,000 chars

        assert result.success is True
        assert result.chunk_count == 3
        assert fake_client.call_count == 4
        for i in range(3):
            assert f"{i + 1}/3" in fake_client.user_content(i)
        assert fake_client.user_content(3) == "summary-1\n\n---\n\nsummary-2\n\n---\n\nsummary-3"
        assert result.summary == "summary-4"
        assert len(result.partial_summaries) == 3
        assert result.reduce_fallback_used is False

    def test_reduce_failure_still_succeeds(self, prompts, transport_failure):
        client = FakeCompletionClient(["one", "two", "three", transport_failure])
        engine = ChunkingEngine(safe_token_threshold=0, window_chars=10)
        pipeline = SummarizationPipeline(client, "test-model", chunking_engine=engine, prompts=prompts)

        result = pipeline.summarize(_txt("x" * 30))

        assert result.success is True
        assert result.summary == "one\n\ntwo\n\nthree"
        assert result.reduce_fallback_used is True

    def test_image_single_request(self, pipeline, fake_client):
        artifact = Artifact(data=b"\x89PNG", filename="", mime_type="image/png")

        result = pipeline.summarize(artifact)

        assert result.success is True
        assert result.source_format is Format.IMAGE
        assert result.chunk_count == 0
        assert fake_client.call_count == 1
        assert fake_client.calls[0]['max_tokens'] == 600

    def test_progress_reaches_complete(self, pipeline):
        callback = MagicMock()
        pipeline.summarize(_txt("hello world"), progress_callback=callback)
        assert callback.call_args_list[-1].args == (100, "Complete")

    def test_run_returns_summary_text(self, pipeline):
        assert pipeline.run(_txt("hello world")) == "summary-1"

    def test_independent_invocations(self, pipeline, fake_client):
        first = pipeline.summarize(_txt("first document"))
        second = pipeline.summarize(_txt("second document"))

        assert first.summary == "summary-1"
        assert second.summary == "summary-2"
        assert "second document" in fake_client.user_content(1)


class TestValidationFailures:

    @pytest.mark.parametrize("text", ["", "   \n\t  "])
    def test_blank_text_makes_no_requests(self, pipeline, fake_client, text):
        result = pipeline.summarize(_txt(text))

        assert result.success is False
        assert result.error_classification == "validation"
        assert result.error_reason == "empty_content"
        assert result.summary == ""
        assert fake_client.call_count == 0

    def test_unsupported_format(self, pipeline, fake_client):
        result = pipeline.summarize(Artifact(data=b"\x00\x01", filename="x.bin",
                                             mime_type="application/octet-stream"))

        assert result.success is False
        assert result.error_classification == "validation"
        assert result.error_reason == "unsupported_format"
        assert result.source_format is Format.UNSUPPORTED
        assert fake_client.call_count == 0

    def test_no_artifact(self, pipeline, fake_client):
        result = pipeline.summarize(None)

        assert result.success is False
        assert result.error_reason == "no_artifact"
        assert result.to_dict() == {
            "error": result.error_message,
            "classification": "validation",
            "reason": "no_artifact",
        }
        assert fake_client.call_count == 0

    def test_run_raises(self, pipeline):
        with pytest.raises(ValidationError) as exc_info:
            pipeline.run(_txt("  "))
        assert exc_info.value.reason == "empty_content"


class TestOtherFailures:

    def test_missing_model(self, fake_client, prompts):
        pipeline = SummarizationPipeline(fake_client, "  ", prompts=prompts)

        result = pipeline.summarize(_txt("hello"))

        assert result.success is False
        assert result.error_classification == "configuration"
        assert fake_client.call_count == 0

    def test_extraction_error_reported(self, fake_client, prompts):
        registry = MagicMock()
        registry.extract.side_effect = ExtractionError("Password protected",
                                                       ExtractionKind.UNSUPPORTED_SUBFORMAT)
        pipeline = SummarizationPipeline(fake_client, "test-model", extractor_registry=registry,
                                         prompts=prompts)

        result = pipeline.summarize(Artifact(data=b"%PDF", filename="locked.pdf"))

        assert result.success is False
        assert result.error_classification == "extraction"
        assert result.error_reason == "unsupported_subformat"
        assert result.source_format is Format.PDF
        assert fake_client.call_count == 0

    def test_chunk_transport_error_reported(self, prompts, transport_failure):
        client = FakeCompletionClient([transport_failure])
        pipeline = SummarizationPipeline(client, "test-model", prompts=prompts)

        result = pipeline.summarize(_txt("hello"))

        assert result.success is False
        assert result.error_classification == "transport"
        assert "502" in result.error_message

    def test_timeout_reported(self, prompts):
        client = FakeCompletionClient([PipelineTimeoutError("Deadline of 1s exceeded")])
        pipeline = SummarizationPipeline(client, "test-model", prompts=prompts)

        result = pipeline.summarize(_txt("hello"), timeout_seconds=1)

        assert result.success is False
        assert result.error_classification == "timeout"
        assert client.calls[0]['deadline'].timeout_seconds == 1


class TestBuildDefaultPipeline:

    def test_missing_model(self, monkeypatch):
        for name in ('DOCDIGEST_MODEL', 'TOGETHER_MODEL', 'TOGETHER_GEMMA_MODEL'):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv('DOCDIGEST_API_KEY', 'sk-test')

        with pytest.raises(ConfigurationError):
            build_default_pipeline()

    def test_missing_api_key(self, monkeypatch):
        for name in ('DOCDIGEST_API_KEY', 'TOGETHER_API_KEY'):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(ConfigurationError):
            build_default_pipeline(model="test-model")

    def test_model_from_environment(self, monkeypatch):
        monkeypatch.delenv('DOCDIGEST_MODEL', raising=False)
        monkeypatch.setenv('TOGETHER_MODEL', '  env-model  ')
        monkeypatch.setenv('DOCDIGEST_API_KEY', 'sk-test')

        pipeline = build_default_pipeline()

        assert pipeline.model == "env-model"

    def test_language_override(self, monkeypatch):
        monkeypatch.setenv('DOCDIGEST_API_KEY', 'sk-test')

        with patch('docdigest.summarization.pipeline.PromptConfig') as mock_config:
            build_default_pipeline(model="test-model", language="Korean")

        mock_config.assert_called_once_with(language="Korean")


class TestDeadlineAcrossPipeline:

    def test_response_finishing_after_deadline_is_timeout(self, prompts):
        """A reply that finishes streaming after the deadline is not a success."""
        clock = [100.0]

        def slow_post(*args, **kwargs):
            clock[0] += 10.0
            response = MagicMock()
            response.status_code = 200
            response.json.return_value = {"choices": [{"message": {"content": "late"}}]}
            return response

        client = CompletionClient(api_key="sk-test", api_url="https://example.test/v1/chat/completions")
        pipeline = SummarizationPipeline(client, "test-model", prompts=prompts)

        with patch('docdigest.deadline.time.monotonic', side_effect=lambda: clock[0]):
            with patch('docdigest.ai.completion_client.requests.post', side_effect=slow_post):
                result = pipeline.summarize(_txt("hello"), timeout_seconds=5)

        assert result.success is False
        assert result.error_classification == "timeout"
        assert result.summary == ""
