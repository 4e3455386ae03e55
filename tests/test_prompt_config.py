"""
Tests for PromptConfig loading, merging and prompt rendering.
"""

from pathlib import Path

import pytest

from docdigest.prompt_config import PromptConfig

REPO_CONFIG = Path(__file__).parent.parent / "config" / "summarizer.yaml"


class TestLoading:

    def test_missing_file_uses_defaults(self, tmp_path):
        config = PromptConfig(config_path=tmp_path / "nope.yaml")
        assert config.language == "English"
        assert config.temperature == 0.2
        assert config.image_max_tokens == 600
        assert config.chunk_max_tokens == 800
        assert config.reduce_max_tokens == 1000

    def test_partial_file_merged_over_defaults(self, tmp_path):
        path = tmp_path / "summarizer.yaml"
        path.write_text("language: German\nchunk:\n  max_tokens: 500\n", encoding='utf-8')

        config = PromptConfig(config_path=path)

        assert config.language == "German"
        assert config.chunk_max_tokens == 500
        assert "{part}/{total}" in config.get('chunk', 'user')
        assert config.reduce_max_tokens == 1000

    @pytest.mark.parametrize("content", ["chunk: [unclosed", "- just\n- a list\n"])
    def test_unusable_file_uses_defaults(self, tmp_path, content):
        path = tmp_path / "summarizer.yaml"
        path.write_text(content, encoding='utf-8')

        config = PromptConfig(config_path=path)

        assert config.chunk_max_tokens == 800

    def test_language_argument_wins(self, tmp_path):
        path = tmp_path / "summarizer.yaml"
        path.write_text("language: German\n", encoding='utf-8')

        assert PromptConfig(config_path=path, language="Korean").language == "Korean"

    def test_repository_config_matches_defaults(self):
        config = PromptConfig(config_path=REPO_CONFIG)
        assert config.image_max_tokens == 600
        assert config.chunk_max_tokens == 800
        assert config.reduce_max_tokens == 1000
        assert config.temperature == 0.2

    def test_get_missing_key(self, prompts):
        assert prompts.get('chunk', 'nonexistent', default="fallback") == "fallback"


class TestRendering:

    def test_chunk_user_prompt(self, prompts):
        prompt = prompts.chunk_user_prompt(2, 5, "CHUNK TEXT")
        assert "2/5" in prompt
        assert prompt.endswith("CHUNK TEXT")
        assert "English" in prompt

    def test_chunk_text_with_braces_is_not_formatted(self, prompts):
        prompt = prompts.chunk_user_prompt(1, 1, "def f(): return {'a': 1}")
        assert "{'a': 1}" in prompt

    def test_language_in_instructions(self, tmp_path):
        config = PromptConfig(config_path=tmp_path / "nope.yaml", language="Korean")
        assert "Korean" in config.image_instruction()
        assert "Korean" in config.reduce_system_prompt()
