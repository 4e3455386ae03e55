"""
Prompt Parameters Configuration Loader
Loads the prompt texts and generation settings used by the map-reduce summarizer.
"""

import copy
from pathlib import Path
from typing import Any

import yaml

from docdigest.config import SUMMARIZER_CONFIG_FILE
from docdigest.logging_config import debug_log


class PromptConfig:
    """
    Loads and provides access to prompt parameters.

    This class reads summarizer.yaml and provides easy access to settings,
    with fallback defaults for anything the file does not define.
    """

    # Default values (used if config file is missing, corrupted, or partial)
    DEFAULTS = {
        "language": "English",
        "generation": {
            "temperature": 0.2,
        },
        "image": {
            "max_tokens": 600,
            "instruction": (
                "Summarize this image concisely in {language}. "
                "Give 3 to 6 key bullet points."
            ),
        },
        "chunk": {
            "max_tokens": 800,
            "system": (
                "Summarize the document in a structured way. Itemize the key points, "
                "the supporting evidence and figures, and any limitations or caveats."
            ),
            "user": "Concisely summarize part {part}/{total} of the document in {language}:\n\n{text}",
        },
        "reduce": {
            "max_tokens": 1000,
            "system": (
                "Merge the partial summaries below into one coherent final summary in {language}. "
                "Remove duplicates, itemize clearly, and finish with a conclusion and action items."
            ),
        },
    }

    def __init__(self, config_path: Path | None = None, language: str | None = None):
        """
        Initialize and load prompt parameters.

        Args:
            config_path: YAML file to read. Defaults to SUMMARIZER_CONFIG_FILE.
            language: Output language override (takes precedence over the file).
        """
        self.config_path = Path(config_path) if config_path else SUMMARIZER_CONFIG_FILE
        self._params = self._load_params()
        if language:
            self._params["language"] = language

    def _load_params(self) -> dict[str, Any]:
        """
        Load parameters from the YAML file, merged over DEFAULTS.

        Returns:
            dict: Loaded parameters, or defaults if the file is unusable
        """
        params = copy.deepcopy(self.DEFAULTS)
        if not self.config_path.exists():
            debug_log(f"[PROMPT CONFIG] {self.config_path} not found. Using default values.")
            return params

        try:
            with open(self.config_path, encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            debug_log(f"[PROMPT CONFIG] Error loading {self.config_path}: {e}")
            debug_log("[PROMPT CONFIG] Using default values.")
            return params

        if not isinstance(loaded, dict):
            debug_log("[PROMPT CONFIG] Top level of config is not a mapping. Using default values.")
            return params

        self._merge(params, loaded)
        debug_log(f"[PROMPT CONFIG] Loaded prompt parameters from {self.config_path}")
        return params

    def _merge(self, base: dict, override: dict):
        """Recursively merge override into base in place."""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            elif value is not None:
                base[key] = value

    def get(self, *keys, default=None) -> Any:
        """
        Get a parameter value by nested keys.

        Example:
            config.get('chunk', 'max_tokens')  # Returns 800
        """
        value = self._params
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    # Convenience properties for commonly used values

    @property
    def language(self) -> str:
        return self.get('language', default="English")

    @property
    def temperature(self) -> float:
        return float(self.get('generation', 'temperature', default=0.2))

    @property
    def image_max_tokens(self) -> int:
        return int(self.get('image', 'max_tokens', default=600))

    @property
    def chunk_max_tokens(self) -> int:
        return int(self.get('chunk', 'max_tokens', default=800))

    @property
    def reduce_max_tokens(self) -> int:
        return int(self.get('reduce', 'max_tokens', default=1000))

    def image_instruction(self) -> str:
        """Instruction text sent alongside an image."""
        return self.get('image', 'instruction').format(language=self.language)

    def chunk_system_prompt(self) -> str:
        return self.get('chunk', 'system').format(language=self.language)

    def chunk_user_prompt(self, part: int, total: int, text: str) -> str:
        """
        Build the per-chunk user prompt.

        Args:
            part: 1-based position of the chunk
            total: Total number of chunks
            text: Chunk text

        Returns:
            Prompt containing the literal "part/total" marker and the chunk text
        """
        return self.get('chunk', 'user').format(
            part=part, total=total, language=self.language, text=text
        )

    def reduce_system_prompt(self) -> str:
        return self.get('reduce', 'system').format(language=self.language)


# Global instance for easy access
_prompt_config = None


def get_prompt_config() -> PromptConfig:
    """
    Get the global PromptConfig instance (singleton pattern).

    Returns:
        PromptConfig: The global configuration instance
    """
    global _prompt_config
    if _prompt_config is None:
        _prompt_config = PromptConfig()
    return _prompt_config
