"""
DocDigest Configuration Module
Centralized configuration for the summarization pipeline.

Values can be overridden through environment variables so the pipeline can be
pointed at a different completion endpoint or model without code changes.
"""

import os
from pathlib import Path

# Debug Mode Configuration
DEBUG_MODE = os.environ.get('DEBUG', 'false').lower() == 'true'

# Application Paths
APP_NAME = "DocDigest"
APPDATA_DIR = Path(os.environ.get('APPDATA', os.path.expanduser('~/.config'))) / APP_NAME
LOGS_DIR = APPDATA_DIR / "logs"

# Ensure directories exist
LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Logging Configuration
LOG_FILE = LOGS_DIR / "processing.log"
DEBUG_LOG_FILE = LOGS_DIR / "debug_flow.txt"
LOG_FORMAT = "[%(levelname)s %(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Prompt and generation parameters (YAML)
SUMMARIZER_CONFIG_FILE = Path(
    os.environ.get(
        'DOCDIGEST_CONFIG_FILE',
        Path(__file__).parent.parent / "config" / "summarizer.yaml",
    )
)

# Completion Endpoint Configuration
COMPLETIONS_API_URL = os.environ.get(
    'DOCDIGEST_API_URL', "https://api.together.xyz/v1/chat/completions"
)
COMPLETIONS_TIMEOUT_SECONDS = float(os.environ.get('DOCDIGEST_TIMEOUT_SECONDS', '300'))

# Model identifier lookup order (first non-empty wins)
MODEL_ENV_VARS = ('DOCDIGEST_MODEL', 'TOGETHER_MODEL', 'TOGETHER_GEMMA_MODEL')
API_KEY_ENV_VARS = ('DOCDIGEST_API_KEY', 'TOGETHER_API_KEY')

# Chunking Configuration
# Token count is estimated as characters / CHARS_PER_TOKEN (rounded up).
# Documents at or under SAFE_TOKEN_THRESHOLD are summarized in a single call.
CHARS_PER_TOKEN = 4
SAFE_TOKEN_THRESHOLD = 80_000
CHUNK_WINDOW_CHARS = 15_000

# Format Detection
IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.webp')
PDF_MIME = "application/pdf"
PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
PLAIN_TEXT_MIME = "text/plain"
DEFAULT_IMAGE_MIME = "image/jpeg"  # Used when an image arrives without a usable mime

# Separators used when combining partial summaries
REDUCE_INPUT_SEPARATOR = "\n\n---\n\n"
FALLBACK_SUMMARY_SEPARATOR = "\n\n"


def _first_env(names: tuple) -> str:
    """Return the first non-blank environment value among names, stripped."""
    for name in names:
        value = (os.environ.get(name) or "").strip()
        if value:
            return value
    return ""


def get_model_name() -> str:
    """
    Resolve the completion model identifier from the environment.

    Returns:
        The model identifier, or an empty string if none is configured.
    """
    return _first_env(MODEL_ENV_VARS)


def get_api_key() -> str:
    """
    Resolve the bearer credential for the completion endpoint.

    Returns:
        The API key, or an empty string if none is configured.
    """
    return _first_env(API_KEY_ENV_VARS)
