"""
DocDigest - Command Line Entry Point

Summarizes a single document or image with the configured completion model.

Examples:
  # Summarize a PDF
  docdigest report.pdf

  # Override the declared mime type and give the whole run two minutes
  docdigest scan.bin --mime image/png --timeout 120

  # Debug mode (verbose logging)
  DEBUG=true docdigest slides.pptx
"""

import argparse
import sys
from pathlib import Path

from docdigest.errors import ConfigurationError
from docdigest.logging_config import close_debug_log, info
from docdigest.summarization import Artifact, build_default_pipeline

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIGURATION = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docdigest",
        description="DocDigest - Summarize a PDF, DOCX, PPTX, TXT or image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  DOCDIGEST_MODEL / TOGETHER_MODEL     Completion model identifier (required)
  DOCDIGEST_API_KEY / TOGETHER_API_KEY Bearer credential (required)
  DOCDIGEST_API_URL                    Override the chat/completions endpoint
        """
    )
    parser.add_argument('file', help='Document or image to summarize')
    parser.add_argument('--mime', default=None, help='Declared mime type (default: guessed from the extension)')
    parser.add_argument('--timeout', type=float, default=None, help='Overall deadline in seconds')
    parser.add_argument('--model', default=None, help='Model identifier (overrides the environment)')
    parser.add_argument('--language', default=None, help='Language of the summary (default: from config)')
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run the summarizer from the command line.

    Returns:
        Process exit code: 0 on success, 1 on a classified failure,
        2 on missing configuration.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    path = Path(args.file)
    if not path.is_file():
        parser.error(f"File not found: {path}")
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    try:
        pipeline = build_default_pipeline(model=args.model, language=args.language)
    except ConfigurationError as e:
        print(f"Error [{e.classification}]: {e.message}", file=sys.stderr)
        return EXIT_CONFIGURATION

    info(f"Summarizing {path.name}")
    artifact = Artifact.from_path(path, mime_type=args.mime)

    try:
        result = pipeline.summarize(artifact, timeout_seconds=args.timeout)
    finally:
        close_debug_log()

    if not result.success:
        reason = f"/{result.error_reason}" if result.error_reason else ""
        print(f"Error [{result.error_classification}{reason}]: {result.error_message}", file=sys.stderr)
        return EXIT_CONFIGURATION if result.error_classification == "configuration" else EXIT_FAILED

    print(result.summary)
    if result.reduce_fallback_used:
        print("\n(note: partial summaries could not be merged; shown in document order)", file=sys.stderr)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
