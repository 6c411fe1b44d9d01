"""Command-line etymology tracer.

Usage:
    wanderword coffee
    wanderword tea --model claude
    wanderword algorithm --model gemini --timeout 90
    wanderword kimono --model ollama --model-name mistral

Set OUTPUT_JSON=1 (or pass --json) to also print the raw JSON for piping.
Logs are written to ~/.wanderword/debug.log for bug reports.
"""

import argparse
import json
import logging
import os
import sys
import traceback
from typing import Optional

from dotenv import load_dotenv

from wanderword.backend_detect import detect_backends_quick
from wanderword.dispatcher import fetch_word_journey, resolve_request
from wanderword.errors import JourneyError
from wanderword.log_utils import configure_logging, get_log_file, tail_log
from wanderword.providers import BackendId, list_backends
from wanderword.report import format_report
from wanderword.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# The CLI has no use for canned data unless asked for it explicitly
CLI_DEFAULT_BACKEND = BackendId.GEMINI


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    stored = settings.get("backend")
    default_backend = CLI_DEFAULT_BACKEND.value if stored == BackendId.MOCK.value else stored

    parser = argparse.ArgumentParser(
        prog="wanderword",
        description="Etymology Tracer - follow a word's journey across the map",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wanderword coffee
  wanderword tea --model claude
  wanderword algorithm --model qwen --timeout 90
  wanderword coffee --model openai-api --language Français

Environment variables:
  GOOGLE_API_KEY     Key for gemini-api
  OPENAI_API_KEY     Key for openai-api
  ANTHROPIC_API_KEY  Key for anthropic-api
  OUTPUT_JSON=1      Also print the raw JSON

CLI agents (gemini, claude, codex, qwen) need the relay: wanderword-relay
        """,
    )
    parser.add_argument("word", nargs="?", help="Word to trace")
    parser.add_argument(
        "--model", "-m",
        choices=[b.value for b in BackendId],
        default=default_backend,
        help=f"Backend to use (default: {default_backend})",
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help=f"Timeout in seconds (default: {settings.get('timeout')})",
    )
    parser.add_argument("--language", "-l", help="Language for the narrative (default: English)")
    parser.add_argument("--api-key", help="API key for hosted backends (overrides env/settings)")
    parser.add_argument("--base-url", help="Endpoint override: Ollama server, relay, or OpenAI-compatible API")
    parser.add_argument("--model-name", help="Model name override (uses backend default if not specified)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject answers that do not match the journey schema",
    )
    parser.add_argument("--json", action="store_true", help="Also print the raw JSON")
    parser.add_argument(
        "--list-backends",
        action="store_true",
        help="List backends and which local ones are available, then exit",
    )
    parser.add_argument(
        "--show-log",
        action="store_true",
        help="Show the debug log file path and exit",
    )
    return parser


def _print_backends(settings: Settings) -> None:
    available = detect_backends_quick(settings.get("ollama_url"))
    for descriptor in list_backends():
        name = descriptor.id.value
        if descriptor.needs_key:
            status = "key set" if settings.api_key_for(descriptor.id) else "needs key"
        elif name in available:
            status = "installed" if available[name] else "not found"
        else:
            status = "built-in"
        print(f"  {name:<14} {descriptor.label:<16} {status}")


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the wanderword command."""
    load_dotenv()
    settings = get_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if args.show_log:
        log_file = get_log_file()
        print(f"Debug log: {log_file}")
        lines = tail_log(log_file)
        if lines:
            print(f"\nLast {len(lines)} lines:")
            for line in lines:
                print(line, end="")
        return 0

    if args.list_backends:
        _print_backends(settings)
        return 0

    if not args.word or not args.word.strip():
        parser.error("a word to trace is required")

    configure_logging(console_level=logging.CRITICAL)  # report goes to stdout
    logger.info(f"Args: word={args.word}, model={args.model}, timeout={args.timeout}")

    request = resolve_request(
        args.word,
        settings,
        backend=args.model,
        api_key=args.api_key,
        base_url=args.base_url,
        model=args.model_name,
        timeout=args.timeout,
        language=args.language,
    )

    print(f"\n🔍 Tracing etymology of \"{request.word}\" using {request.backend}...\n")
    try:
        data = fetch_word_journey(request, strict=args.strict)
    except JourneyError as e:
        logger.error(f"Lookup failed: {e}")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        logger.debug(traceback.format_exc())
        print(f"\n❌ Error: {e}", file=sys.stderr)
        print(f"See debug log for details: {get_log_file()}", file=sys.stderr)
        return 1

    settings.set("backend", request.backend.value)

    print(format_report(data))

    if args.json or os.environ.get("OUTPUT_JSON") == "1":
        print("\n📦 RAW JSON:")
        print(json.dumps(data, indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
