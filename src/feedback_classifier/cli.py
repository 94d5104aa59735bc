"""
Interactive command-line front end for the feedback classifier.

Reads one line at a time, analyses every non-blank line and prints the
result as indented JSON on stdout.  Per-request failures are reported on
stderr and the prompt comes back; only a configuration error stops the
process before the loop starts.

Usage:
    feedback-classifier [--log-level DEBUG] [--json-logs] [--concurrent]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Callable
from typing import TextIO

import structlog
from pydantic import ValidationError

from feedback_classifier.config import Settings, get_settings, require_api_key
from feedback_classifier.errors import ConfigError, FeedbackClassifierError
from feedback_classifier.logging import configure_logging
from feedback_classifier.models import AnalysisResult
from feedback_classifier.pipeline import AnalysisPipeline

logger = structlog.get_logger()

BANNER = "Type a message to analyze (Ctrl+C to exit):"
PROMPT = "> "

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="feedback-classifier",
        description="Classify feedback text by sentiment, intent and feedback bucket.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (overrides FC_LOG_LEVEL)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines on stderr",
    )
    parser.add_argument(
        "--concurrent",
        action="store_true",
        help="Run the sentiment and intent calls concurrently",
    )
    return parser.parse_args(argv)


def read_line_prompt_on_stderr(prompt: str) -> str:
    """Like :func:`input`, but the prompt goes to stderr.

    Used when stdin is not a terminal so that stdout carries only results.
    """
    print(prompt, end="", file=sys.stderr, flush=True)
    line = sys.stdin.readline()
    if not line:
        raise EOFError
    return line.rstrip("\n")


def interactive_loop(
    analyze: Callable[[str], AnalysisResult],
    *,
    read_line: Callable[[str], str] = input,
    prompt: str = PROMPT,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Feed lines from *read_line* into *analyze* until end of input.

    Blank lines are skipped.  A :class:`FeedbackClassifierError` (or a
    ``ValueError`` from the pipeline) is reported on *err* and the loop
    continues with the next line.

    Returns:
        ``EXIT_OK`` once *read_line* raises ``EOFError``.
    """
    out = out or sys.stdout
    err = err or sys.stderr

    while True:
        try:
            line = read_line(prompt)
        except EOFError:
            return EXIT_OK

        text = line.strip()
        if not text:
            continue

        try:
            result = analyze(text)
        except (FeedbackClassifierError, ValueError) as exc:
            logger.info("analysis_failed", error=str(exc), error_type=type(exc).__name__)
            print(f"error: {exc}", file=err, flush=True)
            continue

        print(result.model_dump_json(indent=2), file=out, flush=True)


def _load_settings(err: TextIO) -> Settings | None:
    try:
        return get_settings()
    except ValidationError as exc:
        print(f"error: invalid configuration: {exc}", file=err)
        return None


def main(argv: list[str] | None = None) -> int:
    """Run the classifier; returns the process exit code."""
    args = parse_args(argv)

    settings = _load_settings(sys.stderr)
    if settings is None:
        return EXIT_CONFIG_ERROR

    configure_logging(
        level=args.log_level or settings.log_level,
        json_logs=args.json_logs or settings.log_json,
    )

    try:
        require_api_key(settings)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.concurrent:
        settings = settings.model_copy(update={"concurrent_calls": True})

    interactive = sys.stdin.isatty()
    pipeline = AnalysisPipeline.from_settings(settings)

    with asyncio.Runner() as runner:
        try:
            if interactive:
                print(f"\n{BANNER}\n")
            return interactive_loop(
                lambda text: runner.run(pipeline.analyze(text)),
                read_line=input if interactive else read_line_prompt_on_stderr,
            )
        except KeyboardInterrupt:
            print(file=sys.stderr)
            return EXIT_INTERRUPTED
        finally:
            runner.run(pipeline.close())


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
