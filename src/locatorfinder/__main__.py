from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from .errors import DescriptionLoadError, LocatorFinderError
from .locator_finder import build_locator_list
from .models import ElementDescription, LocatorSuggestion
from .settings import Settings, load_settings, parse_timeout_ms

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def build_logger(settings: Settings) -> logging.Logger:
    logger = logging.getLogger("locatorfinder.cli")
    if logger.handlers:
        return logger

    logger.setLevel(settings.log_level)
    logger.propagate = False
    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_dir / "cli.log", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
    except OSError:
        # Fallback to stderr logging if the log directory is not writable.
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(stream_handler)
    return logger


def load_description(source: str | None, stdin: TextIO | None = None) -> ElementDescription:
    try:
        if source in (None, "-"):
            raw = (stdin or sys.stdin).read()
        else:
            raw = Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise DescriptionLoadError(f"Cannot read element description: {exc}") from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DescriptionLoadError(f"Element description is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DescriptionLoadError("Element description must be a JSON object.")
    return ElementDescription.from_mapping(payload)


def format_suggestions(suggestions: Sequence[LocatorSuggestion], output_format: str = "text") -> str:
    if output_format == "json":
        return json.dumps([item.to_dict() for item in suggestions], indent=2)

    lines: list[str] = []
    for item in suggestions:
        lines.append(item.locator)
        if item.count_expression:
            lines.append(f"  count: {item.count_expression}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locatorfinder",
        description="Suggest Protractor locators for a captured element.",
    )
    parser.add_argument("--format", choices=("text", "json"), default="text", dest="output_format")
    commands = parser.add_subparsers(dest="command", required=True)

    suggest = commands.add_parser("suggest", help="Read an element description JSON object.")
    suggest.add_argument("source", nargs="?", default="-", help="JSON file, or - for stdin.")

    capture = commands.add_parser("capture", help="Capture an element from a live page.")
    capture.add_argument("url")
    capture.add_argument("selector")
    capture.add_argument("--headed", action="store_true", help="Show the browser window.")
    capture.add_argument("--timeout-ms", default=None)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    logger = build_logger(settings)

    try:
        if args.command == "capture":
            from .dom_extractor import capture_element_description

            description = capture_element_description(
                args.url,
                args.selector,
                headless=settings.headless and not args.headed,
                timeout_ms=parse_timeout_ms(args.timeout_ms, default=settings.timeout_ms),
            )
        else:
            description = load_description(args.source)
    except LocatorFinderError as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"[locatorfinder] {exc}", file=sys.stderr)
        return 1

    suggestions = build_locator_list(description)
    logger.info("%s produced %d suggestion(s)", args.command, len(suggestions))
    output = format_suggestions(suggestions, args.output_format)
    if output:
        print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
