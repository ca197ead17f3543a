"""Command-line front end: trim an HTML file (or stdin) to stdout.

Usage:
    smarttrim article.html --length 50
    smarttrim article.html --length 20 --type words --ellipsis " [...]"
    cat article.html | smarttrim --settings config/smarttrim.json
    smarttrim article.html --settings
"""

import argparse
import logging
import sys
from pathlib import Path

from smarttrim import config
from smarttrim.formatter import FieldItem, format_item
from smarttrim.settings import TRIM_TYPES, TrimSettings
from smarttrim.truncate import truncate_chars, truncate_words

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smarttrim",
        description="Truncate HTML to a number of visible characters or words.",
    )
    parser.add_argument(
        "file", nargs="?", type=Path, default=None,
        help="HTML file to read (default: stdin)",
    )
    parser.add_argument(
        "--length", type=int, default=600,
        help="Number of characters or words to keep",
    )
    parser.add_argument(
        "--type", choices=TRIM_TYPES, default="chars", dest="trim_type",
        help="Count characters or words",
    )
    parser.add_argument(
        "--ellipsis", default="...",
        help="Marker appended where the text was cut",
    )
    parser.add_argument(
        "--settings", type=Path, nargs="?", const=config.SETTINGS_PATH, default=None,
        help="Format with stored field settings (JSON) instead; "
        "without a value, uses SMARTTRIM_SETTINGS_PATH",
    )
    return parser


def run(args: argparse.Namespace, html: str) -> str:
    if args.settings is not None:
        settings = TrimSettings.load(args.settings)
        logger.info("Formatting with %s", settings.summary())
        return format_item(FieldItem(value=html), settings)

    if args.trim_type == "words":
        return truncate_words(html, args.length, args.ellipsis)
    return truncate_chars(html, args.length, args.ellipsis)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=config.LOG_LEVEL,
    )
    args = build_parser().parse_args(argv)

    if args.file is None:
        html = sys.stdin.read()
    else:
        try:
            html = args.file.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Cannot read %s: %s", args.file, e)
            return 1

    sys.stdout.write(run(args, html))
    return 0


if __name__ == "__main__":
    sys.exit(main())
