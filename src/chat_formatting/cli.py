"""
Command-line interface for chat_formatting.

Provides filters that read chat messages from stdin, one per line:
- legacyfy: Render JSON or legacy messages as legacy, ANSI or plain text
- debug: Print the decoded structure of each JSON message
- parse: Convert legacy-formatted lines into JSON components

Usage:
    chat-formatting legacyfy [--translations PATH] [--format legacy|ansi|plain]
    chat-formatting debug
    chat-formatting parse

Environment Variables:
    CHATFMT_TRANSLATIONS: Translation table used by legacyfy (JSON or YAML)
    CHATFMT_OUTPUT: Default output format for legacyfy (default: legacy)
    CHATFMT_LOG_LEVEL: Log level (default: WARNING)
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from chat_formatting import config as config_module
from chat_formatting.config import OUTPUT_FORMATS
from chat_formatting.errors import TranslationTableError
from chat_formatting.legacy import parse_legacy, render_ansi, render_legacy, render_plain
from chat_formatting.models import chat_from_json_str, chat_to_json_str
from chat_formatting.translator import Translator

logger = logging.getLogger(__name__)

_RENDERERS = {
    "legacy": render_legacy,
    "ansi": render_ansi,
    "plain": render_plain,
}


def _configure_logging() -> None:
    logging.basicConfig(
        level=config_module.config.logging.level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_translator(path: str | None) -> Translator:
    """
    Load the translation table named on the command line or in config.

    Args:
        path: Explicit path from --translations, or None to use config.

    Returns:
        The loaded Translator, or an empty one when no table is configured.

    Raises:
        OSError: The file cannot be read.
        TranslationTableError: The file is not a flat string mapping.
    """
    if path is None:
        configured = config_module.config.translations.absolute_path
        if configured is None:
            return Translator()
        path = str(configured)
    return Translator.from_file(path)


def cmd_legacyfy(args: argparse.Namespace) -> int:
    """
    Render each stdin line.

    A line that decodes as a JSON message is rendered through the component
    model; any other line is treated as a legacy string.

    Returns:
        0 on success, 1 if the translation table cannot be loaded
    """
    try:
        translator = load_translator(args.translations)
    except (OSError, TranslationTableError) as e:
        print(f"Error loading translations: {e}", file=sys.stderr)
        return 1

    render = _RENDERERS[args.format or config_module.config.output.format]

    for line in sys.stdin:
        line = line.rstrip("\n")
        try:
            message = chat_from_json_str(line)
        except ValidationError:
            logger.debug("Line is not a JSON message; treating it as legacy text")
            message = line
        print(render(message, translator))
    return 0


def cmd_debug(args: argparse.Namespace) -> int:
    """
    Print the decoded structure of each stdin line.

    Returns:
        0 always; undecodable lines are reported on stderr
    """
    for line in sys.stdin:
        line = line.rstrip("\n")
        try:
            print(repr(chat_from_json_str(line)))
        except ValidationError as e:
            logger.warning("Failed to decode line: %s", line[:60])
            print(f"Failed to parse: {e}", file=sys.stderr)
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    """
    Convert each legacy stdin line to its JSON component encoding.

    Returns:
        0 always
    """
    for line in sys.stdin:
        print(chat_to_json_str(parse_legacy(line.rstrip("\n"))))
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="chat-formatting",
        description=(
            "Convert chat messages between JSON components, legacy text and terminal output"
        ),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # legacyfy command
    legacyfy_parser = subparsers.add_parser(
        "legacyfy",
        help="Render messages from stdin",
        description=(
            "Read one message per line from stdin (JSON component or legacy text) "
            "and print it as legacy, ANSI or plain text."
        ),
    )
    legacyfy_parser.add_argument(
        "--translations",
        "-t",
        type=str,
        help="Translation table (.json, .yaml or .yml). Default: CHATFMT_TRANSLATIONS",
    )
    legacyfy_parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        help="Output format (default: legacy, or CHATFMT_OUTPUT env var)",
    )
    legacyfy_parser.set_defaults(func=cmd_legacyfy)

    # debug command
    debug_parser = subparsers.add_parser(
        "debug",
        help="Show decoded JSON messages",
        description="Read one JSON message per line from stdin and print its decoded structure.",
    )
    debug_parser.set_defaults(func=cmd_debug)

    # parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Convert legacy text to JSON",
        description="Read legacy-formatted lines from stdin and print them as JSON components.",
    )
    parse_parser.set_defaults(func=cmd_parse)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    _configure_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
