"""Parse a substitution plan and write it as JSON.

Run with: subparser --input plan.htm
DSB:      subparser --source dsb --user 123456 --pass secret --output plans.json
Website:  subparser --source effner --parser effner-de --pass secret

Every flag falls back to the matching SUBPARSER_* environment variable (.env).

Exit codes:
  0 = success (JSON on stdout or written to --output)
  1 = invalid arguments
  2 = unknown parser
  3 = input file could not be read
  4 = DSB login failed
  5 = loading or parsing failed
  6 = output could not be written
"""

import argparse
import sys

from src.subparser.config import SubparserConfig, get_config
from src.subparser.destinations import build_destination
from src.subparser.errors import (
    AuthenticationError,
    ConfigurationError,
    DestinationError,
    FileReadError,
    ParsingError,
    SubparserError,
    UnknownVariantError,
)
from src.subparser.logging import get_logger, setup_logging
from src.subparser.parsers.registry import ParserKind, get_parser
from src.subparser.sources import SourceKind, build_source

log = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID_ARGS = 1
EXIT_PARSER_NOT_FOUND = 2
EXIT_FILE_READ_FAILED = 3
EXIT_LOGIN_FAILED = 4
EXIT_LOADING_FAILED = 5
EXIT_PARSING_FAILED = 5
EXIT_WRITING_FAILED = 6


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        prog="subparser",
        description="Parse school substitution plans into JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-P",
        "--parser",
        default=None,
        help=f"Parser to use (default: effner) [{', '.join(k.value for k in ParserKind)}].",
    )
    parser.add_argument(
        "-s",
        "--source",
        default=None,
        help=f"Source of the data (default: file) [{', '.join(k.value for k in SourceKind)}].",
    )
    parser.add_argument(
        "-i", "--input", default=None, help="Input file (required for the file source)."
    )
    parser.add_argument("-u", "--user", dest="dsb_user", default=None, help="Username.")
    parser.add_argument("-p", "--pass", dest="password", default=None, help="Password.")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="File to write the JSON to (stdout if unset).",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=None,
        help="Write logs as JSON lines.",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: INFO).")
    return parser.parse_args(argv)


def _apply_args(config: SubparserConfig, args: argparse.Namespace) -> SubparserConfig:
    """Overlay the given flags on the configuration."""
    update = {
        key: value
        for key, value in vars(args).items()
        if value is not None and key != "password"
    }
    # --pass is the DSB password or the effner.de page password
    if args.password is not None:
        update["dsb_pass"] = args.password
        update["effner_password"] = args.password
    return config.model_copy(update=update)


def _exit_code(error: SubparserError) -> int:
    if isinstance(error, UnknownVariantError) and error.kind == "parser":
        return EXIT_PARSER_NOT_FOUND
    if isinstance(error, ConfigurationError):
        return EXIT_INVALID_ARGS
    if isinstance(error, FileReadError):
        return EXIT_FILE_READ_FAILED
    if isinstance(error, AuthenticationError):
        return EXIT_LOGIN_FAILED
    if isinstance(error, ParsingError):
        return EXIT_PARSING_FAILED
    if isinstance(error, DestinationError):
        return EXIT_WRITING_FAILED
    return EXIT_LOADING_FAILED


def run(argv: list[str] | None = None) -> int:
    """Load, parse and write the plans; returns the process exit code."""
    args = _parse_args(argv)
    config = _apply_args(get_config(), args)
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    log.info("subparser_started", parser=config.parser, source=config.source)
    try:
        parser = get_parser(config.parser)
        source = build_source(config)
        destination = build_destination(config)

        content = source.load()
        plans = parser.parse(content)
        destination.write(plans)
    except SubparserError as e:
        log.error("subparser_failed", error=str(e), type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return _exit_code(e)

    log.info("subparser_done", plans=len(plans))
    return EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
