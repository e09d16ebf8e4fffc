import argparse

from csvsniff.data.constants import (
    DEFAULT_DELIMITER, DEFAULT_QUOTE_CHAR, DEFAULT_ESCAPE_CHAR,
    FLAG_DELIMITER, FLAG_QUOTE_CHAR, FLAG_ESCAPE_CHAR
)
from csvsniff.models import DialectConfig


def add_dialect_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """
    Registers the dialect flags on the given parser. Call
    dialect_from_args() on the parsed namespace to get a validated
    DialectConfig.
    """
    group = parser.add_argument_group("dialect")
    group.add_argument(f"--{FLAG_DELIMITER}", dest="delimiter", default=None,
                       help=f"character to terminate fields by (default: detected, else {DEFAULT_DELIMITER!r})")
    group.add_argument(f"--{FLAG_QUOTE_CHAR}", dest="quote_char", default=DEFAULT_QUOTE_CHAR,
                       help="character to enclose fields with when needed")
    group.add_argument(f"--{FLAG_ESCAPE_CHAR}", dest="escape_char", default=DEFAULT_ESCAPE_CHAR,
                       help="character to escape special characters with")
    return parser


def dialect_from_args(args: argparse.Namespace) -> DialectConfig:
    """Builds a DialectConfig from parsed flags. Raises pydantic.ValidationError on bad values."""
    delimiter = args.delimiter if args.delimiter is not None else DEFAULT_DELIMITER
    return DialectConfig(
        delimiter=delimiter,
        quote_char=args.quote_char,
        escape_char=args.escape_char,
    )
