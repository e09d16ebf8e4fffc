import argparse
import os

from csvsniff.config import get_logger
from csvsniff.detector import Detector
from csvsniff.dialect import add_dialect_arguments, dialect_from_args
from csvsniff.sniffer import sniff, load_dataframe
from csvsniff.data.constants import SAMPLE_LINES

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='csvsniff - Delimiter & Row Terminator Detection')
    parser.add_argument('file', help='Path to the delimited text file (CSV, TSV, TXT)')
    parser.add_argument('--sample-lines', type=int, default=SAMPLE_LINES,
                        help='Number of physical lines to sample for delimiter detection')
    parser.add_argument('--preview', type=int, default=0, metavar='N',
                        help='Load the file with the detected dialect and print the first N rows')
    return add_dialect_arguments(parser)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.file):
        logger.error(f"File not found: {args.file}")
        return 1

    logger.info(f"Processing input file: {args.file}")

    try:
        detector = Detector(sample_lines=args.sample_lines)
        # Validates the quote/escape flags before touching the file
        requested = dialect_from_args(args)
        result = sniff(args.file, quote_char=requested.quote_char, detector=detector)
    except ValueError as e:
        # pydantic.ValidationError is a ValueError too, as is a bad --sample-lines
        logger.error(f"Invalid dialect options: {e}")
        return 2

    print("\n--- Detection ---")
    print(f"Row terminator: {result.row_terminator.value!r}")
    print(f"Candidates:     {result.candidates}")
    print(f"Delimiter:      {result.delimiter!r}")

    if args.preview > 0:
        overrides = {"escape_char": requested.escape_char, "double_quote": True}
        if args.delimiter is not None:
            overrides["delimiter"] = requested.delimiter
        dialect = result.to_dialect(**overrides)
        df = load_dataframe(args.file, dialect)
        print(f"\n--- Preview ({args.preview} rows) ---")
        print(df.head(args.preview))

    return 0
