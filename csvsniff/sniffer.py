import io
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from csvsniff.config import get_logger
from csvsniff.data.constants import CR, DEFAULT_QUOTE_CHAR
from csvsniff.detector import Detector
from csvsniff.models import DialectConfig, SniffResult

logger = get_logger(__name__)

Source = Union[str, Path, bytes]


def _open(source: Source):
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(source)
    return open(source, "rb")


def sniff(source: Source, quote_char: str = DEFAULT_QUOTE_CHAR, detector: Optional[Detector] = None) -> SniffResult:
    """
    Detects row terminator and delimiter candidates of a file path or raw bytes.

    Row terminator detection consumes its chunk, so each detector gets
    its own stream.
    """
    detector = detector or Detector()
    enclosure = DialectConfig(quote_char=quote_char).quote_byte
    logger.info("Sniffing dialect...")

    with _open(source) as stream:
        row_terminator = detector.detect_row_terminator(stream)
    with _open(source) as stream:
        candidates = detector.detect_delimiter(stream, enclosure)

    result = SniffResult(row_terminator=row_terminator, candidates=candidates, quote_char=quote_char)
    if result.delimiter is None:
        logger.warning("No delimiter candidate qualified. Caller fallback applies.")
    logger.info(f"Sniffed row terminator {row_terminator!r}, delimiter {result.delimiter!r}")
    return result


def read_csv_kwargs(dialect: DialectConfig) -> dict:
    """Translates a DialectConfig into pandas.read_csv keyword arguments."""
    kwargs = {
        "sep": dialect.delimiter,
        "quotechar": dialect.quote_char,
        "escapechar": dialect.escape_char,
        "doublequote": dialect.double_quote,
    }
    # pandas splits on both LF and CRLF by default; only a lone CR needs telling
    if dialect.row_terminator.value == CR:
        kwargs["lineterminator"] = CR
    return kwargs


def load_dataframe(path: Union[str, Path], dialect: Optional[DialectConfig] = None, **read_csv_options) -> pd.DataFrame:
    """
    Loads a delimited file with pandas, sniffing the dialect first when
    none is given. Extra keyword arguments go straight to pandas.read_csv.
    """
    if dialect is None:
        dialect = sniff(path).to_dialect(double_quote=True)

    kwargs = read_csv_kwargs(dialect)
    kwargs.update(read_csv_options)

    try:
        df = pd.read_csv(path, **kwargs)
    except pd.errors.EmptyDataError:
        logger.warning(f"No content found in {path}. Returning empty DataFrame.")
        return pd.DataFrame()

    df.columns = df.columns.astype(str).str.strip()
    logger.info(f"Loaded {len(df)} rows x {len(df.columns)} columns with delimiter {dialect.delimiter!r}")
    return df
