import re
from typing import IO, Iterator, NamedTuple, Tuple, Union

from csvsniff.config import get_logger
from csvsniff.data.constants import (
    NON_DELIMITER_REGEX, SAMPLE_BUFFER_SIZE, SAMPLE_LINES, SENTINEL_BYTE
)
from csvsniff.logic.frequency import FrequencyTable

logger = get_logger(__name__)

NON_DELIMITER_RE = re.compile(NON_DELIMITER_REGEX)
NON_DELIMITER_BYTES = frozenset(
    b for b in range(256) if NON_DELIMITER_RE.match(bytes((b,)))
)

CR_BYTE = ord("\r")
LF_BYTE = ord("\n")


class SampleResult(NamedTuple):
    frequencies: FrequencyTable
    lines: int


def to_enclosure_byte(enclosure: Union[int, bytes, str]) -> int:
    """Normalizes an enclosure given as int, bytes or str to a single byte value."""
    if isinstance(enclosure, str):
        enclosure = enclosure.encode("utf-8")
    if isinstance(enclosure, (bytes, bytearray)):
        if len(enclosure) != 1:
            raise ValueError(f"Enclosure must be a single byte, got {enclosure!r}")
        return enclosure[0]
    if isinstance(enclosure, int) and 0 <= enclosure <= 255:
        return enclosure
    raise ValueError(f"Enclosure must be a single byte, got {enclosure!r}")


def read_chunk(stream: IO, size: int) -> bytes:
    """
    Reads at most `size` bytes. End of input, read errors and undecodable
    text all come back as b"" so callers can degrade to whatever they
    already have.

    Text streams are re-encoded as UTF-8. Open them with newline="" or
    universal newlines turn CRLF into LF before it is seen here.
    """
    try:
        chunk = stream.read(size)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Stream read failed, continuing with what was read: {e}")
        return b""
    if not chunk:
        return b""
    if isinstance(chunk, str):
        chunk = chunk.encode("utf-8")
    return bytes(chunk)


def _window(stream: IO, buffer_size: int) -> Iterator[Tuple[int, int]]:
    """
    Yields (current, next) for every byte of the stream. The next buffer is
    read before the last byte of the current one is yielded, so the lookahead
    is exact across refills. Only the very end of the stream sees the sentinel.
    """
    buf = read_chunk(stream, buffer_size)
    while buf:
        following = read_chunk(stream, buffer_size)
        for i in range(len(buf) - 1):
            yield buf[i], buf[i + 1]
        yield buf[-1], following[0] if following else SENTINEL_BYTE
        buf = following


def sample(
    stream: IO,
    enclosure: Union[int, bytes, str],
    sample_lines: int = SAMPLE_LINES,
    buffer_size: int = SAMPLE_BUFFER_SIZE,
) -> SampleResult:
    """
    Walks the stream byte by byte and records, per line, how often each
    candidate delimiter occurs outside of enclosures.

    Rules, in order:
    1. Enclosure byte: toggles the enclosed state, except a doubled enclosure
       inside an enclosure, which is an escaped literal (second byte skipped).
    2. Unenclosed line break (LF not preceded by CR, or any CR): next line.
       Sampling stops once `sample_lines` lines are reached.
    3. Unenclosed byte outside [A-Za-z0-9\\n\\r]: counted on the current line.

    Returns the table and the number of lines seen, which includes a final
    line without terminator and may be less than `sample_lines`.
    """
    enclosure = to_enclosure_byte(enclosure)
    if buffer_size < 1:
        raise ValueError(f"buffer_size must be positive, got {buffer_size}")

    frequencies = FrequencyTable()
    enclosed = False
    lines = 1
    prev = SENTINEL_BYTE
    skip_next = False

    for current, nxt in _window(stream, buffer_size):
        if skip_next:
            skip_next = False
            prev = current
            continue

        if current == enclosure:
            if not enclosed or nxt != enclosure:
                enclosed = not enclosed
            else:
                skip_next = True
        elif not enclosed and ((current == LF_BYTE and prev != CR_BYTE) or current == CR_BYTE):
            lines += 1
            if lines >= sample_lines:
                break
        elif not enclosed and current not in NON_DELIMITER_BYTES:
            frequencies.increment(current, lines)

        prev = current

    logger.debug(f"Sampled {lines} lines, {len(frequencies)} distinct candidate bytes.")
    return SampleResult(frequencies, lines)
