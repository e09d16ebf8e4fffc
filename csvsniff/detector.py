import io
from typing import IO, Iterable, List, Union

from csvsniff.config import get_logger
from csvsniff.data.constants import (
    CR, CRLF, DEFAULT_ROW_TERMINATOR, POSSIBLE_DELIMITERS,
    ROW_TERMINATOR_CHUNK_SIZE, SAMPLE_BUFFER_SIZE, SAMPLE_LINES
)
from csvsniff.logic.analyzer import analyze
from csvsniff.logic.sampler import read_chunk, sample

logger = get_logger(__name__)


class Detector:
    """
    Detects the delimiter and row terminator of delimited text.

    Holds settings only. Every call builds its own frequency table, so one
    Detector can serve any number of independent streams.
    """

    def __init__(
        self,
        sample_lines: int = SAMPLE_LINES,
        buffer_size: int = SAMPLE_BUFFER_SIZE,
        possible_delimiters: Iterable[str] = POSSIBLE_DELIMITERS,
        chunk_size: int = ROW_TERMINATOR_CHUNK_SIZE,
    ):
        for name, value in (("sample_lines", sample_lines), ("buffer_size", buffer_size), ("chunk_size", chunk_size)):
            if value < 1:
                raise ValueError(f"{name} must be positive, got {value}")

        self.sample_lines = sample_lines
        self.buffer_size = buffer_size
        self.chunk_size = chunk_size
        self.possible_delimiters = frozenset(ord(d) for d in possible_delimiters)

    def valid_delimiter(self, char: int) -> bool:
        return char in self.possible_delimiters

    def detect_row_terminator(self, stream: IO) -> str:
        """
        Reads one chunk from the start of the stream and returns
        CRLF if present, else CR if present, else LF.

        The chunk is consumed and not rewound. An empty stream or a failed
        read returns the LF default.
        """
        _warn_if_text(stream)
        buf = read_chunk(stream, self.chunk_size)
        if not buf:
            logger.info("Empty or unreadable stream. Defaulting row terminator to LF.")
            return DEFAULT_ROW_TERMINATOR

        if CRLF.encode() in buf:
            return CRLF
        if CR.encode() in buf:
            return CR
        return DEFAULT_ROW_TERMINATOR

    def detect_delimiter(self, stream: IO, enclosure: Union[int, bytes, str] = b'"') -> List[str]:
        """
        Returns every allow-listed byte that occurs equally often on each
        sampled line, in first-seen order. Empty when nothing qualifies;
        choosing a fallback is up to the caller.
        """
        _warn_if_text(stream)
        frequencies, total_lines = sample(
            stream, enclosure, sample_lines=self.sample_lines, buffer_size=self.buffer_size
        )
        # total_lines - 1, in case the sample ends with a trailing newline
        uniform = analyze(frequencies, total_lines - 1)
        candidates = [chr(char) for char in uniform if self.valid_delimiter(char)]

        logger.info(f"Delimiter candidates: {candidates} (sampled {total_lines} lines)")
        return candidates


def _warn_if_text(stream: IO) -> None:
    if isinstance(stream, io.TextIOBase):
        logger.warning("Text stream given. Pass a binary stream, or open with newline='' so CRLF is not translated to LF.")


_default_detector = Detector()


def detect_row_terminator(stream: IO) -> str:
    return _default_detector.detect_row_terminator(stream)


def detect_delimiter(stream: IO, enclosure: Union[int, bytes, str] = b'"') -> List[str]:
    return _default_detector.detect_delimiter(stream, enclosure)
