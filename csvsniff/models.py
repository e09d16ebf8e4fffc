from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from csvsniff.data.constants import (
    CR, CRLF, LF, DEFAULT_DELIMITER, DEFAULT_QUOTE_CHAR, DEFAULT_ESCAPE_CHAR,
    DEFAULT_ROW_TERMINATOR, FALLBACK_DELIMITER,
    FLAG_DELIMITER, FLAG_QUOTE_CHAR, FLAG_ESCAPE_CHAR
)

# --- Dialect Models ---

class RowTerminator(str, Enum):
    CRLF = CRLF
    CR = CR
    LF = LF


def _single_character(value: str, flag: str) -> str:
    if len(value) < 1:
        raise ValueError(f"-{flag} can't be an empty string.")
    if len(value) > 1:
        raise ValueError(f"-{flag} can't be more than one character.")
    return value


class DialectConfig(BaseModel):
    """
    Describes how a delimited file is laid out. Validated at construction,
    before any stream is touched.
    """
    delimiter: str = Field(DEFAULT_DELIMITER, description="Character that terminates fields.")
    quote_char: str = Field(DEFAULT_QUOTE_CHAR, description="Character fields are optionally enclosed by.")
    escape_char: str = Field(DEFAULT_ESCAPE_CHAR, description="Character special characters are escaped by.")
    double_quote: bool = Field(False, description="Whether a doubled quote inside a field is a literal quote.")
    row_terminator: RowTerminator = Field(RowTerminator(DEFAULT_ROW_TERMINATOR), description="Row terminator.")

    @field_validator("delimiter")
    @classmethod
    def check_delimiter(cls, v: str) -> str:
        return _single_character(v, FLAG_DELIMITER)

    @field_validator("quote_char")
    @classmethod
    def check_quote_char(cls, v: str) -> str:
        return _single_character(v, FLAG_QUOTE_CHAR)

    @field_validator("escape_char")
    @classmethod
    def check_escape_char(cls, v: str) -> str:
        return _single_character(v, FLAG_ESCAPE_CHAR)

    @property
    def quote_byte(self) -> bytes:
        """The quote character as the enclosure byte the detector expects."""
        encoded = self.quote_char.encode("utf-8")
        if len(encoded) != 1:
            raise ValueError(f"-{FLAG_QUOTE_CHAR} must be a single-byte character to be used for detection.")
        return encoded


# --- Detection Result ---

class SniffResult(BaseModel):
    row_terminator: RowTerminator = Field(..., description="Detected row terminator.")
    candidates: List[str] = Field(default_factory=list, description="Uniform, allow-listed delimiters in first-seen order.")
    quote_char: str = Field(DEFAULT_QUOTE_CHAR, description="Enclosure used while sampling.")

    @property
    def delimiter(self) -> Optional[str]:
        return self.candidates[0] if self.candidates else None

    def to_dialect(self, fallback: str = FALLBACK_DELIMITER, **overrides) -> DialectConfig:
        """
        Builds a DialectConfig from the detection. The first candidate wins;
        `fallback` is used when nothing qualified.
        """
        values = {
            "delimiter": self.delimiter or fallback,
            "quote_char": self.quote_char,
            "row_terminator": self.row_terminator,
        }
        values.update(overrides)
        return DialectConfig(**values)
