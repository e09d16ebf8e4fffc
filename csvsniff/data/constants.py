"""
Centralized constants for the csvsniff package.
"""

# ==============================================================================
# ROW TERMINATOR DETECTION
# ==============================================================================
KB = 1024
ROW_TERMINATOR_CHUNK_SIZE = 128 * KB

CRLF = "\r\n"
CR = "\r"
LF = "\n"
DEFAULT_ROW_TERMINATOR = LF

# ==============================================================================
# DELIMITER DETECTION
# ==============================================================================
# Physical lines to scan before the sampler stops
SAMPLE_LINES = 15
SAMPLE_BUFFER_SIZE = 1 * KB

# Bytes that can never be a delimiter (ASCII [[:alnum:]] plus line breaks)
NON_DELIMITER_REGEX = rb"[A-Za-z0-9\n\r]"

# Allow-list applied after the deviation test
POSSIBLE_DELIMITERS = (",", "|", "\t", ";")

# Lookbehind/lookahead value at the edges of the stream
SENTINEL_BYTE = 0

# ==============================================================================
# DIALECT DEFAULTS
# ==============================================================================
DEFAULT_DELIMITER = "\t"
DEFAULT_QUOTE_CHAR = '"'
DEFAULT_ESCAPE_CHAR = "\\"
FALLBACK_DELIMITER = ","

# Command line flag names, also used to name options in validation errors
FLAG_DELIMITER = "fields-terminated-by"
FLAG_QUOTE_CHAR = "fields-optionally-enclosed-by"
FLAG_ESCAPE_CHAR = "fields-escaped-by"
