import io
import pytest
from csvsniff.detector import Detector, detect_delimiter, detect_row_terminator


class FailingStream:
    """Raises on every read, like a dropped network stream."""

    def read(self, size=-1):
        raise OSError("connection reset")


class FlakyStream:
    """Returns one chunk, then fails."""

    def __init__(self, first: bytes):
        self.first = first
        self.calls = 0

    def read(self, size=-1):
        self.calls += 1
        if self.calls == 1:
            return self.first
        raise OSError("disk went away")


# ==============================================================================
# ROW TERMINATOR
# ==============================================================================

def test_row_terminator_crlf():
    stream = io.BytesIO(b"a,b,c\r\n" * 5)
    assert detect_row_terminator(stream) == "\r\n"

def test_row_terminator_lf():
    stream = io.BytesIO(b"a,b,c\n" * 5)
    assert detect_row_terminator(stream) == "\n"

def test_row_terminator_cr():
    stream = io.BytesIO(b"a,b,c\r" * 5)
    assert detect_row_terminator(stream) == "\r"

def test_row_terminator_crlf_wins_over_cr():
    stream = io.BytesIO(b"a\rb\r\nc\r")
    assert detect_row_terminator(stream) == "\r\n"

def test_row_terminator_empty_stream():
    assert detect_row_terminator(io.BytesIO(b"")) == "\n"

def test_row_terminator_read_failure():
    assert detect_row_terminator(FailingStream()) == "\n"

def test_row_terminator_only_inspects_first_chunk():
    detector = Detector(chunk_size=8)
    # First 8 bytes hold a lone CR; the CRLF comes later
    stream = io.BytesIO(b"a,b\na,b\r\nc,d\r\n")
    assert detector.detect_row_terminator(stream) == "\r"

def test_row_terminator_does_not_rewind():
    data = b"a,b\r\nc,d\r\n"
    stream = io.BytesIO(data)
    detect_row_terminator(stream)
    assert stream.tell() == len(data)

@pytest.mark.parametrize("data", [
    b"", b"\n", b"\r", b"\r\n", b"\n\r", b"no breaks at all", b"\x00\xff\xfe", b'"\r\n"',
])
def test_row_terminator_always_one_of_three(data):
    assert detect_row_terminator(io.BytesIO(data)) in ("\r\n", "\r", "\n")


# ==============================================================================
# DELIMITER
# ==============================================================================

def test_comma_three_per_line():
    stream = io.BytesIO(b"a,b,c,d\n" * 5)
    assert detect_delimiter(stream, b'"') == [","]

def test_semicolon_european_export():
    data = (
        b"Transaction Date;Valuta Date;Booking Text;Betrag EUR;Balance\n"
        b"01.10.2023;01.10.2023;Supermarket Purchase;-50,20;1.000,00\n"
        b"02.10.2023;02.10.2023;Monthly Salary;3.500,00;4.500,00\n"
        b"05.10.2023;05.10.2023;Coffee Shop;-4,50;4.495,50\n"
    )
    assert detect_delimiter(io.BytesIO(data), b'"') == [";"]

def test_tab_and_pipe():
    assert detect_delimiter(io.BytesIO(b"a\tb\tc\n" * 4)) == ["\t"]
    assert detect_delimiter(io.BytesIO(b"a|b|c\n" * 4)) == ["|"]

def test_quoted_comma_keeps_count_uniform():
    data = b'a,"x,y",c\n' * 4
    assert detect_delimiter(io.BytesIO(data), b'"') == [","]

def test_quoted_comma_changing_outer_count_excludes_comma():
    data = b'a,b,c\n"a,b",c\na,b,c\n'
    assert detect_delimiter(io.BytesIO(data), b'"') == []

def test_escaped_enclosure_keeps_content_enclosed():
    data = b'a,"he said ""hi, there""",c\n' * 3
    assert detect_delimiter(io.BytesIO(data), b'"') == [","]

def test_quoted_line_break_is_not_a_row():
    data = b'id,note\n1,"line one\nline two"\n2,"single"\n'
    assert detect_delimiter(io.BytesIO(data), b'"') == [","]

def test_custom_enclosure():
    data = b"a,'x,y',c\n" * 3
    assert detect_delimiter(io.BytesIO(data), b"'") == [","]
    # With the default enclosure the quoted comma is counted, still uniform
    assert detect_delimiter(io.BytesIO(data), b'"') == [","]

def test_ragged_line_excludes_delimiter():
    data = b"a,b,c\na,b\na,b,c\n"
    assert detect_delimiter(io.BytesIO(data)) == []

def test_uniform_but_not_allow_listed_is_dropped():
    data = b"a.b,c d\n" * 3
    assert detect_delimiter(io.BytesIO(data)) == [","]

def test_tie_returns_both():
    data = b"a,b;c\n" * 4
    result = detect_delimiter(io.BytesIO(data))
    assert sorted(result) == [",", ";"]

def test_idempotent_on_independent_copies():
    data = b'name,amount\n"Smith, J",10\n"Doe, A",20\n'
    first = detect_delimiter(io.BytesIO(data))
    second = detect_delimiter(io.BytesIO(data))
    assert first == second == [","]

def test_empty_stream():
    assert detect_delimiter(io.BytesIO(b""), b'"') == []

def test_single_line_without_break_yields_nothing():
    assert detect_delimiter(io.BytesIO(b"a,b,c")) == []

def test_last_line_without_trailing_break():
    # Only complete lines before the final one are analyzed
    assert detect_delimiter(io.BytesIO(b"a,b\nc,d")) == [","]

def test_crlf_rows():
    assert detect_delimiter(io.BytesIO(b"a;b;c\r\n" * 5)) == [";"]

def test_only_first_fifteen_lines_count():
    # 14 regular lines are analyzed; the ragged tail is never read
    data = b"a,b,c\n" * 14 + b"a\n" * 5
    assert detect_delimiter(io.BytesIO(data)) == [","]

def test_ragged_line_inside_window_counts():
    data = b"a,b,c\n" * 13 + b"a\n" * 5
    assert detect_delimiter(io.BytesIO(data)) == []

def test_custom_sample_lines():
    detector = Detector(sample_lines=3)
    data = b"a,b\na,b\na;b;c\nx\n"
    assert detector.detect_delimiter(io.BytesIO(data)) == [","]

def test_custom_allow_list():
    detector = Detector(possible_delimiters=[":"])
    data = b"a:b,c\n" * 3
    assert detector.detect_delimiter(io.BytesIO(data)) == [":"]

def test_text_stream():
    assert detect_delimiter(io.StringIO("a;b\n" * 3), '"') == [";"]

def test_enclosure_as_int_and_str():
    data = b'a,"x,y",c\n' * 3
    assert detect_delimiter(io.BytesIO(data), ord('"')) == [","]
    assert detect_delimiter(io.BytesIO(data), '"') == [","]

def test_invalid_enclosure():
    with pytest.raises(ValueError):
        detect_delimiter(io.BytesIO(b"a,b\n"), b'""')
    with pytest.raises(ValueError):
        detect_delimiter(io.BytesIO(b"a,b\n"), 300)

def test_read_failure_uses_partial_sample():
    stream = FlakyStream(b"a,b\na,b\n")
    detector = Detector(buffer_size=64)
    assert detector.detect_delimiter(stream) == [","]

def test_read_failure_on_first_read():
    assert detect_delimiter(FailingStream()) == []

def test_detector_is_reusable():
    detector = Detector()
    assert detector.detect_delimiter(io.BytesIO(b"a,b\n" * 3)) == [","]
    assert detector.detect_delimiter(io.BytesIO(b"a;b\n" * 3)) == [";"]


# ==============================================================================
# TEXT STREAMS
# ==============================================================================

def _latin1_text_stream():
    data = "caf\xe9;b\r\nthé;c\r\n".encode("latin-1")
    return io.TextIOWrapper(io.BytesIO(data), encoding="utf-8")

def test_row_terminator_undecodable_text_stream():
    assert detect_row_terminator(_latin1_text_stream()) == "\n"

def test_delimiter_undecodable_text_stream():
    assert detect_delimiter(_latin1_text_stream(), '"') == []

def test_row_terminator_text_stream_without_translation():
    stream = io.TextIOWrapper(io.BytesIO(b"a,b\r\nc,d\r\n"), encoding="utf-8", newline="")
    assert detect_row_terminator(stream) == "\r\n"

def test_text_stream_logs_warning(caplog):
    with caplog.at_level("WARNING", logger="csvsniff"):
        detect_row_terminator(io.StringIO("a,b\n"))
    assert "newline=''" in caplog.text

def test_binary_stream_does_not_warn(caplog):
    with caplog.at_level("WARNING", logger="csvsniff"):
        detect_row_terminator(io.BytesIO(b"a,b\n"))
    assert "Text stream" not in caplog.text


# ==============================================================================
# SETTINGS
# ==============================================================================

@pytest.mark.parametrize("setting", ["sample_lines", "buffer_size", "chunk_size"])
@pytest.mark.parametrize("value", [0, -1])
def test_detector_rejects_non_positive_settings(setting, value):
    with pytest.raises(ValueError, match=setting):
        Detector(**{setting: value})
