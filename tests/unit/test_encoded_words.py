"""
Unit tests for encoded-word decoding (encoded_words.py).

Tests cover:
- Locating encoded-words inside a value
- Parsing a single encoded-word into its parts
- Q and B transfer decoding
- Rejection of malformed encoded-words (verbatim passthrough)
- Diagnostics recorded for recoverable failures
- Charset detection fallback
"""

import pytest

from eml_headers.models.diagnostics import DiagnosticKind
from eml_headers.models.encoded_word import TransferEncoding
from eml_headers.parsing.encoded_words import (
    decode_b,
    decode_encoded_word,
    decode_q,
    find_encoded_word,
    parse_encoded_word,
)


class TestFindEncodedWord:
    """Tests for find_encoded_word() function."""

    @pytest.mark.unit
    def test_find_single_word(self):
        """Test locating an encoded-word spanning the whole value."""
        span = find_encoded_word("=?US-ASCII?Q?Keith_Moore?=")
        assert span is not None
        assert span.start == 0
        assert span.end == len("=?US-ASCII?Q?Keith_Moore?=")
        assert span.charset == "US-ASCII"
        assert span.letter == "Q"
        assert span.text == "Keith_Moore"

    @pytest.mark.unit
    def test_find_embedded_word(self):
        """Test locating an encoded-word after literal text."""
        value = "(Keith =?US-ASCII?Q?Moore?=)"
        span = find_encoded_word(value)
        assert span is not None
        assert value[span.start : span.end] == "=?US-ASCII?Q?Moore?="

    @pytest.mark.unit
    def test_find_from_position(self):
        """Test scanning resumes at the given position."""
        value = "=?a?Q?x?= =?b?B?eQ==?="
        first = find_encoded_word(value)
        second = find_encoded_word(value, first.end)
        assert second.charset == "b"
        assert second.letter == "B"

    @pytest.mark.unit
    def test_find_no_marker(self):
        """Test value without any encoded-word."""
        assert find_encoded_word("plain text") is None

    @pytest.mark.unit
    def test_find_missing_terminator(self):
        """Test that a missing '?=' stops the scan."""
        assert find_encoded_word("=?US-ASCII?Q?Keith_Moore?!") is None

    @pytest.mark.unit
    def test_find_multi_letter_encoding(self):
        """Test a bad encoding field yields a short span with an invalid letter."""
        span = find_encoded_word("=?utf-8?QB?abc?=")
        assert span is not None
        assert (span.start, span.end) == (0, len("=?utf-8?QB"))
        assert span.letter == "QB"
        assert span.text == ""


class TestParseEncodedWord:
    """Tests for parse_encoded_word() function."""

    @pytest.mark.unit
    def test_parse_valid_q(self):
        """Test parsing a Q encoded-word."""
        word = parse_encoded_word("=?US-ASCII?Q?Keith_Moore?=")
        assert word is not None
        assert word.charset == "US-ASCII"
        assert word.encoding is TransferEncoding.Q
        assert word.encoded_text == "Keith_Moore"
        assert word.raw == "=?US-ASCII?Q?Keith_Moore?="

    @pytest.mark.unit
    def test_parse_lowercase_b(self):
        """Test encoding letter is case-insensitive."""
        word = parse_encoded_word("=?utf-8?b?SGk=?=")
        assert word.encoding is TransferEncoding.B

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            "=?US\nASCII?Q?Keith_Moore?=",
            "=?US-ASCII?\r?Keith_Moore?=",
            "=?US-ASCII?Q?Keith_Moore?!",
            "=?US-ASCII?X?Keith_Moore?=",
            "=??Q?Keith_Moore?=",
            "prefix =?US-ASCII?Q?Keith_Moore?=",
            "=?US-ASCII?Q?Keith_Moore?= suffix",
        ],
    )
    def test_parse_rejects(self, text):
        """Test malformed or non-exact encoded-words are rejected."""
        assert parse_encoded_word(text) is None

    @pytest.mark.unit
    def test_encoded_word_is_frozen(self):
        """Test EncodedWord is immutable."""
        word = parse_encoded_word("=?utf-8?q?x?=")
        with pytest.raises(Exception):
            word.charset = "latin-1"


class TestDecodeQ:
    """Tests for decode_q() function."""

    @pytest.mark.unit
    def test_underscore_is_space(self):
        """Test '_' maps to a space."""
        assert decode_q("Keith_Moore") == b"Keith Moore"

    @pytest.mark.unit
    def test_hex_escapes(self):
        """Test '=HH' escapes in either case."""
        assert decode_q("=c2=A2") == b"\xc2\xa2"

    @pytest.mark.unit
    def test_escaped_underscore(self):
        """Test an escaped underscore stays an underscore."""
        assert decode_q("a=5Fb") == b"a_b"

    @pytest.mark.unit
    def test_tab_allowed(self):
        """Test tab passes through."""
        assert decode_q("a\tb") == b"a\tb"

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["=4", "abc=", "=ZZ", "a\x7fb", "café"])
    def test_invalid(self, text):
        """Test bad escapes and characters raise ValueError."""
        with pytest.raises(ValueError):
            decode_q(text)


class TestDecodeB:
    """Tests for decode_b() function."""

    @pytest.mark.unit
    def test_valid(self):
        """Test standard base64."""
        assert decode_b("SGVsbG8gV29ybGQ=") == b"Hello World"

    @pytest.mark.unit
    def test_empty(self):
        """Test empty encoded-text."""
        assert decode_b("") == b""

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["not*base64", "SGVsbG8gV29ybGQ", "SGk=x"])
    def test_invalid(self, text):
        """Test invalid alphabet or padding raises ValueError."""
        with pytest.raises(ValueError):
            decode_b(text)


class TestDecodeEncodedWord:
    """Tests for decode_encoded_word() function."""

    @pytest.mark.unit
    def test_ascii_q(self):
        """Test decoding a simple ASCII Q encoded-word."""
        result = decode_encoded_word("=?US-ASCII?Q?Keith_Moore?=")
        assert result.text == "Keith Moore"
        assert result.charset == "US-ASCII"

    @pytest.mark.unit
    def test_ascii_b(self):
        """Test decoding a simple ASCII B encoded-word."""
        result = decode_encoded_word("=?US-ASCII?B?SGVsbG8gV29ybGQ=?=")
        assert result.text == "Hello World"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("=?utf-8?q?abcABC_=24_=c2=a2_=e2=82=ac?=", "abcABC $ ¢ €"),
            ("=?iso-8859-1?q?#=a3_c=a9_r=ae_u=b5?=", "#£ c© r® uµ"),
            ("=?shift_jis?B?k/qWew==?=", "日本"),
            ("=?shift_jis?Q?=93=FA=96=7B?=", "日本"),
        ],
    )
    def test_charsets(self, text, expected):
        """Test several charsets including a multi-byte East-Asian one."""
        assert decode_encoded_word(text).text == expected

    @pytest.mark.unit
    def test_rfc2231_language_suffix(self):
        """Test charset language suffix is ignored."""
        assert decode_encoded_word("=?utf-8*en?Q?hi_there?=").text == "hi there"

    @pytest.mark.unit
    def test_control_characters_record_nothing(self, diagnostics):
        """Test CR/LF in charset or encoding is rejected without a diagnostic."""
        assert decode_encoded_word("=?US\nASCII?Q?Keith_Moore?=", sink=diagnostics) is None
        assert decode_encoded_word("=?US-ASCII?\r?Keith_Moore?=", sink=diagnostics) is None
        assert len(diagnostics) == 0

    @pytest.mark.unit
    def test_bad_terminator_records_nothing(self, diagnostics):
        """Test a bad terminator is rejected without a diagnostic."""
        assert decode_encoded_word("=?US-ASCII?Q?Keith_Moore?!", sink=diagnostics) is None
        assert len(diagnostics) == 0

    @pytest.mark.unit
    def test_unknown_charset(self, diagnostics):
        """Test unknown charset is rejected and recorded as a warning."""
        assert decode_encoded_word("=?x-bogus?Q?abc?=", sink=diagnostics) is None
        assert diagnostics.kinds() == [DiagnosticKind.CHARSET_UNKNOWN]
        assert not diagnostics.has_severe
        assert "x-bogus" in diagnostics.warnings()[0].detail

    @pytest.mark.unit
    def test_unsupported_encoding(self, diagnostics):
        """Test an encoding letter other than Q/B is recorded as malformed."""
        assert decode_encoded_word("=?utf-8?X?abc?=", sink=diagnostics) is None
        assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_ENCODED_WORD]

    @pytest.mark.unit
    def test_bad_base64(self, diagnostics):
        """Test invalid base64 payload is recorded as malformed."""
        assert decode_encoded_word("=?utf-8?B?not*base64?=", sink=diagnostics) is None
        assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_ENCODED_WORD]

    @pytest.mark.unit
    def test_charset_decode_failure(self, diagnostics):
        """Test bytes invalid for the charset are recorded."""
        assert decode_encoded_word("=?utf-8?Q?=FF=FE?=", sink=diagnostics) is None
        assert diagnostics.kinds() == [DiagnosticKind.CHARSET_DECODE_FAILED]

    @pytest.mark.unit
    def test_no_sink_no_error(self):
        """Test failures without a sink simply return None."""
        assert decode_encoded_word("=?x-bogus?Q?abc?=") is None

    @pytest.mark.unit
    def test_detect_unknown_charset(self, diagnostics):
        """Test charset-normalizer fallback for an unknown charset."""
        text = "This is a plain ASCII sentence used for charset detection"
        encoded = "=?x-bogus?Q?" + text.replace(" ", "_") + "?="
        result = decode_encoded_word(encoded, sink=diagnostics, detect_unknown=True)
        assert result is not None
        assert result.text == text
        assert diagnostics.kinds() == [DiagnosticKind.CHARSET_GUESSED]

    @pytest.mark.unit
    def test_custom_backend(self):
        """Test the charset backend seam is used for the final conversion."""

        class ShoutingBackend:
            def decode(self, charset, data):
                return data.decode("ascii").upper()

        result = decode_encoded_word("=?anything?Q?hello?=", backend=ShoutingBackend())
        assert result.text == "HELLO"
