"""
RFC 2047 encoded-word decoding.

Terminology from RFC 2047:
- encoded-word: the entire =?charset?encoding?encoded-text?= string
- charset: the character set portion of the encoded-word
- encoding: the transfer encoding used for the encoded-text (Q or B)
- encoded-text: the text being decoded

Malformed encoded-words are normal in real mail. Nothing here raises for bad input:
decoders return None to mean "leave the original text in place", and record a
Diagnostic when the caller supplies a sink.
"""

import base64
import string
from typing import NamedTuple, Optional

from ..errors import CharsetDecodeError, UnknownCharsetError
from ..models.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink
from ..models.encoded_word import EncodedWord, TransferEncoding
from .charsets import CharsetBackend, default_backend, guess_text

CONTROL_CHARS = frozenset("\r\n")
HEX_DIGITS = frozenset(string.hexdigits)


class EncodedWordSpan(NamedTuple):
    """Location and parts of an encoded-word inside a larger value."""

    start: int
    end: int
    charset: str
    letter: str
    text: str


class DecodeResult(NamedTuple):
    """Decoded text and the charset it was declared in."""

    text: str
    charset: str


def find_encoded_word(value: str, pos: int = 0) -> Optional[EncodedWordSpan]:
    """
    Find the next structurally complete encoded-word at or after pos.

    The charset runs up to the next '?', the encoding is the single character after
    it and must be followed by '?', and the encoded-text runs up to the next '?='.

    When the encoding field is not one character followed by '?', the span covers
    only "=?charset?" plus the two characters after it and its letter holds both of
    them, so decoding rejects it and the caller can rescan after the "=?".

    Args:
        value: Header value to scan
        pos: Index to start scanning from

    Returns:
        EncodedWordSpan, or None if no "=?" or no terminator follows pos
    """
    start = value.find("=?", pos)
    if start == -1:
        return None

    cur = start + len("=?")
    q = value.find("?", cur)
    if q == -1:
        return None
    charset = value[cur:q]

    cur = q + 1
    if len(value) < cur + len("Q??="):
        return None
    letter = value[cur]
    cur += 1
    if value[cur] != "?":
        return EncodedWordSpan(start, cur + 1, charset, value[cur - 1 : cur + 1], "")
    cur += 1

    end = value.find("?=", cur)
    if end == -1:
        return None
    return EncodedWordSpan(start, end + len("?="), charset, letter, value[cur:end])


def parse_encoded_word(text: str) -> Optional[EncodedWord]:
    """
    Parse text that should be exactly one encoded-word.

    Args:
        text: Candidate encoded-word, e.g. "=?UTF-8?Q?caf=C3=A9?="

    Returns:
        EncodedWord, or None if text is not a single well-formed encoded-word
    """
    span = find_encoded_word(text)
    if span is None or span.start != 0 or span.end != len(text):
        return None
    if not span.charset or _has_control(span.charset) or _has_control(span.letter):
        return None

    encoding = TransferEncoding.from_letter(span.letter)
    if encoding is None:
        return None
    return EncodedWord(
        charset=span.charset, encoding=encoding, encoded_text=span.text, raw=text
    )


def decode_q(text: str) -> bytes:
    """
    Decode the Q encoding used inside encoded-words.

    Same as quoted-printable except that '_' stands for a space. This mapping is
    only valid inside encoded-words, never for quoted-printable bodies.

    Raises:
        ValueError: On a bad '=' escape or a character that cannot appear here
    """
    out = bytearray()
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "_":
            out.append(0x20)
        elif ch == "=":
            pair = text[i + 1 : i + 3]
            if len(pair) != 2 or not all(c in HEX_DIGITS for c in pair):
                raise ValueError(f"invalid escape {text[i:i + 3]!r} at offset {i}")
            out.append(int(pair, 16))
            i += 3
            continue
        elif " " <= ch <= "~" or ch in "\t\r\n":
            out.append(ord(ch))
        else:
            raise ValueError(f"invalid character {ch!r} at offset {i}")
        i += 1
    return bytes(out)


def decode_b(text: str) -> bytes:
    """
    Decode the B (base64) encoding used inside encoded-words.

    Raises:
        ValueError: On characters outside the base64 alphabet or bad padding
    """
    # binascii.Error is a ValueError
    return base64.b64decode(text, validate=True)


def decode_encoded_word(
    text: str,
    backend: Optional[CharsetBackend] = None,
    sink: Optional[DiagnosticSink] = None,
    detect_unknown: bool = False,
) -> Optional[DecodeResult]:
    """
    Decode a single encoded-word.

    Args:
        text: Exactly one encoded-word
        backend: Charset backend (defaults to Python codecs)
        sink: Optional collection receiving Diagnostics
        detect_unknown: Guess the text with charset-normalizer when the charset is unknown

    Returns:
        DecodeResult, or None if text should be kept verbatim
    """
    span = find_encoded_word(text)
    if span is None or span.start != 0 or span.end != len(text):
        return None
    return decode_span(span, text, backend, sink, detect_unknown)


def decode_span(
    span: EncodedWordSpan,
    raw: str,
    backend: Optional[CharsetBackend] = None,
    sink: Optional[DiagnosticSink] = None,
    detect_unknown: bool = False,
) -> Optional[DecodeResult]:
    """
    Decode an encoded-word located by find_encoded_word().

    Args:
        span: Parts of the encoded-word
        raw: The encoded-word text, used in diagnostic details

    Returns:
        DecodeResult, or None if the encoded-word should be kept verbatim
    """
    # CR/LF in charset or encoding means the scan ran past the real token boundary
    if _has_control(span.charset) or _has_control(span.letter):
        return None

    encoding = TransferEncoding.from_letter(span.letter)
    if encoding is None:
        _record(
            sink,
            Diagnostic.warning(
                DiagnosticKind.MALFORMED_ENCODED_WORD,
                "unsupported encoding %r in %r",
                span.letter,
                raw,
            ),
        )
        return None

    try:
        if encoding is TransferEncoding.Q:
            data = decode_q(span.text)
        else:
            data = decode_b(span.text)
    except ValueError as e:
        _record(
            sink,
            Diagnostic.warning(
                DiagnosticKind.MALFORMED_ENCODED_WORD, "%s in %r", e, raw
            ),
        )
        return None

    backend = backend or default_backend
    try:
        return DecodeResult(backend.decode(span.charset, data), span.charset)
    except UnknownCharsetError:
        if detect_unknown:
            guessed = guess_text(data)
            if guessed is not None:
                _record(
                    sink,
                    Diagnostic.warning(
                        DiagnosticKind.CHARSET_GUESSED,
                        "charset %r unknown, text of %r detected",
                        span.charset,
                        raw,
                    ),
                )
                return DecodeResult(guessed, span.charset)
        _record(
            sink,
            Diagnostic.warning(
                DiagnosticKind.CHARSET_UNKNOWN,
                "charset %r unknown, %r left undecoded",
                span.charset,
                raw,
            ),
        )
        return None
    except CharsetDecodeError as e:
        _record(
            sink,
            Diagnostic.warning(
                DiagnosticKind.CHARSET_DECODE_FAILED,
                "%s, %r left undecoded",
                e,
                raw,
            ),
        )
        return None


def _has_control(text: str) -> bool:
    return any(ch in CONTROL_CHARS for ch in text)


def _record(sink: Optional[DiagnosticSink], diagnostic: Diagnostic) -> None:
    if sink is not None:
        sink.append(diagnostic)
