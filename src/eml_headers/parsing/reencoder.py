"""
Canonical re-encoding of header values.

Every decodable encoded-word in a value is rewritten as a base64 encoded-word in a
single target charset, so downstream consumers only ever see one charset and one
transfer encoding.
"""

import base64
from typing import List, Optional

from ..logging_config import TraceSink, null_trace
from ..models.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink
from .charsets import CharsetBackend, normalize_charset_name
from .header_decoder import decode_header
from .whitespace import split_tokens

TARGET_CHARSET = "UTF-8"

# RFC 2047 limit on the length of a single encoded-word
MAX_ENCODED_WORD_LEN = 75
MAX_CONTENT_LEN = MAX_ENCODED_WORD_LEN - len("=?UTF-8?b?") - len("?=")
MAX_BASE64_LEN = MAX_CONTENT_LEN // 4 * 3


def needs_encoding(text: str) -> bool:
    """True if text holds anything besides printable ASCII and tab."""
    return any((ch < " " or ch > "~") and ch != "\t" for ch in text)


def encode_word(
    text: str, charset: str = TARGET_CHARSET, keep_ascii: bool = True
) -> str:
    """
    Encode text as one or more B encoded-words.

    Text that needs no encoding is returned unchanged unless keep_ascii is False.
    UTF-8 output longer than the RFC 2047 limit is split into several encoded-words
    separated by a space, never splitting a character.

    Args:
        text: Text to encode
        charset: Charset label to encode with and to write into the encoded-word
        keep_ascii: Return printable ASCII text as is instead of encoding it

    Returns:
        Encoded-word(s)

    Raises:
        LookupError: If charset is not known to Python codecs
        UnicodeEncodeError: If text cannot be represented in charset
    """
    if keep_ascii and not needs_encoding(text):
        return text

    codec = normalize_charset_name(charset)
    prefix = f"=?{charset}?b?"

    if codec.replace("_", "-") not in ("utf-8", "utf8"):
        return _b_word(prefix, text.encode(codec))

    data = text.encode("utf-8")
    if len(data) <= MAX_BASE64_LEN:
        return _b_word(prefix, data)

    words = []
    chunk = bytearray()
    for ch in text:
        encoded = ch.encode("utf-8")
        if chunk and len(chunk) + len(encoded) > MAX_BASE64_LEN:
            words.append(_b_word(prefix, bytes(chunk)))
            chunk = bytearray()
        chunk.extend(encoded)
    words.append(_b_word(prefix, bytes(chunk)))
    return " ".join(words)


def _b_word(prefix: str, data: bytes) -> str:
    return prefix + base64.b64encode(data).decode("ascii") + "?="


def reencode_header(
    value: str,
    charset: str = TARGET_CHARSET,
    backend: Optional[CharsetBackend] = None,
    sink: Optional[DiagnosticSink] = None,
    detect_unknown: bool = False,
    trace: Optional[TraceSink] = None,
) -> str:
    """
    Rewrite every encoded-word in a header value as a B encoded-word in one charset.

    The value is split into whitespace-delimited tokens. A token that looks like it
    contains an encoded-word is decoded and, if anything decoded, re-encoded as B
    encoded-words even when the text is plain ASCII; a single "(" or ")" wrapped
    around it is kept outside the new encoded-word. All other tokens are copied.
    Tokens are joined back with single spaces, so runs of whitespace between them
    collapse to one space.

    Args:
        value: Raw header value
        charset: Target charset label
        backend: Charset backend used for decoding
        sink: Optional collection receiving Diagnostics
        detect_unknown: Guess text for unknown charsets with charset-normalizer
        trace: Optional trace sink

    Returns:
        Re-encoded header value
    """
    if "=?" not in value:
        # Nothing to do here
        return value

    trace = trace or null_trace
    output: List[str] = []

    for i, token in enumerate(split_tokens(value)):
        result = token
        if len(token) > 4 and "=?" in token:
            # Comment parens are not part of the encoded-word
            prefix = suffix = ""
            if token.startswith("("):
                prefix = "("
                token = token[1:]
            if token.endswith(")"):
                suffix = ")"
                token = token[:-1]

            decoded = decode_header(token, backend, sink, detect_unknown, trace)
            if decoded != token:
                try:
                    # ASCII too, so adjacent words still join when decoded again
                    encoded = encode_word(decoded, charset, keep_ascii=False)
                    result = prefix + encoded + suffix
                except UnicodeEncodeError as e:
                    if sink is not None:
                        sink.append(
                            Diagnostic.warning(
                                DiagnosticKind.CHARSET_ENCODE_FAILED,
                                "%s, %r kept as is",
                                e.reason,
                                token,
                            )
                        )

        trace("reencode_token", index=i, token=token, output=result)
        output.append(result)

    return " ".join(output)
