"""
Header value canonicalization: decode every encoded-word in a header value.
"""

from typing import List, Optional

from ..logging_config import TraceSink, null_trace
from ..models.diagnostics import DiagnosticSink
from .charsets import CharsetBackend
from .encoded_words import decode_span, find_encoded_word
from .whitespace import is_folding_whitespace


def decode_header(
    value: str,
    backend: Optional[CharsetBackend] = None,
    sink: Optional[DiagnosticSink] = None,
    detect_unknown: bool = False,
    trace: Optional[TraceSink] = None,
) -> str:
    """
    Decode all RFC 2047 encoded-words in a header value.

    Text outside encoded-words is kept as is. Whitespace that separates two
    encoded-words (spaces, tabs, folded line breaks) is removed, so a phrase split
    over several encoded-words comes back as one run of text. An encoded-word that
    cannot be decoded is left in place verbatim.

    Args:
        value: Raw header value
        backend: Charset backend (defaults to Python codecs)
        sink: Optional collection receiving Diagnostics
        detect_unknown: Guess text for unknown charsets with charset-normalizer
        trace: Optional trace sink

    Returns:
        Decoded header value
    """
    if "=?" not in value:
        # Nothing to do here
        return value

    trace = trace or null_trace
    out: List[str] = []
    pos = 0
    between_words = False

    while True:
        span = find_encoded_word(value, pos)
        if span is None:
            break

        raw = value[span.start : span.end]
        result = decode_span(span, raw, backend, sink, detect_unknown)
        if result is None:
            # Keep the "=?" and rescan after it
            out.append(value[pos : span.start + 2])
            pos = span.start + 2
            between_words = False
            trace("decode_encoded_word", raw=raw, decoded=False)
            continue

        gap = value[pos : span.start]
        if not (between_words and is_folding_whitespace(gap)):
            out.append(gap)
        out.append(result.text)
        pos = span.end
        between_words = True
        trace("decode_encoded_word", raw=raw, decoded=True, charset=result.charset)

    out.append(value[pos:])
    return "".join(out)
