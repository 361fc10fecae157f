"""
Header block reader for RFC 822 / MIME headers.

Reads header lines from a binary stream up to the blank line that separates headers
from the body. Real mail often breaks the folding rules, so a line that does not look
like "name: value" is treated as a continuation of the previous field instead of
being rejected.
"""

import io
import re
from typing import BinaryIO, List, Optional, Tuple

from ..errors import TruncatedHeaderError
from ..models.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink
from ..models.header_map import HeaderMap
from .whitespace import is_header_continuation

# field-name is any printable ASCII except ':' (RFC 5322 ftext), no whitespace allowed
FIELD_RE = re.compile(r"^([\x21-\x39\x3b-\x7e]+):(.*)$", re.DOTALL)


def read_header(stream: BinaryIO, sink: Optional[DiagnosticSink] = None) -> HeaderMap:
    """
    Read a block of headers from stream.

    Consumes lines up to and including the first empty line, leaving stream at the
    first byte of the body.

    Continuation rules:
    - A line starting with a space or tab is a classic folded continuation; it is
      appended to the current value after a single space.
    - A line that does not parse as "name: value" is appended to the current value
      directly. Lines like this before the first field are dropped.

    Args:
        stream: Binary stream with readline(), positioned at the start of the headers
        sink: Optional collection receiving Diagnostics

    Returns:
        HeaderMap with every field in the order read

    Raises:
        TruncatedHeaderError: If the stream ends before the blank line
        OSError: If reading the stream fails
    """
    headers = HeaderMap()
    name: Optional[str] = None
    parts: List[str] = []

    def flush() -> None:
        if name is not None:
            headers.add(name, "".join(parts).rstrip(" \t"))

    while True:
        raw = stream.readline()
        if not raw.endswith(b"\n"):
            raise TruncatedHeaderError(
                f"end of stream inside header block after {len(headers)} field(s)"
            )
        if raw[:1] in (b"\r", b"\n"):
            # End of headers
            break

        line = _decode_line(_strip_eol(raw), sink)

        if is_header_continuation(line):
            if name is not None:
                folded = line.strip(" \t")
                if folded:
                    parts.append(" " + folded)
            continue

        match = FIELD_RE.match(line)
        if match is None:
            if name is not None:
                parts.append(line.rstrip(" \t"))
            continue

        flush()
        name = match.group(1)
        parts = [match.group(2).strip(" \t")]

    flush()
    return headers


def read_header_bytes(
    data: bytes, sink: Optional[DiagnosticSink] = None
) -> Tuple[HeaderMap, bytes]:
    """
    Read the header block at the start of data.

    Args:
        data: Raw message (or MIME part) bytes
        sink: Optional collection receiving Diagnostics

    Returns:
        Tuple of (headers, body_bytes)

    Raises:
        TruncatedHeaderError: If data ends before the blank line
    """
    stream = io.BytesIO(data)
    headers = read_header(stream, sink)
    return headers, stream.read()


def _strip_eol(raw: bytes) -> bytes:
    if raw.endswith(b"\r\n"):
        return raw[:-2]
    return raw[:-1]


def _decode_line(line: bytes, sink: Optional[DiagnosticSink]) -> str:
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError:
        # Undeclared 8-bit header; keep the bytes recoverable
        if sink is not None:
            sink.append(
                Diagnostic.warning(
                    DiagnosticKind.RAW_8BIT_HEADER,
                    "header line is not valid UTF-8: %r",
                    line[:60],
                )
            )
        return line.decode("utf-8", "surrogateescape")
