"""
Exception hierarchy for hard header-parsing failures.

Only conditions that stop processing of a header block are exceptions. Recoverable
anomalies (bad encoded-words, unknown charsets) are recorded as Diagnostic values.
"""


class HeaderError(Exception):
    """Base class for header decoding errors."""


class TruncatedHeaderError(HeaderError, EOFError):
    """The stream ended before the blank line that terminates a header block."""


class UnknownCharsetError(HeaderError, LookupError):
    """A charset backend does not know the requested charset."""

    def __init__(self, charset: str):
        super().__init__(f"unknown charset {charset!r}")
        self.charset = charset


class CharsetDecodeError(HeaderError, ValueError):
    """Bytes could not be decoded with a known charset."""

    def __init__(self, charset: str, reason: str):
        super().__init__(f"cannot decode as {charset!r}: {reason}")
        self.charset = charset
        self.reason = reason
