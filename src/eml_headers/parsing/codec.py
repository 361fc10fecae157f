"""
HeaderCodec: one object holding the decoding options, built from Settings.
"""

from typing import BinaryIO, Optional

from .. import config
from ..config import Settings
from ..logging_config import TraceSink, get_trace, setup_logging
from ..models.diagnostics import DiagnosticSink
from ..models.header_map import HeaderMap
from .charsets import CharsetBackend, default_backend
from .header_decoder import decode_header
from .header_reader import read_header
from .reencoder import TARGET_CHARSET, reencode_header


class HeaderCodec:
    """
    Reads header blocks and decodes or re-encodes their values.

    Holds no per-message state, so a single instance can serve concurrent parses as
    long as each parse passes its own diagnostic sink.
    """

    def __init__(
        self,
        backend: Optional[CharsetBackend] = None,
        target_charset: str = TARGET_CHARSET,
        detect_unknown: bool = False,
        trace: Optional[TraceSink] = None,
    ):
        """
        Initialize header codec.

        Args:
            backend: Charset backend (defaults to Python codecs)
            target_charset: Charset used by reencode()
            detect_unknown: Guess text for unknown charsets with charset-normalizer
            trace: Optional trace sink
        """
        self.backend = backend or default_backend
        self.target_charset = target_charset
        self.detect_unknown = detect_unknown
        self.trace = trace

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, backend: Optional[CharsetBackend] = None
    ) -> "HeaderCodec":
        """
        Create a codec configured from Settings (the global instance by default).

        With trace_decoding on, structlog is configured and decoding events go to a
        debug-level logger.
        """
        settings = settings or config.settings
        trace = None
        if settings.trace_decoding:
            setup_logging(settings)
            trace = get_trace(__name__)
        return cls(
            backend=backend,
            target_charset=settings.target_charset,
            detect_unknown=settings.detect_unknown_charsets,
            trace=trace,
        )

    def read(self, stream: BinaryIO, sink: Optional[DiagnosticSink] = None) -> HeaderMap:
        """Read a header block from stream; see read_header()."""
        return read_header(stream, sink)

    def decode(self, value: str, sink: Optional[DiagnosticSink] = None) -> str:
        """Decode all encoded-words in value; see decode_header()."""
        return decode_header(value, self.backend, sink, self.detect_unknown, self.trace)

    def reencode(self, value: str, sink: Optional[DiagnosticSink] = None) -> str:
        """Re-encode all encoded-words in value to the target charset."""
        return reencode_header(
            value,
            self.target_charset,
            self.backend,
            sink,
            self.detect_unknown,
            self.trace,
        )

    def decode_all(
        self, headers: HeaderMap, sink: Optional[DiagnosticSink] = None
    ) -> HeaderMap:
        """
        Decode every value of a header map.

        Args:
            headers: Raw header map
            sink: Optional collection receiving Diagnostics

        Returns:
            New HeaderMap with decoded values, same names and order
        """
        decoded = HeaderMap()
        for name, values in headers.items():
            for value in values:
                decoded.add(name, self.decode(value, sink))
        return decoded
