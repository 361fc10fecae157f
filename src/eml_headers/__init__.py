# Lenient RFC 822 / RFC 2047 header decoding

from .errors import (
    CharsetDecodeError,
    HeaderError,
    TruncatedHeaderError,
    UnknownCharsetError,
)
from .models import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticLog,
    EncodedWord,
    HeaderMap,
    TransferEncoding,
)
from .parsing import (
    CodecsCharsetBackend,
    HeaderCodec,
    decode_encoded_word,
    decode_header,
    encode_word,
    read_header,
    read_header_bytes,
    reencode_header,
)

__version__ = "0.1.0"

__all__ = [
    "CharsetDecodeError",
    "HeaderError",
    "TruncatedHeaderError",
    "UnknownCharsetError",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "EncodedWord",
    "HeaderMap",
    "TransferEncoding",
    "CodecsCharsetBackend",
    "HeaderCodec",
    "decode_encoded_word",
    "decode_header",
    "encode_word",
    "read_header",
    "read_header_bytes",
    "reencode_header",
]
