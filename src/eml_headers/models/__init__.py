# Data models for header decoding

from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog, DiagnosticSink
from .encoded_word import EncodedWord, TransferEncoding
from .header_map import HeaderMap

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "DiagnosticSink",
    "EncodedWord",
    "TransferEncoding",
    "HeaderMap",
]
