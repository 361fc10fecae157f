"""
Diagnostic records for recoverable header anomalies.

A Diagnostic describes something that went wrong while parsing but did not stop the
parse. Diagnostics are accumulated by the caller in an append-only collection that
lives for one message parse.
"""

from enum import Enum
from typing import Iterator, List, Protocol

from pydantic import BaseModel, Field


class DiagnosticKind(str, Enum):
    """Closed set of anomaly kinds."""

    BOUNDARY_MISSING = "Boundary Missing"
    MALFORMED_ENCODED_WORD = "Malformed Encoded Word"
    CHARSET_UNKNOWN = "Unknown Charset"
    CHARSET_DECODE_FAILED = "Charset Decode Failed"
    CHARSET_GUESSED = "Charset Guessed"
    CHARSET_ENCODE_FAILED = "Charset Encode Failed"
    RAW_8BIT_HEADER = "Raw 8-bit Header"


class Diagnostic(BaseModel):
    """
    A recoverable anomaly encountered while parsing.

    Attributes:
        kind: Anomaly kind
        detail: Human-readable explanation
        severe: True if data was lost, False if a usable substitute was produced
    """

    kind: DiagnosticKind = Field(description="Anomaly kind")
    detail: str = Field(default="", description="Additional detail about the cause")
    severe: bool = Field(default=False, description="A portion of the message was lost")

    model_config = {"frozen": True}

    @classmethod
    def warning(cls, kind: DiagnosticKind, detail_fmt: str = "", *args) -> "Diagnostic":
        """Create a Diagnostic with severe=False."""
        return cls(kind=kind, detail=detail_fmt % args if args else detail_fmt, severe=False)

    @classmethod
    def error(cls, kind: DiagnosticKind, detail_fmt: str = "", *args) -> "Diagnostic":
        """Create a Diagnostic with severe=True."""
        return cls(kind=kind, detail=detail_fmt % args if args else detail_fmt, severe=True)

    def __str__(self) -> str:
        sev = "E" if self.severe else "W"
        return f"[{sev}] {self.kind.value}: {self.detail}"


class DiagnosticSink(Protocol):
    """Anything diagnostics can be appended to (a list or a DiagnosticLog)."""

    def append(self, diagnostic: Diagnostic) -> None: ...


class DiagnosticLog:
    """
    Append-only collection of diagnostics for a single message parse.

    Not safe to share between concurrent parses of different messages.
    """

    def __init__(self) -> None:
        self._items: List[Diagnostic] = []

    def append(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic."""
        if not isinstance(diagnostic, Diagnostic):
            raise TypeError(f"expected Diagnostic, got {type(diagnostic).__name__}")
        self._items.append(diagnostic)

    def warnings(self) -> List[Diagnostic]:
        """Diagnostics where a best-effort substitution was made."""
        return [d for d in self._items if not d.severe]

    def errors(self) -> List[Diagnostic]:
        """Diagnostics where information was lost."""
        return [d for d in self._items if d.severe]

    def kinds(self) -> List[DiagnosticKind]:
        return [d.kind for d in self._items]

    @property
    def has_severe(self) -> bool:
        return any(d.severe for d in self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"DiagnosticLog({[str(d) for d in self._items]!r})"
