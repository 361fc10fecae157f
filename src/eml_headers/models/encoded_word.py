"""
Parsed form of a single RFC 2047 encoded-word.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TransferEncoding(str, Enum):
    """Encoded-word transfer encodings."""

    Q = "Q"  # quoted-printable style, '_' means space
    B = "B"  # base64

    @classmethod
    def from_letter(cls, letter: str) -> Optional["TransferEncoding"]:
        """Map an encoding letter (either case) to a TransferEncoding, or None."""
        try:
            return cls(letter.upper())
        except ValueError:
            return None


class EncodedWord(BaseModel):
    """A =?charset?encoding?encoded-text?= unit, split into its parts."""

    charset: str = Field(description="Charset name as written")
    encoding: TransferEncoding = Field(description="Transfer encoding")
    encoded_text: str = Field(description="Encoded text between the last two '?'")
    raw: str = Field(description="The complete encoded-word")

    model_config = {"frozen": True}
