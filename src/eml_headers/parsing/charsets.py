"""
Charset backends: turn named-charset bytes into text.

The decoder only talks to a backend through CharsetBackend.decode(), so any charset
library can be substituted without touching the decoding code. Backends must be
stateless or safe for concurrent use.
"""

import codecs
from typing import Optional, Protocol

import charset_normalizer

from ..errors import CharsetDecodeError, UnknownCharsetError

# Labels seen in real mail that Python's codec registry does not know
CHARSET_ALIASES = {
    "x-sjis": "shift_jis",
    "x-euc-jp": "euc_jp",
    "x-gbk": "gbk",
    "gb2312": "gbk",
    "ks_c_5601-1987": "cp949",
    "x-mac-roman": "mac_roman",
    "windows-874": "cp874",
}


class CharsetBackend(Protocol):
    """Converts bytes in a named charset to text."""

    def decode(self, charset: str, data: bytes) -> str:
        """
        Decode data using charset.

        Raises:
            UnknownCharsetError: If the charset name is not recognised
            CharsetDecodeError: If data is not valid in that charset
        """
        ...


def normalize_charset_name(charset: str) -> str:
    """
    Lowercase a charset label and drop any RFC 2231 language suffix.

    Args:
        charset: Charset label as found in an encoded-word (e.g. "UTF-8*en")

    Returns:
        Normalized label (e.g. "utf-8")
    """
    name = charset.split("*", 1)[0].strip().lower()
    return CHARSET_ALIASES.get(name, name)


class CodecsCharsetBackend:
    """Charset backend on top of Python's codec registry."""

    def decode(self, charset: str, data: bytes) -> str:
        name = normalize_charset_name(charset)
        if not name:
            raise UnknownCharsetError(charset)
        try:
            info = codecs.lookup(name)
        except LookupError:
            raise UnknownCharsetError(charset) from None

        # Reject bytes-to-bytes codecs such as base64_codec or rot13
        if not getattr(info, "_is_text_encoding", True):
            raise UnknownCharsetError(charset)

        try:
            return data.decode(info.name)
        except UnicodeDecodeError as e:
            raise CharsetDecodeError(charset, e.reason) from e


default_backend = CodecsCharsetBackend()


def guess_text(data: bytes) -> Optional[str]:
    """
    Guess the text of bytes whose charset is unknown, using charset-normalizer.

    Args:
        data: Raw bytes

    Returns:
        Decoded text, or None if no plausible charset was found
    """
    detected = charset_normalizer.from_bytes(data).best()
    return str(detected) if detected else None
