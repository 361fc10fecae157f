"""
RFC 822 linear-white-space classification.
"""

from typing import List

WHITESPACE = frozenset(" \t\r\n")
FOLDING_PREFIXES = (" ", "\t")


def is_whitespace(ch: str) -> bool:
    """True for space, tab, carriage return and line feed."""
    return ch in WHITESPACE


def is_folding_whitespace(text: str) -> bool:
    """True if text holds nothing but whitespace (the empty string included)."""
    return all(ch in WHITESPACE for ch in text)


def split_tokens(text: str) -> List[str]:
    """
    Split text on runs of whitespace, dropping empty tokens.

    Unlike str.split(), only the four RFC 822 whitespace characters separate tokens.
    """
    tokens = []
    start = None
    for i, ch in enumerate(text):
        if ch in WHITESPACE:
            if start is not None:
                tokens.append(text[start:i])
                start = None
        elif start is None:
            start = i
    if start is not None:
        tokens.append(text[start:])
    return tokens


def is_header_continuation(line: str) -> bool:
    """True if line is a classic folded continuation (starts with space or tab)."""
    return line.startswith(FOLDING_PREFIXES)
