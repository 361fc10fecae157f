# Header reading and RFC 2047 decoding

from .charsets import CharsetBackend, CodecsCharsetBackend, guess_text
from .codec import HeaderCodec
from .encoded_words import (
    DecodeResult,
    decode_b,
    decode_encoded_word,
    decode_q,
    find_encoded_word,
    parse_encoded_word,
)
from .header_decoder import decode_header
from .header_reader import read_header, read_header_bytes
from .reencoder import TARGET_CHARSET, encode_word, reencode_header
from .whitespace import is_folding_whitespace, is_whitespace, split_tokens

__all__ = [
    "CharsetBackend",
    "CodecsCharsetBackend",
    "guess_text",
    "HeaderCodec",
    "DecodeResult",
    "decode_b",
    "decode_encoded_word",
    "decode_q",
    "find_encoded_word",
    "parse_encoded_word",
    "decode_header",
    "read_header",
    "read_header_bytes",
    "TARGET_CHARSET",
    "encode_word",
    "reencode_header",
    "is_folding_whitespace",
    "is_whitespace",
    "split_tokens",
]
