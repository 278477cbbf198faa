"""tjson — strict decoder for Tagged JSON scalar literals.

Every TJSON scalar carries its type in a tag prefix, and each tag has one
canonical payload form.  Anything else is rejected with ParseError.

Quick start:
    >>> from tjson import parse
    >>> parse("s:hello, world!")
    'hello, world!'
    >>> parse("b16:48656c6c6f2c20776f726c6421")
    b'Hello, world!'
    >>> parse("u:18446744073709551615")
    18446744073709551615
    >>> parse("hello, world!")
    Traceback (most recent call last):
        ...
    tjson._errors.ParseError: untagged value

Callers whose tokenizer already stripped the tag use the direct decoders
(parse_base32, parse_signed_int, ...) on the bare payload instead.
"""

from __future__ import annotations

from ._binary import parse_base16, parse_base32, parse_base64url
from ._constants import (
    INT64_MAX,
    INT64_MIN,
    SCALAR_TAGS,
    TAG_BASE16,
    TAG_BASE32,
    TAG_BASE64URL,
    TAG_SIGNED,
    TAG_STRING,
    TAG_TIMESTAMP,
    TAG_UNSIGNED,
    UINT64_MAX,
)
from ._core import DECODERS, Scalar, decode, parse, parse_string, split_tag
from ._errors import (
    ERR_ALPHABET,
    ERR_INT_GRAMMAR,
    ERR_INT_RANGE,
    ERR_LENGTH,
    ERR_PADDING,
    ERR_TAG,
    ERR_TIMESTAMP,
    ERR_TRAILING_BITS,
    ERR_UTF8,
    PRECEDENCE,
    ParseError,
)
from ._integers import parse_signed_int, parse_unsigned_int
from ._timestamp import Timestamp, parse_timestamp

__version__ = "0.1.0"

__all__ = [
    # Tagged-token API
    "decode",
    "parse",
    "split_tag",
    "Scalar",
    # Direct (untagged payload) decoders
    "DECODERS",
    "parse_string",
    "parse_base16",
    "parse_base32",
    "parse_base64url",
    "parse_signed_int",
    "parse_unsigned_int",
    "parse_timestamp",
    "Timestamp",
    # Tags and bounds
    "SCALAR_TAGS",
    "TAG_STRING",
    "TAG_BASE16",
    "TAG_BASE32",
    "TAG_BASE64URL",
    "TAG_SIGNED",
    "TAG_UNSIGNED",
    "TAG_TIMESTAMP",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    # Exception
    "ParseError",
    # Error codes
    "ERR_TAG",
    "ERR_UTF8",
    "ERR_PADDING",
    "ERR_ALPHABET",
    "ERR_LENGTH",
    "ERR_TRAILING_BITS",
    "ERR_INT_GRAMMAR",
    "ERR_INT_RANGE",
    "ERR_TIMESTAMP",
    "PRECEDENCE",
]
