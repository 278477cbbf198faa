"""TJSON core — tag dispatch and the string decoder.

A tagged scalar is "<tag>:<payload>".  The tag is everything before the
first colon and must be one of the scalar tags in _constants; the payload
is everything after it and is handed, unexamined, to exactly one decoder.
There is no fallback: once "b32" has matched, a payload that fails base32
is an error even if it would be valid base64url.

Untagged input is never read as an implicit string.  That is the whole
point of the format.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple, Optional, Tuple

from ._binary import parse_base16, parse_base32, parse_base64url
from ._constants import (
    SCALAR_TAGS,
    TAG_BASE16,
    TAG_BASE32,
    TAG_BASE64URL,
    TAG_SEPARATOR,
    TAG_SIGNED,
    TAG_STRING,
    TAG_TIMESTAMP,
    TAG_UNSIGNED,
)
from ._errors import ERR_TAG, ParseError
from ._integers import parse_signed_int, parse_unsigned_int
from ._timestamp import parse_timestamp
from ._utf8 import Token, utf8_text


class Scalar(NamedTuple):
    """A decoded scalar: its tag and the value the tag's decoder produced.

    The tag is what keeps "i:5" and "u:5" apart, since both decode to int.
    """
    tag: str
    value: Any


def parse_string(raw: Token) -> str:
    """Decode an untagged string payload.  Only well-formedness is checked."""
    return utf8_text(raw, "string")


# Direct decoders by tag.  Each takes the payload with the tag already
# stripped, for callers whose tokenizer split the tag off itself.
DECODERS: Mapping[str, Callable[[Token], Any]] = MappingProxyType({
    TAG_STRING: parse_string,
    TAG_BASE16: parse_base16,
    TAG_BASE32: parse_base32,
    TAG_BASE64URL: parse_base64url,
    TAG_SIGNED: parse_signed_int,
    TAG_UNSIGNED: parse_unsigned_int,
    TAG_TIMESTAMP: parse_timestamp,
})


def split_tag(raw: Token) -> Tuple[str, Token]:
    """Split a tagged token into (tag, payload) without looking at the payload.

    The payload keeps the token's type: bytes in, bytes out.
    """
    if isinstance(raw, (bytes, bytearray, memoryview)):
        raw = bytes(raw)
        idx = raw.find(TAG_SEPARATOR.encode("ascii"))
        try:
            tag = raw[:max(idx, 0)].decode("ascii")
        except UnicodeDecodeError:
            raise ParseError(ERR_TAG, "non-ASCII tag", decoder="tag")
    elif isinstance(raw, str):
        idx = raw.find(TAG_SEPARATOR)
        tag = raw[:max(idx, 0)]
    else:
        raise TypeError("token must be str or bytes, not {}".format(
            type(raw).__name__))

    if idx < 0:
        raise ParseError(ERR_TAG, "untagged value", decoder="tag")
    if tag not in SCALAR_TAGS:
        raise ParseError(ERR_TAG, "unrecognized tag {!r}".format(tag[:16]),
                         decoder="tag")
    return tag, raw[idx + 1:]


def decode(raw: Token, *, max_fraction_digits: Optional[int] = None) -> Scalar:
    """Decode a full tagged token into a Scalar.

    max_fraction_digits is forwarded to the timestamp decoder and ignored
    by every other tag.
    """
    tag, payload = split_tag(raw)
    if tag == TAG_TIMESTAMP:
        return Scalar(tag, parse_timestamp(payload, max_fraction_digits))
    return Scalar(tag, DECODERS[tag](payload))


def parse(raw: Token, *, max_fraction_digits: Optional[int] = None) -> Any:
    """Decode a full tagged token and return just the value."""
    return decode(raw, max_fraction_digits=max_fraction_digits).value
