"""Coercion of raw tokens (str or bytes) into text.

Tokens may arrive as bytes straight off the wire or as str from a JSON
tokenizer that already decoded them.  Text payloads must be well-formed
UTF-8 scalar values; every other payload is pure ASCII by grammar and any
non-ASCII content is left for that grammar to reject.
"""

from __future__ import annotations

from typing import Union

from ._errors import ERR_UTF8, ParseError

Token = Union[str, bytes]

_BINARY_TYPES = (bytes, bytearray, memoryview)


def _ensure_no_surrogates(s: str, decoder: str) -> None:
    # A str can carry lone surrogates (e.g. from a "\ud800" JSON escape or
    # surrogateescape decoding).  Those are not well-formed text.
    for ch in s:
        cp = ord(ch)
        if 0xD800 <= cp <= 0xDFFF:
            raise ParseError(ERR_UTF8,
                             "surrogate code-point U+{:04X}".format(cp),
                             decoder=decoder)


def utf8_text(raw: Token, decoder: str) -> str:
    """Return `raw` as str, rejecting invalid UTF-8 or any surrogate."""
    if isinstance(raw, _BINARY_TYPES):
        try:
            s = bytes(raw).decode("utf-8", errors="strict")
        except UnicodeDecodeError:
            raise ParseError(ERR_UTF8, "invalid utf-8", decoder=decoder)
    elif isinstance(raw, str):
        s = raw
    else:
        raise TypeError("token must be str or bytes, not {}".format(
            type(raw).__name__))
    _ensure_no_surrogates(s, decoder)
    return s


def grammar_text(raw: Token) -> str:
    """Return `raw` as str for an ASCII-only grammar.

    Bytes map one-to-one onto code points U+0000–U+00FF, so a stray
    non-ASCII byte survives as a non-ASCII character and fails the
    grammar check that follows, with that decoder's own error code.
    """
    if isinstance(raw, _BINARY_TYPES):
        return bytes(raw).decode("latin-1")
    if isinstance(raw, str):
        return raw
    raise TypeError("token must be str or bytes, not {}".format(
        type(raw).__name__))
