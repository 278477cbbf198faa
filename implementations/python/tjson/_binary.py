"""TJSON binary decoders — base16, base32, base64url.

The stdlib codecs are all lenient somewhere: b32decode takes a casefold
flag and needs padding, b64decode silently drops characters outside its
alphabet unless validate=True, and bytes.fromhex skips whitespace and
accepts uppercase.  None of them check that unused trailing bits are
zero.  So every payload goes through _check_payload() first and only
a payload already known to be canonical reaches the codec.

Payload shape per alphabet:

    base16     0-9a-f          length % 2 == 0
    base32     a-z2-7          length % 8 in {0, 2, 4, 5, 7}
    base64url  A-Za-z0-9-_     length % 4 in {0, 2, 3}

No "=" is ever accepted, even where it would make the value decode.
"""

from __future__ import annotations

import base64
import binascii
from typing import Callable, Dict, FrozenSet, List

from ._constants import (
    BASE16_ALPHABET,
    BASE32_ALPHABET,
    BASE32_VALID_TAILS,
    BASE64_VALID_TAILS,
    BASE64URL_ALPHABET,
    PAD_CHAR,
)
from ._errors import (
    ERR_ALPHABET,
    ERR_LENGTH,
    ERR_PADDING,
    ERR_TRAILING_BITS,
    ParseError,
    choose_reported_error,
)
from ._utf8 import Token, grammar_text

_BASE16_SET = frozenset(BASE16_ALPHABET)
_BASE32_SET = frozenset(BASE32_ALPHABET)
_BASE64URL_SET = frozenset(BASE64URL_ALPHABET)
_BASE16_TAILS = frozenset((0,))


def _check_payload(s: str, alphabet: FrozenSet[str], block: int,
                   valid_tails: FrozenSet[int], decoder: str) -> None:
    """Raise ParseError for the highest-precedence violation in `s`.

    Violations are collected rather than raised on first sight so that the
    reported code doesn't depend on where in the payload the problems sit.
    """
    errors: List[str] = []
    detail: Dict[str, str] = {}

    pad_at = s.find(PAD_CHAR)
    if pad_at >= 0:
        errors.append(ERR_PADDING)
        detail[ERR_PADDING] = "padding at offset {}".format(pad_at)

    for i, ch in enumerate(s):
        if ch != PAD_CHAR and ch not in alphabet:
            errors.append(ERR_ALPHABET)
            detail[ERR_ALPHABET] = "invalid character {!r} at offset {}".format(ch, i)
            break

    if len(s) % block not in valid_tails:
        errors.append(ERR_LENGTH)
        detail[ERR_LENGTH] = "invalid length {}".format(len(s))

    if errors:
        code = choose_reported_error(errors)
        raise ParseError(code, "{}: {}".format(decoder, detail[code]),
                         decoder=decoder)


def _ensure_canonical(out: bytes, s: str, encode: Callable[[bytes], str],
                      decoder: str) -> None:
    # Non-zero unused bits in the last character decode to the same bytes
    # as the zero-bit spelling.  Only the zero-bit spelling is canonical.
    if encode(out) != s:
        raise ParseError(ERR_TRAILING_BITS,
                         "{}: non-zero trailing bits".format(decoder),
                         decoder=decoder)


def _b32_text(b: bytes) -> str:
    return base64.b32encode(b).decode("ascii").rstrip(PAD_CHAR).lower()


def _b64url_text(b: bytes) -> str:
    return base64.urlsafe_b64encode(b).decode("ascii").rstrip(PAD_CHAR)


def parse_base16(raw: Token) -> bytes:
    """Decode an untagged lowercase base16 payload into bytes."""
    s = grammar_text(raw)
    _check_payload(s, _BASE16_SET, 2, _BASE16_TAILS, "base16")
    # Pre-checked: even length, lowercase hex digits only.  Each pair maps to
    # exactly one byte so there are no trailing bits to verify.
    return bytes.fromhex(s)


def parse_base32(raw: Token) -> bytes:
    """Decode an untagged, unpadded, lowercase base32 payload into bytes."""
    s = grammar_text(raw)
    _check_payload(s, _BASE32_SET, 8, BASE32_VALID_TAILS, "base32")
    padded = s.upper() + PAD_CHAR * (-len(s) % 8)
    try:
        out = base64.b32decode(padded)
    except binascii.Error as e:
        raise ParseError(ERR_LENGTH, "base32: {}".format(e), decoder="base32")
    _ensure_canonical(out, s, _b32_text, "base32")
    return out


def parse_base64url(raw: Token) -> bytes:
    """Decode an untagged, unpadded base64url payload into bytes."""
    s = grammar_text(raw)
    _check_payload(s, _BASE64URL_SET, 4, BASE64_VALID_TAILS, "base64url")
    padded = s + PAD_CHAR * (-len(s) % 4)
    try:
        out = base64.urlsafe_b64decode(padded)
    except binascii.Error as e:
        raise ParseError(ERR_LENGTH, "base64url: {}".format(e),
                         decoder="base64url")
    _ensure_canonical(out, s, _b64url_text, "base64url")
    return out
