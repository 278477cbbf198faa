"""TJSON constants — scalar tags, binary alphabets, and integer bounds.

Tags are matched case-sensitively and always followed by ":" on the wire.
"""

from __future__ import annotations

from typing import Tuple

# ── Scalar tags ───────────────────────────────────────────────
# The set is closed.  Object/array/boolean/null markers exist in the wider
# format but are never scalar tags, so the dispatcher rejects them.
TAG_STRING: str = "s"
TAG_BASE16: str = "b16"
TAG_BASE32: str = "b32"
TAG_BASE64URL: str = "b64"
TAG_SIGNED: str = "i"
TAG_UNSIGNED: str = "u"
TAG_TIMESTAMP: str = "t"

SCALAR_TAGS: Tuple[str, ...] = (
    TAG_STRING,
    TAG_BASE16,
    TAG_BASE32,
    TAG_BASE64URL,
    TAG_SIGNED,
    TAG_UNSIGNED,
    TAG_TIMESTAMP,
)

TAG_SEPARATOR: str = ":"

# ── Binary alphabets ──────────────────────────────────────────
# Canonical case is fixed: lowercase for base16 and base32, and the
# URL-safe RFC 4648 §5 alphabet for base64url.
BASE16_ALPHABET: str = "0123456789abcdef"
BASE32_ALPHABET: str = "abcdefghijklmnopqrstuvwxyz234567"
BASE64URL_ALPHABET: str = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
)

PAD_CHAR: str = "="

# Remainders (len % block) that can end an unpadded encoding.  base32
# emits 2, 4, 5 or 7 characters for a 1–4 byte tail; base64 emits 2 or 3.
BASE32_VALID_TAILS = frozenset((0, 2, 4, 5, 7))
BASE64_VALID_TAILS = frozenset((0, 2, 3))

# ── 64-bit integer ranges ─────────────────────────────────────
# Python ints never wrap, so both ranges are enforced by explicit checks.
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1
UINT64_MAX: int = 2**64 - 1

# Longest digit run that can still be in range ("18446744073709551615").
# Anything longer is rejected before int() runs.
MAX_INT_DIGITS: int = len(str(UINT64_MAX))
