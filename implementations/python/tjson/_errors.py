"""TJSON error codes, exception class, and precedence logic.

Every decoder fails with the same exception type, ParseError.  The `.code`
attribute says which rule was broken and `.decoder` says which component
noticed.  Callers that only care about success can catch ParseError and
ignore both.
"""

from __future__ import annotations

from typing import List, Optional

# ── Error codes (ordered by precedence) ───────────────────────

ERR_TAG: str = "ERR_TAG"                      # missing or unrecognized tag
ERR_UTF8: str = "ERR_UTF8"                    # malformed text payload
ERR_PADDING: str = "ERR_PADDING"              # "=" in a binary payload
ERR_ALPHABET: str = "ERR_ALPHABET"            # character outside alphabet
ERR_LENGTH: str = "ERR_LENGTH"                # impossible encoded length
ERR_TRAILING_BITS: str = "ERR_TRAILING_BITS"  # non-zero unused low bits
ERR_INT_GRAMMAR: str = "ERR_INT_GRAMMAR"      # not a canonical numeral
ERR_INT_RANGE: str = "ERR_INT_RANGE"          # outside the 64-bit range
ERR_TIMESTAMP: str = "ERR_TIMESTAMP"          # outside the UTC profile

# Precedence: index 0 wins.  Binary decoders collect every violation they
# see and report the first one in this order, so a padded payload is
# always reported as ERR_PADDING even if it also has a bad length.
PRECEDENCE: List[str] = [
    ERR_TAG,
    ERR_UTF8,
    ERR_PADDING,
    ERR_ALPHABET,
    ERR_LENGTH,
    ERR_TRAILING_BITS,
    ERR_INT_GRAMMAR,
    ERR_INT_RANGE,
    ERR_TIMESTAMP,
]

_PREC_INDEX = {code: idx for idx, code in enumerate(PRECEDENCE)}


class ParseError(Exception):
    """Exception for any TJSON scalar decode failure.

    The `.code` attribute is one of the ERR_* strings above and is what
    conformance tests compare against.  `.decoder` names the component
    that rejected the input (e.g. "base32"), or None.
    """

    def __init__(self, code: str, msg: str = "",
                 decoder: Optional[str] = None) -> None:
        super().__init__(msg or code)
        self.code = code
        self.decoder = decoder


def choose_reported_error(errors: List[str]) -> str:
    """Given multiple detected violations, return the highest-precedence code."""
    return min(errors, key=lambda e: _PREC_INDEX.get(e, 10_000))
