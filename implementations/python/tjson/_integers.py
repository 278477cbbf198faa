"""TJSON integer decoders — signed ("i:") and unsigned ("u:") 64-bit.

int() is far too forgiving to run on untrusted numerals directly: it
strips whitespace, accepts "+", "_" separators and any Unicode decimal
digit, and refuses very long strings with a ValueError of its own
(sys.int_info.str_digits_check_threshold).  The grammar is therefore
matched with an ASCII-only regex first, and the digit count is checked
before int() ever sees the string.
"""

from __future__ import annotations

import re

from ._constants import INT64_MAX, INT64_MIN, MAX_INT_DIGITS, UINT64_MAX
from ._errors import ERR_INT_GRAMMAR, ERR_INT_RANGE, ParseError
from ._utf8 import Token, grammar_text

# "0", or a non-zero digit followed by any digits.  [0-9] rather than \d,
# which matches Arabic-Indic and other Unicode digits.
_UNSIGNED_RE = re.compile(r"(?:0|[1-9][0-9]*)")
# "-0" is left out: zero has exactly one spelling.
_SIGNED_RE = re.compile(r"(?:0|-?[1-9][0-9]*)")


def _numeral(raw: Token, pattern: re.Pattern, decoder: str) -> str:
    s = grammar_text(raw)
    if pattern.fullmatch(s) is None:
        raise ParseError(ERR_INT_GRAMMAR,
                         "{}: invalid integer {!r}".format(decoder, s[:32]),
                         decoder=decoder)
    if len(s.lstrip("-")) > MAX_INT_DIGITS:
        raise ParseError(ERR_INT_RANGE,
                         "{}: {} digits exceeds 64-bit range".format(
                             decoder, len(s.lstrip("-"))),
                         decoder=decoder)
    return s


def parse_signed_int(raw: Token) -> int:
    """Decode an untagged signed numeral in [-2**63, 2**63 - 1]."""
    val = int(_numeral(raw, _SIGNED_RE, "signed"))
    if val < INT64_MIN or val > INT64_MAX:
        raise ParseError(ERR_INT_RANGE,
                         "signed: {} outside int64 range".format(val),
                         decoder="signed")
    return val


def parse_unsigned_int(raw: Token) -> int:
    """Decode an untagged unsigned numeral in [0, 2**64 - 1].

    A leading "-" is a grammar error, even on "-0".
    """
    val = int(_numeral(raw, _UNSIGNED_RE, "unsigned"))
    if val > UINT64_MAX:
        raise ParseError(ERR_INT_RANGE,
                         "unsigned: {} outside uint64 range".format(val),
                         decoder="unsigned")
    return val
