"""TJSON timestamp decoder ("t:") — RFC 3339, UTC "Z" profile only.

Accepted shape:

    YYYY-MM-DDTHH:MM:SS[.fraction]Z

Uppercase "T" and "Z" only.  Numeric offsets are rejected outright, even
"+00:00": normalizing an offset would mean two spellings for one instant.
Leap seconds (":60") are rejected because datetime cannot hold them.

Fractional seconds are kept as the literal digit string, so nothing is
rounded or truncated on the way in.  Whether precision is bounded is the
caller's choice via max_fraction_digits.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from ._errors import ERR_TIMESTAMP, ParseError
from ._utf8 import Token, grammar_text

_TIMESTAMP_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})"
    r"T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?"
    r"Z"
)
_OFFSET_RE = re.compile(r".*[+-][0-9]{2}:[0-9]{2}")
_FRACTION_RE = re.compile(r"[0-9]*")

_MICRO_DIGITS = 6


class Timestamp:
    """A UTC instant with fractional seconds kept exactly as written.

    `seconds` is an aware UTC datetime truncated to the whole second and
    `fraction` the sub-second digits ("" when absent).  Two timestamps are
    equal when they denote the same instant, so ".5" equals ".500".
    """

    __slots__ = ("_seconds", "_fraction")

    def __init__(self, seconds: datetime, fraction: str = "") -> None:
        if seconds.tzinfo is None or seconds.utcoffset() != timedelta(0):
            raise ValueError("seconds must be an aware UTC datetime")
        if seconds.microsecond:
            raise ValueError("seconds must be whole; pass sub-second digits as fraction")
        if _FRACTION_RE.fullmatch(fraction) is None:
            raise ValueError("fraction must be ASCII digits, got {!r}".format(fraction))
        self._seconds = seconds.replace(tzinfo=timezone.utc)
        self._fraction = fraction

    @property
    def seconds(self) -> datetime:
        return self._seconds

    @property
    def fraction(self) -> str:
        return self._fraction

    def to_datetime(self) -> datetime:
        """Return an aware datetime, or raise ValueError if that would lose precision."""
        digits = self._fraction.rstrip("0")
        if len(digits) > _MICRO_DIGITS:
            raise ValueError(
                "fraction .{} is finer than datetime's microseconds".format(self._fraction))
        micro = int(digits.ljust(_MICRO_DIGITS, "0")) if digits else 0
        return self._seconds.replace(microsecond=micro)

    def isoformat(self) -> str:
        # strftime("%Y") doesn't zero-pad years below 1000 on every libc.
        d = self._seconds
        text = "{:04d}-{:02d}-{:02d}T{:02d}:{:02d}:{:02d}".format(
            d.year, d.month, d.day, d.hour, d.minute, d.second)
        if self._fraction:
            text += "." + self._fraction
        return text + "Z"

    def _key(self):
        return self._seconds, self._fraction.rstrip("0")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return "Timestamp({!r})".format(self.isoformat())


def parse_timestamp(raw: Token, max_fraction_digits: Optional[int] = None) -> Timestamp:
    """Decode an untagged RFC 3339 UTC timestamp.

    max_fraction_digits bounds the fractional-second precision; None (the
    default) accepts any number of digits.
    """
    s = grammar_text(raw)
    m = _TIMESTAMP_RE.fullmatch(s)
    if m is None:
        if _OFFSET_RE.fullmatch(s):
            msg = "timestamp: numeric UTC offset not allowed, use 'Z'"
        else:
            msg = "timestamp: malformed {!r}".format(s[:40])
        raise ParseError(ERR_TIMESTAMP, msg, decoder="timestamp")

    fraction = m.group(7) or ""
    if max_fraction_digits is not None and len(fraction) > max_fraction_digits:
        raise ParseError(ERR_TIMESTAMP,
                         "timestamp: {} fractional digits exceeds limit of {}".format(
                             len(fraction), max_fraction_digits),
                         decoder="timestamp")

    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    try:
        seconds = datetime(year, month, day, hour, minute, second,
                           tzinfo=timezone.utc)
    except ValueError as e:
        raise ParseError(ERR_TIMESTAMP, "timestamp: {}".format(e),
                         decoder="timestamp")
    return Timestamp(seconds, fraction)
