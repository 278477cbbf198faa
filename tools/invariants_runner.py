#!/usr/bin/env python3
# tools/invariants_runner.py
#
# Determinism and canonical-form invariants (property tests) for tjson.
#
# This runner:
# - generates random byte strings, integers, texts and timestamps
# - encodes each in canonical TJSON form and checks it decodes back
# - mutates canonical payloads (padding, case, whitespace, +/-1 past the
#   integer bounds, numeric offsets) and checks every mutation is rejected
# - checks decoding is repeatable (same input, same outcome)
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, base64, random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))

import tjson

SEED = int(os.environ.get("TJSON_SEED", "1337"))
TRIALS = int(os.environ.get("TJSON_TRIALS", "2000"))
MAX_BYTES = int(os.environ.get("TJSON_GEN_MAX_BYTES", "48"))
MAX_STR = int(os.environ.get("TJSON_GEN_MAX_STR", "24"))

random.seed(SEED)

def outcome(token: Any) -> Dict[str, Any]:
    try:
        s = tjson.decode(token)
        return {"tag": s.tag, "value": s.value}
    except tjson.ParseError as e:
        return {"err": e.code}

def fail(label: str, ctx: Dict[str, Any]) -> None:
    print("INVARIANT FAIL:", label)
    print("CTX:", repr(ctx)[:2000])
    raise SystemExit(1)

def rand_bytes() -> bytes:
    return bytes(random.getrandbits(8) for _ in range(random.randint(0, MAX_BYTES)))

def rand_utf8_string() -> str:
    out = []
    for _ in range(random.randint(0, MAX_STR)):
        r = random.random()
        if r < 0.70:
            out.append(chr(random.randint(0x20, 0x7E)))
        elif r < 0.90:
            out.append(chr(random.randint(0xA0, 0xD7FF)))  # exclude surrogates
        else:
            out.append(chr(random.randint(0x10000, 0x10FFFF)))
    return "".join(out)

def rand_timestamp() -> str:
    base = datetime(1970, 1, 1, tzinfo=timezone.utc)
    dt = base + timedelta(seconds=random.randint(0, 4_000_000_000))
    text = "{:04d}-{:02d}-{:02d}T{:02d}:{:02d}:{:02d}".format(
        dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)
    if random.random() < 0.5:
        text += "." + "".join(random.choice("0123456789")
                              for _ in range(random.randint(1, 12)))
    return text + "Z"

def b16(b: bytes) -> str:
    return b.hex()

def b32(b: bytes) -> str:
    return base64.b32encode(b).decode("ascii").rstrip("=").lower()

def b64(b: bytes) -> str:
    return base64.urlsafe_b64encode(b).decode("ascii").rstrip("=")

ENCODERS = {"b16": b16, "b32": b32, "b64": b64}

def check_binary(data: bytes, t: int) -> None:
    for tag, enc in ENCODERS.items():
        payload = enc(data)
        token = tag + ":" + payload

        # (1) canonical encoding is accepted, as bytes
        got = outcome(token)
        if got != {"tag": tag, "value": data} or not isinstance(got["value"], bytes):
            fail("canonical binary accepted", {"trial": t, "token": token, "got": got})

        # (2) repeatable
        if outcome(token) != got:
            fail("decode repeatable", {"trial": t, "token": token})

        # (3) any "=" anywhere is rejected as padding
        pos = random.randint(0, len(payload))
        padded = tag + ":" + payload[:pos] + "=" + payload[pos:]
        if outcome(padded) != {"err": tjson.ERR_PADDING}:
            fail("padding rejected", {"trial": t, "token": padded})

        # (4) whitespace anywhere is rejected
        ws = random.choice(" \t\r\n")
        spaced = tag + ":" + payload[:pos] + ws + payload[pos:]
        if "err" not in outcome(spaced):
            fail("whitespace rejected", {"trial": t, "token": spaced})

        # (5) case flip of any letter is rejected (base64url is case-significant
        #     and would decode differently, so it is skipped here)
        letters = [i for i, c in enumerate(payload) if c.isalpha()]
        if tag != "b64" and letters:
            i = random.choice(letters)
            flipped = tag + ":" + payload[:i] + payload[i].upper() + payload[i + 1:]
            if outcome(flipped) != {"err": tjson.ERR_ALPHABET}:
                fail("case flip rejected", {"trial": t, "token": flipped})

def check_integers(t: int) -> None:
    v = random.randint(tjson.INT64_MIN, tjson.INT64_MAX)
    if outcome("i:" + str(v)) != {"tag": "i", "value": v}:
        fail("signed accepted", {"trial": t, "value": v})
    u = random.randint(0, tjson.UINT64_MAX)
    if outcome("u:" + str(u)) != {"tag": "u", "value": u}:
        fail("unsigned accepted", {"trial": t, "value": u})

    # Bound +/- one, and leading zero / plus sign mutations.
    for token, want in [
        ("i:" + str(tjson.INT64_MAX + 1), tjson.ERR_INT_RANGE),
        ("i:" + str(tjson.INT64_MIN - 1), tjson.ERR_INT_RANGE),
        ("u:" + str(tjson.UINT64_MAX + 1), tjson.ERR_INT_RANGE),
        ("u:-" + str(u), tjson.ERR_INT_GRAMMAR),
        ("i:0" + str(abs(v)), tjson.ERR_INT_GRAMMAR),
        ("i:+" + str(abs(v)), tjson.ERR_INT_GRAMMAR),
    ]:
        if outcome(token) != {"err": want}:
            fail("integer mutation rejected", {"trial": t, "token": token, "want": want})

def check_text(t: int) -> None:
    s = rand_utf8_string()
    for token in ("s:" + s, ("s:" + s).encode("utf-8")):
        if outcome(token) != {"tag": "s", "value": s}:
            fail("text accepted unchanged", {"trial": t, "token": token})
    if "err" not in outcome(s.replace(":", "")):
        fail("untagged rejected", {"trial": t, "token": s})

def check_timestamp(t: int) -> None:
    text = rand_timestamp()
    got = outcome("t:" + text)
    if "err" in got or got["value"].isoformat() != text:
        fail("timestamp accepted verbatim", {"trial": t, "text": text, "got": got})
    offset = random.choice(["+00:00", "-00:00", "+05:30", "-08:00"])
    bad = "t:" + text[:-1] + offset
    if outcome(bad) != {"err": tjson.ERR_TIMESTAMP}:
        fail("offset rejected", {"trial": t, "token": bad})

def main() -> int:
    for t in range(TRIALS):
        check_binary(rand_bytes(), t)
        check_integers(t)
        check_text(t)
        check_timestamp(t)

    print(f"OK: invariants passed for TRIALS={TRIALS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
