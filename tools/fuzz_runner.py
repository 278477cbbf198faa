#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Differential fuzzing: tjson strict decoders vs the lenient stdlib codecs.
#
# Generates random payloads drawn from a deliberately dirty alphabet (both
# cases, "=", "+", "/", whitespace, digits, a few non-ASCII characters) and
# checks, per decoder:
#   A) if tjson accepts, the stdlib decodes the same payload to the same value
#   B) if tjson accepts, re-encoding the value gives back the payload exactly
#      (one accepted spelling per value)
#   C) tjson never raises anything but ParseError
#
# Any mismatch prints a minimal repro payload and exits non-zero.

import os, sys, base64, binascii, random
from typing import Any, Callable, Dict, Optional

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))

import tjson

SEED = int(os.environ.get("TJSON_SEED", "4242"))
ROUNDS = int(os.environ.get("TJSON_FUZZ_ROUNDS", "5000"))

random.seed(SEED)

DIRTY = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "=+/-_ \t\n.:"
    "é١１"
)

def rand_dirty(nmax: int, alphabet: str = DIRTY) -> str:
    return "".join(random.choice(alphabet) for _ in range(random.randint(0, nmax)))

def strict(fn: Callable[[str], Any], payload: str) -> Dict[str, Any]:
    try:
        return {"value": fn(payload)}
    except tjson.ParseError as e:
        return {"err": e.code}

def mismatch(label: str, payload: str, got: Any, ref: Any) -> None:
    print("MISMATCH:", label)
    print("PAYLOAD:", repr(payload))
    print("TJSON:", got)
    print("STDLIB:", ref)
    raise SystemExit(1)

# --- lenient references ---

def ref_b16(p: str) -> Optional[bytes]:
    try:
        return bytes.fromhex(p)
    except ValueError:
        return None

def ref_b32(p: str) -> Optional[bytes]:
    try:
        return base64.b32decode(p.rstrip("=") + "=" * (-len(p.rstrip("=")) % 8),
                                casefold=True)
    except (binascii.Error, ValueError):
        return None

def ref_b64(p: str) -> Optional[bytes]:
    try:
        return base64.urlsafe_b64decode(p + "=" * (-len(p) % 4))
    except (binascii.Error, ValueError):
        return None

def ref_int(p: str) -> Optional[int]:
    try:
        return int(p)
    except ValueError:
        return None

# --- canonical re-encoders ---

CASES = [
    ("base16", tjson.parse_base16, ref_b16, lambda v: v.hex(), "0123456789abcdefABCDEF =", 24),
    ("base32", tjson.parse_base32, ref_b32,
     lambda v: base64.b32encode(v).decode("ascii").rstrip("=").lower(),
     "abcdefghijklmnopqrstuvwxyz234567ABC01= ", 24),
    ("base64url", tjson.parse_base64url, ref_b64,
     lambda v: base64.urlsafe_b64encode(v).decode("ascii").rstrip("="),
     "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_+/= ", 24),
    ("signed", tjson.parse_signed_int, ref_int, str, "0123456789-+_ .", 22),
    ("unsigned", tjson.parse_unsigned_int, ref_int, str, "0123456789-+_ .", 22),
]

def main() -> int:
    for i in range(ROUNDS):
        name, fn, ref, encode, alphabet, nmax = random.choice(CASES)
        payload = rand_dirty(nmax, alphabet if random.random() < 0.8 else DIRTY)

        try:
            got = strict(fn, payload)
        except Exception as e:  # C) anything but ParseError is a bug
            mismatch(name + " raised " + type(e).__name__, payload, repr(e), None)

        if "value" not in got:
            continue

        # A) agreement with the lenient stdlib decoder
        want = ref(payload)
        if want != got["value"]:
            mismatch(name + " stdlib agreement", payload, got, want)

        # B) exactly one spelling per value
        if encode(got["value"]) != payload:
            mismatch(name + " canonical re-encode", payload, got, encode(got["value"]))

    print(f"OK: fuzz rounds={ROUNDS} seed={SEED} (no mismatches)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
