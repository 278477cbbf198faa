"""tjson command-line interface.

Usage:
    python3 -m tjson parse 's:hello' 'u:42' 'b16:cafe'
    printf 'i:-7\\nt:2016-10-02T07:31:51Z\\n' | python3 -m tjson parse
    python3 -m tjson parse --input tokens.txt
    python3 -m tjson decode --tag b32 jbswy3dpfqqho33snrscc
    python3 -m tjson version

Each decoded token prints as one JSON line: {"tag": ..., "value": ...}.
Bytes render as lowercase hex, timestamps in canonical form.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Iterable, List, Optional, Union

from . import (
    DECODERS,
    SCALAR_TAGS,
    TAG_TIMESTAMP,
    ParseError,
    Scalar,
    Timestamp,
    __version__,
    decode,
    parse_timestamp,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tjson",
        description="tjson — strict decoder for Tagged JSON scalars",
    )
    sub = parser.add_subparsers(dest="command")

    # ── parse ──
    parse_p = sub.add_parser("parse", help="Decode tagged tokens")
    parse_p.add_argument("tokens", nargs="*", metavar="TOKEN",
                         help="Tagged tokens; read one per line if omitted")
    parse_p.add_argument("--input", "-i", metavar="FILE",
                         help="Read tokens from FILE instead of stdin")
    parse_p.add_argument("--max-fraction-digits", type=int, default=None,
                         metavar="N",
                         help="Reject timestamps with more than N fractional digits")

    # ── decode ──
    decode_p = sub.add_parser("decode", help="Decode one untagged payload")
    decode_p.add_argument("--tag", "-t", required=True, choices=SCALAR_TAGS,
                          help="Decoder to run on the payload")
    decode_p.add_argument("payload", metavar="PAYLOAD")
    decode_p.add_argument("--max-fraction-digits", type=int, default=None,
                          metavar="N",
                          help="Reject timestamps with more than N fractional digits")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_tokens(filepath: Optional[str]) -> List[bytes]:
    """Read newline-separated tokens from a file or stdin, as raw bytes.

    Tokens stay undecoded so malformed UTF-8 reaches the string decoder
    and is reported as ERR_UTF8 rather than failing the read.
    """
    if filepath:
        with open(filepath, "rb") as f:
            data = f.read()
    else:
        if sys.stdin.isatty():
            print("tjson: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
        data = sys.stdin.buffer.read()
    # Only the line terminator (LF or CRLF) is stripped; any other
    # whitespace is part of the token and must be rejected by its decoder.
    lines = [ln[:-1] if ln.endswith(b"\r") else ln for ln in data.split(b"\n")]
    return [ln for ln in lines if ln != b""]


def _render(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, Timestamp):
        return value.isoformat()
    return value


def _emit(scalar: Scalar) -> None:
    print(json.dumps({"tag": scalar.tag, "value": _render(scalar.value)},
                     ensure_ascii=False))


def _cmd_parse(args: argparse.Namespace) -> None:
    tokens: Iterable[Union[str, bytes]] = args.tokens or _read_tokens(args.input)
    for token in tokens:
        _emit(decode(token, max_fraction_digits=args.max_fraction_digits))


def _cmd_decode(args: argparse.Namespace) -> None:
    if args.tag == TAG_TIMESTAMP:
        value = parse_timestamp(args.payload, args.max_fraction_digits)
    else:
        value = DECODERS[args.tag](args.payload)
    _emit(Scalar(args.tag, value))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "parse" and args.tokens and args.input:
        parser.error("parse: give TOKEN arguments or --input, not both")

    if args.command == "version":
        print(f"tjson {__version__}")
        return

    try:
        if args.command == "parse":
            _cmd_parse(args)
        elif args.command == "decode":
            _cmd_decode(args)
    except ParseError as e:
        print(f"tjson: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
