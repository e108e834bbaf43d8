"""Command-line interface for tinyland-basex.

Provides subcommands:
  encode  - Encode bytes from stdin, --input or --input-file
  decode  - Decode text from stdin, --input or --input-file
  length  - Print the buffer size needed to encode or decode N units
  schemes - List the available scheme names

The scheme comes from --scheme, then the TINYLAND_BASEX_SCHEME environment
variable, then defaults to base64_std.

Exit codes:
    0 - Success
    1 - Malformed input (encode/decode failed)
    2 - Input file not found or unreadable
    3 - Invalid arguments
"""

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path

from tinyland_basex.config import PRESETS, Base85Config
from tinyland_basex.dispatch import decode, decode_len, encode, encode_len, resolve
from tinyland_basex.errors import CodecError

SCHEME_ENV = "TINYLAND_BASEX_SCHEME"
DEFAULT_SCHEME = "base64_std"

logger = logging.getLogger(__name__)


def _resolve_scheme(args):
    """Resolve the scheme config from CLI arguments and the environment.

    Exits with code 3 when the name is unknown.
    """
    name = getattr(args, "scheme", None) or os.environ.get(SCHEME_ENV) or DEFAULT_SCHEME
    try:
        _, config = resolve(name)
    except CodecError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(3)
    logger.debug("using scheme %s -> %s", name, config)
    return config


def _apply_decode_options(config, args):
    """Layer --ignore-whitespace and --truncate-on-null onto a preset."""
    if getattr(args, "ignore_whitespace", False):
        if not isinstance(config, Base85Config):
            print(
                "error: --ignore-whitespace is only supported by base85 schemes",
                file=sys.stderr,
            )
            sys.exit(3)
        config = dataclasses.replace(config, ignore_whitespace=True)
    if getattr(args, "truncate_on_null", False):
        config = dataclasses.replace(config, truncate_on_null=True)
    return config


def _read_input_file(path: str) -> bytes:
    """Read an input file, exiting with code 2 on failure."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        print(f"error: input file not found: {resolved}", file=sys.stderr)
        sys.exit(2)
    try:
        return resolved.read_bytes()
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def cmd_encode(args) -> int:
    """Handle the 'encode' subcommand -- reads raw bytes, writes encoded text."""
    config = _resolve_scheme(args)
    if args.input is not None:
        raw = args.input.encode("utf-8")
    elif args.input_file:
        raw = _read_input_file(args.input_file)
    else:
        raw = sys.stdin.buffer.read()

    try:
        encoded = encode(raw, config)
    except CodecError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(encoded)
    return 0


def cmd_decode(args) -> int:
    """Handle the 'decode' subcommand -- reads encoded text, writes raw bytes."""
    config = _apply_decode_options(_resolve_scheme(args), args)
    if args.input is not None:
        encoded = args.input
    elif args.input_file:
        # latin-1 keeps every byte, so stray bytes surface as invalid characters
        encoded = _read_input_file(args.input_file).decode("latin-1")
    else:
        encoded = sys.stdin.read()

    encoded = encoded.strip()
    if not encoded:
        return 0
    try:
        decoded = decode(encoded, config)
    except CodecError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    sys.stdout.buffer.write(decoded)
    return 0


def cmd_length(args) -> int:
    """Handle the 'length' subcommand."""
    config = _resolve_scheme(args)
    calc = encode_len if args.direction == "encode" else decode_len
    try:
        size = calc(args.length, config)
    except CodecError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    print(size)
    return 0


def cmd_schemes(args) -> int:
    """Handle the 'schemes' subcommand."""
    for name in PRESETS:
        print(name)
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _add_scheme_args(parser: argparse.ArgumentParser) -> None:
    """Add the common --scheme argument to a subparser."""
    parser.add_argument(
        "--scheme",
        default=None,
        help=f"Scheme name (default: ${SCHEME_ENV} or {DEFAULT_SCHEME})",
    )


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    """Add mutually exclusive input sources to a subparser."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--input", default=None, help="Input given directly on the command line")
    group.add_argument("--input-file", default=None, help="Read input from this file")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="tinyland-basex",
        description="Encode and decode Base16/32/58/64/85 from the shell",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__import__('tinyland_basex').__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # -- encode --
    p_enc = sub.add_parser("encode", help="Encode raw bytes to text")
    _add_scheme_args(p_enc)
    _add_input_args(p_enc)
    p_enc.set_defaults(func=cmd_encode)

    # -- decode --
    p_dec = sub.add_parser("decode", help="Decode text to raw bytes")
    _add_scheme_args(p_dec)
    _add_input_args(p_dec)
    p_dec.add_argument(
        "--ignore-whitespace",
        action="store_true",
        help="Skip whitespace inside the input (base85 schemes only)",
    )
    p_dec.add_argument(
        "--truncate-on-null",
        action="store_true",
        help="Treat the first NUL character as the end of the input",
    )
    p_dec.set_defaults(func=cmd_decode)

    # -- length --
    p_len = sub.add_parser(
        "length", help="Print the buffer size needed to encode or decode"
    )
    p_len.add_argument("direction", choices=["encode", "decode"])
    p_len.add_argument("length", type=int, help="Input length in bytes or characters")
    _add_scheme_args(p_len)
    p_len.set_defaults(func=cmd_length)

    # -- schemes --
    p_schemes = sub.add_parser("schemes", help="List available scheme names")
    p_schemes.set_defaults(func=cmd_schemes)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )
    return args.func(args)
