"""
Proof-of-work CLI entry point.

Inspect compact targets, check block hashes, and compute the target required
of the next block on a chain of headers.

Usage::

    python -m pow_spec decode 1d00ffff
    python -m pow_spec encode 0x00000000ffff0000000000000000000000000000000000000000000000000000
    python -m pow_spec check 000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f 1d00ffff
    python -m pow_spec next-bits headers.yaml --time 1231469665 --network test

Commands:
    decode     Expand compact bits into a 256-bit target
    encode     Compress a 256-bit target into compact bits
    check      Check a block hash (display byte order) against compact bits
    next-bits  Compute the bits required of a block on top of a header file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pow_spec.config import get_network_params
from pow_spec.subspecs.chain import BlockHeader, ConsensusParameters, HeaderChain
from pow_spec.subspecs.compact import CompactTarget
from pow_spec.subspecs.metrics import generate_metrics
from pow_spec.subspecs.pow import (
    FanoutRetargetSink,
    LoggingRetargetSink,
    MetricsRetargetSink,
    check_proof_of_work,
    get_next_work_required,
)
from pow_spec.types import Bytes32, Uint64, Uint256

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging to stderr, keeping stdout for command output."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if no_color:
        formatter: logging.Formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def parse_hex(value: str) -> int:
    """Parse a hex string with or without a 0x prefix."""
    try:
        return int(value.removeprefix("0x"), 16)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid hex value: {value!r}") from e


def load_params(network: str | None, params_path: Path | None) -> ConsensusParameters:
    """Pick the parameter file if given, otherwise a named (or default) network preset."""
    if params_path is not None:
        return ConsensusParameters.from_yaml_file(params_path)
    return get_network_params(network)


def cmd_decode(args: argparse.Namespace) -> int:
    """Print the target, sign and overflow flags of compact bits."""
    decoded = CompactTarget(args.bits).decode()
    print(f"target:   0x{int(decoded.target):064x}")
    print(f"negative: {str(decoded.negative).lower()}")
    print(f"overflow: {str(decoded.overflow).lower()}")
    return 0


def cmd_encode(args: argparse.Namespace) -> int:
    """Print the compact encoding of a target."""
    print(f"0x{int(CompactTarget.from_target(Uint256(args.target))):08x}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Print whether a hash meets the bits; exit status 1 if not."""
    params = load_params(args.network, args.params)
    block_hash = Bytes32.from_display_hex(args.hash)
    valid = check_proof_of_work(block_hash, CompactTarget(args.bits), params)
    print("valid" if valid else "invalid")
    return 0 if valid else 1


def cmd_next_bits(args: argparse.Namespace) -> int:
    """Print the bits required of a block at `--time` on top of the header file."""
    params = load_params(args.network, args.params)
    chain = HeaderChain.from_yaml_file(args.headers)
    candidate = BlockHeader(block_time=Uint64(args.time), bits=CompactTarget(0))

    sink = FanoutRetargetSink([LoggingRetargetSink(), MetricsRetargetSink()])
    bits = get_next_work_required(chain.tip, candidate, params, sink)
    logger.debug("Computed bits for height %d", len(chain))

    print(f"0x{int(bits):08x}")
    if args.metrics:
        sys.stdout.write(generate_metrics().decode("utf-8"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="pow_spec",
        description="Proof-of-work target tools",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-color", action="store_true", help="Disable colored logging output")
    commands = parser.add_subparsers(dest="command", required=True)

    decode = commands.add_parser("decode", help="Expand compact bits into a target")
    decode.add_argument("bits", type=parse_hex, help="Compact bits in hex")
    decode.set_defaults(handler=cmd_decode)

    encode = commands.add_parser("encode", help="Compress a target into compact bits")
    encode.add_argument("target", type=parse_hex, help="256-bit target in hex")
    encode.set_defaults(handler=cmd_encode)

    def add_params_options(sub: argparse.ArgumentParser) -> None:
        group = sub.add_mutually_exclusive_group()
        group.add_argument("--network", default=None, help="Network preset (main, test, regtest)")
        group.add_argument("--params", type=Path, default=None, help="Parameter YAML file")

    check = commands.add_parser("check", help="Check a block hash against compact bits")
    check.add_argument("hash", help="Block hash in display byte order (64 hex digits)")
    check.add_argument("bits", type=parse_hex, help="Compact bits in hex")
    add_params_options(check)
    check.set_defaults(handler=cmd_check)

    next_bits = commands.add_parser("next-bits", help="Compute the bits of the next block")
    next_bits.add_argument("headers", type=Path, help="Header YAML file")
    next_bits.add_argument("--time", type=int, required=True, help="Candidate block timestamp")
    next_bits.add_argument("--metrics", action="store_true", help="Print Prometheus metrics")
    add_params_options(next_bits)
    next_bits.set_defaults(handler=cmd_next_bits)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        return args.handler(args)
    except (OverflowError, ValueError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
