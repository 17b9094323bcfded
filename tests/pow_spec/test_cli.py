"""Tests for the command-line entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from pow_spec.__main__ import main, parse_hex

GENESIS_HASH = "000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f"
ZERO_DISPLAY_HASH = "00" * 32

SHORT_INTERVAL_PARAMS = """\
POW_LIMIT: 0x00000000ffffffffffffffffffffffffffffffffffffffffffffffffffffffff
POW_TARGET_SPACING: 600
POW_TARGET_TIMESPAN: 2400
FORK_HEIGHT: 1000000
FORK_BEGIN_POW_LIMIT: 0x0000000000ffffffffffffffffffffffffffffffffffffffffffffffffffffff
"""

SLOW_HEADERS = """\
HEADERS:
- {TIME: 1231006505, BITS: 0x1b0404cb}
- {TIME: 1231007705, BITS: 0x1b0404cb}
- {TIME: 1231008905, BITS: 0x1b0404cb}
- {TIME: 1231010105, BITS: 0x1b0404cb}
"""


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo the handlers each `main` call installs."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def params_file(tmp_path: Path) -> Path:
    """Mainnet-like parameters retargeting every four blocks."""
    path = tmp_path / "params.yaml"
    path.write_text(SHORT_INTERVAL_PARAMS)
    return path


@pytest.fixture
def headers_file(tmp_path: Path) -> Path:
    """Four headers 20 minutes apart."""
    path = tmp_path / "headers.yaml"
    path.write_text(SLOW_HEADERS)
    return path


class TestParseHex:
    """Hex argument parsing."""

    def test_with_and_without_prefix(self) -> None:
        assert parse_hex("0x1d00ffff") == parse_hex("1d00ffff") == 0x1D00FFFF

    def test_invalid(self) -> None:
        with pytest.raises(SystemExit):
            main(["decode", "zz"])


class TestDecodeEncode:
    """The codec commands."""

    def test_decode(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["decode", "1d00ffff"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "target:   0x00000000ffff" + "0" * 52,
            "negative: false",
            "overflow: false",
        ]

    def test_decode_reports_flags(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Malformed bits are reported, not rejected."""
        assert main(["decode", "0x04923456"]) == 0
        assert "negative: true" in capsys.readouterr().out

        assert main(["decode", "0xff123456"]) == 0
        assert "overflow: true" in capsys.readouterr().out

    def test_encode(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["encode", "0x00000000ffff" + "0" * 52]) == 0
        assert capsys.readouterr().out.strip() == "0x1d00ffff"

    def test_encode_too_large(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A target wider than 256 bits is an error, not a crash."""
        assert main(["--no-color", "encode", "1" + "0" * 64]) == 2
        assert "out of range" in capsys.readouterr().err.lower()


class TestCheck:
    """The proof-of-work check command."""

    def test_genesis_hash_is_valid(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["check", GENESIS_HASH, "1d00ffff"]) == 0
        assert capsys.readouterr().out.strip() == "valid"

    def test_hash_above_target_is_invalid(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["check", GENESIS_HASH, "1a00ffff"]) == 1
        assert capsys.readouterr().out.strip() == "invalid"

    def test_regtest_limit(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Regtest bits only pass on a network that allows them."""
        assert main(["check", ZERO_DISPLAY_HASH, "207fffff"]) == 1
        assert main(["check", ZERO_DISPLAY_HASH, "207fffff", "--network", "regtest"]) == 0
        assert capsys.readouterr().out.split() == ["invalid", "valid"]

    def test_unknown_network(self) -> None:
        args = ["--no-color", "check", ZERO_DISPLAY_HASH, "1d00ffff"]
        assert main([*args, "--network", "nope"]) == 2

    def test_short_hash(self) -> None:
        """Hashes must carry all 32 bytes."""
        assert main(["--no-color", "check", "19d6689c", "1d00ffff"]) == 2

    def test_network_and_params_exclusive(self, params_file: Path) -> None:
        args = ["check", ZERO_DISPLAY_HASH, "1d00ffff", "--network", "main"]
        with pytest.raises(SystemExit):
            main([*args, "--params", str(params_file)])


class TestNextBits:
    """The next-bits command."""

    def test_retarget(
        self, params_file: Path, headers_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Three 20 minute gaps against a 40 minute timespan ease the target 1.5x."""
        args = ["--no-color", "next-bits", str(headers_file), "--time", "1231010705"]
        assert main([*args, "--params", str(params_file)]) == 0

        captured = capsys.readouterr()
        assert captured.out.strip() == "0x1b060730"
        assert "RETARGET at height 4" in captured.err

    def test_metrics(
        self, params_file: Path, headers_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = ["next-bits", str(headers_file), "--time", "0", "--metrics"]
        assert main([*args, "--params", str(params_file)]) == 0

        out = capsys.readouterr().out
        assert out.startswith("0x1b060730\n")
        assert "pow_retargets_total" in out

    def test_between_retargets(
        self, headers_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """On mainnet four headers are far from a boundary."""
        assert main(["next-bits", str(headers_file), "--time", "0"]) == 0
        assert capsys.readouterr().out.strip() == "0x1b0404cb"

    def test_empty_chain_is_genesis(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("HEADERS: []\n")
        assert main(["next-bits", str(path), "--time", "0", "--network", "regtest"]) == 0
        assert capsys.readouterr().out.strip() == "0x207fffff"
