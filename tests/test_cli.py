"""Tests for the aes256 command-line interface."""

import json

import pytest
from click.testing import CliRunner

from aes256 import DEFAULT_CT_HEX, DEFAULT_KEY_HEX, DEFAULT_PT_HEX
from aes256.block import encrypt_block
from aes256.cli import main
from aes256.key_schedule import expand_key
from aes256.utils import hex_to_bytes


C3_KEY = "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
C3_PT = "00112233445566778899aabbccddeeff"


@pytest.fixture
def runner():
    return CliRunner()


class TestEncryptDecrypt:
    """encrypt / decrypt commands."""

    def test_text_round_trip(self, runner):
        enc = runner.invoke(main, ["encrypt", "--text", "hello cli", "--passphrase", "pw"])
        assert enc.exit_code == 0, enc.output
        ct_hex = enc.output.strip()
        assert len(ct_hex) == 32

        dec = runner.invoke(main, ["decrypt", ct_hex, "--passphrase", "pw"])
        assert dec.exit_code == 0, dec.output
        assert dec.output.strip() == "hello cli"

    def test_hex_input_with_raw_key(self, runner):
        result = runner.invoke(
            main, ["encrypt", "--hex-input", DEFAULT_PT_HEX, "--key", DEFAULT_KEY_HEX]
        )
        assert result.exit_code == 0, result.output
        assert result.output.strip().startswith(DEFAULT_CT_HEX)
        assert len(result.output.strip()) == 64

    def test_decrypt_as_hex(self, runner):
        enc = runner.invoke(
            main, ["encrypt", "--hex-input", "deadbeef", "--key", DEFAULT_KEY_HEX]
        )
        dec = runner.invoke(
            main, ["decrypt", enc.output.strip(), "--key", DEFAULT_KEY_HEX, "--as-hex"]
        )
        assert dec.exit_code == 0
        assert dec.output.strip() == "deadbeef"

    def test_workers_option(self, runner):
        args = ["encrypt", "--text", "z" * 100, "--passphrase", "pw"]
        seq = runner.invoke(main, args)
        par = runner.invoke(main, args + ["--workers", "4"])
        assert par.exit_code == 0
        assert par.output == seq.output

    def test_verbose_prints_trace(self, runner):
        result = runner.invoke(
            main, ["encrypt", "--text", "hi", "--passphrase", "pw", "--verbose"]
        )
        assert result.exit_code == 0
        assert "AES-256 Encryption" in result.output
        assert "Initial State" in result.output
        assert "RESULT" in result.output

    def test_trace_file(self, runner, tmp_path):
        path = tmp_path / "trace.jsonl"
        result = runner.invoke(
            main,
            ["encrypt", "--hex-input", DEFAULT_PT_HEX, "--key", DEFAULT_KEY_HEX,
             "--trace", str(path)],
        )
        assert result.exit_code == 0
        records = [json.loads(line) for line in path.read_text().splitlines()]
        assert records[0]["state"] == DEFAULT_PT_HEX
        assert records[-1]["state"] == DEFAULT_CT_HEX


class TestCliErrors:
    """Rejected input exits non-zero with a message."""

    def test_missing_key(self, runner):
        result = runner.invoke(main, ["encrypt", "--text", "x"])
        assert result.exit_code == 2
        assert "--passphrase or --key" in result.output

    def test_text_and_hex_input_together(self, runner):
        result = runner.invoke(
            main, ["encrypt", "--text", "x", "--hex-input", "00", "--passphrase", "pw"]
        )
        assert result.exit_code == 2

    def test_short_key(self, runner):
        result = runner.invoke(main, ["encrypt", "--text", "x", "--key", "00" * 16])
        assert result.exit_code == 2
        assert "64 hex chars" in result.output

    def test_bad_ciphertext_length(self, runner):
        result = runner.invoke(main, ["decrypt", "abcd", "--passphrase", "pw"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_bad_padding_hint(self, runner):
        ct = encrypt_block(bytes(16), expand_key(hex_to_bytes(DEFAULT_KEY_HEX)))
        result = runner.invoke(main, ["decrypt", ct.hex(), "--key", DEFAULT_KEY_HEX])
        assert result.exit_code == 1
        assert "Invalid padding" in result.output
        assert "Hint: wrong key" in result.output

    def test_bad_padding_hint_when_traced(self, runner):
        ct = encrypt_block(bytes(16), expand_key(hex_to_bytes(DEFAULT_KEY_HEX)))
        result = runner.invoke(
            main, ["decrypt", ct.hex(), "--key", DEFAULT_KEY_HEX, "--verbose"]
        )
        assert result.exit_code == 1
        assert "AES-256 Decryption" in result.output
        assert "Start of Final Round" in result.output
        assert "Hint: wrong key" in result.output

    def test_zero_workers_rejected(self, runner):
        result = runner.invoke(
            main, ["encrypt", "--text", "x", "--passphrase", "pw", "--workers", "0"]
        )
        assert result.exit_code == 2


class TestKeysCommand:
    """keys command."""

    def test_default_key(self, runner):
        result = runner.invoke(main, ["keys"])
        assert result.exit_code == 0
        lines = [l for l in result.output.splitlines() if l.startswith("RoundKey[")]
        assert len(lines) == 15
        assert lines[0] == f"RoundKey[ 0]: {DEFAULT_KEY_HEX[:32]}"
        assert lines[1] == f"RoundKey[ 1]: {DEFAULT_KEY_HEX[32:]}"
        assert lines[2] == "RoundKey[ 2]: 9ba354118e6925afa51a8b5f2067fcde"

    def test_details(self, runner):
        result = runner.invoke(main, ["keys", "--key", C3_KEY, "--details"])
        assert result.exit_code == 0
        assert "Expansion steps:" in result.output
        assert "RotWord -> SubWord -> Rcon" in result.output
        assert "SubWord only" in result.output
        assert "RoundKey[14]: 24fc79ccbf0979e9371ac23c6d68de36" in result.output


class TestValidateCommand:
    """validate command."""

    def test_validate_passes(self, runner):
        result = runner.invoke(main, ["validate", "--n", "5", "--seed", "1"])
        assert result.exit_code == 0, result.output
        assert "Known-answer tests: 5/5 passed" in result.output
        assert "VALIDATION PASSED: All 10 tests passed" in result.output


class TestRoundCommand:
    """round command."""

    def test_c3_round_1(self, runner):
        result = runner.invoke(main, ["round", "--key", C3_KEY, "--pt", C3_PT])
        assert result.exit_code == 0, result.output
        assert "State entering Round 1: 00102030405060708090a0b0c0d0e0f0" in result.output
        assert "State after   Round 1: 4f63760643e0aa85efa7213201a4e705" in result.output

    def test_default_inputs_verbose(self, runner):
        result = runner.invoke(main, ["round", "--verbose"])
        assert result.exit_code == 0
        assert "1. AES State Layout" in result.output
        assert "6. Summary" in result.output

    def test_bad_plaintext_length(self, runner):
        result = runner.invoke(main, ["round", "--pt", "0011"])
        assert result.exit_code == 2
