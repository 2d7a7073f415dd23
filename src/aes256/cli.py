"""
Command-line interface for the AES-256 cipher.

Usage:
    aes256 encrypt --text "hello" --passphrase secret
    aes256 decrypt <hex> --passphrase secret
    aes256 keys --key <hex64> --details
    aes256 validate --n 100 --seed 1
    aes256 round --verbose
"""

from __future__ import annotations

import random
import secrets
import sys
from typing import TextIO

import click

from . import DEFAULT_KEY_HEX, DEFAULT_PT_HEX, __version__
from .api import decrypt_bytes, encrypt_bytes
from .block import encrypt_block
from .errors import AesError
from .golden import FIPS_197_TEST_VECTORS, golden_encrypt_message, validate_against_golden
from .interfaces import CipherConfig, CipherResult
from .key_schedule import expand_key, expand_key_detailed, round_keys_to_hex
from .keys import derive_key, parse_key_hex
from .stream import decrypt_stream, encrypt_stream
from .trace import TraceRecorder, print_header, print_result
from .utils import format_state_grid, hex_to_bytes, state_to_hex, text_to_bytes
from .walkthrough import run_round_walkthrough


def _resolve_key(passphrase: str | None, key_hex: str | None) -> bytes:
    """Key from --key if given, otherwise SHA-256 of --passphrase."""
    if key_hex:
        try:
            return parse_key_hex(key_hex)
        except AesError as e:
            raise click.BadParameter(str(e), param_hint="--key")
    if passphrase:
        return derive_key(passphrase)
    raise click.UsageError("Provide --passphrase or --key")


def _open_trace(path: str | None) -> TextIO | None:
    if not path:
        return None
    try:
        return open(path, "w")
    except OSError as e:
        raise click.FileError(path, hint=str(e))


def _run(
    fn,
    data: bytes,
    key: bytes,
    workers: int,
    verbose: bool,
    trace: str | None,
    title: str,
) -> CipherResult:
    """Run an api call, tracing block 0 when --verbose or --trace is given."""
    config = CipherConfig(workers=workers)
    if not (verbose or trace):
        return fn(data, key, config)

    trace_file = _open_trace(trace)
    print_header(title)
    try:
        return fn(data, key, config, TraceRecorder(verbose=verbose, trace_file=trace_file))
    finally:
        if trace_file:
            trace_file.close()


def _key_options(f):
    f = click.option("--key", "key_hex", help="Raw key as 64 hex chars")(f)
    f = click.option("--passphrase", help="Passphrase; key = SHA-256(passphrase)")(f)
    return f


def _run_options(f):
    f = click.option(
        "--trace", metavar="FILE", default=None,
        help="Write a JSON Lines trace of block 0 to FILE",
    )(f)
    f = click.option(
        "--verbose", "-v", is_flag=True,
        help="Print the state after every step of block 0",
    )(f)
    f = click.option(
        "--workers", type=click.IntRange(min=1), default=1, show_default=True,
        help="Worker threads for block processing",
    )(f)
    return f


@click.group()
@click.version_option(version=__version__, prog_name="aes256")
def main() -> None:
    """AES-256 block cipher, built from first principles.

    Messages are padded and every 16-byte block is encrypted independently.
    """
    pass


@main.command()
@click.option("--text", default=None, help="UTF-8 plaintext")
@click.option("--hex-input", default=None, help="Plaintext bytes as hex")
@_key_options
@_run_options
def encrypt(
    text: str | None,
    hex_input: str | None,
    passphrase: str | None,
    key_hex: str | None,
    workers: int,
    verbose: bool,
    trace: str | None,
) -> None:
    """Encrypt text (or hex bytes) and print the ciphertext as hex."""
    if (text is None) == (hex_input is None):
        raise click.UsageError("Provide exactly one of --text or --hex-input")

    key = _resolve_key(passphrase, key_hex)
    try:
        data = text_to_bytes(text) if text is not None else hex_to_bytes(hex_input)
    except AesError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    result = _run(encrypt_bytes, data, key, workers, verbose, trace, "AES-256 Encryption")

    if not result.ok:
        click.echo(f"Error: {result.error_detail}", err=True)
        sys.exit(1)

    if verbose:
        print_result("Ciphertext", result.output_hex, result.blocks)
    else:
        click.echo(result.output_hex)


@main.command()
@click.argument("ciphertext")
@click.option("--as-hex", is_flag=True, help="Print the plaintext bytes as hex")
@_key_options
@_run_options
def decrypt(
    ciphertext: str,
    as_hex: bool,
    passphrase: str | None,
    key_hex: str | None,
    workers: int,
    verbose: bool,
    trace: str | None,
) -> None:
    """Decrypt hex CIPHERTEXT and print the plaintext."""
    key = _resolve_key(passphrase, key_hex)
    try:
        data = hex_to_bytes(ciphertext)
    except AesError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    result = _run(decrypt_bytes, data, key, workers, verbose, trace, "AES-256 Decryption")

    if not result.ok:
        click.echo(f"Error: {result.error_detail}", err=True)
        if result.error_kind == "invalid_padding":
            click.echo("Hint: wrong key or corrupted ciphertext", err=True)
        sys.exit(1)

    click.echo(result.output_hex if as_hex else result.output_text)


@main.command(name="keys")
@click.option("--details", is_flag=True, help="Show how every word was derived")
@_key_options
def keys_cmd(details: bool, passphrase: str | None, key_hex: str | None) -> None:
    """Print the 15 round keys of the key schedule."""
    if not passphrase and not key_hex:
        key_hex = DEFAULT_KEY_HEX
    key = _resolve_key(passphrase, key_hex)

    expansion = expand_key_detailed(key)
    for i, rk_hex in enumerate(round_keys_to_hex(expansion.round_keys)):
        click.echo(f"RoundKey[{i:2d}]: {rk_hex}")
        if details:
            click.echo(format_state_grid(expansion.round_keys[i]))

    if details:
        click.echo("")
        click.echo("Expansion steps:")
        for step in expansion.steps:
            d = step.to_dict()
            click.echo(
                f"  w{d['index']:<2d} {d['operation']:28s} "
                f"rcon={d['rcon'] or '--'}  w[i-8]={d['xored_with']}  -> {d['result']}"
            )


@main.command()
@click.option(
    "--n", "num_tests", type=int, default=100,
    help="Number of random test vectors (default: 100)",
)
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def validate(num_tests: int, seed: int | None, verbose: bool) -> None:
    """Validate against published vectors and PyCryptodome."""
    click.echo("Running known-answer tests...")
    kat_passed = 0

    for i, vec in enumerate(FIPS_197_TEST_VECTORS):
        ct = encrypt_block(vec["plaintext"], expand_key(vec["key"]))
        if ct == vec["ciphertext"]:
            kat_passed += 1
            if verbose:
                click.echo(f"  KAT {i+1}: PASS")
        else:
            click.echo(
                f"  KAT {i+1}: FAIL - expected {vec['ciphertext'].hex()}, got {ct.hex()}"
            )

    click.echo(f"Known-answer tests: {kat_passed}/{len(FIPS_197_TEST_VECTORS)} passed")

    click.echo(f"\nRunning {num_tests} random tests...")
    if seed is not None:
        rng = random.Random(seed)
        random_bytes = lambda n: bytes(rng.randint(0, 255) for _ in range(n))
    else:
        random_bytes = secrets.token_bytes

    random_passed = 0
    for i in range(num_tests):
        key = random_bytes(32)
        pt = random_bytes(16)
        msg = random_bytes(i % 48)

        ct = encrypt_block(pt, expand_key(key))
        block_ok, detail = validate_against_golden(key, pt, ct)
        stream_ct = encrypt_stream(msg, key)
        stream_ok = (
            stream_ct == golden_encrypt_message(key, msg)
            and decrypt_stream(stream_ct, key) == msg
        )

        if block_ok and stream_ok:
            random_passed += 1
        elif verbose:
            click.echo(f"  Random test {i+1}: FAIL - {detail or 'stream mismatch'}")

    click.echo(f"Random tests: {random_passed}/{num_tests} passed")

    total_passed = kat_passed + random_passed
    total_tests = len(FIPS_197_TEST_VECTORS) + num_tests

    click.echo("")
    if total_passed == total_tests:
        click.echo(f"VALIDATION PASSED: All {total_tests} tests passed")
        sys.exit(0)
    else:
        click.echo(f"VALIDATION FAILED: {total_tests - total_passed} failures")
        sys.exit(1)


@main.command(name="round")
@click.option("--key", "key_hex", default=None,
              help="AES-256 key as 64 hex chars (default: SP 800-38A key)")
@click.option("--pt", "pt_hex", default=None,
              help="Plaintext block as 32 hex chars (default: SP 800-38A block 1)")
@click.option("--verbose", "-v", is_flag=True, help="Print the full walkthrough")
@click.option("--trace", metavar="FILE", default=None, help="Output JSON Lines trace to file")
def round_cmd(
    key_hex: str | None,
    pt_hex: str | None,
    verbose: bool,
    trace: str | None,
) -> None:
    """Didactic walkthrough of round 0 and round 1."""
    key = _resolve_key(None, key_hex or DEFAULT_KEY_HEX)
    try:
        plaintext = hex_to_bytes(pt_hex or DEFAULT_PT_HEX)
    except AesError as e:
        raise click.BadParameter(str(e), param_hint="--pt")
    if len(plaintext) != 16:
        raise click.BadParameter(
            f"Plaintext must be 32 hex chars (16 bytes), got {len(plaintext) * 2} chars",
            param_hint="--pt",
        )

    trace_file = _open_trace(trace)
    try:
        result = run_round_walkthrough(key, plaintext, verbose=verbose, trace_file=trace_file)
    finally:
        if trace_file:
            trace_file.close()

    click.echo(f"\nState entering Round 1: {state_to_hex(result['state_in_round1'])}")
    click.echo(f"State after   Round 1: {state_to_hex(result['state_out_round1'])}")


if __name__ == "__main__":
    main()
