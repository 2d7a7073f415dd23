"""
Text-level encrypt/decrypt boundary.

These functions do not raise for rejected keys, passphrases or ciphertexts:
any AesError is returned as a CipherResult with ok=False so callers (the
CLI, a UI) can show the reason and ask for corrected input.
"""

from __future__ import annotations

from .errors import AesError
from .interfaces import CipherConfig, CipherResult
from .key_schedule import expand_key_detailed, round_keys_to_hex
from .keys import derive_key
from .stream import decrypt_stream, encrypt_stream
from .trace import TraceRecorder
from .utils import hex_to_bytes, text_to_bytes

ECB_NOTE = "Independent-block mode: identical plaintext blocks give identical ciphertext blocks"


def _failure(exc: AesError) -> CipherResult:
    return CipherResult(ok=False, error_kind=exc.kind, error_detail=str(exc))


def _tracer_for(config: CipherConfig, tracer: TraceRecorder | None) -> TraceRecorder | None:
    if tracer is None and config.track_rounds:
        return TraceRecorder()
    return tracer


def _instrument(
    result: CipherResult,
    key: bytes,
    tracer: TraceRecorder | None,
    trace_block: int,
    num_blocks: int,
) -> None:
    """Attach round keys, expansion steps and the block trace."""
    if tracer is None:
        return

    expansion = expand_key_detailed(key)
    result.round_keys_hex = round_keys_to_hex(expansion.round_keys)
    result.key_expansion = [step.to_dict() for step in expansion.steps]
    result.trace = tracer.to_round_details()

    if trace_block >= num_blocks:
        result.add_warning(
            f"trace_block {trace_block} is past the last block "
            f"({num_blocks - 1}); nothing was traced"
        )


def encrypt_bytes(
    data: bytes,
    key: bytes,
    config: CipherConfig | None = None,
    tracer: TraceRecorder | None = None,
) -> CipherResult:
    """Encrypt raw bytes with a 32-byte key.

    Args:
        data: Plaintext bytes
        key: 32-byte key
        config: Optional configuration
        tracer: Recorder for the traced block; one is created when
            config.track_rounds is set and none is given

    Returns:
        CipherResult with the ciphertext, or ok=False with the reason
    """
    config = config or CipherConfig()
    tracer = _tracer_for(config, tracer)
    try:
        ciphertext = encrypt_stream(
            data, key, workers=config.workers,
            tracer=tracer, trace_block=config.trace_block,
        )
    except AesError as e:
        return _failure(e)

    result = CipherResult(output=ciphertext)
    result.add_note(ECB_NOTE)
    _instrument(result, key, tracer, config.trace_block, result.blocks)
    return result


def decrypt_bytes(
    data: bytes,
    key: bytes,
    config: CipherConfig | None = None,
    tracer: TraceRecorder | None = None,
) -> CipherResult:
    """Decrypt raw ciphertext bytes with a 32-byte key.

    Returns:
        CipherResult with the unpadded plaintext, or ok=False with the
        reason (invalid_padding usually means a wrong key)
    """
    config = config or CipherConfig()
    tracer = _tracer_for(config, tracer)
    try:
        plaintext = decrypt_stream(
            data, key, workers=config.workers,
            tracer=tracer, trace_block=config.trace_block,
        )
    except AesError as e:
        return _failure(e)

    result = CipherResult(output=plaintext)
    _instrument(result, key, tracer, config.trace_block, len(data) // 16)
    return result


def encrypt_text(text: str, passphrase: str, config: CipherConfig | None = None) -> CipherResult:
    """Encrypt UTF-8 text under a passphrase-derived key."""
    try:
        key = derive_key(passphrase)
    except AesError as e:
        return _failure(e)
    return encrypt_bytes(text_to_bytes(text), key, config)


def decrypt_hex(cipher_hex: str, passphrase: str, config: CipherConfig | None = None) -> CipherResult:
    """Decrypt hex ciphertext under a passphrase-derived key.

    Use result.output_text for the decoded plaintext.
    """
    try:
        key = derive_key(passphrase)
        data = hex_to_bytes(cipher_hex)
    except AesError as e:
        return _failure(e)
    return decrypt_bytes(data, key, config)
