"""
Multi-block encryption and decryption of arbitrary-length byte strings.

Messages are padded to a multiple of 16 bytes (n bytes of value n, with
n in 1..16) and every block is processed independently with the same round
keys. There is no chaining and no IV, so identical plaintext blocks give
identical ciphertext blocks.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from .block import DECRYPT_SCHEDULE, ENCRYPT_SCHEDULE, decrypt_block, encrypt_block, run_round
from .constants import BLOCK_SIZE
from .errors import InvalidBlockLength, InvalidPadding
from .key_schedule import expand_key
from .trace import TraceRecorder
from .utils import bytes_to_state, state_to_bytes


def pad(data: bytes) -> bytes:
    """
    Append n bytes of value n so the length becomes a multiple of 16.

    Block-aligned input still gets a full block of 0x10 bytes.
    """
    n = BLOCK_SIZE - (len(data) % BLOCK_SIZE)
    return bytes(data) + bytes([n] * n)


def unpad(data: bytes) -> bytes:
    """
    Strip padding added by pad().

    Raises:
        InvalidPadding: If data is empty, the last byte is 0 or greater
            than 16, or any of the last n bytes differs from n
    """
    if not data:
        raise InvalidPadding("Invalid padding: no data")

    n = data[-1]
    if n == 0 or n > BLOCK_SIZE or n > len(data):
        raise InvalidPadding(f"Invalid padding: length byte {n}")

    if any(b != n for b in data[-n:]):
        raise InvalidPadding(f"Invalid padding: trailing bytes do not all equal {n}")

    return bytes(data[:-n])


def split_blocks(data: bytes) -> list[bytes]:
    """
    Split into 16-byte blocks.

    Raises:
        InvalidBlockLength: If data is empty or not a multiple of 16 bytes
    """
    if not data or len(data) % BLOCK_SIZE:
        raise InvalidBlockLength(
            f"Data length must be a positive multiple of {BLOCK_SIZE}, got {len(data)}"
        )
    return [bytes(data[i:i + BLOCK_SIZE]) for i in range(0, len(data), BLOCK_SIZE)]


def _process_blocks(
    blocks: list[bytes],
    fn: Callable[[bytes], bytes],
    workers: int,
) -> bytes:
    if workers > 1 and len(blocks) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return b"".join(executor.map(fn, blocks))
    return b"".join(fn(block) for block in blocks)


def encrypt_stream(
    data: bytes,
    key: bytes,
    workers: int = 1,
    tracer: TraceRecorder | None = None,
    trace_block: int = 0,
) -> bytes:
    """
    Pad and encrypt a byte string.

    Args:
        data: Plaintext of any length (including empty)
        key: 32-byte AES-256 key
        workers: Number of threads; blocks are independent so any value
            gives the same output
        tracer: Optional recorder for the block at index trace_block
        trace_block: Index of the block to trace

    Returns:
        Ciphertext, len(pad(data)) bytes

    Raises:
        InvalidKeyLength: If key is not 32 bytes
    """
    round_keys = expand_key(key)
    blocks = split_blocks(pad(data))

    if tracer is not None and 0 <= trace_block < len(blocks):
        encrypt_block(blocks[trace_block], round_keys, tracer)

    return _process_blocks(blocks, lambda b: encrypt_block(b, round_keys), workers)


def decrypt_stream(
    data: bytes,
    key: bytes,
    workers: int = 1,
    tracer: TraceRecorder | None = None,
    trace_block: int = 0,
) -> bytes:
    """
    Decrypt a ciphertext and remove its padding.

    Raises:
        InvalidKeyLength: If key is not 32 bytes
        InvalidBlockLength: If data is empty or not a multiple of 16 bytes
        InvalidPadding: If the decrypted padding is malformed
    """
    round_keys = expand_key(key)
    blocks = split_blocks(data)

    if tracer is not None and 0 <= trace_block < len(blocks):
        decrypt_block(blocks[trace_block], round_keys, tracer)

    plain = _process_blocks(blocks, lambda b: decrypt_block(b, round_keys), workers)
    return unpad(plain)


def message_rounds(data: bytes, key: bytes, decrypt: bool = False) -> dict[int, bytes]:
    """
    Whole-message snapshot after every round.

    All blocks are advanced one round at a time, and the concatenation of
    their states is recorded at the end of each round. Keys of the result are
    round numbers in execution order (0..14 for encryption, 14..0 for
    decryption).

    Args:
        data: Block-aligned input (already padded for encryption, raw
            ciphertext for decryption)
        key: 32-byte AES-256 key
        decrypt: Walk the decryption schedule instead

    Returns:
        Mapping round number -> message bytes after that round

    Raises:
        InvalidBlockLength: If data is empty or not a multiple of 16 bytes
    """
    round_keys = expand_key(key)
    states = [bytes_to_state(b) for b in split_blocks(data)]
    schedule = DECRYPT_SCHEDULE if decrypt else ENCRYPT_SCHEDULE

    snapshots: dict[int, bytes] = {}
    for round_num, operations in schedule:
        states = [run_round(s, round_num, operations, round_keys) for s in states]
        snapshots[round_num] = b"".join(state_to_bytes(s) for s in states)
    return snapshots
