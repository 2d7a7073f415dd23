"""
Single-block AES-256 encryption and decryption.

Round schedule (encryption):
- Round 0: AddRoundKey
- Rounds 1-13: SubBytes, ShiftRows, MixColumns, AddRoundKey
- Round 14: SubBytes, ShiftRows, AddRoundKey (no MixColumns)

Decryption walks the same rounds backwards with the inverse transformations,
starting from round key 14 and finishing with round key 0.

A tracer receives the initial state, a "Start of Round" snapshot before
each round after the first ("Start of Final Round" for the last) and the
state after every operation.
"""

from __future__ import annotations

from .constants import NUM_ROUNDS
from .trace import TraceRecorder
from .transformations import (
    add_round_key,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_columns,
    shift_rows,
    sub_bytes,
)
from .utils import bytes_to_state, copy_state, state_to_bytes


# (round, operations) in execution order
ENCRYPT_SCHEDULE: list[tuple[int, list[str]]] = (
    [(0, ["AddRoundKey"])]
    + [(r, ["SubBytes", "ShiftRows", "MixColumns", "AddRoundKey"])
       for r in range(1, NUM_ROUNDS)]
    + [(NUM_ROUNDS, ["SubBytes", "ShiftRows", "AddRoundKey"])]
)

DECRYPT_SCHEDULE: list[tuple[int, list[str]]] = (
    [(NUM_ROUNDS, ["AddRoundKey"])]
    + [(r, ["InvShiftRows", "InvSubBytes", "AddRoundKey", "InvMixColumns"])
       for r in range(NUM_ROUNDS - 1, 0, -1)]
    + [(0, ["InvShiftRows", "InvSubBytes", "AddRoundKey"])]
)

_KEYLESS_OPS = {
    "SubBytes": sub_bytes,
    "ShiftRows": shift_rows,
    "MixColumns": mix_columns,
    "InvSubBytes": inv_sub_bytes,
    "InvShiftRows": inv_shift_rows,
    "InvMixColumns": inv_mix_columns,
}


def _check_round_keys(round_keys: list[list[list[int]]]) -> None:
    if len(round_keys) != NUM_ROUNDS + 1:
        raise ValueError(
            f"Expected {NUM_ROUNDS + 1} round keys, got {len(round_keys)}"
        )


def run_round(
    state: list[list[int]],
    round_num: int,
    operations: list[str],
    round_keys: list[list[list[int]]],
    tracer: TraceRecorder | None = None,
) -> list[list[int]]:
    """
    Apply one round's operations to a state.

    Args:
        state: 4x4 input state (not modified)
        round_num: Round number, selects the round key
        operations: Operation names from ENCRYPT_SCHEDULE / DECRYPT_SCHEDULE
        round_keys: 15 round keys from expand_key
        tracer: Optional recorder; receives the state after each operation

    Returns:
        New 4x4 state
    """
    round_key = round_keys[round_num]

    for op in operations:
        if op == "AddRoundKey":
            state = add_round_key(state, round_key)
        elif op in _KEYLESS_OPS:
            state = _KEYLESS_OPS[op](state)
        else:
            raise ValueError(f"Unknown operation: {op}")

        if tracer is not None:
            entry = {
                "round": round_num,
                "step": f"After {op}",
                "state": copy_state(state),
            }
            if op == "AddRoundKey":
                entry["round_key"] = copy_state(round_key)
            tracer.record(**entry)

    return state


def _run_schedule(
    block: bytes,
    round_keys: list[list[list[int]]],
    schedule: list[tuple[int, list[str]]],
    label: str,
    tracer: TraceRecorder | None,
) -> bytes:
    _check_round_keys(round_keys)
    state = bytes_to_state(block)

    if tracer is not None:
        tracer.record(round=schedule[0][0], step=label, state=copy_state(state))

    for i, (round_num, operations) in enumerate(schedule):
        if tracer is not None and i > 0:
            step = "Start of Final Round" if i == len(schedule) - 1 else "Start of Round"
            tracer.record(round=round_num, step=step, state=copy_state(state))
        state = run_round(state, round_num, operations, round_keys, tracer)

    return state_to_bytes(state)


def encrypt_block(
    block: bytes,
    round_keys: list[list[list[int]]],
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Encrypt a single 16-byte block.

    Args:
        block: 16-byte plaintext block
        round_keys: 15 round keys from expand_key
        tracer: Optional trace recorder

    Returns:
        16-byte ciphertext block

    Raises:
        InvalidBlockLength: If block is not 16 bytes
    """
    return _run_schedule(block, round_keys, ENCRYPT_SCHEDULE, "Initial State", tracer)


def decrypt_block(
    block: bytes,
    round_keys: list[list[list[int]]],
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Decrypt a single 16-byte block.

    Args:
        block: 16-byte ciphertext block
        round_keys: 15 round keys from expand_key
        tracer: Optional trace recorder

    Returns:
        16-byte plaintext block

    Raises:
        InvalidBlockLength: If block is not 16 bytes
    """
    return _run_schedule(
        block, round_keys, DECRYPT_SCHEDULE, "Initial State (Cipher)", tracer
    )
