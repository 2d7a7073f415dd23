"""
AES round transformations and their inverses.

Every function takes a 4x4 state (and, for AddRoundKey, a 4x4 round key)
and returns a freshly built state; inputs are never modified.
"""

from .constants import SBOX, INV_SBOX
from .galois import times2, times3, times9, times11, times13, times14
from .utils import xor_states


def sub_bytes(state: list[list[int]]) -> list[list[int]]:
    """Replace every byte with SBOX[byte]."""
    return [[SBOX[b] for b in row] for row in state]


def inv_sub_bytes(state: list[list[int]]) -> list[list[int]]:
    """Replace every byte with INV_SBOX[byte]."""
    return [[INV_SBOX[b] for b in row] for row in state]


def shift_rows(state: list[list[int]]) -> list[list[int]]:
    """
    Rotate row r left by r positions.

      r0: a b c d -> a b c d
      r1: e f g h -> f g h e
      r2: i j k l -> k l i j
      r3: m n o p -> p m n o
    """
    return [[state[row][(col + row) % 4] for col in range(4)] for row in range(4)]


def inv_shift_rows(state: list[list[int]]) -> list[list[int]]:
    """Rotate row r right by r positions (undoes shift_rows)."""
    return [[state[row][(col - row) % 4] for col in range(4)] for row in range(4)]


def mix_single_column(col: list[int]) -> list[int]:
    """Multiply one column by the fixed matrix [[2,3,1,1],[1,2,3,1],[1,1,2,3],[3,1,1,2]]."""
    s0, s1, s2, s3 = col
    return [
        times2(s0) ^ times3(s1) ^ s2 ^ s3,
        s0 ^ times2(s1) ^ times3(s2) ^ s3,
        s0 ^ s1 ^ times2(s2) ^ times3(s3),
        times3(s0) ^ s1 ^ s2 ^ times2(s3),
    ]


def inv_mix_single_column(col: list[int]) -> list[int]:
    """Multiply one column by the inverse matrix with rows rotated from (14, 11, 13, 9)."""
    s0, s1, s2, s3 = col
    return [
        times14(s0) ^ times11(s1) ^ times13(s2) ^ times9(s3),
        times9(s0) ^ times14(s1) ^ times11(s2) ^ times13(s3),
        times13(s0) ^ times9(s1) ^ times14(s2) ^ times11(s3),
        times11(s0) ^ times13(s1) ^ times9(s2) ^ times14(s3),
    ]


def _map_columns(state: list[list[int]], fn) -> list[list[int]]:
    result = [[0] * 4 for _ in range(4)]
    for col in range(4):
        mixed = fn([state[row][col] for row in range(4)])
        for row in range(4):
            result[row][col] = mixed[row]
    return result


def mix_columns(state: list[list[int]]) -> list[list[int]]:
    """Apply mix_single_column to each of the 4 columns."""
    return _map_columns(state, mix_single_column)


def inv_mix_columns(state: list[list[int]]) -> list[list[int]]:
    """Apply inv_mix_single_column to each of the 4 columns."""
    return _map_columns(state, inv_mix_single_column)


def add_round_key(state: list[list[int]], round_key: list[list[int]]) -> list[list[int]]:
    """XOR state with round key. Applying it twice restores the state."""
    return xor_states(state, round_key)
