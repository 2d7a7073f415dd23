"""
AES-256 key expansion.

The 32-byte key supplies words w[0..7]; each further word w[i], 8 <= i < 60,
is temp XOR w[i-8] where temp is derived from w[i-1]:

  i % 8 == 0 : SubWord(RotWord(w[i-1])) XOR (Rcon[i/8], 0, 0, 0)
  i % 8 == 4 : SubWord(w[i-1])
  otherwise  : w[i-1]

Consecutive groups of 4 words are laid out column-wise as the 15 round keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import KEY_SIZE, KEY_WORDS, NUM_ROUNDS, RCON, SBOX, TOTAL_WORDS
from .errors import InvalidKeyLength
from .utils import state_to_hex


def rot_word(word: list[int]) -> list[int]:
    """Cyclic left rotation by one byte: [a, b, c, d] -> [b, c, d, a]."""
    return word[1:] + word[:1]


def sub_word(word: list[int]) -> list[int]:
    """Apply the S-box to each byte of a word."""
    return [SBOX[b] for b in word]


def xor_words(a: list[int], b: list[int]) -> list[int]:
    return [x ^ y for x, y in zip(a, b)]


@dataclass
class KeyExpansionStep:
    """How one generated word w[index] was derived."""

    index: int
    operation: str
    before: list[int]
    after_rot: list[int] | None = None
    after_sub: list[int] | None = None
    rcon: int | None = None
    xored_with: list[int] = field(default_factory=list)
    result: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with hex-formatted words."""
        def _hex(word: list[int] | None) -> str | None:
            return bytes(word).hex() if word is not None else None

        return {
            "index": self.index,
            "operation": self.operation,
            "before": _hex(self.before),
            "after_rot": _hex(self.after_rot),
            "after_sub": _hex(self.after_sub),
            "rcon": f"{self.rcon:02x}" if self.rcon is not None else None,
            "xored_with": _hex(self.xored_with),
            "result": _hex(self.result),
        }


@dataclass
class KeyExpansion:
    """Round keys together with the word-level derivation record."""

    round_keys: list[list[list[int]]]
    words: list[list[int]]
    steps: list[KeyExpansionStep]


def _check_key(key: bytes) -> None:
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(f"Key must be {KEY_SIZE} bytes, got {len(key)}")


def _words_to_round_keys(words: list[list[int]]) -> list[list[list[int]]]:
    round_keys = []
    for round_num in range(NUM_ROUNDS + 1):
        rk = [[0] * 4 for _ in range(4)]
        for col in range(4):
            word = words[round_num * 4 + col]
            for row in range(4):
                rk[row][col] = word[row]
        round_keys.append(rk)
    return round_keys


def expand_key_detailed(key: bytes) -> KeyExpansion:
    """
    Expand a 256-bit key and record how every word was produced.

    Args:
        key: 32-byte AES-256 key

    Returns:
        KeyExpansion with 15 round keys, 60 words and 52 steps

    Raises:
        InvalidKeyLength: If key is not 32 bytes
    """
    _check_key(key)

    words = [list(key[4 * i:4 * i + 4]) for i in range(KEY_WORDS)]
    steps: list[KeyExpansionStep] = []

    for i in range(KEY_WORDS, TOTAL_WORDS):
        temp = words[i - 1][:]
        step = KeyExpansionStep(index=i, operation="XOR only", before=temp[:])

        if i % KEY_WORDS == 0:
            temp = rot_word(temp)
            step.after_rot = temp[:]
            temp = sub_word(temp)
            step.after_sub = temp[:]
            step.rcon = RCON[i // KEY_WORDS]
            temp[0] ^= step.rcon
            step.operation = "RotWord -> SubWord -> Rcon"
        elif i % KEY_WORDS == 4:
            temp = sub_word(temp)
            step.after_sub = temp[:]
            step.operation = "SubWord only"

        words.append(xor_words(temp, words[i - KEY_WORDS]))
        step.xored_with = words[i - KEY_WORDS][:]
        step.result = words[i][:]
        steps.append(step)

    return KeyExpansion(
        round_keys=_words_to_round_keys(words),
        words=words,
        steps=steps,
    )


def expand_key(key: bytes) -> list[list[list[int]]]:
    """
    Expand a 256-bit key into 15 round keys (4x4 column-major matrices).

    Raises:
        InvalidKeyLength: If key is not 32 bytes
    """
    return expand_key_detailed(key).round_keys


def round_keys_to_hex(round_keys: list[list[list[int]]]) -> list[str]:
    """Render each round key as 32 lowercase hex characters."""
    return [state_to_hex(rk) for rk in round_keys]
