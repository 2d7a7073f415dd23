"""
Utility functions for byte/state conversions, hex and text codecs.

AES state is 4x4 bytes in column-major order:
  state[row][col] where row, col in [0..3]

Column-major mapping from 16-byte array:
  byte[0]  -> state[0][0]
  byte[1]  -> state[1][0]
  byte[2]  -> state[2][0]
  byte[3]  -> state[3][0]
  byte[4]  -> state[0][1]
  ...
  byte[15] -> state[3][3]
"""

import re

from .constants import BLOCK_SIZE
from .errors import InvalidBlockLength, InvalidHexInput

_NON_HEX = re.compile(r"[^0-9a-fA-F]")


def bytes_to_state(data: bytes) -> list[list[int]]:
    """
    Convert 16 bytes to 4x4 AES state (column-major).

    Args:
        data: 16 bytes of input

    Returns:
        4x4 list of integers (0-255)

    Raises:
        InvalidBlockLength: If data is not 16 bytes
    """
    if len(data) != BLOCK_SIZE:
        raise InvalidBlockLength(f"Expected {BLOCK_SIZE} bytes, got {len(data)}")

    state = [[0 for _ in range(4)] for _ in range(4)]
    for col in range(4):
        for row in range(4):
            state[row][col] = data[col * 4 + row]
    return state


def state_to_bytes(state: list[list[int]]) -> bytes:
    """
    Convert 4x4 AES state to 16 bytes (column-major).
    """
    result = []
    for col in range(4):
        for row in range(4):
            result.append(state[row][col])
    return bytes(result)


def copy_state(state: list[list[int]]) -> list[list[int]]:
    """
    Deep copy a 4x4 state.
    """
    return [[state[row][col] for col in range(4)] for row in range(4)]


def xor_states(a: list[list[int]], b: list[list[int]]) -> list[list[int]]:
    """
    XOR two 4x4 states element-wise.
    """
    result = [[0 for _ in range(4)] for _ in range(4)]
    for row in range(4):
        for col in range(4):
            result[row][col] = a[row][col] ^ b[row][col]
    return result


def bytes_to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hex string, two characters per byte.
    """
    return bytes(data).hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Convert hex string to bytes.

    Whitespace and any other non-hex characters are stripped first, so
    "6b c1:be-e2" decodes the same as "6bc1bee2".

    Args:
        hex_str: Hex text

    Returns:
        bytes

    Raises:
        InvalidHexInput: If the cleaned text has an odd number of digits
    """
    clean = _NON_HEX.sub("", hex_str)
    if len(clean) % 2:
        raise InvalidHexInput(
            f"Hex input must have an even number of digits, got {len(clean)}"
        )
    return bytes.fromhex(clean)


def text_to_bytes(text: str) -> bytes:
    """Encode text as UTF-8."""
    return text.encode("utf-8")


def bytes_to_text(data: bytes) -> str:
    """Decode UTF-8, substituting U+FFFD for invalid sequences."""
    return bytes(data).decode("utf-8", errors="replace")


def state_to_hex(state: list[list[int]]) -> str:
    """
    Convert state to hex string (via bytes).
    """
    return bytes_to_hex(state_to_bytes(state))


def format_state_grid(state: list[list[int]]) -> str:
    """
    Format state as a readable 4x4 grid.

    Returns multi-line string like:
      60 15 2b 85
      3d ca 73 2d
      eb 71 ae 98
      10 be f0 10
    """
    lines = []
    for row in range(4):
        row_hex = [f"{state[row][col]:02x}" for col in range(4)]
        lines.append("  " + " ".join(row_hex))
    return "\n".join(lines)


def format_state_line(state: list[list[int]]) -> str:
    """
    Format state as single-line hex string.
    """
    return state_to_hex(state)
