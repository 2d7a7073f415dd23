"""
Byte arithmetic in GF(2^8) modulo the AES polynomial x^8 + x^4 + x^3 + x + 1.

Addition is XOR. Multiplication by x is a left shift followed by a
conditional XOR with 0x1b when the top bit falls off.
"""

REDUCTION = 0x1b


def xtime(a: int) -> int:
    """Multiply by x in GF(2^8)."""
    return ((a << 1) ^ REDUCTION) & 0xff if a & 0x80 else (a << 1) & 0xff


def times2(b: int) -> int:
    return xtime(b & 0xff)


def times3(b: int) -> int:
    b &= 0xff
    return times2(b) ^ b


def times9(b: int) -> int:
    """9*b = 8*b ^ b"""
    b &= 0xff
    return times2(times2(times2(b))) ^ b


def times11(b: int) -> int:
    """11*b = 8*b ^ 2*b ^ b"""
    b &= 0xff
    b2 = times2(b)
    return times2(times2(b2)) ^ b2 ^ b


def times13(b: int) -> int:
    """13*b = 8*b ^ 4*b ^ b"""
    b &= 0xff
    b4 = times2(times2(b))
    return times2(b4) ^ b4 ^ b


def times14(b: int) -> int:
    """14*b = 8*b ^ 4*b ^ 2*b"""
    b &= 0xff
    b2 = times2(b)
    b4 = times2(b2)
    return times2(b4) ^ b4 ^ b2


def gf_multiply(a: int, b: int) -> int:
    """
    General GF(2^8) product of two bytes (Russian peasant method).

    For each set bit of b (LSB first) the current multiple of a is
    accumulated, then a is doubled with xtime.

    Args:
        a: First byte
        b: Second byte

    Returns:
        a * b in GF(2^8), always in 0..255
    """
    a &= 0xff
    b &= 0xff
    result = 0
    while b:
        if b & 1:
            result ^= a
        a = xtime(a)
        b >>= 1
    return result
