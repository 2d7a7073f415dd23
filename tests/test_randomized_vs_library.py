"""
Randomized tests comparing the cipher against the PyCryptodome reference.

Tests:
- Single blocks match AES-256 ECB from the library
- Padded messages match library pad + ECB
- Library ciphertext decrypts with decrypt_stream
"""

import random

import pytest
from Crypto.Cipher import AES
from Crypto.Util.Padding import pad as lib_pad

from aes256.block import decrypt_block, encrypt_block
from aes256.key_schedule import expand_key
from aes256.stream import decrypt_stream, encrypt_stream
from aes256.utils import bytes_to_hex


def random_bytes(n: int, rng: random.Random) -> bytes:
    """Generate n random bytes."""
    return bytes(rng.randint(0, 255) for _ in range(n))


class TestBlockRandomized:
    """Randomized single-block comparisons."""

    @pytest.mark.parametrize("seed", range(20))
    def test_random_key_pt(self, seed):
        """Test with random key and plaintext."""
        rng = random.Random(seed)
        key = random_bytes(32, rng)
        pt = random_bytes(16, rng)

        expected = AES.new(key, AES.MODE_ECB).encrypt(pt)
        computed = encrypt_block(pt, expand_key(key))

        assert computed == expected, (
            f"Seed {seed}: expected {bytes_to_hex(expected)}, "
            f"got {bytes_to_hex(computed)}"
        )

    @pytest.mark.parametrize("seed", range(10))
    def test_random_decrypt(self, seed):
        """Library ciphertext decrypts back to the plaintext."""
        rng = random.Random(seed + 500)
        key = random_bytes(32, rng)
        pt = random_bytes(16, rng)

        ct = AES.new(key, AES.MODE_ECB).encrypt(pt)
        assert decrypt_block(ct, expand_key(key)) == pt


class TestStreamRandomized:
    """Randomized whole-message comparisons."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_messages(self, seed):
        rng = random.Random(seed + 1000)
        key = random_bytes(32, rng)
        msg = random_bytes(rng.randint(0, 80), rng)

        expected = AES.new(key, AES.MODE_ECB).encrypt(lib_pad(msg, 16))
        assert encrypt_stream(msg, key) == expected

    @pytest.mark.parametrize("seed", range(10))
    def test_library_ciphertext_decrypts(self, seed):
        rng = random.Random(seed + 2000)
        key = random_bytes(32, rng)
        msg = random_bytes(rng.randint(0, 80), rng)

        ct = AES.new(key, AES.MODE_ECB).encrypt(lib_pad(msg, 16))
        assert decrypt_stream(ct, key, workers=2) == msg
