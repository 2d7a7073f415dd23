"""Tests for golden reference AES-256 implementation."""

import pytest
from Crypto.Cipher import AES

from aes256.golden import (
    FIPS_197_TEST_VECTORS,
    golden_encrypt,
    golden_encrypt_message,
    validate_against_golden,
)


class TestGoldenEncrypt:
    """Tests for golden_encrypt function."""

    def test_fips_197_appendix_c3(self) -> None:
        """Test FIPS-197 Appendix C.3 AES-256 test vector."""
        key = bytes.fromhex(
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
        )
        plaintext = bytes.fromhex("00112233445566778899aabbccddeeff")
        expected = bytes.fromhex("8ea2b7ca516745bfeafc49904b496089")

        assert golden_encrypt(key, plaintext) == expected

    @pytest.mark.parametrize("vec", FIPS_197_TEST_VECTORS)
    def test_all_vectors(self, vec: dict) -> None:
        """Test every vector in the shipped table."""
        assert golden_encrypt(vec["key"], vec["plaintext"]) == vec["ciphertext"]

    def test_all_zeros_key_and_plaintext(self) -> None:
        """Test encryption with all-zero key and plaintext."""
        expected = bytes.fromhex("dc95c078a2408989ad48a21492842087")
        assert golden_encrypt(bytes(32), bytes(16)) == expected

    def test_invalid_key_length(self) -> None:
        """Test that invalid key length raises ValueError."""
        with pytest.raises(ValueError, match="Key must be 32 bytes"):
            golden_encrypt(bytes(16), bytes(16))

        with pytest.raises(ValueError, match="Key must be 32 bytes"):
            golden_encrypt(bytes(33), bytes(16))

    def test_invalid_plaintext_length(self) -> None:
        """Test that invalid plaintext length raises ValueError."""
        with pytest.raises(ValueError, match="Plaintext must be 16 bytes"):
            golden_encrypt(bytes(32), bytes(15))

        with pytest.raises(ValueError, match="Plaintext must be 16 bytes"):
            golden_encrypt(bytes(32), bytes(17))


class TestGoldenMessage:
    """Tests for golden_encrypt_message function."""

    def test_length_is_padded(self) -> None:
        assert len(golden_encrypt_message(bytes(32), b"")) == 16
        assert len(golden_encrypt_message(bytes(32), bytes(16))) == 32
        assert len(golden_encrypt_message(bytes(32), bytes(17))) == 32

    def test_first_block_matches_single_block(self) -> None:
        """Blocks are independent, so block 0 equals a single-block encryption."""
        key = bytes(range(32))
        data = bytes(range(16)) + b"tail"
        out = golden_encrypt_message(key, data)
        assert out[:16] == AES.new(key, AES.MODE_ECB).encrypt(bytes(range(16)))


class TestValidateAgainstGolden:
    """Tests for validate_against_golden function."""

    KEY = bytes.fromhex(
        "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
    )
    PT = bytes.fromhex("00112233445566778899aabbccddeeff")
    CT = bytes.fromhex("8ea2b7ca516745bfeafc49904b496089")

    def test_correct_ciphertext_passes(self) -> None:
        """Test that correct ciphertext validates successfully."""
        is_correct, error = validate_against_golden(self.KEY, self.PT, self.CT)

        assert is_correct is True
        assert error == ""

    def test_incorrect_ciphertext_fails(self) -> None:
        """Test that incorrect ciphertext fails validation."""
        is_correct, error = validate_against_golden(self.KEY, self.PT, bytes(16))

        assert is_correct is False
        assert "mismatch" in error.lower()
        assert "expected" in error.lower()

    def test_single_bit_difference_fails(self) -> None:
        """Test that even a single bit difference fails."""
        wrong = bytearray(self.CT)
        wrong[0] ^= 0x01

        is_correct, _ = validate_against_golden(self.KEY, self.PT, bytes(wrong))

        assert is_correct is False
