"""Golden reference AES-256 implementation using PyCryptodome."""

from Crypto.Cipher import AES
from Crypto.Util.Padding import pad as _pkcs7_pad


def golden_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt a single block using PyCryptodome as golden reference.

    Args:
        key: 32-byte AES-256 key
        plaintext: 16-byte plaintext block

    Returns:
        16-byte ciphertext block

    Raises:
        ValueError: If key is not 32 bytes or plaintext is not 16 bytes
    """
    if len(key) != 32:
        raise ValueError(f"Key must be 32 bytes, got {len(key)}")
    if len(plaintext) != 16:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")

    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(plaintext)


def golden_encrypt_message(key: bytes, data: bytes) -> bytes:
    """PKCS#7-pad and ECB-encrypt a whole message with PyCryptodome."""
    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(_pkcs7_pad(data, 16))


def validate_against_golden(
    key: bytes, plaintext: bytes, candidate_ciphertext: bytes
) -> tuple[bool, str]:
    """Validate a candidate ciphertext against the golden reference.

    Args:
        key: 32-byte AES-256 key
        plaintext: 16-byte plaintext block
        candidate_ciphertext: 16-byte ciphertext to validate

    Returns:
        Tuple of (is_correct, error_detail)
    """
    expected = golden_encrypt(key, plaintext)
    if candidate_ciphertext == expected:
        return True, ""
    else:
        return False, (
            f"Ciphertext mismatch: expected {expected.hex()}, "
            f"got {candidate_ciphertext.hex()}"
        )


# Published AES-256 known-answer vectors
FIPS_197_TEST_VECTORS = [
    # FIPS-197 Appendix C.3
    {
        "key": bytes.fromhex(
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
        ),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("8ea2b7ca516745bfeafc49904b496089"),
    },
    # NIST SP 800-38A F.1.5 ECB-AES256, blocks 1-4
    {
        "key": bytes.fromhex(
            "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        ),
        "plaintext": bytes.fromhex("6bc1bee22e409f96e93d7e117393172a"),
        "ciphertext": bytes.fromhex("f3eed1bdb5d2a03c064b5a7e3db181f8"),
    },
    {
        "key": bytes.fromhex(
            "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        ),
        "plaintext": bytes.fromhex("ae2d8a571e03ac9c9eb76fac45af8e51"),
        "ciphertext": bytes.fromhex("591ccb10d410ed26dc5ba74a31362870"),
    },
    {
        "key": bytes.fromhex(
            "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        ),
        "plaintext": bytes.fromhex("30c81c46a35ce411e5fbc1191a0a52ef"),
        "ciphertext": bytes.fromhex("b6ed21b99ca6f4f9f153e7b1beafed1d"),
    },
    {
        "key": bytes.fromhex(
            "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
        ),
        "plaintext": bytes.fromhex("f69f2445df4f9b17ad2b417be66c3710"),
        "ciphertext": bytes.fromhex("23304b7a39f9f3ff067d8d8f9e24ecc7"),
    },
]
