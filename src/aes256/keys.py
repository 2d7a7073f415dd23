"""Passphrase and hex key handling."""

from Crypto.Hash import SHA256

from .constants import KEY_SIZE
from .errors import InvalidKeyLength, InvalidPassphrase
from .utils import hex_to_bytes


def derive_key(passphrase: str) -> bytes:
    """Derive a 32-byte key as SHA-256 of the UTF-8 passphrase.

    Args:
        passphrase: Non-empty passphrase text

    Returns:
        32-byte key

    Raises:
        InvalidPassphrase: If passphrase is empty
    """
    if not passphrase:
        raise InvalidPassphrase("Passphrase must not be empty")
    return SHA256.new(passphrase.encode("utf-8")).digest()


def parse_key_hex(key_hex: str) -> bytes:
    """Decode a raw key given as 64 hex characters.

    Raises:
        InvalidHexInput: If the text is not valid hex
        InvalidKeyLength: If it does not decode to 32 bytes
    """
    key = hex_to_bytes(key_hex)
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(
            f"Key must be {KEY_SIZE * 2} hex chars ({KEY_SIZE} bytes), got {len(key) * 2} chars"
        )
    return key
