"""Error types raised at the cipher's input and output boundaries."""


class AesError(ValueError):
    """Base class for all rejected cipher inputs."""

    kind: str = "aes_error"


class InvalidKeyLength(AesError):
    """Key is not exactly 32 bytes."""

    kind = "invalid_key_length"


class InvalidBlockLength(AesError):
    """Block is not 16 bytes, or a ciphertext is not a positive multiple of 16."""

    kind = "invalid_block_length"


class InvalidHexInput(AesError):
    """Hex text could not be decoded into bytes."""

    kind = "invalid_hex_input"


class InvalidPadding(AesError):
    """Trailing padding bytes are out of range or inconsistent.

    Most often the result of decrypting with the wrong key or of a
    corrupted ciphertext.
    """

    kind = "invalid_padding"


class InvalidPassphrase(AesError):
    """Passphrase is empty, so no key can be derived from it."""

    kind = "invalid_passphrase"
