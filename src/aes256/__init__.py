"""
AES-256 from first principles.

Key schedule, round transformations, single-block cipher and padded
independent-block processing of arbitrary-length messages, plus an
optional step-by-step trace for visualization.
"""

__version__ = "1.0.0"

# NIST SP 800-38A F.1.5 ECB-AES256 key and first plaintext block
DEFAULT_KEY_HEX = "603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4"
DEFAULT_PT_HEX = "6bc1bee22e409f96e93d7e117393172a"
DEFAULT_CT_HEX = "f3eed1bdb5d2a03c064b5a7e3db181f8"

from .errors import (
    AesError,
    InvalidBlockLength,
    InvalidHexInput,
    InvalidKeyLength,
    InvalidPadding,
    InvalidPassphrase,
)
from .key_schedule import expand_key
from .block import encrypt_block, decrypt_block
from .stream import pad, unpad, encrypt_stream, decrypt_stream
from .interfaces import CipherConfig, CipherResult
from .api import encrypt_text, decrypt_hex
from .trace import TraceRecorder

__all__ = [
    "AesError",
    "InvalidBlockLength",
    "InvalidHexInput",
    "InvalidKeyLength",
    "InvalidPadding",
    "InvalidPassphrase",
    "expand_key",
    "encrypt_block",
    "decrypt_block",
    "pad",
    "unpad",
    "encrypt_stream",
    "decrypt_stream",
    "CipherConfig",
    "CipherResult",
    "encrypt_text",
    "decrypt_hex",
    "TraceRecorder",
]
