"""AES-256-GCM primitive.

Thin wrapper over ``cryptography``'s AESGCM that keeps the ciphertext and the
authentication tag as separate values, the way the sealed record stores them.
"""
import os
from typing import Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

ALGORITHM_AES_256_GCM = "AES-256-GCM"
KEY_SIZE = 32
NONCE_SIZE = 12  # 96-bit nonce for GCM
TAG_SIZE = 16

__all__ = [
    "ALGORITHM_AES_256_GCM",
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "InvalidTag",
    "encrypt",
    "decrypt",
    "random_key",
    "random_nonce",
]


def random_key() -> bytes:
    return os.urandom(KEY_SIZE)


def random_nonce() -> bytes:
    return os.urandom(NONCE_SIZE)


def encrypt(key: bytes, nonce: bytes, plaintext: bytes) -> Tuple[bytes, bytes]:
    """Encrypt and return ``(ciphertext, tag)``."""
    ct_and_tag = AESGCM(key).encrypt(nonce, plaintext, None)
    return ct_and_tag[:-TAG_SIZE], ct_and_tag[-TAG_SIZE:]


def decrypt(key: bytes, nonce: bytes, ciphertext: bytes, tag: bytes) -> bytes:
    """Verify the tag and decrypt.

    Raises:
        InvalidTag: if authentication fails (wrong key, altered nonce,
            ciphertext or tag). Tag comparison is constant-time inside the
            primitive.
    """
    return AESGCM(key).decrypt(nonce, ciphertext + tag, None)
