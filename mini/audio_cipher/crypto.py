from __future__ import annotations

import os
from typing import Callable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .config import IV_LENGTH, KDF_ITERATIONS, KEY_LENGTH, SALT_LENGTH
from .errors import AuthenticationFailure, InputError


RandomSource = Callable[[int], bytes]


def derive_key(passphrase: str, salt: bytes) -> bytes:
    """Derive the 256-bit AES-GCM key for (passphrase, salt).

    PBKDF2-HMAC-SHA256 with a fixed 100k iterations, passphrase encoded as
    UTF-8. Same inputs always give the same key.
    """
    if not passphrase:
        raise InputError("Secret key is required")
    if len(salt) != SALT_LENGTH:
        raise InputError(f"Salt must be {SALT_LENGTH} bytes, got {len(salt)}")
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=bytes(salt),
        iterations=KDF_ITERATIONS,
    )
    return kdf.derive(passphrase.encode("utf-8"))


def encrypt(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """AES-256-GCM encrypt without associated data.

    Output is ciphertext || 16-byte tag. The nonce must never repeat for a key.
    """
    _check_nonce(nonce)
    return AESGCM(key).encrypt(bytes(nonce), bytes(plaintext), None)


def decrypt(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    _check_nonce(nonce)
    try:
        return AESGCM(key).decrypt(bytes(nonce), bytes(ciphertext), None)
    except InvalidTag:
        raise AuthenticationFailure("Ciphertext failed authentication") from None


def new_salt(random_bytes: RandomSource = os.urandom) -> bytes:
    return _draw(random_bytes, SALT_LENGTH, "salt")


def new_nonce(random_bytes: RandomSource = os.urandom) -> bytes:
    return _draw(random_bytes, IV_LENGTH, "nonce")


def _draw(random_bytes: RandomSource, length: int, what: str) -> bytes:
    value = bytes(random_bytes(length))
    if len(value) != length:
        raise InputError(f"Random source returned {len(value)} bytes for {what}, expected {length}")
    return value


def _check_nonce(nonce: bytes) -> None:
    if len(nonce) != IV_LENGTH:
        raise InputError(f"Nonce must be {IV_LENGTH} bytes, got {len(nonce)}")
