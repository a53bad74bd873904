"""Encrypt audio into a pixel grid and back.

encrypt: strength gate -> salt -> derive key -> nonce -> AES-GCM -> assemble -> pack
decrypt: unpack -> parse -> derive key -> AES-GCM -> float32 samples
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import numpy as np

from . import crypto, payload, pixels
from .audio import AudioSamples, bytes_to_samples, samples_to_bytes
from .config import CodecConfig
from .crypto import RandomSource
from .errors import InputError
from .strength import require_passphrase


logger = logging.getLogger(__name__)


def encrypt_to_payload(
    audio: AudioSamples,
    passphrase: str,
    *,
    random_bytes: RandomSource = os.urandom,
    config: Optional[CodecConfig] = None,
) -> bytes:
    require_passphrase(passphrase)
    if len(audio) == 0:
        raise InputError("Audio data is empty. Cannot encrypt.")

    salt = crypto.new_salt(random_bytes)
    key = crypto.derive_key(passphrase, salt)
    nonce = crypto.new_nonce(random_bytes)
    ciphertext = crypto.encrypt(key, nonce, samples_to_bytes(audio.samples))
    data = payload.assemble(salt, nonce, ciphertext, audio.sample_rate, config)
    logger.debug("Assembled payload: %d bytes (%d ciphertext)", len(data), len(ciphertext))
    return data


def encrypt_audio(
    audio: AudioSamples,
    passphrase: str,
    *,
    random_bytes: RandomSource = os.urandom,
    config: Optional[CodecConfig] = None,
) -> np.ndarray:
    """Encrypt mono audio under a passphrase and return the RGBA pixel grid."""
    data = encrypt_to_payload(audio, passphrase, random_bytes=random_bytes, config=config)
    grid = pixels.pack(data)
    height, width = grid.shape[:2]
    logger.info(
        "Encrypted %d samples at %d Hz into a %dx%d image",
        len(audio), audio.sample_rate, width, height,
    )
    return grid


def decrypt_payload(
    data: bytes,
    passphrase: str,
    *,
    config: Optional[CodecConfig] = None,
) -> AudioSamples:
    require_passphrase(passphrase, check_strength=False)
    parsed = payload.parse(data, config)
    key = crypto.derive_key(passphrase, parsed.salt)
    plaintext = crypto.decrypt(key, parsed.nonce, parsed.ciphertext)
    return AudioSamples(bytes_to_samples(plaintext), parsed.sample_rate)


def decrypt_grid(
    grid: np.ndarray,
    passphrase: str,
    *,
    config: Optional[CodecConfig] = None,
) -> AudioSamples:
    """Recover audio from a pixel grid.

    Raises FormatError or AuthenticationFailure when the plaintext cannot be
    recovered; callers should report both the same way.
    """
    audio = decrypt_payload(pixels.unpack(grid), passphrase, config=config)
    logger.info("Decrypted %d samples at %d Hz", len(audio), audio.sample_rate)
    return audio


async def encrypt_audio_async(
    audio: AudioSamples,
    passphrase: str,
    *,
    random_bytes: RandomSource = os.urandom,
    config: Optional[CodecConfig] = None,
) -> np.ndarray:
    return await asyncio.to_thread(
        encrypt_audio, audio, passphrase, random_bytes=random_bytes, config=config
    )


async def decrypt_grid_async(
    grid: np.ndarray,
    passphrase: str,
    *,
    config: Optional[CodecConfig] = None,
) -> AudioSamples:
    return await asyncio.to_thread(decrypt_grid, grid, passphrase, config=config)
