from __future__ import annotations

import os
from typing import Optional

import numpy as np

from . import pipeline
from .audio import AudioSamples, PathOrFile, write_wav
from .config import CodecConfig
from .crypto import RandomSource
from .errors import InputError, ResourceError
from .pixels import save_png


class CipherSession:
    """Holds the results of one user's encrypt/decrypt exchange.

    Use as a context manager; buffers are dropped on exit.

        with CipherSession() as session:
            session.decrypt(grid, passphrase)
            session.export_wav("out.wav")
    """

    def __init__(self, config: Optional[CodecConfig] = None, random_bytes: RandomSource = os.urandom):
        self.config = config
        self._random_bytes = random_bytes
        self._closed = False
        self.last_grid: Optional[np.ndarray] = None
        self.last_audio: Optional[AudioSamples] = None

    def __enter__(self) -> "CipherSession":
        self._ensure_open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self.last_grid = None
        self.last_audio = None
        self._closed = True

    def encrypt(self, audio: AudioSamples, passphrase: str) -> np.ndarray:
        self._ensure_open()
        self.last_grid = None
        self.last_grid = pipeline.encrypt_audio(
            audio, passphrase, random_bytes=self._random_bytes, config=self.config
        )
        return self.last_grid

    def decrypt(self, grid: np.ndarray, passphrase: str) -> AudioSamples:
        self._ensure_open()
        self.last_audio = None
        self.last_audio = pipeline.decrypt_grid(grid, passphrase, config=self.config)
        return self.last_audio

    def export_png(self, target: PathOrFile) -> None:
        self._ensure_open()
        if self.last_grid is None:
            raise InputError("No encrypted image to export")
        save_png(self.last_grid, target)

    def export_wav(self, target: PathOrFile) -> None:
        self._ensure_open()
        if self.last_audio is None:
            raise InputError("No decrypted audio to export")
        write_wav(self.last_audio, target)

    def _ensure_open(self) -> None:
        if self._closed:
            raise ResourceError("Session is closed")
