from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from .errors import InputError


SALT_LENGTH = 16
IV_LENGTH = 12
CIPHERTEXT_LENGTH_BYTES = 4
SAMPLE_RATE_BYTES = 4
HEADER_LENGTH = SALT_LENGTH + IV_LENGTH + CIPHERTEXT_LENGTH_BYTES + SAMPLE_RATE_BYTES  # 36

BYTES_PER_PIXEL = 3  # R, G, B; alpha carries no data
OPAQUE_ALPHA = 255

KEY_LENGTH = 32
KDF_ITERATIONS = 100_000
TAG_LENGTH = 16

MIN_PASSPHRASE_SCORE = 2
DEFAULT_MAX_SAMPLE_RATE = 192_000
DEFAULT_MAX_UPLOAD_BYTES = 25 * 1024 * 1024

_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class CodecConfig:
    """Runtime policy. Nothing here changes the artifact format."""

    max_sample_rate: int = DEFAULT_MAX_SAMPLE_RATE
    strict_sample_rate: bool = True
    log_level: str = "WARNING"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    def __post_init__(self) -> None:
        if self.max_sample_rate <= 0:
            raise InputError(f"max_sample_rate must be positive, got {self.max_sample_rate}")
        if self.max_upload_bytes <= 0:
            raise InputError(f"max_upload_bytes must be positive, got {self.max_upload_bytes}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise InputError(f"Unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CodecConfig":
        env = os.environ if environ is None else environ
        kwargs = {}
        if "AUDIO_CIPHER_MAX_SAMPLE_RATE" in env:
            kwargs["max_sample_rate"] = _parse_int(env, "AUDIO_CIPHER_MAX_SAMPLE_RATE")
        if "AUDIO_CIPHER_STRICT_SAMPLE_RATE" in env:
            value = env["AUDIO_CIPHER_STRICT_SAMPLE_RATE"].strip().lower()
            kwargs["strict_sample_rate"] = value not in _FALSE_STRINGS
        if "AUDIO_CIPHER_LOG_LEVEL" in env:
            kwargs["log_level"] = env["AUDIO_CIPHER_LOG_LEVEL"].strip().upper() or "WARNING"
        if "AUDIO_CIPHER_MAX_UPLOAD_BYTES" in env:
            kwargs["max_upload_bytes"] = _parse_int(env, "AUDIO_CIPHER_MAX_UPLOAD_BYTES")
        return cls(**kwargs)


def _parse_int(env: Mapping[str, str], name: str) -> int:
    raw = env[name]
    try:
        return int(raw.strip())
    except ValueError:
        raise InputError(f"{name} must be an integer, got {raw!r}") from None


DEFAULT_CONFIG = CodecConfig()
