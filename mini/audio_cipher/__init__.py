"""Audio-Cipher package: mono audio encrypted with AES-256-GCM into a PNG.

Modules:
- config: format constants and runtime policy
- errors: InputError / FormatError / AuthenticationFailure / ResourceError
- crypto: PBKDF2-HMAC-SHA256 key derivation and AES-256-GCM
- strength: passphrase scoring and the encryption gate
- byteio: big-endian reader/writer for header fields
- payload: 36-byte header framing (assemble/parse)
- pixels: payload <-> RGBA pixel grid, PNG I/O
- audio: float32 sample buffers and audio file I/O
- pipeline: encrypt/decrypt orchestration
- session: caller-owned context holding the last results
- cli: command-line interface (encrypt/decrypt/strength/inspect)
- web: Flask service
"""

from .audio import AudioSamples
from .config import CodecConfig
from .errors import (
    DECRYPTION_FAILED,
    AudioCipherError,
    AuthenticationFailure,
    FormatError,
    InputError,
    ResourceError,
)
from .pipeline import decrypt_grid, decrypt_payload, encrypt_audio, encrypt_to_payload
from .session import CipherSession

__all__ = [
    "AudioSamples",
    "CodecConfig",
    "CipherSession",
    "DECRYPTION_FAILED",
    "AudioCipherError",
    "AuthenticationFailure",
    "FormatError",
    "InputError",
    "ResourceError",
    "decrypt_grid",
    "decrypt_payload",
    "encrypt_audio",
    "encrypt_to_payload",
]
