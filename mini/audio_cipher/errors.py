from __future__ import annotations


DECRYPTION_FAILED = "Decryption failed - incorrect key or corrupted data."


class AudioCipherError(Exception):
    """Base class for every error raised by audio_cipher."""


class InputError(AudioCipherError, ValueError):
    """Caller-supplied input was rejected before any cryptography ran."""


class FormatError(AudioCipherError, ValueError):
    """Payload bytes do not describe a well-formed artifact."""


class AuthenticationFailure(AudioCipherError):
    """AES-GCM rejected the ciphertext (wrong passphrase or tampered data)."""


class ResourceError(AudioCipherError, OSError):
    """An audio/image file or a session could not be used."""
