from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .byteio import U32_MAX, ByteReader, ByteWriter
from .config import DEFAULT_CONFIG, HEADER_LENGTH, IV_LENGTH, SALT_LENGTH, CodecConfig
from .errors import FormatError, InputError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Header:
    """salt(16) || nonce(12) || ciphertext length (u32 BE) || sample rate (u32 BE)"""

    salt: bytes
    nonce: bytes
    ciphertext_length: int
    sample_rate: int

    def pack(self) -> bytes:
        if len(self.salt) != SALT_LENGTH:
            raise InputError(f"Salt must be {SALT_LENGTH} bytes, got {len(self.salt)}")
        if len(self.nonce) != IV_LENGTH:
            raise InputError(f"Nonce must be {IV_LENGTH} bytes, got {len(self.nonce)}")
        writer = ByteWriter()
        writer.write_bytes(self.salt).write_bytes(self.nonce)
        writer.write_u32(self.ciphertext_length).write_u32(self.sample_rate)
        return writer.getvalue()


@dataclass(frozen=True)
class ParsedPayload:
    header: Header
    ciphertext: bytes

    @property
    def salt(self) -> bytes:
        return self.header.salt

    @property
    def nonce(self) -> bytes:
        return self.header.nonce

    @property
    def ciphertext_length(self) -> int:
        return self.header.ciphertext_length

    @property
    def sample_rate(self) -> int:
        return self.header.sample_rate


def payload_length(ciphertext_length: int) -> int:
    return HEADER_LENGTH + ciphertext_length


def assemble(
    salt: bytes,
    nonce: bytes,
    ciphertext: bytes,
    sample_rate: int,
    config: Optional[CodecConfig] = None,
) -> bytes:
    """Build header || ciphertext."""
    config = config or DEFAULT_CONFIG
    if len(ciphertext) > U32_MAX:
        raise InputError(f"Ciphertext of {len(ciphertext)} bytes exceeds the 32-bit length field")
    if not 0 < sample_rate <= config.max_sample_rate:
        raise InputError(f"Sample rate {sample_rate} Hz outside (0, {config.max_sample_rate}]")
    header = Header(bytes(salt), bytes(nonce), len(ciphertext), int(sample_rate))
    return header.pack() + bytes(ciphertext)


def parse(payload: bytes, config: Optional[CodecConfig] = None) -> ParsedPayload:
    """Split a payload (possibly followed by pixel padding) into header and ciphertext."""
    config = config or DEFAULT_CONFIG
    if len(payload) < HEADER_LENGTH:
        raise FormatError("Corrupted data: Image data too short to contain header.")

    reader = ByteReader(payload)
    salt = reader.read_bytes(SALT_LENGTH)
    nonce = reader.read_bytes(IV_LENGTH)
    ciphertext_length = reader.read_u32()
    sample_rate = reader.read_u32()

    if ciphertext_length > reader.remaining:
        raise FormatError("Corrupted data: Declared ciphertext length exceeds available data.")

    if not 0 < sample_rate <= config.max_sample_rate:
        message = f"Invalid sample rate ({sample_rate}Hz) in image. Data might be corrupted."
        # no audio exists at 0 Hz, so only the upper bound is negotiable
        if config.strict_sample_rate or sample_rate == 0:
            raise FormatError(message)
        logger.warning(message)

    ciphertext = reader.read_bytes(ciphertext_length)
    logger.debug(
        "Parsed header: ciphertext=%d bytes, sample_rate=%d Hz, padding=%d bytes",
        ciphertext_length, sample_rate, reader.remaining,
    )
    return ParsedPayload(Header(salt, nonce, ciphertext_length, sample_rate), ciphertext)
