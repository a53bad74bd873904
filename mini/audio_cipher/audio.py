from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO, Union

import numpy as np
import soundfile as sf

from .errors import FormatError, InputError, ResourceError


PathOrFile = Union[str, "os.PathLike[str]", BinaryIO]

# Raw layout of a browser Float32Array buffer.
SAMPLE_DTYPE = np.dtype("<f4")


@dataclass(frozen=True, eq=False)
class AudioSamples:
    """Mono float32 samples (nominally in [-1, 1]) plus their sample rate."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        samples = np.asarray(self.samples, dtype=np.float32)
        if samples.ndim != 1:
            raise InputError(f"Expected single-channel samples, got shape {samples.shape}")
        if int(self.sample_rate) <= 0:
            raise InputError(f"Sample rate must be positive, got {self.sample_rate}")
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "sample_rate", int(self.sample_rate))

    def __len__(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration(self) -> float:
        return len(self) / self.sample_rate


def samples_to_bytes(samples: np.ndarray) -> bytes:
    return np.asarray(samples, dtype=SAMPLE_DTYPE).tobytes()


def bytes_to_samples(data: bytes) -> np.ndarray:
    if len(data) % SAMPLE_DTYPE.itemsize:
        raise FormatError(f"Decrypted audio of {len(data)} bytes is not a whole number of float32 samples")
    return np.frombuffer(data, dtype=SAMPLE_DTYPE).astype(np.float32)


def read_audio(source: PathOrFile) -> AudioSamples:
    """Decode an audio file; only the first channel is kept."""
    try:
        data, rate = sf.read(source, dtype="float32", always_2d=True)
    except (RuntimeError, OSError) as e:
        raise ResourceError(f"Could not read audio: {e}") from e
    return AudioSamples(data[:, 0], rate)


def write_wav(audio: AudioSamples, target: PathOrFile, subtype: str = "PCM_16") -> None:
    clipped = np.clip(audio.samples, -1.0, 1.0)
    try:
        sf.write(target, clipped, audio.sample_rate, subtype=subtype, format="WAV")
    except (RuntimeError, OSError) as e:
        raise ResourceError(f"Could not write audio: {e}") from e
