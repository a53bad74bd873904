from __future__ import annotations

import io
import math
import os
from typing import BinaryIO, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .config import BYTES_PER_PIXEL, OPAQUE_ALPHA
from .errors import InputError, ResourceError


PathOrFile = Union[str, "os.PathLike[str]", BinaryIO]


def grid_dimensions(payload_length: int) -> Tuple[int, int]:
    """Return (width, height) of the smallest roughly square grid holding the payload."""
    required = max(1, -(-payload_length // BYTES_PER_PIXEL))
    width = math.isqrt(required - 1) + 1  # ceil(sqrt(required))
    height = -(-required // width)
    return width, height


def pack(payload: bytes) -> np.ndarray:
    """Lay payload bytes into R, G, B of each pixel, row-major, alpha 255.

    Returns a uint8 array shaped (height, width, 4). Unused subpixels are zero.
    """
    width, height = grid_dimensions(len(payload))
    flat = np.zeros(width * height * BYTES_PER_PIXEL, dtype=np.uint8)
    flat[:len(payload)] = np.frombuffer(bytes(payload), dtype=np.uint8)
    grid = np.full((height, width, 4), OPAQUE_ALPHA, dtype=np.uint8)
    grid[:, :, :BYTES_PER_PIXEL] = flat.reshape(height, width, BYTES_PER_PIXEL)
    return grid


def unpack(grid: np.ndarray) -> bytes:
    """Read R, G, B of every pixel back in packing order, ignoring alpha."""
    arr = np.asarray(grid)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise InputError(f"Expected an RGB or RGBA pixel grid, got shape {arr.shape}")
    if arr.dtype != np.uint8:
        raise InputError(f"Expected uint8 pixels, got {arr.dtype}")
    return np.ascontiguousarray(arr[:, :, :BYTES_PER_PIXEL]).tobytes()


def save_png(grid: np.ndarray, target: PathOrFile) -> None:
    """Write the grid as a lossless RGBA PNG."""
    img = Image.fromarray(np.ascontiguousarray(grid, dtype=np.uint8))
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    try:
        img.save(target, format="PNG")
    except OSError as e:
        raise ResourceError(f"Could not write image: {e}") from e


def png_bytes(grid: np.ndarray) -> bytes:
    buf = io.BytesIO()
    save_png(grid, buf)
    return buf.getvalue()


def load_png(source: PathOrFile) -> np.ndarray:
    """Load an image file into an RGBA uint8 grid.

    Any Pillow-readable mode is converted to RGBA; only lossless formats can
    carry a payload intact.
    """
    try:
        with Image.open(source) as img:
            return np.array(img.convert("RGBA"), dtype=np.uint8)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ResourceError(f"Could not read image: {e}") from e
