import base64
from typing import Optional

import numpy as np
from django.conf import settings

from kyc.core.frames import PixelBuffer

_RGB = np.arange(3, dtype=np.int64)


def _max_bytes() -> int:
    return getattr(settings, "CHECKID_SCAN", {}).get("MAX_IMAGE_BYTES", 10 * 1024 * 1024)


def decode_pixel_buffer(*, pixels_base64: str, width: int, height: int,
                        bytes_per_row: Optional[int] = None, bytes_per_pixel: int = 4) -> PixelBuffer:
    """
    Buffer brut (RGBA/BGRA entrelacé) encodé en base64 -> PixelBuffer.
    Dimensions nulles acceptées (l'analyseur renvoie Poor) ; négatives refusées.
    """
    if min(width, height, bytes_per_pixel, bytes_per_row if bytes_per_row is not None else 0) < 0:
        raise ValueError("INVALID_IMAGE_GEOMETRY")
    try:
        data = base64.b64decode(pixels_base64 or "", validate=True)
    except Exception:
        raise ValueError("INVALID_IMAGE_BASE64")
    if len(data) > _max_bytes():
        raise ValueError("INVALID_IMAGE_SIZE")
    if bytes_per_row is None:
        bytes_per_row = width * bytes_per_pixel
    return PixelBuffer(
        width=width,
        height=height,
        bytes_per_row=bytes_per_row,
        bytes_per_pixel=bytes_per_pixel,
        data=data,
    )


def is_degenerate(buf: PixelBuffer) -> bool:
    return (buf.width <= 0 or buf.height <= 0 or buf.bytes_per_row <= 0
            or buf.bytes_per_pixel <= 0 or not buf.data)


def pixel_array(buf: PixelBuffer) -> np.ndarray:
    """Vue uint8 (sans copie) sur les octets du buffer."""
    return np.frombuffer(buf.data or b"", dtype=np.uint8)


def grid_offsets(buf: PixelBuffer, step: int, start: int = 0, margin: int = 0) -> np.ndarray:
    """Offsets octet des pixels échantillonnés (lignes puis colonnes, pas `step`)."""
    ys = np.arange(start, buf.height - margin, step, dtype=np.int64)
    xs = np.arange(start, buf.width - margin, step, dtype=np.int64)
    return (ys[:, None] * buf.bytes_per_row + xs[None, :] * buf.bytes_per_pixel).ravel()


def in_bounds(offsets: np.ndarray, total: int) -> np.ndarray:
    # les trois octets R, G, B doivent être lisibles
    return (offsets >= 0) & (offsets + 2 < total)


def gather_rgb(arr: np.ndarray, offsets: np.ndarray) -> np.ndarray:
    """(n, 3) float64 ; offsets supposés déjà filtrés par in_bounds."""
    return arr[offsets[:, None] + _RGB].astype(np.float64)


def sample_rgb(buf: PixelBuffer, step: int, *, total: Optional[int] = None) -> np.ndarray:
    arr = pixel_array(buf)
    limit = arr.size if total is None else min(arr.size, total)
    offsets = grid_offsets(buf, step)
    return gather_rgb(arr, offsets[in_bounds(offsets, limit)])
