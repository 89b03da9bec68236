"""
PNG writing for combined rasters and per-band layers.

Arrays come in as uint8 numpy arrays: (h, w, 2) grayscale+alpha or
(h, w, 4) RGBA. Every write failure surfaces as OSError.
"""

from pathlib import Path
from typing import Union

import numpy as np
import structlog
from PIL import Image

logger = structlog.get_logger()

PathLike = Union[str, Path]

_MODES = {2: "LA", 4: "RGBA"}


def layer_filename(base_name: PathLike, index: int) -> str:
    """File name of the index-th layer: base name, index, .png"""
    return f"{base_name}{index}.png"


def save_raster(raster: np.ndarray, path: PathLike) -> Path:
    """
    Encode a grayscale+alpha or RGBA raster to disk.

    Args:
        raster: uint8 array of shape (h, w, 2) or (h, w, 4)
        path: Output file; the format follows the extension

    Returns:
        Path written
    """
    if raster.ndim != 3 or raster.shape[2] not in _MODES:
        raise ValueError(f"Unsupported raster shape {raster.shape}")

    path = Path(path)
    image = Image.fromarray(np.ascontiguousarray(raster, dtype=np.uint8))
    try:
        image.save(path)
    except ValueError as exc:
        # Pillow reports an unknown or missing extension as ValueError
        raise OSError(f"Cannot write {path}: {exc}") from exc
    logger.info("Image saved", path=str(path), mode=image.mode, size=image.size)
    return path


def load_raster(path: PathLike) -> np.ndarray:
    """Read a PNG back as an array, keeping its channel layout."""
    with Image.open(path) as image:
        return np.array(image)
