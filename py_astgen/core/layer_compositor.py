"""
Band compositing.

Turns the band sequence from a growth run into single rasters:

- grayscale+alpha, (h, w, 2) uint8, each band painted with its intensity
- RGBA, (h, w, 4) uint8, a hue scaled by each band's intensity
- one visibility layer per band for export

Bands are painted from last-grown to first-grown, so where smoothing has
made bands overlap the earlier (brighter) band wins. Nothing here
mutates its inputs.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
import structlog
from scipy import ndimage

from ..io.image_export import PathLike, layer_filename, save_raster
from .growth_simulator import Band
from .raster_mask import FILLED, Norm, RasterMask

logger = structlog.get_logger()

OPAQUE = 255
WHITE = (255, 255, 255)

Hue = Tuple[int, int, int]


def smoothen_all(
    bands: Sequence[Band], radius: int, norm: Norm = Norm.LINF
) -> List[Band]:
    """
    Dilate every band mask independently.

    Band disjointness is not restored afterwards; compositing resolves
    the overlap in favour of the earlier band.
    """
    return [Band(band.mask.dilate(radius, norm), band.intensity) for band in bands]


def _painted(bands: Sequence[Band]):
    """Bands in paint order with their boolean pixel selections."""
    for band in reversed(bands):
        yield band, band.mask.nonzero()


def _check_sizes(bands: Sequence[Band], size: Tuple[int, int]) -> None:
    for band in bands:
        if band.mask.size != tuple(size):
            raise ValueError(
                f"Band mask size {band.mask.size} does not match canvas {tuple(size)}"
            )


def combine_gray(bands: Sequence[Band], size: Tuple[int, int]) -> np.ndarray:
    """
    Composite bands into one grayscale+alpha raster.

    Args:
        bands: Bands in growth order
        size: Canvas (width, height)

    Returns:
        (height, width, 2) uint8 array; unfilled pixels are (0, 0)
    """
    _check_sizes(bands, size)
    width, height = size
    gray = np.zeros((height, width, 2), dtype=np.uint8)
    for band, selected in _painted(bands):
        gray[selected] = (band.intensity, OPAQUE)
    return gray


def _validate_hue(hue: Optional[Hue]) -> Hue:
    if hue is None:
        return WHITE
    if len(hue) != 3 or any(not 0 <= int(c) <= 255 for c in hue):
        raise ValueError(f"Hue must be three values in 0-255, got {hue}")
    return tuple(int(c) for c in hue)


def band_color(intensity: int, hue: Hue) -> Hue:
    """Hue scaled by intensity/255, per channel."""
    return tuple(intensity * c // 255 for c in hue)


def combine_colored(
    bands: Sequence[Band], size: Tuple[int, int], hue: Optional[Hue] = None
) -> np.ndarray:
    """
    Composite bands into one RGBA raster.

    Args:
        bands: Bands in growth order
        size: Canvas (width, height)
        hue: Base colour; white when omitted, which reproduces the
            grayscale shading in all three channels

    Returns:
        (height, width, 4) uint8 array; unfilled pixels are transparent black
    """
    _check_sizes(bands, size)
    hue = _validate_hue(hue)
    width, height = size
    colored = np.zeros((height, width, 4), dtype=np.uint8)
    for band, selected in _painted(bands):
        colored[selected] = (*band_color(band.intensity, hue), OPAQUE)
    return colored


def blur(raster: np.ndarray, sigma: float) -> np.ndarray:
    """
    Gaussian blur over the spatial axes of a multi-channel raster.

    Every channel, alpha included, is filtered, so blurred edges fade to
    transparent. Pixels outside the canvas count as zero (transparent)
    rather than repeating the edge pixel, so a band touching the border
    loses some of its weight there. sigma == 0 returns an unchanged copy.
    """
    if sigma < 0:
        raise ValueError(f"Blur sigma must be non-negative, got {sigma}")
    if sigma == 0:
        return raster.copy()

    channel_sigmas = (sigma, sigma) + (0,) * (raster.ndim - 2)
    blurred = ndimage.gaussian_filter(
        raster.astype(np.float64), sigma=channel_sigmas, mode="constant", cval=0.0
    )
    return np.clip(np.rint(blurred), 0, 255).astype(np.uint8)


def layer_raster(mask: RasterMask) -> np.ndarray:
    """Grayscale+alpha visibility raster: filled pixels opaque white, rest transparent."""
    visible = np.where(mask.nonzero(), FILLED, 0).astype(np.uint8)
    return np.stack([visible, visible], axis=-1)


def export_layers(
    bands: Sequence[Band],
    size: Tuple[int, int],
    base_name: PathLike,
    cumulative: bool = False,
) -> List[Path]:
    """
    Write one PNG per band, named base_name + index + ".png".

    Args:
        bands: Bands in growth order
        size: Canvas (width, height)
        base_name: Path prefix
        cumulative: When True each layer also shows every earlier band

    Returns:
        Paths written, in band order
    """
    _check_sizes(bands, size)
    written = []
    shown = RasterMask.empty(*size)
    for index, band in enumerate(bands):
        shown = shown.union(band.mask) if cumulative else band.mask
        written.append(save_raster(layer_raster(shown), layer_filename(base_name, index)))

    logger.info(
        "Layers exported", count=len(written), base_name=str(base_name), cumulative=cumulative
    )
    return written
