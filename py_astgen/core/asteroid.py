"""
The generated asteroid as a pipeline value.

``GeneratedAsteroid`` bundles the bands of a growth run with lazily
computed combined rasters. Each step returns a new value, so a run reads
as a chain::

    asteroid = generate(5000, 4, seed=7).smoothen_all(2).blur_gray(1.5)
    asteroid.save_gray("rock.png")

Combined rasters are cached once computed and are never invalidated
automatically; combine_gray()/combine_colored() always rebuild from the
bands.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np
import structlog

from ..io.image_export import PathLike, save_raster
from . import layer_compositor
from .directional_bias import Vector
from .growth_simulator import Band, GrowthSimulationResult, simulate
from .layer_compositor import Hue
from .raster_mask import Norm

logger = structlog.get_logger()


@dataclass(frozen=True, eq=False)
class GeneratedAsteroid:
    """Bands plus cached composites of one generated rock."""

    layers: Tuple[Band, ...]
    layer_size: Tuple[int, int]
    combined_img: Optional[np.ndarray] = None
    colored_img: Optional[np.ndarray] = None

    @classmethod
    def from_result(cls, result: GrowthSimulationResult) -> "GeneratedAsteroid":
        return cls(layers=tuple(result.bands), layer_size=result.size)

    def smoothen_all(self, radius: int, norm: Norm = Norm.LINF) -> "GeneratedAsteroid":
        """Dilate every band mask; cached composites are kept as they are."""
        if self.combined_img is not None or self.colored_img is not None:
            logger.warning("Smoothing after combination; cached composites are stale")
        return replace(
            self, layers=tuple(layer_compositor.smoothen_all(self.layers, radius, norm))
        )

    def combine_gray(self) -> "GeneratedAsteroid":
        return replace(
            self, combined_img=layer_compositor.combine_gray(self.layers, self.layer_size)
        )

    def combine_colored(self, hue: Optional[Hue] = None) -> "GeneratedAsteroid":
        return replace(
            self,
            colored_img=layer_compositor.combine_colored(
                self.layers, self.layer_size, hue
            ),
        )

    def _with_gray(self) -> "GeneratedAsteroid":
        return self if self.combined_img is not None else self.combine_gray()

    def _with_colored(self) -> "GeneratedAsteroid":
        return self if self.colored_img is not None else self.combine_colored()

    def blur_gray(self, sigma: float) -> "GeneratedAsteroid":
        """Blur the grayscale composite, combining first if needed."""
        combined = self._with_gray()
        return replace(
            combined, combined_img=layer_compositor.blur(combined.combined_img, sigma)
        )

    def save_layers(self, base_name: PathLike, cumulative: bool = False) -> "GeneratedAsteroid":
        layer_compositor.export_layers(
            self.layers, self.layer_size, base_name, cumulative=cumulative
        )
        return self

    def save_gray(self, path: PathLike) -> "GeneratedAsteroid":
        combined = self._with_gray()
        save_raster(combined.combined_img, path)
        return combined

    def save_colored(self, path: PathLike) -> "GeneratedAsteroid":
        combined = self._with_colored()
        save_raster(combined.colored_img, path)
        return combined


def generate(
    area: int,
    bands: int = 1,
    axis: Optional[Vector] = None,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> GeneratedAsteroid:
    """
    Grow a new asteroid.

    Args:
        area: Pixel budget
        bands: Number of intensity bands
        axis: Optional growth axis for elongated shapes
        rng: Explicit random source
        seed: Seed used when rng is not given

    Returns:
        GeneratedAsteroid with no composites computed yet
    """
    result = simulate(area, bands, axis, rng=rng, seed=seed)
    return GeneratedAsteroid.from_result(result)
