"""
Stochastic region growth for rock/asteroid silhouettes.

Growth starts from a single pixel in the middle of a square canvas and
repeatedly accepts a random pixel from a frontier of candidates. Each
accepted pixel proposes its unfilled 8-neighbours, each one queued with
a probability given by the directional bias. The accepted pixels are
split into bands by acceptance order; earlier bands get brighter
intensities.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import structlog

from ..utils.random import resolve_rng
from .directional_bias import Vector, select_bias
from .raster_mask import RasterMask

logger = structlog.get_logger()

CANVAS_MARGIN = 2.5
MAX_INTENSITY = 255

NEIGHBOR_OFFSETS = [
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
]


def canvas_side(area: int) -> int:
    """Side length of the square canvas for a pixel budget."""
    return math.ceil(math.sqrt(CANVAS_MARGIN * area))


def band_intensity(band_index: int, band_count: int) -> int:
    """Shading of the band closed as the band_index-th (0-based) one."""
    return max(0, MAX_INTENSITY - band_index * (MAX_INTENSITY // band_count))


@dataclass(frozen=True)
class Band:
    """Pixels accepted during one growth epoch plus their shading."""

    mask: RasterMask
    intensity: int

    @property
    def pixel_count(self) -> int:
        return self.mask.count()


@dataclass
class GrowthConfig:
    """Inputs of one growth run."""

    area: int
    band_count: int = 1
    axis: Optional[Vector] = None

    def __post_init__(self):
        if self.area < 1:
            raise ValueError(f"area must be at least 1, got {self.area}")
        if self.band_count < 1:
            raise ValueError(f"band_count must be at least 1, got {self.band_count}")

    @property
    def side(self) -> int:
        return canvas_side(self.area)


@dataclass
class GrowthSimulationResult:
    """Ordered bands (oldest first) and the canvas they live on."""

    bands: List[Band]
    size: Tuple[int, int]
    requested_area: int
    accepted: int = 0
    band_count: int = 1

    @property
    def truncated(self) -> bool:
        """True when growth stopped before accepting the requested area."""
        return self.accepted < self.requested_area

    @property
    def intensities(self) -> List[int]:
        return [band.intensity for band in self.bands]

    def filled_mask(self) -> RasterMask:
        """Union of all band masks."""
        combined = RasterMask.empty(*self.size)
        for band in self.bands:
            combined = combined.union(band.mask)
        return combined


class GrowthSimulator:
    """
    Runs the frontier-driven flood fill.

    The frontier is a plain list used as a bag: entries are drawn at a
    uniform random index and swap-removed. It may hold duplicates and
    cells filled after they were queued; those are discarded on draw.
    """

    def __init__(self, config: GrowthConfig, rng: Optional[np.random.Generator] = None):
        """
        Initialize the simulator.

        Args:
            config: Area, band count and optional growth axis
            rng: Random source; defaults to the module-level generator
        """
        self.config = config
        self.rng = resolve_rng(rng)
        self.side = config.side
        self.center = (self.side / 2.0, self.side / 2.0)
        self.bias, self.axis = select_bias(config.axis)

        self.canvas = RasterMask.empty(self.side, self.side)
        self.frontier: List[Tuple[int, int]] = []
        self.accepted = 0

    def _draw_unfilled(self) -> Optional[Tuple[int, int]]:
        """Pop random frontier entries until an unfilled one turns up."""
        frontier = self.frontier
        while frontier:
            idx = int(self.rng.integers(len(frontier)))
            cell = frontier[idx]
            frontier[idx] = frontier[-1]
            frontier.pop()
            if not self.canvas.is_filled(*cell):
                return cell
        return None

    def _propose_neighbors(self, x: int, y: int) -> None:
        """Queue unfilled neighbours of an accepted pixel, subject to the bias."""
        radial = (x - self.center[0], y - self.center[1])
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if not (0 <= nx < self.side and 0 <= ny < self.side):
                continue
            if self.canvas.is_filled(nx, ny):
                continue
            r = self.rng.random()
            if r < self.bias(radial, self.axis):
                self.frontier.append((nx, ny))

    def simulate(self) -> GrowthSimulationResult:
        """
        Grow the silhouette.

        Returns:
            GrowthSimulationResult with at most band_count bands whose
            masks are pairwise disjoint and hold at most area pixels in total
        """
        area = self.config.area
        band_count = self.config.band_count
        step = area // band_count

        logger.info(
            "Starting growth",
            area=area,
            band_count=band_count,
            axis=self.config.axis,
            side=self.side,
        )

        bands: List[Band] = []
        band_index = 0
        band_mask = RasterMask.empty(self.side, self.side)
        intensity = MAX_INTENSITY
        next_band = step

        self.frontier.append((self.side // 2, self.side // 2))

        for _ in range(area):
            cell = self._draw_unfilled()
            if cell is None:
                break
            x, y = cell

            self.canvas.fill(x, y)
            band_mask.fill(x, y)
            self.accepted += 1

            boundary_passed = self.accepted > next_band
            if boundary_passed:
                next_band += step
                if next_band > area:
                    break

            # The last band absorbs the area % band_count remainder
            if boundary_passed and band_index + 1 < band_count:
                bands.append(Band(band_mask, intensity))
                logger.debug(
                    "Band closed",
                    band=band_index,
                    intensity=intensity,
                    pixels=band_mask.count(),
                )
                band_index += 1
                band_mask = RasterMask.empty(self.side, self.side)
                intensity = band_intensity(band_index, band_count)

            self._propose_neighbors(x, y)

        bands.append(Band(band_mask, intensity))

        if self.accepted < area:
            logger.warning(
                "Growth ended early", requested=area, accepted=self.accepted
            )
        logger.info("Growth completed", accepted=self.accepted, bands=len(bands))

        self.frontier.clear()
        return GrowthSimulationResult(
            bands=bands,
            size=(self.side, self.side),
            requested_area=area,
            accepted=self.accepted,
            band_count=band_count,
        )


def simulate(
    area: int,
    band_count: int = 1,
    axis: Optional[Vector] = None,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> GrowthSimulationResult:
    """
    Run one growth simulation.

    Args:
        area: Pixel budget (>= 1)
        band_count: Number of intensity bands (>= 1)
        axis: Optional growth axis; normalized internally
        rng: Explicit random source
        seed: Seed for a fresh generator when rng is not given

    Returns:
        GrowthSimulationResult
    """
    config = GrowthConfig(area=area, band_count=band_count, axis=axis)
    return GrowthSimulator(config, rng=resolve_rng(rng, seed)).simulate()
