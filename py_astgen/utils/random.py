"""
Random number generation utilities.

Growth draws come from a NumPy ``Generator``. Callers that need
reproducible silhouettes either pass their own generator to the
simulator or seed the module-level one here.
"""

from typing import Optional

import numpy as np

# Global generator instance
_rng: Optional[np.random.Generator] = None


def set_random_seed(seed: Optional[int]) -> None:
    """
    Reset the module-level generator.

    Args:
        seed: Integer seed, or None to draw fresh OS entropy
    """
    global _rng
    _rng = np.random.default_rng(seed)


def get_rng() -> np.random.Generator:
    """
    Get the module-level generator, creating an unseeded one on first use.

    Returns:
        numpy Generator instance
    """
    global _rng
    if _rng is None:
        _rng = np.random.default_rng()
    return _rng


def resolve_rng(
    rng: Optional[np.random.Generator] = None, seed: Optional[int] = None
) -> np.random.Generator:
    """Pick the generator for one simulation run.

    An explicit generator wins, then an explicit seed, then the shared one.
    """
    if rng is not None:
        return rng
    if seed is not None:
        return np.random.default_rng(seed)
    return get_rng()
