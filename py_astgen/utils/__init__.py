"""
Shared helpers: random source and logging setup.
"""

from .random import set_random_seed, get_rng, resolve_rng
from .logging_config import configure_logging

__all__ = ['set_random_seed', 'get_rng', 'resolve_rng', 'configure_logging']
