"""
Core asteroid generation functionality.
"""

from .raster_mask import RasterMask, Norm
from .directional_bias import axial_bias, isotropic_bias, select_bias
from .growth_simulator import Band, GrowthConfig, GrowthSimulator, GrowthSimulationResult, simulate
from .layer_compositor import smoothen_all, combine_gray, combine_colored, blur, export_layers
from .asteroid import GeneratedAsteroid, generate

__all__ = ['RasterMask', 'Norm', 'axial_bias', 'isotropic_bias', 'select_bias',
           'Band', 'GrowthConfig', 'GrowthSimulator', 'GrowthSimulationResult', 'simulate',
           'smoothen_all', 'combine_gray', 'combine_colored', 'blur', 'export_layers',
           'GeneratedAsteroid', 'generate']
