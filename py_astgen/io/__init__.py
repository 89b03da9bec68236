"""
Image encoding collaborators.
"""

from .image_export import layer_filename, save_raster, load_raster

__all__ = ['layer_filename', 'save_raster', 'load_raster']
