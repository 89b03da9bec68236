"""
Tests for the GeneratedAsteroid pipeline value.
"""

import pytest
import numpy as np
from py_astgen.core import GeneratedAsteroid, generate
from py_astgen.io.image_export import load_raster


class TestGeneratedAsteroid:
    """Test chained pipeline steps and composite caching."""

    @pytest.fixture
    def asteroid(self):
        """A small four-band rock."""
        return generate(600, 4, seed=123)

    def test_generate(self, asteroid):
        """Test generation yields bands and no composites."""
        assert isinstance(asteroid, GeneratedAsteroid)
        assert 1 <= len(asteroid.layers) <= 4
        assert asteroid.layer_size == (39, 39)
        assert asteroid.combined_img is None
        assert asteroid.colored_img is None

    def test_steps_return_new_values(self, asteroid):
        """Test pipeline steps leave the previous value untouched."""
        combined = asteroid.combine_gray()

        assert combined is not asteroid
        assert asteroid.combined_img is None
        assert combined.combined_img.shape == (39, 39, 2)
        assert combined.layers == asteroid.layers

    def test_combine_gray_rebuilds_from_bands(self, asteroid):
        """Test recombining after a blur discards the blurred raster."""
        plain = asteroid.combine_gray()
        recombined = plain.blur_gray(2.0).combine_gray()

        assert np.array_equal(recombined.combined_img, plain.combined_img)

    def test_blur_combines_when_needed(self, asteroid):
        """Test blur_gray works without an explicit combine."""
        blurred = asteroid.blur_gray(1.0)
        reference = asteroid.combine_gray().blur_gray(1.0)

        assert blurred.combined_img is not None
        assert np.array_equal(blurred.combined_img, reference.combined_img)

    def test_blur_zero_sigma(self, asteroid):
        """Test sigma=0 leaves the composite as combined."""
        combined = asteroid.combine_gray()
        assert np.array_equal(combined.blur_gray(0).combined_img, combined.combined_img)

    def test_blur_leaves_color_alone(self, asteroid):
        """Test blur only touches the grayscale composite."""
        colored = asteroid.combine_colored()
        blurred = colored.blur_gray(2.0)

        assert np.array_equal(blurred.colored_img, colored.colored_img)

    def test_smoothen_grows_layers(self, asteroid):
        """Test smoothing dilates every layer."""
        smoothed = asteroid.smoothen_all(2)

        for before, after in zip(asteroid.layers, smoothed.layers):
            assert after.pixel_count >= before.pixel_count
            assert after.intensity == before.intensity

    def test_smoothen_keeps_cache(self, asteroid):
        """Test cached composites are not invalidated by smoothing."""
        combined = asteroid.combine_gray()
        smoothed = combined.smoothen_all(1)

        assert smoothed.combined_img is combined.combined_img

    def test_save_gray(self, asteroid, tmp_path):
        """Test saving writes the (lazily combined) grayscale composite."""
        path = tmp_path / "gray.png"

        saved = asteroid.save_gray(path)

        assert saved.combined_img is not None
        assert np.array_equal(load_raster(path), saved.combined_img)

    def test_save_colored(self, asteroid, tmp_path):
        """Test saving the colour composite with a custom hue."""
        path = tmp_path / "color.png"

        saved = asteroid.combine_colored((200, 100, 0)).save_colored(path)

        written = load_raster(path)
        assert written.shape == (39, 39, 4)
        assert np.array_equal(written, saved.colored_img)
        assert not written[..., 2].any()

    def test_save_layers(self, asteroid, tmp_path):
        """Test one file per layer is written."""
        asteroid.save_layers(tmp_path / "layer_")

        for index in range(len(asteroid.layers)):
            assert (tmp_path / f"layer_{index}.png").exists()
        assert not (tmp_path / f"layer_{len(asteroid.layers)}.png").exists()
