"""Tests for texture loading and wrapped sampling."""

import numpy as np
import pytest
from PIL import Image

from py_autotile.core.sampler import TextureSampler, load_texture, sample_wrap

GREEN = (0, 255, 0, 255)


class TestSampleWrap:
    """Wrapped point sampling."""

    @pytest.fixture
    def texture(self, gradient_texture):
        return gradient_texture

    def test_in_range(self, texture):
        np.testing.assert_array_equal(sample_wrap(texture, 5, 7), texture.data[7, 5])

    def test_wraps_both_axes(self, texture):
        np.testing.assert_array_equal(sample_wrap(texture, 70, 50), texture.data[2, 6])
        np.testing.assert_array_equal(sample_wrap(texture, -1, -1), texture.data[47, 63])

    def test_scale(self, texture):
        np.testing.assert_array_equal(sample_wrap(texture, 40, 3, scale=2.0), texture.data[6, 16])
        np.testing.assert_array_equal(sample_wrap(texture, 5, 5, scale=0.5), texture.data[2, 2])

    def test_vectorised_shape(self, texture):
        ys, xs = np.mgrid[0:8, 0:8]
        assert sample_wrap(texture, xs, ys).shape == (8, 8, 4)

    def test_missing_texture_is_transparent(self):
        out = sample_wrap(None, np.arange(4), np.arange(4))
        assert out.shape == (4, 4)
        assert not out.any()


class TestLoadTexture:
    """Decoding texture files."""

    def test_loads_rgba(self, tmp_path):
        path = tmp_path / "rgb.png"
        Image.new("RGB", (8, 4), (10, 20, 30)).save(path)
        texture = load_texture(path)
        assert texture.width == 8
        assert texture.height == 4
        np.testing.assert_array_equal(texture.data[0, 0], [10, 20, 30, 255])

    def test_missing_file_returns_none(self, tmp_path):
        assert load_texture(tmp_path / "nope.png") is None

    def test_undecodable_file_returns_none(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        assert load_texture(path) is None

    def test_empty_path_returns_none(self):
        assert load_texture(None) is None
        assert load_texture("") is None


class TestTextureSampler:
    """Per-material sampling."""

    def test_from_paths_with_missing_inputs(self, texture_files, tmp_path):
        sampler = TextureSampler.from_paths(texture_files["A"], tmp_path / "missing.png")
        assert sampler.describe() == {"A": "64x64", "B": "missing", "T": "missing"}
        assert sampler.transition is None
        assert not sampler.sample("B", 3, 3).any()

    def test_sample_material(self, make_texture):
        sampler = TextureSampler(make_texture(GREEN))
        np.testing.assert_array_equal(sampler.sample("A", 100, 100), GREEN)
