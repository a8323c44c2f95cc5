"""Shared fixtures for autotile tests."""

import numpy as np
import pytest
from PIL import Image

from py_autotile.core.sampler import Texture, TextureSampler

GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
FOAM = (255, 255, 255, 128)


def solid_texture(color, size=64) -> Texture:
    return Texture(np.full((size, size, 4), color, dtype=np.uint8))


@pytest.fixture
def make_texture():
    """Factory for solid-colour textures."""
    return solid_texture


@pytest.fixture
def gradient_texture():
    """64x48 texture where every texel is distinct, for wrap/scale checks."""
    width, height = 64, 48
    ys, xs = np.mgrid[0:height, 0:width]
    data = np.stack(
        [xs * 3 % 256, ys * 5 % 256, (xs + ys) % 256, np.full_like(xs, 255)], axis=-1
    ).astype(np.uint8)
    return Texture(data)


@pytest.fixture
def green_blue_sampler():
    """Opaque green A, opaque blue B, no transition texture."""
    return TextureSampler(solid_texture(GREEN), solid_texture(BLUE))


@pytest.fixture
def foam_sampler():
    """Green A, blue B and a half-transparent white transition."""
    return TextureSampler(solid_texture(GREEN), solid_texture(BLUE), solid_texture(FOAM))


@pytest.fixture
def texture_files(tmp_path):
    """Write A, B and T textures to disk and return their paths."""
    src = tmp_path / "src"
    src.mkdir()
    paths = {}
    for key, color in (("A", GREEN), ("B", BLUE), ("T", FOAM)):
        path = src / f"{key.lower()}.png"
        Image.new("RGBA", (64, 64), color).save(path)
        paths[key] = path
    return paths
