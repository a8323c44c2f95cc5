"""
Texture loading and wrapped point sampling.

Textures are decoded once into (H, W, 4) uint8 RGBA arrays. Sampling wraps
toroidally on each axis after scaling, so any integer tile coordinate maps
to a texel. A texture that is absent or fails to decode samples as fully
transparent.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
import structlog
from PIL import Image

logger = structlog.get_logger()

TRANSPARENT = np.zeros(4, dtype=np.uint8)


@dataclass
class Texture:
    """A decoded RGBA source raster."""

    data: np.ndarray  # (H, W, 4) uint8
    path: Optional[str] = None

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]


def load_texture(path: Optional[Union[str, Path]]) -> Optional[Texture]:
    """
    Decode a texture file into RGBA.

    Returns None (and logs a warning) when the path is empty or the file
    cannot be read, so partially textured inputs still render.
    """
    if not path:
        return None
    try:
        with Image.open(path) as img:
            data = np.array(img.convert("RGBA"), dtype=np.uint8)
    except OSError as exc:
        logger.warning("Texture missing, sampling as transparent", path=str(path), error=str(exc))
        return None
    return Texture(data=data, path=str(path))


def sample_wrap(texture: Optional[Texture], u, v, scale: float = 1.0) -> np.ndarray:
    """
    Sample a texture at integer coordinates with wrap-around.

    Each coordinate becomes floor((coord * scale) mod dimension).

    Args:
        texture: Texture to sample, or None for transparent
        u: x coordinate(s)
        v: y coordinate(s), same shape as u
        scale: Coordinate scale factor

    Returns:
        RGBA uint8 array of shape u.shape + (4,)
    """
    u = np.asarray(u, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    if texture is None:
        return np.zeros(u.shape + (4,), dtype=np.uint8)

    w, h = texture.width, texture.height
    cols = np.minimum(np.floor(np.mod(u * scale, w)).astype(np.int64), w - 1)
    rows = np.minimum(np.floor(np.mod(v * scale, h)).astype(np.int64), h - 1)
    return texture.data[rows, cols]


class TextureSampler:
    """Holds the A, B and transition textures for one run."""

    def __init__(
        self,
        a: Optional[Texture] = None,
        b: Optional[Texture] = None,
        transition: Optional[Texture] = None,
    ):
        self.textures = {"A": a, "B": b, "T": transition}

    @classmethod
    def from_paths(cls, a=None, b=None, transition=None) -> "TextureSampler":
        sampler = cls(load_texture(a), load_texture(b), load_texture(transition))
        logger.info("Texture inputs loaded", **sampler.describe())
        return sampler

    @property
    def transition(self) -> Optional[Texture]:
        return self.textures["T"]

    def describe(self) -> dict:
        """Short per-material summary used in logs."""
        summary = {}
        for key, tex in self.textures.items():
            summary[key] = f"{tex.width}x{tex.height}" if tex is not None else "missing"
        return summary

    def sample(self, material: str, u, v, scale: float = 1.0) -> np.ndarray:
        """Sample material "A", "B" or "T"."""
        return sample_wrap(self.textures[material], u, v, scale)
