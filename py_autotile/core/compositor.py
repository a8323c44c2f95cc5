"""Pixel compositing for coast16 tiles."""

import numpy as np

from .classifier import PixelClassification
from .sampler import TextureSampler


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def over(bg: np.ndarray, fg: np.ndarray) -> np.ndarray:
    """
    Straight-alpha "over" compositing of fg onto bg.

    outA = fa + ba * (1 - fa)
    outRGB = (fg * fa + bg * ba * (1 - fa)) / outA
    Fully transparent results are (0, 0, 0, 0).

    Args:
        bg: (..., 4) uint8 background
        fg: (..., 4) uint8 foreground

    Returns:
        (..., 4) uint8 composite
    """
    bg = np.asarray(bg, dtype=np.float64)
    fg = np.asarray(fg, dtype=np.float64)
    ba = bg[..., 3:4] / 255
    fa = fg[..., 3:4] / 255
    out_a = fa + ba * (1 - fa)

    with np.errstate(divide="ignore", invalid="ignore"):
        rgb = (fg[..., :3] * fa + bg[..., :3] * ba * (1 - fa)) / out_a

    out = np.concatenate([_round_half_up(rgb), _round_half_up(out_a * 255)], axis=-1)
    out = np.where(out_a > 0, out, 0.0)
    return np.clip(out, 0, 255).astype(np.uint8)


def _pixel_grid(tile_size: int):
    ys, xs = np.mgrid[0:tile_size, 0:tile_size]
    return xs, ys


def fill_tile(side: str, sampler: TextureSampler, tile_size: int, texture_scale: float = 1.0) -> np.ndarray:
    """Render a tile that is entirely material A or B, with no band."""
    xs, ys = _pixel_grid(tile_size)
    return sampler.sample(side, xs, ys, texture_scale).astype(np.uint8)


def composite_tile(
    classification: PixelClassification,
    sampler: TextureSampler,
    texture_scale: float = 1.0,
    transition_mode: str = "texture",
) -> np.ndarray:
    """
    Render a classified tile.

    Each pixel takes material A or B by its side. Band pixels additionally
    get the transition texture composited over them when one is loaded;
    otherwise they keep their side's material, giving a hard edge.

    Returns:
        (N, N, 4) uint8 straight-alpha RGBA
    """
    tile_size = classification.is_a.shape[0]
    xs, ys = _pixel_grid(tile_size)
    a = sampler.sample("A", xs, ys, texture_scale)
    b = sampler.sample("B", xs, ys, texture_scale)
    out = np.where(classification.is_a[..., None], a, b)

    if transition_mode == "texture" and sampler.transition is not None:
        t = sampler.sample("T", xs, ys, texture_scale)
        blended = over(out, t)
        out = np.where(classification.in_band[..., None], blended, out)

    return out.astype(np.uint8)
