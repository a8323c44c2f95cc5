"""
Contact sheet assembly.

The 16 tiles are laid out 4 x 4 in row-major order by ascending neighbour
code, so tile k lands at row k // 4, column k % 4.
"""

from typing import Dict, Tuple

import numpy as np
import structlog

from .recipes import NEIGHBOR_CODES

logger = structlog.get_logger()

SHEET_COLS = 4
SHEET_ROWS = 4


def sheet_position(code: int) -> Tuple[int, int]:
    """(row, col) of a neighbour code on the sheet."""
    if code not in NEIGHBOR_CODES:
        raise ValueError(f"Neighbour code out of range: {code}")
    return divmod(code, SHEET_COLS)


def resize_nearest(raster: np.ndarray, width: int, height: int) -> np.ndarray:
    """Nearest-neighbour resize of an (H, W, C) raster."""
    src_h, src_w = raster.shape[:2]
    rows = (np.arange(height) * src_h) // height
    cols = (np.arange(width) * src_w) // width
    return raster[rows[:, None], cols[None, :]]


def _as_rgba(raster: np.ndarray) -> np.ndarray:
    raster = np.asarray(raster, dtype=np.uint8)
    if raster.ndim == 2:
        raster = raster[..., None]
    channels = raster.shape[2]
    if channels == 4:
        return raster
    if channels == 3:
        alpha = np.full(raster.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([raster, alpha], axis=-1)
    if channels == 1:
        alpha = np.full(raster.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([raster, raster, raster, alpha], axis=-1)
    raise ValueError(f"Unsupported channel count: {channels}")


def assemble_sheet(tiles: Dict[int, np.ndarray], tile_size: int) -> np.ndarray:
    """
    Place all 16 tiles on one transparent sheet.

    Tiles whose size differs from tile_size are nearest-neighbour resized
    first; this is logged but does not fail the run.

    Args:
        tiles: Raster per neighbour code
        tile_size: Canonical tile edge length

    Returns:
        (4 * tile_size, 4 * tile_size, 4) uint8 sheet
    """
    sheet = np.zeros((SHEET_ROWS * tile_size, SHEET_COLS * tile_size, 4), dtype=np.uint8)

    for code in NEIGHBOR_CODES:
        raster = _as_rgba(tiles[code])
        if raster.shape[:2] != (tile_size, tile_size):
            logger.warning(
                "Tile size mismatch, resizing",
                code=code,
                got=f"{raster.shape[1]}x{raster.shape[0]}",
                expected=tile_size,
            )
            raster = resize_nearest(raster, tile_size, tile_size)
        row, col = sheet_position(code)
        top, left = row * tile_size, col * tile_size
        sheet[top:top + tile_size, left:left + tile_size] = raster

    return sheet
