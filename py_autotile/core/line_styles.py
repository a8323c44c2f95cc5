"""
Line style modulation for coast16 boundaries.

Each base segment is walked at roughly one sample per pixel of length and
displaced along its normal. Displacements are tapered by sin(pi * t) and are
exactly zero at both segment ends, so styled boundaries still meet the
neighbouring tiles at the shared endpoints.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..utils.hashing import lcg_sign


@dataclass(frozen=True)
class LineStyleParams:
    """Shape parameters for a line style."""

    amplitude: float = 1.5
    wavelength: float = 8.0
    jitter: float = 1.0
    stair_step: int = 1


def default_style_params(style: str) -> LineStyleParams:
    """Default parameters for each line style."""
    if style == "wavy_smooth":
        return LineStyleParams(amplitude=1.5, wavelength=8.0)
    if style == "zigzag":
        return LineStyleParams(amplitude=2.0, wavelength=8.0)
    if style == "craggy":
        return LineStyleParams(jitter=1.0, stair_step=1)
    return LineStyleParams()


def _taper(t: float) -> float:
    if t <= 0.0 or t >= 1.0:
        return 0.0
    return math.sin(math.pi * t)


def style_offset(style: str, t: float, seg_len: float, params: LineStyleParams) -> float:
    """
    Untapered normal offset at parameter t along a segment.

    Args:
        style: Line style name
        t: Segment parameter in [0, 1]
        seg_len: Segment length in pixels
        params: Style parameters

    Returns:
        Offset in pixels along the segment's left normal
    """
    wavelength = max(1.0, params.wavelength)
    dist = t * seg_len
    if style == "wavy_smooth":
        return params.amplitude * math.sin(dist / wavelength * 2 * math.pi)
    if style == "zigzag":
        # Triangle wave in [-1, 1]
        tri = 2 * abs((dist / wavelength) % 1 - 0.5) - 0.5
        return params.amplitude * tri * 2
    if style == "craggy":
        k = math.floor(dist / max(1.0, wavelength / 2))
        return lcg_sign(k) * params.jitter
    if style == "straight_line":
        return 0.0
    raise ValueError(f"Unknown line style: {style}")


def modulate_polyline(
    base: np.ndarray, style: str, params: Optional[LineStyleParams] = None
) -> np.ndarray:
    """
    Reshape a base polyline according to a line style.

    The result is a new, densified polyline. The base is never modified and
    straight_line returns a copy of it.

    Args:
        base: (K, 2) base polyline
        style: One of straight_line, wavy_smooth, craggy, zigzag
        params: Style parameters, defaults from default_style_params

    Returns:
        (M, 2) styled polyline with the same first and last point as base
    """
    if style == "straight_line":
        return np.array(base, dtype=np.float64, copy=True)
    if params is None:
        params = default_style_params(style)
    step = max(1, int(round(params.stair_step)))

    out = []
    for si in range(len(base) - 1):
        x0, y0 = float(base[si][0]), float(base[si][1])
        x1, y1 = float(base[si + 1][0]), float(base[si + 1][1])
        dx, dy = x1 - x0, y1 - y0
        seg_len = math.hypot(dx, dy) or 1.0
        ux, uy = dx / seg_len, dy / seg_len
        # Left-of-direction normal in screen coordinates (y down)
        nx, ny = uy, -ux
        samples = max(2, math.ceil(seg_len))

        for i in range(samples + 1):
            if i == 0:
                x, y = x0, y0
            elif i == samples:
                x, y = x1, y1
            else:
                t = i / samples
                off = style_offset(style, t, seg_len, params) * _taper(t)
                x = x0 + dx * t + nx * off
                y = y0 + dy * t + ny * off
                if step > 1 and style == "craggy":
                    x = math.floor(x / step + 0.5) * step
                    y = math.floor(y / step + 0.5) * step
            if not out or out[-1] != (x, y):
                out.append((x, y))

    return np.array(out, dtype=np.float64)
