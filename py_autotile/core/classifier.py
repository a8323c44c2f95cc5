"""
Signed-distance classification of tile pixels.

Every boundary is carried as two polylines: the base (unmodulated) one and
the styled one. Pixels are measured against the styled polyline, but which
side counts as material A is decided once per line by the probe point
measured against the base polyline. Changing the line style therefore never
changes which regions are A and B.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import GeometryInvariantViolation
from .line_styles import LineStyleParams, modulate_polyline
from .polyline import build_base_polyline

MATERIAL_A = 0
MATERIAL_B = 1
MATERIAL_BAND = 2


@dataclass(frozen=True)
class BoundaryLine:
    """A boundary with its base and styled polylines kept apart."""

    base: np.ndarray
    styled: np.ndarray
    reference_positive: bool  # probe side against the base polyline


@dataclass
class PixelClassification:
    """Per-pixel material side and band membership for one tile."""

    is_a: np.ndarray  # (N, N) bool, defined for band pixels too
    in_band: np.ndarray  # (N, N) bool

    @property
    def material(self) -> np.ndarray:
        """Tri-state view: MATERIAL_A, MATERIAL_B or MATERIAL_BAND."""
        side = np.where(self.is_a, MATERIAL_A, MATERIAL_B)
        return np.where(self.in_band, MATERIAL_BAND, side).astype(np.uint8)


def _segment_normals(poly: np.ndarray) -> np.ndarray:
    """Unit left normals (-vy, vx) of each segment; zero for degenerate ones."""
    v = poly[1:] - poly[:-1]
    lengths = np.hypot(v[:, 0], v[:, 1])
    lengths[lengths == 0] = np.inf
    return np.column_stack([-v[:, 1], v[:, 0]]) / lengths[:, None]


def signed_distance(points, polyline: np.ndarray) -> np.ndarray:
    """
    Signed distance from points to a polyline.

    The magnitude is the distance to the nearest segment. When the closest
    point lies inside a segment, the sign is the sign of the cross product
    between the segment's direction and the vector from the closest point
    to the query point. When it is an interior vertex, the sign comes from
    the vertex pseudo-normal (the sum of both neighbouring segment normals),
    so it does not depend on which of the two segments won the distance
    tie. Zero counts as positive.

    Args:
        points: (P, 2) query points
        polyline: (K, 2) polyline with K >= 2

    Returns:
        (P,) signed distances
    """
    poly = np.asarray(polyline, dtype=np.float64)
    if len(poly) < 2:
        raise GeometryInvariantViolation(f"polyline needs at least 2 points, got {len(poly)}")

    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    px, py = pts[:, 0], pts[:, 1]
    min_d2 = np.full(len(pts), np.inf)
    sign = np.ones(len(pts))
    best_seg = np.zeros(len(pts), dtype=np.int64)
    best_t = np.zeros(len(pts))

    for i in range(len(poly) - 1):
        ax, ay = poly[i]
        bx, by = poly[i + 1]
        vx, vy = bx - ax, by - ay
        l2 = vx * vx + vy * vy or 1.0
        t = np.clip(((px - ax) * vx + (py - ay) * vy) / l2, 0.0, 1.0)
        qx = ax + vx * t
        qy = ay + vy * t
        dx = px - qx
        dy = py - qy
        d2 = dx * dx + dy * dy

        closer = d2 < min_d2
        cross = vx * dy - vy * dx
        min_d2 = np.where(closer, d2, min_d2)
        sign = np.where(closer, np.where(cross < 0, -1.0, 1.0), sign)
        best_seg = np.where(closer, i, best_seg)
        best_t = np.where(closer, t, best_t)

    last_seg = len(poly) - 2
    at_start = (best_t <= 0.0) & (best_seg > 0)
    at_end = (best_t >= 1.0) & (best_seg < last_seg)
    at_vertex = at_start | at_end
    if at_vertex.any():
        normals = _segment_normals(poly)
        vertex = np.where(at_start, best_seg, best_seg + 1)[at_vertex]
        pseudo = normals[vertex - 1] + normals[vertex]
        offset = pts[at_vertex] - poly[vertex]
        dot = offset[:, 0] * pseudo[:, 0] + offset[:, 1] * pseudo[:, 1]
        usable = np.any(pseudo != 0, axis=1)
        sign[at_vertex] = np.where(usable, np.where(dot < 0, -1.0, 1.0), sign[at_vertex])

    return sign * np.sqrt(min_d2)


def signed_distance_at(point: Tuple[float, float], polyline: np.ndarray) -> float:
    """Signed distance for a single point."""
    return float(signed_distance([point], polyline)[0])


def build_boundary_lines(
    recipe,
    tile_size: int,
    params: Optional[LineStyleParams] = None,
) -> Tuple[BoundaryLine, ...]:
    """
    Build base and styled polylines for every boundary of a recipe.

    The reference side is taken from each line's probe against its base
    polyline and never recomputed against the styled one.
    """
    lines = []
    for sub in recipe.sublines:
        base = build_base_polyline(tile_size, sub.start, sub.end, sub.corner_policy)
        styled = modulate_polyline(base, recipe.line_style, params)
        reference_positive = bool(signed_distance_at(sub.probe, base) >= 0)
        lines.append(BoundaryLine(base, styled, reference_positive))
    return tuple(lines)


def _combine(matches: Sequence[np.ndarray], combiner: Optional[str]) -> np.ndarray:
    if len(matches) == 1:
        return matches[0]
    if len(matches) != 2:
        raise ValueError(f"Expected 1 or 2 boundary lines, got {len(matches)}")
    if combiner == "equal":
        return matches[0] == matches[1]
    if combiner == "xor":
        return matches[0] != matches[1]
    raise ValueError(f"Unknown combiner: {combiner}")


def classify_tile(
    lines: Sequence[BoundaryLine],
    tile_size: int,
    band_width: float,
    combiner: Optional[str] = None,
) -> PixelClassification:
    """
    Classify every pixel centre of a tile.

    Args:
        lines: One boundary, or two for the diagonal-pair tiles
        tile_size: Tile edge length N
        band_width: Full band width in pixels; a pixel is in the band when
            any boundary lies within band_width / 2 of its centre
        combiner: "equal" or "xor" when two lines are given

    Returns:
        PixelClassification with (N, N) arrays
    """
    ys, xs = np.mgrid[0:tile_size, 0:tile_size]
    centers = np.column_stack([xs.ravel() + 0.5, ys.ravel() + 0.5])
    half = band_width / 2

    matches = []
    bands = []
    for line in lines:
        sd = signed_distance(centers, line.styled)
        matches.append((sd >= 0) == line.reference_positive)
        bands.append(np.abs(sd) <= half)

    is_a = _combine(matches, combiner)
    in_band = np.logical_or.reduce(bands)
    shape = (tile_size, tile_size)
    return PixelClassification(is_a.reshape(shape), in_band.reshape(shape))


def classify_point(recipe, tile_size: int, x: float, y: float) -> str:
    """
    Material ("A" or "B") at a point, judged against the base geometry.

    Fill recipes return their fill material without any geometry.
    """
    if recipe.fill is not None:
        return recipe.fill
    lines = build_boundary_lines(recipe, tile_size)
    matches = [
        np.array([(signed_distance_at((x, y), line.base) >= 0) == line.reference_positive])
        for line in lines
    ]
    combiner = recipe.multi.combiner if recipe.multi is not None else None
    return "A" if bool(_combine(matches, combiner)[0]) else "B"


def on_boundary(recipe, tile_size: int, x: float, y: float, tol: float = 1e-9) -> bool:
    """True when a point lies on any base boundary of the recipe."""
    if recipe.fill is not None:
        return False
    for sub in recipe.sublines:
        base = build_base_polyline(tile_size, sub.start, sub.end, sub.corner_policy)
        if abs(signed_distance_at((x, y), base)) <= tol:
            return True
    return False
