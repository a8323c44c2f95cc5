"""
Boundary geometry for coast16 tiles.

Endpoints are always an edge midpoint or a tile corner, in tile-local
coordinates [0, N-1]. Because neighbouring tiles share those exact points,
boundaries drawn through them connect across tile seams.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import GeometryInvariantViolation

EDGES = ("N", "E", "S", "W")
CORNERS = ("NW", "NE", "SE", "SW")

# Fraction of the way toward the tile centre for rounded control points
ROUNDED_CONTROL_T = 0.6


@dataclass(frozen=True)
class Endpoint:
    """A boundary endpoint: an edge midpoint or a tile corner."""

    kind: str  # "edge_mid" or "corner"
    where: str  # N/E/S/W for edge_mid, NW/NE/SE/SW for corner

    def __post_init__(self):
        if self.kind == "edge_mid" and self.where not in EDGES:
            raise ValueError(f"Unknown edge: {self.where}")
        if self.kind == "corner" and self.where not in CORNERS:
            raise ValueError(f"Unknown corner: {self.where}")
        if self.kind not in ("edge_mid", "corner"):
            raise ValueError(f"Unknown endpoint kind: {self.kind}")


def edge_mid(edge: str) -> Endpoint:
    return Endpoint("edge_mid", edge)


def corner(name: str) -> Endpoint:
    return Endpoint("corner", name)


def tile_center(tile_size: int) -> Tuple[float, float]:
    m = (tile_size - 1) / 2
    return (m, m)


def endpoint_point(tile_size: int, endpoint: Endpoint) -> Tuple[float, float]:
    """Resolve an endpoint to tile-local coordinates."""
    last = tile_size - 1
    m = last / 2
    if endpoint.kind == "edge_mid":
        return {
            "N": (m, 0.0),
            "S": (m, float(last)),
            "W": (0.0, m),
            "E": (float(last), m),
        }[endpoint.where]
    return {
        "NW": (0.0, 0.0),
        "NE": (float(last), 0.0),
        "SE": (float(last), float(last)),
        "SW": (0.0, float(last)),
    }[endpoint.where]


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def build_base_polyline(
    tile_size: int, start: Endpoint, end: Endpoint, policy: str = "beveled"
) -> np.ndarray:
    """
    Build the unmodulated boundary between two endpoints.

    Endpoints sharing an axis coordinate give a straight 2-point run.
    Perpendicular edges (the wedge case) route through the tile centre:
    3 points when beveled, 5 points when rounded.

    Args:
        tile_size: Tile edge length N
        start: First endpoint
        end: Second endpoint
        policy: "rounded" or "beveled"

    Returns:
        (K, 2) float array starting exactly at start and ending exactly at end
    """
    a = endpoint_point(tile_size, start)
    b = endpoint_point(tile_size, end)
    if a == b:
        raise GeometryInvariantViolation(
            f"endpoints {start.where} and {end.where} collapse to one point {a}"
        )

    if a[0] == b[0] or a[1] == b[1]:
        return np.array([a, b], dtype=np.float64)

    c = tile_center(tile_size)
    if policy == "rounded":
        mid1 = (lerp(a[0], c[0], ROUNDED_CONTROL_T), lerp(a[1], c[1], ROUNDED_CONTROL_T))
        mid2 = (lerp(c[0], b[0], ROUNDED_CONTROL_T), lerp(c[1], b[1], ROUNDED_CONTROL_T))
        return np.array([a, mid1, c, mid2, b], dtype=np.float64)
    return np.array([a, c, b], dtype=np.float64)


def distinct_point_count(polyline: np.ndarray) -> int:
    return len(np.unique(polyline, axis=0))
