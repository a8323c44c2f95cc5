"""
Static recipe table for the 16 coast16 tiles.

A neighbour code is a 4-bit mask of which diagonal neighbours share the
centre tile's material: NW=8, NE=4, SE=2, SW=1. Every code maps to exactly
one recipe describing the boundary endpoints, corner routing and the probe
point that is known to lie in material A.

Layout summary (A region per code):
    0  top            1  bottom         2  left           3  right
    4  NW wedge       5  NE wedge       6  SE wedge       7  SW wedge
    8  all but NW     9  all but NE     10 all but SE     11 all but SW
    12 NW + SE        13 NE + SW        14 all A          15 all B
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .classifier import signed_distance_at
from .errors import GeometryInvariantViolation
from .polyline import Endpoint, build_base_polyline, distinct_point_count, edge_mid
from .settings import corner_policy_for

NEIGHBOR_CODES = tuple(range(16))

BIT_NW = 0b1000
BIT_NE = 0b0100
BIT_SE = 0b0010
BIT_SW = 0b0001

FILL_A_CODE = 14
FILL_B_CODE = 15

Point = Tuple[float, float]


@dataclass(frozen=True)
class SubLine:
    """One split of a multi-line recipe with its own A-side probe."""

    start: Endpoint
    end: Endpoint
    probe: Point
    corner_policy: str = "beveled"


@dataclass(frozen=True)
class MultiSplit:
    """Two independent splits combined per pixel."""

    lines: Tuple[SubLine, SubLine]
    combiner: str  # "equal" or "xor"


@dataclass(frozen=True)
class TileRecipe:
    """Immutable description of how one coast16 tile is drawn."""

    code: int
    name: str
    start: Endpoint
    end: Endpoint
    probe: Point
    corner_policy: str = "beveled"
    line_style: str = "straight_line"
    fill: Optional[str] = None  # "A" or "B"
    multi: Optional[MultiSplit] = None

    @property
    def sublines(self) -> Tuple[SubLine, ...]:
        """Boundary lines to classify against (empty for fill tiles)."""
        if self.fill is not None:
            return ()
        if self.multi is not None:
            return self.multi.lines
        return (SubLine(self.start, self.end, self.probe, self.corner_policy),)


def mask_name(code: int) -> str:
    """Tile name for a neighbour code, e.g. 5 -> 'mask_0101'."""
    return f"mask_{code:04b}"


def corner_bits(code: int) -> dict:
    """Decode a neighbour code into its four corner flags."""
    return {
        "NW": bool(code & BIT_NW),
        "NE": bool(code & BIT_NE),
        "SE": bool(code & BIT_SE),
        "SW": bool(code & BIT_SW),
    }


def recipe_for_code(
    code: int,
    tile_size: int,
    line_style: str = "straight_line",
    corner_style: str = "stepped",
) -> TileRecipe:
    """
    Look up the recipe for a neighbour code.

    Args:
        code: Neighbour code in 0..15
        tile_size: Tile edge length N
        line_style: Style applied to every boundary of the tile
        corner_style: "quarter" selects rounded wedge routing, anything else beveled

    Returns:
        TileRecipe for the code
    """
    if code not in NEIGHBOR_CODES:
        raise ValueError(f"Neighbour code out of range: {code}")

    n = tile_size
    m = (n - 1) / 2
    wedge = corner_policy_for(corner_style)
    name = mask_name(code)
    W, N, E, S = edge_mid("W"), edge_mid("N"), edge_mid("E"), edge_mid("S")

    def rec(start, end, probe, policy="beveled"):
        return TileRecipe(code, name, start, end, probe, policy, line_style)

    if code == 0:
        return rec(W, E, (m, 1))
    if code == 1:
        return rec(W, E, (m, n - 2))
    if code == 2:
        return rec(N, S, (1, m))
    if code == 3:
        return rec(N, S, (n - 2, m))

    # Wedges: A is the named corner
    if code == 4:
        return rec(W, N, (1, 1), wedge)
    if code == 5:
        return rec(N, E, (n - 2, 1), wedge)
    if code == 6:
        return rec(E, S, (n - 2, n - 2), wedge)
    if code == 7:
        return rec(S, W, (1, n - 2), wedge)

    # Inverse wedges: B is the named corner, probe sits in the opposite one
    if code == 8:
        return rec(W, N, (n - 3, n - 3), wedge)
    if code == 9:
        return rec(N, E, (2, n - 3), wedge)
    if code == 10:
        return rec(E, S, (2, 2), wedge)
    if code == 11:
        return rec(S, W, (n - 3, 2), wedge)

    if code == 12:
        nw = (2, 2)
        multi = MultiSplit(
            lines=(SubLine(W, E, nw), SubLine(N, S, nw)),
            combiner="equal",
        )
        return TileRecipe(code, name, W, E, nw, wedge, line_style, multi=multi)
    if code == 13:
        ne, sw = (n - 3, 2), (2, n - 3)
        multi = MultiSplit(
            lines=(SubLine(W, E, ne), SubLine(N, S, sw)),
            combiner="xor",
        )
        return TileRecipe(code, name, W, E, ne, wedge, line_style, multi=multi)

    fill = "A" if code == FILL_A_CODE else "B"
    return TileRecipe(code, name, W, E, (m, m), "beveled", line_style, fill=fill)


def validate_recipe(recipe: TileRecipe, tile_size: int) -> None:
    """
    Check the geometric invariants of a recipe.

    Raises:
        GeometryInvariantViolation: endpoints collapse or a probe lies on
            its own boundary
    """
    for line in recipe.sublines:
        base = build_base_polyline(tile_size, line.start, line.end, line.corner_policy)
        if distinct_point_count(base) < 2:
            raise GeometryInvariantViolation("base polyline has fewer than 2 distinct points", recipe.code)
        if signed_distance_at(line.probe, base) == 0.0:
            raise GeometryInvariantViolation(f"probe {line.probe} lies on the boundary", recipe.code)


def build_recipe_table(
    tile_size: int, line_style: str = "straight_line", corner_style: str = "stepped"
) -> Tuple[TileRecipe, ...]:
    """Build and validate all 16 recipes, indexed by neighbour code."""
    table = tuple(recipe_for_code(code, tile_size, line_style, corner_style) for code in NEIGHBOR_CODES)
    for recipe in table:
        validate_recipe(recipe, tile_size)
    return table
