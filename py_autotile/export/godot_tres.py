"""
Godot 4 TileSet export for coast16 sheets.

Each tile on the sheet gets one atlas entry at its (col, row). Terrain
peering bits mark the neighbour directions that lie in material B, which is
painted as terrain 0. Collision polygons cover material A and are computed
by splitting the tile square along the base boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import structlog
from shapely.geometry import LineString, Polygon, box
from shapely.geometry.polygon import orient
from shapely.ops import split

from ..core.classifier import classify_point, on_boundary
from ..core.polyline import build_base_polyline
from ..core.recipes import TileRecipe
from ..core.sheet import sheet_position

logger = structlog.get_logger()

EXT_TEXTURE_ID = "1_tex"
ATLAS_SOURCE_ID = "TileSetAtlasSource_main"

# Godot's terrain peering order, sides and corners clockwise from the right
PEERING_KEYS = (
    "right_side",
    "bottom_right_corner",
    "bottom_side",
    "bottom_left_corner",
    "left_side",
    "top_left_corner",
    "top_side",
    "top_right_corner",
)


@dataclass
class TileRule:
    """Engine metadata for one sheet cell."""

    code: int
    row: int
    col: int
    peers: List[str] = field(default_factory=list)
    terrain_set: Optional[int] = None
    terrain: Optional[int] = None
    polygons: List[List[Tuple[float, float]]] = field(default_factory=list)

    @property
    def coord(self) -> str:
        return f"{self.col}:{self.row}"


def peering_sample_points(tile_size: int) -> Dict[str, Tuple[float, float]]:
    """Tile-local sample point for each peering direction."""
    last = float(tile_size - 1)
    m = last / 2
    return {
        "right_side": (last, m),
        "bottom_right_corner": (last, last),
        "bottom_side": (m, last),
        "bottom_left_corner": (0.0, last),
        "left_side": (0.0, m),
        "top_left_corner": (0.0, 0.0),
        "top_side": (m, 0.0),
        "top_right_corner": (last, 0.0),
    }


def _in_material_b(recipe: TileRecipe, tile_size: int, x: float, y: float) -> bool:
    if on_boundary(recipe, tile_size, x, y):
        return False
    return classify_point(recipe, tile_size, x, y) == "B"


def _extend_ends(base: np.ndarray, distance: float = 1.0) -> np.ndarray:
    """Push both ends of a polyline outward so it fully crosses the tile."""
    pts = np.array(base, dtype=np.float64)
    for end, inner in ((0, 1), (-1, -2)):
        direction = pts[end] - pts[inner]
        length = np.hypot(direction[0], direction[1]) or 1.0
        pts[end] = pts[end] + direction / length * distance
    return pts


def material_a_polygons(recipe: TileRecipe, tile_size: int) -> List[Polygon]:
    """Regions of the tile square (tile-local coordinates) that are material A."""
    last = tile_size - 1
    square = box(0, 0, last, last)
    if recipe.fill == "A":
        return [square]
    if recipe.fill == "B":
        return []

    pieces = [square]
    for sub in recipe.sublines:
        base = build_base_polyline(tile_size, sub.start, sub.end, sub.corner_policy)
        cutter = LineString(_extend_ends(base))
        next_pieces = []
        for piece in pieces:
            next_pieces.extend(g for g in split(piece, cutter).geoms if isinstance(g, Polygon))
        pieces = next_pieces

    result = []
    for piece in pieces:
        x, y = piece.representative_point().coords[0]
        if classify_point(recipe, tile_size, x, y) == "A":
            result.append(piece)
    return result


def _to_godot_points(polygon: Polygon, tile_size: int) -> List[Tuple[float, float]]:
    """Tile-local polygon to Godot coordinates centred on the tile."""
    scale = tile_size / (tile_size - 1)
    half = tile_size / 2
    coords = list(orient(polygon, sign=1.0).exterior.coords)[:-1]
    return [(x * scale - half, y * scale - half) for x, y in coords]


def derive_tile_rule(recipe: TileRecipe, tile_size: int) -> TileRule:
    """Derive peering bits and collision polygons from a recipe's base geometry."""
    row, col = sheet_position(recipe.code)
    rule = TileRule(code=recipe.code, row=row, col=col)

    samples = peering_sample_points(tile_size)
    for key in PEERING_KEYS:
        x, y = samples[key]
        if _in_material_b(recipe, tile_size, x, y):
            rule.peers.append(key)

    m = (tile_size - 1) / 2
    if _in_material_b(recipe, tile_size, m, m):
        rule.terrain = 0
    if rule.peers or rule.terrain is not None:
        rule.terrain_set = 0

    rule.polygons = [_to_godot_points(p, tile_size) for p in material_a_polygons(recipe, tile_size)]
    return rule


def derive_rules(recipes: Sequence[TileRecipe], tile_size: int) -> List[TileRule]:
    rules = [derive_tile_rule(recipe, tile_size) for recipe in recipes]
    return sorted(rules, key=lambda r: r.code)


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def render_tres(
    rules: Sequence[TileRule],
    tile_size: int,
    sheet_name: str,
    slug: str,
    res_root: str = "res://Assets/Tilesets/TilesetRessources",
    terrain_name: str = "Terrain 0",
) -> str:
    """
    Render a Godot 4 TileSet resource for a coast16 sheet.

    Args:
        rules: One rule per tile
        tile_size: Tile edge length in pixels
        sheet_name: Sheet file name, e.g. coast16_32.png
        slug: Tile set slug used in the resource uid and texture path
        res_root: Godot resource directory holding the tile set folders
        terrain_name: Display name of terrain 0 (material B)

    Returns:
        .tres file contents
    """
    lines = [
        f'[gd_resource type="TileSet" load_steps=3 format=3 uid="uid://auto_{slug}_coast16"]',
        "",
        f'[ext_resource type="Texture2D" path="{res_root.rstrip("/")}/{slug}/{sheet_name}" id="{EXT_TEXTURE_ID}"]',
        "",
        f'[sub_resource type="TileSetAtlasSource" id="{ATLAS_SOURCE_ID}"]',
        f'texture = ExtResource("{EXT_TEXTURE_ID}")',
        f"texture_region_size = Vector2i({tile_size}, {tile_size})",
    ]

    for rule in rules:
        prefix = f"{rule.coord}/0"
        lines.append(f"{prefix} = 0")
        if rule.terrain_set is not None:
            lines.append(f"{prefix}/terrain_set = {rule.terrain_set}")
        if rule.terrain is not None:
            lines.append(f"{prefix}/terrain = {rule.terrain}")
        for i, points in enumerate(rule.polygons):
            packed = ", ".join(f"{_fmt(x)}, {_fmt(y)}" for x, y in points)
            lines.append(f"{prefix}/physics_layer_0/polygon_{i}/points = PackedVector2Array({packed})")
        for key in rule.peers:
            lines.append(f"{prefix}/terrains_peering_bit/{key} = 0")

    lines.extend([
        "",
        "[resource]",
        f"tile_size = Vector2i({tile_size}, {tile_size})",
        "physics_layer_0/collision_layer = 1",
        "physics_layer_1/collision_layer = 2",
        "physics_layer_1/collision_mask = 2",
        "terrain_set_0/mode = 0",
        f'terrain_set_0/terrain_0/name = "{terrain_name}"',
        "terrain_set_0/terrain_0/color = Color(0.5, 0.34375, 0.25, 1)",
        f'sources/0 = SubResource("{ATLAS_SOURCE_ID}")',
        "",
    ])
    return "\n".join(lines)


def write_tres(path: Path, content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Godot TileSet written", path=str(path))
    return path
