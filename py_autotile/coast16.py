"""
Procedural coast16 tile set generation.

This module runs the whole synthesis pipeline:
- Recipe lookup for each of the 16 neighbour codes
- Base and styled boundary construction
- Signed-distance classification and compositing
- Sheet assembly, Godot TileSet export and manifest writing

Generation is a pure function of the textures and settings. All 16 tiles
are rendered in memory before anything is written.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np
import structlog
from PIL import Image

from .core.classifier import build_boundary_lines, classify_tile
from .core.compositor import composite_tile, fill_tile
from .core.line_styles import LineStyleParams
from .core.recipes import TileRecipe, build_recipe_table, corner_bits
from .core.sampler import TextureSampler
from .core.settings import Coast16Settings, TexturePaths
from .core.sheet import assemble_sheet
from .export.godot_tres import derive_rules, render_tres, write_tres
from .export.manifest import build_manifest, write_manifest

logger = structlog.get_logger()

# Directory and file suffix are fixed by the consumers, independent of tile size
TILES_DIR = "tiles_32"
TILE_SUFFIX = "_32.png"
MANIFEST_FILE = "coast16_manifest.json"


@dataclass
class GeneratedTile:
    """One rendered tile with its recipe."""

    recipe: TileRecipe
    raster: np.ndarray

    @property
    def code(self) -> int:
        return self.recipe.code

    @property
    def name(self) -> str:
        return self.recipe.name

    @property
    def file_name(self) -> str:
        return f"{self.code:02d}_{self.name}{TILE_SUFFIX}"


@dataclass
class Coast16Result:
    """Paths written by a generation run."""

    sheet_path: Path
    manifest_path: Path
    tres_path: Path
    tile_paths: List[Path] = field(default_factory=list)


def render_tile(
    recipe: TileRecipe,
    sampler: TextureSampler,
    settings: Coast16Settings,
    params: Optional[LineStyleParams] = None,
) -> np.ndarray:
    """
    Render one tile.

    Fill recipes sample their material directly and never classify.
    """
    tile_size = settings.tile_size
    if recipe.fill is not None:
        return fill_tile(recipe.fill, sampler, tile_size, settings.texture_scale)

    lines = build_boundary_lines(recipe, tile_size, params)
    if len(lines[0].base) >= 3:
        base = lines[0].base
        logger.debug(
            "Wedge base points",
            code=recipe.code,
            start=base[0].tolist(),
            center=base[len(base) // 2].tolist(),
            end=base[-1].tolist(),
        )

    combiner = recipe.multi.combiner if recipe.multi is not None else None
    classification = classify_tile(lines, tile_size, settings.band_width, combiner)
    return composite_tile(classification, sampler, settings.texture_scale, settings.transition_mode)


def generate_tileset(
    sampler: TextureSampler,
    settings: Optional[Coast16Settings] = None,
    params: Optional[LineStyleParams] = None,
) -> Dict[int, GeneratedTile]:
    """
    Render all 16 tiles in memory.

    Args:
        sampler: Loaded A, B and transition textures
        settings: Generation settings
        params: Override for the line style parameters

    Returns:
        GeneratedTile per neighbour code
    """
    settings = settings or Coast16Settings()
    recipes = build_recipe_table(settings.tile_size, settings.line_style, settings.corner_style)

    tiles = {}
    for recipe in recipes:
        raster = render_tile(recipe, sampler, settings, params)
        tiles[recipe.code] = GeneratedTile(recipe, raster)
        logger.debug(
            "Tile rendered",
            code=recipe.code,
            name=recipe.name,
            corners=corner_bits(recipe.code),
            kind="fill" if recipe.fill else ("multi" if recipe.multi else "single"),
            alpha_sum=int(raster[..., 3].sum()),
        )
    return tiles


def _save_png(raster: np.ndarray, path: Path) -> Path:
    Image.fromarray(np.ascontiguousarray(raster, dtype=np.uint8)).save(path, format="PNG")
    return path


def _resolve_texture(output_dir: Path, path: Optional[str]) -> Optional[Path]:
    if not path:
        return None
    p = Path(path)
    return p if p.is_absolute() else (output_dir / p).resolve()


def generate_coast16(
    output_dir: Union[str, Path],
    textures: Optional[TexturePaths] = None,
    settings: Optional[Coast16Settings] = None,
    slug: Optional[str] = None,
    res_root: str = "res://Assets/Tilesets/TilesetRessources",
) -> Coast16Result:
    """
    Generate the coast16 tile set and write it to output_dir.

    Writes tiles_32/NN_mask_BBBB_32.png for every code, the 4x4 sheet
    coast16_{N}.png, the Godot TileSet coast16_{N}.tres and
    coast16_manifest.json.

    Args:
        output_dir: Target directory, created if missing
        textures: A, B and T texture paths; relative paths resolve against output_dir
        settings: Generation settings
        slug: Tile set slug for the Godot resource, defaults to the directory name
        res_root: Godot resource root for the sheet texture path

    Returns:
        Coast16Result with every written path

    Raises:
        OSError: directory creation or any output write failed
        GeometryInvariantViolation: the recipe table is inconsistent
    """
    output_dir = Path(output_dir)
    textures = textures or TexturePaths()
    settings = settings or Coast16Settings()
    slug = slug or output_dir.resolve().name
    tile_size = settings.tile_size

    logger.info(
        "Starting coast16 generation",
        output_dir=str(output_dir),
        tile_size=tile_size,
        line_style=settings.line_style,
        corner_style=settings.corner_style,
        corner_policy=settings.corner_policy,
    )

    try:
        tiles_dir = output_dir / TILES_DIR
        tiles_dir.mkdir(parents=True, exist_ok=True)

        sampler = TextureSampler.from_paths(
            _resolve_texture(output_dir, textures.A),
            _resolve_texture(output_dir, textures.B),
            _resolve_texture(output_dir, textures.T),
        )
        tiles = generate_tileset(sampler, settings)

        tile_paths = []
        tile_entries = []
        for code in sorted(tiles):
            tile = tiles[code]
            path = _save_png(tile.raster, tiles_dir / tile.file_name)
            tile_paths.append(path)
            tile_entries.append({
                "id": code,
                "name": tile.name,
                "file": path.relative_to(output_dir).as_posix(),
            })

        sheet = assemble_sheet({code: t.raster for code, t in tiles.items()}, tile_size)
        sheet_path = _save_png(sheet, output_dir / f"coast16_{tile_size}.png")

        rules = derive_rules([t.recipe for t in tiles.values()], tile_size)
        tres_text = render_tres(rules, tile_size, sheet_path.name, slug, res_root)
        tres_path = write_tres(sheet_path.with_suffix(".tres"), tres_text)

        manifest = build_manifest(tile_entries, sheet_path.name, settings, textures)
        manifest_path = write_manifest(output_dir / MANIFEST_FILE, manifest)

    except Exception as e:
        logger.error("Coast16 generation failed", output_dir=str(output_dir), error=str(e))
        raise

    logger.info(
        "Coast16 sheet written",
        sheet_path=str(sheet_path),
        tiles=len(tile_paths),
    )
    return Coast16Result(
        sheet_path=sheet_path,
        manifest_path=manifest_path,
        tres_path=tres_path,
        tile_paths=tile_paths,
    )
