"""Command line entry point for coast16 generation."""

import argparse
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from .coast16 import generate_coast16
from .config import settings as app_settings
from .core.settings import CORNER_STYLES, LINE_STYLES, Coast16Settings, TexturePaths
from .logging_config import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a procedural coast16 autotile set")
    parser.add_argument("--out", default=None, help="Output directory (default: <output_root>/coast16)")
    parser.add_argument("--a", dest="texture_a", help="Material A texture")
    parser.add_argument("--b", dest="texture_b", help="Material B texture")
    parser.add_argument("--t", dest="texture_t", help="Transition texture")
    parser.add_argument("--tile-size", type=int, default=app_settings.default_tile_size)
    parser.add_argument("--band-width", type=int, default=app_settings.default_band_width)
    parser.add_argument("--corner-style", choices=CORNER_STYLES, default="stepped")
    parser.add_argument("--line-style", choices=LINE_STYLES, default="straight_line")
    parser.add_argument("--texture-scale", type=float, default=1.0)
    parser.add_argument("--palette", default="roman_steampunk", help="Palette name recorded in the manifest")
    parser.add_argument("--slug", default=None, help="Godot tile set slug (default: output directory name)")
    parser.add_argument("--log-level", default=app_settings.log_level)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, app_settings.log_format)

    try:
        settings = Coast16Settings(
            tile_size=args.tile_size,
            band_width=args.band_width,
            corner_style=args.corner_style,
            line_style=args.line_style,
            texture_scale=args.texture_scale,
            palette_name=args.palette,
        )
    except ValidationError as e:
        logger.error("Invalid settings", errors=e.errors())
        return 2

    out_dir = Path(args.out) if args.out else Path(app_settings.output_root) / "coast16"
    textures = TexturePaths(A=args.texture_a, B=args.texture_b, T=args.texture_t)

    try:
        result = generate_coast16(
            out_dir, textures, settings, slug=args.slug, res_root=app_settings.godot_res_root
        )
    except OSError as e:
        logger.error("Generation failed", error=str(e))
        return 1

    print(f"Sheet:    {result.sheet_path}")
    print(f"TileSet:  {result.tres_path}")
    print(f"Manifest: {result.manifest_path}")
    print(f"Tiles:    {len(result.tile_paths)} in {result.tile_paths[0].parent}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
