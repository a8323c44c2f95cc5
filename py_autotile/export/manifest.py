"""Tile set manifest construction and persistence."""

import json
from pathlib import Path
from typing import Any, Dict, List

from ..core.settings import Coast16Settings, TexturePaths
from ..core.sheet import SHEET_COLS, SHEET_ROWS

MANIFEST_SCHEMA = "tileset.manifest/1.0"


def build_manifest(
    tiles: List[Dict[str, Any]],
    sheet_file: str,
    settings: Coast16Settings,
    textures: TexturePaths,
) -> Dict[str, Any]:
    """
    Build the coast16 manifest.

    Args:
        tiles: [{"id", "name", "file"}] sorted by id, files relative to the output dir
        sheet_file: Sheet file name
        settings: Settings used for the run
        textures: Texture paths as given by the caller

    Returns:
        JSON-serialisable manifest dictionary
    """
    return {
        "schema": MANIFEST_SCHEMA,
        "material": "procedural",
        "engine_order": "coast16",
        "grid": {"cols": SHEET_COLS, "rows": SHEET_ROWS, "tile": settings.tile_size},
        "palette": {"name": settings.palette_name},
        "tiles": [{"id": t["id"], "name": t["name"], "file": t["file"]} for t in tiles],
        "sheet": {"file": sheet_file, "layout": "row-major"},
        "procedural": {
            "pattern": "coast16",
            "settings": settings.model_dump(by_alias=True, exclude={"palette_name"}),
            "textures": textures.model_dump(),
        },
    }


def write_manifest(path: Path, data: Dict[str, Any]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path
