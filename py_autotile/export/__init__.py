"""
Tile set exporters.

This package provides:
- Godot 4 TileSet resources with peering bits and collision polygons
- The coast16 JSON manifest
"""

from .godot_tres import TileRule, derive_rules, derive_tile_rule, render_tres, write_tres
from .manifest import build_manifest, write_manifest

__all__ = [
    'TileRule', 'derive_rules', 'derive_tile_rule', 'render_tres', 'write_tres',
    'build_manifest', 'write_manifest',
]
