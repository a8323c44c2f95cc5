#!/usr/bin/env python3
"""
Generate a coast16 autotile set from two material textures.

This writes:
1. tiles_32/NN_mask_BBBB_32.png for all 16 neighbour codes
2. coast16_<size>.png, the 4x4 contact sheet
3. coast16_<size>.tres, a Godot 4 TileSet for the sheet
4. coast16_manifest.json

Usage:
    python generate_coast16.py --out out/coast --a land.png --b water.png [--t foam.png]
"""

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent))

from py_autotile.cli import main

if __name__ == "__main__":
    sys.exit(main())
