"""
Core coast16 autotile synthesis.
"""

from .recipes import NEIGHBOR_CODES, TileRecipe, recipe_for_code, build_recipe_table
from .classifier import BoundaryLine, PixelClassification, classify_tile, signed_distance
from .sampler import Texture, TextureSampler, load_texture, sample_wrap
from .sheet import assemble_sheet, sheet_position
from .settings import Coast16Settings, TexturePaths
from .errors import AutotileError, GeometryInvariantViolation

__all__ = ['NEIGHBOR_CODES', 'TileRecipe', 'recipe_for_code', 'build_recipe_table',
           'BoundaryLine', 'PixelClassification', 'classify_tile', 'signed_distance',
           'Texture', 'TextureSampler', 'load_texture', 'sample_wrap',
           'assemble_sheet', 'sheet_position', 'Coast16Settings', 'TexturePaths',
           'AutotileError', 'GeometryInvariantViolation']
