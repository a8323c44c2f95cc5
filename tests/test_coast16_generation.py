"""End-to-end tests for coast16 tile set generation."""

import json

import numpy as np
import pytest
from PIL import Image
from pydantic import ValidationError

from py_autotile.coast16 import (
    MANIFEST_FILE,
    TILES_DIR,
    generate_coast16,
    generate_tileset,
    render_tile,
)
from py_autotile.core.recipes import recipe_for_code
from py_autotile.core.settings import Coast16Settings, TexturePaths

GREEN = [0, 255, 0, 255]
BLUE = [0, 0, 255, 255]


@pytest.fixture
def textures(texture_files):
    return TexturePaths(A=str(texture_files["A"]), B=str(texture_files["B"]), T=str(texture_files["T"]))


class TestGenerateCoast16:
    """Files written by a full run."""

    @pytest.fixture
    def result(self, tmp_path, textures):
        return generate_coast16(tmp_path / "shore", textures, Coast16Settings(tile_size=16))

    def test_tile_files(self, result, tmp_path):
        tiles_dir = tmp_path / "shore" / TILES_DIR
        assert len(result.tile_paths) == 16
        assert result.tile_paths[0] == tiles_dir / "00_mask_0000_32.png"
        assert result.tile_paths[13] == tiles_dir / "13_mask_1101_32.png"
        for path in result.tile_paths:
            with Image.open(path) as img:
                assert img.size == (16, 16)
                assert img.mode == "RGBA"

    def test_sheet(self, result):
        assert result.sheet_path.name == "coast16_16.png"
        with Image.open(result.sheet_path) as img:
            sheet = np.array(img)
        assert sheet.shape == (64, 64, 4)
        # Fill tiles: 14 at row 3 col 2, 15 at row 3 col 3
        np.testing.assert_array_equal(sheet[56, 40], GREEN)
        np.testing.assert_array_equal(sheet[56, 56], BLUE)

    def test_sheet_matches_tiles(self, result):
        with Image.open(result.sheet_path) as img:
            sheet = np.array(img)
        for code, path in enumerate(result.tile_paths):
            row, col = divmod(code, 4)
            with Image.open(path) as img:
                tile = np.array(img)
            np.testing.assert_array_equal(sheet[row * 16:(row + 1) * 16, col * 16:(col + 1) * 16], tile)

    def test_tres(self, result):
        assert result.tres_path.name == "coast16_16.tres"
        text = result.tres_path.read_text(encoding="utf-8")
        assert "/shore/coast16_16.png" in text
        assert "tile_size = Vector2i(16, 16)" in text

    def test_manifest(self, result, textures):
        assert result.manifest_path.name == MANIFEST_FILE
        manifest = json.loads(result.manifest_path.read_text(encoding="utf-8"))
        assert manifest["schema"] == "tileset.manifest/1.0"
        assert manifest["material"] == "procedural"
        assert manifest["engine_order"] == "coast16"
        assert manifest["grid"] == {"cols": 4, "rows": 4, "tile": 16}
        assert manifest["palette"] == {"name": "roman_steampunk"}
        assert manifest["sheet"] == {"file": "coast16_16.png", "layout": "row-major"}
        assert [t["id"] for t in manifest["tiles"]] == list(range(16))
        assert manifest["tiles"][5] == {"id": 5, "name": "mask_0101", "file": "tiles_32/05_mask_0101_32.png"}
        procedural = manifest["procedural"]
        assert procedural["pattern"] == "coast16"
        assert procedural["settings"]["tileSize"] == 16
        assert procedural["settings"]["lineStyle"] == "straight_line"
        assert procedural["textures"] == {"A": textures.A, "B": textures.B, "T": textures.T}


class TestGenerationBehaviour:
    """Determinism and degraded inputs."""

    def test_byte_identical_runs(self, tmp_path, textures):
        settings = Coast16Settings(tile_size=16, line_style="craggy", corner_style="quarter")
        first = generate_coast16(tmp_path / "one", textures, settings, slug="coast")
        second = generate_coast16(tmp_path / "two", textures, settings, slug="coast")
        assert first.sheet_path.read_bytes() == second.sheet_path.read_bytes()
        assert first.tres_path.read_text() == second.tres_path.read_text()
        for a, b in zip(first.tile_paths, second.tile_paths):
            assert a.read_bytes() == b.read_bytes()

    def test_missing_textures_render_transparent(self, tmp_path):
        result = generate_coast16(tmp_path / "bare", TexturePaths(A="missing_a.png"))
        with Image.open(result.sheet_path) as img:
            sheet = np.array(img)
        assert sheet.shape == (128, 128, 4)
        assert not sheet.any()

    def test_relative_texture_paths_resolve_against_output(self, tmp_path, texture_files):
        textures = TexturePaths(A="../src/a.png", B="../src/b.png")
        result = generate_coast16(tmp_path / "out", textures, Coast16Settings(tile_size=16))
        with Image.open(result.tile_paths[14]) as img:
            np.testing.assert_array_equal(np.array(img)[8, 8], GREEN)

    def test_unwritable_output_raises(self, tmp_path, textures):
        blocker = tmp_path / "file.txt"
        blocker.write_text("x")
        with pytest.raises(OSError):
            generate_coast16(blocker, textures)


class TestInMemoryRendering:
    """Tile rendering without touching disk."""

    def test_generate_tileset(self, green_blue_sampler):
        tiles = generate_tileset(green_blue_sampler, Coast16Settings(tile_size=16))
        assert sorted(tiles) == list(range(16))
        assert tiles[3].name == "mask_0011"
        assert tiles[3].file_name == "03_mask_0011_32.png"

    def test_hard_edge_tile(self, green_blue_sampler):
        settings = Coast16Settings(tile_size=32)
        tile = render_tile(recipe_for_code(2, 32), green_blue_sampler, settings)
        # Code 2: left half A
        np.testing.assert_array_equal(tile[10, 14], GREEN)
        np.testing.assert_array_equal(tile[10, 16], BLUE)

    def test_line_style_does_not_flip_regions(self, green_blue_sampler):
        for style in ("wavy_smooth", "craggy", "zigzag"):
            settings = Coast16Settings(tile_size=32, line_style=style)
            tiles = generate_tileset(green_blue_sampler, settings)
            np.testing.assert_array_equal(tiles[0].raster[1, 15], GREEN)
            np.testing.assert_array_equal(tiles[0].raster[30, 15], BLUE)


class TestSettings:
    """Request-level settings validation."""

    def test_defaults(self):
        settings = Coast16Settings()
        assert settings.tile_size == 32
        assert settings.band_width == 4
        assert settings.corner_policy == "beveled"

    def test_camel_case_aliases(self):
        settings = Coast16Settings(**{"tileSize": 64, "lineStyle": "zigzag", "cornerStyle": "quarter"})
        assert settings.tile_size == 64
        assert settings.line_style == "zigzag"
        assert settings.corner_policy == "rounded"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"tile_size": 8},
            {"tile_size": 2048},
            {"band_width": -1},
            {"texture_scale": 0},
            {"line_style": "sketchy"},
            {"corner_style": "round"},
            {"transition_mode": "blend"},
            {"unknown": 1},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            Coast16Settings(**kwargs)

    def test_settings_are_frozen(self):
        settings = Coast16Settings()
        with pytest.raises(ValidationError):
            settings.tile_size = 64
