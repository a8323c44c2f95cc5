"""
Request-level settings for coast16 tile set synthesis.

Field names are snake_case; the camelCase names used by the surrounding
service layer (tileSize, bandWidth, ...) are accepted as aliases.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

CornerStyle = Literal["stepped", "quarter", "square"]
LineStyle = Literal["straight_line", "wavy_smooth", "craggy", "zigzag"]
TransitionMode = Literal["texture"]

LINE_STYLES = ("straight_line", "wavy_smooth", "craggy", "zigzag")
CORNER_STYLES = ("stepped", "quarter", "square")


def corner_policy_for(corner_style: str) -> str:
    """Polyline corner policy for a corner style: only "quarter" rounds."""
    return "rounded" if corner_style == "quarter" else "beveled"


class Coast16Settings(BaseModel):
    """Settings for one coast16 generation run."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    tile_size: int = Field(32, ge=16, le=1024, alias="tileSize", description="Tile edge length in pixels")
    band_width: int = Field(4, ge=0, alias="bandWidth", description="Transition band width in pixels")
    corner_style: CornerStyle = Field(
        "stepped",
        alias="cornerStyle",
        description="Corner routing: only 'quarter' produces rounded turns",
    )
    line_style: LineStyle = Field("straight_line", alias="lineStyle", description="Boundary line style")
    texture_scale: float = Field(1.0, gt=0, alias="textureScale", description="Texture sampling scale")
    transition_mode: TransitionMode = Field(
        "texture", alias="transitionMode", description="Band rendering mode"
    )
    palette_name: str = Field(
        "roman_steampunk", alias="paletteName", description="Palette name echoed into the manifest"
    )

    @property
    def corner_policy(self) -> str:
        """Polyline corner policy selected by the corner style."""
        return corner_policy_for(self.corner_style)


class TexturePaths(BaseModel):
    """Source raster paths for materials A, B and the transition T."""

    model_config = ConfigDict(frozen=True)

    A: Optional[str] = Field(None, description="Material A texture")
    B: Optional[str] = Field(None, description="Material B texture")
    T: Optional[str] = Field(None, description="Transition texture drawn over the band")
