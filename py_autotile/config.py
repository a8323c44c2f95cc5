"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # Output Configuration
    output_root: str = Field(default="./tilesets", description="Default directory for generated tile sets")
    godot_res_root: str = Field(
        default="res://Assets/Tilesets/TilesetRessources",
        description="Godot resource directory the exported sheet is referenced from",
    )

    # Generation Defaults
    default_tile_size: int = Field(default=32, description="Default tile edge length in pixels")
    default_band_width: int = Field(default=4, description="Default transition band width in pixels")


# Instantiate singleton settings object
settings = Settings()
