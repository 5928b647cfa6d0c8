from __future__ import annotations
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path.cwd()

class BaseConfig(BaseSettings):
    # ===== Palette =====
    PALETTE_COLOR_COUNT: int = Field(32, gt=0)
    PALETTE_MAX_AREA: int = Field(112 * 112, ge=0)  # downscale before quantizing, 0 = never

    # ===== Previews =====
    PREVIEW_SIZE: int = Field(3, gt=0)
    PREVIEW_ENHANCED_SIZE: int = Field(12, gt=0)
    JPEG_QUALITY: int = Field(75, ge=1, le=100)

    # ===== Runtime =====
    CONCURRENT: bool = True
    WRAP_WIDTH: int = 120
    LOG_LEVEL: str = "WARNING"

    # Pydantic v2
    model_config = SettingsConfigDict(
        env_prefix="LQIP_",
        env_file_encoding="utf-8",
        extra="ignore",
    )
