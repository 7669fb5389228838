"""
Configuration settings for Brand Image Generator
"""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Project paths
    PROJECT_ROOT: Path = Path(__file__).parent
    WORKSPACE_DIR: Path = PROJECT_ROOT / "workspace"
    SOURCE_DIR: Path = WORKSPACE_DIR / "source" / "avatars"
    OUT_DIR: Path = WORKSPACE_DIR / "out"
    ASSETS_DIR: Path = PROJECT_ROOT / "assets"
    FONTS_DIR: Path = ASSETS_DIR / "fonts"
    COLORS_FILE: Path = ASSETS_DIR / "colors" / "colors.json"
    DEFAULT_LOGO_PATH: Path = ASSETS_DIR / "logos" / "logo.png"

    # Input filtering
    ALLOWED_EXTENSIONS: list[str] = [".png", ".jpg", ".jpeg"]

    # Avatar settings
    AVATAR_DEFAULT_SIZE: int = 512
    AVATAR_MIN_SIZE: int = 64
    AVATAR_MAX_SIZE: int = 4096
    AVATAR_STANDARD_SIZES: list[int] = [256, 512, 1024]

    # Shadow silhouette
    # Silhouette is drawn larger than the canvas and clipped
    SILHOUETTE_SIZE_MULTIPLIER: float = 1.2
    # (name, max canvas size inclusive, offset fraction of canvas, min offset px)
    # Ascending by max size
    SHADOW_OFFSET_BANDS: list[tuple[str, int, float, int]] = [
        ("small", 256, 0.03, 6),
        ("medium", 512, 0.04, 12),
        ("large", 100000, 0.05, 24),
    ]
    # Background color -> candidate shadow colors (first one wins)
    SHADOW_COLOR_TABLE: dict[str, list[str]] = {
        "aqua": ["navy", "fuchsia"],
        "navy": ["aqua", "fuchsia"],
        "fuchsia": ["navy", "aqua"],
    }

    # Output / encoder settings
    MAX_FILE_SIZE_BYTES: int = 3 * 1024 * 1024  # LinkedIn upload limit
    JPEG_QUALITY: int = 90
    JPEG_QUALITY_STRICT: int = 75
    PNG_COMPRESS_LEVEL: int = 6
    PNG_COMPRESS_LEVEL_STRICT: int = 9

    # Text settings
    FONT_TEXT: str = "HankenGrotesk-Bold.ttf"
    TEXT_FILL: tuple[int, int, int] = (255, 255, 255)

    # Batch settings
    BATCH_NUM_WORKERS: int = 0  # 0 = auto (cpu_count based)
    SAMPLE_SIZES: list[int] = [256, 512]

    # FastAPI settings
    API_TITLE: str = "Brand Image Generator API"
    API_VERSION: str = "1.0.0"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

# Create directories if they don't exist
for directory in [
    settings.OUT_DIR,
]:
    directory.mkdir(parents=True, exist_ok=True)
