"""Configuration management for Storyboarder."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables (override=True to ensure .env takes precedence)
load_dotenv(override=True)


def _get_api_key() -> str:
    """Resolve the Gemini API key.

    GOOGLE_API_KEY wins; GEMINI_API_KEY and API_KEY are accepted so that keys
    exported for other Gemini tooling keep working.
    """
    for name in ("GOOGLE_API_KEY", "GEMINI_API_KEY", "API_KEY"):
        value = os.getenv(name)
        if value:
            return value
    return ""


@dataclass
class TextConfig:
    """Gemini text model configuration (character analysis + script)."""

    model: str = field(
        default_factory=lambda: os.getenv("TEXT_MODEL", "gemini-2.5-flash")
    )
    scene_count: int = field(
        default_factory=lambda: int(os.getenv("SCENE_COUNT", "3"))
    )


@dataclass
class ImageConfig:
    """Storyboard image generation configuration."""

    # Imagen models (text-to-image):
    # - imagen-4.0-generate-001: Standard quality
    # - imagen-4.0-ultra-generate-001: Highest quality
    # - imagen-4.0-fast-generate-001: Fast generation
    model: str = field(
        default_factory=lambda: os.getenv("IMAGE_MODEL", "imagen-4.0-generate-001")
    )
    aspect_ratio: str = field(
        default_factory=lambda: os.getenv("IMAGE_ASPECT_RATIO", "16:9")
    )
    mime_type: str = "image/png"


@dataclass
class VideoConfig:
    """Veo video generation configuration."""

    model: str = field(
        default_factory=lambda: os.getenv("VIDEO_MODEL", "veo-2.0-generate-001")
    )
    poll_interval: float = field(
        default_factory=lambda: float(os.getenv("VIDEO_POLL_INTERVAL", "10"))
    )
    # Upper bound for a single clip, in seconds (120 polls at 10s)
    timeout: float = field(
        default_factory=lambda: float(os.getenv("VIDEO_TIMEOUT", "1200"))
    )
    download_timeout: float = field(
        default_factory=lambda: float(os.getenv("DOWNLOAD_TIMEOUT", "120"))
    )


@dataclass
class Config:
    """Main application configuration."""

    # API Keys
    google_api_key: str = field(default_factory=_get_api_key)

    # Sub-configurations
    text: TextConfig = field(default_factory=TextConfig)
    image: ImageConfig = field(default_factory=ImageConfig)
    video: VideoConfig = field(default_factory=VideoConfig)

    # Number of character slots offered by the setup form
    max_characters: int = 3

    # Paths
    project_root: Path = field(
        default_factory=lambda: Path(__file__).parent.parent
    )
    # Overrides OUTPUT_DIR (set by the CLI's --output)
    output_root: Optional[Path] = None

    @property
    def output_dir(self) -> Path:
        if self.output_root is not None:
            return self.output_root
        return self.project_root / os.getenv("OUTPUT_DIR", "output")

    @property
    def images_dir(self) -> Path:
        return self.output_dir / "storyboards"

    @property
    def videos_dir(self) -> Path:
        return self.output_dir / "videos"

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if not self.google_api_key:
            errors.append("GOOGLE_API_KEY is not set")
        if self.text.scene_count < 1:
            errors.append("SCENE_COUNT must be at least 1")
        if self.video.poll_interval <= 0:
            errors.append("VIDEO_POLL_INTERVAL must be positive")
        if self.video.timeout <= 0:
            errors.append("VIDEO_TIMEOUT must be positive")
        return errors

    def ensure_directories(self) -> None:
        """Create output directories if they don't exist."""
        for path in [self.images_dir, self.videos_dir]:
            path.mkdir(parents=True, exist_ok=True)


# Global config instance
config = Config()
