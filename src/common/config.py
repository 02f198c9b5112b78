"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models import SiteMetadata, Social

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
CONTENT_DIR = PROJECT_ROOT / "content" / "blog"
STATIC_DIR = PROJECT_ROOT / "static"
PUBLIC_DIR = PROJECT_ROOT / "public"
CACHE_DIR = PROJECT_ROOT / ".cache"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class PathSettings(BaseModel):
    """Input and output directories for a build."""
    content_dir: Path = CONTENT_DIR
    static_dir: Path = STATIC_DIR
    output_dir: Path = PUBLIC_DIR
    cache_dir: Path = CACHE_DIR


class MarkdownSettings(BaseModel):
    """Markdown pipeline settings."""
    words_per_minute: int = Field(default=200, gt=0)
    excerpt_length: int = Field(default=140, gt=0)
    heading_permalinks: bool = True
    external_links_rel: str = "nofollow noopener noreferrer"
    external_links_target: str = "_blank"
    # Pygments style for fenced code blocks
    code_style: str = "dracula"


class OGImageSettings(BaseModel):
    """Open-graph preview image layout."""
    width: int = 1200
    height: int = 630
    padding: int = 50
    card_padding: int = 40
    border_width: int = 2
    corner_radius: int = 20
    font_size: int = 64
    footer_font_size: int = 42
    gradient_angle: float = 43.0
    gradient_stops: list[tuple[float, str]] = Field(
        default_factory=lambda: [
            (0.0, "#4158D0"),
            (0.5, "#C850C0"),
            (0.95, "#FFCC70"),
        ]
    )
    font_path: Optional[str] = None
    filename: str = "og-image.png"


class DeploySettings(BaseModel):
    """Storage bucket sync settings."""
    bucket: str = "gs://erock.io"
    gsutil_bin: str = "gsutil"
    cache_control: str = "private, max-age=0, no-transform"
    acl: str = "public-read"
    max_retries: int = Field(default=3, ge=1)
    retry_delay_seconds: float = 2.0


class ServerSettings(BaseModel):
    """Local preview server settings."""
    host: str = "127.0.0.1"
    dev_port: int = 8000
    serve_port: int = 9000
    poll_interval_seconds: float = 1.0


class Settings(BaseModel):
    """Top-level application settings."""
    site: SiteMetadata = Field(default_factory=lambda: SiteMetadata(
        title="erock",
        author="Eric Bower",
        description="Thoughts on front-end engineering",
        site_url="https://erock.io",
        social=Social(
            twitter="neurosnap",
            github="neurosnap",
            stackoverflow="https://stackoverflow.com/users/1713216/erock",
        ),
    ))
    paths: PathSettings = Field(default_factory=PathSettings)
    markdown: MarkdownSettings = Field(default_factory=MarkdownSettings)
    og_image: OGImageSettings = Field(default_factory=OGImageSettings)
    deploy: DeploySettings = Field(default_factory=DeploySettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Raises:
            FileNotFoundError: an explicitly given settings_path does not exist
        """
        if settings_path is not None and not settings_path.exists():
            raise FileNotFoundError(f"Settings file not found: {settings_path}")
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        loaded = cls(**data)
        # Relative paths in YAML are relative to the project root
        for name in ("content_dir", "static_dir", "output_dir", "cache_dir"):
            value = getattr(loaded.paths, name)
            if not value.is_absolute():
                setattr(loaded.paths, name, PROJECT_ROOT / value)

        site_url = get_site_url()
        if site_url:
            loaded.site = loaded.site.model_copy(update={"site_url": site_url})
        bucket = get_deploy_bucket()
        if bucket:
            loaded.deploy.bucket = bucket
        return loaded


def get_site_url() -> str:
    """Get the public site URL override from environment."""
    return os.getenv("SITE_URL", "").rstrip("/")


def get_deploy_bucket() -> str:
    """Get the deploy bucket override from environment."""
    return os.getenv("DEPLOY_BUCKET", "")


# Singleton settings instance
settings = Settings.load()
