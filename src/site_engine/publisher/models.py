"""Data models for the publisher module."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class BuildResult:
    """Result of a site build."""
    output_dir: Path
    posts: int = 0
    pages: list[str] = field(default_factory=list)  # paths relative to output_dir
    og_images: int = 0
    og_images_cached: int = 0
    copied_files: int = 0
    duration_seconds: float = 0.0


@dataclass
class UploadResult:
    """Result of syncing the output directory to the bucket."""
    success: bool
    returncode: int
    command: list[str] = field(default_factory=list)
    attempts: int = 0
    error: str = ""
    finished_at: str = ""
