"""Shared test fixtures for the blog engine."""

import sys
from pathlib import Path

import pytest
from PIL import Image

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fixtures.sample_posts import sample_posts
from src.common.config import PathSettings, Settings
from src.common.models import SiteMetadata, Social


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_social() -> Social:
    return Social(
        twitter="erock",
        github="erock",
        stackoverflow="https://stackoverflow.com/users/1713216/erock",
    )


@pytest.fixture
def sample_site(sample_social: Social) -> SiteMetadata:
    return SiteMetadata(
        title="erock",
        author="Eric Bower",
        description="Thoughts on front-end engineering",
        site_url="https://erock.io",
        social=sample_social,
    )


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """Temporary content tree with three posts and one linked image."""
    root = tmp_path / "content" / "blog"
    for relative, text in sample_posts().items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    Image.new("RGB", (16, 16), (65, 88, 208)).save(root / "redux-selectors" / "diagram.png")
    return root


@pytest.fixture
def site_settings(tmp_path, content_dir, sample_site) -> Settings:
    """Settings pointing every directory into tmp_path."""
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")
    return Settings(
        site=sample_site,
        paths=PathSettings(
            content_dir=content_dir,
            static_dir=static_dir,
            output_dir=tmp_path / "public",
            cache_dir=tmp_path / ".cache",
        ),
    )


class FakeOGGenerator:
    """Stands in for OGImageGenerator where pixels do not matter."""

    def __init__(self):
        self.rendered = []

    def write(self, context, output_path: Path) -> Path:
        self.rendered.append(context)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(b"\x89PNG fake")
        return output_path


@pytest.fixture
def fake_og_generator() -> FakeOGGenerator:
    return FakeOGGenerator()
