"""Tests for shared common modules — models, config, logging."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from src.common.config import PROJECT_ROOT, Settings
from src.common.logging import set_level, setup_logging
from src.common.models import SiteMetadata, Social


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("SITE_URL", raising=False)
    monkeypatch.delenv("DEPLOY_BUCKET", raising=False)


class TestSiteMetadata:
    def test_host_from_site_url(self, sample_site: SiteMetadata):
        assert sample_site.host == "erock.io"

    def test_host_without_scheme(self):
        site = SiteMetadata(title="t", author="a", site_url="erock.io")
        assert site.host == "erock.io"

    def test_absolute_url(self, sample_site: SiteMetadata):
        assert sample_site.absolute_url("/redux-selectors/") == "https://erock.io/redux-selectors/"
        assert sample_site.absolute_url("og.png") == "https://erock.io/og.png"

    def test_metadata_is_immutable(self, sample_site: SiteMetadata):
        with pytest.raises(ValidationError):
            sample_site.title = "changed"

    def test_social_defaults_empty(self):
        social = Social()
        assert social.twitter == ""
        assert social.github == ""
        assert social.stackoverflow == ""


class TestSettings:
    def test_defaults(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        settings = Settings.load(path)
        assert settings.site.author == "Eric Bower"
        assert settings.deploy.bucket == "gs://erock.io"
        assert settings.deploy.cache_control == "private, max-age=0, no-transform"
        assert settings.og_image.width == 1200
        assert settings.og_image.height == 630
        assert settings.paths.output_dir == PROJECT_ROOT / "public"

    def test_missing_explicit_path_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="missing.yaml"):
            Settings.load(tmp_path / "missing.yaml")

    def test_load_from_yaml(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "site:\n"
            "  title: test blog\n"
            "  author: Jane Doe\n"
            "  social:\n"
            "    github: jdoe\n"
            "paths:\n"
            "  output_dir: build\n"
            "deploy:\n"
            "  max_retries: 5\n",
            encoding="utf-8",
        )
        settings = Settings.load(path)
        assert settings.site.title == "test blog"
        assert settings.site.social.github == "jdoe"
        assert settings.site.social.twitter == ""
        assert settings.deploy.max_retries == 5
        # Relative paths resolve against the project root
        assert settings.paths.output_dir == PROJECT_ROOT / "build"

    def test_absolute_paths_kept(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text(f"paths:\n  content_dir: {tmp_path / 'posts'}\n", encoding="utf-8")
        settings = Settings.load(path)
        assert settings.paths.content_dir == tmp_path / "posts"

    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert Settings.load(path).site.title == "erock"

    def test_env_overrides(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SITE_URL", "https://staging.erock.io/")
        monkeypatch.setenv("DEPLOY_BUCKET", "gs://staging.erock.io")
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        settings = Settings.load(path)
        assert settings.site.site_url == "https://staging.erock.io"
        assert settings.deploy.bucket == "gs://staging.erock.io"

    def test_invalid_retries_rejected(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("deploy:\n  max_retries: 0\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            Settings.load(path)

    def test_gradient_stops_from_yaml(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "og_image:\n  gradient_stops:\n    - [0.0, '#000000']\n    - [1.0, '#ffffff']\n",
            encoding="utf-8",
        )
        settings = Settings.load(path)
        assert settings.og_image.gradient_stops == [(0.0, "#000000"), (1.0, "#ffffff")]


class TestLogging:
    def test_setup_logging_is_idempotent(self):
        first = setup_logging(module_name="tests.idempotent")
        second = setup_logging(module_name="tests.idempotent")
        assert first is second
        assert len(first.handlers) == 1

    def test_set_level(self):
        logger = setup_logging(module_name="tests.level")
        set_level(logging.DEBUG)
        try:
            assert logger.level == logging.DEBUG
            assert logger.handlers[0].level == logging.DEBUG
        finally:
            set_level(logging.INFO)
