"""Site builder — content directory to a deployable ``public/`` tree.

Orchestrates the complete flow:
Markdown posts → MarkdownRenderer → TemplateRenderer → pages on disk,
plus open-graph images, linked files, static assets and the web manifest.

Usage:
    builder = SiteBuilder()
    result = builder.build()
"""

from __future__ import annotations

import json
import shutil
import time
from pathlib import Path

from src.common.config import Settings, settings as default_settings
from src.common.logging import setup_logging
from src.site_engine.content import MarkdownRenderer, Post, adjacent_posts, load_posts
from src.site_engine.og_image import OGImageGenerator, cache_key
from src.site_engine.template_engine import OGImageContext, TemplateRenderer

from .models import BuildResult

logger = setup_logging(module_name="publisher.builder")

MANIFEST_FILENAME = "manifest.webmanifest"
HIGHLIGHT_CSS_FILENAME = "highlight.css"


class SiteBuilder:
    """Builds the static site into the configured output directory.

    Steps:
    1. Remove previous output and cache (clean builds only)
    2. Load and render posts
    3. Write post pages, open-graph images and linked files
    4. Write index, 404, manifest and code highlighting stylesheet
    5. Copy static assets
    6. Drop cached images no post uses any more
    """

    def __init__(
        self,
        config: Settings | None = None,
        renderer: TemplateRenderer | None = None,
        markdown_renderer: MarkdownRenderer | None = None,
        og_generator: OGImageGenerator | None = None,
    ):
        self.config = config or default_settings
        self.site = self.config.site
        self.paths = self.config.paths
        self.renderer = renderer or TemplateRenderer()
        self.markdown_renderer = markdown_renderer or MarkdownRenderer(
            self.config.markdown, site_host=self.site.host,
        )
        self.og_generator = og_generator or OGImageGenerator(self.config.og_image)

    @property
    def output_dir(self) -> Path:
        return self.paths.output_dir

    @property
    def og_cache_dir(self) -> Path:
        return self.paths.cache_dir / "og-images"

    def clean(self) -> None:
        """Remove the output and cache directories."""
        for directory in (self.paths.output_dir, self.paths.cache_dir):
            if directory.exists():
                shutil.rmtree(directory)
                logger.info("Removed %s", directory)

    def build(self, clean: bool = True) -> BuildResult:
        """Build the whole site.

        Args:
            clean: Remove previous output and cache first

        Returns:
            BuildResult summarizing what was written

        Raises:
            ContentError: a post could not be loaded
        """
        started = time.monotonic()
        if clean:
            self.clean()

        posts = load_posts(self.paths.content_dir, self.markdown_renderer)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        result = BuildResult(output_dir=self.output_dir, posts=len(posts))

        used_images: set[str] = set()
        for index, post in enumerate(posts):
            previous, next_post = adjacent_posts(posts, index)
            og_image_url = self._write_og_image(post, result, used_images)
            html = self.renderer.render_post(
                post, self.site, previous, next_post, og_image_url=og_image_url,
            )
            self._write_page(f"{post.slug}/index.html", html, result)
            self._copy_linked_files(post, result)

        self._write_page("index.html", self.renderer.render_index(posts, self.site), result)
        self._write_page("404.html", self.renderer.render_not_found(self.site), result)
        self._write_manifest(result)
        self._write_page(HIGHLIGHT_CSS_FILENAME, self.markdown_renderer.stylesheet(), result)
        self._copy_static(result)
        self._prune_og_cache(used_images)

        result.duration_seconds = round(time.monotonic() - started, 3)
        logger.info(
            "Build complete: %d posts, %d pages, %d og images (%d cached) in %.2fs",
            result.posts, len(result.pages), result.og_images,
            result.og_images_cached, result.duration_seconds,
        )
        return result

    def og_image_context(self, post: Post) -> OGImageContext:
        return OGImageContext(
            description=post.summary,
            date=post.display_date,
            author=self.site.author,
            site_name=self.site.host,
        )

    # --- Internal steps ---

    def _write_page(self, relative_path: str, html: str, result: BuildResult) -> None:
        path = self.output_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        result.pages.append(relative_path)
        logger.debug("Wrote %s", path)

    def _write_og_image(self, post: Post, result: BuildResult, used: set[str]) -> str:
        """Write the post's preview image, reusing the cache when possible.

        Returns:
            URL of the image for the og:image tag
        """
        filename = self.config.og_image.filename
        context = self.og_image_context(post)
        cached = self.og_cache_dir / f"{cache_key(context, self.config.og_image)}.png"
        used.add(cached.name)

        if cached.exists():
            result.og_images_cached += 1
        else:
            self.og_generator.write(context, cached)

        target = self.output_dir / post.slug / filename
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(cached, target)
        result.og_images += 1

        relative_url = f"/{post.slug}/{filename}"
        return self.site.absolute_url(relative_url) if self.site.site_url else relative_url

    def _prune_og_cache(self, used: set[str]) -> None:
        """Delete cached images that no current post refers to."""
        if not self.og_cache_dir.is_dir():
            return
        for path in self.og_cache_dir.glob("*.png"):
            if path.name not in used:
                path.unlink()
                logger.debug("Pruned cached image %s", path.name)

    def _copy_linked_files(self, post: Post, result: BuildResult) -> None:
        if post.source_path is None:
            return
        for name in post.linked_files:
            source = post.source_path.parent / name
            target = self.output_dir / post.slug / name
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
            result.copied_files += 1

    def _write_manifest(self, result: BuildResult) -> None:
        manifest = {
            "name": self.site.title,
            "short_name": self.site.title,
            "description": self.site.description,
            "start_url": "/",
            "background_color": "#ffffff",
            "theme_color": "#663399",
            "display": "minimal-ui",
        }
        path = self.output_dir / MANIFEST_FILENAME
        path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        result.pages.append(MANIFEST_FILENAME)

    def _copy_static(self, result: BuildResult) -> None:
        static_dir = self.paths.static_dir
        if not static_dir.is_dir():
            return
        for source in sorted(static_dir.rglob("*")):
            if not source.is_file():
                continue
            target = self.output_dir / source.relative_to(static_dir)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
            result.copied_files += 1
