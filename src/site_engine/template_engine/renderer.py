"""
Template Renderer for blog pages.
Handles Jinja2 template loading and rendering.
"""

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from src.common.models import SiteMetadata

from .models import SEOMetaTags


class TemplateRenderer:
    """
    Renders site pages using Jinja2 templates.

    Usage:
        renderer = TemplateRenderer()
        html = renderer.render_post(post, site)
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize the template renderer.

        Args:
            templates_dir: Path to templates directory.
                          Defaults to ./templates relative to this file.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def render_section(self, section_name: str, context: dict[str, Any]) -> str:
        """
        Render a single template by name.

        Args:
            section_name: Template name without extension (e.g., "footer")
            context: Template variables

        Returns:
            Rendered HTML string
        """
        template = self.env.get_template(f"{section_name}.html")
        return template.render(**context)

    def render_post(
        self,
        post,
        site: SiteMetadata,
        previous=None,
        next_post=None,
        og_image_url: str = "",
    ) -> str:
        """
        Render a post page.

        Args:
            post: Post to render
            site: Site metadata
            previous: Older neighbour, if any
            next_post: Newer neighbour, if any
            og_image_url: Absolute URL of the post's preview image

        Returns:
            Complete HTML document
        """
        seo = SEOMetaTags(
            title=f"{post.title} | {site.title}",
            description=post.summary,
            og_title=post.title,
            og_description=post.summary,
            og_image=og_image_url,
            og_type="article",
            twitter_creator=site.social.twitter,
            canonical_url=site.absolute_url(post.url) if site.site_url else "",
        )
        context = self._page_context(site, seo)
        context.update(
            post=post,
            body=Markup(post.html),
            previous=previous,
            next=next_post,
        )
        return self.render_section("post", context)

    def render_index(self, posts: list, site: SiteMetadata) -> str:
        """Render the home page listing every post."""
        seo = SEOMetaTags(
            title=site.title,
            description=site.description,
            og_title=site.title,
            og_description=site.description,
            twitter_creator=site.social.twitter,
            canonical_url=site.absolute_url("/") if site.site_url else "",
        )
        context = self._page_context(site, seo)
        context["posts"] = posts
        return self.render_section("index", context)

    def render_not_found(self, site: SiteMetadata) -> str:
        seo = SEOMetaTags(title=f"404: Not Found | {site.title}")
        return self.render_section("not_found", self._page_context(site, seo))

    def _page_context(self, site: SiteMetadata, seo: SEOMetaTags) -> dict[str, Any]:
        # Imported here: components builds on this module
        from .components import RSS_HREF, footer_links

        return {
            "site": site,
            "seo_tags": Markup(seo.to_html_tags()),
            "links": footer_links(site.social),
            "rss_href": RSS_HREF,
        }
