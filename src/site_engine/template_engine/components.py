"""Presentational components shared by every page.

Both components are pure: the same input always renders the same markup.
"""

from __future__ import annotations

from typing import Optional

from src.common.models import Social

from .models import FooterLink, OGImageContext
from .renderer import TemplateRenderer

TWITTER_PREFIX = "https://mobile.twitter.com/"
GITHUB_PREFIX = "https://github.com/"
RSS_HREF = "/rss.xml"


def footer_links(social: Social) -> list[FooterLink]:
    """Social links in footer order, skipping empty handles."""
    links = []
    if social.twitter:
        links.append(FooterLink("twitter", TWITTER_PREFIX + social.twitter))
    if social.github:
        links.append(FooterLink("github", GITHUB_PREFIX + social.github))
    if social.stackoverflow:
        links.append(FooterLink("stack overflow", social.stackoverflow))
    return links


def render_footer(
    social: Social,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    renderer = renderer or TemplateRenderer()
    return renderer.render_section(
        "footer",
        {"links": footer_links(social), "rss_href": RSS_HREF},
    )


def render_og_image(
    context: OGImageContext,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """HTML layout of the open-graph preview for one post."""
    renderer = renderer or TemplateRenderer()
    return renderer.render_section("og_image", {"og": context})
