"""
Data models for template engine.
Context objects handed to the Jinja2 templates.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markupsafe import escape


@dataclass(frozen=True)
class FooterLink:
    """Outbound link rendered in the footer."""
    label: str  # "twitter", "github", "stack overflow"
    href: str


@dataclass(frozen=True)
class OGImageContext:
    """Fields laid out on an open-graph preview image."""
    description: str
    date: str  # shown verbatim
    author: str
    site_name: str  # e.g. "erock.io"


@dataclass
class SEOMetaTags:
    """SEO metadata for a page head."""
    title: str = ""
    description: str = ""
    keywords: list[str] = field(default_factory=list)
    og_title: str = ""
    og_description: str = ""
    og_image: str = ""
    og_type: str = "website"
    twitter_creator: str = ""
    canonical_url: str = ""

    def to_html_tags(self) -> str:
        """Generate HTML meta tags."""
        tags = []
        if self.title:
            tags.append(f'<title>{escape(self.title)}</title>')
        if self.description:
            tags.append(f'<meta name="description" content="{escape(self.description)}">')
        if self.keywords:
            tags.append(f'<meta name="keywords" content="{escape(", ".join(self.keywords))}">')
        if self.og_title:
            tags.append(f'<meta property="og:title" content="{escape(self.og_title)}">')
            tags.append(f'<meta property="og:type" content="{escape(self.og_type)}">')
        if self.og_description:
            tags.append(f'<meta property="og:description" content="{escape(self.og_description)}">')
        if self.og_image:
            tags.append(f'<meta property="og:image" content="{escape(self.og_image)}">')
            tags.append('<meta name="twitter:card" content="summary_large_image">')
        if self.twitter_creator:
            tags.append(f'<meta name="twitter:creator" content="@{escape(self.twitter_creator)}">')
        if self.canonical_url:
            tags.append(f'<link rel="canonical" href="{escape(self.canonical_url)}">')
        return "\n".join(tags)
