# Template Engine Module
# Jinja2 page templates, footer and open-graph components

from .renderer import TemplateRenderer
from .components import footer_links, render_footer, render_og_image
from .models import FooterLink, OGImageContext, SEOMetaTags

__all__ = [
    "TemplateRenderer",
    "footer_links",
    "render_footer",
    "render_og_image",
    "FooterLink",
    "OGImageContext",
    "SEOMetaTags",
]
