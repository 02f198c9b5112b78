# Content Module
# Front matter parsing, Markdown rendering and post loading

from .front_matter import load_front_matter, parse_front_matter
from .loader import adjacent_posts, load_post, load_posts, slug_for
from .markdown_renderer import MarkdownRenderer, RenderedMarkdown, excerpt, reading_time
from .models import ContentError, FrontMatterError, Post, PostFrontMatter

__all__ = [
    "load_front_matter",
    "parse_front_matter",
    "adjacent_posts",
    "load_post",
    "load_posts",
    "slug_for",
    "MarkdownRenderer",
    "RenderedMarkdown",
    "excerpt",
    "reading_time",
    "ContentError",
    "FrontMatterError",
    "Post",
    "PostFrontMatter",
]
