"""Markdown → HTML conversion for post bodies.

Thin configuration over the ``markdown`` package:
- extra: fenced code, tables, footnotes, attribute lists
- toc: heading ids with permalink anchors
- smarty: typographic quotes and dashes
- sane_lists
- codehilite: Pygments highlighting of fenced code
- ExternalLinksExtension: off-site links open in a new tab
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlparse

import markdown as md
from bs4 import BeautifulSoup
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from pygments.formatters import HtmlFormatter

from src.common.config import MarkdownSettings

_WHITESPACE_RE = re.compile(r"\s+")

HIGHLIGHT_CLASS = "highlight"


@dataclass
class RenderedMarkdown:
    """Result of rendering one Markdown body."""
    html: str
    toc: str = ""
    text: str = ""  # plain text, used for excerpt and reading time
    linked_files: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)  # subset of linked_files


class ExternalLinksTreeprocessor(Treeprocessor):
    """Mark absolute links that leave the site."""

    def __init__(self, md_instance, site_host: str, target: str, rel: str):
        super().__init__(md_instance)
        self.site_host = site_host
        self.target = target
        self.rel = rel

    def run(self, root):
        for link in root.iter("a"):
            parsed = urlparse(link.get("href", ""))
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                continue
            if self.site_host and parsed.netloc == self.site_host:
                continue
            if self.target:
                link.set("target", self.target)
            if self.rel:
                link.set("rel", self.rel)


class ExternalLinksExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {
            "site_host": ["", "Host name treated as internal"],
            "target": ["_blank", "target attribute for external links"],
            "rel": ["nofollow noopener noreferrer", "rel attribute for external links"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md_instance):
        processor = ExternalLinksTreeprocessor(
            md_instance,
            site_host=self.getConfig("site_host"),
            target=self.getConfig("target"),
            rel=self.getConfig("rel"),
        )
        # After inline links are built (20) and after toc (5)
        md_instance.treeprocessors.register(processor, "external_links", 4)


class MarkdownRenderer:
    """Renders post bodies to HTML.

    Usage:
        renderer = MarkdownRenderer(site_host="erock.io")
        rendered = renderer.render(body)
    """

    def __init__(
        self,
        config: Optional[MarkdownSettings] = None,
        site_host: str = "",
    ):
        self.config = config or MarkdownSettings()
        toc_config = {"permalink": False}
        if self.config.heading_permalinks:
            toc_config = {
                "permalink": "#",
                "permalink_class": "anchor",
                "permalink_title": "",
            }
        self._md = md.Markdown(
            extensions=[
                "extra",
                "toc",
                "smarty",
                "sane_lists",
                "codehilite",
                ExternalLinksExtension(
                    site_host=site_host,
                    target=self.config.external_links_target,
                    rel=self.config.external_links_rel,
                ),
            ],
            extension_configs={
                "toc": toc_config,
                "codehilite": {
                    "css_class": HIGHLIGHT_CLASS,
                    "guess_lang": False,
                },
            },
            output_format="html",
        )

    def render(self, body: str) -> RenderedMarkdown:
        """Render a Markdown body.

        Args:
            body: Markdown text without front matter

        Returns:
            RenderedMarkdown with HTML, table of contents and plain text
        """
        self._md.reset()
        html = self._md.convert(body)
        toc = getattr(self._md, "toc", "")

        soup = BeautifulSoup(html, "lxml")
        for anchor in soup.select("a.anchor"):
            anchor.decompose()
        # Token spans would otherwise be split into separate words
        for block in soup.select(f"div.{HIGHLIGHT_CLASS}"):
            block.replace_with(block.get_text())
        text = _WHITESPACE_RE.sub(" ", soup.get_text(" ")).strip()

        return RenderedMarkdown(
            html=html,
            toc=toc,
            text=text,
            linked_files=linked_files(html),
            images=linked_files(html, images_only=True),
        )

    def stylesheet(self) -> str:
        """CSS for highlighted code blocks in the configured style."""
        formatter = HtmlFormatter(style=self.config.code_style)
        return formatter.get_style_defs(f".{HIGHLIGHT_CLASS}") + "\n"

    def reading_time(self, text: str) -> int:
        return reading_time(text, self.config.words_per_minute)

    def excerpt(self, text: str) -> str:
        return excerpt(text, self.config.excerpt_length)


def reading_time(text: str, words_per_minute: int = 200) -> int:
    """Minutes needed to read text, rounded up, never below one."""
    words = len(text.split())
    return max(1, math.ceil(words / words_per_minute))


def excerpt(text: str, length: int = 140) -> str:
    """Cut plain text to at most ``length`` characters on a word boundary."""
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if len(text) <= length:
        return text
    cut = text[:length]
    if " " in cut:
        cut = cut[:cut.rindex(" ")]
    return cut.rstrip(" ,.;:") + "…"


def linked_files(html: str, images_only: bool = False) -> list[str]:
    """Relative file references (images, downloads) found in rendered HTML.

    Only paths that stay inside the post directory and name a file are
    returned; page links, anchors and absolute URLs are skipped.
    """
    soup = BeautifulSoup(html, "lxml")
    refs = [img.get("src", "") for img in soup.find_all("img")]
    if not images_only:
        refs += [a.get("href", "") for a in soup.find_all("a")]

    found: list[str] = []
    for ref in refs:
        path = relative_file(ref)
        if path and path not in found:
            found.append(path)
    return found


def relative_file(ref: str) -> Optional[str]:
    """Normalized post-relative file path for ``ref``, or None."""
    parsed = urlparse(ref)
    if parsed.scheme or parsed.netloc or not parsed.path:
        return None
    if parsed.path.startswith("/"):
        return None

    path = PurePosixPath(unquote(parsed.path))
    if not path.suffix or path.suffix in (".md", ".markdown", ".html"):
        return None

    parts: list[str] = []
    for part in path.parts:
        if part == "..":
            if not parts:
                return None
            parts.pop()
        elif part != ".":
            parts.append(part)
    return "/".join(parts) or None
