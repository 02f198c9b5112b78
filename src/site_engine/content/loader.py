"""Load Markdown posts from the content directory."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from src.common.logging import setup_logging

from .front_matter import load_front_matter
from .markdown_renderer import MarkdownRenderer, relative_file
from .models import ContentError, Post

logger = setup_logging(module_name="content.loader")

MARKDOWN_SUFFIXES = (".md", ".markdown")


def slug_for(path: Path, content_root: Path) -> str:
    """Slug of a post file.

    ``<root>/hello-world/index.md`` → ``hello-world``
    ``<root>/notes/sagas.md`` → ``notes/sagas``
    """
    relative = path.relative_to(content_root)
    parts = list(relative.parent.parts)
    if relative.stem != "index":
        parts.append(relative.stem)
    if not parts:
        raise ContentError(f"{path}: index file at content root has no slug")
    return "/".join(parts)


def load_post(
    path: Path,
    content_root: Path,
    renderer: Optional[MarkdownRenderer] = None,
) -> Post:
    """Read, validate and render a single post.

    Raises:
        FrontMatterError: invalid front matter
        ContentError: an embedded image or the hero image does not exist
    """
    renderer = renderer or MarkdownRenderer()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ContentError(f"{path}: not valid UTF-8: {e}") from e
    meta, body = load_front_matter(text, source=path)
    rendered = renderer.render(body)

    files = list(rendered.linked_files)
    required = set(rendered.images)
    if meta.image:
        hero = relative_file(meta.image)
        if hero is None:
            raise ContentError(f"{path}: hero image must be a relative file path")
        required.add(hero)
        if hero not in files:
            files.append(hero)

    for name in list(files):
        if (path.parent / name).is_file():
            continue
        if name in required:
            raise ContentError(f"{path}: linked file not found: {name}")
        # Plain links that only look like files, e.g. [site](example.com)
        logger.warning("%s: link target %s not found, leaving link as is", path, name)
        files.remove(name)

    return Post(
        slug=slug_for(path, content_root),
        title=meta.title,
        date=meta.date,
        description=meta.description,
        body=body,
        html=rendered.html,
        toc=rendered.toc,
        excerpt=renderer.excerpt(rendered.text),
        reading_time=renderer.reading_time(rendered.text),
        image=relative_file(meta.image) if meta.image else None,
        source_path=path,
        linked_files=tuple(files),
    )


def load_posts(
    content_dir: Path,
    renderer: Optional[MarkdownRenderer] = None,
) -> list[Post]:
    """Load every post under content_dir, newest first.

    Raises:
        ContentError: missing directory or duplicate slugs
    """
    if not content_dir.is_dir():
        raise ContentError(f"Content directory not found: {content_dir}")

    renderer = renderer or MarkdownRenderer()
    paths = sorted(
        p for p in content_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in MARKDOWN_SUFFIXES
    )

    posts: list[Post] = []
    seen: dict[str, Path] = {}
    for path in paths:
        post = load_post(path, content_dir, renderer)
        if post.slug in seen:
            raise ContentError(
                f"Duplicate slug '{post.slug}': {seen[post.slug]} and {path}"
            )
        seen[post.slug] = path
        posts.append(post)
        logger.debug("Loaded post %s (%s)", post.slug, post.display_date)

    # Newest first, slug breaks ties so ordering is stable
    posts.sort(key=lambda p: p.slug)
    posts.sort(key=lambda p: p.date, reverse=True)
    logger.info("Loaded %d posts from %s", len(posts), content_dir)
    return posts


def adjacent_posts(
    posts: list[Post],
    index: int,
) -> tuple[Optional[Post], Optional[Post]]:
    """(previous, next) neighbours of posts[index] in a newest-first list.

    ``previous`` is the older post, ``next`` the newer one.
    """
    previous = posts[index + 1] if index + 1 < len(posts) else None
    next_post = posts[index - 1] if index > 0 else None
    return previous, next_post
