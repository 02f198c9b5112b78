"""Data models for blog content."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ContentError(ValueError):
    """Raised when a content file cannot be turned into a post."""


class FrontMatterError(ContentError):
    """Raised for a missing, malformed or invalid front matter block."""


class PostFrontMatter(BaseModel):
    """Validated YAML front matter of a post."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str
    date: datetime
    description: str = ""
    image: Optional[str] = None  # hero image, relative to the post

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        # YAML turns unquoted 2020-01-05 into a date, not a datetime
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str):
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        return value

    @field_validator("date")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        # Dates are compared and formatted in UTC
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value):
        return "" if value is None else value


@dataclass(frozen=True)
class Post:
    """A rendered blog post."""
    slug: str  # e.g. "redux-saga-style-guide"
    title: str
    date: datetime
    description: str
    body: str  # raw markdown
    html: str
    toc: str = ""
    excerpt: str = ""
    reading_time: int = 1  # minutes
    image: Optional[str] = None
    source_path: Optional[Path] = None
    linked_files: tuple[str, ...] = field(default_factory=tuple)

    @property
    def url(self) -> str:
        return f"/{self.slug}/"

    @property
    def display_date(self) -> str:
        """Date as shown on pages, e.g. "January 05, 2021"."""
        return self.date.strftime("%B %d, %Y")

    @property
    def summary(self) -> str:
        """Description, or the excerpt when the post has none."""
        return self.description or self.excerpt

    @property
    def reading_time_text(self) -> str:
        return f"{self.reading_time} min read"
