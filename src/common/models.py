"""Shared Pydantic data models for the blog.

Site metadata is flat, read once per build and never mutated.
"""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict


class Social(BaseModel):
    """Social profiles linked from the footer."""
    model_config = ConfigDict(frozen=True)

    twitter: str = ""
    github: str = ""
    stackoverflow: str = ""  # full profile URL


class SiteMetadata(BaseModel):
    """Site-wide metadata shared by every page."""
    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    description: str = ""
    site_url: str = ""
    social: Social = Social()

    @property
    def host(self) -> str:
        """Bare host name of the site, e.g. ``erock.io``."""
        return urlparse(self.site_url).netloc or self.site_url

    def absolute_url(self, path: str) -> str:
        return f"{self.site_url.rstrip('/')}/{path.lstrip('/')}"
