# Common utilities and shared modules
"""
Shared components used by every part of the site engine:
- Data models (Pydantic schemas)
- Logging configuration
- Project configuration
"""

from .config import settings, Settings, PROJECT_ROOT, CONTENT_DIR, PUBLIC_DIR
from .logging import setup_logging
from .models import SiteMetadata, Social

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "CONTENT_DIR",
    "PUBLIC_DIR",
    "setup_logging",
    "SiteMetadata",
    "Social",
]
