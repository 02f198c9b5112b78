# Publisher — site build, preview and bucket deploy
"""
Publisher module for building and deploying the blog.

Handles the full site build into ``public/``, local preview with
rebuild-on-change, and syncing the output to the storage bucket.
"""

from .builder import SiteBuilder
from .models import BuildResult, UploadResult
from .server import ContentWatcher, DevServer, serve
from .uploader import BucketUploader

__all__ = [
    "BucketUploader",
    "BuildResult",
    "ContentWatcher",
    "DevServer",
    "SiteBuilder",
    "UploadResult",
    "serve",
]
