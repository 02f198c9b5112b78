# Open-graph Image Module
# Rasterizes the open-graph preview template to PNG with Pillow

from .generator import OGImageGenerator, cache_key, gradient_color

__all__ = [
    "OGImageGenerator",
    "cache_key",
    "gradient_color",
]
