"""Providers resolving image specifications."""

from floki.providers.document import DocumentFetcher
from floki.providers.image import ImageProvider

__all__ = [
    "DocumentFetcher",
    "ImageProvider",
]
