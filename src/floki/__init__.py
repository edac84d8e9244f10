"""
floki - reproducible build tooling in docker containers.

Resolves the image described in a floki.yaml file into the name of an image
available locally, building or preparing it when needed.
"""

__version__ = "0.7.1"

# Re-export key components for easier access
from floki.config import load_config
from floki.models.config import FlokiConfig
from floki.models.image import ImageSpec, parse_image
from floki.providers.image import ImageProvider

__all__ = [
    "FlokiConfig",
    "ImageProvider",
    "ImageSpec",
    "load_config",
    "parse_image",
]
