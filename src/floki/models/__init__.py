"""Pydantic models for configuration and validation."""

from floki.models.config import FlokiConfig, DindImage, Entrypoint, TwoShell, Volume
from floki.models.image import (
    BuildImage,
    BuildSpec,
    ExecImage,
    ExecSpec,
    ImageSpec,
    NameImage,
    YamlFile,
    YamlImage,
    YamlUrl,
    parse_image,
)
from floki.models.union import Variant, decode_union

__all__ = [
    "FlokiConfig",
    "DindImage",
    "Entrypoint",
    "TwoShell",
    "Volume",
    "BuildImage",
    "BuildSpec",
    "ExecImage",
    "ExecSpec",
    "ImageSpec",
    "NameImage",
    "YamlFile",
    "YamlImage",
    "YamlUrl",
    "parse_image",
    "Variant",
    "decode_union",
]
