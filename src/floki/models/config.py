"""Configuration models."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from floki.models.image import ImageSpec, parse_image
from floki.models.union import Variant, decode_union


DEFAULT_DIND_IMAGE = "docker:stable-dind"


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class TwoShell(_Strict):
    """Separate shells for the outer and inner command."""
    inner: StrictStr
    outer: StrictStr


class DindImage(_Strict):
    """Docker-in-docker with a custom image."""
    image: StrictStr


class Volume(_Strict):
    """A volume mounted into the floki container."""
    # Shared volumes are reused by every configuration naming them.
    shared: StrictBool = False
    mount: Path


class Entrypoint(_Strict):
    """Whether to override the image entrypoint."""
    suppress: StrictBool = True

    def value(self) -> Optional[str]:
        """Entrypoint to pass to docker, if any."""
        return "" if self.suppress else None


def _strict_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError("expected a string")
    return value


def _strict_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError("expected a boolean")
    return value


SHELL_VARIANTS = [
    Variant("shell", "<string>", _strict_str),
    Variant("two shells", "{inner, outer}", TwoShell.model_validate),
]

DIND_VARIANTS = [
    Variant("toggle", "<boolean>", _strict_bool),
    Variant("image", "{image}", DindImage.model_validate),
]


class FlokiConfig(BaseModel):
    """Contents of a floki.yaml file."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    image: ImageSpec
    init: List[StrictStr] = Field(default_factory=list)
    shell: Union[StrictStr, TwoShell] = Field(default="sh")
    mount: Path = Field(default=Path("/src"))
    docker_switches: List[StrictStr] = Field(default_factory=list)
    forward_ssh_agent: StrictBool = False
    dind: Union[StrictBool, DindImage] = False
    forward_user: StrictBool = False
    volumes: Dict[StrictStr, Volume] = Field(default_factory=dict)
    entrypoint: Entrypoint = Field(default_factory=Entrypoint)

    @field_validator("image", mode="before")
    @classmethod
    def decode_image(cls, v):
        """Decode the untagged image specification."""
        return parse_image(v)

    @field_validator("shell", mode="before")
    @classmethod
    def decode_shell(cls, v):
        if isinstance(v, TwoShell):
            return v
        return decode_union(v, SHELL_VARIANTS, what="shell")

    @field_validator("dind", mode="before")
    @classmethod
    def decode_dind(cls, v):
        if isinstance(v, DindImage):
            return v
        return decode_union(v, DIND_VARIANTS, what="dind")

    @property
    def inner_shell(self) -> str:
        return self.shell.inner if isinstance(self.shell, TwoShell) else self.shell

    @property
    def outer_shell(self) -> str:
        return self.shell.outer if isinstance(self.shell, TwoShell) else self.shell

    @property
    def dind_image(self) -> Optional[str]:
        """Image to run docker-in-docker with, or None when disabled."""
        if isinstance(self.dind, DindImage):
            return self.dind.image
        return DEFAULT_DIND_IMAGE if self.dind else None
