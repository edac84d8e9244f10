"""Image specification models."""

from pathlib import Path
from typing import Annotated, Any, ClassVar, Dict, List, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StrictStr,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from floki.models.union import Variant, decode_union


# Tag given to every locally built image so it never shadows a pulled one.
FLOKI_TAG = "floki"


def _check_key_path(value: str) -> str:
    """Validate a dotted key path."""
    if not value:
        raise ValueError("key must not be empty")
    if any(not segment for segment in value.split(".")):
        raise ValueError(f"key '{value}' contains an empty segment")
    return value


KeyPath = Annotated[StrictStr, AfterValidator(_check_key_path)]

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    """Validate an http(s) URL, keeping it exactly as written."""
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"'{value}' is not a valid http(s) URL") from e
    return value


UrlString = Annotated[StrictStr, AfterValidator(_check_url)]


class _Spec(BaseModel):
    """Immutable model which rejects fields it does not know."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ClassVar[str] = ""


class NameImage(_Spec):
    """An image referred to directly by name."""
    kind: ClassVar[str] = "name"

    name: StrictStr = Field(..., description="Pullable image reference")


class BuildSpec(_Spec):
    """Instructions for building an image locally."""
    name: StrictStr = Field(..., description="Image name, without tag")
    dockerfile: Path = Field(default=Path("Dockerfile"))
    context: Path = Field(default=Path("."))
    target: Optional[Annotated[StrictStr, StringConstraints(min_length=1)]] = Field(
        None, description="Build stage to target"
    )

    @property
    def tagged_name(self) -> str:
        return f"{self.name}:{FLOKI_TAG}"


class BuildImage(_Spec):
    """An image built from a Dockerfile."""
    kind: ClassVar[str] = "build"

    build: BuildSpec


class YamlFile(_Spec):
    """A local YAML document holding the image name."""
    file: Path
    key: KeyPath

    @property
    def source(self) -> str:
        return str(self.file)


class YamlUrl(_Spec):
    """A remote YAML document holding the image name.

    Header values are names of environment variables, read at request time.
    """
    url: UrlString
    key: KeyPath
    headers: Optional[Dict[StrictStr, StrictStr]] = None

    @property
    def source(self) -> str:
        return self.url


YamlSource = Union[YamlFile, YamlUrl]

YAML_SOURCE_VARIANTS = [
    Variant("file", "{file, key}", YamlFile.model_validate),
    Variant("url", "{url, key, headers?}", YamlUrl.model_validate),
]


class YamlImage(_Spec):
    """An image name looked up in a YAML document."""
    kind: ClassVar[str] = "yaml"

    yaml: YamlSource

    @field_validator("yaml", mode="before")
    @classmethod
    def decode_source(cls, value: Any) -> Any:
        """Pick the file or url shape."""
        if isinstance(value, (YamlFile, YamlUrl)):
            return value
        return decode_union(value, YAML_SOURCE_VARIANTS, what="yaml source")


class ExecSpec(_Spec):
    """A user command which prepares an image."""
    command: StrictStr
    args: List[StrictStr]
    image: StrictStr


class ExecImage(_Spec):
    """An image produced as a side effect of running a command."""
    kind: ClassVar[str] = "exec"

    exec: ExecSpec


ImageSpec = Union[NameImage, BuildImage, YamlImage, ExecImage]


def _parse_name(value: Any) -> NameImage:
    return NameImage(name=value)


IMAGE_VARIANTS = [
    Variant("name", "<string>", _parse_name),
    Variant("build", "{build: {name, dockerfile?, context?, target?}}", BuildImage.model_validate),
    Variant("yaml", "{yaml: {file, key} | {url, key, headers?}}", YamlImage.model_validate),
    Variant("exec", "{exec: {command, args, image}}", ExecImage.model_validate),
]


def parse_image(value: Any) -> ImageSpec:
    """Decode the image field of a configuration file."""
    if isinstance(value, (NameImage, BuildImage, YamlImage, ExecImage)):
        return value
    return decode_union(value, IMAGE_VARIANTS, what="image")
