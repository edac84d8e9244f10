"""Loading of floki configuration files."""

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from floki.errors import ProblemOpeningConfig, ProblemParsingConfig
from floki.models.config import FlokiConfig
from floki.models.image import YamlFile, YamlImage


logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "floki.yaml"


def find_config(start: Optional[Path] = None, name: str = CONFIG_FILE_NAME) -> Path:
    """Find a configuration file in start or the nearest parent holding one."""
    start = (start or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / name
        if candidate.is_file():
            return candidate
    raise ProblemOpeningConfig(
        name, FileNotFoundError(f"No {name} found in {start} or its parents")
    )


class ConfigManager:
    """Loads a floki configuration file."""

    def __init__(self, config_file: Path):
        """Initialize configuration manager."""
        self.config_file = Path(config_file)
        self.yaml = YAML(typ="safe", pure=True)
        self.config: Optional[FlokiConfig] = None

    @property
    def root_dir(self) -> Path:
        """Directory the configuration file lives in."""
        return self.config_file.parent

    def load(self) -> FlokiConfig:
        """Read, validate and normalize the configuration file."""
        logger.debug(f"Reading configuration file: {self.config_file}")

        data = self._read_yaml()
        try:
            config = FlokiConfig.model_validate(data)
        except ValidationError as e:
            raise ProblemParsingConfig(str(self.config_file), e) from e

        self.config = self._anchor_yaml_file(config)
        logger.debug(f"Parsed '{self.config_file}' into configuration: {self.config!r}")
        return self.config

    def _read_yaml(self) -> Any:
        try:
            content = self.config_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ProblemParsingConfig(str(self.config_file), e) from e
        except OSError as e:
            raise ProblemOpeningConfig(str(self.config_file), e) from e

        try:
            return self.yaml.load(content)
        except YAMLError as e:
            raise ProblemParsingConfig(str(self.config_file), e) from e

    def _anchor_yaml_file(self, config: FlokiConfig) -> FlokiConfig:
        """Make a relative image.yaml.file relative to the configuration file."""
        image = config.image
        if not isinstance(image, YamlImage) or not isinstance(image.yaml, YamlFile):
            return config
        if image.yaml.file.is_absolute():
            return config

        source = image.yaml.model_copy(update={"file": self.root_dir / image.yaml.file})
        logger.debug(f"External YAML file resolved to {source.file}")
        return config.model_copy(update={"image": image.model_copy(update={"yaml": source})})


def load_config(config_file: Path) -> FlokiConfig:
    """Load the configuration file at config_file."""
    return ConfigManager(config_file).load()
