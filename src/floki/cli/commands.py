"""Command implementations for CLI."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from floki.config import ConfigManager, find_config
from floki.models.image import BuildImage, ExecImage, NameImage, YamlImage
from floki.providers.image import ImageProvider


logger = logging.getLogger(__name__)

console = Console()


def _load(config_path: Optional[Path]) -> ConfigManager:
    """Load the given configuration file, or the nearest floki.yaml."""
    manager = ConfigManager(config_path or find_config())
    manager.load()
    return manager


def resolve_name(config_path: Optional[Path], provider: Optional[ImageProvider] = None) -> str:
    """Print the name of the configured image."""
    manager = _load(config_path)
    provider = provider or ImageProvider()
    spec = manager.config.image

    logger.info(f"Resolving {spec.kind} image from {manager.config_file}")
    name = provider.name(spec)
    logger.info(f"Resolved image name: {name}")

    console.out(name, highlight=False)
    return name


def obtain_image(config_path: Optional[Path], provider: Optional[ImageProvider] = None) -> str:
    """Build or prepare the configured image and print its name."""
    manager = _load(config_path)
    provider = provider or ImageProvider()
    config = manager.config

    logger.info(f"Obtaining {config.image.kind} image from {manager.config_file}")
    name = provider.obtain(config.image, manager.root_dir)
    logger.info(f"Obtained image: {name}")

    if config.dind_image:
        logger.info(f"Checking docker-in-docker image {config.dind_image}")
        if provider.ensure_pulled(config.dind_image):
            logger.info(f"Pulled docker-in-docker image {config.dind_image}")

    console.out(name, highlight=False)
    return name


def pull_image(name: str, provider: Optional[ImageProvider] = None):
    """Pull an image by name."""
    provider = provider or ImageProvider()
    logger.info(f"Pulling image: {name}")
    provider.pull(name)
    logger.info(f"Pulled image: {name}")


def image_exists(name: str, provider: Optional[ImageProvider] = None) -> bool:
    """Report whether an image is available locally."""
    provider = provider or ImageProvider()
    logger.debug(f"Checking for image: {name}")
    present = provider.exists_locally(name)
    if present:
        console.print(f"[green]✓[/green] {name} is present")
    else:
        console.print(f"[yellow]✗[/yellow] {name} is not present")
    return present


def _describe_image(spec) -> str:
    if isinstance(spec, NameImage):
        return spec.name
    if isinstance(spec, BuildImage):
        return f"{spec.build.tagged_name} from {spec.build.dockerfile}"
    if isinstance(spec, YamlImage):
        return f"key {spec.yaml.key} of {spec.yaml.source}"
    if isinstance(spec, ExecImage):
        return f"{spec.exec.image} via {spec.exec.command}"
    return repr(spec)


def validate_config(config_path: Optional[Path]):
    """Validate the configuration file and summarize it."""
    manager = _load(config_path)
    config = manager.config

    table = Table(title=str(manager.config_file))
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("image", f"[magenta]{config.image.kind}[/magenta] {_describe_image(config.image)}")
    table.add_row("shell", config.inner_shell if config.inner_shell == config.outer_shell
                  else f"{config.outer_shell} / {config.inner_shell}")
    table.add_row("mount", str(config.mount))
    table.add_row("dind", config.dind_image or "off")
    table.add_row("volumes", ", ".join(config.volumes) or "-")

    console.print(table)
    console.print("[green]✓[/green] Configuration is valid")
