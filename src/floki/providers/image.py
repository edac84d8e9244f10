"""Image provider for resolving and obtaining floki images."""

from pathlib import Path
from typing import List, Optional

from floki.errors import (
    FailedToBuildImage,
    FailedToCheckForImage,
    FailedToPullImage,
    FailedToSpawnProcess,
    SubprocessExitStatus,
)
from floki.models.image import BuildImage, ExecImage, ImageSpec, NameImage, YamlImage
from floki.providers.document import DocumentFetcher
from floki.utils.keypath import parse_document, resolve_key
from floki.utils.process import ExitStatus, ProcessRunner, SubprocessRunner


class ImageProvider:
    """Turns image specifications into names of locally available images."""

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        fetcher: Optional[DocumentFetcher] = None,
    ):
        """Initialize image provider."""
        self.runner = runner or SubprocessRunner()
        self.fetcher = fetcher or DocumentFetcher()

    def name(self, spec: ImageSpec) -> str:
        """Name of the image, without building or running anything.

        Yaml specs fetch their document on every call.
        """
        if isinstance(spec, NameImage):
            return spec.name
        if isinstance(spec, BuildImage):
            return spec.build.tagged_name
        if isinstance(spec, YamlImage):
            source = spec.yaml
            document = parse_document(self.fetcher.fetch(source), source.source)
            return resolve_key(document, source.key, source.source)
        if isinstance(spec, ExecImage):
            return spec.exec.image
        raise TypeError(f"Unknown image specification: {spec!r}")

    def obtain(self, spec: ImageSpec, root_dir: Path) -> str:
        """Do the work needed to have the image locally, then return its name."""
        if isinstance(spec, BuildImage):
            name = self.name(spec)
            build = spec.build
            cmd = ["docker", "build", "-t", name, "-f", str(root_dir / build.dockerfile)]
            if build.target is not None:
                cmd += ["--target", build.target]
            cmd.append(str(root_dir / build.context))

            status = self._spawn("docker build", cmd, cwd=root_dir)
            if not status.success:
                raise FailedToBuildImage(name, SubprocessExitStatus("docker build", status))
            return name

        if isinstance(spec, ExecImage):
            name = self.name(spec)
            command = spec.exec.command
            status = self._spawn(command, [command, *spec.exec.args])
            if not status.success:
                raise FailedToBuildImage(name, SubprocessExitStatus(command, status))
            return name

        # Nothing to prepare for the other kinds
        return self.name(spec)

    def pull(self, name: str) -> None:
        """Pull an image by name."""
        status = self._spawn("docker pull", ["docker", "pull", name])
        if not status.success:
            raise FailedToPullImage(name, SubprocessExitStatus("docker pull", status))

    def exists_locally(self, name: str) -> bool:
        """Whether docker already has the image."""
        try:
            status = self.runner.run(["docker", "history", name], quiet=True)
        except OSError as e:
            raise FailedToCheckForImage(name, e) from e
        return status.success

    def ensure_pulled(self, name: str) -> bool:
        """Pull the image unless it is already present. Returns True if pulled."""
        if self.exists_locally(name):
            return False
        self.pull(name)
        return True

    def _spawn(self, description: str, cmd: List[str], cwd: Optional[Path] = None) -> ExitStatus:
        try:
            return self.runner.run(cmd, cwd=cwd)
        except OSError as e:
            raise FailedToSpawnProcess(description, e) from e
