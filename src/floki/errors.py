"""Errors raised while loading configuration and resolving images."""

from dataclasses import dataclass
from typing import List, Optional

from floki.utils.process import ExitStatus


class FlokiError(Exception):
    """Base exception for all floki errors."""
    pass


@dataclass
class SubprocessExitStatus:
    """Description of a subprocess together with how it exited."""
    process_description: str
    exit_status: ExitStatus

    def __str__(self) -> str:
        return f"{self.process_description} ({self.exit_status})"


class ProblemOpeningConfig(FlokiError):
    """Configuration file could not be opened."""

    def __init__(self, name: str, error: OSError):
        self.name = name
        self.error = error
        super().__init__(f"There was a problem opening the configuration file '{name}': {error}")


class ProblemParsingConfig(FlokiError):
    """Configuration file is not valid YAML or does not fit the schema."""

    def __init__(self, name: str, error: Exception):
        self.name = name
        self.error = error
        super().__init__(f"There was a problem parsing the configuration file '{name}': {error}")


class VariantDecodeError(FlokiError, ValueError):
    """No shape, or more than one shape, matched an untagged value.

    Subclasses ValueError so pydantic reports it as a field validation error.
    """

    def __init__(
        self,
        what: str,
        snippet: str,
        shapes: List[str],
        matched: Optional[List[str]] = None,
    ):
        self.what = what
        self.snippet = snippet
        self.shapes = shapes
        self.matched = matched or []
        if self.matched:
            message = (
                f"{what} {snippet} is ambiguous, it matches more than one shape: "
                f"{', '.join(self.matched)}"
            )
        else:
            message = (
                f"{what} {snippet} does not match any expected shape, tried: "
                f"{'; '.join(shapes)}"
            )
        super().__init__(message)


class FailedToBuildImage(FlokiError):
    """Building (or preparing) an image exited unsuccessfully."""

    def __init__(self, image: str, exit_status: SubprocessExitStatus):
        self.image = image
        self.exit_status = exit_status
        super().__init__(f"Failed to build image '{image}': {exit_status}")


class FailedToPullImage(FlokiError):
    """docker pull exited unsuccessfully."""

    def __init__(self, image: str, exit_status: SubprocessExitStatus):
        self.image = image
        self.exit_status = exit_status
        super().__init__(f"Failed to pull image '{image}': {exit_status}")


class FailedToCheckForImage(FlokiError):
    """The local image existence check could not be run."""

    def __init__(self, image: str, error: OSError):
        self.image = image
        self.error = error
        super().__init__(f"Failed to check existence of image '{image}': {error}")


class FailedToSpawnProcess(FlokiError):
    """A subprocess could not be started at all."""

    def __init__(self, description: str, error: OSError):
        self.description = description
        self.error = error
        super().__init__(f"Failed to run '{description}': {error}")


class FailedToResolveKey(FlokiError):
    """A key path did not lead to a string in the document."""

    def __init__(self, key: str, source: str, reason: Optional[str] = None):
        self.key = key
        self.source = source
        self.reason = reason
        message = f"Couldn't find key '{key}' in {source}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class FailedToReadDocument(FlokiError):
    """A local YAML document could not be read."""

    def __init__(self, path: str, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Failed to read YAML document '{path}': {error}")


class ProblemParsingDocument(FlokiError):
    """A retrieved document is not YAML."""

    def __init__(self, source: str, error: Exception):
        self.source = source
        self.error = error
        super().__init__(f"Retrieved document {source} doesn't seem to be YAML: {error}")


class FailedToFetchRemoteDocument(FlokiError):
    """A remote YAML document could not be retrieved."""

    def __init__(self, url: str, status: Optional[int] = None, reason: Optional[str] = None):
        self.url = url
        self.status = status
        self.reason = reason
        message = f"Failed to fetch {url}"
        if status is not None:
            message += f": HTTP {status}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MissingEnvironmentVariable(FlokiError):
    """A header refers to an environment variable that is not set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Couldn't fetch environment variable {name}")


class InvalidEnvironmentVariable(FlokiError):
    """An environment variable holds a value that cannot be used."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Environment variable {name} can't be used: {reason}")
