"""Fetching of YAML documents from disk or over HTTP."""

import os
from typing import Dict, Mapping, Optional, Union

import httpx

from floki.errors import (
    FailedToFetchRemoteDocument,
    FailedToReadDocument,
    InvalidEnvironmentVariable,
    MissingEnvironmentVariable,
    ProblemParsingDocument,
)
from floki.models.image import YamlFile, YamlUrl


class DocumentFetcher:
    """Retrieves the raw text of a YAML document."""

    def __init__(
        self,
        transport: Optional[httpx.BaseTransport] = None,
        environ: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize document fetcher.

        Requests block until the server answers unless a timeout is given.
        """
        self.transport = transport
        self.environ = environ if environ is not None else os.environ
        self.timeout = timeout

    def fetch(self, source: Union[YamlFile, YamlUrl]) -> str:
        """Return the document text. Every call reads the source again."""
        if isinstance(source, YamlFile):
            return self._read_file(source)
        return self._get_url(source)

    def resolve_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        """Substitute each header value from the environment variable it names."""
        resolved = {}
        for header, variable in (headers or {}).items():
            value = self.environ.get(variable)
            if value is None:
                raise MissingEnvironmentVariable(variable)
            if not value.isascii():
                raise InvalidEnvironmentVariable(variable, "header values must be ASCII")
            resolved[header] = value
        return resolved

    def _read_file(self, source: YamlFile) -> str:
        try:
            return source.file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ProblemParsingDocument(source.source, e) from e
        except OSError as e:
            raise FailedToReadDocument(source.source, e) from e

    def _get_url(self, source: YamlUrl) -> str:
        url = source.source
        headers = self.resolve_headers(source.headers)

        try:
            with httpx.Client(
                transport=self.transport,
                timeout=self.timeout,
                follow_redirects=True,
            ) as client:
                response = client.get(url, headers=headers)
                response.raise_for_status()
                content = response.content
                encoding = response.encoding or "utf-8"

        except httpx.HTTPStatusError as e:
            raise FailedToFetchRemoteDocument(url, status=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise FailedToFetchRemoteDocument(url, reason=f"couldn't send request: {e}") from e

        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise FailedToFetchRemoteDocument(
                url, status=response.status_code, reason="response is not text"
            ) from e
