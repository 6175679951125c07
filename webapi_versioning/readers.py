"""
API Version Readers

Readers pull the raw requested API version text out of a request.
They do not parse it; see ``webapi_versioning.request``.

The request is duck-typed against Aquilia's ``Request``:
``request.header(name, default)`` and ``request.query_param(name, default)``.
"""

from typing import Any, Iterable, List, Optional

from .faults import AmbiguousApiVersionFault, InvalidArgumentFault


DEFAULT_QUERY_PARAMETER = "api-version"


def _single_value(values: Iterable[Optional[str]]) -> Optional[str]:
    """Collapse candidate values to one, or fail if they disagree."""
    found: List[str] = []
    for value in values:
        if value is None:
            continue
        value = value.strip()
        if value and value not in found:
            found.append(value)

    if not found:
        return None
    if len(found) > 1:
        raise AmbiguousApiVersionFault(found)
    return found[0]


class ApiVersionReader:
    """Base class for API version readers."""

    def read(self, request: Any) -> Optional[str]:
        """
        Read the raw API version text from a request.

        Returns:
            Version text, or None if the request does not specify one

        Raises:
            AmbiguousApiVersionFault: If different values are present
        """
        raise NotImplementedError

    @staticmethod
    def combine(*readers: "ApiVersionReader") -> "ApiVersionReader":
        """Combine readers; a single reader is returned unchanged."""
        if len(readers) == 1:
            return readers[0]
        return CombinedApiVersionReader(*readers)


class QueryStringApiVersionReader(ApiVersionReader):
    """Reads the version from query parameters (``?api-version=2.0``)."""

    def __init__(self, *names: str):
        self.names = tuple(names) or (DEFAULT_QUERY_PARAMETER,)

    def read(self, request: Any) -> Optional[str]:
        return _single_value(request.query_param(name) for name in self.names)

    def __repr__(self) -> str:
        return f"QueryStringApiVersionReader{self.names!r}"


class HeaderApiVersionReader(ApiVersionReader):
    """Reads the version from request headers (``api-version: 2.0``)."""

    def __init__(self, *names: str):
        if not names:
            raise InvalidArgumentFault("names")
        self.names = tuple(names)

    def read(self, request: Any) -> Optional[str]:
        return _single_value(request.header(name) for name in self.names)

    def __repr__(self) -> str:
        return f"HeaderApiVersionReader{self.names!r}"


class MediaTypeApiVersionReader(ApiVersionReader):
    """
    Reads the version from a media type parameter.

    ``Accept: application/json;v=2.0`` is checked first, then
    ``Content-Type``.
    """

    def __init__(self, parameter: str = "v"):
        if not parameter:
            raise InvalidArgumentFault("parameter")
        self.parameter = parameter.lower()

    def _from_media_types(self, header_value: Optional[str]) -> Optional[str]:
        if not header_value:
            return None
        values = []
        for media_type in header_value.split(","):
            for param in media_type.split(";")[1:]:
                key, sep, value = param.partition("=")
                if sep and key.strip().lower() == self.parameter:
                    values.append(value.strip().strip('"'))
        return _single_value(values)

    def read(self, request: Any) -> Optional[str]:
        version = self._from_media_types(request.header("accept"))
        if version is None:
            version = self._from_media_types(request.header("content-type"))
        return version

    def __repr__(self) -> str:
        return f"MediaTypeApiVersionReader({self.parameter!r})"


class CombinedApiVersionReader(ApiVersionReader):
    """Reads with several readers; they must agree."""

    def __init__(self, *readers: ApiVersionReader):
        if not readers:
            raise InvalidArgumentFault("readers")
        self.readers = tuple(readers)

    def read(self, request: Any) -> Optional[str]:
        return _single_value(reader.read(request) for reader in self.readers)

    def __repr__(self) -> str:
        return f"CombinedApiVersionReader{self.readers!r}"


__all__ = [
    "DEFAULT_QUERY_PARAMETER",
    "ApiVersionReader",
    "QueryStringApiVersionReader",
    "HeaderApiVersionReader",
    "MediaTypeApiVersionReader",
    "CombinedApiVersionReader",
]
