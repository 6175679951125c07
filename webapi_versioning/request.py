"""
Requested API version extraction.

The version is read once per request and reader, and cached on
``request.state["api_version"]`` keyed by the reader that produced it.
"""

from typing import Any, Optional
import logging

from .config import VersioningConfig
from .version import ApiVersion


logger = logging.getLogger("webapi_versioning.request")

STATE_KEY = "api_version"


def requested_api_version(
    request: Any,
    config: Optional[VersioningConfig] = None,
) -> Optional[ApiVersion]:
    """
    Get the API version a request asks for.

    Args:
        request: Request exposing ``header()``, ``query_param()`` and ``state``
        config: Versioning options (defaults apply when omitted)

    Returns:
        The requested version, the default version when the config assumes
        one, or None when the request does not specify a version

    Raises:
        InvalidApiVersionFault: If the request carries unparsable version text
        AmbiguousApiVersionFault: If the request carries conflicting versions
    """
    config = config or VersioningConfig()
    reader = config.reader
    reader_key = repr(reader)

    state = getattr(request, "state", None)
    cache = state.setdefault(STATE_KEY, {}) if isinstance(state, dict) else {}

    # Keyed by reader: groups may read different sources
    if reader_key in cache:
        version = cache[reader_key]
    else:
        raw = reader.read(request)
        version = ApiVersion.parse(raw) if raw is not None else None
        cache[reader_key] = version
        logger.debug("Requested API version: %s (raw=%r, reader=%s)", version, raw, reader_key)

    if version is None and config.assume_default_version_when_unspecified:
        return config.default_api_version
    return version


__all__ = ["requested_api_version", "STATE_KEY"]
