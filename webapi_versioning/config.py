"""
Versioning configuration - Layered typed options.

Merge precedence (later overrides earlier):
1. Dataclass defaults
2. Config file (YAML or JSON; top-level keys or a ``versioning:`` section)
3. ``.env`` file (AQV_* keys)
4. Environment variables (AQV_* keys)
5. Manual overrides
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple
import json
import logging
import os

import yaml
from dotenv import dotenv_values

from .faults import ConfigInvalidFault, InvalidApiVersionFault
from .readers import (
    ApiVersionReader,
    DEFAULT_QUERY_PARAMETER,
    HeaderApiVersionReader,
    MediaTypeApiVersionReader,
    QueryStringApiVersionReader,
)
from .version import ApiVersion


logger = logging.getLogger("webapi_versioning.config")

DEFAULT_ENV_PREFIX = "AQV_"


@dataclass(frozen=True)
class VersioningConfig:
    """
    API versioning options.

    Attributes:
        default_api_version: Version assumed for controllers that declare none.
            Must be text or an int in config files; floats are rejected
        assume_default_version_when_unspecified: Treat requests without a
            version as asking for ``default_api_version``
        query_parameter: Query string parameter holding the version
        header_names: Request headers holding the version
        media_type_parameter: Media type parameter holding the version
        report_api_versions: Whether supported versions should be advertised
    """
    default_api_version: ApiVersion = field(default_factory=ApiVersion.default)
    assume_default_version_when_unspecified: bool = False
    query_parameter: str = DEFAULT_QUERY_PARAMETER
    header_names: Tuple[str, ...] = ()
    media_type_parameter: Optional[str] = None
    report_api_versions: bool = False

    @property
    def reader(self) -> ApiVersionReader:
        """Reader built from the configured sources."""
        readers = [QueryStringApiVersionReader(self.query_parameter)]
        if self.header_names:
            readers.append(HeaderApiVersionReader(*self.header_names))
        if self.media_type_parameter:
            readers.append(MediaTypeApiVersionReader(self.media_type_parameter))
        return ApiVersionReader.combine(*readers)

    # ========================================================================
    # Loading
    # ========================================================================

    @classmethod
    def load(
        cls,
        path: Optional[str] = None,
        env_file: Optional[str] = None,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> "VersioningConfig":
        """
        Load configuration from all sources.

        Args:
            path: YAML or JSON config file
            env_file: Path to .env file
            env_prefix: Prefix for environment variables
            overrides: Manual overrides (highest precedence)

        Returns:
            Validated VersioningConfig

        Raises:
            ConfigInvalidFault: If a value cannot be coerced
        """
        data: Dict[str, Any] = {}

        if path:
            data.update(_load_file(Path(path)))

        if env_file and Path(env_file).exists():
            data.update(_from_env_mapping(dotenv_values(env_file), env_prefix))

        data.update(_from_env_mapping(os.environ, env_prefix))

        if overrides:
            data.update(overrides)

        config = cls.from_dict(data)
        logger.debug("Loaded versioning config: %r", config)
        return config

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VersioningConfig":
        """Build a config from raw values, coercing each known field."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, raw in data.items():
            if key not in known:
                logger.debug("Ignoring unknown versioning option '%s'", key)
                continue
            values[key] = _COERCERS[key](key, raw)
        return cls(**values)

    def with_options(self, **changes: Any) -> "VersioningConfig":
        """Return a copy with the given options changed."""
        return replace(self, **{k: _COERCERS[k](k, v) for k, v in changes.items()})


# ============================================================================
# Sources
# ============================================================================

def _load_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigInvalidFault("path", f"config file '{path}' does not exist")

    with open(path) as f:
        if path.suffix == ".json":
            data = json.load(f)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            raise ConfigInvalidFault("path", f"unsupported config file type '{path.suffix}'")

    if not data:
        return {}
    if not isinstance(data, dict):
        raise ConfigInvalidFault("path", "config file must contain a mapping")
    section = data.get("versioning", data)
    if not isinstance(section, dict):
        raise ConfigInvalidFault("versioning", "must be a mapping")
    return dict(section)


def _from_env_mapping(env: Mapping[str, Optional[str]], prefix: str) -> Dict[str, Any]:
    """Convert AQV_DEFAULT_API_VERSION style keys to field names."""
    result = {}
    for key, value in env.items():
        if key.startswith(prefix) and value is not None:
            result[key[len(prefix):].lower()] = value
    return result


# ============================================================================
# Coercion
# ============================================================================

def _to_version(key: str, value: Any) -> ApiVersion:
    if isinstance(value, float):
        # YAML reads 1.10 as 1.1
        raise ConfigInvalidFault(key, f"{value!r} is a float; quote API versions in config files")
    try:
        return ApiVersion.coerce(value)
    except InvalidApiVersionFault:
        raise ConfigInvalidFault(key, f"'{value}' is not a valid API version") from None


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "yes", "1", "on"):
        return True
    if text in ("false", "no", "0", "off", ""):
        return False
    raise ConfigInvalidFault(key, f"'{value}' is not a boolean")


def _to_str(key: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigInvalidFault(key, "must be a non-empty string")
    return value.strip()


def _to_optional_str(key: str, value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return _to_str(key, value)


def _to_names(key: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ConfigInvalidFault(key, "must be a list or comma-separated string")
    return tuple(str(item).strip() for item in items if str(item).strip())


_COERCERS = {
    "default_api_version": _to_version,
    "assume_default_version_when_unspecified": _to_bool,
    "query_parameter": _to_str,
    "header_names": _to_names,
    "media_type_parameter": _to_optional_str,
    "report_api_versions": _to_bool,
}


__all__ = ["VersioningConfig", "DEFAULT_ENV_PREFIX"]
