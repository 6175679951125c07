"""
Versioning Config (config.py)

Tests VersioningConfig defaults, reader construction and layered loading.
"""

import json
import os

import pytest

from webapi_versioning import (
    ApiVersion,
    CombinedApiVersionReader,
    ConfigInvalidFault,
    QueryStringApiVersionReader,
    VersioningConfig,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("AQV_"):
            monkeypatch.delenv(key)


# ============================================================================
# Defaults & Readers
# ============================================================================

class TestDefaults:

    def test_defaults(self):
        config = VersioningConfig()
        assert config.default_api_version == ApiVersion(1, 0)
        assert config.assume_default_version_when_unspecified is False
        assert config.query_parameter == "api-version"
        assert config.header_names == ()
        assert config.media_type_parameter is None

    def test_frozen(self):
        config = VersioningConfig()
        with pytest.raises(AttributeError):
            config.query_parameter = "v"

    def test_default_reader_is_query_string(self):
        reader = VersioningConfig().reader
        assert isinstance(reader, QueryStringApiVersionReader)
        assert reader.names == ("api-version",)

    def test_combined_reader(self):
        config = VersioningConfig(header_names=("api-version",), media_type_parameter="v")
        reader = config.reader
        assert isinstance(reader, CombinedApiVersionReader)
        assert len(reader.readers) == 3

    def test_with_options(self):
        config = VersioningConfig().with_options(default_api_version="2.0", header_names="a, b")
        assert config.default_api_version == ApiVersion(2, 0)
        assert config.header_names == ("a", "b")


# ============================================================================
# from_dict
# ============================================================================

class TestFromDict:

    def test_coerces_values(self):
        config = VersioningConfig.from_dict({
            "default_api_version": "2016-07-01",
            "assume_default_version_when_unspecified": "yes",
            "header_names": ["x-api-version"],
            "report_api_versions": "1",
        })
        assert str(config.default_api_version) == "2016-07-01"
        assert config.assume_default_version_when_unspecified is True
        assert config.header_names == ("x-api-version",)
        assert config.report_api_versions is True

    def test_numeric_version(self):
        assert VersioningConfig.from_dict({"default_api_version": 2}).default_api_version == ApiVersion(2, 0)

    def test_float_version_rejected(self):
        with pytest.raises(ConfigInvalidFault) as exc:
            VersioningConfig.from_dict({"default_api_version": 1.1})
        assert "quote" in exc.value.message

    def test_ignores_unknown_keys(self):
        assert VersioningConfig.from_dict({"unknown": 1}) == VersioningConfig()

    def test_invalid_version(self):
        with pytest.raises(ConfigInvalidFault) as exc:
            VersioningConfig.from_dict({"default_api_version": "latest"})
        assert exc.value.key == "default_api_version"

    def test_invalid_bool(self):
        with pytest.raises(ConfigInvalidFault):
            VersioningConfig.from_dict({"report_api_versions": "maybe"})

    def test_empty_query_parameter(self):
        with pytest.raises(ConfigInvalidFault):
            VersioningConfig.from_dict({"query_parameter": ""})


# ============================================================================
# load
# ============================================================================

class TestLoad:

    def test_no_sources(self):
        assert VersioningConfig.load() == VersioningConfig()

    def test_yaml_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("versioning:\n  default_api_version: '2.0'\n  query_parameter: v\n")
        config = VersioningConfig.load(str(path))
        assert config.default_api_version == ApiVersion(2, 0)
        assert config.query_parameter == "v"

    def test_yaml_unquoted_version_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("default_api_version: 1.10\n")
        with pytest.raises(ConfigInvalidFault):
            VersioningConfig.load(str(path))

    def test_yaml_quoted_version(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("default_api_version: '1.10'\n")
        assert VersioningConfig.load(str(path)).default_api_version == ApiVersion(1, 10)

    def test_yaml_top_level(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("header_names:\n  - api-version\n")
        assert VersioningConfig.load(str(path)).header_names == ("api-version",)

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"versioning": {"media_type_parameter": "v"}}))
        assert VersioningConfig.load(str(path)).media_type_parameter == "v"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigInvalidFault):
            VersioningConfig.load(str(tmp_path / "missing.yaml"))

    def test_unsupported_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("x = 1\n")
        with pytest.raises(ConfigInvalidFault):
            VersioningConfig.load(str(path))

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("AQV_DEFAULT_API_VERSION=3.0\nOTHER=1\n")
        config = VersioningConfig.load(env_file=str(env_file))
        assert config.default_api_version == ApiVersion(3, 0)

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("AQV_HEADER_NAMES", "x-api-version,api-version")
        config = VersioningConfig.load()
        assert config.header_names == ("x-api-version", "api-version")

    def test_precedence(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("default_api_version: '1.1'\nquery_parameter: file\nheader_names: [file]\n")
        env_file = tmp_path / ".env"
        env_file.write_text("AQV_QUERY_PARAMETER=dotenv\nAQV_HEADER_NAMES=dotenv\n")
        monkeypatch.setenv("AQV_HEADER_NAMES", "environ")

        config = VersioningConfig.load(
            str(path),
            env_file=str(env_file),
            overrides={"default_api_version": "9.0"},
        )

        assert config.default_api_version == ApiVersion(9, 0)
        assert config.query_parameter == "dotenv"
        assert config.header_names == ("environ",)

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("MYAPP_QUERY_PARAMETER", "ver")
        assert VersioningConfig.load(env_prefix="MYAPP_").query_parameter == "ver"
