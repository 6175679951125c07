"""
API Version Readers (readers.py)

Tests query string, header, media type and combined readers.
"""

import pytest

from webapi_versioning import (
    AmbiguousApiVersionFault,
    ApiVersionReader,
    CombinedApiVersionReader,
    HeaderApiVersionReader,
    InvalidArgumentFault,
    MediaTypeApiVersionReader,
    QueryStringApiVersionReader,
)

from conftest import FakeRequest


# ============================================================================
# Query String
# ============================================================================

class TestQueryStringReader:

    def test_default_parameter(self):
        reader = QueryStringApiVersionReader()
        assert reader.read(FakeRequest(query={"api-version": "2.0"})) == "2.0"

    def test_missing(self):
        assert QueryStringApiVersionReader().read(FakeRequest()) is None

    def test_blank_is_missing(self):
        assert QueryStringApiVersionReader().read(FakeRequest(query={"api-version": "  "})) is None

    def test_custom_names(self):
        reader = QueryStringApiVersionReader("v", "version")
        assert reader.read(FakeRequest(query={"version": "3"})) == "3"

    def test_same_value_twice(self):
        reader = QueryStringApiVersionReader("v", "version")
        assert reader.read(FakeRequest(query={"v": "3", "version": "3"})) == "3"

    def test_conflicting_values(self):
        reader = QueryStringApiVersionReader("v", "version")
        with pytest.raises(AmbiguousApiVersionFault) as exc:
            reader.read(FakeRequest(query={"v": "1", "version": "2"}))
        assert exc.value.values == ["1", "2"]


# ============================================================================
# Header
# ============================================================================

class TestHeaderReader:

    def test_requires_names(self):
        with pytest.raises(InvalidArgumentFault):
            HeaderApiVersionReader()

    def test_reads_header(self):
        reader = HeaderApiVersionReader("api-version")
        assert reader.read(FakeRequest(headers={"Api-Version": "1.0"})) == "1.0"

    def test_missing(self):
        assert HeaderApiVersionReader("api-version").read(FakeRequest()) is None


# ============================================================================
# Media Type
# ============================================================================

class TestMediaTypeReader:

    def test_accept(self):
        request = FakeRequest(headers={"Accept": "application/json;v=2.0"})
        assert MediaTypeApiVersionReader().read(request) == "2.0"

    def test_accept_with_spaces_and_quotes(self):
        request = FakeRequest(headers={"Accept": 'application/json; charset=utf-8; v="2.0"'})
        assert MediaTypeApiVersionReader().read(request) == "2.0"

    def test_content_type_fallback(self):
        request = FakeRequest(headers={
            "Accept": "application/json",
            "Content-Type": "application/json;version=3.0",
        })
        assert MediaTypeApiVersionReader("version").read(request) == "3.0"

    def test_multiple_accept_values_disagree(self):
        request = FakeRequest(headers={"Accept": "application/json;v=1.0, text/plain;v=2.0"})
        with pytest.raises(AmbiguousApiVersionFault):
            MediaTypeApiVersionReader().read(request)

    def test_missing(self):
        assert MediaTypeApiVersionReader().read(FakeRequest()) is None

    def test_empty_parameter(self):
        with pytest.raises(InvalidArgumentFault):
            MediaTypeApiVersionReader("")


# ============================================================================
# Combined
# ============================================================================

class TestCombinedReader:

    def test_combine_single_returns_reader(self):
        reader = QueryStringApiVersionReader()
        assert ApiVersionReader.combine(reader) is reader

    def test_combine_many(self):
        reader = ApiVersionReader.combine(
            QueryStringApiVersionReader(),
            HeaderApiVersionReader("api-version"),
        )
        assert isinstance(reader, CombinedApiVersionReader)
        assert reader.read(FakeRequest(headers={"api-version": "2.0"})) == "2.0"
        assert reader.read(FakeRequest(query={"api-version": "1.0"})) == "1.0"

    def test_agreeing_readers(self):
        reader = CombinedApiVersionReader(
            QueryStringApiVersionReader(),
            HeaderApiVersionReader("api-version"),
        )
        request = FakeRequest(query={"api-version": "2.0"}, headers={"api-version": "2.0"})
        assert reader.read(request) == "2.0"

    def test_disagreeing_readers(self):
        reader = CombinedApiVersionReader(
            QueryStringApiVersionReader(),
            HeaderApiVersionReader("api-version"),
        )
        request = FakeRequest(query={"api-version": "1.0"}, headers={"api-version": "2.0"})
        with pytest.raises(AmbiguousApiVersionFault):
            reader.read(request)

    def test_requires_readers(self):
        with pytest.raises(InvalidArgumentFault):
            CombinedApiVersionReader()

    def test_base_read_not_implemented(self):
        with pytest.raises(NotImplementedError):
            ApiVersionReader().read(FakeRequest())
