"""
Shared test fixtures and helpers for the webapi_versioning test suite.
"""

from typing import Any, Dict, Optional

import pytest

from webapi_versioning import (
    Controller,
    ControllerDescriptor,
    api_version,
    controller_name,
)


# ============================================================================
# Request Helpers
# ============================================================================


class FakeRequest:
    """
    Minimal stand-in for Aquilia's Request.

    Exposes the same ``header()``, ``query_param()`` and ``state`` surface.
    """

    def __init__(
        self,
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        state: Optional[Dict[str, Any]] = None,
    ):
        self.query = dict(query or {})
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.state: Dict[str, Any] = dict(state or {})

    def query_param(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.query.get(name, default)

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name.lower(), default)


def make_request(version: Optional[str] = None, **kwargs) -> FakeRequest:
    """Request asking for ``version`` via the default query parameter."""
    query = kwargs.pop("query", {})
    if version is not None:
        query = {**query, "api-version": version}
    return FakeRequest(query=query, **kwargs)


# ============================================================================
# Sample Controllers
# ============================================================================


def require_auth(ctx):
    return True


def audit(ctx):
    return True


@api_version("1.0")
class UsersController(Controller):
    pipeline = [require_auth]


@api_version("2.0")
@controller_name("users")
class UsersV2Controller(Controller):
    pipeline = [require_auth, audit]


@api_version("2.0", "3.0")
@controller_name("users")
class UsersV2AltController(Controller):
    pass


@pytest.fixture
def v1_descriptor():
    return ControllerDescriptor(UsersController)


@pytest.fixture
def v2_descriptor():
    return ControllerDescriptor(UsersV2Controller)


@pytest.fixture
def v2_alt_descriptor():
    return ControllerDescriptor(UsersV2AltController)
